# Copyright (c) 2026, Attila Magyar
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice, this
#    list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright notice,
#    this list of conditions and the following disclaimer in the documentation
#    and/or other materials provided with the distribution.
#
# 3. Neither the name of the copyright holder nor the names of its
#    contributors may be used to endorse or promote products derived from
#    this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

import os.path
import sys

import fftwav
import fftwav.resampler
import fftwav.wav


def main(argv):
    """
    Resample a PCM WAV file to a new sample rate. The sample format and the
    number of channels are kept. The FFT size defaults to the smallest power
    of two which can hold a second of audio at the higher of the two rates.
    """

    try:
        in_file_name = argv[1]
        out_file_name = argv[2]
        dst_rate = int(argv[3])
        fft_size = int(argv[4]) if len(argv) > 4 else None

    except Exception as error:
        print(
            f"Usage: {os.path.basename(argv[0])} in.wav out.wav dst_rate [fft_size]",
            file=sys.stderr,
        )
        print(f"{type(error)}: {error}", file=sys.stderr)

        return 1

    audio, src_rate, sample_format = fftwav.wav.read_wav(in_file_name)
    num_frames, num_channels = audio.shape

    if fft_size is None:
        fft_size = fftwav.resampler.Resampler.get_rounded_up_fft_size(max(src_rate, dst_rate))

    resampler = fftwav.resampler.Resampler(fft_size)
    in_file_base_name = os.path.basename(in_file_name)

    print(f"Resampling {in_file_base_name}:")
    print(f"  {src_rate=} {dst_rate=}")
    print(f"  {num_channels=} {num_frames=} {sample_format=!r}")
    print(f"  {resampler.fft_size=}")

    resampled = fftwav.transfer_audio(
        audio,
        src_rate,
        dst_rate,
        sample_format=sample_format,
        resampler=resampler,
        status_fn=lambda num_done_frames: print(
            f"Resampling {in_file_base_name}:"
            f" {num_done_frames / max(1, num_frames) * 100.0:.2f}%"
        ),
    )

    print(f"Writing {out_file_name}")

    fftwav.wav.write_wav(out_file_name, resampled, dst_rate, sample_format)

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
