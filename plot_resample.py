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

import numpy as np
import scipy.fft

from matplotlib import pyplot as plt

import fftwav
import fftwav.samples
import fftwav.wav


def main(argv):
    try:
        in_file_name = argv[1]
        dst_rate = int(argv[2])
        channel = int(argv[3]) if len(argv) > 3 else 0

    except Exception as error:
        print(
            f"Usage: {os.path.basename(argv[0])} in.wav dst_rate [channel]",
            file=sys.stderr,
        )
        print(f"{type(error)}: {error}", file=sys.stderr)

        return 1

    audio, src_rate, sample_format = fftwav.wav.read_wav(in_file_name)
    resampled = fftwav.transfer_audio(audio, src_rate, dst_rate, sample_format=sample_format)

    original = fftwav.samples.to_float32(audio[:, channel], sample_format)
    resampled = fftwav.samples.to_float32(resampled[:, channel], sample_format)

    fig, (waveform_ax, spectrum_ax) = plt.subplots(2, 1)

    for samples, sample_rate, label in (
            (original, src_rate, f"original ({src_rate} Hz)"),
            (resampled, dst_rate, f"resampled ({dst_rate} Hz)"),
    ):
        t = np.arange(len(samples)) / sample_rate
        freqs = scipy.fft.rfftfreq(len(samples), d=1.0 / sample_rate)
        magnitude_db = 20.0 * np.log10(np.abs(scipy.fft.rfft(samples)) / max(1, len(samples)) + 1e-12)

        waveform_ax.plot(t, samples, label=label)
        spectrum_ax.plot(freqs, magnitude_db, label=label)

    waveform_ax.set_xlabel("seconds")
    spectrum_ax.set_xlabel("Hz")
    spectrum_ax.set_ylabel("dB")
    waveform_ax.legend()
    spectrum_ax.legend()

    fig.suptitle(os.path.basename(in_file_name))
    plt.tight_layout()
    plt.show()

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
