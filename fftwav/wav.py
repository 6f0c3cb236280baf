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

import wave

import numpy as np

from . import samples


SAMPLE_FORMAT_BY_WIDTH = {
    1: "u8",
    2: "s16",
    3: "s24",
    4: "s32",
}

SAMPLE_WIDTH_BY_FORMAT = {name: width for width, name in SAMPLE_FORMAT_BY_WIDTH.items()}

FALLBACK_SAMPLE_FORMAT = "s16"


def read_wav(file_name: str) -> tuple[np.ndarray, int, str]:
    """
    Read an 8, 16, 24 or 32 bit PCM WAV file. Returns the samples shaped
    [num_frames, num_channels] in their own integer format (24 bit samples
    are sign-extended into int32), the sample rate, and the name of the
    sample format.
    """

    with wave.open(file_name, "rb") as wf:
        num_channels = wf.getnchannels()
        sample_width = wf.getsampwidth()
        sample_rate = wf.getframerate()
        num_frames = wf.getnframes()

        if sample_width not in SAMPLE_FORMAT_BY_WIDTH:
            raise ValueError(f"Only 8, 16, 24 and 32 bit WAV files are supported; {sample_width=!r}")

        raw_data = wf.readframes(num_frames)

    sample_format = SAMPLE_FORMAT_BY_WIDTH[sample_width]

    if sample_width == 3:
        data = _decode_24_bit(raw_data)
    else:
        data = np.frombuffer(raw_data, dtype=samples.get_format(sample_format).dtype.newbyteorder("<"))
        data = data.astype(samples.get_format(sample_format).dtype)

    return data.reshape((-1, num_channels)), sample_rate, sample_format


def write_wav(file_name: str, audio: np.ndarray, sample_rate: int, sample_format: str):
    """
    Save audio shaped [num_frames, num_channels] (or a 1D mono buffer) as a
    PCM WAV file. Formats which WAV can't store as plain PCM are converted to
    16 bit first.
    """

    audio = np.asarray(audio)

    if audio.ndim == 1:
        audio = audio.reshape((-1, 1))

    sample_format = samples.get_format(sample_format).name

    if sample_format not in SAMPLE_WIDTH_BY_FORMAT:
        audio = samples.convert(audio, sample_format, FALLBACK_SAMPLE_FORMAT)
        sample_format = FALLBACK_SAMPLE_FORMAT

    sample_width = SAMPLE_WIDTH_BY_FORMAT[sample_format]
    audio = np.asarray(audio, dtype=samples.get_format(sample_format).dtype)

    if sample_width == 3:
        raw_data = _encode_24_bit(audio)
    else:
        raw_data = audio.astype(audio.dtype.newbyteorder("<")).tobytes()

    with wave.open(file_name, "wb") as wf:
        wf.setnchannels(audio.shape[1])
        wf.setsampwidth(sample_width)
        wf.setframerate(int(sample_rate))
        wf.writeframes(raw_data)


def _decode_24_bit(raw_data: bytes) -> np.ndarray:
    raw = np.frombuffer(raw_data, dtype=np.uint8).reshape((-1, 3)).astype(np.int32)
    data = raw[:, 0] | (raw[:, 1] << 8) | (raw[:, 2] << 16)

    return np.where(data >= 0x800000, data - 0x1000000, data).astype(np.int32)


def _encode_24_bit(audio: np.ndarray) -> bytes:
    data = audio.reshape(-1).astype(np.int32) & 0xFFFFFF
    raw = np.stack([data & 0xFF, (data >> 8) & 0xFF, (data >> 16) & 0xFF], axis=1)

    return raw.astype(np.uint8).tobytes()
