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

import typing

import numpy as np

from . import channels
from . import samples
from .resampler import Resampler, SizeError


# Lengthening cuts blocks into pieces of fft_size / MAX_LENGTHEN_RATE samples,
# so no single piece needs to grow beyond the FFT size.
MAX_LENGTHEN_RATE = 8


def transfer_audio(
        audio: np.ndarray,
        src_rate: int,
        dst_rate: int,
        sample_format: typing.Optional[typing.Union[str, samples.SampleFormat]]=None,
        resampler: typing.Optional[Resampler]=None,
        max_lengthen_rate: int=MAX_LENGTHEN_RATE,
        status_fn: callable=lambda num_done_frames: None,
) -> np.ndarray:
    """
    Resample a whole buffer of audio shaped [num_frames, num_channels] (or a
    1D mono buffer) from src_rate to dst_rate, block by block. The result has
    the same number of channels and the same sample format as the input.
    """

    audio = np.asarray(audio)

    if audio.ndim == 1:
        audio = audio.reshape((-1, 1))

    num_frames, num_channels = audio.shape

    if num_channels == 0:
        raise channels.InvalidChannelCount(f"Audio must have at least one channel; {audio.shape=!r}")

    if sample_format is None:
        sample_format = samples.format_of(audio.dtype)

    if resampler is None:
        resampler = Resampler(Resampler.get_rounded_up_fft_size(max(src_rate, dst_rate)))

    process_size = resampler.get_process_size(resampler.fft_size, src_rate, dst_rate)
    blocks = []

    for start_idx in range(0, num_frames, process_size):
        status_fn(start_idx)

        block = audio[start_idx:start_idx + process_size, :]
        kwargs = {"sample_format": sample_format, "max_lengthen_rate": max_lengthen_rate}

        if num_channels == 1:
            resampled = do_resample_mono(resampler, block[:, 0], src_rate, dst_rate, **kwargs)
            resampled = resampled.reshape((-1, 1))
        elif num_channels == 2:
            resampled = do_resample_stereo(resampler, block, src_rate, dst_rate, **kwargs)
        else:
            resampled = do_resample_frames(resampler, block, src_rate, dst_rate, **kwargs)

        blocks.append(resampled)

    status_fn(num_frames)

    if len(blocks) == 0:
        return np.zeros((0, num_channels), dtype=audio.dtype)

    return np.concatenate(blocks, axis=0)


def do_resample_mono(
        resampler: Resampler,
        mono: np.ndarray,
        src_rate: int,
        dst_rate: int,
        sample_format: typing.Optional[typing.Union[str, samples.SampleFormat]]=None,
        max_lengthen_rate: int=MAX_LENGTHEN_RATE,
) -> np.ndarray:
    """
    Resample one block of a single channel. The samples are widened to
    float32 for the resampler and narrowed back to their own format.
    """

    mono = np.asarray(mono)

    if sample_format is None:
        sample_format = samples.format_of(mono.dtype)

    sample_format = samples.get_format(sample_format)

    if src_rate == dst_rate:
        return mono.astype(sample_format.dtype)

    resampled = resampler.resample(
        samples.to_float32(mono, sample_format),
        src_rate,
        dst_rate,
        max_lengthen_rate,
    )

    return samples.from_float32(resampled, sample_format)


def do_resample_stereo(
        resampler: Resampler,
        stereos: np.ndarray,
        src_rate: int,
        dst_rate: int,
        **kwargs,
) -> np.ndarray:
    left, right = channels.stereos_to_monos(stereos)

    return channels.dual_monos_to_stereos(
        (
            do_resample_mono(resampler, left, src_rate, dst_rate, **kwargs),
            do_resample_mono(resampler, right, src_rate, dst_rate, **kwargs),
        )
    )


def do_resample_frames(
        resampler: Resampler,
        frames: np.ndarray,
        src_rate: int,
        dst_rate: int,
        **kwargs,
) -> np.ndarray:
    monos = channels.frames_to_monos(frames)

    return channels.monos_to_frames(
        [do_resample_mono(resampler, mono, src_rate, dst_rate, **kwargs) for mono in monos]
    )


def do_resample_interleaved(
        resampler: Resampler,
        interleaved: np.ndarray,
        num_channels: int,
        src_rate: int,
        dst_rate: int,
        **kwargs,
) -> np.ndarray:
    monos = channels.interleaved_to_monos(interleaved, num_channels)

    return channels.monos_to_interleaved(
        [do_resample_mono(resampler, mono, src_rate, dst_rate, **kwargs) for mono in monos]
    )
