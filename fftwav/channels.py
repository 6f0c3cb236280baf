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

"""
Conversions between the layouts multi-channel audio can take:

  * interleaved: one flat array, frame-major (L R L R ...), as WAV stores it,
  * monos: a list of per-channel arrays of equal length,
  * frames: a 2D array shaped [num_frames, num_channels],
  * stereos: frames with exactly 2 channels.

None of these keep state or touch the samples, they only move them around.
"""

import typing

import numpy as np

from . import samples


class ChannelLayoutError(ValueError):
    pass


class InvalidChannelCount(ChannelLayoutError):
    pass


class ChannelLengthMismatch(ChannelLayoutError):
    pass


class FrameChannelsNotSame(ChannelLayoutError):
    pass


class UnsupportedChannelCount(ChannelLayoutError):
    pass


def is_same_len(items: typing.Sequence[typing.Sized]) -> typing.Optional[tuple[bool, int]]:
    """
    Tell whether all items have the same length as the first one. Returns
    None for an empty sequence, otherwise (all_equal, length_of_first).
    """

    if len(items) == 0:
        return None

    first = len(items[0])

    return all(len(item) == first for item in items), first


def interleaved_to_monos(interleaved: typing.Sequence, channels: int) -> typing.List[np.ndarray]:
    """
    Split interleaved samples into one array per channel. Trailing samples
    which don't make up a whole frame are dropped.
    """

    channels = int(channels)

    if channels <= 0:
        raise InvalidChannelCount(f"Channels must be a positive integer; {channels=!r}")

    interleaved = np.asarray(interleaved)
    num_frames = len(interleaved) // channels

    return [interleaved[channel::channels][:num_frames].copy() for channel in range(channels)]


def monos_to_frames(monos: typing.Sequence[typing.Sequence]) -> np.ndarray:
    same_len = is_same_len(monos)

    if same_len is None:
        return np.zeros((0, 0))

    all_equal, length = same_len

    if not all_equal:
        raise ChannelLengthMismatch(
            f"All channels must have the same length; lengths={[len(mono) for mono in monos]!r}"
        )

    return np.stack([np.asarray(mono) for mono in monos], axis=1).reshape((length, len(monos)))


def frames_to_monos(
        frames: typing.Sequence[typing.Sequence],
        channels: typing.Optional[int]=None,
) -> typing.List[np.ndarray]:
    same_len = is_same_len(frames)

    if same_len is None:
        return []

    all_equal, num_channels = same_len

    if not all_equal:
        raise FrameChannelsNotSame("All frames must have the same number of channels")

    if channels is not None and int(channels) != num_channels:
        raise FrameChannelsNotSame(
            f"Frames don't have the expected number of channels; {channels=!r}, {num_channels=!r}"
        )

    frames = np.asarray(frames)

    return [frames[:, channel].copy() for channel in range(num_channels)]


def monos_to_interleaved(monos: typing.Sequence[typing.Sequence]) -> np.ndarray:
    return monos_to_frames(monos).reshape(-1)


def frames_to_interleaved(
        frames: typing.Sequence[typing.Sequence],
        channels: typing.Optional[int]=None,
) -> np.ndarray:
    return monos_to_interleaved(frames_to_monos(frames, channels))


def frames_to_stereos(frames: typing.Sequence[typing.Sequence]) -> np.ndarray:
    """
    Turn 1 or 2 channel frames into stereo frames. Mono is upmixed by
    duplicating the only channel.
    """

    same_len = is_same_len(frames)

    if same_len is None:
        return np.zeros((0, 2))

    all_equal, num_channels = same_len

    if not all_equal:
        raise FrameChannelsNotSame("All frames must have the same number of channels")

    frames = np.asarray(frames)

    if num_channels == 1:
        return np.concatenate([frames, frames], axis=1)

    if num_channels == 2:
        return frames.copy()

    raise UnsupportedChannelCount(f"Only mono and stereo frames can be made stereo; {num_channels=!r}")


def stereos_to_monos(stereos: typing.Sequence[typing.Sequence]) -> typing.List[np.ndarray]:
    """
    Split stereo frames (or mono frames, which are upmixed first) into the
    left and the right channel.
    """

    left, right = stereos_to_dual_monos(frames_to_stereos(stereos))

    return [left, right]


def stereos_to_dual_monos(stereos: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    stereos = np.asarray(stereos)

    if stereos.ndim != 2 or stereos.shape[1] != 2:
        raise UnsupportedChannelCount(f"Stereo frames must have exactly 2 channels; {stereos.shape=!r}")

    return stereos[:, 0].copy(), stereos[:, 1].copy()


def dual_monos_to_stereos(dual_monos: tuple[typing.Sequence, typing.Sequence]) -> np.ndarray:
    left, right = dual_monos

    if len(left) != len(right):
        raise ChannelLengthMismatch(
            f"Left and right channels must have the same length; {len(left)=}, {len(right)=}"
        )

    return np.stack([np.asarray(left), np.asarray(right)], axis=1).reshape((len(left), 2))


def interleaved_to_stereos(interleaved: typing.Sequence) -> np.ndarray:
    if len(interleaved) % 2 != 0:
        raise UnsupportedChannelCount(
            f"Interleaved stereo needs an even number of samples; {len(interleaved)=}"
        )

    return np.asarray(interleaved).reshape((-1, 2)).copy()


def stereos_to_interleaved(stereos: np.ndarray) -> np.ndarray:
    return np.asarray(stereos).reshape(-1).copy()


def mono_to_stereos(mono: typing.Sequence) -> np.ndarray:
    mono = np.asarray(mono)

    return np.stack([mono, mono], axis=1)


def mono_to_dual_monos(mono: typing.Sequence) -> tuple[np.ndarray, np.ndarray]:
    mono = np.asarray(mono)

    return mono.copy(), mono.copy()


def dual_monos_to_mono(dual_monos: tuple[typing.Sequence, typing.Sequence]) -> np.ndarray:
    left, right = dual_monos

    if len(left) != len(right):
        raise ChannelLengthMismatch(
            f"Left and right channels must have the same length; {len(left)=}, {len(right)=}"
        )

    return samples.average(left, right)


def stereos_to_mono(stereos: np.ndarray) -> np.ndarray:
    return samples.average(*stereos_to_dual_monos(stereos))
