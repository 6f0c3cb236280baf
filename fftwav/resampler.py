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
Resampling by reshaping the spectrum of a block of audio.

Making audio longer in time compresses its spectrum towards the low
frequencies, making it shorter stretches the spectrum towards the high ones.
A block is zero-padded to the FFT size, transformed, its bins are remapped
according to the ratio of the new and the old length, then it is transformed
back and truncated to the new length.
"""

import functools

import numpy as np
import scipy.fft


# Blocks shorter than 1/20 s would put block edge artifacts into the audible
# range when the sample rate changes.
MIN_BLOCK_RATE_DIVISOR = 20


class SizeError(ValueError):
    pass


def stretch_spectrum(spectrum: np.ndarray, scaling: float) -> np.ndarray:
    """
    Spread the bins of a real signal's spectrum towards higher frequencies
    (scaling < 1.0, i.e. the audio gets shorter). Every destination bin below
    Nyquist is linearly interpolated between the two nearest source bins, the
    negative frequency half is filled from the mirrored source bins.
    """

    fft_size = len(spectrum)
    half_size = fft_size // 2

    dst_idx = np.arange(half_size)
    scaled = dst_idx * scaling
    src_idx_1 = np.floor(scaled).astype(np.int64)
    src_idx_2 = src_idx_1 + 1
    weights = scaled - src_idx_1

    stretched = np.zeros(fft_size, dtype=np.complex128)
    stretched[dst_idx] = _interpolate(spectrum[src_idx_1], spectrum[src_idx_2], weights)

    # bin 0 has no mirror
    mirror_idx = dst_idx[1:]
    stretched[fft_size - mirror_idx] = _interpolate(
        spectrum[(fft_size - src_idx_1[1:]) % fft_size],
        spectrum[(fft_size - src_idx_2[1:]) % fft_size],
        weights[1:],
    )

    return stretched * scaling


def compress_spectrum(spectrum: np.ndarray, scaling: float) -> np.ndarray:
    """
    Squeeze the bins of a real signal's spectrum towards lower frequencies
    (scaling > 1.0, i.e. the audio gets longer). Every destination bin is the
    mean of the source bins which fall onto it, source bins above Nyquist are
    dropped, and the destination bins which receive nothing remain zero.
    """

    fft_size = len(spectrum)
    half_size = fft_size // 2

    dst_idx = np.arange(half_size)
    src_idx_1 = np.floor(dst_idx * scaling).astype(np.int64)
    src_idx_2 = np.floor((dst_idx + 1) * scaling).astype(np.int64)

    in_range = src_idx_2 <= half_size
    dst_idx = dst_idx[in_range]
    src_idx_1 = src_idx_1[in_range]
    src_idx_2 = src_idx_2[in_range]
    counts = src_idx_2 - src_idx_1

    positive = spectrum[:half_size]
    negative = spectrum[(fft_size - np.arange(half_size)) % fft_size]

    compressed = np.zeros(fft_size, dtype=np.complex128)
    compressed[dst_idx] = _range_means(positive, src_idx_1, src_idx_2, counts)

    # bin 0 has no mirror
    mirrored = dst_idx > 0
    compressed[fft_size - dst_idx[mirrored]] = _range_means(
        negative,
        src_idx_1[mirrored],
        src_idx_2[mirrored],
        counts[mirrored],
    )

    return compressed * scaling


def _interpolate(a: np.ndarray, b: np.ndarray, weights: np.ndarray) -> np.ndarray:
    return a + (b - a) * weights


def _range_means(bins: np.ndarray, start: np.ndarray, stop: np.ndarray, counts: np.ndarray) -> np.ndarray:
    cumulative = np.concatenate([np.zeros(1, dtype=np.complex128), np.cumsum(bins)])

    return (cumulative[stop] - cumulative[start]) / counts


class Resampler:
    """
    Resample single channel float32 audio with FFT transforms of a fixed size.

    Building the transforms is the expensive part, so create one Resampler
    per FFT size and reuse it for every block and every channel. It keeps no
    per-call state, so it can be shared between threads.
    """

    def __init__(self, fft_size: int):
        fft_size = int(fft_size)

        if fft_size < 2 or fft_size % 2 != 0:
            raise SizeError(f"fft_size must be a positive even number; {fft_size=!r}")

        self.fft_size = fft_size
        self.half_size = fft_size // 2
        self.normalize_scaler = 1.0 / fft_size

        self.fft_forward = functools.partial(scipy.fft.fft, n=fft_size, norm="backward")
        self.fft_inverse = functools.partial(scipy.fft.ifft, n=fft_size, norm="forward")

        # let scipy build and cache its plans for this size up front
        warm_up = np.zeros(fft_size, dtype=np.complex128)
        self.fft_inverse(self.fft_forward(warm_up))

    def __repr__(self):
        return f"{type(self).__name__}(fft_size={self.fft_size!r})"

    @staticmethod
    def get_rounded_up_fft_size(sample_rate: int) -> int:
        """
        Smallest power of two which can hold a whole second of audio at the
        given sample rate.
        """

        fft_size = 2

        while fft_size < sample_rate:
            fft_size *= 2

        return fft_size

    def get_process_size(self, orig_size: int, src_rate: int, dst_rate: int) -> int:
        """
        Length of the source blocks to feed to resample(). When the rate
        changes, blocks are capped at 1/20 s so that block edges don't turn
        into audible low frequency noise.
        """

        if src_rate == dst_rate:
            return min(self.fft_size, int(orig_size))

        return min(self.fft_size, max(1, int(src_rate) // MIN_BLOCK_RATE_DIVISOR))

    def get_desired_length(self, proc_size: int, src_rate: int, dst_rate: int) -> int:
        return min(self.fft_size, int(proc_size) * int(dst_rate) // int(src_rate))

    def resample(
            self,
            samples: np.ndarray,
            src_rate: int,
            dst_rate: int,
            max_lengthen_rate: int,
    ) -> np.ndarray:
        """
        Resample one channel from src_rate to dst_rate.

        When shortening, the whole input is processed as a single block, so it
        must not be longer than fft_size. When lengthening, the input is cut
        into pieces of fft_size / max_lengthen_rate samples, which are
        resampled one by one and concatenated.
        """

        samples = np.asarray(samples, dtype=np.float32)

        if src_rate == dst_rate:
            return samples.copy()

        if src_rate > dst_rate:
            return self.resample_core(samples, self.get_desired_length(len(samples), src_rate, dst_rate))

        max_lengthen_rate = int(max_lengthen_rate)

        if max_lengthen_rate < 1 or max_lengthen_rate > self.fft_size:
            raise ValueError(
                f"max_lengthen_rate must be between 1 and fft_size; {max_lengthen_rate=!r}, {self.fft_size=!r}"
            )

        proc_size = self.fft_size // max_lengthen_rate
        desired_length = self.fft_size * int(dst_rate) // int(src_rate) // max_lengthen_rate
        blocks = []

        for start_idx in range(0, len(samples), proc_size):
            block = samples[start_idx:start_idx + proc_size]

            if len(block) == proc_size:
                blocks.append(self.resample_core(block, desired_length))
            else:
                # the last, shorter piece keeps its own duration
                blocks.append(
                    self.resample_core(block, self.get_desired_length(len(block), src_rate, dst_rate))
                )

        if len(blocks) == 0:
            return np.zeros(0, dtype=np.float32)

        return np.concatenate(blocks)

    def resample_core(self, samples: np.ndarray, desired_length: int) -> np.ndarray:
        """
        Stretch or compress a block of at most fft_size samples to exactly
        desired_length samples (at most fft_size as well).
        """

        samples = np.asarray(samples, dtype=np.float32)
        desired_length = int(desired_length)
        num_samples = len(samples)

        if num_samples == desired_length:
            return samples.copy()

        if desired_length > self.fft_size:
            raise SizeError(
                f"desired_length must not exceed fft_size; {desired_length=!r}, {self.fft_size=!r}"
            )

        if num_samples > self.fft_size:
            raise SizeError(
                f"Too many samples for one block; {num_samples=!r}, {self.fft_size=!r}"
            )

        if desired_length <= 0:
            return np.zeros(0, dtype=np.float32)

        if num_samples == 0:
            return np.zeros(desired_length, dtype=np.float32)

        fft_buffer = np.zeros(self.fft_size, dtype=np.complex128)
        fft_buffer[:num_samples] = samples

        spectrum = self.fft_forward(fft_buffer)
        scaling = desired_length / num_samples

        if num_samples > desired_length:
            spectrum = stretch_spectrum(spectrum, scaling)
        else:
            spectrum = compress_spectrum(spectrum, scaling)

        restored = self.fft_inverse(spectrum)

        return (restored.real[:desired_length] * self.normalize_scaler).astype(np.float32)
