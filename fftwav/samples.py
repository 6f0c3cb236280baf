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

import dataclasses
import typing

import numpy as np


@dataclasses.dataclass(frozen=True)
class SampleFormat:
    name: str
    kind: str           # "int", "uint" or "float"
    bits: int
    dtype: np.dtype     # container; 24-bit samples live in 32-bit integers

    @property
    def is_float(self) -> bool:
        return self.kind == "float"

    @property
    def full_scale(self) -> int:
        return (1 << (self.bits - 1)) - 1


class UnknownSampleFormat(ValueError):
    pass


FORMATS = {
    sample_format.name: sample_format
    for sample_format in (
        SampleFormat("u8", "uint", 8, np.dtype(np.uint8)),
        SampleFormat("s8", "int", 8, np.dtype(np.int8)),
        SampleFormat("u16", "uint", 16, np.dtype(np.uint16)),
        SampleFormat("s16", "int", 16, np.dtype(np.int16)),
        SampleFormat("u24", "uint", 24, np.dtype(np.uint32)),
        SampleFormat("s24", "int", 24, np.dtype(np.int32)),
        SampleFormat("u32", "uint", 32, np.dtype(np.uint32)),
        SampleFormat("s32", "int", 32, np.dtype(np.int32)),
        SampleFormat("u64", "uint", 64, np.dtype(np.uint64)),
        SampleFormat("s64", "int", 64, np.dtype(np.int64)),
        SampleFormat("f32", "float", 32, np.dtype(np.float32)),
        SampleFormat("f64", "float", 64, np.dtype(np.float64)),
    )
}

FLOAT32 = FORMATS["f32"]


def get_format(sample_format: typing.Union[str, SampleFormat]) -> SampleFormat:
    if isinstance(sample_format, SampleFormat):
        return sample_format

    try:
        return FORMATS[sample_format]

    except KeyError as error:
        raise UnknownSampleFormat(f"Unknown sample format; {sample_format=!r}") from error


def format_of(dtype) -> SampleFormat:
    """
    Guess the sample format of a NumPy dtype. 32-bit integer containers are
    taken to hold 32-bit samples, pass the format explicitly for 24-bit audio.
    """

    dtype = np.dtype(dtype)

    for sample_format in FORMATS.values():
        if sample_format.dtype == dtype and sample_format.bits == dtype.itemsize * 8:
            return sample_format

    raise UnknownSampleFormat(f"No sample format for dtype; {dtype=!r}")


def convert(
        samples: np.ndarray,
        src_format: typing.Union[str, SampleFormat],
        dst_format: typing.Union[str, SampleFormat],
) -> np.ndarray:
    """
    Convert samples between formats by scaling, so that full scale in the
    source stays full scale in the destination. E.g. a signed 16 bit 32767
    becomes 1.0 as a float, and an unsigned 8 bit 255 becomes 32767 as a
    signed 16 bit integer. Zero stays zero, so unsigned 8 bit 128 becomes 0.

    Floats are clamped to [-1.0, 1.0] and rounded to the nearest integer
    when they are turned into integers. Narrowing is lossy, the float32 round
    trip is exact.
    """

    src_format = get_format(src_format)
    dst_format = get_format(dst_format)
    samples = np.asarray(samples, dtype=src_format.dtype)

    if src_format == dst_format:
        return samples.copy()

    if src_format.is_float and dst_format.is_float:
        return samples.astype(dst_format.dtype)

    if src_format.is_float:
        return _float_to_int(samples, dst_format)

    if dst_format.is_float:
        return _int_to_float(samples, src_format, dst_format)

    return _resize_bits(samples, src_format, dst_format)


def to_float32(
        samples: np.ndarray,
        sample_format: typing.Optional[typing.Union[str, SampleFormat]]=None,
) -> np.ndarray:
    samples = np.asarray(samples)

    if sample_format is None:
        sample_format = format_of(samples.dtype)

    return convert(samples, sample_format, FLOAT32)


def from_float32(samples: np.ndarray, sample_format: typing.Union[str, SampleFormat]) -> np.ndarray:
    return convert(samples, FLOAT32, sample_format)


def average(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Per-sample mean of two equally shaped arrays of the same dtype, without
    overflowing integer containers (integers are rounded down).
    """

    a = np.asarray(a)
    b = np.asarray(b)

    if np.issubdtype(a.dtype, np.integer):
        return (a >> 1) + (b >> 1) + (a & b & 1)

    return ((a + b) / 2).astype(a.dtype)


def _int_to_float(samples: np.ndarray, src_format: SampleFormat, dst_format: SampleFormat) -> np.ndarray:
    offset = _to_offset_binary(samples, src_format.bits, src_format.kind)
    signed = _offset_binary_to_signed(offset, src_format.bits)

    return (signed.astype(np.float64) / src_format.full_scale).astype(dst_format.dtype)


def _float_to_int(samples: np.ndarray, dst_format: SampleFormat) -> np.ndarray:
    scaled = np.rint(np.clip(samples.astype(np.float64), -1.0, 1.0) * dst_format.full_scale)

    # float64 cannot hold 2**63 - 1, saturate instead of wrapping around
    signed = np.clip(scaled, -2.0 ** 63, 2.0 ** 63 - 1024.0).astype(np.int64)
    signed[scaled >= 2.0 ** 63] = np.iinfo(np.int64).max

    if dst_format.kind == "int":
        return signed.astype(dst_format.dtype)

    return _from_offset_binary(_to_offset_binary(signed, dst_format.bits, "int"), dst_format)


def _to_offset_binary(samples: np.ndarray, bits: int, kind: str) -> np.ndarray:
    if kind == "uint":
        return samples.astype(np.uint64)

    sign = np.uint64(1 << (bits - 1))
    mask = np.uint64((1 << bits) - 1)

    return (samples.astype(np.int64).astype(np.uint64) ^ sign) & mask


def _offset_binary_to_signed(offset: np.ndarray, bits: int) -> np.ndarray:
    twos_complement = offset ^ np.uint64(1 << (bits - 1))

    if bits == 64:
        return twos_complement.astype(np.int64)

    twos_complement = twos_complement.astype(np.int64)

    return twos_complement - ((twos_complement >> (bits - 1)) << bits)


def _from_offset_binary(offset: np.ndarray, dst_format: SampleFormat) -> np.ndarray:
    if dst_format.kind == "uint":
        return offset.astype(dst_format.dtype)

    return _offset_binary_to_signed(offset, dst_format.bits).astype(dst_format.dtype)


def _resize_bits(samples: np.ndarray, src_format: SampleFormat, dst_format: SampleFormat) -> np.ndarray:
    offset = _to_offset_binary(samples, src_format.bits, src_format.kind)

    if dst_format.bits <= src_format.bits:
        return _from_offset_binary(offset >> np.uint64(src_format.bits - dst_format.bits), dst_format)

    signed = _offset_binary_to_signed(offset, src_format.bits)
    mask = np.uint64((1 << (src_format.bits - 1)) - 1)
    magnitude = _replicate_bits(
        np.abs(signed).astype(np.uint64) & mask,
        src_format.bits - 1,
        dst_format.bits - 1,
    ).astype(np.int64)

    # zero stays zero, the most negative value has no positive counterpart
    widened = np.where(signed < 0, -magnitude, magnitude)
    widened[signed == -(1 << (src_format.bits - 1))] = -(1 << (dst_format.bits - 1))

    if dst_format.kind == "int":
        return widened.astype(dst_format.dtype)

    return _from_offset_binary(_to_offset_binary(widened, dst_format.bits, "int"), dst_format)


def _replicate_bits(magnitude: np.ndarray, src_bits: int, dst_bits: int) -> np.ndarray:
    # repeat the bit pattern downwards so that all ones stay all ones
    replicated = np.zeros_like(magnitude)
    shift = dst_bits - src_bits

    while shift > -src_bits:
        if shift >= 0:
            replicated |= magnitude << np.uint64(shift)
        else:
            replicated |= magnitude >> np.uint64(-shift)

        shift -= src_bits

    return replicated
