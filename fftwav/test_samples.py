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

import unittest

import numpy as np

from . import samples


class TestSamples(unittest.TestCase):
    def assert_converts(self, src_format: str, dst_format: str, values, expected):
        actual = samples.convert(np.array(values, dtype=samples.get_format(src_format).dtype), src_format, dst_format)

        self.assertEqual(samples.get_format(dst_format).dtype, actual.dtype)
        self.assertTrue(
            np.array_equal(np.array(expected, dtype=actual.dtype), actual),
            msg=f"\n{src_format=} {dst_format=}\n{expected=}\n{actual=}"
        )

    def test_get_format(self):
        self.assertEqual(24, samples.get_format("s24").bits)
        self.assertEqual(np.int32, samples.get_format("s24").dtype)
        self.assertIs(samples.FLOAT32, samples.get_format(samples.FLOAT32))

        with self.assertRaises(samples.UnknownSampleFormat):
            samples.get_format("s12")

    def test_format_of(self):
        self.assertEqual("s16", samples.format_of(np.int16).name)
        self.assertEqual("u8", samples.format_of(np.uint8).name)
        self.assertEqual("s32", samples.format_of(np.int32).name)
        self.assertEqual("f64", samples.format_of(np.float64).name)

        with self.assertRaises(samples.UnknownSampleFormat):
            samples.format_of(np.complex64)

    def test_int_to_float(self):
        self.assert_converts("s16", "f32", [32767, 0, -32767], [1.0, 0.0, -1.0])
        self.assert_converts("u8", "f32", [255, 128, 1], [1.0, 0.0, -1.0])
        self.assert_converts("s24", "f64", [8388607, -8388607], [1.0, -1.0])
        self.assert_converts("u16", "f64", [65535, 32768], [1.0, 0.0])

    def test_float_to_int_clamps(self):
        self.assert_converts("f32", "s16", [1.0, -1.0, 2.0, -3.0, 0.25], [32767, -32767, 32767, -32767, 8192])
        self.assert_converts("f32", "u8", [1.0, 0.0, -1.0], [255, 128, 1])
        self.assert_converts("f64", "s24", [1.0, -1.0], [8388607, -8388607])
        self.assert_converts("f32", "s64", [1.0, 0.0], [np.iinfo(np.int64).max, 0])

    def test_int_to_int(self):
        self.assert_converts("u8", "s16", [255, 128, 0, 129, 127], [32767, 0, -32768, 258, -258])
        self.assert_converts("u8", "u16", [255, 128, 0], [65535, 32768, 0])
        self.assert_converts("s8", "s32", [127, 0, -1, -128], [2147483647, 0, -16909320, -2147483648])
        self.assert_converts("s16", "s8", [32767, -32768, 256], [127, -128, 1])
        self.assert_converts("s24", "s32", [8388607, -8388608], [2147483647, -2147483648])
        self.assert_converts("s16", "s64", [32767, -32768], [np.iinfo(np.int64).max, np.iinfo(np.int64).min])
        self.assert_converts("s16", "u16", [32767, 0, -32768], [65535, 32768, 0])
        self.assert_converts("u32", "s24", [0xFFFFFFFF, 0x80000000], [8388607, 0])

    def test_widening_keeps_silence_silent(self):
        silence = np.array([128], dtype=np.uint8)

        self.assertEqual(0.0, samples.to_float32(silence, "u8")[0])
        self.assertEqual(0.0, samples.to_float32(samples.convert(silence, "u8", "s16"), "s16")[0])
        self.assertEqual(0.0, samples.to_float32(samples.convert(silence, "u8", "s24"), "s24")[0])

    def test_float32_round_trip_is_exact(self):
        values = np.linspace(-1.5, 1.5, 31).astype(np.float32)

        actual = samples.convert(values, "f32", "f32")

        self.assertTrue(np.array_equal(values, actual))
        self.assertIsNot(values, actual)

    def test_widening_to_float32_and_back(self):
        for sample_format, values in (
                ("s16", np.arange(-32767, 32768, 7, dtype=np.int16)),
                ("u8", np.arange(1, 256, dtype=np.uint8)),
                ("s8", np.arange(-127, 128, dtype=np.int8)),
        ):
            widened = samples.to_float32(values, sample_format)
            self.assertEqual(np.float32, widened.dtype)
            self.assertTrue(np.array_equal(values, samples.from_float32(widened, sample_format)))

    def test_average(self):
        self.assertTrue(np.array_equal([2, -4], samples.average(np.array([1, -3]), np.array([3, -4]))))
        self.assertTrue(np.array_equal([0.75], samples.average(np.array([0.5]), np.array([1.0]))))
