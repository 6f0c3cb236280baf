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
import tempfile
import unittest
import wave

import numpy as np

from . import wav


class TestWav(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.file_name = os.path.join(self.temp_dir.name, "test.wav")

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_pcm_formats_are_written_and_read_back(self):
        for sample_format, audio in (
                ("u8", np.array([[0, 255], [128, 1]], dtype=np.uint8)),
                ("s16", np.array([[-32768, 32767], [0, -1], [1234, -4321]], dtype=np.int16)),
                ("s24", np.array([[-8388608], [8388607], [-1], [0], [65536]], dtype=np.int32)),
                ("s32", np.array([[-2147483648, 2147483647, 7]], dtype=np.int32)),
        ):
            wav.write_wav(self.file_name, audio, 22050, sample_format)
            actual, sample_rate, actual_format = wav.read_wav(self.file_name)

            self.assertEqual(sample_format, actual_format)
            self.assertEqual(22050, sample_rate)
            self.assertEqual(audio.dtype, actual.dtype)
            self.assertTrue(np.array_equal(audio, actual), msg=f"\n{sample_format=}\n{audio=}\n{actual=}")

    def test_mono_buffer_is_written_as_one_channel(self):
        wav.write_wav(self.file_name, np.arange(10, dtype=np.int16), 8000, "s16")

        actual, sample_rate, sample_format = wav.read_wav(self.file_name)

        self.assertEqual((10, 1), actual.shape)

    def test_float_audio_is_written_as_16_bit(self):
        audio = np.array([[1.0, -1.0], [0.0, 0.5]], dtype=np.float32)

        wav.write_wav(self.file_name, audio, 44100, "f32")
        actual, sample_rate, sample_format = wav.read_wav(self.file_name)

        self.assertEqual("s16", sample_format)
        self.assertTrue(np.array_equal([[32767, -32767], [0, 16384]], actual))

        with wave.open(self.file_name, "rb") as wf:
            self.assertEqual(2, wf.getsampwidth())
            self.assertEqual(2, wf.getnchannels())
