# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for constant_time_compare."""

from __future__ import annotations

import pytest

from credvault.security import compare as compare_module
from credvault.security.compare import constant_time_compare


class TestConstantTimeCompare:
    def test_equal_bytes(self):
        assert constant_time_compare(b"digest-bytes", b"digest-bytes") is True

    def test_different_bytes(self):
        assert constant_time_compare(b"digest-bytes", b"digest-bytez") is False

    def test_difference_in_first_byte(self):
        assert constant_time_compare(b"Xigest-bytes", b"digest-bytes") is False

    def test_different_lengths(self):
        assert constant_time_compare(b"abc", b"abcd") is False
        assert constant_time_compare(b"", b"a") is False

    def test_empty_inputs_are_equal(self):
        assert constant_time_compare(b"", b"") is True

    def test_accepts_bytearray_and_memoryview(self):
        assert constant_time_compare(bytearray(b"abc"), memoryview(b"abc")) is True

    def test_strings_are_compared_as_utf8(self):
        assert constant_time_compare("pässword", "pässword".encode()) is True
        assert constant_time_compare("pässword", "password") is False

    def test_lone_surrogates_compare_without_raising(self):
        assert constant_time_compare("\ud800", "\ud800") is True
        assert constant_time_compare("\ud800", "\udfff") is False

    def test_final_comparison_runs_over_fixed_length_tags(self, monkeypatch: pytest.MonkeyPatch):
        seen: list[tuple[int, int]] = []
        real = compare_module.hmac.compare_digest

        def spy(a: bytes, b: bytes) -> bool:
            seen.append((len(a), len(b)))
            return real(a, b)

        monkeypatch.setattr(compare_module.hmac, "compare_digest", spy)
        constant_time_compare(b"a", b"a much longer value than the other one")
        constant_time_compare(b"x" * 1000, b"y" * 1000)
        assert seen == [(32, 32), (32, 32)]
