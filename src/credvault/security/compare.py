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
"""Constant-time byte comparison."""

from __future__ import annotations

import hashlib
import hmac
import secrets

_KEY_LENGTH = 32


def _as_bytes(value: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8", "surrogatepass")
    return bytes(value)


def constant_time_compare(
    a: bytes | bytearray | memoryview | str,
    b: bytes | bytearray | memoryview | str,
) -> bool:
    """Return whether *a* and *b* are equal without leaking where they differ.

    Both inputs are first reduced to fixed-length HMAC-SHA256 tags under a
    fresh random key, so the final comparison always runs over 32 bytes no
    matter how long the inputs are or where they diverge. The length check
    is combined with ``&`` so it never returns early.
    """
    left = _as_bytes(a)
    right = _as_bytes(b)
    key = secrets.token_bytes(_KEY_LENGTH)
    left_tag = hmac.new(key, left, hashlib.sha256).digest()
    right_tag = hmac.new(key, right, hashlib.sha256).digest()
    same_length = len(left) == len(right)
    return hmac.compare_digest(left_tag, right_tag) & same_length
