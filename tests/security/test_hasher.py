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
"""Tests for AdaptiveHasher protocol and BcryptAdaptiveHasher adapter."""

from __future__ import annotations

import random

import pytest

from credvault.kernel.exceptions import CostFactorException
from credvault.security.hasher import (
    AdaptiveHasher,
    BcryptAdaptiveHasher,
    bcrypt64_decode,
    bcrypt64_encode,
    bcrypt64_length,
)

SALT = bytes(range(16))


def _bit_difference(a: bytes, b: bytes) -> int:
    return sum(bin(x ^ y).count("1") for x, y in zip(a, b, strict=True))


class TestBcrypt64:
    def test_known_lengths(self):
        assert bcrypt64_length(16) == 22
        assert bcrypt64_length(23) == 31

    def test_encode_uses_bcrypt_alphabet(self):
        assert bcrypt64_encode(b"\x00\x00\x00") == "...."
        assert bcrypt64_encode(b"\xff\xff\xff") == "9999"

    def test_decode_reverses_encode(self):
        data = bytes(range(23))
        assert bcrypt64_decode(bcrypt64_encode(data)) == data

    def test_decode_rejects_foreign_characters(self):
        with pytest.raises(ValueError, match="alphabet"):
            bcrypt64_decode("abc+")

    def test_decode_rejects_impossible_length(self):
        with pytest.raises(ValueError, match="length"):
            bcrypt64_decode("abcde")

    def test_decode_rejects_non_canonical_trailing_bits(self):
        encoded = bcrypt64_encode(SALT)
        # The last character of a 16-byte salt only carries 2 significant bits.
        tampered = encoded[:-1] + ("/" if encoded[-1] != "/" else "0")
        with pytest.raises(ValueError):
            bcrypt64_decode(tampered)


class TestBcryptAdaptiveHasher:
    def test_protocol_conformance(self):
        assert isinstance(BcryptAdaptiveHasher(), AdaptiveHasher)

    def test_contract_constants(self):
        hasher = BcryptAdaptiveHasher()
        assert hasher.salt_length == 16
        assert hasher.digest_length == 23
        assert hasher.min_cost == 4
        assert hasher.max_cost == 31

    def test_derive_is_deterministic(self):
        hasher = BcryptAdaptiveHasher()
        first = hasher.derive(b"correct horse", SALT, 4)
        second = hasher.derive(b"correct horse", SALT, 4)
        assert first == second
        assert len(first) == 23

    def test_salt_changes_digest(self):
        hasher = BcryptAdaptiveHasher()
        other_salt = bytes(reversed(SALT))
        assert hasher.derive(b"pw", SALT, 4) != hasher.derive(b"pw", other_salt, 4)

    def test_cost_changes_digest(self):
        hasher = BcryptAdaptiveHasher()
        assert hasher.derive(b"pw", SALT, 4) != hasher.derive(b"pw", SALT, 5)

    def test_avalanche_on_single_byte_change(self):
        hasher = BcryptAdaptiveHasher()
        rng = random.Random(1234)
        total_bits = hasher.digest_length * 8
        fractions = []
        for _ in range(16):
            secret = bytes(rng.randrange(256) for _ in range(12))
            flipped = bytearray(secret)
            position = rng.randrange(len(flipped))
            flipped[position] ^= 1 << rng.randrange(8)
            fractions.append(
                _bit_difference(hasher.derive(secret, SALT, 4), hasher.derive(bytes(flipped), SALT, 4)) / total_bits
            )
        mean = sum(fractions) / len(fractions)
        assert 0.4 < mean < 0.6
        assert min(fractions) > 0.25

    def test_long_secrets_are_not_truncated(self):
        hasher = BcryptAdaptiveHasher()
        base = b"x" * 100
        assert hasher.derive(base + b"a", SALT, 4) != hasher.derive(base + b"b", SALT, 4)

    def test_nul_bytes_are_significant(self):
        hasher = BcryptAdaptiveHasher()
        assert hasher.derive(b"pw\x00a", SALT, 4) != hasher.derive(b"pw\x00b", SALT, 4)

    def test_cost_below_floor_is_rejected(self):
        hasher = BcryptAdaptiveHasher(cost_floor=6)
        with pytest.raises(CostFactorException) as exc_info:
            hasher.derive(b"pw", SALT, 5)
        assert exc_info.value.context == {"cost": 5, "floor": 6}

    def test_cost_above_maximum_is_rejected(self):
        with pytest.raises(CostFactorException):
            BcryptAdaptiveHasher().derive(b"pw", SALT, 32)

    def test_wrong_salt_length_is_rejected(self):
        with pytest.raises(ValueError, match="16 bytes"):
            BcryptAdaptiveHasher().derive(b"pw", b"short", 4)

    @pytest.mark.parametrize("floor", [3, 32])
    def test_floor_outside_bcrypt_range(self, floor: int):
        with pytest.raises(ValueError):
            BcryptAdaptiveHasher(cost_floor=floor)
