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
"""Adaptive hash port and bcrypt adapter.

bcrypt is the work-factor primitive. Secrets are first reduced with
HMAC-SHA256 (keyed by the encoded salt) and base64 encoded, so bcrypt always
sees 44 printable bytes: long passphrases are not truncated at bcrypt's
72-byte limit and NUL bytes cannot end the input early.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Protocol, runtime_checkable

import bcrypt as _bcrypt

from credvault.kernel.exceptions import CostFactorException

BCRYPT_MIN_COST = 4
BCRYPT_MAX_COST = 31
BCRYPT_SALT_LENGTH = 16
BCRYPT_DIGEST_LENGTH = 23

_STD_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
BCRYPT64_ALPHABET = b"./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
_TO_BCRYPT64 = bytes.maketrans(_STD_ALPHABET, BCRYPT64_ALPHABET)
_FROM_BCRYPT64 = bytes.maketrans(BCRYPT64_ALPHABET, _STD_ALPHABET)
_BCRYPT64_CHARS = frozenset(BCRYPT64_ALPHABET.decode("ascii"))


def bcrypt64_length(byte_length: int) -> int:
    """Number of unpadded bcrypt-base64 characters for *byte_length* bytes."""
    return (byte_length * 4 + 2) // 3


def bcrypt64_encode(data: bytes) -> str:
    """Encode bytes with bcrypt's base64 alphabet, without padding."""
    return base64.b64encode(data).rstrip(b"=").translate(_TO_BCRYPT64).decode("ascii")


def bcrypt64_decode(text: str) -> bytes:
    """Decode unpadded bcrypt-base64 text.

    Raises:
        ValueError: on characters outside the alphabet, an impossible length,
            or non-zero trailing bits (a non-canonical encoding).
    """
    if not _BCRYPT64_CHARS.issuperset(text):
        raise ValueError("text contains characters outside the bcrypt base64 alphabet")
    padding = -len(text) % 4
    if padding == 3:
        raise ValueError(f"{len(text)} characters is not a valid base64 length")
    std = text.encode("ascii").translate(_FROM_BCRYPT64) + b"=" * padding
    data = base64.b64decode(std, validate=True)
    if bcrypt64_encode(data) != text:
        raise ValueError("non-canonical base64 encoding")
    return data


@runtime_checkable
class AdaptiveHasher(Protocol):
    """Port for a deliberately slow, salted, cost-parameterized hash."""

    salt_length: int
    digest_length: int
    min_cost: int
    max_cost: int

    def derive(self, secret: bytes, salt: bytes, cost: int) -> bytes:
        """Derive ``digest_length`` bytes from *secret* and *salt* at *cost*."""
        ...


class BcryptAdaptiveHasher:
    """AdaptiveHasher adapter using bcrypt.

    Each step of *cost* doubles the work of a derivation.

    Args:
        cost_floor: Lowest cost accepted by :meth:`derive` (default: 4,
            bcrypt's own minimum). Lower costs raise rather than clamp.
    """

    salt_length = BCRYPT_SALT_LENGTH
    digest_length = BCRYPT_DIGEST_LENGTH
    max_cost = BCRYPT_MAX_COST

    def __init__(self, cost_floor: int = BCRYPT_MIN_COST) -> None:
        if not BCRYPT_MIN_COST <= cost_floor <= BCRYPT_MAX_COST:
            raise ValueError(f"cost_floor must be between {BCRYPT_MIN_COST} and {BCRYPT_MAX_COST}, got {cost_floor}")
        self.min_cost = cost_floor

    def derive(self, secret: bytes, salt: bytes, cost: int) -> bytes:
        """Run bcrypt over the pre-hashed *secret* with the given salt and cost."""
        if cost < self.min_cost:
            raise CostFactorException(
                f"Cost factor {cost} is below the configured floor {self.min_cost}",
                context={"cost": cost, "floor": self.min_cost},
            )
        if cost > self.max_cost:
            raise CostFactorException(
                f"Cost factor {cost} exceeds the bcrypt maximum {self.max_cost}",
                context={"cost": cost, "max": self.max_cost},
            )
        if len(salt) != self.salt_length:
            raise ValueError(f"bcrypt salt must be {self.salt_length} bytes, got {len(salt)}")

        salt64 = bcrypt64_encode(salt).encode("ascii")
        prehashed = base64.b64encode(hmac.new(salt64, secret, hashlib.sha256).digest())
        hashed = _bcrypt.hashpw(prehashed, b"$2b$%02d$%s" % (cost, salt64))
        return bcrypt64_decode(hashed[-bcrypt64_length(self.digest_length) :].decode("ascii"))
