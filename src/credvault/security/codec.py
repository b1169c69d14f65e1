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
"""Fixed-width, versioned text encoding for stored digests.

Layout of format version 1::

    $cv1$12$<salt><digest>
    |    |  |     `- digest: fixed width, bcrypt base64
    |    |  `------- salt: fixed width, bcrypt base64
    |    `---------- cost: two decimal digits, then "$"
    `--------------- version marker

Every field has a width known before decoding starts, so the decoder slices
positionally and rejects any string of the wrong shape.
"""

from __future__ import annotations

from dataclasses import dataclass

from credvault.kernel.exceptions import (
    MalformedLengthException,
    UnsupportedCostException,
    UnsupportedVersionException,
)
from credvault.security.hasher import AdaptiveHasher, bcrypt64_decode, bcrypt64_encode, bcrypt64_length

FORMAT_PREFIX = "$cv"
FORMAT_VERSION = "1"
COST_WIDTH = 2


@dataclass(frozen=True)
class DecodedDigest:
    """The three fields recovered from a stored digest string."""

    cost: int
    salt: bytes
    digest: bytes


class DigestCodec:
    """Encodes ``(cost, salt, digest)`` triples into one printable string and back.

    Args:
        salt_length: Raw salt length in bytes.
        digest_length: Raw digest length in bytes.
        min_cost: Lowest cost accepted on encode and decode.
        max_cost: Highest cost accepted on encode and decode.
    """

    def __init__(self, salt_length: int, digest_length: int, min_cost: int, max_cost: int) -> None:
        if max_cost >= 10**COST_WIDTH:
            raise ValueError(f"max_cost {max_cost} does not fit in {COST_WIDTH} digits")
        self.salt_length = salt_length
        self.digest_length = digest_length
        self.min_cost = min_cost
        self.max_cost = max_cost

        self._marker = f"{FORMAT_PREFIX}{FORMAT_VERSION}$"
        self._cost_start = len(self._marker)
        self._salt_start = self._cost_start + COST_WIDTH + 1
        self._digest_start = self._salt_start + bcrypt64_length(salt_length)
        self.encoded_length = self._digest_start + bcrypt64_length(digest_length)

    @classmethod
    def for_hasher(cls, hasher: AdaptiveHasher) -> DigestCodec:
        """Build a codec whose field widths match *hasher*'s contract."""
        return cls(
            salt_length=hasher.salt_length,
            digest_length=hasher.digest_length,
            min_cost=hasher.min_cost,
            max_cost=hasher.max_cost,
        )

    def encode(self, cost: int, salt: bytes, digest: bytes) -> str:
        """Render a stored digest string.

        Raises:
            ValueError: if any field does not fit the fixed layout.
        """
        if not self.min_cost <= cost <= self.max_cost:
            raise ValueError(f"cost {cost} outside supported range {self.min_cost}..{self.max_cost}")
        if len(salt) != self.salt_length:
            raise ValueError(f"salt must be {self.salt_length} bytes, got {len(salt)}")
        if len(digest) != self.digest_length:
            raise ValueError(f"digest must be {self.digest_length} bytes, got {len(digest)}")
        return f"{self._marker}{cost:0{COST_WIDTH}d}${bcrypt64_encode(salt)}{bcrypt64_encode(digest)}"

    def decode(self, text: str) -> DecodedDigest:
        """Parse a stored digest string.

        Raises:
            UnsupportedVersionException: the version marker is not one this codec writes.
            MalformedLengthException: the string does not have the fixed shape.
            UnsupportedCostException: the cost field is unreadable or out of range.
        """
        if not isinstance(text, str):
            raise MalformedLengthException(f"Stored digest must be a string, got {type(text).__name__}")

        version = text[len(FORMAT_PREFIX) :].split("$", 1)[0] if text.startswith(FORMAT_PREFIX) else None
        if version is not None and version != FORMAT_VERSION:
            raise UnsupportedVersionException(
                f"Unsupported digest format version {version!r}",
                context={"version": version},
            )
        if len(text) != self.encoded_length or not text.startswith(self._marker):
            raise MalformedLengthException(
                f"Stored digest must be {self.encoded_length} characters in format {self._marker!r}",
                context={"length": len(text), "expected": self.encoded_length},
            )
        if text[self._salt_start - 1] != "$":
            raise MalformedLengthException("Stored digest is missing the cost separator")

        cost_field = text[self._cost_start : self._cost_start + COST_WIDTH]
        if not (cost_field.isascii() and cost_field.isdigit()):
            raise UnsupportedCostException(f"Cost field {cost_field!r} is not numeric")
        cost = int(cost_field)
        if not self.min_cost <= cost <= self.max_cost:
            raise UnsupportedCostException(
                f"Cost factor {cost} outside supported range {self.min_cost}..{self.max_cost}",
                context={"cost": cost},
            )

        try:
            salt = bcrypt64_decode(text[self._salt_start : self._digest_start])
            digest = bcrypt64_decode(text[self._digest_start :])
        except ValueError as exc:
            raise MalformedLengthException(f"Stored digest has an invalid salt or digest field: {exc}") from exc

        return DecodedDigest(cost=cost, salt=salt, digest=digest)

    def peek_cost(self, text: str) -> int:
        """Return the cost factor embedded in a stored digest."""
        return self.decode(text).cost
