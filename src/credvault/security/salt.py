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
"""Salt source port and OS-backed adapter."""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable

from credvault.kernel.exceptions import EntropyUnavailableException

MIN_SALT_LENGTH = 16


@runtime_checkable
class SaltSource(Protocol):
    """Port producing fixed-length random salt material."""

    length: int

    def generate(self) -> bytes:
        """Return ``length`` fresh random bytes."""
        ...


class SecureSaltSource:
    """SaltSource adapter drawing from the operating system's CSPRNG.

    There is deliberately no fallback generator: if the OS source fails,
    no credential can be produced.

    Args:
        length: Salt length in bytes (default: 16, the bcrypt contract).
    """

    def __init__(self, length: int = MIN_SALT_LENGTH) -> None:
        if length < MIN_SALT_LENGTH:
            raise ValueError(f"Salt length must be at least {MIN_SALT_LENGTH} bytes, got {length}")
        self.length = length

    def generate(self) -> bytes:
        """Draw a fresh salt from ``secrets.token_bytes``."""
        try:
            return secrets.token_bytes(self.length)
        except (NotImplementedError, OSError) as exc:
            raise EntropyUnavailableException(
                "Secure random source unavailable; refusing to produce a credential",
                context={"length": self.length},
            ) from exc
