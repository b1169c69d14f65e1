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
"""Password encoding port and salted credential adapter."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from credvault.security.credentials import CredentialManager


@runtime_checkable
class PasswordEncoder(Protocol):
    """Port for password hashing and verification."""

    def hash(self, raw_password: str) -> str:
        """Hash a raw password. Returns the hashed string."""
        ...

    def verify(self, raw_password: str, hashed_password: str) -> bool:
        """Verify a raw password against a hashed password."""
        ...


class SaltedPasswordEncoder:
    """PasswordEncoder adapter over :class:`CredentialManager`.

    Args:
        manager: Credential manager to delegate to (default: one built from
            default properties).
    """

    def __init__(self, manager: CredentialManager | None = None) -> None:
        self._manager = manager if manager is not None else CredentialManager()

    def hash(self, raw_password: str) -> str:
        """Hash a raw password into a stored digest string."""
        return self._manager.set_credential(raw_password)

    def verify(self, raw_password: str, hashed_password: str) -> bool:
        """True only when the password matches; corrupt hashes are simply False."""
        return self._manager.verify_credential(raw_password, hashed_password).is_match

    def upgrade_encoding(self, hashed_password: str) -> bool:
        """Whether the stored hash should be re-encoded at the current cost."""
        return self._manager.needs_upgrade(hashed_password)
