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
"""CredentialManager — set, verify and upgrade salted credential digests.

Lifecycle of a credential as seen through this module::

    Unset --set_credential--> Set --verify_credential--> MATCH | NO_MATCH | INVALID
                              Set --set_credential-----> Set       (rotation)
                              Set --verify_and_update--> Upgraded  (cost below target)

Nothing here persists anything: callers store the returned digest strings.
The manager holds only immutable configuration and stateless collaborators,
so one instance can serve any number of concurrent callers.
"""

from __future__ import annotations

import logging
import secrets
from enum import StrEnum

from credvault.config.credentials import CredentialProperties
from credvault.core.config import Config
from credvault.kernel.exceptions import (
    ConfigurationException,
    ConfirmationMismatchException,
    DigestDecodeException,
    EmptySecretException,
)
from credvault.security.codec import DigestCodec
from credvault.security.compare import constant_time_compare
from credvault.security.hasher import AdaptiveHasher, BcryptAdaptiveHasher
from credvault.security.salt import SaltSource, SecureSaltSource

logger = logging.getLogger(__name__)


def _secret_bytes(plaintext: str | None) -> bytes:
    # Lone surrogates (e.g. from a JSON "\ud800" escape) encode instead of raising.
    return plaintext.encode("utf-8", "surrogatepass") if plaintext is not None else b""


class MatchResult(StrEnum):
    """Outcome of :meth:`CredentialManager.verify_credential`.

    Only ``MATCH`` is truthy. ``NO_MATCH`` and ``INVALID`` must be reported
    to end users identically ("authentication failed").
    """

    MATCH = "match"
    NO_MATCH = "no_match"
    INVALID = "invalid"

    def __bool__(self) -> bool:
        return self is MatchResult.MATCH

    @property
    def is_match(self) -> bool:
        return self is MatchResult.MATCH


class CredentialManager:
    """Orchestrates salt generation, adaptive hashing and digest encoding.

    Args:
        properties: Explicit configuration (target cost, floors, salt length).
        salt_source: Random salt provider (default: :class:`SecureSaltSource`).
        hasher: Adaptive hash primitive (default: :class:`BcryptAdaptiveHasher`).
        codec: Stored digest codec (default: derived from the hasher).

    Raises:
        ConfigurationException: if the configuration is inconsistent with
            itself or with the hasher's contract.
    """

    def __init__(
        self,
        properties: CredentialProperties | None = None,
        *,
        salt_source: SaltSource | None = None,
        hasher: AdaptiveHasher | None = None,
        codec: DigestCodec | None = None,
    ) -> None:
        self._properties = properties if properties is not None else CredentialProperties()
        self._hasher = hasher if hasher is not None else BcryptAdaptiveHasher(cost_floor=self._properties.cost_floor)
        self._salt_source = salt_source if salt_source is not None else SecureSaltSource(self._properties.salt_length)
        self._codec = codec if codec is not None else DigestCodec.for_hasher(self._hasher)
        self._validate()
        # Only ever used to burn time on verify paths that have no real salt.
        self._dummy_salt = secrets.token_bytes(self._hasher.salt_length)

    @classmethod
    def from_config(cls, config: Config) -> CredentialManager:
        """Build a manager from the ``credvault.credentials`` config section."""
        return cls(config.bind(CredentialProperties))

    @property
    def properties(self) -> CredentialProperties:
        return self._properties

    @property
    def codec(self) -> DigestCodec:
        return self._codec

    def _validate(self) -> None:
        props = self._properties
        hasher = self._hasher
        if props.salt_length != hasher.salt_length:
            raise ConfigurationException(
                f"salt_length {props.salt_length} does not match the hasher's {hasher.salt_length}-byte salt",
                context={"salt_length": props.salt_length},
            )
        target = props.target_cost_factor
        if not max(hasher.min_cost, props.cost_floor) <= target <= hasher.max_cost:
            raise ConfigurationException(
                f"target_cost_factor {target} outside {max(hasher.min_cost, props.cost_floor)}..{hasher.max_cost}",
                context={"target_cost_factor": target},
            )
        if props.min_accepted_cost_factor > target:
            raise ConfigurationException(
                f"min_accepted_cost_factor {props.min_accepted_cost_factor} exceeds target_cost_factor {target}",
                context={"min_accepted_cost_factor": props.min_accepted_cost_factor},
            )
        codec = self._codec
        if (
            codec.salt_length != hasher.salt_length
            or codec.digest_length != hasher.digest_length
            or codec.min_cost < hasher.min_cost
            or codec.max_cost > hasher.max_cost
        ):
            raise ConfigurationException("Digest codec layout does not match the hasher's contract")

    def set_credential(self, plaintext: str | None, confirmation: str | None = None) -> str:
        """Produce a new stored digest for *plaintext*.

        A ``None`` confirmation means no confirmation is required.

        Raises:
            ConfirmationMismatchException: *confirmation* was given and differs.
            EmptySecretException: *plaintext* is ``None`` or empty.
            EntropyUnavailableException: the secure random source failed.
        """
        if confirmation is not None and not constant_time_compare(confirmation, plaintext or ""):
            raise ConfirmationMismatchException("Confirmation does not match the new secret")
        if not plaintext:
            raise EmptySecretException("Secret must not be empty")

        cost = self._properties.target_cost_factor
        salt = self._salt_source.generate()
        if len(salt) != self._hasher.salt_length:
            raise ValueError(f"Salt source returned {len(salt)} bytes, expected {self._hasher.salt_length}")

        digest = self._hasher.derive(_secret_bytes(plaintext), salt, cost)
        stored = self._codec.encode(cost, salt, digest)
        logger.debug("credential_set", extra={"cost": cost})
        return stored

    def verify_credential(self, plaintext: str, stored_digest: str | None) -> MatchResult:
        """Check *plaintext* against a stored digest.

        Never raises for absent or corrupt stored data: an absent digest is
        ``NO_MATCH`` and an undecodable one is ``INVALID``. Both still run a
        derivation at the target cost so they take as long as a real check.
        """
        secret = _secret_bytes(plaintext)

        if not stored_digest:
            self._burn(secret)
            logger.debug("credential_absent")
            return MatchResult.NO_MATCH

        try:
            decoded = self._codec.decode(stored_digest)
        except DigestDecodeException as exc:
            self._burn(secret)
            logger.warning("stored_digest_undecodable", extra={"code": exc.code})
            return MatchResult.INVALID

        candidate = self._hasher.derive(secret, decoded.salt, decoded.cost)
        if constant_time_compare(candidate, decoded.digest):
            return MatchResult.MATCH
        return MatchResult.NO_MATCH

    def needs_upgrade(self, stored_digest: str | None) -> bool:
        """Whether *stored_digest* should be replaced by a fresh ``set_credential``.

        True when its cost is below the target, and for digests that cannot
        be decoded at all.
        """
        try:
            cost = self._codec.peek_cost(stored_digest)  # type: ignore[arg-type]
        except DigestDecodeException:
            return True
        return cost < self._properties.target_cost_factor

    def verify_and_update(self, plaintext: str, stored_digest: str | None) -> tuple[MatchResult, str | None]:
        """Verify, and on a match that needs an upgrade also return a replacement digest.

        The caller persists the replacement; this method stores nothing.
        """
        result = self.verify_credential(plaintext, stored_digest)
        if result is MatchResult.MATCH and self.needs_upgrade(stored_digest):
            replacement = self.set_credential(plaintext)
            logger.info(
                "credential_upgraded",
                extra={
                    "from_cost": self._codec.peek_cost(stored_digest),  # type: ignore[arg-type]
                    "to_cost": self._properties.target_cost_factor,
                },
            )
            return result, replacement
        return result, None

    def _burn(self, secret: bytes) -> None:
        self._hasher.derive(secret, self._dummy_salt, self._properties.target_cost_factor)
