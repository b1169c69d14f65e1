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
"""Unified exception hierarchy for credvault.

All library exceptions inherit from CredVaultException so callers can catch
one base type, or a specific subclass for targeted handling.

Categories:
- BusinessException: caller input errors and corrupt stored data
- SecurityException: work-factor policy violations
- InfrastructureException: the OS random source failing
- ConfigurationException: invalid credential settings
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CredVaultException(Exception):
    """Base exception for all credvault errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "EMPTY_SECRET").
        context: Arbitrary key-value pairs for error context and debugging.
            Never holds secrets or stored digests.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(CredVaultException):
    """Domain rule violations."""


class ValidationException(BusinessException):
    """Caller input rejected by ``set_credential``. Stored state is untouched."""


class ConfirmationMismatchException(ValidationException):
    """The confirmation value differs from the new secret."""

    default_code = "CONFIRMATION_MISMATCH"


class EmptySecretException(ValidationException):
    """An absent or empty secret was offered as a credential."""

    default_code = "EMPTY_SECRET"


class DataIntegrityException(BusinessException):
    """Stored data does not have the shape this library writes."""


class DigestDecodeException(DataIntegrityException):
    """A stored digest string could not be decoded.

    Means "not a valid digest", which is distinct from "wrong secret".
    """


class MalformedLengthException(DigestDecodeException):
    """The stored digest has the wrong length or layout."""

    default_code = "MALFORMED_LENGTH"


class UnsupportedCostException(DigestDecodeException):
    """The embedded cost factor is unreadable or outside the supported range."""

    default_code = "UNSUPPORTED_COST"


class UnsupportedVersionException(DigestDecodeException):
    """The digest carries a format version marker this library cannot read."""

    default_code = "UNSUPPORTED_VERSION"


# =============================================================================
# Security Exceptions
# =============================================================================


class SecurityException(CredVaultException):
    """Security policy violations."""


class CostFactorException(SecurityException):
    """A cost factor below the configured floor (or above the primitive's maximum)."""

    default_code = "COST_FACTOR"


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CredVaultException):
    """Failures of the environment the library runs in."""


class EntropyUnavailableException(InfrastructureException):
    """The secure random source is unavailable. Always fatal."""

    default_code = "ENTROPY_UNAVAILABLE"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(CredVaultException):
    """Credential settings are inconsistent with each other or the primitive."""

    default_code = "CONFIGURATION"
