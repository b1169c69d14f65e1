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
"""credvault security — salted adaptive credential hashing."""

from credvault.security.calibration import CalibrationResult, calibrate_cost
from credvault.security.codec import DecodedDigest, DigestCodec
from credvault.security.compare import constant_time_compare
from credvault.security.credentials import CredentialManager, MatchResult
from credvault.security.hasher import AdaptiveHasher, BcryptAdaptiveHasher
from credvault.security.password import PasswordEncoder, SaltedPasswordEncoder
from credvault.security.salt import SaltSource, SecureSaltSource

__all__ = [
    "AdaptiveHasher",
    "BcryptAdaptiveHasher",
    "CalibrationResult",
    "CredentialManager",
    "DecodedDigest",
    "DigestCodec",
    "MatchResult",
    "PasswordEncoder",
    "SaltSource",
    "SaltedPasswordEncoder",
    "SecureSaltSource",
    "calibrate_cost",
    "constant_time_compare",
]
