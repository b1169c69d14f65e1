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
"""credvault — salted, adaptive password hashing and verification."""

import logging

from credvault.config.credentials import CredentialProperties
from credvault.core.config import Config
from credvault.security.credentials import CredentialManager, MatchResult

__all__ = [
    "Config",
    "CredentialManager",
    "CredentialProperties",
    "MatchResult",
    "__version__",
]

__version__ = "0.1.0"

# Silent unless the application configures logging (see StructlogAdapter).
logging.getLogger("credvault").addHandler(logging.NullHandler())
