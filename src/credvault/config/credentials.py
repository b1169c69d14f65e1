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
"""Credential hashing configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from credvault.core.config import config_properties


@config_properties(prefix="credvault.credentials")
@dataclass(frozen=True)
class CredentialProperties:
    """Configuration for credential hashing (credvault.credentials.*).

    ``target_cost_factor`` should be tuned so one derivation takes roughly
    100-250ms on deployment hardware (see ``credvault calibrate``) and raised
    as hardware improves. ``min_accepted_cost_factor`` only takes part in
    validation: it must not exceed the target, and upgrades are decided by the
    target alone. ``cost_floor`` is the lowest cost the hasher will run at all.
    """

    target_cost_factor: int = 12
    min_accepted_cost_factor: int = 10
    cost_floor: int = 4
    salt_length: int = 16
