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
"""Work-factor calibration for the adaptive hasher."""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass, field

from credvault.security.hasher import AdaptiveHasher

logger = logging.getLogger(__name__)

_SAMPLE_SECRET = b"calibration-sample-secret"


@dataclass(frozen=True)
class CalibrationResult:
    """Recommended cost and the timings observed while finding it."""

    cost: int
    elapsed_ms: float
    timings: dict[int, float] = field(default_factory=dict)


def _time_derivation(hasher: AdaptiveHasher, cost: int, samples: int) -> float:
    salt = secrets.token_bytes(hasher.salt_length)
    best = float("inf")
    for _ in range(samples):
        started = time.perf_counter()
        hasher.derive(_SAMPLE_SECRET, salt, cost)
        best = min(best, (time.perf_counter() - started) * 1000.0)
    return best


def calibrate_cost(
    hasher: AdaptiveHasher,
    target_ms: float = 100.0,
    max_ms: float = 250.0,
    start_cost: int | None = None,
    samples: int = 1,
) -> CalibrationResult:
    """Find the smallest cost whose derivation takes at least *target_ms*.

    Costs are tried upwards from *start_cost* (default: the hasher's floor).
    The search stops at the first cost reaching *target_ms*, or earlier if
    the next step would be expected to exceed *max_ms* (each step roughly
    doubles the time). The best of *samples* runs is used per cost.
    """
    if target_ms <= 0 or max_ms < target_ms:
        raise ValueError(f"Invalid calibration window {target_ms}..{max_ms} ms")
    if samples < 1:
        raise ValueError("samples must be at least 1")

    cost = hasher.min_cost if start_cost is None else start_cost
    if not hasher.min_cost <= cost <= hasher.max_cost:
        raise ValueError(f"start_cost {cost} outside {hasher.min_cost}..{hasher.max_cost}")

    timings: dict[int, float] = {}
    while True:
        elapsed = _time_derivation(hasher, cost, samples)
        timings[cost] = elapsed
        logger.debug("calibration_sample", extra={"cost": cost, "elapsed_ms": round(elapsed, 2)})
        if elapsed >= target_ms or cost >= hasher.max_cost or elapsed * 2 > max_ms:
            break
        cost += 1

    logger.info("calibration_complete", extra={"cost": cost, "elapsed_ms": round(timings[cost], 2)})
    return CalibrationResult(cost=cost, elapsed_ms=timings[cost], timings=timings)
