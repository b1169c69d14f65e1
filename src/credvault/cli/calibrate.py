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
"""'credvault calibrate' — recommend a target cost factor for this machine."""

from __future__ import annotations

import click
from rich.table import Table

from credvault.cli.console import console
from credvault.config.credentials import CredentialProperties
from credvault.core.config import Config
from credvault.security.calibration import calibrate_cost
from credvault.security.hasher import BcryptAdaptiveHasher


@click.command()
@click.option("--target-ms", type=float, default=100.0, show_default=True, help="Minimum time per derivation.")
@click.option("--max-ms", type=float, default=250.0, show_default=True, help="Maximum acceptable time per derivation.")
@click.option("--samples", type=click.IntRange(min=1), default=1, show_default=True, help="Runs per cost factor.")
@click.option("--start-cost", type=click.IntRange(min=4, max=31), default=None, help="First cost factor to try.")
@click.pass_obj
def calibrate_command(
    config: Config, target_ms: float, max_ms: float, samples: int, start_cost: int | None
) -> None:
    """Time derivations and recommend target_cost_factor."""
    if max_ms < target_ms:
        raise click.BadParameter("--max-ms must not be below --target-ms", param_hint="--max-ms")
    try:
        properties = config.bind(CredentialProperties)
        hasher = BcryptAdaptiveHasher(cost_floor=properties.cost_floor)
        result = calibrate_cost(hasher, target_ms=target_ms, max_ms=max_ms, start_cost=start_cost, samples=samples)
    except ValueError as exc:
        console.print(f"[error]{exc}[/error]")
        raise SystemExit(1) from None

    table = Table(title="Derivation timings", border_style="dim")
    table.add_column("Cost", style="info", justify="right")
    table.add_column("Time (ms)", justify="right")
    for cost, elapsed in result.timings.items():
        marker = " [success]<-[/success]" if cost == result.cost else ""
        table.add_row(str(cost), f"{elapsed:.1f}{marker}")
    console.print(table)

    console.print(f"Recommended target_cost_factor: [credvault]{result.cost}[/credvault]")
    if properties.target_cost_factor < result.cost:
        console.print(
            f"[warning]Configured target_cost_factor {properties.target_cost_factor} is below the recommendation[/warning]"
        )
