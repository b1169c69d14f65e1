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
"""credvault CLI entry point."""

from __future__ import annotations

from pathlib import Path

import click

from credvault.core.config import Config
from credvault.logging.port import LoggingPort
from credvault.logging.structlog_adapter import StructlogAdapter


@click.group()
@click.version_option(package_name="credvault")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML or TOML file with a credvault.credentials section.",
)
@click.option("--profile", "profiles", multiple=True, help="Profile overlay(s) to merge on top of --config.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured root log level.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, profiles: tuple[str, ...], log_level: str | None) -> None:
    """credvault — salted, adaptive password hashing."""
    if config_path is not None and not config_path.is_file():
        raise click.BadParameter(f"{config_path} does not exist", param_hint="--config")
    config = Config.from_file(config_path, list(profiles)) if config_path is not None else Config({})

    adapter: LoggingPort = StructlogAdapter()
    adapter.configure(config)
    if log_level is not None:
        adapter.set_level("", log_level)

    ctx.obj = config


from credvault.cli.calibrate import calibrate_command
from credvault.cli.credentials import hash_command, needs_upgrade_command, verify_command

cli.add_command(hash_command, name="hash")
cli.add_command(verify_command, name="verify")
cli.add_command(needs_upgrade_command, name="needs-upgrade")
cli.add_command(calibrate_command, name="calibrate")
