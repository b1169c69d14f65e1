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
"""'credvault hash', 'credvault verify' and 'credvault needs-upgrade'."""

from __future__ import annotations

import click

from credvault.cli.console import console
from credvault.core.config import Config
from credvault.kernel.exceptions import CredVaultException, ValidationException
from credvault.security.credentials import CredentialManager, MatchResult


def build_manager(config: Config) -> CredentialManager:
    """Create a CredentialManager from CLI config, exiting with status 1 on bad settings."""
    try:
        return CredentialManager.from_config(config)
    except (CredVaultException, ValueError) as exc:
        console.print(f"[error]Invalid credential configuration:[/error] {exc}")
        raise SystemExit(1) from None


@click.command()
@click.option("--no-confirm", is_flag=True, help="Do not ask for the secret a second time.")
@click.pass_obj
def hash_command(config: Config, no_confirm: bool) -> None:
    """Read a secret from the terminal and print its stored digest."""
    manager = build_manager(config)
    secret = click.prompt("Secret", hide_input=True, default="", show_default=False)
    confirmation = None
    if not no_confirm:
        confirmation = click.prompt("Confirm secret", hide_input=True, default="", show_default=False)

    try:
        digest = manager.set_credential(secret, confirmation)
    except ValidationException as exc:
        console.print(f"[error]{exc}[/error] [dim]({exc.code})[/dim]")
        raise SystemExit(1) from None
    click.echo(digest)


@click.command()
@click.argument("digest")
@click.pass_obj
def verify_command(config: Config, digest: str) -> None:
    """Check a secret read from the terminal against DIGEST.

    Exits 0 on a match and 1 otherwise.
    """
    manager = build_manager(config)
    secret = click.prompt("Secret", hide_input=True, default="", show_default=False)
    result = manager.verify_credential(secret, digest)

    if result is MatchResult.MATCH:
        console.print("[success]match[/success]")
        if manager.needs_upgrade(digest):
            console.print("[warning]digest uses an outdated cost factor; re-hash to upgrade[/warning]")
        return
    if result is MatchResult.INVALID:
        console.print("[error]invalid[/error] [dim]stored digest could not be decoded[/dim]")
    else:
        console.print("[error]no match[/error]")
    raise SystemExit(1)


@click.command()
@click.argument("digest")
@click.pass_obj
def needs_upgrade_command(config: Config, digest: str) -> None:
    """Report whether DIGEST is below the configured cost.

    Prints yes/no; exits 0 for yes and 1 for no.
    """
    manager = build_manager(config)
    if manager.needs_upgrade(digest):
        click.echo("yes")
        return
    click.echo("no")
    raise SystemExit(1)
