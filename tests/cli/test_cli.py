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
"""Tests for the credvault CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from credvault.cli.main import cli
from credvault.config.credentials import CredentialProperties
from credvault.security.credentials import CredentialManager


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "credvault.yaml"
    path.write_text("credvault:\n  credentials:\n    target_cost_factor: 4\n    min_accepted_cost_factor: 4\n")
    return path


def _last_line(output: str) -> str:
    return output.strip().splitlines()[-1]


def _digest(cost: int = 4, secret: str = "pw") -> str:
    return CredentialManager(
        CredentialProperties(target_cost_factor=cost, min_accepted_cost_factor=4)
    ).set_credential(secret)


class TestCLI:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("hash", "verify", "needs-upgrade", "calibrate"):
            assert command in result.output

    def test_missing_config_file_fails(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "needs-upgrade", "x"])
        assert result.exit_code == 2

    def test_log_level_overrides_root_level(self, config_file: Path):
        runner = CliRunner()
        try:
            result = runner.invoke(cli, ["--config", str(config_file), "--log-level", "debug", "needs-upgrade", _digest()])
            assert result.exit_code == 1, result.output
            assert logging.getLogger().level == logging.DEBUG
        finally:
            logging.getLogger().setLevel(logging.WARNING)


class TestHashCommand:
    def test_hash_prints_digest(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "hash"], input="pw\npw\n")
        assert result.exit_code == 0, result.output
        digest = _last_line(result.output)
        assert digest.startswith("$cv1$04$")
        assert "pw" not in result.output.replace(digest, "")

    def test_hash_confirmation_mismatch(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "hash"], input="pw\nother\n")
        assert result.exit_code == 1
        assert "CONFIRMATION_MISMATCH" in result.output

    def test_hash_empty_secret(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "hash", "--no-confirm"], input="\n")
        assert result.exit_code == 1
        assert "EMPTY_SECRET" in result.output

    def test_invalid_configuration(self, tmp_path: Path):
        path = tmp_path / "credvault.yaml"
        path.write_text("credvault:\n  credentials:\n    target_cost_factor: 4\n    min_accepted_cost_factor: 9\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(path), "hash"], input="pw\npw\n")
        assert result.exit_code == 1
        assert "Invalid credential configuration" in result.output


class TestVerifyCommand:
    def test_verify_match(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "verify", _digest()], input="pw\n")
        assert result.exit_code == 0, result.output
        assert "match" in result.output

    def test_verify_no_match(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "verify", _digest()], input="nope\n")
        assert result.exit_code == 1
        assert "no match" in result.output

    def test_verify_invalid_digest(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "verify", "not-a-digest"], input="pw\n")
        assert result.exit_code == 1
        assert "invalid" in result.output

    def test_verify_reports_outdated_cost(self, tmp_path: Path):
        path = tmp_path / "credvault.yaml"
        path.write_text("credvault:\n  credentials:\n    target_cost_factor: 5\n    min_accepted_cost_factor: 4\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(path), "verify", _digest(4)], input="pw\n")
        assert result.exit_code == 0
        assert "outdated cost factor" in result.output


class TestNeedsUpgradeCommand:
    def test_yes_when_below_target(self, tmp_path: Path):
        path = tmp_path / "credvault.toml"
        path.write_text("[credvault.credentials]\ntarget_cost_factor = 5\nmin_accepted_cost_factor = 4\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(path), "needs-upgrade", _digest(4)])
        assert result.exit_code == 0
        assert _last_line(result.output) == "yes"

    def test_no_when_at_target(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "needs-upgrade", _digest(4)])
        assert result.exit_code == 1
        assert _last_line(result.output) == "no"

    def test_env_override(self, config_file: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CREDVAULT_CREDENTIALS_TARGET_COST_FACTOR", "6")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "needs-upgrade", _digest(4)])
        assert _last_line(result.output) == "yes"


class TestCalibrateCommand:
    def test_calibrate_prints_recommendation(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config_file), "calibrate", "--target-ms", "0.01", "--max-ms", "1000"]
        )
        assert result.exit_code == 0, result.output
        assert "Recommended target_cost_factor: 4" in result.output

    def test_calibrate_rejects_inverted_window(self, config_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_file), "calibrate", "--target-ms", "200", "--max-ms", "100"])
        assert result.exit_code == 2
