# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI smoke tests.

CLI tests must verify:
  - commands execute
  - exit codes are correct
  - help text exists

We use subprocess to test the actual CLI entrypoint the way a user would.
This catches issues that unit tests miss, like broken imports or entrypoint
registration.
"""

import subprocess
import sys
from pathlib import Path

import pytest


def _run_cli(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run `advent` with the given arguments and capture output."""
    return subprocess.run(
        [sys.executable, "-m", "advent.cli.main", *args],
        capture_output=True,
        text=True,
        timeout=60,
        cwd=cwd,
    )


class TestHelpTexts:
    """Every subcommand must have working --help output."""

    @pytest.mark.parametrize("subcommand", ["list", "run"])
    def test_subcommand_help_exits_zero(self, subcommand: str) -> None:
        result = _run_cli(subcommand, "--help")
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()

    def test_root_help_exits_with_user_error(self) -> None:
        """Running advent with no args should show help and exit with USER_ERROR (1)."""
        result = _run_cli()
        assert result.returncode == 1


class TestSubcommandExecution:
    def test_list_runs_without_config(self) -> None:
        result = _run_cli("list", "advent.nineteen")
        assert result.returncode == 0

    def test_run_with_input_succeeds(self, tmp_path: Path) -> None:
        (tmp_path / "input").mkdir()
        (tmp_path / "input" / "day4.txt").write_text("111110-111112\n", encoding="utf-8")

        result = _run_cli("run", "advent.nineteen.day4:Day4", cwd=tmp_path)
        assert result.returncode == 0
        assert "Unverified answer" in result.stdout

    def test_run_without_input_fails_validation(self, tmp_path: Path) -> None:
        result = _run_cli("run", "advent.nineteen.day4:Day4", "--input-root", str(tmp_path))
        assert result.returncode == 4  # VALIDATION_ERROR


class TestConfigLoading:
    """Subcommands should handle config loading failures gracefully."""

    def test_nonexistent_config_returns_config_error(self) -> None:
        result = _run_cli("list", "--config", "/nonexistent/path.yaml")
        assert result.returncode == 2  # CONFIG_ERROR

    def test_valid_config_is_accepted(self, tmp_config_file: Path) -> None:
        result = _run_cli("list", "--config", str(tmp_config_file))
        assert result.returncode == 0
