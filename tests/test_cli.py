"""Tests for the root solcfg CLI."""

import pytest
from click.testing import CliRunner

from solcfg import __version__
from solcfg.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "solcfg" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize(
    "flags",
    [["--json"], ["-q"], ["-v"], ["--log-json"], ["-c", "/tmp/missing.toml"]],
)
def test_global_flags_accepted(cli_runner: CliRunner, flags: list[str]) -> None:
    result = cli_runner.invoke(cli, [*flags, "--version"])
    assert result.exit_code == 0


EXPECTED_COMMANDS = ["init", "resolve", "plan", "activate"]


@pytest.mark.parametrize("command", EXPECTED_COMMANDS)
def test_command_registered(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0, f"{command} --help failed: {result.output}"


def test_all_commands_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in EXPECTED_COMMANDS:
        assert name in result.output, f"{name} missing from --help"
