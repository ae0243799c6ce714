"""Tests for the root namedraw CLI."""

import pytest
from click.testing import CliRunner

from namedraw import __version__
from namedraw.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "namedraw" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_root")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize(
    "flags",
    [["--json"], ["-q"], ["-v"], ["--log-json"], ["--no-interact"], ["--seed", "3"]],
)
def test_global_flags_accepted(cli_runner: CliRunner, flags: list[str]) -> None:
    result = cli_runner.invoke(cli, [*flags, "--version"])
    assert result.exit_code == 0


def test_root_option(cli_runner: CliRunner, tmp_path) -> None:
    result = cli_runner.invoke(cli, ["--root", str(tmp_path), "roster", "set", "Kim", "Lee"])
    assert result.exit_code == 0
    assert (tmp_path / ".namedraw" / "namedraw.db").is_file()


def test_config_option(cli_runner: CliRunner, tmp_path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text('[storage]\ndirname = ".draws"\n')
    result = cli_runner.invoke(
        cli, ["-c", str(config), "--root", str(tmp_path), "roster", "set", "Kim", "Lee"]
    )
    assert result.exit_code == 0
    assert (tmp_path / ".draws" / "namedraw.db").is_file()


def test_missing_config_option(cli_runner: CliRunner, tmp_path) -> None:
    missing = tmp_path / "missing.toml"
    result = cli_runner.invoke(cli, ["-c", str(missing), "--root", str(tmp_path), "status"])
    assert result.exit_code == 1
    assert f"Config file not found: {missing}" in result.stderr
    assert not (tmp_path / ".namedraw").exists()


# (CLI args, expected keywords in help output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["roster", "--help"], ["set", "show"]),
    (["roster", "set", "--help"], ["NAMES", "--file"]),
    (["draw", "--help"], ["--no-animate"]),
    (["undo", "--help"], ["Undo"]),
    (["reset", "--help"], ["--all", "--yes"]),
    (["option", "--help"], ["no-repeat", "sound"]),
    (["status", "--help"], ["history"]),
]


@pytest.mark.parametrize(("args", "keywords"), HELP_COMMANDS)
def test_command_help(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for keyword in keywords:
        assert keyword in result.output


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["draw", "--examples"], "namedraw draw --no-animate"),
        (["roster", "set", "--examples"], "--file team.txt"),
        (["reset", "--examples"], "reset --all --yes"),
    ],
)
def test_examples(cli_runner: CliRunner, args: list[str], expected: str) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert expected in result.output


def test_examples_expand_program_name(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["roster", "show", "--examples"])
    assert result.exit_code == 0
    assert "Examples for 'namedraw roster show':" in result.output
    assert "namedraw -q roster show > team.txt" in result.output
    assert "{prog}" not in result.output
    assert "{cmd}" not in result.output


def test_group_examples_cover_subcommands(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["option", "--examples"])
    assert result.exit_code == 0
    assert "Examples for 'namedraw option no-repeat':" in result.output
    assert "Examples for 'namedraw option sound':" in result.output
    assert "namedraw option sound on" in result.output


def test_root_examples_list_every_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--examples"])
    assert result.exit_code == 0
    for path in ("draw", "option sound", "reset", "roster set", "roster show", "status", "undo"):
        assert f"Examples for 'namedraw {path}':" in result.output
