"""Tests for --examples formatting."""

from __future__ import annotations

import click
from click.testing import CliRunner

from namedraw.commands._base import DrawCommand, DrawGroup, format_examples


def _ctx() -> click.Context:
    group = DrawGroup(name="namedraw")
    cmd = DrawCommand(name="draw")
    parent = click.Context(group, info_name="namedraw")
    return click.Context(cmd, info_name="draw", parent=parent)


class TestFormatExamples:
    def test_expands_templates(self) -> None:
        lines = format_examples(_ctx(), [("{cmd} --no-animate", ""), ("{prog} -q draw", "")])
        assert lines == ["  namedraw draw --no-animate", "  namedraw -q draw"]

    def test_notes_share_a_column(self) -> None:
        lines = format_examples(_ctx(), [("{cmd}", "animated"), ("{prog} --json draw", "as JSON")])
        assert lines == [
            "  namedraw draw" + " " * 7 + "  # animated",
            "  namedraw --json draw  # as JSON",
        ]

    def test_empty(self) -> None:
        assert format_examples(_ctx(), []) == []


def test_command_without_examples_says_so() -> None:
    result = CliRunner().invoke(DrawCommand(name="bare", callback=lambda: None), ["--examples"])
    assert result.exit_code == 0
    assert "No examples for 'bare'." in result.output
