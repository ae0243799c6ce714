"""Tests for the Rich console factory and theme."""

from __future__ import annotations

from namedraw.output.console import DRAW_THEME, create_console, get_output, style_for_state


class TestCreateConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_default_width(self) -> None:
        assert create_console().width == 100

    def test_custom_width(self) -> None:
        assert create_console(width=60).width == 60

    def test_no_ansi_without_terminal(self) -> None:
        console = create_console()
        console.print("[draw.winner]Kim[/draw.winner]")
        assert "\x1b[" not in get_output(console)


class TestTheme:
    def test_theme_styles(self) -> None:
        for name in ("draw.ok", "draw.error", "draw.winner", "draw.state.idle"):
            assert name in DRAW_THEME.styles

    def test_style_for_state(self) -> None:
        assert style_for_state("idle") == "draw.state.idle"
        assert style_for_state("drawing") == "draw.state.drawing"
        assert style_for_state("unknown") == ""
