"""Tests for error message formatting and Rich markup escaping."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

from rich.console import Console

from agent_compiler.errors import ConfigLoadError
from agent_compiler.errors import RenderError
from agent_compiler.utils.error_format import escape_markup
from agent_compiler.utils.error_format import format_error_message


class TestFormatErrorMessage:
    """Exceptions always produce a non-empty message."""

    def test_includes_type(self):
        assert format_error_message(ValueError("invalid input")) == "ValueError: invalid input"

    def test_without_type(self):
        assert format_error_message(ValueError("invalid input"), include_type=False) == "invalid input"

    def test_friendly_fallback_for_empty_message(self):
        assert format_error_message(PermissionError()) == "PermissionError: Permission denied."

    def test_unknown_empty_exception(self):
        assert format_error_message(RuntimeError()) == "RuntimeError: (no additional details)"

    def test_compile_errors_name_their_subject(self):
        load_error = ConfigLoadError(Path("agents.yaml"), "file not found")
        render_error = RenderError("dev", "boom")

        assert format_error_message(load_error, include_type=False) == "Failed to load agents.yaml: file not found"
        assert format_error_message(render_error, include_type=False) == "Failed to render agent 'dev': boom"


class TestEscapeMarkup:
    """Unit tests for the escape_markup() helper."""

    def test_path_with_bracket_content(self):
        result = escape_markup("[profiles/home/config.yaml]")
        assert "profiles/home/config.yaml" in result

    def test_preserves_plain_text(self):
        assert escape_markup("Missing intro.md for agent: dev") == "Missing intro.md for agent: dev"

    def test_handles_non_string_input(self):
        assert escape_markup(ValueError("boom")) == "boom"
        assert escape_markup(42) == "42"

    def test_renders_literally(self):
        buf = StringIO()
        console = Console(file=buf, force_terminal=False, width=200)

        console.print(f"[red]Error:[/red] {escape_markup('[bold]not markup[/bold]')}")

        assert buf.getvalue().strip() == "Error: [bold]not markup[/bold]"
