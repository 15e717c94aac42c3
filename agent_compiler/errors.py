"""Exceptions raised by the compile pipeline.

Every fatal condition derives from CompileError so the CLI can report it and
exit non-zero. Validation warnings are not exceptions; they travel on
ValidationResult.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validator import ValidationResult


class CompileError(Exception):
    """Base class for fatal compile failures."""


class ConfigLoadError(CompileError):
    """Raised when a YAML source is missing, unparsable or malformed."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to load {path}: {message}")


class ReferenceResolutionError(CompileError):
    """Raised when a profile names an agent or skill that is not defined."""


class ValidationFailedError(CompileError):
    """Raised after a full validation pass that collected one or more errors."""

    def __init__(self, result: ValidationResult):
        self.result = result
        count = len(result.errors)
        super().__init__(f"Validation failed with {count} error{'' if count == 1 else 's'}")


class RenderError(CompileError):
    """Raised when the template engine fails for an agent."""

    def __init__(self, agent: str, message: str):
        self.agent = agent
        self.message = message
        super().__init__(f"Failed to render agent '{agent}': {message}")


class WriteError(CompileError):
    """Raised when an output artifact cannot be written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to write {path}: {message}")
