"""Profile-based agent compiler.

Resolves agents.yaml, skills.yaml and a profile config into compiled agent
documents and skill files.
"""

from .compiler import CompileReport
from .compiler import compile_profile
from .errors import CompileError
from .errors import ConfigLoadError
from .errors import ReferenceResolutionError
from .errors import RenderError
from .errors import ValidationFailedError
from .errors import WriteError
from .paths import ProjectPaths
from .session import BuildSession
from .validator import ValidationResult

__all__ = [
    "compile_profile",
    "CompileReport",
    "ProjectPaths",
    "BuildSession",
    "ValidationResult",
    # Errors
    "CompileError",
    "ConfigLoadError",
    "ReferenceResolutionError",
    "ValidationFailedError",
    "RenderError",
    "WriteError",
]
