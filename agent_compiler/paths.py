"""Source tree layout for the compiler.

All source paths are derived here from the source root and the profile name.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_SOURCE_DIR = ".claude-src"
DEFAULT_OUTPUT_DIR = ".claude"
DEFAULT_PROFILE = "home"

REQUIRED_AGENT_FILES = ("intro.md", "workflow.md")
OPTIONAL_AGENT_FILES = ("examples.md", "critical-requirements.md", "critical-reminders.md")


@dataclass(frozen=True)
class ProjectPaths:
    """Resolved locations of every compiler input for one profile."""

    root: Path
    profile: str

    @property
    def agents_file(self) -> Path:
        return self.root / "agents.yaml"

    @property
    def skills_file(self) -> Path:
        return self.root / "skills.yaml"

    @property
    def profiles_dir(self) -> Path:
        return self.root / "profiles"

    @property
    def profile_dir(self) -> Path:
        return self.profiles_dir / self.profile

    @property
    def profile_config(self) -> Path:
        return self.profile_dir / "config.yaml"

    @property
    def core_prompts_dir(self) -> Path:
        return self.root / "core-prompts"

    @property
    def templates_dir(self) -> Path:
        return self.root / "templates"

    def agent_dir(self, agent: str) -> Path:
        return self.root / "agent-sources" / agent

    def agent_file(self, agent: str, filename: str) -> Path:
        return self.agent_dir(agent) / filename

    def prompt_file(self, prompt: str) -> Path:
        """Core/ending prompt fragment or output format file."""
        return self.core_prompts_dir / f"{prompt}.md"

    def profile_file(self, relative: str) -> Path:
        """File referenced from the profile config (skill paths, claude_md)."""
        return self.profile_dir / relative
