"""Build session owning the output tree for one compile run."""

import logging
import re
import shutil
from pathlib import Path

from .console import console
from .errors import WriteError
from .schema import AgentConfig
from .schema import ResolvedSkill
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)

_UNSAFE_SLUG_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def skill_slug(skill_id: str) -> str:
    """Directory-safe name for a skill id ("react/hooks" -> "react-hooks")."""
    return _UNSAFE_SLUG_CHARS.sub("-", skill_id)


def collect_unique_skills(resolved: dict[str, AgentConfig]) -> list[ResolvedSkill]:
    """
    Union of every path-bearing skill across agents, de-duplicated by id.

    Order is first appearance: agents in compile order, precompiled before
    dynamic within each agent.
    """
    unique: dict[str, ResolvedSkill] = {}
    for agent in resolved.values():
        for skill in [*agent.skills.precompiled, *agent.skills.dynamic]:
            if skill.path and skill.id not in unique:
                unique[skill.id] = skill
    return list(unique.values())


class BuildSession:
    """
    Owns the output root for the lifetime of a compile run.

    The agents/ and skills/ directories are cleared and fully rebuilt; nothing
    from a previous run survives. CLAUDE.md is written next to the output root.
    """

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.written: list[Path] = []

    @property
    def agents_dir(self) -> Path:
        return self.output_dir / "agents"

    @property
    def skills_dir(self) -> Path:
        return self.output_dir / "skills"

    @property
    def claude_md_path(self) -> Path:
        return self.output_dir.parent / "CLAUDE.md"

    def clean(self) -> None:
        """Remove agents/ and skills/ from any previous run."""
        for directory in (self.agents_dir, self.skills_dir):
            if directory.exists():
                logger.debug(f"Removing {directory}")
                try:
                    shutil.rmtree(directory)
                except OSError as e:
                    raise WriteError(directory, format_error_message(e)) from e

    def _write(self, path: Path, data: bytes, label: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            console.print(f"  [red]✗[/red] {escape_markup(label)} - {escape_markup(format_error_message(e))}")
            raise WriteError(path, format_error_message(e)) from e

        self.written.append(path)
        console.print(f"  [green]✓[/green] {escape_markup(label)}")

    def write_agent(self, name: str, content: str) -> Path:
        """Write a rendered agent document to agents/<name>.md."""
        path = self.agents_dir / f"{name}.md"
        self._write(path, content.encode("utf-8"), f"{name}.md")
        return path

    def write_skill(self, skill: ResolvedSkill, source: Path) -> Path:
        """Copy a skill file byte-for-byte to skills/<slug>/SKILL.md."""
        slug = skill_slug(skill.id)
        path = self.skills_dir / slug / "SKILL.md"
        try:
            data = source.read_bytes()
        except OSError as e:
            raise WriteError(path, f"cannot read {source}: {format_error_message(e)}") from e
        self._write(path, data, f"skills/{slug}/SKILL.md")
        return path

    def copy_claude_md(self, source: Path) -> Path:
        """Copy the profile's top-level document to CLAUDE.md."""
        try:
            data = source.read_bytes()
        except OSError as e:
            raise WriteError(self.claude_md_path, f"cannot read {source}: {format_error_message(e)}") from e
        self._write(self.claude_md_path, data, "CLAUDE.md")
        return self.claude_md_path
