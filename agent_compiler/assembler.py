"""Gathers fragment text and skill content into an agent render context."""

import logging
import re
from pathlib import Path

from .paths import ProjectPaths
from .schema import AgentConfig
from .schema import AgentRenderContext
from .schema import ProfileConfig
from .schema import ResolvedSkill
from .schema import SkillAssignment

logger = logging.getLogger(__name__)

PROMPT_SEPARATOR = "\n\n---\n\n"

EXAMPLES_PLACEHOLDER = "## Examples\n\n_No examples defined._"
CRITICAL_REQUIREMENTS_PLACEHOLDER = "_No critical requirements defined._"
CRITICAL_REMINDERS_PLACEHOLDER = "_No critical reminders defined._"
OUTPUT_FORMAT_PLACEHOLDER = "_No output format defined._"


def read_text(path: Path) -> str:
    """Read a UTF-8 file verbatim, without newline translation."""
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def read_optional(path: Path) -> str | None:
    """Return file text, or None when the file does not exist.

    None means missing; an existing empty file returns "".
    """
    if not path.is_file():
        return None
    return read_text(path)


def with_fallback(content: str | None, placeholder: str) -> str:
    """Substitute the named placeholder for a missing optional fragment."""
    return placeholder if content is None else content


def format_prompt_name(name: str) -> str:
    """Display form of a prompt name: "core-principles" -> "Core Principles"."""
    return re.sub(r"\b\w", lambda m: m.group().upper(), name.replace("-", " "))


def read_prompts(paths: ProjectPaths, names: list[str]) -> str:
    """Concatenate prompt fragments in the given order."""
    return PROMPT_SEPARATOR.join(read_text(paths.prompt_file(name)) for name in names)


def load_skill_contents(paths: ProjectPaths, skills: list[ResolvedSkill]) -> list[ResolvedSkill]:
    """Return copies of the skills with full file content attached.

    Skills without a path are skipped.
    """
    loaded = []
    for skill in skills:
        if not skill.path:
            continue
        content = read_text(paths.profile_file(skill.path))
        loaded.append(skill.model_copy(update={"content": content}))
    return loaded


def assemble_agent(paths: ProjectPaths, name: str, agent: AgentConfig, profile: ProfileConfig) -> AgentRenderContext:
    """
    Build the render context for one validated agent.

    Args:
        paths: Source tree layout
        name: Agent name
        agent: Resolved agent config
        profile: Profile providing the prompt sets

    Returns:
        Render context with every fragment loaded
    """
    logger.debug(f"Reading agent files for {name}...")

    core_prompt_names = profile.core_prompt_sets.get(agent.core_prompts, [])
    ending_prompt_names = profile.ending_prompt_sets.get(agent.ending_prompts, []) if agent.ending_prompts else []

    return AgentRenderContext(
        agent=agent,
        intro=read_text(paths.agent_file(name, "intro.md")),
        workflow=read_text(paths.agent_file(name, "workflow.md")),
        examples=with_fallback(read_optional(paths.agent_file(name, "examples.md")), EXAMPLES_PLACEHOLDER),
        critical_requirements_top=with_fallback(
            read_optional(paths.agent_file(name, "critical-requirements.md")), CRITICAL_REQUIREMENTS_PLACEHOLDER
        ),
        critical_reminders=with_fallback(
            read_optional(paths.agent_file(name, "critical-reminders.md")), CRITICAL_REMINDERS_PLACEHOLDER
        ),
        core_prompt_names=[format_prompt_name(n) for n in core_prompt_names],
        core_prompts_content=read_prompts(paths, core_prompt_names),
        output_format=with_fallback(read_optional(paths.prompt_file(agent.output_format)), OUTPUT_FORMAT_PLACEHOLDER),
        ending_prompt_names=[format_prompt_name(n) for n in ending_prompt_names],
        ending_prompts_content=read_prompts(paths, ending_prompt_names),
        skills=SkillAssignment(
            precompiled=load_skill_contents(paths, agent.skills.precompiled),
            # Dynamic skills carry metadata only; the host loads their content
            dynamic=[skill.model_copy(update={"content": None}) for skill in agent.skills.dynamic],
        ),
    )
