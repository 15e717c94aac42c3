"""Compile orchestration: load, resolve, validate, render, write.

The pipeline is two-phase. Everything is loaded, resolved, validated and
rendered in memory first; the output tree is only touched once all of that
has succeeded.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .assembler import assemble_agent
from .console import console
from .errors import RenderError
from .errors import ValidationFailedError
from .errors import WriteError
from .loader import load_agents
from .loader import load_profile
from .loader import load_skills
from .paths import ProjectPaths
from .renderer import create_environment
from .renderer import render_agent
from .resolver import resolve_agents
from .schema import AgentConfig
from .schema import ProfileConfig
from .session import BuildSession
from .session import collect_unique_skills
from .utils.error_format import format_error_message
from .validator import print_validation_result
from .validator import validate

logger = logging.getLogger(__name__)


@dataclass
class CompileReport:
    """Summary of a successful compile run."""

    profile: str
    agents: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)


def render_all_agents(paths: ProjectPaths, resolved: dict[str, AgentConfig], profile: ProfileConfig) -> dict[str, str]:
    """
    Render every agent document in compile order.

    Raises:
        RenderError: If any agent fails to assemble or render
    """
    env = create_environment(paths)
    rendered: dict[str, str] = {}

    for name, agent in resolved.items():
        try:
            context = assemble_agent(paths, name, agent, profile)
        except (OSError, UnicodeDecodeError) as e:
            raise RenderError(name, format_error_message(e)) from e
        rendered[name] = render_agent(env, context)

    return rendered


def compile_profile(paths: ProjectPaths, output_dir: Path) -> CompileReport:
    """
    Compile one profile into the output tree.

    Args:
        paths: Source tree layout for the selected profile
        output_dir: Output root (agents/ and skills/ live here)

    Returns:
        CompileReport describing what was written

    Raises:
        CompileError: On any load, resolution, validation, render or write failure
    """
    agents_config = load_agents(paths.agents_file)
    skills_config = load_skills(paths.skills_file)
    profile = load_profile(paths.profile_config)

    resolved = resolve_agents(agents_config, profile, skills_config)

    console.print("Validating configuration...")
    result = validate(paths, profile, resolved)
    print_validation_result(result)
    if not result.valid:
        raise ValidationFailedError(result)

    rendered = render_all_agents(paths, resolved, profile)
    skills = collect_unique_skills(resolved)

    session = BuildSession(output_dir)
    session.clean()

    try:
        console.print("Compiling agents...")
        for name, content in rendered.items():
            session.write_agent(name, content)

        console.print("\nCompiling skills...")
        for skill in skills:
            # collect_unique_skills only returns skills with a path
            session.write_skill(skill, paths.profile_file(skill.path or ""))

        console.print("\nCopying CLAUDE.md...")
        session.copy_claude_md(paths.profile_file(profile.claude_md))
    except WriteError:
        # Never leave a half-written agents/ or skills/ tree behind
        logger.debug(f"Write failed, removing partial output under {output_dir}")
        session.clean()
        raise

    logger.info(
        f"Compiled profile '{paths.profile}': {len(rendered)} agents, {len(skills)} skills",
        extra={"event": "compile.done", "profile": paths.profile},
    )

    return CompileReport(
        profile=paths.profile,
        agents=list(rendered),
        skills=[skill.id for skill in skills],
        warnings=list(result.warnings),
        written=list(session.written),
    )
