"""Cross-reference validation of the resolved model against the source tree.

Validation is one exhaustive pass: every problem is collected so the operator
gets a complete report per run. Nothing is written while errors remain.
"""

import logging
from dataclasses import dataclass
from dataclasses import field

from .console import console
from .paths import OPTIONAL_AGENT_FILES
from .paths import REQUIRED_AGENT_FILES
from .paths import ProjectPaths
from .schema import AgentConfig
from .schema import ProfileConfig
from .utils.error_format import escape_markup

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of a validation pass."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def _unique_in_order(prompt_sets: dict[str, list[str]]) -> list[str]:
    seen: dict[str, None] = {}
    for prompts in prompt_sets.values():
        for prompt in prompts:
            seen.setdefault(prompt, None)
    return list(seen)


def _validate_agent(paths: ProjectPaths, profile: ProfileConfig, name: str, agent: AgentConfig, result: ValidationResult):
    # The name becomes agents/<name>.md and agent-sources/<name>/
    if name in (".", "..") or "/" in name or "\\" in name:
        result.errors.append(f'Invalid agent name "{name}": must be a plain file name')
        return

    for filename in REQUIRED_AGENT_FILES:
        if not paths.agent_file(name, filename).is_file():
            result.errors.append(f"Missing {filename} for agent: {name}")

    for filename in OPTIONAL_AGENT_FILES:
        if not paths.agent_file(name, filename).is_file():
            result.warnings.append(f"Optional file missing for {name}: {filename}")

    if agent.core_prompts not in profile.core_prompt_sets:
        result.errors.append(f'Invalid core_prompts reference "{agent.core_prompts}" for agent: {name}')

    if agent.ending_prompts and agent.ending_prompts not in profile.ending_prompt_sets:
        result.errors.append(f'Invalid ending_prompts reference "{agent.ending_prompts}" for agent: {name}')

    if not paths.prompt_file(agent.output_format).is_file():
        result.warnings.append(f"Output format file missing for {name}: {agent.output_format}.md")

    for skill in agent.skills.precompiled:
        if not skill.path:
            result.errors.append(f"Precompiled skill missing path: {skill.id} (agent: {name})")
            continue
        if not paths.profile_file(skill.path).is_file():
            result.errors.append(f"Skill file not found: {skill.path} (agent: {name})")

    # A dynamic skill without a path can still be referenced by id, so it only
    # warns; a dynamic skill without usage gives the host nothing to act on.
    for skill in agent.skills.dynamic:
        if not skill.path:
            result.warnings.append(f"Dynamic skill missing path (won't be compiled): {skill.id} (agent: {name})")
        elif not paths.profile_file(skill.path).is_file():
            result.errors.append(f"Skill file not found: {skill.path} (agent: {name})")

    for skill in agent.skills.dynamic:
        if not (skill.usage and skill.usage.strip()):
            result.errors.append(f'Dynamic skill missing required "usage" property: {skill.id} (agent: {name})')


def validate(paths: ProjectPaths, profile: ProfileConfig, resolved: dict[str, AgentConfig]) -> ValidationResult:
    """
    Check the resolved agents against the filesystem.

    Args:
        paths: Source tree layout
        profile: Loaded profile config
        resolved: Resolved agents keyed by name, in compile order

    Returns:
        ValidationResult with every error and warning found
    """
    result = ValidationResult()

    if not paths.profile_file(profile.claude_md).is_file():
        result.errors.append(f"CLAUDE.md not found: {paths.profile_file(profile.claude_md)}")

    for name, agent in resolved.items():
        _validate_agent(paths, profile, name, agent, result)

    for prompt in _unique_in_order(profile.core_prompt_sets):
        if not paths.prompt_file(prompt).is_file():
            result.errors.append(f"Core prompt not found: {prompt}.md")

    for prompt in _unique_in_order(profile.ending_prompt_sets):
        if not paths.prompt_file(prompt).is_file():
            result.errors.append(f"Ending prompt not found: {prompt}.md")

    logger.debug(f"Validation finished: {len(result.errors)} errors, {len(result.warnings)} warnings")
    return result


def print_validation_result(result: ValidationResult) -> None:
    """Print warnings, then errors, then the overall verdict."""
    if result.warnings:
        console.print("\n[yellow]⚠  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"   - {escape_markup(warning)}")

    if not result.valid:
        console.print("\n[red]✗ Validation failed:[/red]")
        for error in result.errors:
            console.print(f"   - {escape_markup(error)}")
        return

    console.print("[green]✓ Validation passed[/green]\n")
