"""Resolution of profile references against the global agent and skill sets."""

import logging

from .errors import ReferenceResolutionError
from .schema import AgentConfig
from .schema import AgentsConfig
from .schema import ProfileConfig
from .schema import ResolvedSkill
from .schema import SkillAssignment
from .schema import SkillReference
from .schema import SkillReferenceAssignment
from .schema import SkillsConfig

logger = logging.getLogger(__name__)


def resolve_skill_reference(ref: SkillReference, skills: SkillsConfig) -> ResolvedSkill:
    """
    Merge a skill definition with the usage text from a profile reference.

    Args:
        ref: Profile-local skill reference
        skills: Global skill set

    Returns:
        Resolved skill (no content loaded yet)

    Raises:
        ReferenceResolutionError: If the skill id is not in skills.yaml
    """
    definition = skills.skills.get(ref.id)
    if definition is None:
        raise ReferenceResolutionError(f'Skill "{ref.id}" not found in skills.yaml')

    return ResolvedSkill(
        id=ref.id,
        path=definition.path,
        name=definition.name,
        description=definition.description,
        usage=ref.usage,
    )


def resolve_skill_references(
    agent_name: str, refs: SkillReferenceAssignment, skills: SkillsConfig
) -> SkillAssignment:
    """Resolve every precompiled and dynamic reference for one agent, keeping list order."""
    try:
        return SkillAssignment(
            precompiled=[resolve_skill_reference(ref, skills) for ref in refs.precompiled],
            dynamic=[resolve_skill_reference(ref, skills) for ref in refs.dynamic],
        )
    except ReferenceResolutionError as e:
        raise ReferenceResolutionError(f"{e} (agent: {agent_name})") from e


def resolve_agents(agents: AgentsConfig, profile: ProfileConfig, skills: SkillsConfig) -> dict[str, AgentConfig]:
    """
    Merge agents.yaml definitions with the profile's skill assignments.

    The compile set is exactly the keys of ``profile.agent_skills``, in
    declaration order. The returned dict preserves that order.

    Raises:
        ReferenceResolutionError: If a profile agent or skill is undefined
    """
    resolved: dict[str, AgentConfig] = {}

    for agent_name, skill_refs in profile.agent_skills.items():
        definition = agents.agents.get(agent_name)
        if definition is None:
            raise ReferenceResolutionError(f'Agent "{agent_name}" in agent_skills but not found in agents.yaml')

        resolved[agent_name] = AgentConfig(
            name=agent_name,
            title=definition.title,
            description=definition.description,
            model=definition.model,
            tools=list(definition.tools),
            core_prompts=definition.core_prompts,
            ending_prompts=definition.ending_prompts,
            output_format=definition.output_format,
            skills=resolve_skill_references(agent_name, skill_refs, skills),
        )

    logger.debug(f"Resolved {len(resolved)} agents for profile '{profile.name}'")
    return resolved
