"""Pydantic schemas for agent, skill and profile configuration."""

from pydantic import BaseModel
from pydantic import Field


class SkillDefinition(BaseModel):
    """Global skill entry from skills.yaml."""

    path: str | None = Field(None, description="Skill file path, relative to the profile directory")
    name: str = Field(..., description="Human-readable skill name")
    description: str = Field(..., description="What the skill covers")


class SkillsConfig(BaseModel):
    """Top-level structure of skills.yaml."""

    skills: dict[str, SkillDefinition] = Field(default_factory=dict)


class SkillReference(BaseModel):
    """Profile-local reference to a global skill."""

    id: str = Field(..., description="Key into skills.yaml")
    usage: str | None = Field(None, description="When the agent should invoke this skill")


class SkillReferenceAssignment(BaseModel):
    """Skill references for one agent in a profile."""

    precompiled: list[SkillReference] = Field(default_factory=list)
    dynamic: list[SkillReference] = Field(default_factory=list)


class AgentDefinition(BaseModel):
    """
    Base agent definition from agents.yaml.

    Does not include skills - those are profile-specific.
    """

    title: str
    description: str
    model: str | None = None
    tools: list[str] = Field(default_factory=list)
    core_prompts: str = Field(..., description="Key into the profile's core_prompt_sets")
    ending_prompts: str | None = Field(None, description="Key into the profile's ending_prompt_sets")
    output_format: str = Field(..., description="Output format fragment name in core-prompts/")


class AgentsConfig(BaseModel):
    """Top-level structure of agents.yaml."""

    agents: dict[str, AgentDefinition] = Field(default_factory=dict)


class ProfileConfig(BaseModel):
    """
    Profile configuration from profiles/<name>/config.yaml.

    The agents to compile are the keys of ``agent_skills``. There is no separate
    agent list, so the compile set and the skill map cannot drift apart.
    """

    name: str
    description: str = ""
    claude_md: str = Field(..., description="Top-level document copied to CLAUDE.md")
    core_prompt_sets: dict[str, list[str]] = Field(default_factory=dict)
    ending_prompt_sets: dict[str, list[str]] = Field(default_factory=dict)
    agent_skills: dict[str, SkillReferenceAssignment] = Field(default_factory=dict)


class ResolvedSkill(BaseModel):
    """Skill definition merged with a profile reference's usage text."""

    id: str
    path: str | None = None
    name: str
    description: str
    usage: str | None = None
    content: str | None = Field(None, description="Full file text, populated for precompiled skills")


class SkillAssignment(BaseModel):
    """Resolved skills for one agent."""

    precompiled: list[ResolvedSkill] = Field(default_factory=list)
    dynamic: list[ResolvedSkill] = Field(default_factory=list)


class AgentConfig(BaseModel):
    """Fully resolved agent: agents.yaml definition plus profile skills."""

    name: str
    title: str
    description: str
    model: str | None = None
    tools: list[str] = Field(default_factory=list)
    core_prompts: str
    ending_prompts: str | None = None
    output_format: str
    skills: SkillAssignment


class AgentRenderContext(BaseModel):
    """Everything the agent template needs, with fragment text already loaded."""

    agent: AgentConfig
    intro: str
    workflow: str
    examples: str
    critical_requirements_top: str
    critical_reminders: str
    core_prompt_names: list[str]
    core_prompts_content: str
    output_format: str
    ending_prompt_names: list[str]
    ending_prompts_content: str
    skills: SkillAssignment
