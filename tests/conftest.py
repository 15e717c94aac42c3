"""Pytest configuration and a miniature compiler source tree."""

import logging
from pathlib import Path

import pytest
import yaml

from agent_compiler.paths import ProjectPaths

AGENTS = {
    "agents": {
        "dev": {
            "title": "Developer Agent",
            "description": "Implements features from specs",
            "model": "opus",
            "tools": ["Read", "Write", "Edit", "Bash"],
            "core_prompts": "developer",
            "ending_prompts": "developer",
            "output_format": "output-formats-developer",
        },
        "reviewer": {
            "title": "Reviewer Agent",
            "description": "Reviews code for quality",
            "tools": ["Read", "Grep"],
            "core_prompts": "reviewer",
            "output_format": "output-formats-reviewer",
        },
        "unused": {
            "title": "Unused Agent",
            "description": "Defined globally but not in any profile",
            "tools": [],
            "core_prompts": "developer",
            "output_format": "output-formats-developer",
        },
    }
}

SKILLS = {
    "skills": {
        "style": {"path": "style/docs.md", "name": "Style Guide", "description": "House code style"},
        "testing": {"path": "testing/SKILL.md", "name": "Testing", "description": "Testing patterns"},
        "react/hooks": {"path": "react/hooks.md", "name": "React Hooks", "description": "Hook conventions"},
        "remote": {"name": "Remote Skill", "description": "Hosted elsewhere"},
    }
}

PROFILE = {
    "name": "home",
    "description": "Personal projects",
    "claude_md": "CLAUDE.md",
    "core_prompt_sets": {
        "developer": ["core-principles", "investigation-requirement"],
        "reviewer": ["core-principles"],
    },
    "ending_prompt_sets": {
        "developer": ["context-management"],
    },
    "agent_skills": {
        "dev": {
            "precompiled": [{"id": "style", "usage": "always"}],
            "dynamic": [
                {"id": "testing", "usage": "when writing tests"},
                {"id": "react/hooks", "usage": "when touching hooks"},
            ],
        },
        "reviewer": {
            "precompiled": [],
            "dynamic": [{"id": "testing", "usage": "when reviewing tests"}],
        },
    },
}

FILES = {
    "profiles/home/CLAUDE.md": "# Home profile\n\nProject instructions.\n",
    "profiles/home/style/docs.md": "# Style\n\nUse descriptive names.\r\nKeep functions small.\n",
    "profiles/home/testing/SKILL.md": "# Testing\n\nWrite tests first.\n",
    "profiles/home/react/hooks.md": "# Hooks\n\nPrefix with use.\n",
    "agent-sources/dev/intro.md": "You are a developer.",
    "agent-sources/dev/workflow.md": "1. Read\n2. Implement\n3. Verify",
    "agent-sources/dev/examples.md": "## Examples\n\nDev example.",
    "agent-sources/dev/critical-requirements.md": "Never skip tests.",
    "agent-sources/dev/critical-reminders.md": "Remember: never skip tests.",
    "agent-sources/reviewer/intro.md": "You are a reviewer.",
    "agent-sources/reviewer/workflow.md": "1. Read the diff",
    "core-prompts/core-principles.md": "Core principles text.",
    "core-prompts/investigation-requirement.md": "Investigate before acting.",
    "core-prompts/context-management.md": "Manage context carefully.",
    "core-prompts/output-formats-developer.md": "Developer output format.",
    "core-prompts/output-formats-reviewer.md": "Reviewer output format.",
}


def write_yaml(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def read_yaml(path: Path) -> dict:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


@pytest.fixture
def source_root(tmp_path) -> Path:
    """Create a complete, valid source tree for the 'home' profile."""
    root = tmp_path / "project" / ".claude-src"
    write_yaml(root / "agents.yaml", AGENTS)
    write_yaml(root / "skills.yaml", SKILLS)
    write_yaml(root / "profiles" / "home" / "config.yaml", PROFILE)
    for relative, content in FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
    return root


@pytest.fixture
def paths(source_root) -> ProjectPaths:
    return ProjectPaths(root=source_root, profile="home")


@pytest.fixture
def output_dir(source_root) -> Path:
    return source_root.parent / ".claude"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI configures the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
