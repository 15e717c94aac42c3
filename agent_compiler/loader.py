"""Loaders for agents.yaml, skills.yaml and profile config files."""

import logging
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import BaseModel
from pydantic import ValidationError

from .errors import ConfigLoadError
from .paths import ProjectPaths
from .schema import AgentsConfig
from .schema import ProfileConfig
from .schema import SkillsConfig

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects repeated keys in a mapping instead of keeping the last one."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _read_yaml(path: Path) -> dict:
    """
    Read and parse a YAML file.

    Args:
        path: File to read

    Returns:
        Parsed mapping (empty dict for an empty file)

    Raises:
        ConfigLoadError: If the file is missing, unparsable or not a mapping
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigLoadError(path, "file not found") from None
    except OSError as e:
        raise ConfigLoadError(path, str(e)) from e
    except UnicodeDecodeError as e:
        raise ConfigLoadError(path, f"not valid UTF-8: {e}") from e

    try:
        data = yaml.load(text, Loader=UniqueKeyLoader)  # noqa: S506
    except yaml.YAMLError as e:
        error_msg = str(e)
        if "found duplicate key" in error_msg:
            raise ConfigLoadError(path, f"duplicate key: {error_msg}") from e
        # Unquoted colons in descriptions are the usual culprit
        if "mapping values are not allowed" in error_msg:
            error_msg += '\n\nTip: quote values that contain colons, e.g. description: "Note: something"'
        raise ConfigLoadError(path, f"YAML syntax error: {error_msg}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(path, f"expected a mapping at top level, got {type(data).__name__}")
    return data


def _load_model(path: Path, model: type[ModelT]) -> ModelT:
    data = _read_yaml(path)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(path, str(e)) from e


def load_agents(path: Path) -> AgentsConfig:
    """Load agents.yaml, the single source of truth for agent definitions."""
    config = _load_model(path, AgentsConfig)
    logger.debug(f"Loaded {len(config.agents)} agent definitions from {path}")
    return config


def load_skills(path: Path) -> SkillsConfig:
    """Load skills.yaml, the single source of truth for skill definitions."""
    config = _load_model(path, SkillsConfig)
    logger.debug(f"Loaded {len(config.skills)} skill definitions from {path}")
    return config


def load_profile(path: Path) -> ProfileConfig:
    """Load a profile config.yaml."""
    config = _load_model(path, ProfileConfig)
    logger.debug(f"Loaded profile '{config.name}' with {len(config.agent_skills)} agents from {path}")
    return config


def list_profiles(paths: ProjectPaths) -> list[str]:
    """
    Discover all available profile names.

    A profile is any directory under profiles/ that contains a config.yaml.

    Returns:
        Sorted list of profile names
    """
    if not paths.profiles_dir.is_dir():
        return []

    return sorted(
        entry.name
        for entry in paths.profiles_dir.iterdir()
        if entry.is_dir() and (entry / "config.yaml").is_file()
    )
