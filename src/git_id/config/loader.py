"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigError
from .schema import GitIdConfig


def default_config_paths() -> list[Path]:
    """Locations searched, in order, when no config path is given."""
    return [
        Path.home() / ".config" / "git-id" / "config.yaml",
        Path.home() / ".local" / "git-id" / "config.yaml",
        Path.cwd() / ".git-id" / "config.yaml",
    ]


def _validation_problems(error: ValidationError) -> list[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "config"
        problems.append(f"{location}: {item['msg']}")
    return problems


def _build(source: str, data: dict[str, Any]) -> GitIdConfig:
    try:
        return GitIdConfig(**data)
    except ValidationError as e:
        raise ConfigError(source, _validation_problems(e)) from e


def load_config(config_path: str | Path | None = None) -> GitIdConfig:
    """Load configuration from a YAML file, GITID_ variables and defaults.

    Args:
        config_path: Path to config file. If None, the first existing
            default location is used, or none at all.

    Returns:
        GitIdConfig instance

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ConfigError: If the YAML is malformed or a value is invalid
    """
    if config_path is None:
        config_path = next((p for p in default_config_paths() if p.exists()), None)

    if config_path is None:
        return _build("environment", {})

    config_path = Path(config_path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        problem = str(getattr(e, "problem", None) or e)
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            problem = f"line {mark.line + 1}: {problem}"
        raise ConfigError(str(config_path), [problem]) from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigError(str(config_path), ["top level must be a mapping"])

    return _build(str(config_path), config_data)


def save_config(config: GitIdConfig, config_path: str | Path) -> None:
    """Write a configuration as YAML, creating parent directories.

    Args:
        config: GitIdConfig instance
        config_path: Path to save config file
    """
    config_path = Path(config_path).expanduser()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def fallback_config() -> GitIdConfig:
    """Configuration from GITID_ variables alone, else the built-in defaults.

    For callers that must keep working when the config file is unusable.
    """
    try:
        return _build("environment", {})
    except ConfigError:
        return GitIdConfig.model_construct()
