"""Configuration management for reviewcover."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from reviewcover.exceptions import ConfigError

REVIEWCOVER_DIR = ".reviewcover"
CONFIG_FILE = "config.json"


class HistoryConfig(BaseModel):
    """How much history is read per file."""

    depth: int = Field(default=100, ge=1)
    candidate_limit: int = Field(default=10, ge=1)
    jobs: int = Field(default=4, ge=1)


class DiffConfig(BaseModel):
    """Where the list of changed files comes from."""

    base: str = "main"


class ReviewersConfig(BaseModel):
    """Who may be suggested."""

    exclude: list[str] = Field(default_factory=list)
    exclude_self: bool = True


class ReviewConfig(BaseModel):
    """Full project configuration."""

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
    reviewers: ReviewersConfig = Field(default_factory=ReviewersConfig)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .reviewcover or .git directory."""
    current = (start or Path.cwd()).resolve()
    while True:
        if (current / REVIEWCOVER_DIR).is_dir() or (current / ".git").exists():
            return current
        if current == current.parent:
            return None
        current = current.parent


def get_reviewcover_dir(root: Path) -> Path:
    """Get the .reviewcover directory for a project root."""
    return root / REVIEWCOVER_DIR


def load_config(root: Path) -> ReviewConfig:
    """Load configuration from .reviewcover/config.json."""
    config_path = get_reviewcover_dir(root) / CONFIG_FILE
    if not config_path.exists():
        return ReviewConfig()
    try:
        data = json.loads(config_path.read_text())
        return ReviewConfig(**data)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{config_path} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{e}") from e


def save_config(root: Path, config: ReviewConfig) -> Path:
    """Save configuration to .reviewcover/config.json."""
    rc_dir = get_reviewcover_dir(root)
    rc_dir.mkdir(parents=True, exist_ok=True)
    config_path = rc_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))
    return config_path


def set_config_value(config: ReviewConfig, key: str, value: Any) -> ReviewConfig:
    """Set a nested config value using dot notation (e.g., 'history.depth')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ReviewConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e


def get_config_value(config: ReviewConfig, key: str) -> Any:
    """Read a nested config value using dot notation."""
    target: Any = config.model_dump()
    for part in key.split("."):
        if not isinstance(target, dict) or part not in target:
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    return target
