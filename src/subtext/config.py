"""Configuration loader for subtext.toml."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when subtext.toml holds an invalid value."""


@dataclass
class RenderConfig:
    """Renderer configuration."""
    block_separator: str = "\n"
    link_base: str = "subtext://"


@dataclass
class ExcerptConfig:
    """Excerpt and preview configuration."""
    max_chars: int = 280
    ellipsis: str = "…"


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "WARNING"

    @property
    def numeric_level(self) -> int:
        return logging.getLevelName(self.level)


@dataclass
class SubtextConfig:
    """Complete subtext configuration."""
    render: RenderConfig = field(default_factory=RenderConfig)
    excerpt: ExcerptConfig = field(default_factory=ExcerptConfig)
    log: LogConfig = field(default_factory=LogConfig)


def _get_str(section: dict[str, Any], section_name: str, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{section_name}.{key} must be a string, got {value!r}")
    return value


def load_config(config_path: Path | None = None) -> SubtextConfig:
    """
    Load configuration from subtext.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/subtext.toml

    Args:
        config_path: Explicit path to config file

    Returns:
        SubtextConfig with resolved settings

    Raises:
        ConfigError: if a value has the wrong type or is out of range
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "subtext.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    render_data = toml_data.get("render", {})
    render_config = RenderConfig(
        block_separator=_get_str(render_data, "render", "block_separator", "\n"),
        link_base=_get_str(render_data, "render", "link_base", "subtext://"),
    )

    excerpt_data = toml_data.get("excerpt", {})
    max_chars = excerpt_data.get("max_chars", 280)
    if not isinstance(max_chars, int) or max_chars < 0:
        raise ConfigError(f"excerpt.max_chars must be a non-negative integer, got {max_chars!r}")
    excerpt_config = ExcerptConfig(
        max_chars=max_chars,
        ellipsis=_get_str(excerpt_data, "excerpt", "ellipsis", "…"),
    )

    log_data = toml_data.get("log", {})
    level = str(log_data.get("level", "WARNING")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"log.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    log_config = LogConfig(level=level)

    return SubtextConfig(
        render=render_config,
        excerpt=excerpt_config,
        log=log_config,
    )
