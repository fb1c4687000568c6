"""Unified configuration loaded from .postshelf.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".postshelf.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "postshelf" / "config.toml"


class PostsConfig(BaseModel):
    """[posts] section."""

    directory: str = "_posts"
    extensions: list[str] = Field(default_factory=lambda: [".md"])
    required_keys: list[str] = Field(default_factory=lambda: ["layout", "title"])
    recursive: bool = False
    default_layout: str = "post"

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, value: list[str]) -> list[str]:
        """Accept ``md`` as well as ``.md``; at least one is required."""
        if not value:
            raise ValueError("at least one post extension is required")
        return [v if v.startswith(".") else f".{v}" for v in value]


class IndexConfig(BaseModel):
    """[index] section."""

    title: str = "Posts"
    output: str = "index.md"
    manifest: str = ""


class CheckConfig(BaseModel):
    """[check] section."""

    warnings_as_errors: bool = False


class PostshelfConfig(BaseModel):
    """Top-level configuration model."""

    posts: PostsConfig = Field(default_factory=PostsConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)

    @property
    def posts_dir(self) -> Path:
        return Path(self.posts.directory)


def load_config(path: str | Path | None = None) -> PostshelfConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .postshelf.toml in CWD
    3. ~/.config/postshelf/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = PostshelfConfig.model_validate(data) if data else PostshelfConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: PostshelfConfig, **cli_kwargs: object) -> PostshelfConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "posts_dir": ("posts", "directory"),
        "layout": ("posts", "default_layout"),
        "recursive": ("posts", "recursive"),
        "index_title": ("index", "title"),
        "index_output": ("index", "output"),
        "manifest": ("index", "manifest"),
        "strict": ("check", "warnings_as_errors"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value) if isinstance(value, Path) else value

    return PostshelfConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: PostshelfConfig) -> PostshelfConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "POSTSHELF_POSTS_DIR": ("posts", "directory"),
        "POSTSHELF_DEFAULT_LAYOUT": ("posts", "default_layout"),
        "POSTSHELF_INDEX_TITLE": ("index", "title"),
    }

    changed = False
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value:
            data[section][field] = value
            changed = True

    if not changed:
        return config
    return PostshelfConfig.model_validate(data)
