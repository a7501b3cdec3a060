"""Unified configuration loaded from .archive-pages.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from archive_pages.archive.registrar import DEFAULT_CAPABILITY
from archive_pages.content.models import ContentType
from archive_pages.integrations.github import UpdaterConfig
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".archive-pages.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "archive-pages" / "config.toml"


class SiteSectionConfig(BaseModel):
    """[site] section."""

    base_url: str = "http://localhost"
    admin_path: str = "/wp-admin"
    page_for_posts: int = 0


class StoreSectionConfig(BaseModel):
    """[store] section."""

    directory: str = "./.archive-pages"


class ArchiveSectionConfig(BaseModel):
    """[archive] section."""

    capability: str = DEFAULT_CAPABILITY
    excluded_types: list[str] = Field(default_factory=list)


class TypeConfig(BaseModel):
    """A single [[types]] entry registered with the catalog."""

    identifier: str
    singular_label: str
    plural_label: str = ""
    public: bool = True
    has_archive: bool = True
    archive_slug: str = ""

    def to_content_type(self) -> ContentType:
        return ContentType(
            identifier=self.identifier,
            singular_label=self.singular_label,
            plural_label=self.plural_label or f"{self.singular_label}s",
            public=self.public,
            has_archive=self.has_archive,
            archive_slug=self.archive_slug,
        )


class ArchivePagesConfig(BaseModel):
    """Top-level configuration model."""

    site: SiteSectionConfig = Field(default_factory=SiteSectionConfig)
    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)
    archive: ArchiveSectionConfig = Field(default_factory=ArchiveSectionConfig)
    types: list[TypeConfig] = Field(default_factory=list)
    updater: UpdaterConfig = Field(default_factory=UpdaterConfig)

    @property
    def store_path(self) -> Path:
        return Path(self.store.directory).expanduser()

    def content_types(self) -> list[ContentType]:
        return [t.to_content_type() for t in self.types]


def load_config(path: str | Path | None = None) -> ArchivePagesConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .archive-pages.toml in CWD
    3. ~/.config/archive-pages/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged ArchivePagesConfig.
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

    config = ArchivePagesConfig.model_validate(data) if data else ArchivePagesConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: ArchivePagesConfig, **cli_kwargs: object) -> ArchivePagesConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values keyed as ``<section>_<field>``
            (e.g., ``store_directory``, ``site_base_url``).

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "site_base_url": ("site", "base_url"),
        "site_page_for_posts": ("site", "page_for_posts"),
        "store_directory": ("store", "directory"),
        "archive_capability": ("archive", "capability"),
        "updater_enabled": ("updater", "enabled"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return ArchivePagesConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: ArchivePagesConfig) -> ArchivePagesConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "ARCHIVE_PAGES_BASE_URL": ("site", "base_url"),
        "ARCHIVE_PAGES_STORE_DIR": ("store", "directory"),
        "ARCHIVE_PAGES_CAPABILITY": ("archive", "capability"),
        "ARCHIVE_PAGES_UPDATE_REPO": ("updater", "repo"),
        "ARCHIVE_PAGES_GITHUB_TOKEN": ("updater", "access_token"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    posts_raw = os.environ.get("ARCHIVE_PAGES_PAGE_FOR_POSTS")
    if posts_raw is not None:
        try:
            data["site"]["page_for_posts"] = int(posts_raw)
        except ValueError:
            logger.warning("Ignoring non-numeric ARCHIVE_PAGES_PAGE_FOR_POSTS=%r", posts_raw)
    enabled_raw = os.environ.get("ARCHIVE_PAGES_UPDATER_ENABLED")
    if enabled_raw is not None:
        data["updater"]["enabled"] = enabled_raw.lower() in ("true", "1", "yes")

    return ArchivePagesConfig.model_validate(data)
