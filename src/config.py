"""Unified configuration loaded from .sitesync.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.

The only input that changes behavior materially is whether usable
remote-store credentials are present.  Without them the content layer
activates in local-only mode; a missing or broken config file is never
fatal.
"""

from __future__ import annotations

import logging
import os
import tomllib
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from sitesync.sync.policy import GroupPolicy

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sitesync.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "sitesync" / "config.toml"

# Project ids shipped in sample env files; treated as "not configured".
PLACEHOLDER_PROJECT_IDS = frozenset({"", "demo-project", "your-project-id"})


class StoreBackend(StrEnum):
    """Which remote store adapter to build."""

    AUTO = "auto"
    FIRESTORE = "firestore"
    JSON = "json"
    MEMORY = "memory"
    NONE = "none"


class StoreSectionConfig(BaseModel):
    """[store] section."""

    backend: StoreBackend = StoreBackend.AUTO
    project_id: str = ""
    database: str = "(default)"
    credentials_file: str = ""
    json_path: str = ""

    @property
    def is_firestore_configured(self) -> bool:
        return self.project_id not in PLACEHOLDER_PROJECT_IDS

    @property
    def is_configured(self) -> bool:
        """True when the selected backend has what it needs to start."""
        if self.backend == StoreBackend.NONE:
            return False
        if self.backend == StoreBackend.MEMORY:
            return True
        if self.backend == StoreBackend.JSON:
            return bool(self.json_path)
        if self.backend == StoreBackend.FIRESTORE:
            return self.is_firestore_configured
        return self.is_firestore_configured or bool(self.json_path)


class SyncSectionConfig(BaseModel):
    """[sync] section: per-group policy overrides keyed by group name."""

    groups: dict[str, GroupPolicy] = Field(default_factory=dict)


class StateSectionConfig(BaseModel):
    """[state] section."""

    directory: str = "."


class SiteSyncConfig(BaseModel):
    """Top-level configuration."""

    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)
    sync: SyncSectionConfig = Field(default_factory=SyncSectionConfig)
    state: StateSectionConfig = Field(default_factory=StateSectionConfig)

    @property
    def state_dir(self) -> Path:
        return Path(self.state.directory).expanduser()


def load_config(path: str | Path | None = None) -> SiteSyncConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .sitesync.toml in CWD
    3. ~/.config/sitesync/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SiteSyncConfig.
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
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    try:
        config = SiteSyncConfig.model_validate(data) if data else SiteSyncConfig()
    except ValueError as exc:
        logger.warning("Invalid configuration, using defaults: %s", exc)
        config = SiteSyncConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SiteSyncConfig, **cli_kwargs: object) -> SiteSyncConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "backend": ("store", "backend"),
        "project_id": ("store", "project_id"),
        "json_path": ("store", "json_path"),
        "state_dir": ("state", "directory"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = str(value)

    return SiteSyncConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiteSyncConfig) -> SiteSyncConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SITESYNC_STORE_BACKEND": ("store", "backend"),
        "FIREBASE_PROJECT_ID": ("store", "project_id"),
        "FIREBASE_DATABASE": ("store", "database"),
        "GOOGLE_APPLICATION_CREDENTIALS": ("store", "credentials_file"),
        "SITESYNC_STORE_PATH": ("store", "json_path"),
        "SITESYNC_STATE_DIR": ("state", "directory"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value.strip()

    try:
        return SiteSyncConfig.model_validate(data)
    except ValueError as exc:
        logger.warning("Ignoring invalid environment overrides: %s", exc)
        return config
