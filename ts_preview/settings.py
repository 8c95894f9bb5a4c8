"""Settings for the resolver and build driver.

Two optional YAML files are merged, lowest precedence first:
- User global (~/.ts-preview/settings.yaml)
- Project (<project>/.ts-preview/settings.yaml)

Environment variables (TS_PREVIEW_*) override both.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .errors import SettingsError

logger = logging.getLogger(__name__)

SETTINGS_DIR = ".ts-preview"
SETTINGS_FILE = "settings.yaml"

ENV_OVERRIDES = {
    "TS_PREVIEW_NODE_MODULES": "node_modules",
    "TS_PREVIEW_APP_DIR": "app_dir",
    "TS_PREVIEW_CDN_BASE": "cdn_base",
    "TS_PREVIEW_ENTRY_POINT": "entry_point",
    "TS_PREVIEW_MAX_WORKERS": "max_workers",
    "TS_PREVIEW_LOG_PATH": "log_path",
    "TS_PREVIEW_LOG_LEVEL": "log_level",
}


class BundlerSettings(BaseModel):
    """Effective settings for one process."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    node_modules: str = Field(default="/home/web/app/node_modules", description="Package directory in the package store")
    app_dir: str = Field(default="/home/web/app", description="Working directory for package installs")
    cdn_base: str = Field(default="https://esm.sh", description="Base URL for import map entries")
    entry_point: str = Field(default="/index.ts", description="Default build entry point")
    max_workers: int = Field(default=4, ge=1, description="Threads used to walk the module graph")
    log_path: str = Field(default="./ts-preview.log.jsonl", description="JSONL log file")
    log_level: str = Field(default="INFO", description="Root log level")


def user_settings_file() -> Path:
    return Path.home() / SETTINGS_DIR / SETTINGS_FILE


def project_settings_file(project_dir: Path | None = None) -> Path:
    return (project_dir or Path.cwd()) / SETTINGS_DIR / SETTINGS_FILE


def _read_settings(path: Path) -> dict[str, Any]:
    """Read one YAML settings file (missing file gives an empty dict)."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")

    logger.debug(f"Loaded settings from {path}")
    return data


def _env_overrides() -> dict[str, str]:
    return {field: value for key, field in ENV_OVERRIDES.items() if (value := os.environ.get(key))}


def load_settings(project_dir: Path | None = None) -> BundlerSettings:
    """Load settings from user file, project file and environment.

    Args:
        project_dir: Project root (default: current directory)

    Returns:
        BundlerSettings

    Raises:
        SettingsError: Unreadable YAML or invalid values
    """
    merged: dict[str, Any] = {}
    merged.update(_read_settings(user_settings_file()))
    merged.update(_read_settings(project_settings_file(project_dir)))
    merged.update(_env_overrides())

    try:
        return BundlerSettings.model_validate(merged)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e
