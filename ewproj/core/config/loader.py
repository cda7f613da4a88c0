"""
Settings loader — reads ewproj.yml into a validated Settings model.

The settings file is optional. Without one, every command runs with
the defaults (scan recursively for ``.ewp`` files).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from ewproj.core.services.locator import PROJECT_FILE_EXTENSION
from ewproj.core.services.project_watcher import DEFAULT_INTERVAL_S

logger = logging.getLogger(__name__)

# Default settings filename
SETTINGS_FILE = "ewproj.yml"


class SettingsError(Exception):
    """Raised when the settings file is unreadable or invalid."""


class ScanSettings(BaseModel):
    """How project files are discovered."""

    extension: str = PROJECT_FILE_EXTENSION
    recursive: bool = True
    exclude: list[str] = Field(default_factory=lambda: [".git"])

    @field_validator("extension")
    @classmethod
    def extension_is_dotted(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"extension must look like '.ewp', got {value!r}")
        return value


class WatchSettings(BaseModel):
    """How often watched projects are polled for changes."""

    interval: float = Field(default=DEFAULT_INTERVAL_S, gt=0)


class Settings(BaseModel):
    scan: ScanSettings = Field(default_factory=ScanSettings)
    watch: WatchSettings = Field(default_factory=WatchSettings)


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Nearest ewproj.yml in ``start_dir`` (default: cwd) or any of its parents."""
    start = (start_dir or Path.cwd()).resolve()

    # Nearest directory wins
    for directory in (start, *start.parents):
        candidate = directory / SETTINGS_FILE
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to ewproj.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Returns:
        Validated Settings model.

    Raises:
        SettingsError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_settings_file()
        if path is None:
            logger.debug("No %s found, using defaults", SETTINGS_FILE)
            return Settings()

    if not path.is_file():
        raise SettingsError(f"Settings file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid "all defaults" file
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise SettingsError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise SettingsError(f"Invalid settings: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
