"""Settings for report defaults, read from settings.yaml files.

Three scopes, later overriding earlier:
- User global (~/.unused-projects/settings.yaml)
- Project (.unused-projects/settings.yaml)
- Local (.unused-projects/settings.local.yaml)

Command-line options override all of them.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

logger = logging.getLogger(__name__)

SETTINGS_DIR_NAME = ".unused-projects"


class ReportSettings(BaseModel):
    """Defaults for the report command."""

    status: str = Field("disabled", description="Comma-separated statuses to show")
    subs: bool = Field(False, description="List sub-modules under their project")
    hide_modules: bool = Field(False, description="Hide solo modules")
    format: str = Field("table", description="Output format")
    fields: str = Field("project,display_name,status,version,path", description="Comma-separated output fields")


class InventorySettings(BaseModel):
    """Where extensions are read from."""

    root: str | None = Field(None, description="Site root to scan for .info.yml files")
    manifest: str | None = Field(None, description="YAML/JSON manifest listing extensions")
    enabled_config: str | None = Field(None, description="core.extension.yml listing enabled extensions")


class Settings(BaseModel):
    """Complete settings file."""

    report: ReportSettings = Field(default_factory=ReportSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)


class SettingsManager:
    """Reads settings across user/project/local scopes."""

    def __init__(self, settings_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            settings_dir: Directory for project/local settings (for testing).
                          If None, uses .unused-projects in current directory.
            user_dir: Directory for user settings (for testing).
                      If None, uses ~/.unused-projects.
        """
        if settings_dir is None:
            settings_dir = Path(SETTINGS_DIR_NAME)
        if user_dir is None:
            user_dir = Path.home() / SETTINGS_DIR_NAME

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = settings_dir / "settings.yaml"
        self.local_settings_file = settings_dir / "settings.local.yaml"

    def get_settings(self) -> Settings:
        """Get validated settings merged from every valid scope."""
        return Settings.model_validate(self.get_merged_settings())

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings
        3. Local settings

        A scope that fails validation is skipped; the others still apply.
        """
        merged: dict[str, Any] = {}
        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            data = self._read_settings(path)
            if data:
                merged = self._deep_merge(merged, data)
        return merged

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Returns:
            Settings dict or None if the file doesn't exist or can't be parsed
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping")
            return None

        try:
            Settings.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid settings in {path}: {e}")
            return None
        return data

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries, overlay taking precedence."""
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
