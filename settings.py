"""
settings.py

Persistent settings management for stroke markup.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/strokemarkup/settings.toml
    - macOS: ~/Library/Application Support/strokemarkup/settings.toml
    - Linux: ~/.config/strokemarkup/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from models import DEFAULT_MITER_LIMIT, DEFAULT_STROKE_WIDTH

APP_NAME = "strokemarkup"

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Parser Settings
# =============================================================================

@dataclass
class ParserSettings:
    """Stroke markup parser options.

    Instances are passed directly to the parse API; they are plain values
    and reading them touches no global state.

    Defaults:
        default_width: 1.0
        default_miter_limit: 10.0
        strict: False
    """
    default_width: float = DEFAULT_STROKE_WIDTH        # Default: 1.0 (used when width is unparsable)
    default_miter_limit: float = DEFAULT_MITER_LIMIT   # Default: 10.0
    strict: bool = False                               # Default: False (reject unexplained characters when True)


# =============================================================================
# Resource Settings
# =============================================================================

@dataclass
class ResourceSettings:
    """Resource loading settings for image brushes.

    Defaults:
        image_dir: "" (current working directory)
    """
    image_dir: str = ""  # Default: "" (relative image URIs resolve against the cwd)


# =============================================================================
# Preview Settings
# =============================================================================

@dataclass
class PreviewSettings:
    """Preview window / offscreen render settings.

    Defaults:
        markup: "ST4,LG0 0:#FF1E88E5 1:#FFD81B60,LineJoin=Round,StartCap=Round"
        width: 360
        height: 140
        background: "#FFFFFF"
    """
    markup: str = "ST4,LG0 0:#FF1E88E5 1:#FFD81B60,LineJoin=Round,StartCap=Round"
    width: int = 360            # Default: 360 pixels
    height: int = 140           # Default: 140 pixels
    background: str = "#FFFFFF"  # Default: white


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        parser: Parser options.
        resources: Resource loading settings.
        preview: Preview settings.
    """
    parser: ParserSettings = field(default_factory=ParserSettings)
    resources: ResourceSettings = field(default_factory=ResourceSettings)
    preview: PreviewSettings = field(default_factory=PreviewSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
    """

    def __init__(self, app_name: str = APP_NAME):
        self.settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)

            return self._parse_toml(data)
        except (OSError, ValueError, TypeError):
            # If file is corrupted, unreadable or holds bad values, return defaults
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # Parser section
        parser = data.get("parser", {})
        settings.parser.default_width = abs(float(parser.get("default_width", settings.parser.default_width)))
        settings.parser.default_miter_limit = abs(float(parser.get("default_miter_limit", settings.parser.default_miter_limit)))
        settings.parser.strict = bool(parser.get("strict", settings.parser.strict))

        # Resources section
        resources = data.get("resources", {})
        settings.resources.image_dir = resources.get("image_dir", settings.resources.image_dir)

        # Preview section
        preview = data.get("preview", {})
        settings.preview.markup = preview.get("markup", settings.preview.markup)
        settings.preview.width = preview.get("width", settings.preview.width)
        settings.preview.height = preview.get("height", settings.preview.height)
        settings.preview.background = preview.get("background", settings.preview.background)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        # Ensure directory exists
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        # Convert settings to TOML structure
        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "parser": {
                "default_width": s.parser.default_width,
                "default_miter_limit": s.parser.default_miter_limit,
                "strict": s.parser.strict,
            },
            "resources": {
                "image_dir": s.resources.image_dir,
            },
            "preview": {
                "markup": s.preview.markup,
                "width": s.preview.width,
                "height": s.preview.height,
                "background": s.preview.background,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_image_dir(self) -> Path:
        """Get the resolved image directory for image brushes.

        Returns:
            Path to the image directory. Falls back to the current working
            directory if the image_dir setting is empty.
        """
        if self.settings.resources.image_dir:
            return Path(self.settings.resources.image_dir)
        return Path.cwd()

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
