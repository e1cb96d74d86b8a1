"""Configuration persistence manager for the photo coloring converter.

This module handles loading and saving of the last-used processing
settings to/from JSON files.
"""

import json
from dataclasses import asdict, fields
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from colorpage.errors import InvalidSettingsError
from colorpage.models import CONFIG_FILE, ProcessingSettings


class ConfigManager:
    """Handles loading and saving of processing settings."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.photo_coloring_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> ProcessingSettings:
        """Load settings from file, returning defaults if not found.

        Returns:
            ProcessingSettings with loaded or default values

        AIDEV-NOTE: Each key is validated on its own, so one bad value
        falls back to its default without discarding the rest.
        """
        defaults = ProcessingSettings()
        if not self.config_path.exists():
            return defaults

        try:
            with open(self.config_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Warning: Could not load config file: {e}")
            return defaults

        if not isinstance(data, dict):
            print(f"Warning: Ignoring config file {self.config_path}: not a JSON object")
            return defaults

        values = {}
        for field_info in fields(ProcessingSettings):
            if field_info.name not in data:
                continue
            default = getattr(defaults, field_info.name)
            try:
                value = _coerce(default, data[field_info.name])
                ProcessingSettings(**{field_info.name: value})
            except (InvalidSettingsError, ValueError, TypeError, OverflowError) as e:
                print(f"Warning: Ignoring config value {field_info.name!r}: {e}")
                continue
            values[field_info.name] = value

        return ProcessingSettings(**values)

    def save(self, settings: ProcessingSettings) -> Tuple[bool, Optional[str]]:
        """Save settings to file.

        Args:
            settings: ProcessingSettings to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(settings).items()
        }
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except OSError as e:
            return False, str(e)

    def reset(self) -> Tuple[bool, Optional[str]]:
        """Delete the saved settings file so defaults apply again."""
        try:
            self.config_path.unlink(missing_ok=True)
            return True, None
        except OSError as e:
            return False, str(e)


def _coerce(default, raw):
    """Convert a JSON value to the type of the matching default."""
    if isinstance(default, Enum):
        return type(default)(raw)
    if isinstance(default, int):
        if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw != int(raw):
            raise TypeError(f"expected an integer, got {raw!r}")
        return int(raw)
    if isinstance(default, float):
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise TypeError(f"expected a number, got {raw!r}")
        return float(raw)
    return raw
