"""Configuration loading and preset storage for advanced_word_count."""

import copy
import logging
import math
import os
import yaml
from pathlib import Path
from typing import Any

from .preset import INCLUSION_FLAGS, VISIBILITY_FLAGS, Preset

logger = logging.getLogger(__name__)

# Default configuration location
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"

# Default configuration values
DEFAULT_CONFIG = {
    "locale": None,
    "presets": [],
    "watch": {
        "check_interval": 2,
    },
}

BOOLEAN_OPTIONS = set(VISIBILITY_FLAGS) | set(INCLUSION_FLAGS)


class PresetValidationError(ValueError):
    """Raised when a preset value is rejected before it reaches the counter."""


class UnknownPresetError(ValueError):
    """Raised when a preset id does not exist."""


def validate_words_per_page(value: Any) -> float:
    """Return a positive, finite words-per-page value or raise."""
    if isinstance(value, bool):
        raise PresetValidationError(f"words_per_page must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise PresetValidationError(f"words_per_page must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise PresetValidationError(f"words_per_page must be positive and finite, got {value!r}")
    return int(number) if number.is_integer() else number


def validate_preset(preset: Preset) -> Preset:
    """Check a preset and normalize its words-per-page value."""
    words_per_page = validate_words_per_page(preset.words_per_page)
    for option in BOOLEAN_OPTIONS:
        if not isinstance(getattr(preset, option), bool):
            raise PresetValidationError(f"{option} must be true or false")
    return preset.replace(words_per_page=words_per_page)


def parse_option_value(option: str, raw: str) -> Any:
    """Convert a textual option value (CLI, query string) to its type."""
    if option == "words_per_page":
        return validate_words_per_page(raw)
    if option == "name":
        return raw
    if option in BOOLEAN_OPTIONS:
        lowered = str(raw).strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise PresetValidationError(f"{option} expects on/off, got {raw!r}")
    raise PresetValidationError(f"Unknown option: {option}")


class Config:
    """Configuration manager for advanced_word_count."""

    def __init__(self, config_path: Path | str | None = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: dict[str, Any] = {}
        self._presets: list[Preset] = []
        self.load()

    def load(self) -> None:
        """Load configuration from file, merging with defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path.exists():
            with open(self.config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
            self._deep_merge(self._config, user_config)

        self._presets = []
        missing_ids = False
        for data in self._config.get("presets") or []:
            if not isinstance(data, dict):
                logger.warning(f"Skipping malformed preset entry: {data!r}")
                continue
            try:
                self._presets.append(validate_preset(Preset.from_dict(data)))
            except (PresetValidationError, TypeError) as e:
                logger.warning(f"Skipping invalid preset {data.get('name', '?')!r}: {e}")
                continue
            missing_ids = missing_ids or "id" not in data

        # Generated ids must be persisted or they change on every load
        if missing_ids:
            self.save()

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Deep merge override into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def save(self) -> None:
        """Save current configuration to file."""
        self._config["presets"] = [p.to_dict() for p in self._presets]
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.dump(self._config, f, default_flow_style=False, sort_keys=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated key path."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key path."""
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    @property
    def presets(self) -> list[Preset]:
        """Get the stored presets, in display order."""
        return list(self._presets)

    @property
    def locale_tag(self) -> str | None:
        """Get the configured locale tag (None means use $LANG)."""
        return self.get("locale") or os.environ.get("LANG")

    @property
    def watch_settings(self) -> dict[str, Any]:
        """Get watch daemon settings."""
        return self.get("watch", {})

    def get_preset(self, preset_id: str) -> Preset:
        """Get a preset by id."""
        for preset in self._presets:
            if preset.id == preset_id:
                return preset
        raise UnknownPresetError(f"Unknown preset: {preset_id}")

    def add_preset(self, preset: Preset) -> Preset:
        """Validate and append a preset."""
        preset = validate_preset(preset)
        self._presets.append(preset)
        self.save()
        return preset

    def update_preset(self, preset_id: str, **changes: Any) -> Preset:
        """Replace attributes of a stored preset."""
        current = self.get_preset(preset_id)
        updated = validate_preset(current.replace(**changes))
        self._presets = [updated if p.id == preset_id else p for p in self._presets]
        self.save()
        return updated

    def remove_preset(self, preset_id: str) -> Preset:
        """Remove a preset by id."""
        removed = self.get_preset(preset_id)
        self._presets = [p for p in self._presets if p.id != preset_id]
        self.save()
        return removed


def get_config(config_path: Path | str | None = None) -> Config:
    """Get a Config instance."""
    return Config(config_path)
