"""Preset management: activation, cycling, editing and metric computation."""

import logging
from typing import Any

from .commands import CommandRegistry
from .config import Config, PresetValidationError, parse_option_value
from .locales import resolve_locale
from .metrics import Metrics, compute_metrics
from .preset import Preset, default_preset
from .state import State
from .status import render_status, render_tooltip

logger = logging.getLogger(__name__)


class PresetManager:
    """Owns the presets, the active selection and the command registry."""

    def __init__(self, config: Config, state: State, locale: dict[str, Any] | None = None):
        self.config = config
        self.state = state
        self.locale = locale or resolve_locale(config.locale_tag)
        self.commands = CommandRegistry(self.locale)

        self._ensure_presets()
        self.refresh_commands()

    def _ensure_presets(self) -> None:
        """Make sure at least one preset exists and the active id is valid."""
        if not self.config.presets:
            first = self.config.add_preset(default_preset(name=self.locale["default_preset_name"]))
            self.state.set_active_preset(first.id)
            logger.info(f"Created default preset {first.id}")

        if self.get_active_preset() is None:
            fallback = self.config.presets[0]
            logger.info(f"Active preset missing; falling back to {fallback.name!r}")
            self.state.set_active_preset(fallback.id)

    def _activation_callback(self, preset: Preset):
        preset_id = preset.id
        return lambda: self.activate_preset(preset_id)

    def refresh_commands(self) -> None:
        """Sync the command registry with the stored presets."""
        self.commands.refresh(self.config.presets, self._activation_callback)

    @property
    def presets(self) -> list[Preset]:
        return self.config.presets

    def get_active_preset(self) -> Preset | None:
        """Get the active preset, or None if the stored id is stale."""
        active_id = self.state.active_preset_id
        for preset in self.config.presets:
            if preset.id == active_id:
                return preset
        return None

    def activate_preset(self, preset_id: str) -> Preset:
        """Make a preset active."""
        preset = self.config.get_preset(preset_id)
        self.state.set_active_preset(preset.id)
        return preset

    def cycle_preset(self) -> Preset:
        """Activate the next preset, wrapping around; no-op with one preset."""
        presets = self.config.presets
        current = self.get_active_preset()
        if len(presets) <= 1 or current is None:
            return current or presets[0]

        idx = next(i for i, p in enumerate(presets) if p.id == current.id)
        return self.activate_preset(presets[(idx + 1) % len(presets)].id)

    def add_preset(self, name: str | None = None, **options: Any) -> Preset:
        """Add a preset with default settings, named "Preset N" by default."""
        if not name:
            name = self.locale["new_preset_name"].format(n=len(self.config.presets) + 1)
        preset = self.config.add_preset(default_preset(name=name, **options))
        self.refresh_commands()
        return preset

    def remove_preset(self, preset_id: str) -> Preset:
        """Remove a preset. The last remaining preset cannot be removed.

        Raises:
            PresetValidationError: If preset_id is the only preset
        """
        self.config.get_preset(preset_id)
        if len(self.config.presets) <= 1:
            raise PresetValidationError("Cannot delete the only preset")

        removed = self.config.remove_preset(preset_id)
        self.commands.remove(preset_id)
        if self.state.active_preset_id == preset_id:
            self.state.set_active_preset(self.config.presets[0].id)
        self.refresh_commands()
        return removed

    def rename_preset(self, preset_id: str, name: str) -> Preset:
        """Rename a preset; blank names become "Unnamed"."""
        name = name.strip() or self.locale["unnamed_preset"]
        preset = self.config.update_preset(preset_id, name=name)
        self.refresh_commands()
        return preset

    def set_option(self, preset_id: str, option: str, value: Any) -> Preset:
        """Set one preset option, parsing textual values.

        Raises:
            PresetValidationError: If the option or value is invalid
        """
        if option == "name":
            return self.rename_preset(preset_id, str(value))
        value = parse_option_value(option, str(value))
        return self.config.update_preset(preset_id, **{option: value})

    def compute(self, text: str, preset_id: str | None = None) -> Metrics:
        """Compute metrics with the given preset, or the active one."""
        preset = self.config.get_preset(preset_id) if preset_id else self.get_active_preset()
        return compute_metrics(text, preset)

    def status_text(self, text: str | None) -> str:
        """Render the status line for ``text`` under the active preset.

        ``None`` means no document is open, which renders an empty line.
        """
        preset = self.get_active_preset()
        if preset is None:
            return render_status(None, None, locale=self.locale)
        metrics = compute_metrics(text, preset) if text is not None else None
        return render_status(preset, metrics, len(self.config.presets), self.locale)

    def tooltip(self) -> str:
        preset = self.get_active_preset()
        if preset is None:
            return ""
        return render_tooltip(preset, len(self.config.presets), self.locale)

    def get_status(self) -> dict[str, Any]:
        """Get a status summary."""
        active = self.get_active_preset()
        return {
            "active_preset": active.to_dict() if active else None,
            "presets": [{"id": p.id, "name": p.name} for p in self.config.presets],
            "commands": [{"id": c.id, "name": c.name} for c in self.commands.list_commands()],
        }


def get_preset_manager(config: Config, state: State) -> PresetManager:
    """Get a PresetManager instance."""
    return PresetManager(config, state)
