"""Registry of "switch to preset" commands."""

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .locales import resolve_locale
from .preset import Preset

COMMAND_PREFIX = "word-count-activate-preset-"

# A callback factory builds the action that activates a given preset
CallbackFactory = Callable[[Preset], Callable[[], Any]]


def command_id_for(preset_id: str) -> str:
    """Get the command id for a preset id."""
    return f"{COMMAND_PREFIX}{preset_id}"


@dataclass
class Command:
    """A named, invocable action."""

    id: str
    name: str
    callback: Callable[[], Any]


class CommandRegistry:
    """Maps preset ids to their activation commands.

    Unlike a global registry this one is an explicit collection owned by the
    preset manager; commands are added and removed as presets come and go.

    Usage:
        registry = CommandRegistry()
        registry.register(preset, lambda: manager.activate_preset(preset.id))
        registry.invoke(command_id_for(preset.id))
    """

    def __init__(self, locale: dict[str, Any] | None = None):
        self.locale = locale or resolve_locale()
        self._commands: dict[str, Command] = {}

    def _name_for(self, preset: Preset) -> str:
        return self.locale["command_activate_preset"].format(name=preset.name)

    def register(self, preset: Preset, callback: Callable[[], Any]) -> Command:
        """Register the command for a preset.

        Registering a preset twice keeps the existing command.
        """
        cmd_id = command_id_for(preset.id)
        if cmd_id not in self._commands:
            self._commands[cmd_id] = Command(cmd_id, self._name_for(preset), callback)
        return self._commands[cmd_id]

    def remove(self, preset_id: str) -> bool:
        """Remove a preset's command. Returns False if it was not registered."""
        return self._commands.pop(command_id_for(preset_id), None) is not None

    def refresh(self, presets: Iterable[Preset], factory: CallbackFactory) -> None:
        """Sync commands with the current presets.

        Drops commands whose preset is gone, registers new presets and
        renames commands whose preset was renamed.
        """
        presets = list(presets)
        live = {command_id_for(p.id) for p in presets}
        for cmd_id in list(self._commands):
            if cmd_id not in live:
                del self._commands[cmd_id]

        for preset in presets:
            command = self.register(preset, factory(preset))
            command.name = self._name_for(preset)

    def get(self, command_id: str) -> Command | None:
        return self._commands.get(command_id)

    def invoke(self, command_id: str) -> Any:
        """Run a command by id.

        Raises:
            ValueError: If command_id is not registered
        """
        command = self.get(command_id)
        if command is None:
            raise ValueError(f"Unknown command: {command_id}")
        return command.callback()

    def list_commands(self) -> list[Command]:
        """List registered commands in registration order."""
        return list(self._commands.values())

    def is_registered(self, preset_id: str) -> bool:
        return command_id_for(preset_id) in self._commands

    def clear(self) -> None:
        """Remove every command."""
        self._commands.clear()
