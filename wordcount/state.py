"""Active preset tracking for advanced_word_count."""

import json
import logging
from pathlib import Path
from typing import Any

# Default state file location
DEFAULT_STATE_PATH = Path(__file__).parent.parent / "state.json"

logger = logging.getLogger(__name__)


class State:
    """Persists which preset is active between runs."""

    def __init__(self, state_path: Path | str | None = None):
        self.state_path = Path(state_path) if state_path else DEFAULT_STATE_PATH
        self._state: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load state from file."""
        if not self.state_path.exists():
            self._state = {}
            return

        try:
            with open(self.state_path, "r") as f:
                self._state = json.load(f)
        except json.JSONDecodeError:
            logger.error("State JSON is invalid; starting fresh.")
            self._state = {}

        if not isinstance(self._state, dict):
            logger.error("State file does not hold an object; starting fresh.")
            self._state = {}

    def save(self) -> None:
        """Save state to file."""
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.state_path, "w") as f:
            json.dump(self._state, f, indent=2)

    @property
    def active_preset_id(self) -> str:
        """Get the id of the active preset ("" when unset)."""
        return self._state.get("activePresetId", "")

    def set_active_preset(self, preset_id: str) -> None:
        """Set the active preset and persist it."""
        self._state["activePresetId"] = preset_id
        self.save()

    def get_status(self) -> dict[str, Any]:
        """Get a status summary."""
        return {"active_preset_id": self.active_preset_id}


def get_state(state_path: Path | str | None = None) -> State:
    """Get a State instance."""
    return State(state_path)
