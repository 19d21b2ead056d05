"""Shared test fixtures for advanced_word_count tests."""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def temp_state_file():
    """Create a temporary state file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        f.write('{}')
        temp_path = Path(f.name)
    yield temp_path
    temp_path.unlink(missing_ok=True)


@pytest.fixture
def temp_config_file():
    """Create a temporary config file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write('')
        temp_path = Path(f.name)
    yield temp_path
    temp_path.unlink(missing_ok=True)


@pytest.fixture
def temp_note(tmp_path):
    """Create a temporary Markdown note."""
    note = tmp_path / "note.md"
    note.write_text("---\ntitle: Draft\n---\n# Heading\n\nSome **bold** words here.\n")
    return note


def write_config(path: Path, presets: list[dict[str, Any]], **extra: Any) -> None:
    """Helper to write a config file holding the given presets."""
    data = {"presets": presets, **extra}
    path.write_text(yaml.dump(data, sort_keys=False))


def write_state(path: Path, active_preset_id: str) -> None:
    """Helper to write a state file with an active preset."""
    path.write_text(json.dumps({"activePresetId": active_preset_id}))


def create_preset_data(
    preset_id: str,
    name: str,
    words_per_page: float = 250,
    **flags: bool,
) -> dict[str, Any]:
    """Helper to create persisted preset data (camelCase keys)."""
    return {"id": preset_id, "name": name, "wordsPerPage": words_per_page, **flags}


@pytest.fixture
def three_presets(temp_config_file, temp_state_file):
    """Config and state with three presets, the first one active."""
    write_config(
        temp_config_file,
        [
            create_preset_data("a", "Draft"),
            create_preset_data("b", "Thesis", 300, countCitekeysAsWords=True),
            create_preset_data("c", "Blog", 500, showWordsWithSpaces=False),
        ],
    )
    write_state(temp_state_file, "a")
    return temp_config_file, temp_state_file
