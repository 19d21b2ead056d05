"""Tests for wordcount/manager.py - Preset activation, cycling and editing."""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from wordcount.commands import command_id_for
from wordcount.config import Config, PresetValidationError, UnknownPresetError
from wordcount.locales import EN
from wordcount.manager import PresetManager
from wordcount.state import State
from tests.conftest import create_preset_data, write_config, write_state


def make_manager(config_path, state_path) -> PresetManager:
    return PresetManager(Config(config_path=config_path), State(state_path=state_path), EN)


@pytest.fixture
def manager(three_presets):
    return make_manager(*three_presets)


class TestInitialization:
    """Tests for first-run and stale-state handling."""

    def test_creates_default_preset(self, temp_config_file, temp_state_file):
        """With no presets, a default one is created and activated."""
        manager = make_manager(temp_config_file, temp_state_file)

        assert len(manager.presets) == 1
        active = manager.get_active_preset()
        assert active.name == "New preset"
        assert active.words_per_page == 250
        assert State(state_path=temp_state_file).active_preset_id == active.id

    def test_stale_active_id_falls_back_to_first(self, temp_config_file, temp_state_file):
        """An active id pointing at a deleted preset is replaced."""
        write_config(temp_config_file, [create_preset_data("a", "A"), create_preset_data("b", "B")])
        write_state(temp_state_file, "deleted")

        manager = make_manager(temp_config_file, temp_state_file)

        assert manager.get_active_preset().id == "a"

    def test_commands_registered_for_every_preset(self, manager):
        ids = [c.id for c in manager.commands.list_commands()]
        assert ids == [command_id_for("a"), command_id_for("b"), command_id_for("c")]


class TestActivation:
    """Tests for activating and cycling presets."""

    def test_activate(self, manager, three_presets):
        """Activation is persisted."""
        manager.activate_preset("b")

        assert manager.get_active_preset().name == "Thesis"
        assert State(state_path=three_presets[1]).active_preset_id == "b"

    def test_activate_unknown(self, manager):
        with pytest.raises(UnknownPresetError):
            manager.activate_preset("missing")

    def test_cycle_wraps_around(self, manager):
        """a -> b -> c -> a."""
        assert [manager.cycle_preset().id for _ in range(3)] == ["b", "c", "a"]

    def test_cycle_single_preset(self, temp_config_file, temp_state_file):
        """With one preset, cycling keeps it active."""
        manager = make_manager(temp_config_file, temp_state_file)
        only = manager.get_active_preset()

        assert manager.cycle_preset().id == only.id

    def test_command_invoke_activates(self, manager):
        """Invoking a preset's command makes it active."""
        manager.commands.invoke(command_id_for("c"))
        assert manager.get_active_preset().id == "c"


class TestEditing:
    """Tests for adding, removing, renaming and setting options."""

    def test_add_default_name(self, manager):
        """New presets are named after their position."""
        preset = manager.add_preset()

        assert preset.name == "Preset 4"
        assert manager.commands.is_registered(preset.id)

    def test_add_named(self, manager):
        preset = manager.add_preset("Essay", words_per_page=400)
        assert preset.name == "Essay"
        assert preset.words_per_page == 400

    def test_remove_only_preset_refused(self, temp_config_file, temp_state_file):
        """The last preset cannot be deleted."""
        manager = make_manager(temp_config_file, temp_state_file)
        only = manager.get_active_preset()

        with pytest.raises(PresetValidationError, match="only preset"):
            manager.remove_preset(only.id)
        assert len(manager.presets) == 1

    def test_remove_active_falls_back(self, manager):
        """Removing the active preset activates the first remaining one."""
        manager.remove_preset("a")

        assert manager.get_active_preset().id == "b"
        assert not manager.commands.is_registered("a")

    def test_remove_inactive_keeps_active(self, manager):
        manager.remove_preset("c")
        assert manager.get_active_preset().id == "a"

    def test_remove_unknown(self, manager):
        with pytest.raises(UnknownPresetError):
            manager.remove_preset("missing")

    def test_rename_updates_command(self, manager):
        """Renaming also renames the preset's command."""
        manager.rename_preset("b", "Dissertation")

        assert manager.config.get_preset("b").name == "Dissertation"
        assert manager.commands.get(command_id_for("b")).name == "Switch to Dissertation"

    def test_rename_blank(self, manager):
        """A blank name becomes Unnamed."""
        assert manager.rename_preset("b", "   ").name == "Unnamed"

    def test_set_option_parses_values(self, manager):
        """Textual values are converted to the option's type."""
        assert manager.set_option("a", "show_lines", "on").show_lines is True
        assert manager.set_option("a", "words_per_page", "300").words_per_page == 300
        assert manager.set_option("a", "name", "Renamed").name == "Renamed"

    def test_set_option_rejects_zero_words_per_page(self, manager):
        with pytest.raises(PresetValidationError):
            manager.set_option("a", "words_per_page", "0")
        assert manager.config.get_preset("a").words_per_page == 250


class TestComputation:
    """Tests for compute and status_text."""

    def test_compute_uses_active_preset(self, manager):
        """Citekeys count only under the preset that enables them."""
        text = "Hello [@doe2020]"
        assert manager.compute(text).words_with_spaces == 1
        manager.activate_preset("b")
        assert manager.compute(text).words_with_spaces == 2

    def test_compute_with_explicit_preset(self, manager):
        assert manager.compute("Hello [@doe2020]", "b").words_with_spaces == 2

    def test_status_text_shows_preset_name(self, manager):
        """With several presets, the line is prefixed by the active name."""
        assert manager.status_text("two words") == "[Draft]  Words: 2  |  Pages: 0.0"

    def test_status_text_single_preset(self, temp_config_file, temp_state_file):
        manager = make_manager(temp_config_file, temp_state_file)
        assert manager.status_text("two words") == "Words: 2  |  Pages: 0.0"

    def test_status_text_without_words(self, manager):
        """Blog hides words but still shows pages."""
        manager.activate_preset("c")
        assert manager.status_text("two words") == "[Blog]  Pages: 0.0"

    def test_status_text_no_metrics(self, manager):
        manager.set_option("a", "show_words_with_spaces", "off")
        manager.set_option("a", "show_pages", "off")
        assert manager.status_text("text") == "[Draft]  No metrics enabled"

    def test_status_text_no_document(self, manager):
        assert manager.status_text(None) == ""

    def test_tooltip(self, manager):
        assert manager.tooltip() == "Active preset: Draft (click to cycle)"

    def test_get_status(self, manager):
        status = manager.get_status()

        assert status["active_preset"]["id"] == "a"
        assert [p["name"] for p in status["presets"]] == ["Draft", "Thesis", "Blog"]
        assert status["commands"][1] == {"id": command_id_for("b"), "name": "Switch to Thesis"}
