"""Status line rendering from a preset and computed metrics."""

from typing import Any

from .locales import resolve_locale
from .metrics import Metrics
from .preset import VISIBILITY_FLAGS, Preset

SEPARATOR = "  |  "

# Visibility flag -> Metrics attribute
METRIC_FOR_FLAG = {
    "show_words_with_spaces": "words_with_spaces",
    "show_chars_with_spaces": "chars_with_spaces",
    "show_chars_without_spaces": "chars_without_spaces",
    "show_pages": "pages",
    "show_lines": "lines",
    "show_paragraphs": "paragraphs",
    "show_markdown_links": "markdown_links",
    "show_wiki_links": "wiki_links",
    "show_citekeys": "citekeys",
}


def build_status_text(
    preset: Preset, metrics: Metrics, locale: dict[str, Any] | None = None
) -> str:
    """Join the labels of every visible metric; empty if none are visible."""
    locale = locale or resolve_locale()
    parts = []
    for flag in VISIBILITY_FLAGS:
        if getattr(preset, flag):
            value = getattr(metrics, METRIC_FOR_FLAG[flag])
            parts.append(locale["status"][flag].format(value=value))
    return SEPARATOR.join(parts)


def render_status(
    preset: Preset | None,
    metrics: Metrics | None,
    preset_count: int = 1,
    locale: dict[str, Any] | None = None,
) -> str:
    """Render the full status line.

    The preset name is shown as a prefix only when there is more than one
    preset to cycle through.
    """
    locale = locale or resolve_locale()
    if preset is None:
        return locale["status_no_preset"]
    if metrics is None:
        return ""

    label = f"[{preset.name}]  " if preset_count > 1 else ""
    stats = build_status_text(preset, metrics, locale)
    return label + (stats or locale["status_no_metrics"])


def render_tooltip(
    preset: Preset, preset_count: int = 1, locale: dict[str, Any] | None = None
) -> str:
    locale = locale or resolve_locale()
    key = "status_tooltip_cycle" if preset_count > 1 else "status_tooltip_single"
    return locale[key].format(name=preset.name)
