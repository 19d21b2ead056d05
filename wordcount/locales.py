"""Localized strings for status text, commands and option labels.

To add a language, add a dict with the same keys as ``EN`` and register it
in ``LOCALES`` under its BCP-47 tag.
"""

import os
from typing import Any

EN: dict[str, Any] = {
    # Default values
    "default_preset_name": "New preset",
    "unnamed_preset": "Unnamed",
    "new_preset_name": "Preset {n}",

    # Commands
    "command_activate_preset": "Switch to {name}",

    # Status line
    "status_no_preset": "No preset",
    "status_no_metrics": "No metrics enabled",
    "status_tooltip_single": "Preset: {name}",
    "status_tooltip_cycle": "Active preset: {name} (click to cycle)",

    # Metric labels, keyed by visibility flag
    "status": {
        "show_words_with_spaces": "Words: {value}",
        "show_chars_with_spaces": "Chars: {value}",
        "show_chars_without_spaces": "Chars (no spaces): {value}",
        "show_pages": "Pages: {value}",
        "show_lines": "Lines: {value}",
        "show_paragraphs": "Paras: {value}",
        "show_markdown_links": "MD Links: {value}",
        "show_wiki_links": "Wikilinks: {value}",
        "show_citekeys": "Citekeys: {value}",
    },

    # Option labels and hints, keyed by preset attribute
    "options": {
        "name": ("Name", "Shown in the status bar and the switch command"),
        "words_per_page": ("Words per page", "Used to compute the number of pages"),
        "show_words_with_spaces": ("Words", "Counts words, based on the advanced settings"),
        "show_chars_with_spaces": (
            "Characters (with spaces)",
            "Counts characters and spaces, based on the advanced settings",
        ),
        "show_chars_without_spaces": (
            "Characters (without spaces)",
            "Counts characters, ignores spaces, based on the advanced settings",
        ),
        "show_pages": ("Pages", "Counts pages, based on the number of words per page"),
        "show_lines": ("Lines", "Counts lines, including blank lines"),
        "show_paragraphs": ("Paragraphs", "Counts blocks of text, excluding blank lines"),
        "show_markdown_links": ("Markdown links", "Counts [label](url) and (url)[label] links"),
        "show_wiki_links": ("Wikilinks", "Counts [[wiki]] and [[wiki|label]] links"),
        "show_citekeys": ("Citekeys", "Counts [@citekey] references"),
        "count_md_links_as_words": (
            "Count links display text",
            "On: only the label of [label](url) is counted",
        ),
        "keep_md_link_targets": (
            "Count link targets",
            "On, with display text off: label and url are both counted",
        ),
        "ignore_wiki_links": ("Ignore wikilinks", "On: wikilinks are ignored"),
        "count_wiki_link_display_text": (
            "Count wikilinks display text",
            "On: only the label of [[wiki|label]] is counted",
        ),
        "count_citekeys_as_words": ("Count citekeys", "On: [@doe2020] counts as doe2020"),
        "ignore_comments": ("Ignore comments", "On: %% ... %% and <!-- ... --> are ignored"),
    },
}

LOCALES: dict[str, dict[str, Any]] = {
    "en": EN,
}


def _normalize_tag(tag: str) -> str:
    """'en_US.UTF-8' -> 'en-us'."""
    return tag.split(".", 1)[0].replace("_", "-").lower()


def resolve_locale(tag: str | None = None) -> dict[str, Any]:
    """Resolve a locale table: full tag, then base language, then English."""
    if tag is None:
        tag = os.environ.get("LANG", "en")
    tag = _normalize_tag(tag)
    return LOCALES.get(tag) or LOCALES.get(tag.split("-", 1)[0]) or EN
