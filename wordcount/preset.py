"""Preset model: display flags, inclusion policies and words-per-page."""

import uuid
import dataclasses
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any


class WikiLinkMode(Enum):
    """How [[wikilinks]] contribute to word and character counts."""

    STRIP = "strip"
    DISPLAY_TEXT = "display_text"
    COUNT_ALL = "count_all"


class MarkdownLinkMode(Enum):
    """How [label](target) links contribute to word and character counts."""

    STRIP = "strip"
    LABEL = "label"
    LABEL_AND_TARGET = "label_and_target"


# Persisted key (camelCase, as written by the Obsidian plugin) -> attribute
PERSISTED_KEYS = {
    "id": "id",
    "name": "name",
    "wordsPerPage": "words_per_page",
    "showWordsWithSpaces": "show_words_with_spaces",
    "showCharsWithSpaces": "show_chars_with_spaces",
    "showCharsWithoutSpaces": "show_chars_without_spaces",
    "showPages": "show_pages",
    "showLines": "show_lines",
    "showParagraphs": "show_paragraphs",
    "showMarkdownLinks": "show_markdown_links",
    "showWikiLinks": "show_wiki_links",
    "showCitekeys": "show_citekeys",
    "countMdLinksAsWords": "count_md_links_as_words",
    "keepMdLinkTargets": "keep_md_link_targets",
    "countWikiLinkDisplayText": "count_wiki_link_display_text",
    "ignoreWikiLinks": "ignore_wiki_links",
    "countCitekeysAsWords": "count_citekeys_as_words",
    "ignoreComments": "ignore_comments",
}

# Older settings files used showWords for the word metric
LEGACY_KEYS = {"showWords": "show_words_with_spaces"}

VISIBILITY_FLAGS = [
    "show_words_with_spaces",
    "show_chars_with_spaces",
    "show_chars_without_spaces",
    "show_pages",
    "show_lines",
    "show_paragraphs",
    "show_markdown_links",
    "show_wiki_links",
    "show_citekeys",
]

INCLUSION_FLAGS = [
    "count_md_links_as_words",
    "keep_md_link_targets",
    "ignore_wiki_links",
    "count_wiki_link_display_text",
    "count_citekeys_as_words",
    "ignore_comments",
]


def new_preset_id() -> str:
    """Generate a fresh preset identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Preset:
    """A named bundle of visibility flags, inclusion policies and a page divisor.

    Presets are immutable; edits go through ``replace()`` so a computation
    always sees one consistent configuration.
    """

    id: str = field(default_factory=new_preset_id)
    name: str = "New preset"

    words_per_page: float = 250

    # Metric visibility (display only, never affects computed values)
    show_words_with_spaces: bool = True
    show_chars_with_spaces: bool = False
    show_chars_without_spaces: bool = False
    show_pages: bool = True
    show_lines: bool = False
    show_paragraphs: bool = False
    show_markdown_links: bool = False
    show_wiki_links: bool = False
    show_citekeys: bool = False

    # Word and character count inclusions
    count_md_links_as_words: bool = False
    keep_md_link_targets: bool = False
    ignore_wiki_links: bool = False
    count_wiki_link_display_text: bool = False
    count_citekeys_as_words: bool = False
    ignore_comments: bool = True

    @property
    def wiki_link_mode(self) -> WikiLinkMode:
        """Resolve the wikilink flags; ignore_wiki_links always wins."""
        if self.ignore_wiki_links:
            return WikiLinkMode.STRIP
        if self.count_wiki_link_display_text:
            return WikiLinkMode.DISPLAY_TEXT
        return WikiLinkMode.COUNT_ALL

    @property
    def markdown_link_mode(self) -> MarkdownLinkMode:
        """Resolve the Markdown link flags."""
        if self.count_md_links_as_words:
            return MarkdownLinkMode.LABEL
        if self.keep_md_link_targets:
            return MarkdownLinkMode.LABEL_AND_TARGET
        return MarkdownLinkMode.STRIP

    def replace(self, **changes: Any) -> "Preset":
        """Return a copy with the given attributes changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the persisted camelCase keys."""
        values = asdict(self)
        return {key: values[attr] for key, attr in PERSISTED_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Preset":
        """Build a preset from persisted data.

        Accepts camelCase keys, snake_case attribute names and the legacy
        ``showWords`` key. Unknown keys are ignored.
        """
        attributes = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            attr = PERSISTED_KEYS.get(key) or LEGACY_KEYS.get(key)
            if attr is None and key in attributes:
                attr = key
            if attr is None:
                continue
            kwargs[attr] = value
        return cls(**kwargs)


def default_preset(**overrides: Any) -> Preset:
    """Create a preset with default settings and a fresh id."""
    return Preset(**overrides)
