"""Text preprocessing for word and character counting.

The pipeline runs in a fixed order. Comments go before code and links so
their bodies never leak into the counts, images go before links so they are
never read as links, and bold is unwrapped before italic so ``***x***``
collapses cleanly.
"""

import re

from .preset import MarkdownLinkMode, Preset, WikiLinkMode

# Leading YAML block only; a later "---" is a thematic break, not frontmatter
FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

PERCENT_COMMENT_RE = re.compile(r"%%.*?%%", re.DOTALL)
HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)

CODE_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)
INLINE_CODE_RE = re.compile(r"`[^`]*`")

IMAGE_RE = re.compile(r"!\[[^\]\n]*\]\([^)\n]*\)")

MD_LINK_RE = re.compile(r"\[([^\[\]\n]*)\]\(([^)\n]*)\)")
MD_LINK_REVERSED_RE = re.compile(r"\(([^)\n]*)\)\[(?!@)([^\[\]\n]*)\]")

WIKI_LINK_RE = re.compile(r"\[\[(.*?)\]\]")
CITEKEY_RE = re.compile(r"\[@([^\]\n]+)\]")

HEADING_RE = re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE)
BOLD_RE = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
ITALIC_RE = re.compile(r"(\*|_)(?=\S)(.+?)(?<=\S)\1")
STRIKETHROUGH_RE = re.compile(r"~~(.+?)~~")
BLOCKQUOTE_RE = re.compile(r"^[ \t]*(?:>[ \t]?)+", re.MULTILINE)
TABLE_PIPE_RE = re.compile(r"\|")

# List markers are only recognised at the start of a line
CHECKBOX_MARKER_RE = re.compile(r"^([ \t]*)[-*+][ \t]+\[[ xX]\][ \t]+", re.MULTILINE)
UNORDERED_MARKER_RE = re.compile(r"^([ \t]*)[-*+][ \t]+", re.MULTILINE)
ORDERED_MARKER_RE = re.compile(r"^([ \t]*)\d+[.)][ \t]+", re.MULTILINE)

PLACEHOLDER = "•"

# (unordered/checkbox width, numbered width) per counting mode
MARKER_WIDTHS = {
    True: (2, 3),
    False: (1, 2),
}


def strip_frontmatter(text: str) -> str:
    """Remove a leading frontmatter block, if any."""
    return FRONTMATTER_RE.sub("", text, count=1)


def _display_text(inner: str) -> str:
    """[[Page|Alias]] -> Alias, [[Page]] -> Page, anchors dropped."""
    target, _, alias = inner.partition("|")
    kept = alias.strip() or target.strip()
    return kept.split("#", 1)[0].strip()


def _all_inner_text(inner: str) -> str:
    """[[Page#Heading|Alias]] -> Page Heading Alias."""
    return inner.replace("|", " ").replace("#", " ")


class Preprocessor:
    """Turn raw Markdown into buffers suitable for counting.

    Stripped constructs are replaced by a single space so the words on either
    side never fuse into one token.
    """

    def __init__(self, preset: Preset):
        self.preset = preset

    def base_buffer(self, text: str) -> str:
        """Run every transform up to, but not including, list handling."""
        if not text:
            return ""

        text = strip_frontmatter(text)

        if self.preset.ignore_comments:
            text = PERCENT_COMMENT_RE.sub(" ", text)
            text = HTML_COMMENT_RE.sub(" ", text)

        # Code is never counted
        text = CODE_FENCE_RE.sub(" ", text)
        text = INLINE_CODE_RE.sub(" ", text)

        # Images go before links so they are never counted as link labels
        text = IMAGE_RE.sub(" ", text)

        text = self._resolve_markdown_links(text)
        text = self._resolve_wiki_links(text)
        text = self._resolve_citekeys(text)

        return self._strip_decoration(text)

    def word_buffer(self, text: str) -> str:
        """Buffer for word counting: list markers removed entirely."""
        return remove_list_markers(self.base_buffer(text))

    def char_buffer(self, text: str, with_spaces: bool = True) -> str:
        """Buffer for character counting: list markers become placeholders."""
        return substitute_list_markers(self.base_buffer(text), with_spaces)

    def _resolve_markdown_links(self, text: str) -> str:
        mode = self.preset.markdown_link_mode
        if mode is MarkdownLinkMode.LABEL:
            text = MD_LINK_RE.sub(r"\1", text)
            return MD_LINK_REVERSED_RE.sub(r"\2", text)
        if mode is MarkdownLinkMode.LABEL_AND_TARGET:
            text = MD_LINK_RE.sub(r"\1 \2", text)
            return MD_LINK_REVERSED_RE.sub(r"\2 \1", text)
        text = MD_LINK_RE.sub(" ", text)
        return MD_LINK_REVERSED_RE.sub(" ", text)

    def _resolve_wiki_links(self, text: str) -> str:
        mode = self.preset.wiki_link_mode
        if mode is WikiLinkMode.STRIP:
            return WIKI_LINK_RE.sub(" ", text)
        if mode is WikiLinkMode.DISPLAY_TEXT:
            return WIKI_LINK_RE.sub(lambda m: _display_text(m.group(1)), text)
        return WIKI_LINK_RE.sub(lambda m: _all_inner_text(m.group(1)), text)

    def _resolve_citekeys(self, text: str) -> str:
        if self.preset.count_citekeys_as_words:
            return CITEKEY_RE.sub(r"\1", text)
        return CITEKEY_RE.sub(" ", text)

    def _strip_decoration(self, text: str) -> str:
        text = HEADING_RE.sub("", text)
        text = BOLD_RE.sub(r"\2", text)
        text = ITALIC_RE.sub(r"\2", text)
        text = STRIKETHROUGH_RE.sub(r"\1", text)
        text = BLOCKQUOTE_RE.sub("", text)
        return TABLE_PIPE_RE.sub(" ", text)


def remove_list_markers(text: str) -> str:
    """Drop line-leading list and checkbox markers."""
    text = CHECKBOX_MARKER_RE.sub(r"\1", text)
    text = UNORDERED_MARKER_RE.sub(r"\1", text)
    return ORDERED_MARKER_RE.sub(r"\1", text)


def substitute_list_markers(text: str, with_spaces: bool = True) -> str:
    """Replace line-leading list markers by fixed-width placeholders."""
    bullet_width, numbered_width = MARKER_WIDTHS[with_spaces]
    bullet = PLACEHOLDER * bullet_width
    numbered = PLACEHOLDER * numbered_width

    text = CHECKBOX_MARKER_RE.sub(lambda m: m.group(1) + bullet, text)
    text = UNORDERED_MARKER_RE.sub(lambda m: m.group(1) + bullet, text)
    return ORDERED_MARKER_RE.sub(lambda m: m.group(1) + numbered, text)


def preprocess(text: str, preset: Preset) -> str:
    """Return the word buffer for ``text`` under ``preset``."""
    return Preprocessor(preset).word_buffer(text)
