"""Metric extraction over preprocessed buffers and raw text."""

import math
import re
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from .preprocess import (
    CITEKEY_RE,
    IMAGE_RE,
    MD_LINK_RE,
    MD_LINK_REVERSED_RE,
    WIKI_LINK_RE,
    Preprocessor,
    remove_list_markers,
    strip_frontmatter,
    substitute_list_markers,
)
from .preset import Preset

# A token is a word only if it carries at least one letter or digit
WORD_CHAR_RE = re.compile(r"[^\W_]")
PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")
WHITESPACE_RE = re.compile(r"\s")


@dataclass(frozen=True)
class Metrics:
    """Result of one metrics computation."""

    words_with_spaces: int = 0
    chars_with_spaces: int = 0
    chars_without_spaces: int = 0
    pages: str = "0.0"
    lines: int = 0
    paragraphs: int = 0
    markdown_links: int = 0
    wiki_links: int = 0
    citekeys: int = 0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def count_words(buffer: str) -> int:
    """Count whitespace-separated tokens that contain a word character."""
    trimmed = buffer.strip()
    if not trimmed:
        return 0
    return len([w for w in trimmed.split() if WORD_CHAR_RE.search(w)])


def count_chars_with_spaces(buffer: str) -> int:
    """Count characters, ignoring newlines only."""
    return len(buffer.replace("\n", ""))


def count_chars_without_spaces(buffer: str) -> int:
    """Count characters, ignoring every kind of whitespace."""
    return len(WHITESPACE_RE.sub("", buffer))


def format_pages(words: int, words_per_page: float) -> str:
    """Format words / words_per_page with one fractional digit.

    Rounds half up. A zero, NaN or infinite divisor gives a degenerate but
    well-defined string rather than an exception.
    """
    if isinstance(words_per_page, float) and math.isnan(words_per_page):
        return "NaN"
    if words_per_page == 0:
        return "NaN" if words == 0 else "Infinity"
    if isinstance(words_per_page, float) and math.isinf(words_per_page):
        return "0.0"

    ratio = Decimal(words) / Decimal(str(words_per_page))
    # quantize needs room for every integer digit plus the fractional one
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, ratio.adjusted() + 3)
        return str(ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def count_lines(text: str) -> int:
    """Count newline-separated segments; a trailing newline adds one."""
    if not text:
        return 0
    return len(text.split("\n"))


def count_paragraphs(text: str) -> int:
    """Count blocks separated by blank lines, frontmatter excluded."""
    if not text:
        return 0
    body = strip_frontmatter(text)
    return len([b for b in PARAGRAPH_BREAK_RE.split(body) if b.strip()])


def count_markdown_links(text: str) -> int:
    """Count [label](target) and (target)[label] links, images excluded."""
    text = IMAGE_RE.sub(" ", text)
    standard = len(MD_LINK_RE.findall(text))
    # Counted forms are blanked so a reversed match cannot reuse them
    text = MD_LINK_RE.sub(" ", text)
    return standard + len(MD_LINK_REVERSED_RE.findall(text))


def count_wiki_links(text: str) -> int:
    return len(WIKI_LINK_RE.findall(text))


def count_citekeys(text: str) -> int:
    return len(CITEKEY_RE.findall(text))


def compute_metrics(raw_text: str, preset: Preset) -> Metrics:
    """Compute every metric for ``raw_text`` under ``preset``.

    Visibility flags are not consulted here; hidden metrics are computed
    anyway and filtered at display time.
    """
    preprocessor = Preprocessor(preset)
    base = preprocessor.base_buffer(raw_text)

    words = count_words(remove_list_markers(base))

    return Metrics(
        words_with_spaces=words,
        chars_with_spaces=count_chars_with_spaces(substitute_list_markers(base, with_spaces=True)),
        chars_without_spaces=count_chars_without_spaces(
            substitute_list_markers(base, with_spaces=False)
        ),
        pages=format_pages(words, preset.words_per_page),
        lines=count_lines(raw_text),
        paragraphs=count_paragraphs(raw_text),
        markdown_links=count_markdown_links(raw_text),
        wiki_links=count_wiki_links(raw_text),
        citekeys=count_citekeys(raw_text),
    )
