"""Configurable word, character, page and link metrics for Markdown notes.

Usage:
    from wordcount import Preset, compute_metrics

    metrics = compute_metrics(text, Preset(count_citekeys_as_words=True))
    print(metrics.words_with_spaces, metrics.pages)
"""

from .metrics import Metrics, compute_metrics
from .preprocess import Preprocessor, preprocess
from .preset import MarkdownLinkMode, Preset, WikiLinkMode, default_preset

__all__ = [
    "MarkdownLinkMode",
    "Metrics",
    "Preprocessor",
    "Preset",
    "WikiLinkMode",
    "compute_metrics",
    "default_preset",
    "preprocess",
]
