"""
Task title cleanup and the "is this a real task" filter.

Turns what is left of a fragment, once dates, priority words and the address
have been cut out, into a display title, and rejects leftovers that are not
worth a task.
"""

import re
from typing import Optional

from .config import ExtractorConfig
from .patterns import PatternSet


def clean_title(text: str) -> str:
    """Collapse whitespace and trim stray punctuation at both ends."""
    text = re.sub(r"\s+", " ", text).strip()
    return text.strip(" ,.;:-—")


def strip_spoken_prefixes(text: str, patterns: PatternSet) -> str:
    """Drop spoken openers ("ну", "well") and request prefixes ("надо", "need to").

    Repeats until nothing changes, so "ну короче надо купить" becomes "купить".
    """
    while True:
        stripped = patterns.leading_filler.sub("", text, count=1)
        stripped = patterns.request_prefix.sub("", stripped, count=1)
        stripped = clean_title(stripped)
        if stripped == text:
            return text
        text = stripped


def capitalize_first(text: str) -> str:
    """Uppercase the first character only; the rest is left as dictated."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def make_title(text: str, patterns: PatternSet) -> str:
    """Build a display title from a cleaned fragment."""
    return capitalize_first(strip_spoken_prefixes(clean_title(text), patterns))


def rejection_reason(title: str, patterns: PatternSet, config: ExtractorConfig) -> Optional[str]:
    """Why a title is not a real task, or None when it is.

    Rejects empty titles, titles shorter than ``min_title_chars`` that do not
    start with a short command, filler-only and closing phrases, and titles with
    fewer than ``min_title_letters`` letters.
    """
    text = clean_title(title)
    if not text:
        return "empty"
    if len(text) < config.min_title_chars and not patterns.short_command.match(text):
        return "too short"
    if patterns.filler_only.match(text) or patterns.closing_phrase.match(text):
        return "filler"
    letters = sum(1 for ch in text if ch.isalpha())
    if letters < config.min_title_letters:
        return "too few letters"
    return None


def is_real_task(title: str, patterns: PatternSet, config: ExtractorConfig) -> bool:
    return rejection_reason(title, patterns, config) is None
