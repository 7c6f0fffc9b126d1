"""
Transcript normalization and segmentation into task fragments.

Speech engines hand back one long, loosely punctuated string. This module
lowercases and tidies it, turns spoken transitions ("потом", "after that")
into sentence boundaries, and splits it into the fragments the rest of the
pipeline treats as one task each.
"""

import logging
import re
from typing import Optional

from .config import ExtractorConfig
from .models import Fragment
from .patterns import PatternSet, compile_patterns
from .temporal import strip_temporal
from .titlegen import clean_title, make_title, rejection_reason

logger = logging.getLogger(__name__)

# Stands in for the dot of an abbreviation ("ул.") or a numeric date ("24.02")
# while the text is split on sentence punctuation.
_SHIELD = "․"

_SENTENCE_END = re.compile(r"[.!?;]+")


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def normalize_transcript(transcript: str, patterns: PatternSet) -> str:
    """Lowercase, collapse whitespace and mark transitions as sentence ends."""
    text = re.sub(r"[\r\n]+", ". ", transcript)
    text = _squash(text).lower()
    text = patterns.transition.sub(". ", text)
    return _squash(text)


def _shield(text: str, patterns: PatternSet) -> str:
    text = patterns.abbreviation.sub(lambda m: m.group(0)[:-1] + _SHIELD, text)
    return re.sub(r"(?<=\d)\.(?=\d)", _SHIELD, text)


def _restore(text: str) -> str:
    return text.replace(_SHIELD, ".")


def _task_words(text: str, patterns: PatternSet) -> str:
    # Dates and priority words alone do not make a task
    text = strip_temporal(text, patterns)
    text = patterns.important.sub(" ", patterns.urgent.sub(" ", text))
    return make_title(text, patterns)


def _opens_new_task(tail: str, patterns: PatternSet, config: ExtractorConfig) -> bool:
    rest = _task_words(tail, patterns)
    if rejection_reason(rest, patterns, config) or len(rest.split()) < 2:
        return False
    # "в офисе", "утром", "please" finish the clause before the date
    return patterns.clause_tail.match(rest) is None


def split_on_date_markers(
    sentence: str,
    patterns: PatternSet,
    config: Optional[ExtractorConfig] = None,
) -> list[str]:
    """Start a new fragment at each date marker that sits between two tasks.

    The text before the marker must be a real task on its own, and the text
    from the marker on must read as a separate one once its dates are removed:
    at least two words that do not open with a clause tail such as "утром" or
    "in the office". "купить молоко 5 марта позвонить маме" becomes two
    fragments; "позвонить маме завтра утром" and "buy milk tomorrow please"
    stay whole.
    """
    config = config or ExtractorConfig()
    starts = sorted({
        m.start()
        for pattern in patterns.date_markers
        for m in pattern.finditer(sentence)
        if m.start() > 0
    })

    pieces = []
    last = 0
    for start in starts:
        if start <= last:
            continue
        head, tail = sentence[last:start], sentence[start:]
        if rejection_reason(_task_words(head, patterns), patterns, config) is None \
                and _opens_new_task(tail, patterns, config):
            pieces.append(head)
            last = start
    pieces.append(sentence[last:])
    return [p.strip() for p in pieces if p.strip()]


def split_long_fragment(fragment: str, patterns: PatternSet, max_chars: int) -> list[str]:
    """Break an over-long fragment on soft connectors ("и", "плюс", "and")."""
    if len(fragment) <= max_chars:
        return [fragment]
    parts = [p.strip() for p in patterns.soft_connector.split(fragment)]
    return [p for p in parts if p]


def _trim(fragment: str, patterns: PatternSet) -> str:
    fragment = clean_title(fragment)
    while True:
        stripped = clean_title(patterns.leading_filler.sub("", fragment, count=1))
        if stripped == fragment:
            return fragment
        fragment = stripped


def _drop_reason(fragment: str, patterns: PatternSet, config: ExtractorConfig) -> Optional[str]:
    if not fragment:
        return "empty"
    if patterns.filler_only.match(fragment) or patterns.closing_phrase.match(fragment):
        return "filler"
    if len(fragment) < config.min_title_chars and not patterns.short_command.match(fragment):
        return "too short"
    return None


def segment(
    transcript: str,
    patterns: PatternSet,
    config: Optional[ExtractorConfig] = None,
) -> list[Fragment]:
    """Split a raw transcript into ordered, trimmed, non-empty task fragments.

    Never raises; an empty or filler-only transcript yields an empty list.
    """
    config = config or ExtractorConfig()
    text = _shield(normalize_transcript(transcript, patterns), patterns)

    fragments: list[Fragment] = []
    for sentence in _SENTENCE_END.split(text):
        sentence = _squash(_restore(sentence))
        if not sentence:
            continue
        if patterns.filler_only.match(clean_title(sentence)):
            logger.debug(f"Dropped filler sentence {sentence!r}")
            continue
        for part in split_long_fragment(sentence, patterns, config.long_fragment_chars):
            for piece in split_on_date_markers(part, patterns, config):
                reason = _drop_reason(clean_title(piece), patterns, config)
                if reason is None:
                    reason = _drop_reason(_trim(piece, patterns), patterns, config)
                if reason:
                    logger.debug(f"Dropped fragment {piece!r} ({reason})")
                    continue
                fragments.append(_trim(piece, patterns))

    return fragments


class Segmenter:
    """Segmentation bound to a configuration."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self.patterns = compile_patterns(self.config.vocabulary)

    def segment(self, transcript: str) -> list[Fragment]:
        return segment(transcript, self.patterns, self.config)
