"""
Priority classification from urgency / importance vocabulary.
"""

import logging
import re
from typing import Optional

from .config import ExtractorConfig
from .models import Priority, PriorityResult
from .patterns import PatternSet, compile_patterns

logger = logging.getLogger(__name__)


def _strip_vocabulary(text: str, pattern: re.Pattern) -> str:
    """Remove every match and tidy the punctuation the removal leaves behind."""
    text = pattern.sub(" ", text)
    text = re.sub(r"\s+([,:;])", r"\1", text)
    text = re.sub(r"([,:;\-])(?:\s*[,:;\-])+", r"\1", text)
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"^\s*[,:\-]\s*", "", text)
    text = re.sub(r"\s*[,:;\-]\s*$", "", text)
    return text.strip()


def classify_priority(fragment: str, patterns: PatternSet) -> PriorityResult:
    """Classify a fragment and strip the words that decided it.

    Urgent vocabulary is checked first, so a fragment carrying both urgent and
    important words is urgent. Matching is case-insensitive, whole words and
    phrases only, and treats е/ё alike.
    """
    for priority, pattern in (
        (Priority.URGENT, patterns.urgent),
        (Priority.IMPORTANT, patterns.important),
    ):
        if pattern.search(fragment):
            cleaned = _strip_vocabulary(fragment, pattern)
            logger.debug(f"Priority {priority.label} for {fragment!r}")
            return PriorityResult(priority, cleaned)

    return PriorityResult(Priority.NORMAL, fragment)


class PriorityClassifier:
    """Priority classification bound to a vocabulary."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        config = config or ExtractorConfig()
        self.patterns = compile_patterns(config.vocabulary)

    def classify(self, fragment: str) -> PriorityResult:
        return classify_priority(fragment, self.patterns)
