"""
Address extraction.

Two forms are recognised, in order:

    1. an explicit prefix   "по адресу ленина 5", "address: 12 main street"
    2. a street-type marker "улица ленина 5", "ул. мира 3", "avenue foch 12"

Either way the address runs to the next comma, semicolon or line break.
"""

import logging
import re
from typing import Optional

from .config import ExtractorConfig
from .models import AddressResult
from .patterns import PatternSet, compile_patterns

logger = logging.getLogger(__name__)


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _cleanup_address(text: str) -> str:
    return _squash(text).strip(" .,:;-")


def _cut(text: str, match: re.Match) -> str:
    remaining = text[:match.start()] + " " + text[match.end():]
    remaining = re.sub(r"\s+([,;])", r"\1", remaining)
    return _squash(remaining).strip(" ,;")


def extract_address(fragment: str, patterns: PatternSet) -> AddressResult:
    """Pull an address out of a fragment.

    Returns:
        AddressResult(address, remaining_text). Without a match the address is
        None and the text is only whitespace-normalized.
    """
    text = _squash(fragment)
    if not text:
        return AddressResult(None, "")

    for pattern in (patterns.address_prefix, patterns.street):
        m = pattern.search(text)
        if not m:
            continue
        address = _cleanup_address(m.group(1))
        logger.debug(f"Address {address!r} in {fragment!r}")
        return AddressResult(address or None, _cut(text, m))

    return AddressResult(None, text)


class AddressExtractor:
    """Address extraction bound to a vocabulary."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        config = config or ExtractorConfig()
        self.patterns = compile_patterns(config.vocabulary)

    def extract(self, fragment: str) -> AddressResult:
        return extract_address(fragment, self.patterns)
