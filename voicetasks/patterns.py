"""
Compiled regular expressions for a vocabulary.

Every stage of the pipeline works from the same `PatternSet`, built once per
vocabulary and cached. Patterns are fixed at build time, so a pattern that
fails to compile is a programming defect and surfaces immediately.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from .vocabulary import Vocabulary

# Word edges that also work next to punctuation-terminated entries ("ул.")
_START = r"(?<!\w)"
_END = r"(?!\w)"

# A Russian word of three or more letters that is not an infinitive: after
# "в N" it is what is being counted ("в 2 магазина"), not an hour
_COUNTED_NOUN = r"\s+[а-яё]{3,}(?!\w)(?<!ть)(?<!ти)(?<!чь)(?<!ться)(?<!тись)"


def phrase(text: str) -> str:
    """Escape a plain phrase, letting any whitespace run separate its words."""
    return r"\s+".join(re.escape(word) for word in text.split())


def alternation(items: Iterable[str], raw: bool = False) -> str:
    """Build ``a|b|c`` with the longest entries first so phrases win over words."""
    ordered = sorted(set(items), key=lambda item: (-len(item), item))
    parts = ordered if raw else [phrase(item) for item in ordered]
    if not parts:
        # Never matches; keeps optional vocabulary fields from breaking a pattern
        return r"(?!x)x"
    return "|".join(parts)


def yo_insensitive(pattern: str) -> str:
    """Let Russian е and ё match each other."""
    return re.sub(r"[её]", "[её]", pattern)


@dataclass(frozen=True)
class PatternSet:
    """All patterns derived from one vocabulary."""

    months: dict
    meridiems: dict

    # Temporal: relative days
    day_after_tomorrow: re.Pattern
    tomorrow: re.Pattern
    today: re.Pattern
    relative_day: re.Pattern

    # Temporal: time of day
    time_hhmm: re.Pattern
    time_spaced: re.Pattern
    time_hour_only: re.Pattern

    # Temporal: dates
    numeric_date: re.Pattern
    named_date: re.Pattern
    marked_day: re.Pattern

    # Priority
    urgent: re.Pattern
    important: re.Pattern

    # Address
    address_prefix: re.Pattern
    street: re.Pattern

    # Segmentation and titles
    transition: re.Pattern
    soft_connector: re.Pattern
    abbreviation: re.Pattern
    leading_filler: re.Pattern
    filler_only: re.Pattern
    closing_phrase: re.Pattern
    request_prefix: re.Pattern
    short_command: re.Pattern
    clause_tail: re.Pattern

    @property
    def date_markers(self) -> tuple:
        """Patterns that start a dated clause, used for segment boundaries."""
        return (self.relative_day, self.numeric_date, self.named_date, self.marked_day)

    @property
    def times(self) -> tuple:
        """Time-of-day patterns."""
        return (self.time_hhmm, self.time_spaced, self.time_hour_only)

    @property
    def dates(self) -> tuple:
        """Day patterns: relative days and calendar dates."""
        return (
            self.day_after_tomorrow, self.tomorrow, self.today,
            self.numeric_date, self.named_date, self.marked_day,
        )

    @property
    def temporal(self) -> tuple:
        """Every temporal pattern, most specific first."""
        return (
            self.day_after_tomorrow, self.tomorrow, self.today,
            self.time_hhmm, self.time_spaced, self.time_hour_only,
            self.numeric_date, self.named_date, self.marked_day,
        )


@lru_cache(maxsize=None)
def compile_patterns(vocab: Vocabulary) -> PatternSet:
    """Compile the regular expressions for a vocabulary (cached per vocabulary)."""
    flags = re.IGNORECASE

    def words(items, raw=False) -> str:
        return f"{_START}(?:{alternation(items, raw=raw)}){_END}"

    time_prefix = alternation(vocab.time_prefixes)
    date_prefix = rf"(?:(?:{alternation(vocab.date_prefixes)})\s+)?"
    day_suffix = alternation(vocab.day_suffix_patterns, raw=True)
    month_names = alternation(name for name, _ in vocab.months)
    month_link = rf"(?:(?:{alternation(vocab.month_links)})\s+)?"
    meridiem_words = alternation(word for word, _ in vocab.meridiems)
    meridiem = rf"(?:\s*({meridiem_words}){_END})?"
    hour_words = rf"\s+(?:{alternation(vocab.hour_words)}){_END}"

    relative_words = vocab.today + vocab.tomorrow + vocab.day_after_tomorrow

    return PatternSet(
        months={name: number for name, number in vocab.months},
        meridiems={word: half for word, half in vocab.meridiems},

        day_after_tomorrow=re.compile(words(vocab.day_after_tomorrow), flags),
        tomorrow=re.compile(words(vocab.tomorrow), flags),
        today=re.compile(words(vocab.today), flags),
        relative_day=re.compile(words(relative_words), flags),

        # "18:30", "в 18:30", "at 6:30 pm"
        time_hhmm=re.compile(
            rf"{_START}(?:(?:{time_prefix})\s*)?(\d{{1,2}}):(\d{{2}})(?!\d){meridiem}",
            flags,
        ),
        # "17 00", "в 17 00"
        time_spaced=re.compile(
            rf"{_START}(?:(?:{time_prefix})\s*)?(\d{{1,2}})\s+(\d{{2}}){_END}",
            flags,
        ),
        # "в 17", "в 5 вечера", "at 5 pm", "um 8 uhr"; never "в 22-го",
        # "at 5 march" or a count such as "в 2 магазина"
        time_hour_only=re.compile(
            rf"{_START}(?:{time_prefix})\s*(\d{{1,2}})(?!\d)"
            rf"(?!(?:{day_suffix}){_END})"
            rf"(?!\s*(?:{month_link})(?:{month_names}){_END})"
            rf"(?:(?:{hour_words})?\s*({meridiem_words}){_END}"
            rf"|{hour_words}"
            rf"|{_END}(?!{_COUNTED_NOUN}))",
            flags,
        ),

        # "24.02", "24/02/2026", "on 5-3-26"; never "2.5" or "2-3"
        numeric_date=re.compile(
            rf"{_START}{date_prefix}(\d{{1,2}})"
            rf"(?:[./-](\d{{1,2}})[./-](\d{{4}}|\d{{2}})|[./](\d{{2}}))(?![./-]?\d)",
            flags,
        ),
        # "3 марта", "on 24 february", "24th of may 2027"
        named_date=re.compile(
            rf"{_START}{date_prefix}(\d{{1,2}})(?:{day_suffix})?\s*{month_link}"
            rf"({month_names}){_END}(?:\s+(\d{{4}})(?!\d))?",
            flags,
        ),
        # "22-го", "22 числа", "on the 22nd", "day 22"
        marked_day=re.compile(
            rf"{_START}{date_prefix}(?:(\d{{1,2}})(?:{day_suffix})"
            rf"|(?:{alternation(vocab.day_words)})\s+(\d{{1,2}})){_END}",
            flags,
        ),

        urgent=re.compile(yo_insensitive(words(vocab.urgent)), flags),
        important=re.compile(yo_insensitive(words(vocab.important)), flags),

        # Single-word prefixes ("адрес") need an explicit ":" or "-" after them
        address_prefix=re.compile(
            rf"{_START}(?:(?:{alternation(p for p in vocab.address_prefixes if ' ' in p)}){_END}\s*[:\-]?"
            rf"|(?:{alternation(p for p in vocab.address_prefixes if ' ' not in p)})\s*[:\-])"
            rf"\s*([^,;\n]+)",
            flags,
        ),
        street=re.compile(
            rf"{_START}((?:{alternation(vocab.street_marker_patterns, raw=True)})"
            rf"(?:(?<=\.)\s*|\s+)[^,;\n]+)",
            flags,
        ),

        transition=re.compile(words(vocab.transitions), flags),
        soft_connector=re.compile(rf"\s+(?:{alternation(vocab.soft_connectors)})\s+", flags),
        abbreviation=re.compile(
            rf"{_START}(?:{alternation(a.rstrip('.') for a in vocab.abbreviations)})\.",
            flags,
        ),
        leading_filler=re.compile(rf"^(?:{alternation(vocab.fillers)}){_END}[\s,:\-]*", flags),
        filler_only=re.compile(
            rf"^(?:(?:{alternation(vocab.fillers + vocab.closing_phrases)}){_END}[\s,:\-]*)+$",
            flags,
        ),
        closing_phrase=re.compile(rf"^(?:{alternation(vocab.closing_phrases)})$", flags),
        request_prefix=re.compile(rf"^(?:{alternation(vocab.request_prefixes)}){_END}\s*", flags),
        short_command=re.compile(words(vocab.short_commands), flags),
        clause_tail=re.compile(rf"^(?:{alternation(vocab.clause_tails)}){_END}", flags),
    )
