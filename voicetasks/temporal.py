"""
Temporal resolution: pulls one due instant out of a task fragment.

Categories are tried in a fixed order so the specific forms are never shadowed
by generic numeric ones:

    1. relative days      сегодня / завтра / послезавтра, today / tomorrow
    2. time of day        18:30, "17 00", "в 17" / "at 5 pm"
    3. numeric date       24.02, 24/02/2026, 5-3-26
    4. named-month date   3 марта, on 24 february
    5. marked day         22-го, 22 числа, on the 22nd, day 22

The first hit per category wins. Every span of a category that matched is
removed from the text, and once a date is known so is any other date. A date
and a time are merged; a lone time is anchored to today; a lone date keeps the
default time of its category.
"""

import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Callable, NamedTuple, Optional

from dateutil.relativedelta import relativedelta

from .config import ExtractorConfig
from .models import Clock, TemporalMatch
from .patterns import PatternSet, compile_patterns

logger = logging.getLogger(__name__)


class _Hit(NamedTuple):
    """One category match: the value found and the text left without it."""
    value: object
    text: str


# ============================================================================
# TEXT HELPERS
# ============================================================================

def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _remove_span(text: str, match: re.Match) -> str:
    return _squash(text[:match.start()] + " " + text[match.end():])


def _normalize(text: str) -> str:
    # "22 - го" -> "22-го"
    text = re.sub(r"(\d)\s*-\s*(го|е)(?!\w)", r"\1-\2", text, flags=re.IGNORECASE)
    return _squash(text)


def _clean_leftover(text: str) -> str:
    """Tidy what is left once temporal spans have been cut out."""
    text = _squash(text)
    # Zero artefacts the speech engine leaves around times
    text = re.sub(r"^(?:0|00)\s+", "", text)
    text = re.sub(r"\s+(?:0|00)$", "", text)
    # Lone hyphens at the edges
    text = re.sub(r"^-|-$", "", text)
    return text.strip()


def _strip_all(text: str, patterns) -> str:
    for pattern in patterns:
        text = pattern.sub(" ", text)
    return _squash(text)


def strip_temporal(text: str, patterns: PatternSet) -> str:
    """Remove every temporal span, whatever its category."""
    return _strip_all(text, patterns.temporal)


def has_relative_day(text: str, patterns: PatternSet) -> bool:
    """True when the text names today, tomorrow or the day after."""
    return patterns.relative_day.search(text) is not None


# ============================================================================
# CALENDAR HELPERS
# ============================================================================

def _at(day: date, clock_time: time, like: datetime) -> datetime:
    """Combine a day and a time, keeping the reference instant's tzinfo."""
    return datetime.combine(day, clock_time, tzinfo=like.tzinfo)


def _roll_past_year(candidate: date, today: date) -> date:
    """Move a year-less date that already passed into next year."""
    # 29 February of a leap year lands on 28 February
    return candidate if candidate >= today else candidate + relativedelta(years=1)


def nearest_future_day(day: int, today: date) -> Optional[date]:
    """Soonest date with this day-of-month on or after today.

    Tries the current month first; otherwise the next month, clamped to that
    month's last day when it is shorter.
    """
    if not 1 <= day <= 31:
        return None
    # relativedelta clamps day=31 to the month's last day
    candidate = today + relativedelta(day=day)
    if candidate.day == day and candidate >= today:
        return candidate
    return today.replace(day=1) + relativedelta(months=1, day=day)


def _meridiem(hour: int, word: Optional[str], patterns: PatternSet) -> int:
    half = patterns.meridiems.get((word or "").lower())
    if half == "pm" and hour < 12:
        return hour + 12
    if half == "am" and hour == 12:
        return 0
    return hour


def _valid_time(hour: int, minute: int) -> Optional[time]:
    if 0 <= hour <= 23 and 0 <= minute <= 59:
        return time(hour, minute)
    return None


def _expand_year(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    year = int(raw)
    return 2000 + year if len(raw) == 2 else year


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


# ============================================================================
# MATCHERS
# ============================================================================
# Each matcher takes (text, patterns, today) and returns a _Hit or None.

def _match_relative_day(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    for pattern, offset in (
        (patterns.day_after_tomorrow, 2),
        (patterns.tomorrow, 1),
        (patterns.today, 0),
    ):
        if pattern.search(text):
            # Every mention of the marker goes, not just the first
            return _Hit(today + timedelta(days=offset), _squash(pattern.sub(" ", text)))
    return None


def _match_hhmm(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    m = patterns.time_hhmm.search(text)
    if not m:
        return None
    found = _valid_time(_meridiem(int(m.group(1)), m.group(3), patterns), int(m.group(2)))
    return _Hit(found, _remove_span(text, m)) if found else None


def _match_spaced_time(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    m = patterns.time_spaced.search(text)
    if not m:
        return None
    found = _valid_time(int(m.group(1)), int(m.group(2)))
    return _Hit(found, _remove_span(text, m)) if found else None


def _match_hour_only(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    m = patterns.time_hour_only.search(text)
    if not m:
        return None
    found = _valid_time(_meridiem(int(m.group(1)), m.group(2), patterns), 0)
    return _Hit(found, _remove_span(text, m)) if found else None


def _match_numeric_date(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    m = patterns.numeric_date.search(text)
    if not m:
        return None
    day, month = int(m.group(1)), int(m.group(2) or m.group(4))
    if not (1 <= day <= 31 and 1 <= month <= 12):
        return None
    year = _expand_year(m.group(3))
    found = _safe_date(year or today.year, month, day)
    if found is None:
        return None
    if year is None:
        found = _roll_past_year(found, today)
    return _Hit(found, _remove_span(text, m))


def _match_named_date(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    m = patterns.named_date.search(text)
    if not m:
        return None
    month = patterns.months.get(re.sub(r"\s+", " ", m.group(2).lower()))
    if month is None:
        return None
    year = _expand_year(m.group(3))
    found = _safe_date(year or today.year, month, int(m.group(1)))
    if found is None:
        return None
    if year is None:
        found = _roll_past_year(found, today)
    return _Hit(found, _remove_span(text, m))


def _match_marked_day(text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    m = patterns.marked_day.search(text)
    if not m:
        return None
    found = nearest_future_day(int(m.group(1) or m.group(2)), today)
    return _Hit(found, _remove_span(text, m)) if found else None


Matcher = Callable[[str, PatternSet, date], Optional[_Hit]]

TIME_MATCHERS: tuple[Matcher, ...] = (_match_hhmm, _match_spaced_time, _match_hour_only)
DATE_MATCHERS: tuple[Matcher, ...] = (_match_numeric_date, _match_named_date, _match_marked_day)


def _first_hit(matchers, text: str, patterns: PatternSet, today: date) -> Optional[_Hit]:
    for matcher in matchers:
        hit = matcher(text, patterns, today)
        if hit is not None:
            return hit
    return None


# ============================================================================
# RESOLUTION
# ============================================================================

def resolve_temporal(
    fragment: str,
    now: datetime,
    patterns: PatternSet,
    default_time: time = time(9, 0),
) -> TemporalMatch:
    """Resolve the due instant of one fragment against a reference "now".

    Args:
        fragment: One task fragment.
        now: Reference instant; its tzinfo is carried into the result.
        patterns: Compiled vocabulary patterns.
        default_time: Time given to numeric, named-month and marked-day dates.

    Returns:
        TemporalMatch(instant, remaining_text). instant is None when nothing
        temporal was found, in which case the text is only whitespace-normalized.
    """
    text = _normalize(fragment)
    if not text:
        return TemporalMatch(None, "")

    today = now.date()
    found_date: Optional[datetime] = None
    found_time: Optional[time] = None

    relative = _match_relative_day(text, patterns, today)
    if relative:
        # Relative days start at midnight unless a time is given
        found_date = _at(relative.value, time.min, now)
        text = relative.text

    timed = _first_hit(TIME_MATCHERS, text, patterns, today)
    if timed:
        found_time = timed.value
        text = _strip_all(timed.text, patterns.times)

    if found_date is None:
        dated = _first_hit(DATE_MATCHERS, text, patterns, today)
        if dated:
            found_date = _at(dated.value, default_time, now)
            text = dated.text

    if found_date is not None:
        # Later dates lose to the first one but leave no trace in the title
        text = _strip_all(text, patterns.dates)

    if found_date is None and found_time is None:
        return TemporalMatch(None, _squash(fragment))

    if found_date is None:
        instant = _at(today, found_time, now)
    elif found_time is None:
        instant = found_date
    else:
        instant = found_date.replace(hour=found_time.hour, minute=found_time.minute)

    logger.debug(f"Resolved {instant.isoformat()} from {fragment!r}")
    return TemporalMatch(instant, _clean_leftover(text))


class TemporalResolver:
    """Temporal resolution bound to a configuration and a reference clock."""

    def __init__(self, config: Optional[ExtractorConfig] = None, clock: Optional[Clock] = None):
        self.config = config or ExtractorConfig()
        self.patterns = compile_patterns(self.config.vocabulary)
        self.clock = clock or datetime.now
        self.default_time = time(self.config.default_hour, self.config.default_minute)

    def resolve(self, fragment: str, now: Optional[datetime] = None) -> TemporalMatch:
        return resolve_temporal(
            fragment,
            now or self.clock(),
            self.patterns,
            self.default_time,
        )

    def has_relative_day(self, fragment: str) -> bool:
        return has_relative_day(fragment, self.patterns)
