"""
Extraction pipeline orchestrator.

This is the main entry point for turning a dictated transcript into task drafts.
Pure function interface: no FastAPI, no storage, no wall-clock reads unless no
reference instant is given.

Pipeline per fragment:
    segment -> resolve date/time -> classify priority -> extract address -> title

Usage:
    from voicetasks import extract_tasks

    drafts = extract_tasks("купить молоко завтра. позвонить маме")
    for draft in drafts:
        print(draft.title, draft.due, draft.priority.label)
"""

import logging
from datetime import datetime, time
from typing import Optional

from .config import ExtractorConfig
from .models import Clock, Fragment, TaskDraft
from .patterns import PatternSet, compile_patterns
from .segmenter import segment
from .temporal import has_relative_day, resolve_temporal
from .priority import classify_priority
from .address import extract_address
from .titlegen import make_title, rejection_reason

logger = logging.getLogger(__name__)


def carry_forward(
    carried: Optional[datetime],
    instant: Optional[datetime],
    had_relative_day: bool,
) -> Optional[datetime]:
    """Next value of the carried date after one fragment.

    A fragment's own instant replaces the carried date. A fragment that names a
    relative day but still resolved nothing clears it, so an older date does not
    leak past it. Otherwise the carried date is kept.
    """
    if instant is not None:
        return instant
    if had_relative_day:
        return None
    return carried


def draft_from_fragment(
    fragment: Fragment,
    carried: Optional[datetime],
    now: datetime,
    patterns: PatternSet,
    config: ExtractorConfig,
) -> tuple[Optional[TaskDraft], Optional[datetime]]:
    """Run one fragment through the stages.

    Returns:
        (draft or None when the fragment is not a real task, new carried date)
    """
    had_relative = has_relative_day(fragment, patterns)
    default_time = time(config.default_hour, config.default_minute)

    instant, text = resolve_temporal(fragment, now, patterns, default_time)
    carried = carry_forward(carried, instant, had_relative)

    priority, text = classify_priority(text, patterns)
    address, text = extract_address(text, patterns)
    title = make_title(text, patterns)

    reason = rejection_reason(title, patterns, config)
    if reason:
        logger.debug(f"  Skipped {fragment!r}: {reason}")
        return None, carried

    draft = TaskDraft(
        title=title,
        due=carried,
        address=address,
        priority=priority,
        reminder_enabled=config.reminder_enabled,
        reminder_minutes_before=config.reminder_minutes_before,
    )
    logger.debug(
        f"  Task {title!r} | due={carried.isoformat() if carried else '-'} | "
        f"priority={priority.label} | address={address or '-'}"
    )
    return draft, carried


def extract_tasks(
    transcript: str,
    now: Optional[datetime] = None,
    config: Optional[ExtractorConfig] = None,
    clock: Optional[Clock] = None,
) -> list[TaskDraft]:
    """Extract task drafts from a transcript.

    Args:
        transcript: Raw speech-to-text output.
        now: Reference instant for date arithmetic. Takes precedence over clock.
        config: Extraction configuration. Defaults to ExtractorConfig().
        clock: Callable returning the reference instant, used when now is None.
            Falls back to datetime.now.

    Returns:
        Drafts in speech order. Empty when nothing qualifies; never raises for
        any string input.
    """
    config = config or ExtractorConfig()
    now = now or (clock or datetime.now)()
    patterns = compile_patterns(config.vocabulary)

    fragments = segment(transcript, patterns, config)

    drafts: list[TaskDraft] = []
    carried: Optional[datetime] = None
    for fragment in fragments:
        logger.debug(f"Fragment: {fragment!r}")
        draft, carried = draft_from_fragment(fragment, carried, now, patterns, config)
        if draft is not None:
            drafts.append(draft)

    logger.info(f"Extracted {len(drafts)} task(s) from {len(fragments)} fragment(s)")
    return drafts
