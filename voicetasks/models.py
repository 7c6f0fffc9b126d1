"""
Data models for the extraction pipeline.
No external dependencies, pure Python dataclasses.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Callable, NamedTuple, Optional


# One candidate single-task utterance after segmentation.
Fragment = str

# Returns the reference "now" for date arithmetic.
Clock = Callable[[], datetime]


class Priority(IntEnum):
    """Task priority, ordered by severity (urgent beats important)."""
    NORMAL = 0
    IMPORTANT = 1
    URGENT = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class TemporalMatch(NamedTuple):
    """Resolved due instant (or None) plus the fragment with the span removed."""
    instant: Optional[datetime]
    text: str


class PriorityResult(NamedTuple):
    priority: Priority
    text: str


class AddressResult(NamedTuple):
    address: Optional[str]
    text: str


@dataclass(frozen=True)
class TaskDraft:
    """A task extracted from a dictated transcript, prior to storage.

    The identifier is generated per draft and excluded from equality, so two
    drafts with the same title, due instant, address and priority compare equal.
    """
    title: str
    due: Optional[datetime] = None
    address: Optional[str] = None
    priority: Priority = Priority.NORMAL

    # Reminder defaults, editable later by whoever stores the draft
    reminder_enabled: bool = field(default=False, compare=False)
    reminder_minutes_before: int = field(default=10, compare=False)

    id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("TaskDraft title must not be empty")

    @property
    def reminder_at(self) -> Optional[datetime]:
        """When a reminder would fire, or None without a due instant."""
        if self.due is None:
            return None
        return self.due - timedelta(minutes=self.reminder_minutes_before)
