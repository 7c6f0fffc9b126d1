from datetime import datetime, timedelta

import pytest

from voicetasks.models import Priority, TaskDraft

DUE = datetime(2026, 2, 20, 18, 30)


def test_priority_ordering():
    assert Priority.NORMAL < Priority.IMPORTANT < Priority.URGENT
    assert max(Priority.IMPORTANT, Priority.URGENT) == Priority.URGENT
    assert Priority.URGENT.label == "urgent"


def test_draft_defaults():
    draft = TaskDraft(title="Купить молоко")
    assert draft.due is None
    assert draft.address is None
    assert draft.priority == Priority.NORMAL
    assert draft.reminder_enabled is False
    assert draft.reminder_minutes_before == 10
    assert draft.id


@pytest.mark.parametrize("title", ["", "   "])
def test_draft_rejects_empty_title(title):
    with pytest.raises(ValueError):
        TaskDraft(title=title)


def test_equality_ignores_identifier_and_reminders():
    a = TaskDraft(title="Gym", due=DUE, priority=Priority.IMPORTANT)
    b = TaskDraft(title="Gym", due=DUE, priority=Priority.IMPORTANT, reminder_enabled=True)
    assert a.id != b.id
    assert a == b
    assert a != TaskDraft(title="Gym", due=DUE)


def test_draft_is_immutable():
    draft = TaskDraft(title="Gym")
    with pytest.raises(AttributeError):
        draft.title = "Swim"


def test_reminder_at():
    assert TaskDraft(title="Gym").reminder_at is None
    draft = TaskDraft(title="Gym", due=DUE, reminder_minutes_before=30)
    assert draft.reminder_at == DUE - timedelta(minutes=30)
