from datetime import datetime

from voicetasks.markdown import draft_to_dict, format_task_line, render_task_list
from voicetasks.models import Priority, TaskDraft

DUE = datetime(2026, 2, 20, 18, 30)


def test_plain_line():
    assert format_task_line(TaskDraft(title="Позвонить маме")) == "- [ ] Позвонить маме"


def test_line_with_metadata():
    draft = TaskDraft(title="Купить молоко", due=DUE, address="ул. Ленина 5", priority=Priority.URGENT)
    assert format_task_line(draft) == "- [ ] Купить молоко (📅 2026-02-20 18:30, 📍 ул. Ленина 5, 🔴)"


def test_important_marker():
    draft = TaskDraft(title="Send report", priority=Priority.IMPORTANT)
    assert format_task_line(draft) == "- [ ] Send report (🟠)"


def test_render_task_list():
    drafts = [TaskDraft(title="Gym", due=DUE), TaskDraft(title="Call mom")]
    assert render_task_list(drafts) == "- [ ] Gym (📅 2026-02-20 18:30)\n- [ ] Call mom"
    assert render_task_list(drafts, heading="Tasks").startswith("# Tasks\n\n- [ ] Gym")
    assert render_task_list([]) == ""


def test_draft_to_dict():
    draft = TaskDraft(title="Gym", due=DUE, reminder_enabled=True, reminder_minutes_before=15)
    data = draft_to_dict(draft)
    assert data["id"] == draft.id
    assert data["title"] == "Gym"
    assert data["due"] == "2026-02-20T18:30:00"
    assert data["address"] is None
    assert data["priority"] == "normal"
    assert data["reminder_enabled"] is True
    assert data["reminder_at"] == "2026-02-20T18:15:00"


def test_draft_to_dict_without_due():
    data = draft_to_dict(TaskDraft(title="Gym"))
    assert data["due"] is None
    assert data["reminder_at"] is None
