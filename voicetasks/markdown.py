"""
Obsidian-style rendering of task drafts.

Each draft becomes one checkbox line with its metadata inline:

    - [ ] Купить молоко (📅 2026-02-20 09:00, 📍 ул. Ленина 5, 🔴)
"""

from datetime import datetime
from typing import Iterable, Optional

from .models import Priority, TaskDraft

DUE_FORMAT = "%Y-%m-%d %H:%M"

_PRIORITY_MARKERS = {
    Priority.URGENT: "🔴",
    Priority.IMPORTANT: "🟠",
}


def format_task_line(draft: TaskDraft) -> str:
    """Build the checkbox line for one draft."""
    checkbox = f"- [ ] {draft.title}"

    meta_parts = []
    if draft.due:
        meta_parts.append(f"📅 {draft.due.strftime(DUE_FORMAT)}")
    if draft.address:
        meta_parts.append(f"📍 {draft.address}")
    if draft.priority in _PRIORITY_MARKERS:
        meta_parts.append(_PRIORITY_MARKERS[draft.priority])

    if meta_parts:
        checkbox += f" ({', '.join(meta_parts)})"
    return checkbox


def render_task_list(drafts: Iterable[TaskDraft], heading: Optional[str] = None) -> str:
    """Render drafts as a markdown task list, optionally under a level-1 heading."""
    lines = []
    if heading:
        lines.append(f"# {heading}")
        lines.append("")
    lines.extend(format_task_line(draft) for draft in drafts)
    return "\n".join(lines)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def draft_to_dict(draft: TaskDraft) -> dict:
    """JSON-ready mapping of a draft."""
    return {
        "id": draft.id,
        "title": draft.title,
        "due": _iso(draft.due),
        "address": draft.address,
        "priority": draft.priority.label,
        "reminder_enabled": draft.reminder_enabled,
        "reminder_minutes_before": draft.reminder_minutes_before,
        "reminder_at": _iso(draft.reminder_at),
    }
