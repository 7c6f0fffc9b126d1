"""
Voice Tasks Engine

Rule-based extraction of task drafts from dictated transcripts.
Transcript → fragments → due date, priority, address, title → TaskDraft

No FastAPI or storage dependency.
Pure function interface: extract_tasks(transcript, now) -> list[TaskDraft]
"""

__version__ = "1.0.0"

from .core import extract_tasks, carry_forward
from .config import ExtractorConfig, load_config
from .models import (
    Priority,
    TaskDraft,
    TemporalMatch,
    PriorityResult,
    AddressResult,
)
from .segmenter import Segmenter, segment
from .temporal import TemporalResolver, resolve_temporal
from .priority import PriorityClassifier, classify_priority
from .address import AddressExtractor, extract_address
from .markdown import format_task_line, render_task_list, draft_to_dict
