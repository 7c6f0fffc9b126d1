"""
FastAPI application exposing task extraction over HTTP.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from voicetasks import ExtractorConfig, __version__, extract_tasks, load_config

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION
# ============================================================================

@lru_cache(maxsize=1)
def get_config() -> ExtractorConfig:
    """Extraction config loaded once from the environment."""
    return load_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    logging.getLogger().setLevel(config.log_level)
    logger.info(f"🚀 Voice Tasks API starting up (languages: {','.join(config.languages)})")
    yield
    logger.info("👋 Voice Tasks API shutting down...")


app = FastAPI(
    title="Voice Tasks",
    description="Turn dictated transcripts into structured task drafts",
    version=__version__,
    lifespan=lifespan
)


# ============================================================================
# SCHEMAS
# ============================================================================

class ExtractRequest(BaseModel):
    transcript: str
    now: Optional[datetime] = None
    languages: Optional[List[str]] = None


class TaskOut(BaseModel):
    id: str
    title: str
    due: Optional[datetime] = None
    address: Optional[str] = None
    priority: str
    reminder_enabled: bool
    reminder_minutes_before: int
    reminder_at: Optional[datetime] = None


class ExtractResponse(BaseModel):
    tasks: List[TaskOut]
    count: int


# ============================================================================
# ROUTES
# ============================================================================

@app.get("/api/health")
async def health():
    """Liveness check."""
    return {"status": "ok", "version": __version__}


@app.post("/api/extract", response_model=ExtractResponse)
def extract(body: ExtractRequest, config: ExtractorConfig = Depends(get_config)):
    """Extract task drafts from a transcript."""
    if body.languages:
        config = replace(config, languages=tuple(code.strip().lower() for code in body.languages))
        try:
            config.validate()
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

    drafts = extract_tasks(body.transcript, now=body.now, config=config)
    logger.info(f"📝 /api/extract: {len(drafts)} task(s) from {len(body.transcript)} chars")

    tasks = [
        TaskOut(
            id=draft.id,
            title=draft.title,
            due=draft.due,
            address=draft.address,
            priority=draft.priority.label,
            reminder_enabled=draft.reminder_enabled,
            reminder_minutes_before=draft.reminder_minutes_before,
            reminder_at=draft.reminder_at,
        )
        for draft in drafts
    ]
    return ExtractResponse(tasks=tasks, count=len(tasks))
