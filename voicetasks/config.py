"""
Environment-driven configuration for the extraction pipeline.

Every setting has a sensible default; environment variables (optionally from a
.env file) override them. Configuration is passed explicitly into the pipeline,
nothing here is global.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from .vocabulary import LANGUAGES, Vocabulary, build_vocabulary

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _vocabulary_for(languages: tuple[str, ...]) -> Vocabulary:
    return build_vocabulary(languages)


@dataclass
class ExtractorConfig:
    """Settings for one extraction pipeline."""

    # Vocabulary languages, merged in this order
    languages: tuple[str, ...] = ("ru", "en", "de")

    # Time given to dates found without a time of day
    default_hour: int = 9
    default_minute: int = 0

    # Reminder defaults carried by every TaskDraft
    reminder_enabled: bool = False
    reminder_minutes_before: int = 10

    # Segmentation / task-quality thresholds
    long_fragment_chars: int = 55
    min_title_chars: int = 4
    min_title_letters: int = 3

    log_level: str = "INFO"

    @property
    def vocabulary(self) -> Vocabulary:
        """Merged vocabulary of the configured languages."""
        return _vocabulary_for(tuple(self.languages))

    def validate(self):
        """Validate the configuration; raises ValueError on the first problem."""
        unknown = [code for code in self.languages if code not in LANGUAGES]
        if unknown:
            raise ValueError(f"Unsupported language(s): {', '.join(unknown)}")
        if not self.languages:
            raise ValueError("At least one language is required")
        if not (0 <= self.default_hour <= 23 and 0 <= self.default_minute <= 59):
            raise ValueError(
                f"Default time out of range: {self.default_hour:02d}:{self.default_minute:02d}"
            )
        if self.reminder_minutes_before < 0:
            raise ValueError("reminder_minutes_before must not be negative")
        for name in ("long_fragment_chars", "min_title_chars", "min_title_letters"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")


# ============================================================================
# Env var → ExtractorConfig field mapping
# ============================================================================

def _parse_languages(value: str) -> tuple[str, ...]:
    return tuple(code.strip().lower() for code in value.split(",") if code.strip())


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_time(value: str) -> tuple[int, int]:
    hour, _, minute = value.strip().partition(":")
    return int(hour), int(minute or 0)


_ENV_MAP = {
    "languages":               ("VOICETASKS_LANGUAGES",           _parse_languages),
    "reminder_enabled":        ("VOICETASKS_REMINDER_ENABLED",    _parse_bool),
    "reminder_minutes_before": ("VOICETASKS_REMINDER_MINUTES",    int),
    "long_fragment_chars":     ("VOICETASKS_LONG_FRAGMENT_CHARS", int),
    "min_title_chars":         ("VOICETASKS_MIN_TITLE_CHARS",     int),
    "min_title_letters":       ("VOICETASKS_MIN_TITLE_LETTERS",   int),
    "log_level":               ("VOICETASKS_LOG_LEVEL",           str.upper),
}


def load_config(env_file: str = ".env") -> ExtractorConfig:
    """Load configuration from environment variables.

    Optional env vars:
        VOICETASKS_LANGUAGES             comma-separated codes (ru,en,de,pl)
        VOICETASKS_DEFAULT_TIME          HH:MM given to dates without a time
        VOICETASKS_REMINDER_ENABLED      true/false
        VOICETASKS_REMINDER_MINUTES      reminder lead in minutes
        VOICETASKS_LONG_FRAGMENT_CHARS   split longer fragments on connectors
        VOICETASKS_MIN_TITLE_CHARS       shortest acceptable task title
        VOICETASKS_MIN_TITLE_LETTERS     fewest letters in a task title
        VOICETASKS_LOG_LEVEL             logging level for the entry points

    Raises:
        ValueError: if a value cannot be parsed or fails validation.
    """
    load_dotenv(env_file)

    overrides = {}
    for field_name, (env_key, parse) in _ENV_MAP.items():
        raw = os.environ.get(env_key, "").strip()
        if not raw:
            continue
        try:
            overrides[field_name] = parse(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_key}: {raw!r}") from e

    default_time = os.environ.get("VOICETASKS_DEFAULT_TIME", "").strip()
    if default_time:
        try:
            overrides["default_hour"], overrides["default_minute"] = _parse_time(default_time)
        except ValueError as e:
            raise ValueError(f"Invalid value for VOICETASKS_DEFAULT_TIME: {default_time!r}") from e

    config = ExtractorConfig(**overrides)
    config.validate()
    logger.info(
        f"Config loaded | Languages: {','.join(config.languages)} | "
        f"Default time: {config.default_hour:02d}:{config.default_minute:02d}"
    )
    return config
