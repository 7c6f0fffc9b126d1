import pytest

from voicetasks.config import ExtractorConfig
from voicetasks.patterns import compile_patterns
from voicetasks.titlegen import clean_title, is_real_task, make_title, rejection_reason

CONFIG = ExtractorConfig()
PATTERNS = compile_patterns(CONFIG.vocabulary)


def test_clean_title():
    assert clean_title("  - купить   молоко, ") == "купить молоко"


@pytest.mark.parametrize("text, title", [
    ("купить молоко", "Купить молоко"),
    ("мне нужно позвонить маме", "Позвонить маме"),
    ("ну короче надо купить хлеб", "Купить хлеб"),
    ("i need to call the dentist", "Call the dentist"),
    ("ich muss die miete zahlen", "Die miete zahlen"),
    ("  позвонить ", "Позвонить"),
])
def test_make_title(text, title):
    assert make_title(text, PATTERNS) == title


@pytest.mark.parametrize("title, reason", [
    ("", "empty"),
    ("   ", "empty"),
    ("Ок", "too short"),
    ("Ну вот и всё", "filler"),
    ("Well", "filler"),
    ("12 15 7", "too few letters"),
    ("А 12 б", "too few letters"),
])
def test_rejection_reasons(title, reason):
    assert rejection_reason(title, PATTERNS, CONFIG) == reason


@pytest.mark.parametrize("title", ["Buy", "Gym", "Позвонить маме", "Купить 2 л. молока"])
def test_real_tasks(title):
    assert is_real_task(title, PATTERNS, CONFIG)


def test_thresholds_come_from_config():
    strict = ExtractorConfig(min_title_chars=10)
    assert rejection_reason("Купить", PATTERNS, strict) == "too short"
