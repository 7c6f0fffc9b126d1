import pytest

from voicetasks.config import ExtractorConfig, load_config
from voicetasks.vocabulary import build_vocabulary

ENV_KEYS = [
    "VOICETASKS_LANGUAGES",
    "VOICETASKS_DEFAULT_TIME",
    "VOICETASKS_REMINDER_ENABLED",
    "VOICETASKS_REMINDER_MINUTES",
    "VOICETASKS_LONG_FRAGMENT_CHARS",
    "VOICETASKS_MIN_TITLE_CHARS",
    "VOICETASKS_MIN_TITLE_LETTERS",
    "VOICETASKS_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return str(tmp_path / "missing.env")


def test_defaults(clean_env):
    config = load_config(clean_env)
    assert config == ExtractorConfig()
    assert config.languages == ("ru", "en", "de")
    assert (config.default_hour, config.default_minute) == (9, 0)
    assert config.reminder_enabled is False
    assert config.reminder_minutes_before == 10


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("VOICETASKS_LANGUAGES", "EN, pl")
    monkeypatch.setenv("VOICETASKS_DEFAULT_TIME", "08:30")
    monkeypatch.setenv("VOICETASKS_REMINDER_ENABLED", "yes")
    monkeypatch.setenv("VOICETASKS_REMINDER_MINUTES", "15")
    monkeypatch.setenv("VOICETASKS_LOG_LEVEL", "debug")

    config = load_config(clean_env)
    assert config.languages == ("en", "pl")
    assert (config.default_hour, config.default_minute) == (8, 30)
    assert config.reminder_enabled is True
    assert config.reminder_minutes_before == 15
    assert config.log_level == "DEBUG"


def test_dotenv_file_is_read(clean_env, monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("VOICETASKS_MIN_TITLE_LETTERS=5\n", encoding="utf-8")
    # setenv then delenv so monkeypatch removes what load_dotenv writes
    monkeypatch.setenv("VOICETASKS_MIN_TITLE_LETTERS", "")
    monkeypatch.delenv("VOICETASKS_MIN_TITLE_LETTERS")

    assert load_config(str(env_file)).min_title_letters == 5


@pytest.mark.parametrize("key, value", [
    ("VOICETASKS_REMINDER_MINUTES", "ten"),
    ("VOICETASKS_DEFAULT_TIME", "nine"),
    ("VOICETASKS_DEFAULT_TIME", "25:00"),
    ("VOICETASKS_LANGUAGES", "ru,xx"),
    ("VOICETASKS_MIN_TITLE_CHARS", "0"),
    ("VOICETASKS_REMINDER_MINUTES", "-5"),
])
def test_invalid_values(clean_env, monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        load_config(clean_env)


def test_validate_rejects_empty_languages():
    with pytest.raises(ValueError):
        ExtractorConfig(languages=()).validate()


def test_vocabulary_is_merged_in_order():
    vocabulary = ExtractorConfig(languages=("en", "ru")).vocabulary
    assert vocabulary.tomorrow == ("tomorrow", "завтра")
    assert vocabulary is ExtractorConfig(languages=("en", "ru")).vocabulary


def test_unknown_language():
    with pytest.raises(ValueError):
        build_vocabulary(["ru", "klingon"])
    with pytest.raises(ValueError):
        build_vocabulary([])
