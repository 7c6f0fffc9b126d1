from datetime import datetime

import pytest

from voicetasks import ExtractorConfig, Priority, TaskDraft, carry_forward, extract_tasks

NOW = datetime(2026, 2, 19, 10, 0)


def extract(text, **kwargs):
    return extract_tasks(text, now=NOW, **kwargs)


@pytest.mark.parametrize("text", [
    "",
    "ну короче итак",
    "well, so, anyway",
    "ну вот и всё",
    "Ну... короче. Итак!",
])
def test_filler_only_transcripts(text):
    assert extract(text) == []


@pytest.mark.parametrize("text, due", [
    ("buy milk today", datetime(2026, 2, 19, 0, 0)),
    ("gym tomorrow at 18:30", datetime(2026, 2, 20, 18, 30)),
    ("meeting with Anna on the 19th", datetime(2026, 2, 19, 9, 0)),
    ("dinner with friends on 24 february", datetime(2026, 2, 24, 9, 0)),
    ("pay rent on the 5th", datetime(2026, 3, 5, 9, 0)),
])
def test_single_task_due(text, due):
    drafts = extract(text)
    assert len(drafts) == 1
    assert drafts[0].due == due


@pytest.mark.parametrize("text, due", [
    ("buy milk tomorrow morning", datetime(2026, 2, 20, 0, 0)),
    ("meeting with Anna on the 19th in the office", datetime(2026, 2, 19, 9, 0)),
    ("позвонить маме завтра утром", datetime(2026, 2, 20, 0, 0)),
    ("купить 2.5 кг сахара", None),
    ("зайти в 2 магазина", None),
])
def test_trailing_words_stay_with_their_task(text, due):
    drafts = extract(text)
    assert len(drafts) == 1
    assert drafts[0].due == due


def test_titles_are_capitalized_and_stripped():
    drafts = extract("gym tomorrow at 18:30")
    assert drafts[0] == TaskDraft(title="Gym", due=datetime(2026, 2, 20, 18, 30))


def test_date_is_carried_to_following_fragments():
    drafts = extract("buy milk tomorrow. call mom.")
    assert [d.title for d in drafts] == ["Buy milk", "Call mom"]
    assert drafts[0].due == drafts[1].due == datetime(2026, 2, 20, 0, 0)


def test_new_date_replaces_carried_one():
    drafts = extract("завтра купить молоко. позвонить маме. 3 марта сдать отчет. оплатить свет")
    assert [d.due for d in drafts] == [
        datetime(2026, 2, 20, 0, 0),
        datetime(2026, 2, 20, 0, 0),
        datetime(2026, 3, 3, 9, 0),
        datetime(2026, 3, 3, 9, 0),
    ]


def test_no_date_before_any_temporal_fragment():
    drafts = extract("позвонить маме. завтра купить молоко")
    assert drafts[0].due is None
    assert drafts[1].due == datetime(2026, 2, 20, 0, 0)


def test_carry_forward():
    carried = datetime(2026, 2, 20, 0, 0)
    found = datetime(2026, 3, 3, 9, 0)
    assert carry_forward(None, found, False) == found
    assert carry_forward(carried, found, True) == found
    assert carry_forward(carried, None, False) == carried
    assert carry_forward(carried, None, True) is None


def test_full_russian_dictation():
    text = (
        "Ну короче, мне нужно срочно позвонить маме завтра в 10. "
        "Потом забрать посылку по адресу Ленина 5, это важно. "
        "И всё!"
    )
    drafts = extract(text)
    assert len(drafts) == 2

    call, parcel = drafts
    assert call.title == "Позвонить маме"
    assert call.priority == Priority.URGENT
    assert call.due == datetime(2026, 2, 20, 10, 0)

    assert parcel.title == "Забрать посылку"
    assert parcel.address == "ленина 5"
    assert parcel.priority == Priority.IMPORTANT
    assert parcel.due == datetime(2026, 2, 20, 10, 0)


def test_urgent_beats_important():
    drafts = extract("очень важно и срочно позвонить врачу")
    assert drafts[0].priority == Priority.URGENT


def test_low_quality_fragments_are_skipped():
    drafts = extract("купить хлеб. ок. 12 15. buy. что дальше")
    assert [d.title for d in drafts] == ["Купить хлеб", "Buy"]


def test_order_is_preserved():
    drafts = extract("first call the bank. then write the report. and then buy flowers")
    assert [d.title for d in drafts] == ["First call the bank", "Write the report", "Buy flowers"]


def test_reminder_defaults_come_from_config():
    config = ExtractorConfig(reminder_enabled=True, reminder_minutes_before=30)
    draft = extract("gym tomorrow at 18:30", config=config)[0]
    assert draft.reminder_enabled is True
    assert draft.reminder_at == datetime(2026, 2, 20, 18, 0)


def test_clock_is_used_when_now_is_missing():
    drafts = extract_tasks("buy milk tomorrow", clock=lambda: NOW)
    assert drafts[0].due == datetime(2026, 2, 20, 0, 0)


def test_ids_are_unique():
    drafts = extract("buy milk. call mom. fix the bike")
    assert len({d.id for d in drafts}) == 3
