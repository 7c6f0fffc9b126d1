"""
Locale vocabulary for the rule engine.

Each supported language contributes word lists for relative days, months,
day-of-month markers, priority words, address markers and the filler/transition
words the segmenter cares about. Russian is the primary language; English and
German cover the common markers only.

Fields ending in ``_patterns`` hold regex fragments (``ул\\.``); everything
else is plain text and is escaped when compiled.
"""

from dataclasses import dataclass, fields
from typing import Iterable


@dataclass(frozen=True)
class Vocabulary:
    """Word lists for one language, or the merge of several."""

    # Relative days
    today: tuple[str, ...] = ()
    tomorrow: tuple[str, ...] = ()
    day_after_tomorrow: tuple[str, ...] = ()

    # Genitive / plain month names → month number
    months: tuple[tuple[str, int], ...] = ()

    # Words introducing a clock time ("в 17:00", "at 17:00")
    time_prefixes: tuple[str, ...] = ()
    # Words following an hour ("в 5 часов", "um 5 uhr"), removed together with it
    hour_words: tuple[str, ...] = ()
    # Words after an hour that set the half of the day ("5 вечера", "5 pm")
    meridiems: tuple[tuple[str, str], ...] = ()
    # Words introducing a date ("on 24 february"), removed together with it
    date_prefixes: tuple[str, ...] = ()
    # Suffixes turning a bare number into a day-of-month ("22-го", "22nd");
    # each carries its own leading whitespace rule
    day_suffix_patterns: tuple[str, ...] = ()
    # Words turning a bare number into a day-of-month when placed before it
    day_words: tuple[str, ...] = ()
    # Words allowed between a day number and a month name ("24th of may")
    month_links: tuple[str, ...] = ()

    # Priority
    urgent: tuple[str, ...] = ()
    important: tuple[str, ...] = ()

    # Address
    address_prefixes: tuple[str, ...] = ()
    street_marker_patterns: tuple[str, ...] = ()

    # Segmentation
    transitions: tuple[str, ...] = ()
    soft_connectors: tuple[str, ...] = ()
    fillers: tuple[str, ...] = ()
    closing_phrases: tuple[str, ...] = ()
    request_prefixes: tuple[str, ...] = ()
    short_commands: tuple[str, ...] = ()
    abbreviations: tuple[str, ...] = ()
    # Words that continue the previous clause after a date ("in the office",
    # "утром"); a tail opening with one never starts a new task
    clause_tails: tuple[str, ...] = ()

    def merge(self, other: "Vocabulary") -> "Vocabulary":
        """Union of two vocabularies, keeping first-seen order."""
        merged = {}
        for f in fields(self):
            ours = getattr(self, f.name)
            theirs = getattr(other, f.name)
            merged[f.name] = ours + tuple(x for x in theirs if x not in ours)
        return Vocabulary(**merged)


RUSSIAN = Vocabulary(
    today=("сегодня",),
    tomorrow=("завтра",),
    day_after_tomorrow=("послезавтра", "после завтра"),
    months=(
        ("января", 1), ("февраля", 2), ("марта", 3), ("апреля", 4),
        ("мая", 5), ("июня", 6), ("июля", 7), ("августа", 8),
        ("сентября", 9), ("октября", 10), ("ноября", 11), ("декабря", 12),
    ),
    time_prefixes=("в",),
    hour_words=("час", "часа", "часов"),
    meridiems=(("утра", "am"), ("ночи", "am"), ("дня", "pm"), ("вечера", "pm")),
    day_suffix_patterns=(r"\s*-?\s*го", r"\s*-?\s*е", r"\s*числа"),
    urgent=(
        "очень срочно", "прям срочно", "срочно", "немедленно",
        "как можно скорее", "в крайние сроки", "в кратчайшие сроки",
        "до конца дня",
    ),
    # "необходимо" sits between important and urgent; kept as important
    important=(
        "очень важно", "крайне важно", "это важно", "важно",
        "приоритетно", "приоритет", "необходимо",
    ),
    address_prefixes=("по адресу", "адрес"),
    street_marker_patterns=(
        r"улица", r"ул\.", r"проспект", r"пр-т", r"переулок", r"пер\.",
        r"площадь", r"шоссе",
    ),
    transitions=(
        "и потом", "потом", "затем", "после этого", "далее", "и дальше",
        "дальше", "и еще", "и ещё", "а еще", "а ещё", "что еще", "что ещё",
    ),
    soft_connectors=(
        "также", "и еще", "и ещё", "ещё", "еще", "может быть", "плюс",
        "а еще", "а ещё", "и",
    ),
    fillers=(
        "итак", "ну", "короче", "в общем", "значит", "так", "получается",
        "вот", "типа",
    ),
    closing_phrases=(
        "всё", "все", "и всё", "и все", "я ну вот и всё", "ну вот и всё", "вот и всё",
        "что дальше", "в принципе всё",
    ),
    request_prefixes=("мне нужно", "мне надо", "надо", "нужно"),
    short_commands=("сон", "чай"),
    abbreviations=(
        "ул.", "пр.", "пер.", "д.", "кв.", "корп.", "стр.", "г.",
        "кг.", "гр.", "л.", "мл.", "шт.", "мин.", "руб.",
    ),
    clause_tails=(
        "в", "во", "на", "с", "со", "у", "к", "по", "около", "возле", "для", "до",
        "утром", "днём", "днем", "вечером", "ночью", "пожалуйста", "обязательно",
    ),
)

ENGLISH = Vocabulary(
    today=("today",),
    tomorrow=("tomorrow",),
    day_after_tomorrow=("the day after tomorrow", "day after tomorrow"),
    months=(
        ("january", 1), ("february", 2), ("march", 3), ("april", 4),
        ("may", 5), ("june", 6), ("july", 7), ("august", 8),
        ("september", 9), ("october", 10), ("november", 11), ("december", 12),
    ),
    time_prefixes=("at",),
    hour_words=("o'clock",),
    meridiems=(("am", "am"), ("pm", "pm")),
    date_prefixes=("on the", "on", "by the", "by"),
    day_suffix_patterns=(r"st", r"nd", r"rd", r"th"),
    day_words=("day",),
    month_links=("of",),
    urgent=("as soon as possible", "urgently", "urgent", "asap", "immediately"),
    important=("very important", "important", "high priority", "priority"),
    address_prefixes=("at address", "address"),
    street_marker_patterns=(
        r"street", r"st\.", r"road", r"rd\.", r"avenue", r"ave\.",
        r"boulevard", r"blvd",
    ),
    transitions=("and then", "then", "after that", "further", "also"),
    soft_connectors=("and also", "plus", "and"),
    fillers=("well", "so", "okay", "ok", "anyway", "um", "uh", "like"),
    closing_phrases=("that's all", "and that's all", "that is all", "nothing else", "that's it"),
    request_prefixes=("i need to", "need to", "i have to", "have to", "i must"),
    short_commands=("buy", "pay", "fix", "eat", "run", "gym", "nap"),
    abbreviations=("st.", "rd.", "ave.", "apt.", "no.", "kg.", "min.", "approx."),
    clause_tails=(
        "in", "at", "on", "with", "by", "for", "near", "before", "after", "please",
        "morning", "in the morning", "afternoon", "evening", "night", "tonight",
    ),
)

GERMAN = Vocabulary(
    today=("heute",),
    tomorrow=("morgen",),
    day_after_tomorrow=("übermorgen",),
    months=(
        ("januar", 1), ("februar", 2), ("märz", 3), ("april", 4),
        ("mai", 5), ("juni", 6), ("juli", 7), ("august", 8),
        ("september", 9), ("oktober", 10), ("november", 11), ("dezember", 12),
    ),
    time_prefixes=("um",),
    hour_words=("uhr",),
    date_prefixes=("am",),
    urgent=("sofort", "dringend"),
    important=("wichtig",),
    address_prefixes=("adresse",),
    street_marker_patterns=(r"straße", r"str\.", r"strasse", r"weg", r"platz", r"allee"),
    transitions=("und dann", "dann", "danach", "außerdem"),
    soft_connectors=("und",),
    fillers=("also", "na", "naja"),
    request_prefixes=("ich muss",),
    abbreviations=("str.", "nr.", "ca."),
    clause_tails=("in", "im", "mit", "bei", "bitte", "morgens", "abends"),
)

POLISH = Vocabulary(
    street_marker_patterns=(r"ulica", r"ul\.", r"aleja", r"al\.", r"plac"),
    abbreviations=("ul.", "al."),
)


LANGUAGES = {
    "ru": RUSSIAN,
    "en": ENGLISH,
    "de": GERMAN,
    "pl": POLISH,
}


def build_vocabulary(languages: Iterable[str]) -> Vocabulary:
    """Merge the vocabularies of the given language codes, in order.

    Raises:
        ValueError: for an unknown language code or an empty selection.
    """
    merged = None
    for code in languages:
        if code not in LANGUAGES:
            raise ValueError(f"Unsupported language: {code!r}")
        merged = LANGUAGES[code] if merged is None else merged.merge(LANGUAGES[code])
    if merged is None:
        raise ValueError("At least one language is required")
    return merged
