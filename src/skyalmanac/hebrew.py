"""Hebrew calendar formatting: gematria numerals, month names, and date labels."""

from skyalmanac.colors import clamp
from skyalmanac.models import HebrewLabel

GERESH = "\u05f3"  # ׳
GERSHAYIM = "\u05f4"  # ״

_ONES = ["", "א", "ב", "ג", "ד", "ה", "ו", "ז", "ח", "ט"]
_VALUES = [400, 300, 200, 100, 90, 80, 70, 60, 50, 40, 30, 20, 10]
_GLYPHS = ["ת", "ש", "ר", "ק", "צ", "פ", "ע", "ס", "נ", "מ", "ל", "כ", "י"]

_LETTER_VALUES: dict[str, int] = {
    **{g: v for g, v in zip(_GLYPHS, _VALUES)},
    **{g: i for i, g in enumerate(_ONES) if g},
}

# Normalized English month name (see normalize_month_name) → Hebrew
_MONTHS: dict[str, str] = {
    "nisan": "ניסן",
    "iyar": "אייר",
    "iyyar": "אייר",
    "sivan": "סיון",
    "tamuz": "תמוז",
    "tammuz": "תמוז",
    "av": "אב",
    "elul": "אלול",
    "tishrei": "תשרי",
    "cheshvan": "חשון",
    "heshvan": "חשון",
    "marcheshvan": "חשון",
    "marheshvan": "חשון",
    "kislev": "כסלו",
    "tevet": "טבת",
    "teveth": "טבת",
    "shevat": "שבט",
    "shvat": "שבט",
    "shebat": "שבט",
    "adar": "אדר",
    "adari": "אדר א׳",
    "adar1": "אדר א׳",
    "adaraleph": "אדר א׳",
    "adarii": "אדר ב׳",
    "adar2": "אדר ב׳",
    "adarbet": "אדר ב׳",
    "veadar": "אדר ב׳",
}

_STRIP_CHARS = str.maketrans("", "", "\"'." + GERESH + GERSHAYIM)


def _numeral_letters(n: int) -> list[str]:
    """Greedy decomposition of 1..999 into letters, avoiding the divine-name spellings of 15/16."""
    letters: list[str] = []
    for value, glyph in zip(_VALUES, _GLYPHS):
        while n >= value and n not in (15, 16):
            letters.append(glyph)
            n -= value
    if n == 15:
        letters += ["ט", "ו"]
    elif n == 16:
        letters += ["ט", "ז"]
    elif n > 0:
        letters.append(_ONES[n])
    return letters


def _punctuate(letters: list[str]) -> str:
    if not letters:
        return ""
    if len(letters) == 1:
        return letters[0] + GERESH
    return "".join(letters[:-1]) + GERSHAYIM + letters[-1]


def day_letters(n: int) -> str:
    """Day of the Hebrew month as a numeral (1 → א׳, 15 → ט״ו). Clamped to 1..30."""
    return _punctuate(_numeral_letters(int(clamp(n, 1, 30))))


def year_letters(year: int) -> str:
    """Hebrew year without the thousands (5784 → תשפ״ד)."""
    return _punctuate(_numeral_letters(year % 1000))


def letters_value(text: str) -> int:
    """Sum the numeric values of the Hebrew letters in ``text``, ignoring punctuation."""
    return sum(_LETTER_VALUES.get(ch, 0) for ch in text)


def normalize_month_name(name: str) -> str:
    return "".join(name.lower().split()).translate(_STRIP_CHARS)


def month_to_hebrew(name: str) -> str:
    """Map an English month name to Hebrew. Unknown names are returned unchanged."""
    return _MONTHS.get(normalize_month_name(name), name)


def hebrew_label(day: int, month_name: str, year: int) -> HebrewLabel:
    """Build the display label, e.g. ``ט״ו בניסן תשפ״ד``."""
    day_str = day_letters(day)
    month = month_to_hebrew(month_name)
    year_str = year_letters(year)
    return HebrewLabel(
        day_num=day,
        day=day_str,
        month=month,
        year=year_str,
        full=f"{day_str} ב{month} {year_str}",
    )
