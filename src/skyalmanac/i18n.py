"""Simple two-language (he/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "he": "הירח ביום שנולדת",
        "en": "The Moon on Your Day",
    },
    "label_east": {
        "he": "מזרח",
        "en": "East",
    },
    "label_west": {
        "he": "מערב",
        "en": "West",
    },
    "label_illumination": {
        "he": "{pct}% מואר",
        "en": "{pct}% illuminated",
    },
    "stage_born": {
        "he": "תחילת החודש – הירח נולד",
        "en": "Start of the month – the moon is born",
    },
    "stage_growing": {
        "he": "הירח מתמלא – כל יום הוא גדול יותר",
        "en": "The moon is filling – bigger every day",
    },
    "stage_almost_full": {
        "he": "הירח כמעט מלא – צורתו עגולה כמעט לגמרי",
        "en": "Almost full – nearly a complete circle",
    },
    "stage_full": {
        "he": "ירח מלא – הלילה הכי מואר בחודש",
        "en": "Full moon – the brightest night of the month",
    },
    "stage_shrinking": {
        "he": "הירח מתמעט – הלילה מתחיל להתכהות",
        "en": "The moon is waning – nights grow darker",
    },
    "stage_fading": {
        "he": "הירח נעלם – כמעט ואינו נראה",
        "en": "The moon is fading – hardly visible",
    },
    "stage_ending": {
        "he": "סוף החודש – הירח דק מאוד ונעלם בקרוב",
        "en": "End of the month – a thin sliver about to vanish",
    },
    "label_did_you_know": {
        "he": "הידעת?",
        "en": "Did you know?",
    },
    "error_no_data": {
        "he": "אין נתונים לתאריך הזה ({error})",
        "en": "No data for this date ({error})",
    },
}

# Shown when the facts file is missing or empty
FALLBACK_FACTS: dict[str, list[str]] = {
    "he": [
        "הירח תמיד מראה לנו את אותו הצד.",
        "אור הירח הוא בעצם אור שמש שמוחזר ממנו.",
        "ליקוי ירח מלא צובע את הירח באדום נחושת!",
    ],
    "en": [
        "The moon always shows us the same side.",
        "Moonlight is sunlight reflected off the moon.",
        "A total lunar eclipse turns the moon copper red!",
    ],
}


def t(key: str, lang: str, **kwargs: object) -> str:
    """Return the translated string for key in lang, formatted with kwargs.

    Falls back to 'he', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    text = entry.get(lang) or entry.get("he") or key
    return text.format(**kwargs) if kwargs else text


def stage_key(hebrew_day: int) -> str:
    """String key describing the moon's stage on a day of the Hebrew month. Days outside 1..30 are clamped."""
    hebrew_day = min(30, max(1, hebrew_day))
    if 1 <= hebrew_day <= 3:
        return "stage_born"
    if 4 <= hebrew_day <= 7:
        return "stage_growing"
    if 8 <= hebrew_day <= 13:
        return "stage_almost_full"
    if 14 <= hebrew_day <= 16:
        return "stage_full"
    if 17 <= hebrew_day <= 21:
        return "stage_shrinking"
    if 22 <= hebrew_day <= 27:
        return "stage_fading"
    return "stage_ending"


def stage_sentence(hebrew_day: int, lang: str = "he") -> str:
    return t(stage_key(hebrew_day), lang)
