import json

import pytest

from skyalmanac.models import DayAstronomy


def make_record(
    gregorian="2024-04-23",
    hebrew_date="ט״ו בניסן תשפ״ד",
    hebrew_day=15,
    sunrise="06:03",
    sunset="19:15",
    moonrise="18:40",
    moonset="05:50",
    illumination=0.998,
    waxing=True,
):
    return {
        "gregorian": gregorian,
        "hebrew_date": hebrew_date,
        "hebrew_day": hebrew_day,
        "hebrew_month": "ניסן",
        "hebrew_year": "תשפ״ד",
        "moon": {"illumination": illumination, "age": 14.6, "waxing": waxing},
        "sun": {"sunrise": sunrise, "sunset": sunset},
        "moon_times": {"moonrise": moonrise, "moonset": moonset},
    }


def write_year_file(directory, year, records):
    path = directory / f"{year}.json"
    payload = {r["gregorian"]: r for r in records}
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def day():
    """Equinox-like day: sun 06:00-18:00, moon up 10:00-21:40."""
    return DayAstronomy(
        sunrise=360,
        sunset=1080,
        moonrise=600,
        moonset=1300,
        hebrew_day=8,
        illumination=0.52,
        waxing=True,
    )


@pytest.fixture
def data_dir(tmp_path):
    write_year_file(
        tmp_path,
        2024,
        [
            make_record(),
            make_record(gregorian="2024-04-22", hebrew_day=14, sunset="19:14"),
            make_record(gregorian="2024-01-01", hebrew_day=20, sunset="16:45"),
        ],
    )
    write_year_file(
        tmp_path, 2023, [make_record(gregorian="2023-12-31", hebrew_day=19, sunset="16:44")]
    )
    return tmp_path
