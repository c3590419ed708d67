from datetime import date, datetime

import pytest
from pytz import timezone

from skyalmanac.data import load_year
from skyalmanac.generate import (
    TEL_AVIV,
    Location,
    first_events_by_date,
    fmt_hm,
    hebrew_label_for,
    hebrew_month_name,
    resolve_location,
    write_year,
)
from skyalmanac.models import DayRecord, MoonInfo, MoonTimes, SunTimes


class _Time:
    """Minimal stand-in for a skyfield Time element."""

    def __init__(self, utc):
        self._utc = utc

    def astimezone(self, tz):
        return self._utc.astimezone(tz)


def test_fmt_hm():
    assert fmt_hm(datetime(2024, 1, 1, 6, 5, 59)) == "06:05"
    assert fmt_hm(None) is None


def test_first_events_by_date_uses_local_days():
    tz = timezone("Asia/Jerusalem")
    utc = timezone("UTC")
    times = [
        _Time(utc.localize(datetime(2024, 4, 22, 22, 30))),  # 01:30 local on the 23rd
        _Time(utc.localize(datetime(2024, 4, 23, 10, 0))),
        _Time(utc.localize(datetime(2024, 4, 24, 3, 0))),
    ]
    events = first_events_by_date(times, [True, True, False], tz)
    assert set(events) == {date(2024, 4, 23)}
    assert fmt_hm(events[date(2024, 4, 23)]) == "01:30"


def test_hebrew_label_for_passover():
    label = hebrew_label_for(date(2024, 4, 23))
    assert label.day_num == 15
    assert label.month == "ניסן"
    assert label.full == "ט״ו בניסן תשפ״ד"


def test_hebrew_month_name_leap_years():
    assert hebrew_month_name(1, 5784) == "Nisan"
    assert hebrew_month_name(12, 5784) == "Adar I"
    assert hebrew_month_name(13, 5784) == "Adar II"
    assert hebrew_month_name(12, 5785) == "Adar"


def test_adar_labels():
    # 2024-03-01 is 21 Adar I 5784; 2025-03-10 is 10 Adar 5785
    assert hebrew_label_for(date(2024, 3, 1)).month == "אדר א׳"
    assert hebrew_label_for(date(2025, 3, 10)).month == "אדר"


def test_resolve_location():
    assert resolve_location(None, None, None) == TEL_AVIV
    assert resolve_location(None, None, "UTC").tz == "UTC"
    assert resolve_location(31.77, 35.21, "Asia/Jerusalem") == Location(31.77, 35.21, "Asia/Jerusalem")
    with pytest.raises(ValueError):
        resolve_location(31.77, None, None)


def test_write_year_is_loadable(tmp_path):
    record = DayRecord(
        gregorian="2024-04-23",
        hebrew_date="ט״ו בניסן תשפ״ד",
        hebrew_day=15,
        hebrew_month="ניסן",
        hebrew_year="תשפ״ד",
        moon=MoonInfo(illumination=0.998, age=14.62, waxing=True),
        sun=SunTimes(sunrise="06:03", sunset="19:15"),
        moon_times=MoonTimes(moonrise="18:40", moonset=None),
    )
    path = write_year({record.gregorian: record}, 2024, tmp_path)
    assert path == tmp_path / "2024.json"
    assert "ניסן" in path.read_text(encoding="utf-8")
    assert load_year(2024, tmp_path) == {"2024-04-23": record}
