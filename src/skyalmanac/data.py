"""Data layer — reads the precomputed per-year JSON files into engine inputs."""

import json
from datetime import date, timedelta
from pathlib import Path

from loguru import logger

from skyalmanac.config import data_dir
from skyalmanac.models import DayAstronomy, DayRecord, MoonInfo, MoonTimes, SunTimes

YearData = dict[str, DayRecord]


class AlmanacDataError(Exception):
    """Missing or malformed almanac data."""


def parse_hm(value: str | None) -> int | None:
    """``"HH:MM"`` → minutes since midnight. None stays None (event does not occur)."""
    if value is None:
        return None
    try:
        hh, mm = value.split(":")
        h, m = int(hh), int(mm)
    except (AttributeError, ValueError) as e:
        raise AlmanacDataError(f"Bad time string: {value!r}") from e
    if not (0 <= h < 24 and 0 <= m < 60):
        raise AlmanacDataError(f"Time out of range: {value!r}")
    return h * 60 + m


def record_from_dict(raw: dict) -> DayRecord:
    try:
        return DayRecord(
            gregorian=raw["gregorian"],
            hebrew_date=raw["hebrew_date"],
            hebrew_day=int(raw["hebrew_day"]),
            hebrew_month=raw["hebrew_month"],
            hebrew_year=raw["hebrew_year"],
            moon=MoonInfo(
                illumination=float(raw["moon"]["illumination"]),
                age=float(raw["moon"]["age"]),
                waxing=bool(raw["moon"]["waxing"]),
            ),
            sun=SunTimes(sunrise=raw["sun"]["sunrise"], sunset=raw["sun"]["sunset"]),
            moon_times=MoonTimes(
                moonrise=raw["moon_times"]["moonrise"],
                moonset=raw["moon_times"]["moonset"],
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise AlmanacDataError(f"Malformed day record: {e}") from e


def record_to_dict(record: DayRecord) -> dict:
    return {
        "gregorian": record.gregorian,
        "hebrew_date": record.hebrew_date,
        "hebrew_day": record.hebrew_day,
        "hebrew_month": record.hebrew_month,
        "hebrew_year": record.hebrew_year,
        "moon": {
            "illumination": record.moon.illumination,
            "age": record.moon.age,
            "waxing": record.moon.waxing,
        },
        "sun": {"sunrise": record.sun.sunrise, "sunset": record.sun.sunset},
        "moon_times": {
            "moonrise": record.moon_times.moonrise,
            "moonset": record.moon_times.moonset,
        },
    }


def load_year(year: int, directory: Path | None = None) -> YearData:
    """Load ``<directory>/<year>.json``.

    Raises:
        AlmanacDataError: File missing, not JSON, or containing a bad record.
    """
    path = (directory or data_dir()) / f"{year}.json"
    if not path.exists():
        raise AlmanacDataError(f"No almanac data for {year} ({path})")
    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise AlmanacDataError(f"Corrupt year file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise AlmanacDataError(f"Year file {path} is not an object")
    logger.debug("[data] loaded year={} days={}", year, len(raw))
    return {key: record_from_dict(value) for key, value in raw.items()}


def find_record(
    iso_date: str, directory: Path | None = None
) -> tuple[DayRecord, DayRecord | None]:
    """Record for a date plus the previous day's record (may sit in the previous year's file).

    Raises:
        AlmanacDataError: Bad date string or no record for the date.
    """
    try:
        day = date.fromisoformat(iso_date)
    except ValueError as e:
        raise AlmanacDataError(f"Bad date: {iso_date!r}") from e
    year_data = load_year(day.year, directory)
    record = year_data.get(iso_date)
    if record is None:
        raise AlmanacDataError(f"No record for {iso_date}")

    prev_day = day - timedelta(days=1)
    prev_data = year_data
    if prev_day.year != day.year:
        try:
            prev_data = load_year(prev_day.year, directory)
        except AlmanacDataError:
            logger.warning("[data] no data before {}", iso_date)
            prev_data = {}
    return record, prev_data.get(prev_day.isoformat())


def to_astronomy(record: DayRecord) -> DayAstronomy:
    """Convert a stored record into the engine's minute-based input."""
    return DayAstronomy(
        sunrise=parse_hm(record.sun.sunrise),
        sunset=parse_hm(record.sun.sunset),
        moonrise=parse_hm(record.moon_times.moonrise),
        moonset=parse_hm(record.moon_times.moonset),
        hebrew_day=record.hebrew_day,
        illumination=record.moon.illumination,
        waxing=record.moon.waxing,
    )
