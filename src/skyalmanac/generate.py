"""Offline generator for the yearly almanac JSON files.

Computes sun and moon events for every local day at a fixed location with
skyfield, adds the Hebrew date from convertdate, and writes one
``<year>.json`` per Gregorian year:

    python -m skyalmanac.generate --year 2024
    python -m skyalmanac.generate --start 1948 --end 2029 --out data/
"""

import argparse
import json
import sys
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path

from convertdate import hebrew
from dotenv import load_dotenv
from loguru import logger
from pytz import timezone
from skyfield import almanac
from skyfield.api import Loader, wgs84
from timezonefinder import TimezoneFinder

from skyalmanac.config import data_dir
from skyalmanac.data import YearData, record_to_dict
from skyalmanac.hebrew import hebrew_label
from skyalmanac.models import DayRecord, HebrewLabel, MoonInfo, MoonTimes, SunTimes
from skyalmanac.moon import SYNODIC_MONTH

_ROOT = Path(__file__).parent.parent.parent

START_YEAR = 1948
END_YEAR = 2029

# Apparent horizon for the upper limb, refraction included
SUN_HORIZON_DEG = -0.8333
MOON_HORIZON_DEG = 0.125

# convertdate numbers months from Nisan; 12 and 13 are Adar/Adar II
_MONTH_NAMES = (
    "",
    "Nisan",
    "Iyyar",
    "Sivan",
    "Tammuz",
    "Av",
    "Elul",
    "Tishrei",
    "Heshvan",
    "Kislev",
    "Tevet",
    "Shevat",
    "Adar",
    "Adar II",
)


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float
    tz: str  # IANA zone name


TEL_AVIV = Location(lat=32.0853, lon=34.7818, tz="Asia/Jerusalem")


def fmt_hm(dt: datetime | None) -> str | None:
    """Local datetime → ``"HH:MM"`` (seconds truncated). None stays None."""
    if dt is None:
        return None
    return f"{dt.hour:02d}:{dt.minute:02d}"


def first_events_by_date(times, flags, tz) -> dict[date, datetime]:
    """First real event per local calendar day.

    Args:
        times: skyfield Time array from ``find_risings``/``find_settings``.
        flags: Matching boolean array; False marks a near miss, not an event.
        tz: pytz timezone of the observer.

    Returns:
        Mapping of local date to the local datetime of its first event.
    """
    events: dict[date, datetime] = {}
    for t, real in zip(times, flags):
        if not real:
            continue
        local = t.astimezone(tz)
        events.setdefault(local.date(), local)
    return events


def hebrew_month_name(month: int, year: int) -> str:
    """English month name; Adar becomes Adar I in leap years."""
    if month == 12 and hebrew.leap(year):
        return "Adar I"
    return _MONTH_NAMES[month]


def hebrew_label_for(day: date) -> HebrewLabel:
    """Hebrew calendar label for a Gregorian date (the date's daytime)."""
    h_year, h_month, h_day = hebrew.from_gregorian(day.year, day.month, day.day)
    return hebrew_label(h_day, hebrew_month_name(h_month, h_year), h_year)


def load_ephemeris(directory: Path | None = None):
    """(ephemeris, timescale) from a skyfield Loader; downloads de421.bsp on first use."""
    loader = Loader(str(directory or _ROOT / "resources"))
    return loader("de421.bsp"), loader.timescale()


def generate_year(
    year: int,
    location: Location = TEL_AVIV,
    eph=None,
    ts=None,
) -> YearData:
    """Compute every day record of one Gregorian year.

    Args:
        year: Gregorian year.
        location: Observer location and its time zone.
        eph: skyfield ephemeris. Loaded with :func:`load_ephemeris` if None.
        ts: skyfield timescale matching ``eph``.

    Returns:
        Records keyed by ISO date.
    """
    if eph is None or ts is None:
        eph, ts = load_ephemeris()
    tz = timezone(location.tz)
    observer = eph["earth"] + wgs84.latlon(
        latitude_degrees=location.lat, longitude_degrees=location.lon
    )

    days = []
    day = date(year, 1, 1)
    while day.year == year:
        days.append(day)
        day += timedelta(days=1)

    midnights = [tz.localize(datetime(d.year, d.month, d.day)) for d in days]
    t0 = ts.from_datetime(midnights[0])
    t1 = ts.from_datetime(tz.localize(datetime(year + 1, 1, 1)))

    sun, moon = eph["sun"], eph["moon"]
    sunrises = first_events_by_date(
        *almanac.find_risings(observer, sun, t0, t1, horizon_degrees=SUN_HORIZON_DEG), tz
    )
    sunsets = first_events_by_date(
        *almanac.find_settings(observer, sun, t0, t1, horizon_degrees=SUN_HORIZON_DEG), tz
    )
    moonrises = first_events_by_date(
        *almanac.find_risings(observer, moon, t0, t1, horizon_degrees=MOON_HORIZON_DEG), tz
    )
    moonsets = first_events_by_date(
        *almanac.find_settings(observer, moon, t0, t1, horizon_degrees=MOON_HORIZON_DEG), tz
    )

    t_midnight = ts.from_datetimes(midnights)
    illumination = almanac.fraction_illuminated(eph, "moon", t_midnight)
    phase_deg = almanac.moon_phase(eph, t_midnight).degrees

    records: YearData = {}
    for i, d in enumerate(days):
        label = hebrew_label_for(d)
        key = d.isoformat()
        records[key] = DayRecord(
            gregorian=key,
            hebrew_date=label.full,
            hebrew_day=label.day_num,
            hebrew_month=label.month,
            hebrew_year=label.year,
            moon=MoonInfo(
                illumination=round(min(1.0, max(0.0, float(illumination[i]))), 3),
                age=round(float(phase_deg[i]) / 360.0 * SYNODIC_MONTH, 2),
                waxing=bool(phase_deg[i] < 180.0),
            ),
            sun=SunTimes(
                sunrise=fmt_hm(sunrises.get(d)), sunset=fmt_hm(sunsets.get(d))
            ),
            moon_times=MoonTimes(
                moonrise=fmt_hm(moonrises.get(d)), moonset=fmt_hm(moonsets.get(d))
            ),
        )
    return records


def write_year(records: YearData, year: int, out_dir: Path) -> Path:
    """Write one year file as compact UTF-8 JSON."""
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{year}.json"
    payload = {key: record_to_dict(record) for key, record in records.items()}
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, separators=(",", ":"))
    return path


def resolve_location(
    lat: float | None, lon: float | None, tz: str | None
) -> Location:
    """Location from CLI options, falling back to Tel Aviv.

    Raises:
        ValueError: Only one of lat/lon given, or no time zone found.
    """
    if lat is None and lon is None:
        return Location(TEL_AVIV.lat, TEL_AVIV.lon, tz or TEL_AVIV.tz)
    if lat is None or lon is None:
        raise ValueError("--lat and --lon must be given together")
    if tz is None:
        tz = TimezoneFinder().timezone_at(lng=lon, lat=lat)
        if tz is None:
            raise ValueError(f"No time zone found for {lat}, {lon}")
    return Location(lat, lon, tz)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate yearly almanac JSON files.")
    parser.add_argument("--year", type=int, help="Generate a single year")
    parser.add_argument("--start", type=int, default=START_YEAR)
    parser.add_argument("--end", type=int, default=END_YEAR, help="Last year, inclusive")
    parser.add_argument("--out", type=Path, default=None, help="Output directory")
    parser.add_argument("--lat", type=float)
    parser.add_argument("--lon", type=float)
    parser.add_argument("--tz", help="IANA time zone, e.g. Asia/Jerusalem")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    try:
        location = resolve_location(args.lat, args.lon, args.tz)
    except ValueError as e:
        logger.error("[generate] {}", e)
        return 2

    years = [args.year] if args.year else list(range(args.start, args.end + 1))
    if not years:
        logger.error("[generate] empty year range {}..{}", args.start, args.end)
        return 2
    out_dir = args.out or data_dir()
    eph, ts = load_ephemeris()
    logger.info(
        "[generate] lat={} lon={} tz={} years={}..{}",
        location.lat, location.lon, location.tz, years[0], years[-1],
    )
    for year in years:
        path = write_year(generate_year(year, location, eph, ts), year, out_dir)
        logger.info("[generate] year={} path={}", year, path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
