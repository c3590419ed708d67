"""Frame composition — turns a query into everything needed to paint one moment."""

from dataclasses import replace
from pathlib import Path

from skyalmanac.arc import arc_position
from skyalmanac.colors import clamp
from skyalmanac.config import DEFAULT_CONFIG, EngineConfig, data_dir
from skyalmanac.data import find_record, parse_hm, to_astronomy
from skyalmanac.facts import load_facts, pick_fact
from skyalmanac.i18n import stage_sentence
from skyalmanac.models import DayAstronomy, QueryInput, SkyFrame, Viewport
from skyalmanac.moon import moon_silhouette
from skyalmanac.phases import wrap_minutes
from skyalmanac.sky import sample_phase, sky_mode
from skyalmanac.timeline import default_query_minutes, hebrew_day_window, plan_sweep

DEFAULT_VIEWPORT = Viewport(width=900, height=360)


def compute_frame(
    day: DayAstronomy,
    minutes: float,
    viewport: Viewport = DEFAULT_VIEWPORT,
    date: str = "",
    hebrew_date: str = "",
    config: EngineConfig = DEFAULT_CONFIG,
    lang: str = "he",
    prev_sunset: int | None = None,
) -> SkyFrame:
    """Evaluate the whole engine for one day and one minute.

    Args:
        day: Sun/moon times and moon state for the date.
        minutes: Query time, minutes since local midnight (wrapped into the day).
        viewport: Pixel size of the sky area.
        date: ISO date, carried through for display.
        hebrew_date: Hebrew date label, carried through for display.
        config: Engine tuning.
        lang: Language of the stage sentence ('he' or 'en').
        prev_sunset: Previous day's sunset, for the Hebrew day window.

    Returns:
        SkyFrame with colours, body positions, and the moon silhouette.
    """
    m = int(wrap_minutes(round(minutes)))
    return SkyFrame(
        date=date,
        minutes=m,
        viewport=viewport,
        sample=sample_phase(m, day.sunrise, day.sunset, viewport, config),
        sun=arc_position(m, day.sunrise, day.sunset, viewport.width, viewport.height, config),
        moon=arc_position(
            m, day.moonrise, day.moonset, viewport.width, viewport.height, config
        ),
        silhouette=moon_silhouette(
            day.illumination, day.waxing, day.hebrew_day, config=config
        ),
        hebrew_date=hebrew_date,
        illumination_pct=round(clamp(day.illumination, 0.0, 1.0) * 100),
        stage_sentence=stage_sentence(day.hebrew_day, lang),
        hebrew_window=hebrew_day_window(
            prev_sunset, day.sunset, config.hebrew_day_offset
        ),
        mode=sky_mode(m, day.sunrise, day.sunset, config),
    )


def run(
    query: QueryInput,
    viewport: Viewport = DEFAULT_VIEWPORT,
    config: EngineConfig = DEFAULT_CONFIG,
    directory: Path | None = None,
    lang: str = "he",
    previous_fact: str | None = None,
) -> SkyFrame:
    """Top-level entry point: takes a QueryInput and returns a SkyFrame.

    Without a time the frame shows a moment when the moon is up. A trivia
    line from ``facts.json`` (Hebrew) or the built-in pool is attached,
    avoiding ``previous_fact`` when possible.

    Raises:
        AlmanacDataError: No data for the date, or a malformed time string.
    """
    record, prev = find_record(query.date, directory)
    day = to_astronomy(record)
    minutes = parse_hm(query.time)
    if minutes is None:
        minutes = default_query_minutes(day) or 0
    frame = compute_frame(
        day,
        minutes,
        viewport=viewport,
        date=record.gregorian,
        hebrew_date=record.hebrew_date,
        config=config,
        lang=lang,
        prev_sunset=parse_hm(prev.sun.sunset) if prev is not None else None,
    )
    pool = load_facts((directory or data_dir()) / "facts.json") if lang == "he" else []
    return replace(frame, fact=pick_fact(pool, previous=previous_fact, lang=lang))


def sweep_frames(
    query: QueryInput,
    count: int = 24,
    viewport: Viewport = DEFAULT_VIEWPORT,
    config: EngineConfig = DEFAULT_CONFIG,
    directory: Path | None = None,
    lang: str = "he",
) -> list[SkyFrame]:
    """Frames sampled evenly (in wall-clock time) along the day's eased moon sweep.

    The sweep starts 30 minutes before moonrise; ``query.time`` is ignored.
    Empty when the moon does not rise that day.

    Raises:
        AlmanacDataError: No data for the date.
    """
    record, prev = find_record(query.date, directory)
    day = to_astronomy(record)
    plan = plan_sweep(day)
    if plan is None:
        return []
    count = max(2, count)
    prev_sunset = parse_hm(prev.sun.sunset) if prev is not None else None
    return [
        compute_frame(
            day,
            plan.sample(plan.duration_ms * i / (count - 1)),
            viewport=viewport,
            date=record.gregorian,
            hebrew_date=record.hebrew_date,
            config=config,
            lang=lang,
            prev_sunset=prev_sunset,
        )
        for i in range(count)
    ]
