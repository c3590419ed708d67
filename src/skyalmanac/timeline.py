"""Clock-string conversion and circular-timeline helpers used around the engine.

Also holds the auto-sweep plan: a stateless description of the time-cursor
animation that a driver samples every frame until it is done.
"""

import math
from dataclasses import dataclass

from skyalmanac.colors import clamp
from skyalmanac.models import DayAstronomy
from skyalmanac.phases import DAY_MINUTES, wrap_minutes

# Slider ticks per minute of the day
SLIDER_SLOWDOWN_FACTOR = 4

Segment = tuple[int, int]


def minutes_to_hm(minutes: float) -> str:
    m = int(wrap_minutes(round(minutes)))
    return f"{m // 60:02d}:{m % 60:02d}"


def to_segments(start: int, end: int) -> list[Segment]:
    """Split a possibly midnight-crossing interval into non-wrapping segments."""
    if end >= start:
        return [(start, end)]
    return [(start, DAY_MINUTES), (0, end)]


def intersect_segments(a: list[Segment], b: list[Segment]) -> list[Segment]:
    out: list[Segment] = []
    for sa, ea in a:
        for sb, eb in b:
            s, e = max(sa, sb), min(ea, eb)
            if e > s:
                out.append((s, e))
    return out


def midpoint_of_interval(start: int, end: int) -> int:
    if end >= start:
        return start + (end - start) // 2
    span = (DAY_MINUTES - start) + end
    return (start + span // 2) % DAY_MINUTES


def hebrew_day_window(
    prev_sunset: int | None, sunset: int | None, offset: int = 20
) -> tuple[int | None, int | None]:
    """Hebrew day bounds: yesterday's sunset to today's sunset, each shifted by ``offset``."""
    start = (prev_sunset + offset) % DAY_MINUTES if prev_sunset is not None else None
    end = (sunset + offset) % DAY_MINUTES if sunset is not None else None
    return start, end


def default_query_minutes(day: DayAstronomy) -> int | None:
    """A moment of the civil day when the moon is up, as close to its mid-transit as possible.

    Restricted to [00:00, sunset]. Falls back to the middle of that span when
    the moon is not up in it, and to None without a sunset.
    """
    if day.sunset is None:
        return None
    day_segment = [(0, day.sunset)]
    mr, ms = day.moonrise, day.moonset

    if mr is not None and ms is not None:
        visible = to_segments(mr, ms)
        mid_visible = midpoint_of_interval(mr, ms)
    elif mr is not None:
        visible = [(mr, DAY_MINUTES)]
        mid_visible = midpoint_of_interval(mr, DAY_MINUTES)
    elif ms is not None:
        visible = [(0, ms)]
        mid_visible = midpoint_of_interval(0, ms)
    else:
        visible = []
        mid_visible = 0

    best_point: int | None = None
    best_dist = math.inf
    for s, e in intersect_segments(visible, day_segment):
        if s <= mid_visible <= e:
            candidate = mid_visible
        else:
            candidate = s if abs(mid_visible - s) < abs(mid_visible - e) else e
        dist = min(abs(candidate - mid_visible), abs(candidate + DAY_MINUTES - mid_visible))
        if dist < best_dist:
            best_point, best_dist = candidate, dist
    if best_point is not None:
        return best_point
    return day.sunset // 2


def slider_to_minutes(position: float) -> int:
    """Slider position (``SLIDER_SLOWDOWN_FACTOR`` ticks per minute) to a minute of the day."""
    return int(clamp(round(position / SLIDER_SLOWDOWN_FACTOR), 0, DAY_MINUTES - 1))


def minutes_to_slider(minutes: float) -> float:
    return wrap_minutes(minutes) * SLIDER_SLOWDOWN_FACTOR


def smoothstep(progress: float) -> float:
    p = clamp(progress, 0.0, 1.0)
    return p * p * (3 - 2 * p)


@dataclass(frozen=True)
class SweepPlan:
    """Eased sweep of the time cursor over ``total`` minutes starting at ``start``.

    The driver calls :meth:`sample` with increasing elapsed times until
    :meth:`done`; cancelling means simply not calling it again.
    """

    start: float  # May be negative; samples are wrapped onto the day
    total: float
    duration_ms: float = 10_000

    def progress(self, elapsed_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return clamp(elapsed_ms / self.duration_ms, 0.0, 1.0)

    def sample(self, elapsed_ms: float) -> int:
        eased = smoothstep(self.progress(elapsed_ms))
        return int(round(wrap_minutes(self.start + eased * self.total))) % DAY_MINUTES

    def done(self, elapsed_ms: float) -> bool:
        return self.progress(elapsed_ms) >= 1.0


def plan_sweep(day: DayAstronomy, duration_ms: float = 10_000) -> SweepPlan | None:
    """Sweep from 30 minutes before moonrise through a full day.

    Ends at midnight when the moon rises after sunset, otherwise 75 minutes
    after the next moonrise. No plan without a moonrise.
    """
    if day.moonrise is None:
        return None
    start = day.moonrise - 30
    ends_at_midnight = day.sunset is not None and day.moonrise > day.sunset
    if ends_at_midnight:
        total = DAY_MINUTES + (DAY_MINUTES - wrap_minutes(start))
    else:
        total = DAY_MINUTES + 105
    return SweepPlan(start=start, total=total, duration_ms=duration_ms)
