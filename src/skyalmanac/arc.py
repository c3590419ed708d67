"""Celestial arc positioner — maps rise/set times onto a screen-space arc.

The body travels left (east) to right (west) along a sine arc whose feet sit
on the horizon baseline. Arc height depends on the viewport aspect ratio so
the path looks proportionate on phones, tablets, and desktops, and its peak
always stays below the area reserved for the top overlay.
"""

import math
from dataclasses import dataclass

from skyalmanac.colors import clamp, lerp
from skyalmanac.config import DEFAULT_CONFIG, EngineConfig
from skyalmanac.models import ArcPoint
from skyalmanac.phases import DAY_MINUTES, wrap_minutes


@dataclass(frozen=True)
class ArcGeometry:
    """Arc shape for one viewport, in percentages of the viewport height."""

    height_pct: float
    clearance_pct: float
    baseline_pct: float


def arc_geometry(
    width: float, height: float, config: EngineConfig = DEFAULT_CONFIG
) -> ArcGeometry:
    """Arc height for a viewport, clamped between the minimum and just under the top clearance."""
    # Base shape is a circle whose diameter is the arc's horizontal span
    span_px = (config.arc_right_pct - config.arc_left_pct) / 100 * width
    circular_px = span_px / 2

    aspect = width / height
    if aspect < config.portrait_ratio:
        scale, clearance = config.portrait_arc_scale, config.portrait_clearance_pct
    elif aspect >= config.desktop_ratio:
        scale, clearance = config.desktop_arc_scale, config.desktop_clearance_pct
    else:
        scale, clearance = config.tablet_arc_scale, config.tablet_clearance_pct

    height_pct = circular_px * scale / height * 100
    ceiling = config.arc_baseline_pct - clearance - config.arc_peak_margin_pct
    height_pct = min(ceiling, max(config.arc_min_height_pct, height_pct))
    return ArcGeometry(
        height_pct=height_pct,
        clearance_pct=clearance,
        baseline_pct=config.arc_baseline_pct,
    )


def arc_progress(minutes: float, rise: int | None, set_: int | None) -> float | None:
    """Fraction of the visible span elapsed at ``minutes``, or None while the body is down.

    Handles rise/set pairs that cross midnight (``set_ < rise``). At the set
    minute the result is exactly 1.0.
    """
    if rise is None or set_ is None:
        return None
    minutes = wrap_minutes(minutes)
    rise = wrap_minutes(rise)
    set_ = wrap_minutes(set_)

    wraps = set_ < rise
    if wraps:
        visible = minutes >= rise or minutes <= set_
    else:
        visible = rise <= minutes <= set_
    if not visible:
        return None

    if wraps:
        total = (DAY_MINUTES - rise) + set_
        elapsed = minutes - rise if minutes >= rise else (DAY_MINUTES - rise) + minutes
    else:
        total = set_ - rise
        elapsed = minutes - rise

    if minutes == set_:
        return 1.0
    return clamp(elapsed / total, 0.0, 1.0) if total > 0 else 0.0


def arc_position(
    minutes: float,
    rise: int | None,
    set_: int | None,
    width: float,
    height: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ArcPoint | None:
    """Screen position of a body at ``minutes``, or None when it is not visible.

    Args:
        minutes: Query time, minutes since local midnight.
        rise: Rise time in minutes, None if the body does not rise that day.
        set_: Set time in minutes, None if the body does not set that day.
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        config: Arc bounds and aspect-ratio tuning.

    Returns:
        ArcPoint in pixels, or None below the horizon or for an empty viewport.
    """
    if width <= 0 or height <= 0:
        return None
    t = arc_progress(minutes, rise, set_)
    if t is None:
        return None

    geometry = arc_geometry(width, height, config)
    x_pct = lerp(config.arc_left_pct, config.arc_right_pct, t)
    y_pct = geometry.baseline_pct - math.sin(t * math.pi) * geometry.height_pct
    return ArcPoint(x=x_pct / 100 * width, y=y_pct / 100 * height)
