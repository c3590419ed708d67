"""Moon phase geometry.

Two independent models live side by side:

* :func:`appearance_from_hebrew_day` approximates illumination from the day
  of the Hebrew (lunar) month alone, with day 15 as the full moon;
* :func:`moon_silhouette` turns an illumination fraction and a waxing flag
  (normally from the precomputed data) into the lit-region outline.

The disc lives in an 80x80 box centred at (40, 40) with radius 40, SVG
coordinates (y grows downwards).
"""

import math

import numpy as np

from skyalmanac.colors import clamp
from skyalmanac.config import DEFAULT_CONFIG, EngineConfig
from skyalmanac.models import MoonAppearance, MoonSilhouette

SYNODIC_MONTH = 29.530588853
# Shifts the cycle so Hebrew day 15 lands on phase angle pi (full moon)
# and day 1 on a thin waxing crescent.
HEBREW_DAY_OFFSET = SYNODIC_MONTH / 2 - 14

NEW_MOON_LIMIT = 0.001
FULL_MOON_LIMIT = 0.999

# Crater texture (cx, cy, r) in the 80x80 box
CRATERS: tuple[tuple[float, float, float], ...] = (
    (35, 15, 2.4), (50, 18, 1.6), (25, 20, 1.8), (42, 12, 1.4), (60, 15, 1.2),
    (18, 28, 3.2), (62, 25, 2.8), (45, 28, 1.8), (32, 22, 1.5), (68, 32, 1.6),
    (28, 38, 4.2), (55, 35, 3.8), (40, 42, 2.6), (15, 45, 2.4), (65, 40, 2.0),
    (22, 48, 2.2), (58, 48, 2.8), (38, 55, 1.8), (45, 52, 1.4), (28, 58, 1.6),
    (32, 62, 2.0), (48, 60, 1.6), (55, 65, 1.3), (40, 68, 1.5),
    (12, 40, 1.8), (70, 50, 1.4), (10, 25, 1.2),
)
CRATER_RIMS: tuple[tuple[float, float, float], ...] = (
    (18, 28, 2.8), (28, 38, 3.8), (55, 35, 3.4), (15, 45, 2.0), (58, 48, 2.4),
)


def appearance_from_hebrew_day(hebrew_day: int) -> MoonAppearance:
    """Illumination and lit side implied by the day of the Hebrew month.

    The day is clamped to 1..30 and mapped onto the synodic cycle, wrapping
    rather than clamping the phase.
    """
    day = clamp(hebrew_day, 1, 30)
    day_idx = (day - 1 + HEBREW_DAY_OFFSET) % SYNODIC_MONTH
    phase_angle = 2 * math.pi * day_idx / SYNODIC_MONTH
    illumination = (1 - math.cos(phase_angle)) / 2
    return MoonAppearance(illumination=illumination, right_lit=phase_angle <= math.pi)


def moon_silhouette(
    illumination: float,
    waxing: bool,
    hebrew_day: int | None = None,
    tilt: bool = True,
    config: EngineConfig = DEFAULT_CONFIG,
) -> MoonSilhouette:
    """Lit-region geometry for an illumination fraction.

    Args:
        illumination: Lit fraction of the disc; clamped to 0..1.
        waxing: True lights the leading limb, False the trailing one.
        hebrew_day: Enables the thicker edge-day crescent and the tilt direction.
        tilt: Apply the mirror transform; the rotation also needs ``hebrew_day``.
        config: Radius, tilt angle, and thickness floors.

    Returns:
        MoonSilhouette of kind "new", "full", or "partial".
    """
    radius = config.moon_radius
    illumination = clamp(illumination, 0.0, 1.0)
    i = clamp(illumination, NEW_MOON_LIMIT, FULL_MOON_LIMIT)
    shadow = 1 - i
    rx = radius * abs(2 * shadow - 1)

    is_edge_day = hebrew_day is not None and (hebrew_day <= 2 or hebrew_day >= 29)
    if is_edge_day:
        rx = max(round(radius * config.moon_edge_floor), rx)
    elif i < 0.06 or i > 0.94:
        rx = max(round(radius * config.moon_thin_floor), rx)

    tilt_deg = 0.0
    if tilt and hebrew_day is not None:
        tilt_deg = config.moon_tilt_deg if hebrew_day <= 15 else -config.moon_tilt_deg

    if illumination <= NEW_MOON_LIMIT:
        kind = "new"
    elif illumination >= FULL_MOON_LIMIT:
        kind = "full"
    else:
        kind = "partial"

    gibbous = shadow < 0.5
    if waxing:
        outer_sweep, inner_sweep = 1, 1 if gibbous else 0
    else:
        outer_sweep, inner_sweep = 0, 0 if gibbous else 1

    return MoonSilhouette(
        kind=kind,
        illumination=illumination,
        waxing=waxing,
        hebrew_day=hebrew_day,
        radius=radius,
        rx=rx,
        gibbous=gibbous,
        outer_sweep=outer_sweep,
        inner_sweep=inner_sweep,
        tilt_deg=tilt_deg,
        mirrored=tilt,
    )


def silhouette_path(s: MoonSilhouette, cx: float = 40, cy: float = 40) -> str:
    """SVG path ``d`` of the lit region (empty for a new moon, full circle for a full one)."""
    r = s.radius
    if s.kind == "new":
        return ""
    if s.kind == "full":
        return (
            f"M {cx - r:g} {cy:g} A {r:g} {r:g} 0 1 1 {cx + r:g} {cy:g} "
            f"A {r:g} {r:g} 0 1 1 {cx - r:g} {cy:g} Z"
        )
    return " ".join(
        [
            f"M {cx:g} {cy - r:g}",
            f"A {r:g} {r:g} 0 0 {s.outer_sweep} {cx:g} {cy + r:g}",
            f"A {s.rx:g} {r:g} 0 0 {s.inner_sweep} {cx:g} {cy - r:g}",
            "Z",
        ]
    )


def lit_outline(
    s: MoonSilhouette, cx: float = 40, cy: float = 40, samples: int = 64
) -> np.ndarray:
    """Polygon (N x 2) of the lit region with tilt and mirror applied.

    Matches :func:`silhouette_path` followed by ``css_transform``, for
    renderers that cannot draw SVG arcs. Empty for a new moon.
    """
    r = s.radius
    if s.kind == "new":
        return np.empty((0, 2))
    if s.kind == "full":
        theta = np.linspace(0, 2 * math.pi, samples * 2, endpoint=False)
        points = np.column_stack([cx + r * np.cos(theta), cy + r * np.sin(theta)])
    else:
        # Limb from top to bottom on the lit side, terminator back to the top
        lit_side = 1 if s.waxing else -1
        bulge = -lit_side if s.gibbous else lit_side
        phi = np.linspace(-math.pi / 2, math.pi / 2, samples)
        limb = np.column_stack([cx + lit_side * r * np.cos(phi), cy + r * np.sin(phi)])
        phi_back = phi[::-1]
        terminator = np.column_stack(
            [cx + bulge * s.rx * np.cos(phi_back), cy + r * np.sin(phi_back)]
        )
        points = np.vstack([limb, terminator[1:-1]])

    if s.mirrored:
        points[:, 0] = 2 * cx - points[:, 0]
    if s.tilt_deg:
        # CSS rotate() turns clockwise on screen
        a = math.radians(s.tilt_deg)
        dx, dy = points[:, 0] - cx, points[:, 1] - cy
        points = np.column_stack(
            [cx + dx * math.cos(a) - dy * math.sin(a), cy + dx * math.sin(a) + dy * math.cos(a)]
        )
    return points

