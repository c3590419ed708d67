"""Tuning constants for the sky engine, overridable from the environment.

Entry points call ``load_dotenv()`` first, so values may also come from a
``.env`` file. Every numeric field of :class:`EngineConfig` can be overridden
with ``SKYALMANAC_<FIELD_NAME>``, e.g. ``SKYALMANAC_SEA_LAG=20``.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

from loguru import logger

_ROOT = Path(__file__).parent.parent.parent
_ENV_PREFIX = "SKYALMANAC_"


@dataclass(frozen=True)
class EngineConfig:
    """All product/tuning values of the engine. Times are minutes, percentages of the viewport."""

    # Colour transition windows around sunrise/sunset
    dawn_lead: int = 60  # Dawn blend starts this long before sunrise
    dawn_lag: int = 30  # ... and ends this long after
    dusk_lead: int = 45
    dusk_lag: int = 30

    # Sun glow overlay
    glow_dawn_lead: int = 30  # Glow fades in over this window before sunrise
    glow_dusk_lead: int = 45  # ... and before sunset
    glow_fade: int = 30  # Fade-out after the transition window closes

    # Sea and mountains trail the sky
    sea_lag: int = 30

    # Arc geometry
    arc_left_pct: float = 5.0  # East end of the arc
    arc_right_pct: float = 95.0  # West end of the arc
    arc_baseline_pct: float = 85.0  # Horizon line (top of the sea)
    arc_min_height_pct: float = 25.0
    arc_peak_margin_pct: float = 0.5  # Gap kept between the arc peak and the overlay
    portrait_ratio: float = 1.0  # width/height below this is portrait
    desktop_ratio: float = 1.6  # width/height at or above this is desktop
    portrait_arc_scale: float = 1.15
    tablet_arc_scale: float = 1.0
    desktop_arc_scale: float = 0.85
    portrait_clearance_pct: float = 25.0  # Room kept free for the top overlay
    tablet_clearance_pct: float = 22.0
    desktop_clearance_pct: float = 20.0

    # Moon geometry
    moon_radius: float = 40.0
    moon_tilt_deg: float = 35.0
    moon_edge_floor: float = 0.28  # Minimum terminator rx (x radius) on edge Hebrew days
    moon_thin_floor: float = 0.15  # Minimum terminator rx for very thin/full phases

    # Hebrew day starts this long after sunset
    hebrew_day_offset: int = 20

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "EngineConfig":
        """Build a config from defaults plus ``SKYALMANAC_*`` overrides.

        Unparseable values are skipped with a warning.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, int | float] = {}
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            caster = int if f.type in (int, "int") else float
            try:
                overrides[f.name] = caster(raw)
            except ValueError:
                logger.warning("[config] ignoring {}={!r}", _ENV_PREFIX + f.name.upper(), raw)
                continue
            logger.debug("[config] {}={}", f.name, overrides[f.name])
        return replace(cls(), **overrides)


DEFAULT_CONFIG = EngineConfig()


def data_dir() -> Path:
    """Directory holding the ``<year>.json`` files and ``facts.json``."""
    raw = os.environ.get(_ENV_PREFIX + "DATA_DIR")
    return Path(raw) if raw else _ROOT / "data"
