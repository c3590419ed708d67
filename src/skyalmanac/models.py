"""Data model definitions — explicit boundaries between the data layer, the engine and the renderers."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    date: str  # "YYYY-MM-DD"
    time: str | None = None  # "HH:MM", None = pick a moment when the moon is up


@dataclass(frozen=True)
class DayAstronomy:
    """Per-day engine input. Times are minutes since local midnight."""

    sunrise: int | None  # None = does not occur that day
    sunset: int | None
    moonrise: int | None
    moonset: int | None
    hebrew_day: int  # 1..30
    illumination: float  # Fraction of the lunar disc lit, 0..1
    waxing: bool


@dataclass(frozen=True)
class Viewport:
    """Pixel size of the sky container."""

    width: float
    height: float


@dataclass(frozen=True)
class ArcPoint:
    """Screen position of a body on its arc (pixels, y grows downwards)."""

    x: float
    y: float


class Phase(Enum):
    NIGHT = "night"
    DAWN_TRANSITION = "dawnTransition"
    DAY = "day"
    DUSK_TRANSITION = "duskTransition"


@dataclass(frozen=True)
class LinearGradient:
    """Two-stop vertical gradient."""

    top: str  # "#rrggbb"
    bottom: str

    def css(self) -> str:
        return f"linear-gradient(180deg, {self.top}, {self.bottom})"


@dataclass(frozen=True)
class RadialGlow:
    """Soft sun glow overlay centred at a point given in viewport percentages."""

    x_pct: float
    y_pct: float
    opacity: float  # 0..1

    def css(self) -> str:
        w = self.opacity
        center = f"{self.x_pct:.1f}% {self.y_pct:.1f}%"
        return (
            f"radial-gradient(circle at {center}, "
            f"rgba(255,179,107,{0.45 * w:.3f}) 0%, "
            f"rgba(255,179,107,{0.25 * w:.3f}) 10%, "
            f"rgba(255,179,107,0) 22%)"
        )


@dataclass(frozen=True)
class SkyGradient:
    """Sky background: base gradient plus an optional glow layered on top."""

    base: LinearGradient
    glow: RadialGlow | None = None

    def css(self) -> str:
        if self.glow is None or self.glow.opacity <= 0:
            return self.base.css()
        return f"{self.glow.css()}, {self.base.css()}"


@dataclass(frozen=True)
class MountainColors:
    top: str
    bottom: str
    shade: str


@dataclass(frozen=True)
class PhaseSample:
    """Colours for one (minutes, sunrise, sunset) query. Recomputed on every call."""

    phase: Phase
    sky: SkyGradient
    sea: LinearGradient
    mountain: MountainColors


@dataclass(frozen=True)
class MoonAppearance:
    """Hebrew-day approximation of the moon phase."""

    illumination: float  # 0..1
    right_lit: bool  # True while waxing (phase angle <= pi)


@dataclass(frozen=True)
class MoonInfo:
    illumination: float
    age: float  # Days since new moon
    waxing: bool


@dataclass(frozen=True)
class SunTimes:
    sunrise: str | None  # "HH:MM" local
    sunset: str | None


@dataclass(frozen=True)
class MoonTimes:
    moonrise: str | None
    moonset: str | None


@dataclass(frozen=True)
class DayRecord:
    """One entry of a precomputed year file."""

    gregorian: str  # "YYYY-MM-DD"
    hebrew_date: str  # Full Hebrew label ("ט״ו בניסן תשפ״ד")
    hebrew_day: int
    hebrew_month: str
    hebrew_year: str
    moon: MoonInfo
    sun: SunTimes
    moon_times: MoonTimes


@dataclass(frozen=True)
class HebrewLabel:
    day_num: int
    day: str
    month: str
    year: str
    full: str


@dataclass(frozen=True)
class MoonSilhouette:
    """Lit-region geometry of the moon disc, before and after the tilt transform."""

    kind: str  # "new" | "full" | "partial"
    illumination: float
    waxing: bool
    hebrew_day: int | None
    radius: float
    rx: float  # Horizontal radius of the terminator ellipse
    gibbous: bool
    outer_sweep: int  # SVG sweep flag of the lit limb
    inner_sweep: int  # SVG sweep flag of the terminator
    tilt_deg: float
    mirrored: bool

    @property
    def css_transform(self) -> str | None:
        if not self.mirrored:
            return None
        return f"rotate({self.tilt_deg:g}deg) scaleX(-1)"


@dataclass(frozen=True)
class SkyFrame:
    """Everything a renderer needs to paint one moment. The sole input to renderers."""

    date: str
    minutes: int
    viewport: Viewport
    sample: PhaseSample
    sun: ArcPoint | None  # None = below the horizon
    moon: ArcPoint | None
    silhouette: MoonSilhouette
    hebrew_date: str
    illumination_pct: int
    stage_sentence: str
    hebrew_window: tuple[int | None, int | None] = (None, None)  # Sunset-to-sunset bounds
    fact: str = ""  # Trivia line shown beside the sky
    mode: str = "mode-night"  # Overlay contrast class: mode-day, mode-dusk, or mode-night
