"""Day/night phase model on a circular 24-hour timeline.

Two views of the same sunrise/sunset pair live here:

* the *labelled* phase (:func:`phase_at`): DAY while the sun is up, the
  transition states for the twilight lead-in before sunrise and the lead-out
  after sunset, NIGHT otherwise;
* the *colour* stage (:func:`color_stage`): which palette blend applies, with
  windows that straddle sunrise and sunset so colours keep changing for a
  while after the sun is up (or down).

Every interval is half-open (closed-left, open-right) so a minute on a
boundary belongs to the state that starts there.
"""

from dataclasses import dataclass

from skyalmanac.colors import clamp, mix_colors
from skyalmanac.config import DEFAULT_CONFIG, EngineConfig
from skyalmanac.models import Phase

DAY_MINUTES = 1440


def wrap_minutes(minutes: float) -> float:
    """Bring any minute value into [0, 1440)."""
    return minutes % DAY_MINUTES


@dataclass(frozen=True)
class Window:
    """Half-open interval ``[start, start + span)`` on the circular day."""

    start: int
    span: int

    @property
    def end(self) -> int:
        return self.start + self.span

    def contains(self, minutes: float) -> bool:
        if self.span <= 0:
            return False
        if self.span >= DAY_MINUTES:
            return True
        return wrap_minutes(minutes - self.start) < self.span

    def progress(self, minutes: float) -> float:
        """Position of ``minutes`` inside the window as 0..1. Zero-length windows give 0."""
        if self.span <= 0:
            return 0.0
        return clamp(wrap_minutes(minutes - self.start) / self.span, 0.0, 1.0)


@dataclass(frozen=True)
class TransitionWindows:
    dawn: Window
    day: Window  # Between the two colour transitions
    dusk: Window
    daylight: Window  # Sunrise to sunset


def transition_windows(
    sunrise: int, sunset: int, config: EngineConfig = DEFAULT_CONFIG
) -> TransitionWindows:
    daylight = int(wrap_minutes(sunset - sunrise))
    dawn = Window(sunrise - config.dawn_lead, max(0, config.dawn_lead + config.dawn_lag))
    dusk = Window(sunset - config.dusk_lead, max(0, config.dusk_lead + config.dusk_lag))
    day = Window(sunrise + config.dawn_lag, max(0, daylight - config.dawn_lag - config.dusk_lead))
    return TransitionWindows(
        dawn=dawn, day=day, dusk=dusk, daylight=Window(sunrise, daylight)
    )


def phase_at(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Phase:
    """Labelled phase for a time of day. Missing sunrise or sunset means permanent night."""
    if sunrise is None or sunset is None:
        return Phase.NIGHT
    windows = transition_windows(sunrise, sunset, config)
    if windows.daylight.contains(minutes):
        return Phase.DAY
    if Window(windows.dawn.start, config.dawn_lead).contains(minutes):
        return Phase.DAWN_TRANSITION
    if Window(sunset, config.dusk_lag).contains(minutes):
        return Phase.DUSK_TRANSITION
    return Phase.NIGHT


def color_stage(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[Phase, float]:
    """Palette stage and its local progress ``t`` (0 outside the transitions)."""
    if sunrise is None or sunset is None:
        return Phase.NIGHT, 0.0
    windows = transition_windows(sunrise, sunset, config)
    if windows.dawn.contains(minutes):
        return Phase.DAWN_TRANSITION, windows.dawn.progress(minutes)
    if windows.dusk.contains(minutes):
        return Phase.DUSK_TRANSITION, windows.dusk.progress(minutes)
    if windows.day.contains(minutes):
        return Phase.DAY, 0.0
    return Phase.NIGHT, 0.0


@dataclass(frozen=True)
class Palette:
    """Colour stops for the four key moments of the day. All tuples have the same length."""

    night: tuple[str, ...]
    dawn: tuple[str, ...]
    day: tuple[str, ...]
    dusk: tuple[str, ...]


def blend_palette(palette: Palette, stage: Phase, t: float) -> tuple[str, ...]:
    """Colours for a stage. Transitions are split at t=0.5 into two half-stages."""
    if stage is Phase.DAY:
        return palette.day
    if stage is Phase.NIGHT:
        return palette.night
    t = clamp(t, 0.0, 1.0)
    if stage is Phase.DAWN_TRANSITION:
        first, middle, last = palette.night, palette.dawn, palette.day
    else:
        first, middle, last = palette.day, palette.dusk, palette.night
    if t < 0.5:
        return mix_colors(first, middle, t / 0.5)
    return mix_colors(middle, last, (t - 0.5) / 0.5)
