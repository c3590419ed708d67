"""Colour engine — sky gradient plus sea and mountain colours for a time of day.

All three layers share the transition windows from :mod:`skyalmanac.phases`.
Sea and mountains are evaluated ``config.sea_lag`` minutes behind the sky so
reflected light trails the sky colour change.
"""

from skyalmanac.arc import arc_position
from skyalmanac.config import DEFAULT_CONFIG, EngineConfig
from skyalmanac.models import (
    LinearGradient,
    MountainColors,
    PhaseSample,
    RadialGlow,
    SkyGradient,
    Viewport,
)
from skyalmanac.phases import (
    Palette,
    Window,
    blend_palette,
    color_stage,
    phase_at,
    transition_windows,
)

# (top, bottom)
SKY_PALETTE = Palette(
    night=("#0f1025", "#000000"),
    dawn=("#2b1242", "#8a2e4e"),
    day=("#a6d8ff", "#e9f6ff"),
    dusk=("#ffb36b", "#2b1242"),
)

SEA_PALETTE = Palette(
    night=("#1c3550", "#0e2744"),
    dawn=("#4f99c7", "#1f5a90"),
    day=("#8fd5ff", "#2c79b8"),
    dusk=("#4f99c7", "#1f5a90"),
)

# (top, bottom, shade)
MOUNTAIN_PALETTE = Palette(
    night=("#3f3168", "#1a1538", "#251b4a"),
    dawn=("#c99d74", "#8e623b", "#a37248"),
    day=("#f1dfc8", "#c7925e", "#d39a61"),
    dusk=("#7a4f8a", "#3b2a59", "#4a356a"),
)


def glow_weight(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[float, int | None]:
    """Opacity of the sun glow and the event (sunrise or sunset minute) it belongs to.

    The glow fades in before the event, holds until the colour transition
    ends, then fades out over ``config.glow_fade`` minutes.
    """
    if sunrise is None or sunset is None:
        return 0.0, None
    windows = transition_windows(sunrise, sunset, config)
    for event, lead, transition in (
        (sunrise, config.glow_dawn_lead, windows.dawn),
        (sunset, config.glow_dusk_lead, windows.dusk),
    ):
        fade_in = Window(event - lead, lead)
        hold = Window(event, transition.end - event)
        fade_out = Window(transition.end, config.glow_fade)
        if fade_in.contains(minutes):
            return fade_in.progress(minutes), event
        if hold.contains(minutes):
            return 1.0, event
        if fade_out.contains(minutes):
            return 1.0 - fade_out.progress(minutes), event
    return 0.0, None


def sun_glow(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    viewport: Viewport,
    config: EngineConfig = DEFAULT_CONFIG,
) -> RadialGlow | None:
    """Radial glow tracking the sun's arc position, or None when it is invisible.

    While the sun is still below the horizon the glow sits where it will
    rise (dawn) or where it just set (dusk).
    """
    weight, event = glow_weight(minutes, sunrise, sunset, config)
    if weight <= 0 or event is None:
        return None
    pos = arc_position(minutes, sunrise, sunset, viewport.width, viewport.height, config)
    if pos is None:
        pos = arc_position(event, sunrise, sunset, viewport.width, viewport.height, config)
    if pos is None:
        return None
    return RadialGlow(
        x_pct=pos.x / viewport.width * 100,
        y_pct=pos.y / viewport.height * 100,
        opacity=weight,
    )


def sky_gradient(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    viewport: Viewport | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> SkyGradient:
    """Sky background for a time of day. The glow is only added when a viewport is given."""
    stage, t = color_stage(minutes, sunrise, sunset, config)
    top, bottom = blend_palette(SKY_PALETTE, stage, t)
    glow = None
    if viewport is not None:
        glow = sun_glow(minutes, sunrise, sunset, viewport, config)
    return SkyGradient(base=LinearGradient(top=top, bottom=bottom), glow=glow)


def sea_gradient(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> LinearGradient:
    stage, t = color_stage(minutes - config.sea_lag, sunrise, sunset, config)
    top, bottom = blend_palette(SEA_PALETTE, stage, t)
    return LinearGradient(top=top, bottom=bottom)


def mountain_colors(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> MountainColors:
    stage, t = color_stage(minutes - config.sea_lag, sunrise, sunset, config)
    top, bottom, shade = blend_palette(MOUNTAIN_PALETTE, stage, t)
    return MountainColors(top=top, bottom=bottom, shade=shade)


def sample_phase(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    viewport: Viewport | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> PhaseSample:
    """Phase label plus sky, sea, and mountain colours for one moment."""
    return PhaseSample(
        phase=phase_at(minutes, sunrise, sunset, config),
        sky=sky_gradient(minutes, sunrise, sunset, viewport, config),
        sea=sea_gradient(minutes, sunrise, sunset, config),
        mountain=mountain_colors(minutes, sunrise, sunset, config),
    )


def sky_mode(
    minutes: float,
    sunrise: int | None,
    sunset: int | None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> str:
    """Coarse CSS class for overlay text contrast: mode-day, mode-dusk, or mode-night."""
    if sunrise is None or sunset is None:
        return "mode-night"
    windows = transition_windows(sunrise, sunset, config)
    lit = Window(
        windows.dawn.start,
        config.dawn_lead + windows.daylight.span + config.dusk_lag,
    )
    if not lit.contains(minutes):
        return "mode-night"
    if Window(sunrise, windows.daylight.span - config.dusk_lead).contains(minutes):
        return "mode-day"
    return "mode-dusk"
