"""SVG scene renderer.

Produces a self-contained SVG (optionally wrapped in a minimal HTML page)
for one SkyFrame: sky gradient with the sun glow, mountains, sea, the sun,
and the moon silhouette with its crater texture.

Coordinate system: viewBox="0 0 W H" in viewport pixels, y grows downwards,
so ArcPoint values are used as-is.
"""

from __future__ import annotations

import html
import math

from skyalmanac.i18n import t
from skyalmanac.models import SkyFrame
from skyalmanac.moon import CRATER_RIMS, CRATERS, silhouette_path

_SUN_COLOR = "#ffd36b"
_MOON_LIGHT = "#ffffff"
_MOON_EDGE = "#e2e8f0"
_CRATER_FILL = "#cbd5e1"
_CRATER_RIM = "#94a3b8"
_TEXT_COLORS = {"mode-day": "#0f172a", "mode-dusk": "#fff7ed", "mode-night": "#f8fafc"}


def _sun_radius(width: float, height: float) -> float:
    """Sun disc radius in pixels, proportional to the shorter side."""
    return max(6.0, min(width, height) * 0.045)


def _moon_scale(width: float, height: float) -> float:
    """Scale of the 80x80 moon box so the disc roughly matches the sun."""
    return _sun_radius(width, height) * 1.4 / 40


def _glow_svg(frame: SkyFrame) -> tuple[str, str]:
    """(defs, body) for the sun glow. Stops follow the CSS glow: 0%, 10%, 22% of the farthest corner."""
    glow = frame.sample.sky.glow
    if glow is None or glow.opacity <= 0:
        return "", ""
    w, h = frame.viewport.width, frame.viewport.height
    cx, cy = glow.x_pct / 100 * w, glow.y_pct / 100 * h
    farthest = max(math.hypot(cx - x, cy - y) for x in (0, w) for y in (0, h))
    r = farthest * 0.22
    op = glow.opacity
    defs = (
        f'<radialGradient id="glow" gradientUnits="userSpaceOnUse"'
        f' cx="{cx:.1f}" cy="{cy:.1f}" r="{r:.1f}">'
        f'<stop offset="0%" stop-color="#ffb36b" stop-opacity="{0.45 * op:.3f}"/>'
        f'<stop offset="45.5%" stop-color="#ffb36b" stop-opacity="{0.25 * op:.3f}"/>'
        f'<stop offset="100%" stop-color="#ffb36b" stop-opacity="0"/>'
        f"</radialGradient>"
    )
    body = f'<rect x="0" y="0" width="{w:g}" height="{h:g}" fill="url(#glow)"/>'
    return defs, body


def _mountains_svg(frame: SkyFrame, horizon_y: float) -> str:
    w = frame.viewport.width
    peak = horizon_y * 0.72
    colors = frame.sample.mountain
    ridge = (
        f"0,{horizon_y:.1f} {w * 0.18:.1f},{peak:.1f} {w * 0.34:.1f},{horizon_y * 0.86:.1f} "
        f"{w * 0.52:.1f},{horizon_y * 0.78:.1f} {w * 0.7:.1f},{horizon_y * 0.9:.1f} "
        f"{w * 0.86:.1f},{horizon_y * 0.8:.1f} {w:g},{horizon_y:.1f}"
    )
    shade = (
        f"{w * 0.18:.1f},{peak:.1f} {w * 0.24:.1f},{horizon_y:.1f} {w * 0.12:.1f},{horizon_y:.1f}"
    )
    return (
        f'<polygon points="{ridge}" fill="url(#mountain)"/>\n'
        f'    <polygon points="{shade}" fill="{colors.shade}" opacity="0.6"/>'
    )


def _moon_svg(frame: SkyFrame) -> tuple[str, str]:
    """(defs, body) for the moon, placed at its arc position."""
    s = frame.silhouette
    if frame.moon is None or s.kind == "new":
        return "", ""
    scale = _moon_scale(frame.viewport.width, frame.viewport.height)
    d = silhouette_path(s)
    tx = frame.moon.x - 40 * scale
    ty = frame.moon.y - 40 * scale

    inner = ""
    if s.mirrored:
        inner = f' transform="translate(40 40) rotate({s.tilt_deg:g}) scale(-1 1) translate(-40 -40)"'

    craters = "".join(
        f'<circle cx="{x:g}" cy="{y:g}" r="{r:g}"/>' for x, y, r in CRATERS
    )
    rims = "".join(f'<circle cx="{x:g}" cy="{y:g}" r="{r:g}"/>' for x, y, r in CRATER_RIMS)

    defs = (
        f'<radialGradient id="moonglow" cx="50%" cy="50%" r="60%">'
        f'<stop offset="0%" stop-color="{_MOON_LIGHT}" stop-opacity="0.95"/>'
        f'<stop offset="100%" stop-color="{_MOON_EDGE}" stop-opacity="0.9"/>'
        f"</radialGradient>"
        f'<clipPath id="moonlit"><path d="{d}"/></clipPath>'
    )
    body = (
        f'<g id="moon" transform="translate({tx:.1f} {ty:.1f}) scale({scale:.4f})">'
        f"<g{inner}>"
        f'<path d="{d}" fill="url(#moonglow)"/>'
        f'<g clip-path="url(#moonlit)">'
        f'<g fill="{_CRATER_FILL}" opacity="0.3">{craters}</g>'
        f'<g stroke="{_CRATER_RIM}" stroke-opacity="0.3" fill="none">{rims}</g>'
        f"</g></g></g>"
    )
    return defs, body


def render_svg(frame: SkyFrame, lang: str = "he") -> str:
    """Return a standalone SVG document for one frame.

    Args:
        frame: Fully computed frame.
        lang: Language for the east/west and illumination labels.

    Returns:
        SVG markup string.
    """
    w, h = frame.viewport.width, frame.viewport.height
    sky = frame.sample.sky.base
    sea = frame.sample.sea
    mountain = frame.sample.mountain
    horizon_y = h * 0.85

    glow_defs, glow_body = _glow_svg(frame)
    moon_defs, moon_body = _moon_svg(frame)

    sun_body = ""
    if frame.sun is not None:
        sun_body = (
            f'<circle cx="{frame.sun.x:.1f}" cy="{frame.sun.y:.1f}"'
            f' r="{_sun_radius(w, h):.1f}" fill="{_SUN_COLOR}"/>'
        )

    label = t("label_illumination", lang, pct=frame.illumination_pct)
    text_color = _TEXT_COLORS.get(frame.mode, _TEXT_COLORS["mode-night"])
    font = max(10.0, h * 0.045)

    return f"""<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {w:g} {h:g}" width="{w:g}" height="{h:g}">
  <defs>
    <linearGradient id="sky" x1="0" y1="0" x2="0" y2="1">
      <stop offset="0%" stop-color="{sky.top}"/><stop offset="100%" stop-color="{sky.bottom}"/>
    </linearGradient>
    <linearGradient id="sea" x1="0" y1="0" x2="0" y2="1">
      <stop offset="0%" stop-color="{sea.top}"/><stop offset="100%" stop-color="{sea.bottom}"/>
    </linearGradient>
    <linearGradient id="mountain" x1="0" y1="0" x2="0" y2="1">
      <stop offset="0%" stop-color="{mountain.top}"/><stop offset="100%" stop-color="{mountain.bottom}"/>
    </linearGradient>
    {glow_defs}
    {moon_defs}
  </defs>
  <rect x="0" y="0" width="{w:g}" height="{h:g}" fill="url(#sky)"/>
  {glow_body}
  {sun_body}
  {moon_body}
  {_mountains_svg(frame, horizon_y)}
  <rect x="0" y="{horizon_y:.1f}" width="{w:g}" height="{h - horizon_y:.1f}" fill="url(#sea)"/>
  <text x="{w * 0.02:.1f}" y="{font * 1.4:.1f}" font-size="{font:.1f}" fill="{text_color}">{html.escape(frame.hebrew_date)}</text>
  <text x="{w * 0.02:.1f}" y="{font * 2.8:.1f}" font-size="{font * 0.8:.1f}" fill="{text_color}">{label}</text>
  <text x="{w * 0.05:.1f}" y="{h * 0.97:.1f}" font-size="{font * 0.7:.1f}" fill="{text_color}">{t("label_east", lang)}</text>
  <text x="{w * 0.95:.1f}" y="{h * 0.97:.1f}" font-size="{font * 0.7:.1f}" fill="{text_color}" text-anchor="end">{t("label_west", lang)}</text>
</svg>"""


def render_svg_html(frame: SkyFrame, lang: str = "he") -> str:
    """Wrap :func:`render_svg` in a minimal right-to-left HTML page."""
    direction = "rtl" if lang == "he" else "ltr"
    fact = ""
    if frame.fact:
        fact = (
            f'<div class="facts"><h2>{t("label_did_you_know", lang)}</h2>'
            f"<p>{html.escape(frame.fact)}</p></div>"
        )
    return f"""<!DOCTYPE html>
<html lang="{lang}" dir="{direction}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{ width: 100%; height: 100%; background: #000; }}
svg {{ display: block; width: 100%; height: auto; }}
p, h2 {{ color: #f8fafc; padding: 0.5em 1em; }}
</style>
</head>
<body class="{frame.mode}">
{render_svg(frame, lang)}
<p>{html.escape(frame.stage_sentence)}</p>
{fact}
</body>
</html>"""
