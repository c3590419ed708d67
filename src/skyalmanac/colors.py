"""Scalar and colour interpolation helpers shared by the sky engine."""

import re

_HEX_RE = re.compile(r"^[0-9a-fA-F]{3}$|^[0-9a-fA-F]{6}$")


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation. ``t`` is not clamped; callers clamp when they must not extrapolate."""
    return a + (b - a) * t


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse ``#rgb`` or ``#rrggbb``. Anything else resolves to black."""
    digits = hex_color.strip().lstrip("#")
    if not _HEX_RE.match(digits):
        return 0, 0, 0
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    value = int(digits, 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + "".join(f"{int(clamp(c, 0, 255)):02x}" for c in (r, g, b))


def mix_color(a: str, b: str, t: float) -> str:
    """Per-channel blend of two hex colours, rounded to the nearest integer."""
    ra, ga, ba = hex_to_rgb(a)
    rb, gb, bb = hex_to_rgb(b)
    return rgb_to_hex(
        round(lerp(ra, rb, t)),
        round(lerp(ga, gb, t)),
        round(lerp(ba, bb, t)),
    )


def mix_colors(a: tuple[str, ...], b: tuple[str, ...], t: float) -> tuple[str, ...]:
    """Blend two equally long colour tuples stop by stop."""
    return tuple(mix_color(ca, cb, t) for ca, cb in zip(a, b))


def mix_gradient(
    top_a: str, bottom_a: str, top_b: str, bottom_b: str, t: float
) -> tuple[str, str]:
    """Cross-fade two two-stop gradients; each stop is mixed independently."""
    return mix_color(top_a, top_b, t), mix_color(bottom_a, bottom_b, t)
