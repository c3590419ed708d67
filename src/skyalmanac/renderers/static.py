"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.colors import to_rgb  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.patches import Circle, Polygon  # noqa: E402

from skyalmanac.models import LinearGradient, SkyFrame  # noqa: E402
from skyalmanac.moon import lit_outline  # noqa: E402

_ROOT = Path(__file__).parent.parent.parent.parent
_SUN_COLOR = "#ffd36b"
_MOON_COLOR = "#f1f5f9"


def _vertical_gradient(gradient: LinearGradient, rows: int) -> np.ndarray:
    """rows x 1 x 3 RGB image blending top to bottom."""
    top = np.array(to_rgb(gradient.top))
    bottom = np.array(to_rgb(gradient.bottom))
    t = np.linspace(0.0, 1.0, rows)[:, None]
    return (top + (bottom - top) * t)[:, None, :]


def render_static_frame(frame: SkyFrame, dpi: int = 100) -> Figure:
    """Render a SkyFrame as a static matplotlib image.

    Axes use viewport pixels with y pointing down, matching ArcPoint.

    Args:
        frame: Fully computed frame.
        dpi: Figure resolution; the figure is sized so one pixel maps to one unit.

    Returns:
        matplotlib Figure object.
    """
    w, h = frame.viewport.width, frame.viewport.height
    horizon_y = h * 0.85
    fig = plt.figure(figsize=(w / dpi, h / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))

    ax.imshow(
        _vertical_gradient(frame.sample.sky.base, 256),
        extent=(0, w, horizon_y, 0),
        aspect="auto",
        zorder=0,
    )

    glow = frame.sample.sky.glow
    if glow is not None and glow.opacity > 0:
        gx, gy = glow.x_pct / 100 * w, glow.y_pct / 100 * h
        yy, xx = np.mgrid[0:horizon_y:200j, 0:w:200j]
        reach = 0.22 * max(np.hypot(gx - x, gy - y) for x in (0, w) for y in (0, h))
        dist = np.hypot(xx - gx, yy - gy) / reach
        alpha = np.interp(dist, [0.0, 10 / 22, 1.0], [0.45, 0.25, 0.0]) * glow.opacity
        rgba = np.zeros(dist.shape + (4,))
        rgba[..., :3] = to_rgb("#ffb36b")
        rgba[..., 3] = alpha
        ax.imshow(rgba, extent=(0, w, horizon_y, 0), aspect="auto", zorder=1)

    if frame.sun is not None:
        ax.add_patch(
            Circle(
                (frame.sun.x, frame.sun.y),
                radius=max(6.0, min(w, h) * 0.045),
                color=_SUN_COLOR,
                zorder=2,
            )
        )

    outline = lit_outline(frame.silhouette)
    if frame.moon is not None and len(outline):
        scale = max(6.0, min(w, h) * 0.045) * 1.4 / 40
        points = (outline - 40) * scale + np.array([frame.moon.x, frame.moon.y])
        ax.add_patch(Polygon(points, closed=True, color=_MOON_COLOR, zorder=2))

    mountain = frame.sample.mountain
    ridge = np.array(
        [
            (0, horizon_y), (w * 0.18, horizon_y * 0.72), (w * 0.34, horizon_y * 0.86),
            (w * 0.52, horizon_y * 0.78), (w * 0.7, horizon_y * 0.9),
            (w * 0.86, horizon_y * 0.8), (w, horizon_y),
        ]
    )
    ax.add_patch(Polygon(ridge, closed=True, color=mountain.top, zorder=3))

    ax.imshow(
        _vertical_gradient(frame.sample.sea, 64),
        extent=(0, w, h, horizon_y),
        aspect="auto",
        zorder=4,
    )

    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    ax.axis("off")

    return fig


def save_static_frame(frame: SkyFrame, output_path: Path | None = None) -> Path:
    """Save a SkyFrame as a PNG file.

    Args:
        frame: Fully computed frame.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        hh, mm = divmod(frame.minutes, 60)
        filename = f"{frame.date or 'sky'}__{hh:02d}_{mm:02d}.png".replace("-", "_")
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_frame(frame)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
