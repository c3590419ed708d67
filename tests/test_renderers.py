from dataclasses import replace

from matplotlib.figure import Figure

from skyalmanac.compute import compute_frame
from skyalmanac.models import DayAstronomy, Viewport
from skyalmanac.renderers.static import render_static_frame, save_static_frame
from skyalmanac.renderers.svg_2d import render_svg, render_svg_html


def test_svg_contains_scene(day):
    svg = render_svg(compute_frame(day, 720, Viewport(900, 360), hebrew_date="ח׳ בניסן"))
    assert svg.startswith("<svg")
    assert 'id="sky"' in svg
    assert 'id="moon"' in svg
    assert "<path d=\"M 40 0" in svg
    assert "ח׳ בניסן" in svg
    assert "52% מואר" in svg


def test_svg_glow_and_mirror(day):
    svg = render_svg(compute_frame(day, 1080, Viewport(900, 360)))
    assert 'id="glow"' in svg
    assert "scale(-1 1)" in svg


def test_svg_hides_moon_below_horizon(day):
    svg = render_svg(compute_frame(day, 60, Viewport(900, 360)), lang="en")
    assert 'id="moon"' not in svg
    assert "East" in svg


def test_svg_escapes_text():
    day = DayAstronomy(None, None, None, None, 1, 0.0, True)
    svg = render_svg(compute_frame(day, 0, hebrew_date="<b>"))
    assert "&lt;b&gt;" in svg
    assert 'id="moon"' not in svg


def test_svg_html_page(day):
    page = render_svg_html(compute_frame(day, 720), lang="he")
    assert 'dir="rtl"' in page
    assert "<svg" in page


def test_static_frame(day, tmp_path):
    frame = compute_frame(day, 720, Viewport(300, 200))
    fig = render_static_frame(frame)
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_xlim() == (0, 300)
    assert ax.get_ylim() == (200, 0)

    path = save_static_frame(frame, tmp_path / "sky.png")
    assert path.exists()
    assert path.stat().st_size > 0


def test_svg_text_follows_sky_mode(day):
    assert 'fill="#0f172a"' in render_svg(compute_frame(day, 720))
    assert 'fill="#0f172a"' not in render_svg(compute_frame(day, 0))


def test_svg_html_page_shows_fact(day):
    frame = replace(compute_frame(day, 720), fact="Moon & stars")
    page = render_svg_html(frame, lang="en")
    assert '<body class="mode-day">' in page
    assert 'class="facts"' in page
    assert "Did you know?" in page
    assert "Moon &amp; stars" in page

    assert 'class="facts"' not in render_svg_html(compute_frame(day, 720))
