import numpy as np
import pytest

from skyalmanac.moon import (
    appearance_from_hebrew_day,
    lit_outline,
    moon_silhouette,
    silhouette_path,
)


def test_hebrew_day_illumination_range_and_maximum():
    values = {d: appearance_from_hebrew_day(d).illumination for d in range(1, 31)}
    assert all(0.0 <= v <= 1.0 for v in values.values())
    assert max(values, key=values.get) == 15
    assert values[15] == pytest.approx(1.0)


def test_first_day_is_thin_waxing_crescent():
    first = appearance_from_hebrew_day(1)
    assert first.right_lit
    assert 0 < first.illumination < 0.05
    assert not appearance_from_hebrew_day(16).right_lit


def test_hebrew_day_is_clamped():
    assert appearance_from_hebrew_day(0) == appearance_from_hebrew_day(1)
    assert appearance_from_hebrew_day(40) == appearance_from_hebrew_day(30)


def test_kinds():
    assert moon_silhouette(1.0, True).kind == "full"
    assert moon_silhouette(0.0, True).kind == "new"
    assert moon_silhouette(0.4, False).kind == "partial"
    assert silhouette_path(moon_silhouette(0.0, True)) == ""
    assert silhouette_path(moon_silhouette(1.0, True)).count(" A ") == 2


def test_waxing_crescent_path():
    s = moon_silhouette(0.25, True)
    assert s.rx == pytest.approx(20)
    assert not s.gibbous
    assert (s.outer_sweep, s.inner_sweep) == (1, 0)
    assert silhouette_path(s) == "M 40 0 A 40 40 0 0 1 40 80 A 20 40 0 0 0 40 0 Z"


@pytest.mark.parametrize(
    "illumination, waxing, sweeps",
    [
        (0.75, True, (1, 1)),
        (0.25, False, (0, 1)),
        (0.75, False, (0, 0)),
    ],
)
def test_sweep_flags(illumination, waxing, sweeps):
    s = moon_silhouette(illumination, waxing)
    assert (s.outer_sweep, s.inner_sweep) == sweeps


def test_edge_day_floor():
    assert moon_silhouette(0.5, True, hebrew_day=1).rx == 11
    assert moon_silhouette(0.5, True, hebrew_day=29).rx == 11
    assert moon_silhouette(0.5, True, hebrew_day=8).rx == pytest.approx(0)


def test_tilt_and_mirror():
    waxing = moon_silhouette(0.3, True, hebrew_day=5)
    assert waxing.tilt_deg == 35
    assert waxing.css_transform == "rotate(35deg) scaleX(-1)"

    waning = moon_silhouette(0.3, False, hebrew_day=22)
    assert waning.tilt_deg == -35
    assert waning.css_transform == "rotate(-35deg) scaleX(-1)"

    # Without a Hebrew day there is no rotation, but the disc is still mirrored
    plain = moon_silhouette(0.3, True)
    assert plain.tilt_deg == 0
    assert plain.mirrored
    assert plain.css_transform == "rotate(0deg) scaleX(-1)"
    assert moon_silhouette(0.3, True, hebrew_day=5, tilt=False).css_transform is None


def test_lit_outline():
    assert lit_outline(moon_silhouette(0.0, True)).shape == (0, 2)

    crescent = lit_outline(moon_silhouette(0.25, True, tilt=False))
    assert crescent.shape[1] == 2
    # Waxing, no transform: lit on the right half
    assert np.all(crescent[:, 0] >= 40 - 1e-9)

    # Mirrored with zero rotation: lit on the left half
    mirrored = lit_outline(moon_silhouette(0.25, True))
    assert np.all(mirrored[:, 0] <= 40 + 1e-9)

    full = lit_outline(moon_silhouette(1.0, True))
    radii = np.hypot(full[:, 0] - 40, full[:, 1] - 40)
    assert np.allclose(radii, 40)

