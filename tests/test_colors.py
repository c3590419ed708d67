import pytest

from skyalmanac.colors import (
    clamp,
    hex_to_rgb,
    lerp,
    mix_color,
    mix_colors,
    mix_gradient,
    rgb_to_hex,
)


def test_clamp_and_lerp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert lerp(0, 10, 0.25) == pytest.approx(2.5)
    # lerp extrapolates
    assert lerp(0, 10, 1.5) == pytest.approx(15)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#0f1025", (15, 16, 37)),
        ("#fff", (255, 255, 255)),
        ("a6d8ff", (166, 216, 255)),
        ("#12345", (0, 0, 0)),
        ("not a colour", (0, 0, 0)),
    ],
)
def test_hex_to_rgb(value, expected):
    assert hex_to_rgb(value) == expected


def test_rgb_to_hex_clamps_channels():
    assert rgb_to_hex(300, -5, 16) == "#ff0010"


def test_mix_color_rounds_per_channel():
    assert mix_color("#000000", "#ffffff", 0.5) == "#808080"
    assert mix_color("#0f1025", "#a6d8ff", 0) == "#0f1025"
    assert mix_color("#0f1025", "#a6d8ff", 1) == "#a6d8ff"


def test_mix_colors_and_gradient():
    assert mix_colors(("#000000", "#ffffff"), ("#ffffff", "#000000"), 1) == (
        "#ffffff",
        "#000000",
    )
    assert mix_gradient("#000", "#fff", "#fff", "#000", 0) == ("#000000", "#ffffff")
