"""Tests for the RGB <-> HSL conversions and rounding helpers."""

import numpy as np
import pytest

from adjust_engine.color import (
    hsl_to_rgb,
    luminance,
    pixel_hsl_to_rgb,
    pixel_rgb_to_hsl,
    rgb_to_hsl,
    round_to_u8,
)


def test_round_trip_within_one_level():
    levels = np.arange(0, 256, 5)
    r, g, b = np.meshgrid(levels, levels, levels, indexing="ij")
    rgb = np.stack([r, g, b], axis=-1).reshape(-1, 3).astype(np.uint8)

    back = hsl_to_rgb(rgb_to_hsl(rgb))

    diff = np.abs(back.astype(np.int16) - rgb.astype(np.int16))
    assert diff.max() <= 1


@pytest.mark.parametrize(
    "rgb, expected_hue",
    [
        ((255, 0, 0), 0.0),
        ((0, 255, 0), 120.0),
        ((0, 0, 255), 240.0),
        ((255, 255, 0), 60.0),
        ((255, 0, 255), 300.0),
    ],
)
def test_primary_hues(rgb, expected_hue):
    h, s, l = pixel_rgb_to_hsl(*rgb)
    assert h == pytest.approx(expected_hue, abs=1e-3)
    assert s == pytest.approx(1.0, abs=1e-6)
    assert l == pytest.approx(0.5, abs=1e-6)


def test_red_max_with_blue_above_green_wraps_hue():
    h, _, _ = pixel_rgb_to_hsl(255, 0, 128)
    assert 300.0 < h < 360.0


def test_gray_is_achromatic():
    h, s, l = pixel_rgb_to_hsl(128, 128, 128)
    assert (h, s) == (0.0, 0.0)
    assert l == pytest.approx(128 / 255, abs=1e-6)


def test_bright_color_uses_high_lightness_saturation_formula():
    # l > 0.5 -> s = d / (2 - max - min)
    _, s, l = pixel_rgb_to_hsl(100, 150, 200)
    assert l == pytest.approx(0.58824, abs=1e-4)
    assert s == pytest.approx((100 / 255) / (2 - 200 / 255 - 100 / 255), abs=1e-5)


def test_zero_saturation_gives_gray_from_lightness():
    assert pixel_hsl_to_rgb(210.0, 0.0, 0.58825) == (150, 150, 150)


def test_hsl_to_rgb_primary():
    assert pixel_hsl_to_rgb(120.0, 1.0, 0.5) == (0, 255, 0)


def test_luminance_weights():
    lum = luminance(np.array([1.0, 1.0, 1.0]))
    assert lum == pytest.approx(1.0)
    assert luminance(np.array([0.0, 1.0, 0.0])) == pytest.approx(0.587)


def test_round_to_u8_rounds_half_up_and_clamps():
    values = np.array([0.5, 1.49, 254.5, 300.0, -4.0, np.nan, np.inf, -np.inf])
    assert round_to_u8(values).tolist() == [1, 1, 255, 255, 0, 0, 255, 0]
