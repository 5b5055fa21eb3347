"""Color space conversions and helpers."""

from __future__ import annotations

from typing import Tuple

import numpy as np

_EPS = np.finfo(np.float32).eps

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def clamp01(arr: np.ndarray) -> np.ndarray:
    return np.clip(arr, 0.0, 1.0)


def round_to_u8(arr: np.ndarray) -> np.ndarray:
    """Round channel values half away from zero and clamp them into uint8.

    Non-finite values are mapped into range first so that degenerate
    parameters (gamma of 0, huge exposure) never overflow the cast.
    """

    values = np.nan_to_num(
        np.asarray(arr, dtype=np.float64), nan=0.0, posinf=255.0, neginf=0.0)
    rounded = np.sign(values) * np.floor(np.abs(values) + 0.5)
    return np.clip(rounded, 0.0, 255.0).astype(np.uint8)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Weighted luma of normalized RGB, shape (..., 3) -> (...)."""

    wr, wg, wb = LUMA_WEIGHTS
    return wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]


def rgb_to_hsl(rgb: np.ndarray) -> np.ndarray:
    """Convert 0-255 RGB values to HSL.

    Args:
        rgb: array with shape (..., 3), any numeric dtype, values in [0, 255].

    Returns:
        float32 array with shape (..., 3) holding hue in degrees [0, 360),
        saturation and lightness in [0, 1].
    """

    rgb = np.asarray(rgb, dtype=np.float32) / np.float32(255.0)
    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    maxc = np.maximum(np.maximum(r, g), b)
    minc = np.minimum(np.minimum(r, g), b)
    l = (maxc + minc) / np.float32(2.0)
    delta = maxc - minc

    chromatic = delta >= _EPS
    safe_delta = np.where(chromatic, delta, np.float32(1.0))

    s_denom = np.where(l > 0.5, 2.0 - maxc - minc, maxc + minc)
    s_denom = np.where(chromatic, s_denom, np.float32(1.0))
    s = np.where(chromatic, delta / s_denom, np.float32(0.0))

    h_red = (g - b) / safe_delta
    h_red = np.where(g < b, h_red + 6.0, h_red)
    h_green = (b - r) / safe_delta + 2.0
    h_blue = (r - g) / safe_delta + 4.0

    r_mask = maxc == r
    g_mask = ~r_mask & (maxc == g)
    h = np.where(r_mask, h_red, np.where(g_mask, h_green, h_blue))
    h = np.where(chromatic, h * 60.0, np.float32(0.0))

    return np.stack([h, s, l], axis=-1).astype(np.float32)


def _hue_to_channel(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0.0, t + 1.0, t)
    t = np.where(t > 1.0, t - 1.0, t)
    conds = [t < 1.0 / 6.0, t < 1.0 / 2.0, t < 2.0 / 3.0]
    choices = [
        p + (q - p) * 6.0 * t,
        q,
        p + (q - p) * (2.0 / 3.0 - t) * 6.0,
    ]
    return np.select(conds, choices, default=p)


def hsl_to_rgb(hsl: np.ndarray) -> np.ndarray:
    """Convert HSL (hue in degrees) back to uint8 RGB with shape (..., 3)."""

    hsl = np.asarray(hsl, dtype=np.float32)
    h = hsl[..., 0]
    s = hsl[..., 1]
    l = hsl[..., 2]

    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q
    h = h / np.float32(360.0)

    rgb = np.stack(
        [
            _hue_to_channel(p, q, h + np.float32(1.0 / 3.0)),
            _hue_to_channel(p, q, h),
            _hue_to_channel(p, q, h - np.float32(1.0 / 3.0)),
        ],
        axis=-1,
    )

    achromatic = (np.abs(s) < _EPS)[..., None]
    rgb = np.where(achromatic, l[..., None], rgb)
    return round_to_u8(rgb * 255.0)


def pixel_rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    h, s, l = rgb_to_hsl(np.array([r, g, b]))
    return float(h), float(s), float(l)


def pixel_hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    r, g, b = hsl_to_rgb(np.array([h, s, l]))
    return int(r), int(g), int(b)
