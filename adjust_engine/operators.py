"""Per-pixel tone and color operators over RGBA uint8 buffers.

Every operator takes an ``(H, W, 4)`` uint8 array and returns a new array of
the same shape. The alpha channel is copied through unchanged and the input
is never modified.
"""

from __future__ import annotations

import numpy as np

from .color import clamp01, hsl_to_rgb, luminance, rgb_to_hsl, round_to_u8


def _with_alpha(pixels: np.ndarray, rgb_u8: np.ndarray) -> np.ndarray:
    out = np.empty_like(pixels)
    out[..., :3] = rgb_u8
    out[..., 3] = pixels[..., 3]
    return out


def _normalized_rgb(pixels: np.ndarray) -> np.ndarray:
    return pixels[..., :3].astype(np.float32) / np.float32(255.0)


def _scale_by_weight(pixels: np.ndarray, amount: float, weight: np.ndarray) -> np.ndarray:
    rgb = _normalized_rgb(pixels).astype(np.float64)
    with np.errstate(over="ignore", invalid="ignore"):
        multiplier = 1.0 + (float(amount) / 100.0) * weight.astype(np.float64)
        scaled = rgb * multiplier[..., None] * 255.0
    return _with_alpha(pixels, round_to_u8(scaled))


def apply_saturation(pixels: np.ndarray, factor: float) -> np.ndarray:
    hsl = rgb_to_hsl(pixels[..., :3])
    hsl[..., 1] = clamp01(hsl[..., 1] * np.float32(factor))
    return _with_alpha(pixels, hsl_to_rgb(hsl))


def apply_vibrance(pixels: np.ndarray, amount: float) -> np.ndarray:
    """Saturate low-saturation colors more than already vivid ones.

    ``amount`` is on the normalized [-1, 1] scale.
    """

    hsl = rgb_to_hsl(pixels[..., :3])
    s = hsl[..., 1]
    hsl[..., 1] = clamp01(s + np.float32(amount) * (1.0 - s))
    return _with_alpha(pixels, hsl_to_rgb(hsl))


def apply_exposure(pixels: np.ndarray, stops: float) -> np.ndarray:
    with np.errstate(over="ignore", invalid="ignore"):
        multiplier = np.power(2.0, float(stops))
        scaled = pixels[..., :3].astype(np.float64) * multiplier
    return _with_alpha(pixels, round_to_u8(scaled))


def apply_gamma(pixels: np.ndarray, gamma: float) -> np.ndarray:
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        inv_gamma = np.float64(1.0) / np.float64(gamma)
        curved = np.power(pixels[..., :3].astype(np.float64) / 255.0, inv_gamma)
    return _with_alpha(pixels, round_to_u8(curved * 255.0))


def apply_shadows(pixels: np.ndarray, amount: float) -> np.ndarray:
    """Lift or crush dark areas; weight fades linearly to zero at luma 0.5."""

    lum = luminance(_normalized_rgb(pixels))
    weight = np.maximum(1.0 - lum * 2.0, 0.0)
    return _scale_by_weight(pixels, amount, weight)


def apply_highlights(pixels: np.ndarray, amount: float) -> np.ndarray:
    """Counterpart of :func:`apply_shadows` for areas brighter than luma 0.5."""

    lum = luminance(_normalized_rgb(pixels))
    weight = np.maximum((lum - 0.5) * 2.0, 0.0)
    return _scale_by_weight(pixels, amount, weight)
