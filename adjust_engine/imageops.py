"""Codec-library primitives: brighten, contrast and hue rotation.

``brighten`` and ``contrast`` are per-channel tone curves, so they are
pre-computed into 256-entry lookup tables and applied with Pillow's
C-optimized ``Image.point``. Hue rotation mixes channels and runs as a 3x3
color matrix in NumPy.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from PIL import Image

_ALPHA_IDENTITY = list(range(256))


def build_brighten_lut(value: int) -> list[int]:
    return [min(max(channel + int(value), 0), 255) for channel in range(256)]


def build_contrast_lut(value: float) -> list[int]:
    """Tone curve pivoting around mid-gray; results are truncated, not rounded."""

    percent = ((100.0 + float(value)) / 100.0) ** 2
    lut: list[int] = []
    for channel in range(256):
        adjusted = ((channel / 255.0 - 0.5) * percent + 0.5) * 255.0
        lut.append(int(min(max(adjusted, 0.0), 255.0)))
    return lut


def apply_lut(pixels: np.ndarray, lut: Sequence[int]) -> np.ndarray:
    """Map the RGB channels of *pixels* through *lut*, leaving alpha intact."""

    if pixels.size == 0:
        return pixels.copy()
    image = Image.fromarray(np.ascontiguousarray(pixels))
    table: list[int] = list(lut) * 3 + _ALPHA_IDENTITY
    return np.array(image.point(table), dtype=np.uint8)


def brighten(pixels: np.ndarray, value: int) -> np.ndarray:
    return apply_lut(pixels, build_brighten_lut(value))


def contrast(pixels: np.ndarray, value: float) -> np.ndarray:
    return apply_lut(pixels, build_contrast_lut(value))


def hue_rotation_matrix(degrees: int) -> np.ndarray:
    angle = math.radians(float(degrees))
    cosv = math.cos(angle)
    sinv = math.sin(angle)
    return np.array(
        [
            [
                0.213 + cosv * 0.787 - sinv * 0.213,
                0.715 - cosv * 0.715 - sinv * 0.715,
                0.072 - cosv * 0.072 + sinv * 0.928,
            ],
            [
                0.213 - cosv * 0.213 + sinv * 0.143,
                0.715 + cosv * 0.285 + sinv * 0.140,
                0.072 - cosv * 0.072 - sinv * 0.283,
            ],
            [
                0.213 - cosv * 0.213 - sinv * 0.787,
                0.715 - cosv * 0.715 + sinv * 0.715,
                0.072 + cosv * 0.928 + sinv * 0.072,
            ],
        ],
        dtype=np.float64,
    )


def huerotate(pixels: np.ndarray, degrees: int) -> np.ndarray:
    matrix = hue_rotation_matrix(degrees)
    rgb = pixels[..., :3].astype(np.float64)
    rotated = rgb @ matrix.T
    out = np.empty_like(pixels)
    out[..., :3] = np.clip(rotated, 0.0, 255.0).astype(np.uint8)
    out[..., 3] = pixels[..., 3]
    return out
