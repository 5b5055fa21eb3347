"""Core adjustment pipeline."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List

import numpy as np

from . import imageops, operators
from .config import SKIP_EPSILON, AdjustmentParameters, brightness_offset
from .io import DecodedImage, decode, encode

logger = logging.getLogger(__name__)


class Stage(Enum):
    EXPOSURE = "exposure"
    SHADOWS = "shadows"
    HIGHLIGHTS = "highlights"
    GAMMA = "gamma"
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    SATURATION = "saturation"
    VIBRANCE = "vibrance"
    HUE = "hue"


# Multiplicative exposure first, then tonal recovery, then global tone, and
# the HSL-based color stages last so hue rotation sees final lightness.
STAGE_ORDER: List[Stage] = [
    Stage.EXPOSURE,
    Stage.SHADOWS,
    Stage.HIGHLIGHTS,
    Stage.GAMMA,
    Stage.BRIGHTNESS,
    Stage.CONTRAST,
    Stage.SATURATION,
    Stage.VIBRANCE,
    Stage.HUE,
]

_ACTIVE: Dict[Stage, Callable[[AdjustmentParameters], bool]] = {
    Stage.EXPOSURE: lambda p: abs(p.exposure) > SKIP_EPSILON,
    Stage.SHADOWS: lambda p: abs(p.shadows) > SKIP_EPSILON,
    Stage.HIGHLIGHTS: lambda p: abs(p.highlights) > SKIP_EPSILON,
    Stage.GAMMA: lambda p: abs(p.gamma - 1.0) > SKIP_EPSILON,
    Stage.BRIGHTNESS: lambda p: int(p.brightness) != 0,
    Stage.CONTRAST: lambda p: abs(p.contrast) > SKIP_EPSILON,
    Stage.SATURATION: lambda p: abs(p.saturation - 1.0) > SKIP_EPSILON,
    # Compared on the raw [-100, 100] scale, before normalization.
    Stage.VIBRANCE: lambda p: abs(p.vibrance) > SKIP_EPSILON,
    Stage.HUE: lambda p: int(p.hue) != 0,
}

_APPLY: Dict[Stage, Callable[[np.ndarray, AdjustmentParameters], np.ndarray]] = {
    Stage.EXPOSURE: lambda px, p: operators.apply_exposure(px, p.exposure),
    Stage.SHADOWS: lambda px, p: operators.apply_shadows(px, p.shadows),
    Stage.HIGHLIGHTS: lambda px, p: operators.apply_highlights(px, p.highlights),
    Stage.GAMMA: lambda px, p: operators.apply_gamma(px, p.gamma),
    Stage.BRIGHTNESS: lambda px, p: imageops.brighten(px, brightness_offset(int(p.brightness))),
    Stage.CONTRAST: lambda px, p: imageops.contrast(px, p.contrast),
    Stage.SATURATION: lambda px, p: operators.apply_saturation(px, p.saturation),
    Stage.VIBRANCE: lambda px, p: operators.apply_vibrance(px, p.vibrance / 100.0),
    Stage.HUE: lambda px, p: imageops.huerotate(px, int(p.hue)),
}


def plan_stages(params: AdjustmentParameters) -> List[Stage]:
    """Return the stages *params* activates, in execution order."""

    return [stage for stage in STAGE_ORDER if _ACTIVE[stage](params)]


def apply_stage(stage: Stage, pixels: np.ndarray, params: AdjustmentParameters) -> np.ndarray:
    return _APPLY[stage](pixels, params)


def adjust(pixels: np.ndarray, params: AdjustmentParameters) -> np.ndarray:
    """Apply adjustment parameters to an RGBA uint8 image.

    Args:
        pixels: RGBA uint8 array with shape (H, W, 4).
        params: The nine adjustment settings.

    Returns:
        A new RGBA uint8 array with the same shape and untouched alpha.
    """

    if pixels.dtype != np.uint8:
        raise ValueError("pixels must be uint8")
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError("pixels must have shape (H, W, 4)")

    stages = plan_stages(params)
    if not stages:
        logger.debug("All stages at identity, returning a copy")
        return pixels.copy()

    out = pixels
    for stage in stages:
        logger.debug("Applying %s", stage.value)
        out = apply_stage(stage, out, params)
    return out


def adjust_image(decoded: DecodedImage, params: AdjustmentParameters) -> DecodedImage:
    return DecodedImage(
        pixels=adjust(decoded.pixels, params),
        format=decoded.format,
        has_alpha=decoded.has_alpha,
    )


def adjust_image_bytes(data: bytes, params: AdjustmentParameters) -> bytes:
    """Decode *data*, adjust it and re-encode it in its original format.

    Raises:
        DecodeError: the payload could not be identified or decoded.
        EncodeError: the adjusted pixels could not be serialized.
    """

    decoded = decode(data)
    adjusted = adjust_image(decoded, params)
    output = encode(adjusted.pixels, adjusted.format)
    logger.info(
        "Adjusted %s image %dx%d (%d bytes)",
        adjusted.format,
        adjusted.width,
        adjusted.height,
        len(output),
    )
    return output
