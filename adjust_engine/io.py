"""Decode/encode helpers around Pillow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image
from PIL import UnidentifiedImageError

from .errors import DecodeError, EncodeError

try:
    from pillow_heif import register_heif_opener

    register_heif_opener()
    _HAS_HEIF = True
except ImportError:
    _HAS_HEIF = False

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "PNG"

# Container formats that cannot carry an alpha channel.
OPAQUE_FORMATS = frozenset({"JPEG", "MPO", "PPM"})

PathType = Union[str, Path]


@dataclass(frozen=True)
class DecodedImage:
    pixels: np.ndarray
    format: str
    has_alpha: bool

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


def _has_alpha(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def decode(data: bytes) -> DecodedImage:
    """Decode *data* into an RGBA uint8 buffer and remember its container format."""

    try:
        image = Image.open(BytesIO(data))
        fmt = image.format or DEFAULT_FORMAT
        image.load()
        has_alpha = _has_alpha(image)
        pixels = np.array(image.convert("RGBA"), dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Failed to identify format: {exc}") from exc
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc

    logger.debug("Decoded %s image %dx%d", fmt, pixels.shape[1], pixels.shape[0])
    return DecodedImage(pixels=pixels, format=fmt, has_alpha=has_alpha)


def encode(pixels: np.ndarray, fmt: str) -> bytes:
    """Serialize an RGBA uint8 buffer into container format *fmt*."""

    fully_opaque = bool(np.all(pixels[..., 3] == 255))
    opaque = fmt.upper() in OPAQUE_FORMATS
    if opaque and not fully_opaque:
        raise EncodeError(
            f"Failed to encode adjusted image: {fmt} cannot store a translucent alpha channel"
        )

    try:
        image = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"Failed to encode adjusted image: {exc}") from exc
    if opaque:
        image = image.convert("RGB")

    try:
        return _save(image, fmt)
    except (OSError, ValueError) as exc:
        # Writers missing from OPAQUE_FORMATS still take RGB when alpha is unused.
        if image.mode != "RGBA" or not fully_opaque:
            raise EncodeError(f"Failed to encode adjusted image: {exc}") from exc
        logger.debug("%s rejected RGBA, retrying as RGB", fmt)
        try:
            return _save(image.convert("RGB"), fmt)
        except (OSError, ValueError, KeyError) as retry_exc:
            raise EncodeError(f"Failed to encode adjusted image: {retry_exc}") from retry_exc
    except KeyError as exc:
        raise EncodeError(f"Failed to encode adjusted image: {exc}") from exc


def _save(image: Image.Image, fmt: str) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def load_image_rgba_u8(path: PathType) -> DecodedImage:
    source = Path(path)
    if source.suffix.lower() in (".heic", ".heif") and not _HAS_HEIF:
        raise DecodeError(
            f"Failed to identify format: {source.name} needs the pillow-heif plugin"
        )
    return decode(source.read_bytes())


def save_image_rgba_u8(path: PathType, pixels: np.ndarray, fmt: str) -> None:
    Path(path).write_bytes(encode(pixels, fmt))
