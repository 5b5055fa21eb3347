"""Tone and color adjustment engine API."""

from .config import IDENTITY_PARAMS, PARAM_RANGES, AdjustmentParameters, params_from_slider_values
from .errors import AdjustError, DecodeError, EncodeError, ErrorKind
from .io import DecodedImage, decode, encode, load_image_rgba_u8, save_image_rgba_u8
from .pipeline import Stage, adjust, adjust_image, adjust_image_bytes, plan_stages

__all__ = [
    "PARAM_RANGES",
    "IDENTITY_PARAMS",
    "AdjustmentParameters",
    "params_from_slider_values",
    "AdjustError",
    "DecodeError",
    "EncodeError",
    "ErrorKind",
    "DecodedImage",
    "decode",
    "encode",
    "load_image_rgba_u8",
    "save_image_rgba_u8",
    "Stage",
    "adjust",
    "adjust_image",
    "adjust_image_bytes",
    "plan_stages",
]
