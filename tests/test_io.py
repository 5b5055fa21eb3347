"""Tests for decoding/encoding and the bytes-in, bytes-out entry point."""

from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from adjust_engine import (
    AdjustmentParameters,
    DecodeError,
    EncodeError,
    ErrorKind,
    adjust_image_bytes,
    decode,
    encode,
    load_image_rgba_u8,
    save_image_rgba_u8,
)


def _encode_with_pillow(array, fmt, mode=None):
    image = Image.fromarray(array)
    if mode is not None:
        image = image.convert(mode)
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def test_decode_png_keeps_rgba(noise_rgba):
    decoded = decode(_encode_with_pillow(noise_rgba, "PNG"))
    assert decoded.format == "PNG"
    assert decoded.has_alpha
    assert (decoded.height, decoded.width) == noise_rgba.shape[:2]
    np.testing.assert_array_equal(decoded.pixels, noise_rgba)


def test_decode_jpeg_is_opaque(noise_rgba):
    decoded = decode(_encode_with_pillow(noise_rgba, "JPEG", mode="RGB"))
    assert decoded.format == "JPEG"
    assert not decoded.has_alpha
    assert decoded.pixels.shape == noise_rgba.shape
    assert np.all(decoded.pixels[..., 3] == 255)


def test_decode_rejects_unknown_payload():
    with pytest.raises(DecodeError) as excinfo:
        decode(b"definitely not an image")
    assert excinfo.value.kind is ErrorKind.DECODE_FAILED
    assert excinfo.value.cause.startswith("Failed to identify format")


def test_decode_rejects_truncated_payload(noise_rgba):
    data = _encode_with_pillow(noise_rgba, "PNG")
    with pytest.raises(DecodeError) as excinfo:
        decode(data[: len(data) // 2])
    assert excinfo.value.kind is ErrorKind.DECODE_FAILED


def test_encode_jpeg_requires_opaque_alpha(solid):
    with pytest.raises(EncodeError) as excinfo:
        encode(solid(10, 20, 30, 128), "JPEG")
    assert excinfo.value.kind is ErrorKind.ENCODE_FAILED
    assert "Failed to encode adjusted image" in str(excinfo.value)

    data = encode(solid(10, 20, 30, 255), "JPEG")
    assert Image.open(BytesIO(data)).format == "JPEG"


def test_encode_unknown_format(solid):
    with pytest.raises(EncodeError):
        encode(solid(1, 2, 3), "NOT-A-FORMAT")


def test_adjust_bytes_keeps_container_format(noise_rgba):
    params = AdjustmentParameters(exposure=0.5, saturation=1.3)
    for fmt in ("PNG", "BMP", "TIFF"):
        output = adjust_image_bytes(_encode_with_pillow(noise_rgba, fmt), params)
        with Image.open(BytesIO(output)) as image:
            assert image.format == fmt
            assert image.size == (noise_rgba.shape[1], noise_rgba.shape[0])


def test_adjust_bytes_preserves_alpha(noise_rgba):
    params = AdjustmentParameters(hue=40, gamma=1.8, brightness=-30)
    output = adjust_image_bytes(_encode_with_pillow(noise_rgba, "PNG"), params)
    decoded = decode(output)
    np.testing.assert_array_equal(decoded.pixels[..., 3], noise_rgba[..., 3])


def test_adjust_bytes_propagates_decode_error():
    with pytest.raises(DecodeError):
        adjust_image_bytes(b"", AdjustmentParameters(exposure=1.0))


def test_file_helpers_round_trip(tmp_path, noise_rgba):
    path = tmp_path / "image.png"
    save_image_rgba_u8(path, noise_rgba, "PNG")
    loaded = load_image_rgba_u8(path)
    assert loaded.format == "PNG"
    np.testing.assert_array_equal(loaded.pixels, noise_rgba)


def test_decode_rejects_corrupt_bmp_header():
    with pytest.raises(DecodeError) as excinfo:
        decode(b"BM" + b"\xff" * 60)
    assert excinfo.value.kind is ErrorKind.DECODE_FAILED


def test_decode_maps_decompression_bomb(monkeypatch, noise_rgba):
    data = _encode_with_pillow(noise_rgba, "PNG")
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    with pytest.raises(DecodeError) as excinfo:
        decode(data)
    assert excinfo.value.cause.startswith("Failed to decode image")


def test_adjust_bytes_handles_multi_picture_jpeg(noise_rgba):
    first = Image.fromarray(noise_rgba).convert("RGB")
    second = Image.fromarray(noise_rgba[::-1]).convert("RGB")
    buffer = BytesIO()
    first.save(buffer, format="MPO", save_all=True, append_images=[second])
    data = buffer.getvalue()
    assert decode(data).format == "MPO"

    output = adjust_image_bytes(data, AdjustmentParameters(exposure=0.5))

    with Image.open(BytesIO(output)) as image:
        assert image.format in ("MPO", "JPEG")
        assert image.size == (noise_rgba.shape[1], noise_rgba.shape[0])


def test_encode_retries_rgb_for_opaque_buffers(solid):
    # PCX has no RGBA writer
    data = encode(solid(10, 20, 30, 255), "PCX")
    assert Image.open(BytesIO(data)).format == "PCX"
