import asyncio
import io

import numpy as np
import pytest
from PIL import Image

from bw_filter.config import AppConfig
from bw_filter.errors import ImageDecodeError, ImageLoadError, ProcessingError
from bw_filter.models.image_model import EncodedImage
from bw_filter.services.grayscale_service import GrayscaleConverter, open_image, to_grayscale


def _decoded_rgba(blob: EncodedImage) -> np.ndarray:
    return np.asarray(open_image(blob).convert("RGBA"), dtype=np.int32)


def test_red_and_green_pixels_map_to_luminosity() -> None:
    surface = np.array([[[255, 0, 0, 255], [0, 255, 0, 255]]], dtype=np.uint8)

    to_grayscale(surface)

    assert surface.tolist() == [[[76, 76, 76, 255], [150, 150, 150, 255]]]


def test_every_pixel_matches_rounded_weighted_sum_and_keeps_alpha() -> None:
    rng = np.random.default_rng(7)
    source = rng.integers(0, 256, size=(9, 13, 4), dtype=np.uint8)
    surface = source.copy()

    to_grayscale(surface)

    r, g, b = (source[..., i].astype(np.float64) for i in range(3))
    expected = np.rint(0.299 * r + 0.587 * g + 0.114 * b).astype(np.uint8)
    assert np.array_equal(surface[..., 0], expected)
    assert np.array_equal(surface[..., 1], surface[..., 0])
    assert np.array_equal(surface[..., 2], surface[..., 0])
    assert np.array_equal(surface[..., 3], source[..., 3])


def test_white_and_black_stay_in_range() -> None:
    surface = np.array([[[255, 255, 255, 10], [0, 0, 0, 0]]], dtype=np.uint8)

    to_grayscale(surface)

    assert surface.tolist() == [[[255, 255, 255, 10], [0, 0, 0, 0]]]


def test_convert_produces_jpeg_data_url_with_same_dimensions(png_blob) -> None:
    rng = np.random.default_rng(1)
    pixels = rng.integers(0, 256, size=(23, 37, 4), dtype=np.uint8)
    pixels[..., 3] = 255

    result = GrayscaleConverter().convert_sync(png_blob(pixels))

    assert result.data_url.startswith("data:image/jpeg;base64,")
    with Image.open(io.BytesIO(result.payload)) as decoded:
        assert decoded.format == "JPEG"
        assert decoded.size == (37, 23)


def test_convert_of_solid_color_keeps_its_gray_level(png_blob, solid_rgba) -> None:
    result = GrayscaleConverter().convert_sync(png_blob(solid_rgba((255, 0, 0, 255))))

    decoded = _decoded_rgba(result)
    assert np.all(np.abs(decoded[..., :3] - 76) <= 2)
    assert np.all(decoded[..., 3] == 255)


def test_transparent_pixels_are_flattened_onto_black(png_blob, solid_rgba) -> None:
    result = GrayscaleConverter().convert_sync(png_blob(solid_rgba((200, 200, 200, 0))))

    assert np.all(_decoded_rgba(result)[..., :3] <= 2)


def test_reconverting_output_stays_grayscale(png_blob) -> None:
    rng = np.random.default_rng(3)
    pixels = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    converter = GrayscaleConverter()

    twice = converter.convert_sync(converter.convert_sync(png_blob(pixels)))

    decoded = _decoded_rgba(twice)
    assert np.array_equal(decoded[..., 0], decoded[..., 1])
    assert np.array_equal(decoded[..., 1], decoded[..., 2])
    assert decoded.shape[:2] == (16, 16)


def test_quality_comes_from_config(png_blob) -> None:
    rng = np.random.default_rng(5)
    pixels = rng.integers(0, 256, size=(64, 64, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    blob = png_blob(pixels)

    low = GrayscaleConverter(AppConfig(jpeg_quality=10)).convert_sync(blob)
    high = GrayscaleConverter().convert_sync(blob)

    assert len(low.payload) < len(high.payload)


def test_async_convert_matches_sync(png_blob, solid_rgba) -> None:
    blob = png_blob(solid_rgba((10, 20, 30, 255), width=4, height=3))
    converter = GrayscaleConverter()

    assert asyncio.run(converter.convert(blob)) == converter.convert_sync(blob)


def test_non_image_bytes_are_a_decode_error() -> None:
    blob = EncodedImage.from_bytes("image/png", b"definitely not an image")

    with pytest.raises(ImageDecodeError) as excinfo:
        GrayscaleConverter().convert_sync(blob)
    assert not isinstance(excinfo.value, ImageLoadError)
    assert isinstance(excinfo.value, ProcessingError)


def test_truncated_image_is_a_load_error(png_bytes) -> None:
    rng = np.random.default_rng(11)
    data = png_bytes(rng.integers(0, 256, size=(64, 64, 4), dtype=np.uint8))
    blob = EncodedImage.from_bytes("image/png", data[: len(data) // 2])

    with pytest.raises(ImageLoadError):
        open_image(blob)


def test_open_image_applies_exif_orientation() -> None:
    image = Image.new("RGB", (4, 2), color=(90, 90, 90))
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 clockwise on display
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", exif=exif)

    opened = open_image(EncodedImage.from_bytes("image/jpeg", buffer.getvalue()))

    assert opened.size == (2, 4)


def test_oversized_pixel_count_is_a_load_error(png_blob, solid_rgba, monkeypatch) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    blob = png_blob(solid_rgba((1, 2, 3, 255)))

    with pytest.raises(ImageLoadError):
        open_image(blob)
    with pytest.raises(ProcessingError):
        GrayscaleConverter().convert_sync(blob)
