"""Преобразование изображения в оттенки серого методом яркости.

Конвейер: data URL -> растр RGBA (numpy) -> замена R, G, B на яркость ->
одноканальный JPEG -> data URL.
"""
from __future__ import annotations

import asyncio
import io
import logging
from contextlib import contextmanager
from typing import Iterator

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from bw_filter.config import DEFAULT_CONFIG, AppConfig
from bw_filter.errors import ImageDecodeError, ImageLoadError, ProcessingError
from bw_filter.models.image_model import EncodedImage

logger = logging.getLogger(__name__)

# Веса яркости (ITU-R BT.601)
LUMA_R, LUMA_G, LUMA_B = 0.299, 0.587, 0.114


def open_image(blob: EncodedImage) -> Image.Image:
    """Полностью декодирует blob в изображение PIL с естественными размерами.

    Ориентация из EXIF применяется, поэтому размеры совпадают с теми,
    в которых изображение показывается.

    Raises:
        ImageDecodeError: если данные не распознаны как изображение.
        ImageLoadError: если формат распознан, но пиксели не загружаются.
    """
    try:
        image = Image.open(io.BytesIO(blob.payload))
    except UnidentifiedImageError as exc:
        raise ImageDecodeError("Формат изображения не распознан") from exc
    except (Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageLoadError(f"Не удалось открыть изображение: {exc}") from exc
    try:
        image.load()
        transposed = ImageOps.exif_transpose(image)
    except (Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        image.close()
        raise ImageLoadError(f"Не удалось загрузить пиксели: {exc}") from exc
    if transposed is not image:
        image.close()
    return transposed


def to_grayscale(surface: np.ndarray) -> np.ndarray:
    """Заменяет R, G, B каждого пикселя на их взвешенную яркость.

    Работает на месте над массивом (H, W, 4) uint8; альфа-канал не меняется.
    Значение округляется к ближайшему целому и ограничивается диапазоном 0..255.
    """
    r, g, b = (surface[..., i].astype(np.float64) for i in range(3))
    gray = np.clip(np.rint(LUMA_R * r + LUMA_G * g + LUMA_B * b), 0, 255).astype(np.uint8)
    surface[..., :3] = gray[..., np.newaxis]
    return surface


@contextmanager
def _raster_surface(image: Image.Image) -> Iterator[np.ndarray]:
    """Выдаёт изменяемый растр RGBA на время одного преобразования."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    try:
        yield np.array(rgba, dtype=np.uint8)
    finally:
        if rgba is not image:
            rgba.close()
        image.close()


class GrayscaleConverter:
    def __init__(self, config: AppConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    def _encode(self, surface: np.ndarray) -> EncodedImage:
        # JPEG не хранит альфу: накладываем растр на чёрный фон
        alpha = surface[..., 3].astype(np.float64) / 255.0
        flat = np.rint(surface[..., 0].astype(np.float64) * alpha).astype(np.uint8)
        buffer = io.BytesIO()
        Image.fromarray(flat).save(buffer, format="JPEG", quality=self._config.jpeg_quality)
        return EncodedImage.from_bytes(self._config.output_mime, buffer.getvalue())

    def convert_sync(self, blob: EncodedImage) -> EncodedImage:
        """Декодирует, обесцвечивает и заново кодирует изображение.

        Raises:
            ImageDecodeError: если blob не декодируется.
            ProcessingError: если преобразование или кодирование не удалось.
        """
        image = open_image(blob)
        width, height = image.size
        with _raster_surface(image) as surface:
            try:
                to_grayscale(surface)
                result = self._encode(surface)
            except (OSError, ValueError) as exc:
                logger.error("Grayscale conversion of %dx%d image failed: %s", width, height, exc)
                raise ProcessingError(str(exc)) from exc
        logger.info("Converted %dx%d image (%d chars)", width, height, len(result.data_url))
        return result

    async def convert(self, blob: EncodedImage) -> EncodedImage:
        return await asyncio.to_thread(self.convert_sync, blob)
