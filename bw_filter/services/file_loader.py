"""Загрузка выбранного пользователем файла в память.

Принципы:
- SRP: класс отвечает только за проверку и чтение файла.
- Проверки типа и размера выполняются до любой попытки чтения.
"""
from __future__ import annotations

import asyncio
import logging
import re

from bw_filter.config import DEFAULT_CONFIG, AppConfig
from bw_filter.errors import FileReadError, FileTooLarge, InvalidFileType
from bw_filter.models.image_model import EncodedImage, SourceFile

logger = logging.getLogger(__name__)

_LAST_EXTENSION = re.compile(r"\.[^/.]+$")


def stem_of(name: str) -> str:
    """Имя файла без последнего расширения: `photo.final.png` -> `photo.final`."""
    return _LAST_EXTENSION.sub("", name)


class FileLoader:
    def __init__(self, config: AppConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    def validate(self, source: SourceFile) -> None:
        """Проверяет тип и размер файла, не читая его.

        Raises:
            InvalidFileType: если MIME-тип не начинается с `image/`.
            FileTooLarge: если файл больше допустимого размера.
        """
        if not source.mime_type.startswith(self._config.accepted_mime_prefix):
            logger.info("Rejected %s: type %s is not an image", source.name, source.mime_type)
            raise InvalidFileType(f"{source.name}: {source.mime_type}")
        if source.size_bytes > self._config.max_file_size:
            logger.info("Rejected %s: %d bytes exceeds limit", source.name, source.size_bytes)
            raise FileTooLarge(f"{source.name}: {source.size_bytes} bytes")

    def read(self, source: SourceFile) -> EncodedImage:
        """Синхронно читает файл целиком и упаковывает его в data URL.

        Raises:
            FileReadError: если чтение не удалось или файл пуст.
        """
        try:
            data = source.path.read_bytes()
        except OSError as exc:
            logger.error("Failed to read %s: %s", source.path, exc)
            raise FileReadError(str(source.path)) from exc
        if not data:
            logger.error("Read of %s returned no data", source.path)
            raise FileReadError(f"{source.path}: пустой файл")
        logger.info("Read %s (%d bytes)", source.name, len(data))
        return EncodedImage.from_bytes(source.mime_type, data)

    async def load(self, source: SourceFile) -> EncodedImage:
        """Проверяет файл и читает его в рабочем потоке."""
        self.validate(source)
        return await asyncio.to_thread(self.read, source)
