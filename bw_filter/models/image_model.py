"""Модели данных для изображений.

Принципы:
- SRP: только структура данных и разбор собственного представления, без обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

import base64
import binascii
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from bw_filter.errors import FileReadError, ImageDecodeError

# не во всех версиях Python таблица mimetypes знает webp
mimetypes.add_type("image/webp", ".webp")

_DATA_URL_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class SourceFile:
    """Файл, выбранный пользователем.

    Fields:
        path: Путь к файлу.
        name: Имя файла с расширением.
        mime_type: Заявленный MIME-тип (по расширению).
        size_bytes: Размер файла, байт.
    """
    path: Path
    name: str
    mime_type: str
    size_bytes: int

    @classmethod
    def from_path(cls, file_path: str | Path) -> "SourceFile":
        """Собирает описание файла без чтения его содержимого.

        Raises:
            FileReadError: если файл недоступен.
        """
        path = Path(file_path)
        try:
            size_bytes = path.stat().st_size
        except OSError as exc:
            raise FileReadError(f"Нет доступа к файлу: {path}") from exc
        mime_type, _encoding = mimetypes.guess_type(path.name)
        return cls(
            path=path,
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            size_bytes=size_bytes,
        )


@dataclass(frozen=True)
class EncodedImage:
    """Изображение в виде data URL: `data:<mime>;base64,<payload>`."""
    data_url: str

    @classmethod
    def from_bytes(cls, mime_type: str, data: bytes) -> "EncodedImage":
        payload = base64.b64encode(data).decode("ascii")
        return cls(data_url=f"{_DATA_URL_PREFIX}{mime_type}{_BASE64_MARKER}{payload}")

    def _split(self) -> tuple[str, str]:
        if not self.data_url.startswith(_DATA_URL_PREFIX) or _BASE64_MARKER not in self.data_url:
            raise ImageDecodeError("Некорректный data URL")
        header, payload = self.data_url[len(_DATA_URL_PREFIX):].split(_BASE64_MARKER, 1)
        return header, payload

    @property
    def mime_type(self) -> str:
        return self._split()[0]

    @property
    def payload(self) -> bytes:
        """Декодированные байты изображения."""
        _mime, payload = self._split()
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ImageDecodeError("Некорректные base64-данные") from exc
