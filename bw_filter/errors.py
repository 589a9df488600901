"""Ошибки приложения и сообщения для пользователя.

Каждый класс несёт ровно одно сообщение на языке интерфейса. Ошибки
декодирования и загрузки пикселей показываются как ошибка обработки, поэтому
различных сообщений всего четыре.
"""
from __future__ import annotations


class ImageAppError(Exception):
    """Базовая ошибка: любая из них завершает текущую попытку."""

    user_message: str = "Ошибка обработки изображения."

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.user_message)
        self.detail = detail


class InvalidFileType(ImageAppError):
    user_message = "Пожалуйста, загрузите файл изображения (JPG, PNG)."


class FileTooLarge(ImageAppError):
    user_message = "Файл слишком большой. Максимальный размер 10 МБ."


class FileReadError(ImageAppError):
    user_message = "Ошибка чтения файла."


class ProcessingError(ImageAppError):
    user_message = "Ошибка обработки изображения."


class ImageDecodeError(ProcessingError):
    """Данные не являются изображением или blob повреждён."""


class ImageLoadError(ImageDecodeError):
    """Заголовок распознан, но пиксели загрузить не удалось (файл обрезан или испорчен)."""
