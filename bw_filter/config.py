"""Настройки приложения.

Все константы собраны в одном неизменяемом объекте: переменных окружения и
файлов конфигурации у приложения нет.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Параметры загрузки, обработки и сохранения.

    Fields:
        max_file_size: Максимальный размер исходного файла, байт (10 МБ).
        accepted_mime_prefix: Префикс MIME-типа, который принимает загрузчик.
        picker_patterns: Маски файлов для диалога выбора.
        jpeg_quality: Качество JPEG для результата (0.9 → 90).
        output_suffix: Суффикс имени сохраняемого файла.
        output_extension: Расширение сохраняемого файла.
        output_mime: MIME-тип результата.
        default_stem: Имя файла по умолчанию, пока изображение не выбрано.
        placeholder_opacity: Непрозрачность исходника во время обработки.
        poll_interval_ms: Период опроса незавершённой операции из UI.
        log_level: Уровень логирования.
    """
    max_file_size: int = 10 * 1024 * 1024
    accepted_mime_prefix: str = "image/"
    picker_patterns: str = "*.png *.jpg *.jpeg *.webp"
    jpeg_quality: int = 90
    output_suffix: str = "_bw"
    output_extension: str = ".jpg"
    output_mime: str = "image/jpeg"
    default_stem: str = "image"
    placeholder_opacity: float = 0.5
    poll_interval_ms: int = 30
    log_level: str = "INFO"


DEFAULT_CONFIG = AppConfig()
