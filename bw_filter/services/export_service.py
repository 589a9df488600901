from __future__ import annotations

import logging
from pathlib import Path

from bw_filter.config import DEFAULT_CONFIG, AppConfig
from bw_filter.models.image_model import EncodedImage

logger = logging.getLogger(__name__)


class ExportService:
    def __init__(self, config: AppConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    def suggest_filename(self, stem: str) -> str:
        """Имя для сохранения: `<stem>_bw.jpg`."""
        base = stem or self._config.default_stem
        return f"{base}{self._config.output_suffix}{self._config.output_extension}"

    def save(self, blob: EncodedImage, file_path: str | Path) -> Path:
        """Записывает байты результата в выбранный файл."""
        path = Path(file_path)
        data = blob.payload
        path.write_bytes(data)
        logger.info("Saved %d bytes to %s", len(data), path)
        return path
