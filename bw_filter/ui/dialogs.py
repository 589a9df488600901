"""Системные диалоги открытия и сохранения файла."""
from __future__ import annotations

import logging
from tkinter import TclError, filedialog
from typing import Optional

from bw_filter.config import DEFAULT_CONFIG, AppConfig

logger = logging.getLogger(__name__)


class FileDialogs:
    def __init__(self, config: AppConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    def ask_open_path(self) -> Optional[str]:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(("JPG, PNG или WebP", self._config.picker_patterns),),
            )
        except TclError as exc:
            # dialog cannot open on this display
            logger.warning("Open dialog failed: %s", exc)
            return None
        return file_path or None

    def ask_save_path(self, suggested_name: str) -> Optional[str]:
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить результат",
                initialfile=suggested_name,
                defaultextension=self._config.output_extension,
                filetypes=(("JPEG", f"*{self._config.output_extension}"),),
            )
        except TclError as exc:
            logger.warning("Save dialog failed: %s", exc)
            return None
        return file_path or None
