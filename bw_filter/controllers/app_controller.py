"""Контроллер приложения: оркестрация UI, сеанса и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: виджеты, диалоги и исполнитель операций передаются извне.
Clean Code:
- Обработчики компактны; состояние хранит `ImageSession`, отрисовка выводится из него.
- Единственное место, где ошибки превращаются в сообщение для пользователя.
"""
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Tuple, Type

from PIL import Image

from bw_filter.config import DEFAULT_CONFIG, AppConfig
from bw_filter.errors import FileReadError, ImageAppError, ProcessingError
from bw_filter.models.image_model import EncodedImage, SourceFile
from bw_filter.models.session import ImageSession, Loading, Processing
from bw_filter.services.async_runner import AsyncRunner
from bw_filter.services.export_service import ExportService
from bw_filter.services.file_loader import FileLoader, stem_of
from bw_filter.services.grayscale_service import GrayscaleConverter, open_image

if TYPE_CHECKING:
    from bw_filter.ui.bottom_bar import BottomBar
    from bw_filter.ui.dialogs import FileDialogs
    from bw_filter.ui.header import Header
    from bw_filter.ui.image_viewer import ImageViewer

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Запуск загрузки и обработки в фоне и опрос их завершения из цикла Tk.
    - Перевод ошибок в сообщение и возврат к стабильному состоянию.
    """
    viewer: "ImageViewer"
    header: "Header"
    bottom: "BottomBar"
    window: Any
    dialogs: "FileDialogs"
    config: AppConfig = DEFAULT_CONFIG
    runner: AsyncRunner = field(default_factory=AsyncRunner)

    session: ImageSession = field(init=False)
    _loader: FileLoader = field(init=False)
    _converter: GrayscaleConverter = field(init=False)
    _exporter: ExportService = field(init=False)
    # декодированные превью: исходник текущей попытки и последний результат
    _source_preview: Optional[Tuple[EncodedImage, Image.Image]] = field(init=False, default=None)
    _result_preview: Optional[Tuple[EncodedImage, Image.Image]] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.session = ImageSession(default_stem=self.config.default_stem)
        self._loader = FileLoader(self.config)
        self._converter = GrayscaleConverter(self.config)
        self._exporter = ExportService(self.config)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.viewer.on_open_file = self._handle_open_file
        self.header.on_close = self._handle_reset
        self.bottom.on_download = self._handle_download
        self.bottom.on_reset = self._handle_reset
        self._render()

    def shutdown(self) -> None:
        self.runner.close()

    # ---- Input surface ----
    def handle_drop(self, paths: Sequence[str]) -> None:
        """Перетаскивание: берётся только первый файл."""
        if not paths:
            return
        self.open_path(paths[0])

    def open_path(self, file_path: str) -> None:
        try:
            source = SourceFile.from_path(file_path)
        except ImageAppError as exc:
            self._reject(exc)
            return
        self.open_source(source)

    def open_source(self, source: SourceFile) -> None:
        try:
            self._loader.validate(source)
        except ImageAppError as exc:
            self._reject(exc)
            return
        attempt = self.session.select(source)
        logger.info("Accepted %s (%s, %d bytes)", source.name, source.mime_type, source.size_bytes)
        self._render()
        future = self.runner.submit(self._load_stage(source))
        self._watch(future, lambda done: self._on_loaded(attempt, source, done))

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        file_path = self.dialogs.ask_open_path()
        if not file_path:
            return
        self.open_path(file_path)

    def _handle_reset(self) -> None:
        self.session.reset()
        self._source_preview = None
        self._result_preview = None
        logger.info("Session reset")
        self._render()

    def _handle_download(self) -> None:
        ready = self.session.displayed
        if ready is None:
            return
        file_path = self.dialogs.ask_save_path(self._exporter.suggest_filename(ready.stem))
        if not file_path:
            return
        self._exporter.save(ready.processed, file_path)

    # ---- Background stages ----
    async def _load_stage(self, source: SourceFile) -> Tuple[EncodedImage, Image.Image]:
        """Чтение файла и декодирование превью исходника вне потока Tk."""
        original = await self._loader.load(source)
        preview = await asyncio.to_thread(_decode_preview, original)
        return original, preview

    async def _convert_stage(self, original: EncodedImage) -> Tuple[EncodedImage, Image.Image]:
        processed = await self._converter.convert(original)
        preview = await asyncio.to_thread(_decode_preview, processed)
        return processed, preview

    # ---- Completion callbacks ----
    def _on_loaded(self, attempt: int, source: SourceFile, future: Future) -> None:
        outcome, error = self._outcome(future, FileReadError)
        if error is not None:
            self._fail(attempt, error)
            return
        original, preview = outcome
        if not self.session.loaded(attempt, original):
            return
        self._source_preview = (original, preview)
        self._render()
        future = self.runner.submit(self._convert_stage(original))
        stem = stem_of(source.name)
        self._watch(future, lambda done: self._on_converted(attempt, stem, done))

    def _on_converted(self, attempt: int, stem: str, future: Future) -> None:
        outcome, error = self._outcome(future, ProcessingError)
        if error is not None:
            self._fail(attempt, error)
            return
        processed, preview = outcome
        if self.session.converted(attempt, processed, stem):
            self._result_preview = (processed, preview)
            self._source_preview = None
            self._render()

    # ---- Helpers ----
    def _watch(self, future: Future, callback: Callable[[Future], None]) -> None:
        """Опрашивает future из цикла Tk, пока операция не завершится."""
        if future.done():
            callback(future)
            return
        self.window.after(self.config.poll_interval_ms, lambda: self._watch(future, callback))

    def _outcome(self, future: Future, fallback: Type[ImageAppError]) -> Tuple[Any, Optional[ImageAppError]]:
        try:
            return future.result(), None
        except ImageAppError as exc:
            return None, exc
        except Exception as exc:
            logger.exception("Unexpected failure in background operation")
            return None, fallback(str(exc))

    def _reject(self, error: ImageAppError) -> None:
        logger.warning("File rejected: %s", error)
        self.session.reject(error)
        self._render()

    def _fail(self, attempt: int, error: ImageAppError) -> None:
        if self.session.failed(attempt, error):
            logger.error("Attempt %d failed: %s: %s", attempt, type(error).__name__, error)
            self._render()

    @staticmethod
    def _cached(slot: Optional[Tuple[EncodedImage, Image.Image]], blob: EncodedImage) -> Optional[Image.Image]:
        if slot is not None and slot[0] is blob:
            return slot[1]
        return None

    def _render(self) -> None:
        """Приводит виджеты в соответствие с текущим состоянием сеанса.

        Ничего не декодирует: превью готовятся в фоновых стадиях.
        """
        state = self.session.state
        shown = self.session.displayed
        if isinstance(state, Loading):
            shown_now = state.previous
        else:
            shown_now = shown
        self.header.set_error(self.session.error_message)

        placeholder = self._cached(self._source_preview, state.original) if isinstance(state, Processing) else None
        result = self._cached(self._result_preview, shown_now.processed) if shown_now is not None else None
        if placeholder is not None:
            self.viewer.show_placeholder(placeholder)
        elif result is not None:
            self.viewer.show_image(result)
        else:
            self.viewer.show_empty()
        has_image = placeholder is not None or result is not None

        self.header.set_close_visible(has_image)
        self.bottom.set_visible(has_image)
        self.bottom.set_download_enabled(shown is not None)


def _decode_preview(blob: EncodedImage) -> Image.Image:
    """Открывает blob для показа; любой сбой становится ошибкой обработки."""
    try:
        return open_image(blob)
    except ImageAppError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while decoding preview")
        raise ProcessingError(str(exc)) from exc
