"""Состояние сеанса: выбор файла -> загрузка -> обработка -> результат.

Каждое состояние - отдельный неизменяемый класс, несущий только свои данные,
поэтому «обработка без изображения» и подобные сочетания невыразимы.

    Empty -> Loading -> Processing -> Ready
      \\________\\___________\\-----> Error
    reset(): любое состояние -> Empty

`previous` / `retained` хранят последний успешный результат: после ошибки
на экране остаётся либо пустое состояние, либо прежний неизменный результат.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from bw_filter.errors import ImageAppError
from bw_filter.models.image_model import EncodedImage, SourceFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Ready:
    stem: str
    original: EncodedImage
    processed: EncodedImage


@dataclass(frozen=True)
class Loading:
    attempt: int
    source: SourceFile
    previous: Optional[Ready] = None


@dataclass(frozen=True)
class Processing:
    attempt: int
    source: SourceFile
    original: EncodedImage
    previous: Optional[Ready] = None


@dataclass(frozen=True)
class Error:
    error: ImageAppError
    retained: Optional[Ready] = None


SessionState = Union[Empty, Loading, Processing, Ready, Error]


class ImageSession:
    """Единственный владелец текущего состояния.

    Каждый выбор файла получает новый номер попытки. Результаты попыток,
    вытесненных новым выбором или сбросом, игнорируются: отмена
    выполняющейся операции не отправляется.
    """

    def __init__(self, default_stem: str = "image") -> None:
        self._default_stem = default_stem
        self._state: SessionState = Empty()
        self._attempt = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def displayed(self) -> Optional[Ready]:
        """Результат, который сейчас показан (или может быть показан после ошибки)."""
        state = self._state
        if isinstance(state, Ready):
            return state
        if isinstance(state, Error):
            return state.retained
        return None

    @property
    def busy(self) -> bool:
        return isinstance(self._state, (Loading, Processing))

    @property
    def error_message(self) -> Optional[str]:
        if isinstance(self._state, Error):
            return self._state.error.user_message
        return None

    @property
    def download_stem(self) -> str:
        ready = self.displayed
        return ready.stem if ready is not None else self._default_stem

    # ---- Transitions ----
    def select(self, source: SourceFile) -> int:
        """Начинает новую попытку; прежняя ошибка сбрасывается."""
        self._attempt += 1
        self._state = Loading(attempt=self._attempt, source=source, previous=self._last_ready())
        logger.debug("Attempt %d: loading %s", self._attempt, source.name)
        return self._attempt

    def reject(self, error: ImageAppError) -> None:
        """Файл отклонён до чтения: показанный результат не меняется."""
        self._attempt += 1
        self._state = Error(error=error, retained=self._last_ready())

    def loaded(self, attempt: int, original: EncodedImage) -> bool:
        state = self._state
        if not isinstance(state, Loading) or state.attempt != attempt:
            return self._stale(attempt, "loaded")
        self._state = Processing(
            attempt=attempt, source=state.source, original=original, previous=state.previous
        )
        return True

    def converted(self, attempt: int, processed: EncodedImage, stem: str) -> bool:
        state = self._state
        if not isinstance(state, Processing) or state.attempt != attempt:
            return self._stale(attempt, "converted")
        self._state = Ready(stem=stem, original=state.original, processed=processed)
        return True

    def failed(self, attempt: int, error: ImageAppError) -> bool:
        state = self._state
        if not isinstance(state, (Loading, Processing)) or state.attempt != attempt:
            return self._stale(attempt, "failed")
        self._state = Error(error=error, retained=state.previous)
        return True

    def reset(self) -> None:
        self._attempt += 1
        self._state = Empty()

    # ---- Helpers ----
    def _last_ready(self) -> Optional[Ready]:
        state = self._state
        if isinstance(state, (Loading, Processing)):
            return state.previous
        return self.displayed

    def _stale(self, attempt: int, outcome: str) -> bool:
        logger.debug("Ignoring %s result of superseded attempt %d", outcome, attempt)
        return False
