"""Фоновый цикл asyncio для операций, запускаемых из UI.

Главный цикл Tk не блокируется: корутины выполняются в отдельном потоке,
а UI опрашивает возвращённый `concurrent.futures.Future`.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Any, Coroutine, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncRunner:
    def __init__(self) -> None:
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    def _ensure_started(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.new_event_loop()
            self._thread = threading.Thread(target=self._loop.run_forever, name="bw-filter-loop", daemon=True)
            self._thread.start()
            logger.debug("Background event loop started")
        return self._loop

    def submit(self, coro: Coroutine[Any, Any, T]) -> Future[T]:
        """Планирует корутину и возвращает future с ровно одним исходом."""
        loop = self._ensure_started()
        return asyncio.run_coroutine_threadsafe(coro, loop)

    def close(self) -> None:
        if self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            if self._thread.is_alive():
                # loop still busy: the daemon thread ends with the process
                logger.warning("Background event loop did not stop in time")
                self._loop = None
                self._thread = None
                return
        self._loop.close()
        self._loop = None
        self._thread = None
        logger.debug("Background event loop stopped")
