from __future__ import annotations

import asyncio
import io
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, List, Tuple

import numpy as np
import pytest
from PIL import Image

from bw_filter.models.image_model import EncodedImage


def _png_bytes(pixels: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(pixels.astype(np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> Callable[[np.ndarray], bytes]:
    return _png_bytes


@pytest.fixture
def png_blob() -> Callable[[np.ndarray], EncodedImage]:
    def make(pixels: np.ndarray) -> EncodedImage:
        return EncodedImage.from_bytes("image/png", _png_bytes(pixels))
    return make


@pytest.fixture
def png_file(tmp_path: Path) -> Callable[..., Path]:
    def make(pixels: np.ndarray, name: str = "photo.png") -> Path:
        path = tmp_path / name
        path.write_bytes(_png_bytes(pixels))
        return path
    return make


@pytest.fixture
def solid_rgba() -> Callable[..., np.ndarray]:
    def make(color: Tuple[int, int, int, int], width: int = 16, height: int = 16) -> np.ndarray:
        pixels = np.zeros((height, width, 4), dtype=np.uint8)
        pixels[...] = color
        return pixels
    return make


class SyncRunner:
    """Runs each coroutine to completion at submit time."""

    def __init__(self) -> None:
        self.closed = False

    def submit(self, coro) -> Future:
        future: Future = Future()
        try:
            future.set_result(asyncio.run(coro))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def close(self) -> None:
        self.closed = True


class DeferredRunner:
    """Keeps coroutines pending until the test resolves them."""

    def __init__(self) -> None:
        self.pending: List[Tuple[object, Future]] = []

    def submit(self, coro) -> Future:
        future: Future = Future()
        self.pending.append((coro, future))
        return future

    def resolve(self, index: int) -> None:
        coro, future = self.pending[index]
        try:
            future.set_result(asyncio.run(coro))
        except Exception as exc:
            future.set_exception(exc)

    def close(self) -> None:
        for coro, future in self.pending:
            if not future.done():
                coro.close()


class FakeWindow:
    """Collects `after` callbacks instead of running a Tk main loop."""

    def __init__(self) -> None:
        self.scheduled: List[Callable[[], None]] = []

    def after(self, _ms: int, callback: Callable[[], None]) -> None:
        self.scheduled.append(callback)

    def run_pending(self) -> None:
        callbacks, self.scheduled = self.scheduled, []
        for callback in callbacks:
            callback()


@pytest.fixture
def sync_runner() -> SyncRunner:
    return SyncRunner()


@pytest.fixture
def deferred_runner():
    runner = DeferredRunner()
    yield runner
    runner.close()


@pytest.fixture
def fake_window() -> FakeWindow:
    return FakeWindow()
