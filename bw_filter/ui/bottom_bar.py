from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_download: Optional[Callable[[], None]] = None
        self.on_reset: Optional[Callable[[], None]] = None

        # layout
        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)

        self._download_btn = ctk.CTkButton(self, text="Скачать результат", command=self._emit_download)
        self._download_btn.grid(row=0, column=0, padx=(10, 6), pady=(8, 4), sticky="ew")

        self._reset_btn = ctk.CTkButton(
            self, text="Загрузить другое", fg_color="transparent", border_width=1, command=self._emit_reset
        )
        self._reset_btn.grid(row=0, column=1, padx=(6, 10), pady=(8, 4), sticky="ew")

        self._note = ctk.CTkLabel(
            self,
            text="Обработка происходит на вашем компьютере. Фото никуда не отправляются.",
            text_color="gray",
            font=ctk.CTkFont(size=11),
        )
        self._note.grid(row=1, column=0, columnspan=2, padx=10, pady=(0, 8))

    # public API (sync from controller)
    def set_download_enabled(self, enabled: bool) -> None:
        self._download_btn.configure(state="normal" if enabled else "disabled")

    def set_visible(self, visible: bool) -> None:
        # кнопки нужны только когда выбран файл
        if visible:
            self.grid()
        else:
            self.grid_remove()

    # events
    def _emit_download(self) -> None:
        if self.on_download:
            self.on_download()

    def _emit_reset(self) -> None:
        if self.on_reset:
            self.on_reset()
