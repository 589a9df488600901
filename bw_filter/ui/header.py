"""Верхняя панель: название, кнопка закрытия и единственная строка ошибки.

Принципы:
- SRP: только отображение; события отдаются наружу через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class Header(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, **kwargs)

        self.grid_columnconfigure(1, weight=1)

        # Callbacks
        self.on_close: Optional[Callable[[], None]] = None

        self._badge = ctk.CTkLabel(
            self,
            text="bw",
            width=24,
            height=24,
            corner_radius=6,
            fg_color=("#171717", "#e5e5e5"),
            text_color=("#ffffff", "#171717"),
            font=ctk.CTkFont(size=11, weight="bold"),
        )
        self._badge.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._title = ctk.CTkLabel(self, text="ЧБ Фильтр", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=1, pady=8, sticky="w")

        self._close_btn = ctk.CTkButton(
            self, text="✕", width=28, fg_color="transparent", text_color="gray", command=self._emit_close
        )
        self._close_visible = True
        self.set_close_visible(False)

        # Единственный слот сообщения об ошибке
        self._error_val = ctk.StringVar(value="")
        self._error_label = ctk.CTkLabel(
            self,
            textvariable=self._error_val,
            text_color=("#b91c1c", "#fca5a5"),
            fg_color=("#fef2f2", "#3f1d1d"),
            corner_radius=8,
            wraplength=520,
            anchor="w",
            justify="left",
        )

    # ---- Public API ----
    def set_close_visible(self, visible: bool) -> None:
        if visible == self._close_visible:
            return
        self._close_visible = visible
        if visible:
            self._close_btn.grid(row=0, column=2, padx=(6, 10), pady=8, sticky="e")
        else:
            self._close_btn.grid_remove()

    def set_error(self, message: Optional[str]) -> None:
        """Показывает сообщение или скрывает строку, если сообщения нет."""
        if message:
            self._error_val.set(message)
            self._error_label.grid(row=1, column=0, columnspan=3, padx=10, pady=(0, 8), sticky="ew")
        else:
            self._error_val.set("")
            self._error_label.grid_remove()

    def _emit_close(self) -> None:
        if self.on_close:
            self.on_close()
