"""Виджет просмотра: приглашение выбрать файл, исходник во время обработки, результат.

Принципы:
- SRP: отвечает только за представление изображения, без логики обработки.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk


class ImageViewer(ctk.CTkFrame):
    """Канва, вписывающая изображение в доступную область."""
    def __init__(self, master: ctk.CTk | tk.Misc, placeholder_opacity: float = 0.5, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg(), cursor="hand2")
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._busy: bool = False
        self._placeholder_opacity = placeholder_opacity
        self._tk_image: Optional[ImageTk.PhotoImage] = None

        self.on_open_file: Optional[Callable[[], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<ButtonRelease-1>", self._on_click)

    # ---- Public API ----
    def show_empty(self) -> None:
        """Показывает приглашение выбрать или перетащить фото."""
        self._image = None
        self._busy = False
        self._canvas.configure(cursor="hand2")
        self._render()

    def show_placeholder(self, image: Image.Image) -> None:
        """Исходник с пониженной непрозрачностью, пока идёт обработка."""
        self._image = image
        self._busy = True
        self._canvas.configure(cursor="watch")
        self._render()

    def show_image(self, image: Image.Image) -> None:
        self._image = image
        self._busy = False
        self._canvas.configure(cursor="")
        self._render()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        self._render()

    def _on_click(self, _event: tk.Event) -> None:
        if self._image is None and not self._busy and self.on_open_file:
            self.on_open_file()

    def _render(self) -> None:
        self._canvas.delete("all")
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))

        if self._image is None:
            self._tk_image = None
            self._canvas.create_text(
                canvas_w // 2, canvas_h // 2 - 10, text="Нажмите или перетащите фото", fill=self._get_text_fg()
            )
            self._canvas.create_text(canvas_w // 2, canvas_h // 2 + 12, text="JPG, PNG или WebP", fill="#9a9a9a")
            return

        scale = self._fit_scale(canvas_w, canvas_h)
        img_w, img_h = self._image.size
        scaled_w = max(1, int(img_w * scale))
        scaled_h = max(1, int(img_h * scale))
        draw_img = self._image.convert("RGBA").resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)
        if self._busy:
            draw_img = self._fade(draw_img)

        self._tk_image = ImageTk.PhotoImage(draw_img)
        x = (canvas_w - scaled_w) // 2
        y = (canvas_h - scaled_h) // 2
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")
        if self._busy:
            self._canvas.create_text(canvas_w // 2, canvas_h // 2, text="Обработка…", fill=self._get_text_fg())

    def _fit_scale(self, canvas_w: int, canvas_h: int) -> float:
        img_w, img_h = self._image.size if self._image is not None else (0, 0)
        if img_w == 0 or img_h == 0:
            return 1.0
        # не увеличиваем маленькие изображения
        return min(1.0, canvas_w / img_w, canvas_h / img_h)

    def _fade(self, image: Image.Image) -> Image.Image:
        alpha = image.getchannel("A").point(lambda a: int(a * self._placeholder_opacity))
        faded = image.copy()
        faded.putalpha(alpha)
        return faded

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _get_text_fg(self) -> str:
        return "#e6e6e6" if ctk.get_appearance_mode().lower() == "dark" else "#404040"
