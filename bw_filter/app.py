import customtkinter as ctk

from bw_filter.config import DEFAULT_CONFIG, AppConfig
from bw_filter.controllers.app_controller import AppController
from bw_filter.ui.bottom_bar import BottomBar
from bw_filter.ui.dialogs import FileDialogs
from bw_filter.ui.header import Header
from bw_filter.ui.image_viewer import ImageViewer


class BwFilterApp(ctk.CTk):
    def __init__(self, config: AppConfig = DEFAULT_CONFIG) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("ЧБ Фильтр")
        self.minsize(520, 420)

        # root layout: header, viewer, bottom bar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=0)
        self.grid_rowconfigure(1, weight=1)
        self.grid_rowconfigure(2, weight=0)

        self._header = Header(self)
        self._header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))

        self._viewer = ImageViewer(self, placeholder_opacity=config.placeholder_opacity)
        self._viewer.grid(row=1, column=0, sticky="nsew", padx=12, pady=6)

        self._bottom = BottomBar(self)
        self._bottom.grid(row=2, column=0, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer,
            header=self._header,
            bottom=self._bottom,
            window=self,
            dialogs=FileDialogs(config),
            config=config,
        )
        self._controller.bind_events()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self) -> None:
        self._controller.shutdown()
        self.destroy()
