"""Точка входа в приложение."""
import logging

from bw_filter.app import BwFilterApp
from bw_filter.config import DEFAULT_CONFIG


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно приложения."""
    logging.basicConfig(
        level=DEFAULT_CONFIG.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = BwFilterApp(DEFAULT_CONFIG)
    app.mainloop()


if __name__ == "__main__":
    main()
