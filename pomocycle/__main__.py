"""Allow running Pomocycle as a module: python -m pomocycle."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .settings import load_settings
from .app import PomocycleApp


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("pomocycle")

    init_db()
    logger.info("Pomocycle ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Pomocycle")
    app.setOrganizationName("Pomocycle")

    window = PomocycleApp(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
