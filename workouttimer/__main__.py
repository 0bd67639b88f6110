"""Allow running WorkoutTimer as a module: python -m workouttimer."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import WorkoutTimerApp


def configure_logging() -> None:
    level = os.environ.get("WORKOUTTIMER_LOG", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def main() -> None:
    configure_logging()

    app = QApplication(sys.argv)
    app.setApplicationName("WorkoutTimer")
    app.setOrganizationName("WorkoutTimer")

    window = WorkoutTimerApp()
    window.show()
    logging.getLogger(__name__).info("WorkoutTimer ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
