"""Allow running Focus Timer as a module: python -m focustimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import FocusTimerApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Focus Timer")
    app.setOrganizationName("FocusTimer")

    window = FocusTimerApp()
    window.show()
    logging.getLogger(__name__).info("Focus Timer ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
