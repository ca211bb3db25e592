"""Application entry point."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from wallet_secure.core.config import load_config
from wallet_secure.core.container import build_container
from wallet_secure.ui.main_window import MainWindow


def run() -> None:
    """Launch the GUI application."""
    config = load_config()
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    container = build_container(config)
    container.prune_audit_logs()

    app = QApplication(sys.argv)
    app.aboutToQuit.connect(container.close)
    window = MainWindow(
        container.config,
        container.auth_service,
        container.insurance_service,
        container.audit_repo,
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    run()
