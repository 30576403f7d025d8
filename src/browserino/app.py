"""
Application entry: logging setup and the preferences window.
"""

import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from . import __app_name__, __version__
from .config.settings import APP_NAME, ORGANIZATION, get_log_path
from .prefs.store import default_store
from .system.default_browser import default_registry
from .ui.preferences import PreferencesWindow


logger = logging.getLogger(__name__)


def setup_logging() -> Optional[str]:
    """
    Configure logging to the app data directory and stdout.

    An existing logging configuration (e.g. when embedded) is left alone.

    Returns:
        Path of the log file, or None if it could not be opened
    """
    root = logging.getLogger()
    if root.handlers:
        return None

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_path: Optional[str] = None
    try:
        log_path = str(get_log_path())
        handlers.insert(0, logging.FileHandler(log_path, mode="a", encoding="utf-8"))
    except OSError as e:
        print(f"Failed to open log file: {e}")
        log_path = None

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )

    # Unhandled exceptions end up in the log file too
    def _excepthook(exc_type, exc, tb):
        logging.error("Unhandled exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    return log_path


def run_app() -> int:
    """Run the preferences pane."""
    setup_logging()

    app = QApplication(sys.argv)

    # Set app metadata
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(ORGANIZATION)

    logger.info("%s preferences started (v%s)", __app_name__, __version__)

    window = PreferencesWindow(default_store(), default_registry())
    window.show()

    return app.exec()
