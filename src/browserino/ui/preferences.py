"""
Preferences window.
"""

from typing import Callable, Optional

from PySide6.QtWidgets import QTabWidget, QVBoxLayout, QWidget

from ..config.settings import APP_BUNDLE_ID
from ..prefs.store import PreferenceStore
from ..system.default_browser import HandlerRegistry
from .general_tab import GeneralTab


class PreferencesWindow(QWidget):
    """Top-level preferences window with one tab per section."""

    def __init__(
        self,
        store: PreferenceStore,
        registry: Optional[HandlerRegistry] = None,
        bundle_id: str = APP_BUNDLE_ID,
        load_browsers: Optional[Callable[[list], list]] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)

        self.setWindowTitle("Browserino Preferences")
        self.setMinimumSize(640, 360)

        layout = QVBoxLayout(self)
        self._tabs = QTabWidget()
        self.general_tab = GeneralTab(store, registry, bundle_id, load_browsers)
        self._tabs.addTab(self.general_tab, "General")
        layout.addWidget(self._tabs)
