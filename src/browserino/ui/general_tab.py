"""
General preferences tab.

Default browser status, copy-URL options, settings import/export and
full reset.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox, QFileDialog, QFormLayout, QLabel, QMessageBox,
    QPushButton, QVBoxLayout, QWidget,
)

from ..config.settings import (
    APP_BUNDLE_ID,
    KEY_ALTERNATIVE_SHORTCUT,
    KEY_BROWSERS,
    KEY_CLOSE_AFTER_COPY,
    get_default,
)
from ..prefs.errors import SettingsTransferError
from ..prefs.store import PreferenceStore
from ..prefs.transfer import (
    DEFAULT_EXPORT_FILENAME,
    export_settings_file,
    import_settings_file,
    reset_preferences,
)
from ..system.default_browser import (
    DEFAULT_SCHEME,
    HandlerRegistry,
    is_default_browser,
)


logger = logging.getLogger(__name__)

JSON_FILTER = "JSON (*.json)"


def _as_bool(value: Any) -> bool:
    """Read a stored flag; INI-backed QSettings hands back "true"/"false"."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _caption(text: str) -> QLabel:
    """Dimmed helper text under a control."""
    label = QLabel(text)
    label.setWordWrap(True)
    label.setStyleSheet("color: palette(mid);")
    return label


class GeneralTab(QWidget):
    """General preferences."""

    settings_exported = Signal(str)   # Written file path
    settings_imported = Signal(int)   # Number of keys written
    transfer_failed = Signal(str)     # Error message

    def __init__(
        self,
        store: PreferenceStore,
        registry: Optional[HandlerRegistry] = None,
        bundle_id: str = APP_BUNDLE_ID,
        load_browsers: Optional[Callable[[list], list]] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)

        self._store = store
        self._registry = registry
        self._bundle_id = bundle_id
        self._load_browsers = load_browsers
        self._is_default: Optional[bool] = None

        self._setup_ui()
        self._load_settings()
        self.refresh_default_state()

    def _setup_ui(self) -> None:
        """Set up the tab UI."""
        form = QFormLayout(self)
        form.setLabelAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignTop)
        form.setHorizontalSpacing(32)
        form.setVerticalSpacing(16)

        # Default browser
        default_box = QVBoxLayout()
        self._make_default_btn = QPushButton("Make default")
        self._make_default_btn.clicked.connect(self._on_make_default_clicked)
        default_box.addWidget(self._make_default_btn, alignment=Qt.AlignmentFlag.AlignLeft)
        self._default_caption = _caption("Make Browserino default browser to use it")
        default_box.addWidget(self._default_caption)
        form.addRow(self._heading("Default browser"), default_box)

        # Installed browsers, only when a scanner is available
        self._rescan_btn: Optional[QPushButton] = None
        if self._load_browsers is not None:
            rescan_box = QVBoxLayout()
            self._rescan_btn = QPushButton("Rescan")
            self._rescan_btn.clicked.connect(self.rescan_browsers)
            rescan_box.addWidget(self._rescan_btn, alignment=Qt.AlignmentFlag.AlignLeft)
            rescan_box.addWidget(_caption("Rescan list of installed browsers"))
            form.addRow(self._heading("Installed Browsers"), rescan_box)

        # Copy URL
        copy_box = QVBoxLayout()
        self._close_after_copy_checkbox = QCheckBox("Close prompt view after copying URL")
        self._close_after_copy_checkbox.toggled.connect(
            lambda checked: self._store.set(KEY_CLOSE_AFTER_COPY, checked)
        )
        copy_box.addWidget(self._close_after_copy_checkbox)
        self._alternative_shortcut_checkbox = QCheckBox("Use Command+C instead of Command+Option+C")
        self._alternative_shortcut_checkbox.toggled.connect(
            lambda checked: self._store.set(KEY_ALTERNATIVE_SHORTCUT, checked)
        )
        copy_box.addWidget(self._alternative_shortcut_checkbox)
        form.addRow(self._heading("Copy URL"), copy_box)

        # Import/Export
        transfer_box = QVBoxLayout()
        self._export_btn = QPushButton("Export")
        self._export_btn.clicked.connect(self._on_export_clicked)
        transfer_box.addWidget(self._export_btn, alignment=Qt.AlignmentFlag.AlignLeft)
        transfer_box.addWidget(_caption("Export all settings"))
        self._import_btn = QPushButton("Import")
        self._import_btn.clicked.connect(self._on_import_clicked)
        transfer_box.addWidget(self._import_btn, alignment=Qt.AlignmentFlag.AlignLeft)
        transfer_box.addWidget(_caption("Import all settings"))
        form.addRow(self._heading("Import/Export"), transfer_box)

        # Reset
        reset_box = QVBoxLayout()
        self._reset_btn = QPushButton("Reset")
        self._reset_btn.clicked.connect(self._on_reset_clicked)
        reset_box.addWidget(self._reset_btn, alignment=Qt.AlignmentFlag.AlignLeft)
        reset_box.addWidget(_caption("Reset all preferences"))
        form.addRow(self._heading("System reset"), reset_box)

    @staticmethod
    def _heading(text: str) -> QLabel:
        label = QLabel(text)
        font = label.font()
        font.setBold(True)
        label.setFont(font)
        label.setMinimumWidth(200)
        label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignTop)
        return label

    def _load_settings(self) -> None:
        """Load current store values into the checkboxes."""
        for checkbox, key in (
            (self._close_after_copy_checkbox, KEY_CLOSE_AFTER_COPY),
            (self._alternative_shortcut_checkbox, KEY_ALTERNATIVE_SHORTCUT),
        ):
            checkbox.blockSignals(True)
            checkbox.setChecked(_as_bool(self._store.get(key, get_default(key))))
            checkbox.blockSignals(False)

    # ------------------------------------------------------------------
    # Default browser
    # ------------------------------------------------------------------

    @property
    def is_default(self) -> Optional[bool]:
        """Whether Browserino is the default browser (None if unknown)."""
        return self._is_default

    def refresh_default_state(self) -> None:
        """Re-query the OS and update the Make default button."""
        if self._registry is None:
            self._is_default = None
        else:
            self._is_default = is_default_browser(self._registry, self._bundle_id)

        self._make_default_btn.setEnabled(
            self._registry is not None and self._is_default is not True
        )
        if self._registry is None:
            self._default_caption.setText("Default browser cannot be checked on this system")
        elif self._is_default:
            self._default_caption.setText("Browserino is your default browser")
        else:
            self._default_caption.setText("Make Browserino default browser to use it")

    def _on_make_default_clicked(self) -> None:
        if self._registry is None:
            return
        self._registry.request_default(self._bundle_id, DEFAULT_SCHEME, self.refresh_default_state)

    # ------------------------------------------------------------------
    # Installed browsers
    # ------------------------------------------------------------------

    def rescan_browsers(self) -> Optional[list]:
        """Run the injected scanner and store the refreshed browser list."""
        if self._load_browsers is None:
            return None
        old = self._store.get(KEY_BROWSERS, get_default(KEY_BROWSERS))
        browsers = self._load_browsers(list(old or []))
        self._store.set(KEY_BROWSERS, browsers)
        logger.info("Rescanned browsers: %d found", len(browsers))
        return browsers

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_to(self, path: str) -> Optional[Path]:
        """
        Export settings to a file.

        Returns:
            The written path, or None if the export failed
        """
        try:
            written = export_settings_file(self._store, path)
        except SettingsTransferError as e:
            self._report_failure("Export failed", e)
            return None

        self.settings_exported.emit(str(written))
        return written

    def import_from(self, path: str) -> Optional[int]:
        """
        Import settings from a file.

        Returns:
            Number of keys written, or None if the import failed
        """
        try:
            count = import_settings_file(self._store, path)
        except SettingsTransferError as e:
            self._report_failure("Import failed", e)
            return None

        self._load_settings()
        self.settings_imported.emit(count)
        return count

    def _report_failure(self, title: str, error: Exception) -> None:
        message = f"{title}: {error}"
        logger.warning(message)
        self.transfer_failed.emit(message)
        if self.isVisible():
            QMessageBox.warning(self, title, str(error))

    def _on_export_clicked(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Settings", DEFAULT_EXPORT_FILENAME, JSON_FILTER
        )
        if not path:
            logger.info("Export cancelled")
            return
        self.export_to(path)

    def _on_import_clicked(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Settings", "", JSON_FILTER)
        if not path:
            logger.info("Import cancelled")
            return
        self.import_from(path)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset_all(self) -> int:
        """Remove every preference and reload the tab."""
        removed = reset_preferences(self._store)
        self._load_settings()
        return removed

    def _on_reset_clicked(self) -> None:
        reply = QMessageBox.question(
            self, "Reset Preferences",
            "Are you sure you want to reset all preferences?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply == QMessageBox.StandardButton.Yes:
            self.reset_all()
