import json
from pathlib import Path

from browserino.prefs import MemoryPreferenceStore
from browserino.ui import GeneralTab, PreferencesWindow

from test_default_browser import BUNDLE_ID, FakeRegistry


def _tab(qtbot, store=None, registry=None):
    tab = GeneralTab(store or MemoryPreferenceStore(), registry, BUNDLE_ID)
    qtbot.addWidget(tab)
    return tab


def test_checkboxes_follow_store(qtbot):
    store = MemoryPreferenceStore({"copy_closeAfterCopy": True})
    tab = _tab(qtbot, store)

    assert tab._close_after_copy_checkbox.isChecked()
    assert not tab._alternative_shortcut_checkbox.isChecked()
    # Loading values does not write defaults back
    assert "copy_alternativeShortcut" not in store.keys()

    tab._alternative_shortcut_checkbox.setChecked(True)
    assert store.get("copy_alternativeShortcut") is True


def test_export_to_writes_filtered_document(qtbot, tmp_path: Path):
    store = MemoryPreferenceStore({"NSWindowFrame": "x", "copy_closeAfterCopy": True})
    tab = _tab(qtbot, store)
    path = tmp_path / "browserino-settings.json"

    with qtbot.waitSignal(tab.settings_exported) as blocker:
        written = tab.export_to(str(path))

    assert written == path.resolve()
    assert blocker.args == [str(path.resolve())]
    assert json.loads(path.read_text(encoding="utf-8")) == {"copy_closeAfterCopy": True}


def test_export_failure_is_reported(qtbot, tmp_path: Path):
    store = MemoryPreferenceStore({"blob": b"\x00"})
    tab = _tab(qtbot, store)
    path = tmp_path / "out.json"

    with qtbot.waitSignal(tab.transfer_failed):
        assert tab.export_to(str(path)) is None
    assert not path.exists()


def test_import_from_updates_store_and_checkboxes(qtbot, tmp_path: Path):
    store = MemoryPreferenceStore({"theme": "light"})
    tab = _tab(qtbot, store)
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"copy_closeAfterCopy": True}), encoding="utf-8")

    with qtbot.waitSignal(tab.settings_imported) as blocker:
        assert tab.import_from(str(path)) == 1

    assert blocker.args == [1]
    assert store.as_dict() == {"theme": "light", "copy_closeAfterCopy": True}
    assert tab._close_after_copy_checkbox.isChecked()


def test_import_corrupt_file_leaves_store(qtbot, tmp_path: Path):
    store = MemoryPreferenceStore({"theme": "light"})
    tab = _tab(qtbot, store)
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with qtbot.waitSignal(tab.transfer_failed) as blocker:
        assert tab.import_from(str(path)) is None

    assert blocker.args[0].startswith("Import failed")
    assert store.as_dict() == {"theme": "light"}


def test_reset_all_clears_store(qtbot):
    store = MemoryPreferenceStore({"copy_closeAfterCopy": True, "AppleLocale": "en"})
    tab = _tab(qtbot, store)

    assert tab.reset_all() == 2
    assert store.as_dict() == {}
    assert not tab._close_after_copy_checkbox.isChecked()


def test_default_browser_state(qtbot):
    registry = FakeRegistry({"https": "com.apple.Safari"})
    tab = _tab(qtbot, registry=registry)

    assert tab.is_default is False
    assert tab._make_default_btn.isEnabled()

    tab._make_default_btn.click()

    assert registry.requests == [(BUNDLE_ID, "https")]
    assert tab.is_default is True
    assert not tab._make_default_btn.isEnabled()


def test_default_browser_unknown_without_registry(qtbot):
    tab = _tab(qtbot)
    assert tab.is_default is None
    assert not tab._make_default_btn.isEnabled()


def test_preferences_window_hosts_general_tab(qtbot):
    window = PreferencesWindow(MemoryPreferenceStore(), None, BUNDLE_ID)
    qtbot.addWidget(window)
    assert isinstance(window.general_tab, GeneralTab)


def test_string_flags_from_ini_store(qtbot):
    store = MemoryPreferenceStore(
        {"copy_closeAfterCopy": "false", "copy_alternativeShortcut": "true"}
    )
    tab = _tab(qtbot, store)

    assert not tab._close_after_copy_checkbox.isChecked()
    assert tab._alternative_shortcut_checkbox.isChecked()


def test_rescan_row_hidden_without_scanner(qtbot):
    tab = _tab(qtbot)
    assert tab._rescan_btn is None
    assert tab.rescan_browsers() is None


def test_rescan_stores_scanned_browsers(qtbot):
    store = MemoryPreferenceStore({"browsers": ["/Applications/Safari.app"]})
    seen = []

    def load_browsers(old):
        seen.append(old)
        return old + ["/Applications/Firefox.app"]

    tab = GeneralTab(store, None, BUNDLE_ID, load_browsers)
    qtbot.addWidget(tab)

    tab._rescan_btn.click()

    assert seen == [["/Applications/Safari.app"]]
    assert store.get("browsers") == ["/Applications/Safari.app", "/Applications/Firefox.app"]


def test_import_of_unsupported_values_is_reported(qtbot, tmp_path: Path):
    store = MemoryPreferenceStore({"theme": "light"})
    tab = _tab(qtbot, store)
    path = tmp_path / "settings.json"
    path.write_text('{"theme": "dark", "zoom": NaN}', encoding="utf-8")

    with qtbot.waitSignal(tab.transfer_failed):
        assert tab.import_from(str(path)) is None
    assert store.as_dict() == {"theme": "light"}
