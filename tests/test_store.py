import json
from pathlib import Path

from PySide6.QtCore import QSettings

from browserino.prefs import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    QSettingsPreferenceStore,
)


def test_memory_store_basic_operations():
    store = MemoryPreferenceStore({"a": 1})
    store.set("b", [1, 2])
    assert store.get("a") == 1
    assert store.get("missing", "fallback") == "fallback"
    assert sorted(store.keys()) == ["a", "b"]

    store.remove("a")
    store.remove("never-set")
    assert store.as_dict() == {"b": [1, 2]}


def test_memory_store_as_dict_is_a_copy():
    store = MemoryPreferenceStore({"a": 1})
    snapshot = store.as_dict()
    snapshot["b"] = 2
    assert store.keys() == ["a"]


def test_json_store_defaults_to_empty_when_missing(tmp_path: Path):
    store = JsonFilePreferenceStore(tmp_path / "prefs.json")
    assert store.as_dict() == {}
    assert not store.path.exists()


def test_json_store_persists_writes(tmp_path: Path):
    path = tmp_path / "prefs.json"
    store = JsonFilePreferenceStore(path)
    store.set("copy_closeAfterCopy", True)
    store.set("browsers", ["/Applications/Safari.app"])

    reloaded = JsonFilePreferenceStore(path)
    assert reloaded.get("copy_closeAfterCopy") is True
    assert reloaded.get("browsers") == ["/Applications/Safari.app"]
    assert json.loads(path.read_text(encoding="utf-8"))["copy_closeAfterCopy"] is True


def test_json_store_remove(tmp_path: Path):
    path = tmp_path / "prefs.json"
    store = JsonFilePreferenceStore(path)
    store.set("a", 1)
    store.set("b", 2)
    store.remove("a")

    assert JsonFilePreferenceStore(path).as_dict() == {"b": 2}


def test_json_store_corrupt_file_is_backed_up(tmp_path: Path):
    path = tmp_path / "prefs.json"
    path.write_text("{not valid json", encoding="utf-8")

    store = JsonFilePreferenceStore(path)
    assert store.as_dict() == {}

    baks = sorted(tmp_path.glob(path.name + ".bak.*"))
    assert baks, "Expected a backup to be created for corrupt preferences"
    assert baks[0].read_text(encoding="utf-8") == "{not valid json"


def test_json_store_non_object_root_is_ignored(tmp_path: Path):
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonFilePreferenceStore(path).keys() == []


def test_json_store_default_path_uses_app_home(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("BROWSERINO_HOME", str(tmp_path))
    store = JsonFilePreferenceStore()
    store.set("theme", "dark")
    assert (tmp_path / "preferences.json").exists()


def test_qsettings_store(tmp_path: Path):
    settings = QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat)
    store = QSettingsPreferenceStore(settings)

    assert store.get("theme", "light") == "light"
    store.set("theme", "dark")
    store.set("browser", "Safari")
    assert store.get("theme") == "dark"
    assert sorted(store.keys()) == ["browser", "theme"]

    store.remove("browser")
    assert store.as_dict() == {"theme": "dark"}
