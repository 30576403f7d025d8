import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    """Keep app data writes out of the real home directory."""
    monkeypatch.setenv("BROWSERINO_HOME", str(tmp_path / "home"))
