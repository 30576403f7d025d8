"""
Application configuration.

Names and locations the rest of the app agrees on, plus the defaults for
the preference keys the General tab edits.
"""

import os
import sys
from pathlib import Path
from typing import Any


# App identity
APP_NAME = "Browserino"
ORGANIZATION = "alexstrnik"
APP_BUNDLE_ID = "xyz.alexstrnik.Browserino"

PREFERENCES_FILENAME = "preferences.json"
LOG_FILENAME = "browserino.log"

# Overrides the data directory (tests, portable installs)
HOME_ENV_VAR = "BROWSERINO_HOME"


# Preference keys edited by the General tab
KEY_BROWSERS = "browsers"
KEY_CLOSE_AFTER_COPY = "copy_closeAfterCopy"
KEY_ALTERNATIVE_SHORTCUT = "copy_alternativeShortcut"

DEFAULTS: dict[str, Any] = {
    KEY_BROWSERS: [],
    KEY_CLOSE_AFTER_COPY: False,
    KEY_ALTERNATIVE_SHORTCUT: False,
}


def is_macos() -> bool:
    return sys.platform == "darwin"


def get_app_data_dir() -> Path:
    """Get the application data directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        base = Path(override)
    elif os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home()))) / APP_NAME
    elif is_macos():
        base = Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        base = Path.home() / ".config" / APP_NAME

    base.mkdir(parents=True, exist_ok=True)
    return base


def get_preferences_path() -> Path:
    """Get the path to the JSON preference file."""
    return get_app_data_dir() / PREFERENCES_FILENAME


def get_log_path() -> Path:
    return get_app_data_dir() / LOG_FILENAME


def get_default(key: str) -> Any:
    """
    Get the default value for a known preference key.

    Lists are copied so callers can mutate the result freely.

    Returns:
        The default value, or None for keys the pane does not know about
    """
    value = DEFAULTS.get(key)
    if isinstance(value, list):
        return list(value)
    return value
