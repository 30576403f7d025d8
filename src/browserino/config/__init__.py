"""Configuration: app identity, data locations, preference defaults."""

from .settings import (
    APP_BUNDLE_ID,
    APP_NAME,
    DEFAULTS,
    get_app_data_dir,
    get_default,
    get_preferences_path,
)

__all__ = [
    "APP_BUNDLE_ID",
    "APP_NAME",
    "DEFAULTS",
    "get_app_data_dir",
    "get_default",
    "get_preferences_path",
]
