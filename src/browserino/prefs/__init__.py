"""Preference store access and settings export/import."""

from .errors import (
    CorruptDocument,
    EncodeFailure,
    PickerFailure,
    SettingsTransferError,
    StoreWriteFailure,
)
from .export_filter import (
    EXCLUSION_RULES,
    ExclusionRule,
    MatchKind,
    build_export_document,
    filter_settings,
    is_exportable_key,
)
from .store import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    QSettingsPreferenceStore,
    default_store,
)
from .transfer import (
    DEFAULT_EXPORT_FILENAME,
    decode_document,
    encode_document,
    export_settings,
    export_settings_file,
    import_settings,
    import_settings_file,
    merge_settings,
    reset_preferences,
)
from .values import Value, check_value

__all__ = [
    "CorruptDocument",
    "EncodeFailure",
    "PickerFailure",
    "SettingsTransferError",
    "StoreWriteFailure",
    "EXCLUSION_RULES",
    "ExclusionRule",
    "MatchKind",
    "build_export_document",
    "filter_settings",
    "is_exportable_key",
    "JsonFilePreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "QSettingsPreferenceStore",
    "default_store",
    "DEFAULT_EXPORT_FILENAME",
    "decode_document",
    "encode_document",
    "export_settings",
    "export_settings_file",
    "import_settings",
    "import_settings_file",
    "merge_settings",
    "reset_preferences",
    "Value",
    "check_value",
]
