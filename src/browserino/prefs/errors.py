"""Errors raised by settings export/import."""


class SettingsTransferError(Exception):
    """Base class for export/import failures."""


class CorruptDocument(SettingsTransferError):
    """Import bytes are not JSON, or the top level is not an object."""


class EncodeFailure(SettingsTransferError):
    """A preference value cannot be represented in JSON."""


class PickerFailure(SettingsTransferError):
    """The chosen file could not be read or written."""


class StoreWriteFailure(SettingsTransferError):
    """The preference store could not persist an imported value."""
