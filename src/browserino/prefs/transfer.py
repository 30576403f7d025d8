"""
Settings export and import.

Export: snapshot the store, filter it, encode it as pretty-printed JSON,
then write the file. Import: read the file, decode it completely, then
write every key back into the store. A failure in any step before the
last leaves both the file system and the store alone.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Union

from .errors import CorruptDocument, EncodeFailure, PickerFailure, StoreWriteFailure
from .export_filter import build_export_document
from .store import PreferenceStore
from .values import check_value


logger = logging.getLogger(__name__)


DEFAULT_EXPORT_FILENAME = "browserino-settings.json"


# ============================================================================
# Document codec
# ============================================================================

def encode_document(settings: Mapping[str, Any]) -> bytes:
    """
    Encode a settings mapping as a JSON document.

    Args:
        settings: Filtered settings to encode

    Returns:
        UTF-8 JSON bytes, indented and with sorted keys

    Raises:
        EncodeFailure: If any value is not JSON-representable
    """
    try:
        for key, value in settings.items():
            if not isinstance(key, str):
                raise EncodeFailure(f"settings key {key!r} is not a string")
            check_value(value, key)

        text = json.dumps(
            dict(settings),
            indent=2,
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except RecursionError as e:
        raise EncodeFailure("settings are nested too deeply to encode") from e
    except (TypeError, ValueError) as e:
        raise EncodeFailure(str(e)) from e

    return (text + "\n").encode("utf-8")


def _reject_constant(name: str) -> Any:
    # json.loads accepts these by default; they are not JSON
    raise ValueError(f"{name} is not a JSON value")


def decode_document(data: Union[bytes, str]) -> dict[str, Any]:
    """
    Decode a JSON settings document.

    No filtering happens here; every key in the document is returned.

    Args:
        data: Raw file contents

    Returns:
        The top-level JSON object as a dict

    Raises:
        CorruptDocument: If the data is not valid UTF-8 JSON (NaN and
            Infinity included) or the top level is not an object
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8-sig")
        parsed = json.loads(data, parse_constant=_reject_constant)
    except RecursionError as e:
        raise CorruptDocument("document is nested too deeply") from e
    except ValueError as e:
        raise CorruptDocument(f"not a valid JSON document: {e}") from e

    if not isinstance(parsed, dict):
        raise CorruptDocument(
            f"expected a JSON object at top level, got {type(parsed).__name__}"
        )

    return parsed


# ============================================================================
# Import merge
# ============================================================================

def merge_settings(store: PreferenceStore, settings: Mapping[str, Any]) -> int:
    """
    Write imported settings into the store.

    Existing keys are overwritten; keys missing from the import are kept.
    Top-level nulls are skipped. Every other entry is checked before the
    first write, so a document that could not be exported again is
    rejected as a whole.

    Returns:
        Number of keys written

    Raises:
        CorruptDocument: If an entry is outside the value model; the
            store is not touched
        StoreWriteFailure: If the store cannot persist a write
    """
    accepted: dict[str, Any] = {}
    for key, value in settings.items():
        if value is None:
            logger.warning("Skipping imported key %r with null value", key)
            continue
        try:
            check_value(value, key)
        except EncodeFailure as e:
            raise CorruptDocument(f"unsupported value in document: {e}") from e
        except RecursionError as e:
            raise CorruptDocument(f"{key}: value is nested too deeply") from e
        accepted[key] = value

    for key, value in accepted.items():
        try:
            store.set(key, value)
        except OSError as e:
            raise StoreWriteFailure(f"could not save {key!r}: {e}") from e
    return len(accepted)


def import_settings(store: PreferenceStore, data: Union[bytes, str]) -> int:
    """
    Decode a settings document and merge it into the store.

    Raises:
        CorruptDocument: If decoding or value checks fail; the store is
            not touched
    """
    settings = decode_document(data)
    return merge_settings(store, settings)


def export_settings(store: PreferenceStore) -> bytes:
    """Encode the store's exportable settings."""
    document = build_export_document(store)
    logger.debug("Exporting %d of %d preference keys", len(document), len(store.keys()))
    return encode_document(document)


# ============================================================================
# File hand-off
# ============================================================================

def write_document(path: Union[str, Path], data: bytes) -> Path:
    """
    Write an encoded document to disk.

    Raises:
        PickerFailure: If the file cannot be written
    """
    target = Path(path)
    try:
        target.write_bytes(data)
    except OSError as e:
        raise PickerFailure(f"could not write {target}: {e}") from e
    return target.resolve()


def read_document(path: Union[str, Path]) -> bytes:
    """
    Read a document from disk.

    Raises:
        PickerFailure: If the file cannot be read
    """
    source = Path(path)
    try:
        return source.read_bytes()
    except OSError as e:
        raise PickerFailure(f"could not read {source}: {e}") from e


def export_settings_file(store: PreferenceStore, path: Union[str, Path]) -> Path:
    """
    Export settings to a file.

    Encoding happens before the file is opened, so an EncodeFailure
    never leaves a partial file behind.

    Returns:
        Resolved path of the written file
    """
    data = export_settings(store)
    written = write_document(path, data)
    logger.info("Settings exported to: %s", written)
    return written


def import_settings_file(store: PreferenceStore, path: Union[str, Path]) -> int:
    """
    Import settings from a file.

    Returns:
        Number of keys written to the store
    """
    count = import_settings(store, read_document(path))
    logger.info("Settings imported successfully (%d keys) from %s", count, path)
    return count


# ============================================================================
# Reset
# ============================================================================

def reset_preferences(store: PreferenceStore) -> int:
    """
    Remove every key from the store.

    Returns:
        Number of keys removed
    """
    keys = store.keys()
    for key in keys:
        store.remove(key)
    logger.info("Reset %d preference keys", len(keys))
    return len(keys)
