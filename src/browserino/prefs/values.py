"""
Preference values.

A value is one of bool, int, float, str, a list of values, or a
string-keyed dict of values. Anything else cannot go into a settings
document.
"""

import math
from typing import Any, Union

from .errors import EncodeFailure


Value = Union[bool, int, float, str, list["Value"], dict[str, "Value"]]


def check_value(value: Any, path: str) -> None:
    """
    Check that a value fits the preference value model.

    Args:
        value: Value to check, walked recursively
        path: Key path used in the error message (e.g. "browsers[2]")

    Raises:
        EncodeFailure: If the value, or anything nested in it, is not
            JSON-representable
    """
    # bool is an int subclass, so it passes here too
    if isinstance(value, (str, int)):
        return

    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeFailure(f"{path}: {value!r} has no JSON representation")
        return

    if isinstance(value, list):
        for i, item in enumerate(value):
            check_value(item, f"{path}[{i}]")
        return

    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodeFailure(f"{path}: mapping key {key!r} is not a string")
            check_value(item, f"{path}.{key}")
        return

    raise EncodeFailure(f"{path}: unsupported value type {type(value).__name__}")
