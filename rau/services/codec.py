"""
Value Codec.

Turns the value half of a `key=value` argument into the JSON value sent
to the service, and renders values coming back for display.
"""

import json
import math

from rau.schemas.airtable import RecordValue


def _reject_constant(name: str) -> RecordValue:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


def encode(raw: str) -> RecordValue:
    """
    Interpret raw as strict JSON, falling back to the raw string.

    `42` becomes an int, `true` a bool, `null` None and `["a","b"]` a list;
    `hello world` stays the string "hello world". NaN and Infinity are
    not JSON and stay strings too, as do numbers too large for a double
    such as `1e400`.
    """
    try:
        return json.loads(raw, parse_float=_finite_float, parse_constant=_reject_constant)
    except ValueError:
        return raw


def display(value: RecordValue) -> str:
    """Render a value as compact JSON text, e.g. `"Active"`, `5`, `["a","b"]`."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
