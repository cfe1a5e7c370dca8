"""
Value decoding and typed coercion for the INI dialect.

Quoting rules:
- A value starting with `"` or `'` runs to the matching unescaped quote.
- Inside quotes, `\\X` decodes to `X` for every character X.
- Unquoted values end at the first unescaped `#`; backslashes are kept as-is.
"""

import logging
import math
import re
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "yes", "1"})
_FALSE_VALUES = frozenset({"false", "no", "0"})

QUOTE_CHARS = ("'", '"')

# ASCII only: int()/float() would also take `1_000` and non-Latin digits
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ValueKind(Enum):
    """Target type of a config key."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    POSITIVE_INTEGER = "positive_integer"  # non-positive values are ignored
    FLOAT = "float"


def parse_boolean(value: str, warnings: list[str] | None = None) -> bool:
    """
    Parse a boolean config value.

    Accepts true/yes/1 and false/no/0 in any case. Anything else falls back to
    False with a warning; it never aborts parsing.
    """
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False

    message = f"Invalid boolean value {value!r}, falling back to false"
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
    return False


def parse_int(value: str) -> int:
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"Expected an integer, got {value!r}")
    return int(value, 10)


def parse_float(value: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(value):
        raise ValueError(f"Expected a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return number


def find_closing_quote(value: str, quote: str) -> int | None:
    """Index of the first unescaped `quote` after position 0, or None."""
    escaped = False
    for i in range(1, len(value)):
        c = value[i]
        if escaped:
            escaped = False
            continue
        if c == "\\":
            escaped = True
            continue
        if c == quote:
            return i
    return None


def unescape_quotes(value: str) -> str:
    """Drop each escaping backslash and keep the character after it."""
    out: list[str] = []
    escaped = False
    for c in value:
        if escaped:
            out.append(c)
            escaped = False
        elif c == "\\":
            escaped = True
        else:
            out.append(c)
    return "".join(out)


def strip_inline_comment(value: str) -> str:
    """Cut an unquoted value at its first unescaped `#`."""
    escaped = False
    for i, c in enumerate(value):
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c == "#":
            return value[:i].rstrip(" \t")
    return value


def decode_value(raw: str) -> str | None:
    """
    Decode the right-hand side of a `key = value` line.

    Returns None when a quoted value has no closing quote; the caller skips
    the key in that case.
    """
    if len(raw) >= 2 and raw[0] in QUOTE_CHARS:
        closing = find_closing_quote(raw, raw[0])
        if closing is None:
            return None
        return unescape_quotes(raw[1:closing])
    return strip_inline_comment(raw)


def coerce(kind: ValueKind, value: str, warnings: list[str] | None = None) -> Any | None:
    """
    Convert a decoded value to its target type.

    Returns None when the value should be ignored (prior value retained).

    Raises:
        ValueError: If a numeric value is not a number
    """
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.BOOLEAN:
        return parse_boolean(value, warnings)
    if kind is ValueKind.INTEGER:
        return parse_int(value)
    if kind is ValueKind.POSITIVE_INTEGER:
        number = parse_int(value)
        return number if number > 0 else None
    if kind is ValueKind.FLOAT:
        return parse_float(value)
    raise ValueError(f"Unsupported value kind: {kind}")
