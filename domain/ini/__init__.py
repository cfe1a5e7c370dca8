"""
INI dialect primitives: grammar checks and value coercion.

All functions in this package are pure (no file I/O).
"""

from domain.ini.coercion import (
    ValueKind,
    coerce,
    decode_value,
    find_closing_quote,
    parse_boolean,
    parse_float,
    parse_int,
    strip_inline_comment,
    unescape_quotes,
)
from domain.ini.grammar import VALID_SECTIONS, is_blank_or_comment, is_valid_line, is_valid_section

__all__ = [
    # Grammar
    "VALID_SECTIONS",
    "is_valid_section",
    "is_valid_line",
    "is_blank_or_comment",
    # Coercion
    "ValueKind",
    "coerce",
    "decode_value",
    "find_closing_quote",
    "unescape_quotes",
    "strip_inline_comment",
    "parse_boolean",
    "parse_int",
    "parse_float",
]
