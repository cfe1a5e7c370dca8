"""
Domain layer: pure logic with no external dependencies.

Contains:
- ini: grammar checks and value coercion for the config file dialect
"""

from domain.ini import decode_value, is_valid_line, is_valid_section, parse_boolean

__all__ = [
    "decode_value",
    "is_valid_line",
    "is_valid_section",
    "parse_boolean",
]
