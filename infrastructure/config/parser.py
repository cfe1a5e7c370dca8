"""
Line-oriented parser for the config file INI dialect.

Produces a Configuration seeded with built-in defaults and overlaid with the
file's keys. Parsing is all-or-nothing: the first fatal error discards every
key applied so far.
"""

import logging

from domain.ini import ValueKind, coerce, decode_value, is_blank_or_comment, is_valid_line, is_valid_section
from infrastructure.constants import (
    MAX_CONFIG_LINE_LENGTH,
    SECTION_GENERAL,
    SECTION_QUERY,
    SECTION_RESPONSE,
)

from .errors import ConfigLoadError, LoadErrorKind, ParseResult, ParseWarning
from .models import Configuration, Provider
from .registry import resolve_provider

logger = logging.getLogger(__name__)

# Section -> key -> (Configuration field, value kind)
SETTINGS_KEYS: dict[str, dict[str, tuple[str, ValueKind]]] = {
    SECTION_GENERAL: {
        "log_level": ("log_level", ValueKind.STRING),
        "enable_logging": ("enable_logging", ValueKind.BOOLEAN),
        "request_timeout_ms": ("request_timeout_ms", ValueKind.INTEGER),
        "max_retries": ("max_retries", ValueKind.INTEGER),
    },
    SECTION_QUERY: {
        "enforce_limit": ("enforce_limit", ValueKind.BOOLEAN),
        "default_limit": ("default_limit", ValueKind.INTEGER),
        "max_query_length": ("max_query_length", ValueKind.POSITIVE_INTEGER),
    },
    SECTION_RESPONSE: {
        "show_explanation": ("show_explanation", ValueKind.BOOLEAN),
        "show_warnings": ("show_warnings", ValueKind.BOOLEAN),
        "show_suggested_visualization": ("show_suggested_visualization", ValueKind.BOOLEAN),
        "use_formatted_response": ("use_formatted_response", ValueKind.BOOLEAN),
    },
}


class _ConfigParser:
    """Single-use parser state: open section, line counter, config, warnings."""

    def __init__(self) -> None:
        self.section: str | None = None
        self.section_valid = False
        self.line_number = 0
        self.config = Configuration()
        self.warnings: list[ParseWarning] = []

    def warn(self, message: str) -> None:
        logger.warning("Line %d: %s", self.line_number, message)
        self.warnings.append(ParseWarning(line_number=self.line_number, message=message))

    def _collect(self, messages: list[str]) -> None:
        # coercion helpers already logged these
        for message in messages:
            self.warnings.append(ParseWarning(line_number=self.line_number, message=message))

    def parse(self, content: str) -> Configuration:
        for raw_line in content.split("\n"):
            self.line_number += 1
            self._parse_line(raw_line)

        if self.config.providers:
            self.config.default_provider = self.config.providers[0].model_copy()
        return self.config

    def _parse_line(self, raw_line: str) -> None:
        if len(raw_line) > MAX_CONFIG_LINE_LENGTH:
            raise ConfigLoadError(
                LoadErrorKind.LINE_TOO_LONG,
                f"Line is too long ({len(raw_line)} > {MAX_CONFIG_LINE_LENGTH} characters)",
                line_number=self.line_number,
            )

        line = raw_line.removesuffix("\r").strip(" \t")
        if is_blank_or_comment(line):
            return

        if line.startswith("["):
            closing = line.find("]")
            if closing != -1:
                self._open_section(line[1:closing])
                return

        if not is_valid_line(line):
            raise ConfigLoadError(
                LoadErrorKind.MALFORMED_LINE,
                f"Line does not match the `key = value` format: {line!r}",
                line_number=self.line_number,
            )

        key, _, raw_value = line.partition("=")
        key = key.strip(" \t")
        value = decode_value(raw_value.strip(" \t"))
        if value is None:
            self.warn(f"Unclosed quote in value of key {key!r}; the key will be skipped")
            return

        if self.section is None:
            self.warn(f"Key {key!r} is outside a section; the key will be ignored")
            return

        if not self.section_valid:
            self.warn(f"Key {key!r} is in invalid section [{self.section}]; the key will be ignored")
            return

        try:
            self._dispatch(self.section, key, value)
        except ValueError as err:
            raise ConfigLoadError(
                LoadErrorKind.INVALID_NUMBER,
                f"Invalid value for key {key!r} in [{self.section}]: {err}",
                line_number=self.line_number,
            ) from err

    def _open_section(self, name: str) -> None:
        self.section = name
        self.section_valid = is_valid_section(name)
        if not self.section_valid:
            self.warn(f"Invalid section [{name}]; the section will be ignored")

    def _dispatch(self, section: str, key: str, value: str) -> None:
        messages: list[str] = []

        settings = SETTINGS_KEYS.get(section)
        if settings is not None:
            binding = settings.get(key)
            if binding is None:
                logger.debug("Ignoring unrecognised key %r in [%s]", key, section)
                return
            field_name, kind = binding
            coerced = coerce(kind, value, messages)
            if coerced is not None:
                setattr(self.config, field_name, coerced)
        else:
            resolve_provider(self.config, key, value, Provider.from_string(section), messages)

        self._collect(messages)


def parse_config(content: str) -> ParseResult:
    """
    Parse config file content into a Configuration.

    This is a pure function - it does NOT perform file I/O.
    The file reading happens in infrastructure.config.loader.

    Args:
        content: Full text of the config file

    Returns:
        ParseResult with either the parsed Configuration or the fatal error,
        plus any recoverable warnings collected before that point
    """
    parser = _ConfigParser()
    try:
        config = parser.parse(content)
    except ConfigLoadError as err:
        logger.error("Failed to parse configuration: %s", err)
        return ParseResult(error=err, warnings=parser.warnings)
    return ParseResult(config=config, warnings=parser.warnings)
