"""Line and section grammar for the INI dialect."""

import re

VALID_SECTIONS = frozenset({"general", "query", "response", "openai", "anthropic", "gemini"})

# key = "double quoted" | 'single quoted' | bare-token, then an optional trailing comment
# inside quotes a backslash pairs with the next character; only the one right
# before the closing quote may stand alone
_KV_PATTERN = re.compile(
    r"""\s*([a-zA-Z0-9_]+)\s*=\s*"""
    r"""(?:"(?:\\.|[^"\\])*\\?"|'(?:\\.|[^'\\])*\\?'|[^\s'"]*)"""
    r"""\s*(?:#.*)?"""
)

HORIZONTAL_WS = " \t"


def is_valid_section(name: str) -> bool:
    """Exact, case-sensitive match against the recognised section names."""
    return name in VALID_SECTIONS


def is_valid_line(line: str) -> bool:
    """Return True if the line has the shape `key = value [# comment]`."""
    return _KV_PATTERN.fullmatch(line.strip(HORIZONTAL_WS)) is not None


def is_blank_or_comment(line: str) -> bool:
    """Blank and full-line comment lines are no-ops for the parser."""
    stripped = line.strip(HORIZONTAL_WS)
    return not stripped or stripped.startswith("#")
