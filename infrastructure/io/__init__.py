"""I/O utilities: filesystem operations and home directory lookup."""

from infrastructure.io.fs import ensure_file, read_text, resolve_home_directory

__all__ = [
    "ensure_file",
    "read_text",
    "resolve_home_directory",
]
