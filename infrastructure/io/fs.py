"""Filesystem utility functions."""

import os
from collections.abc import Mapping
from pathlib import Path


def ensure_file(path: Path, what: str) -> None:
    """Raise FileNotFoundError unless `path` is a regular file; `what` names it in the message."""
    if not path.is_file():
        raise FileNotFoundError(f"Missing {what} at: {path}")


def read_text(path: Path) -> str:
    """
    Read a text file with UTF-8 encoding.

    Content is returned untouched so line numbers stay aligned with the file.
    """
    return path.read_text(encoding="utf-8")


def _passwd_home() -> str | None:
    if not hasattr(os, "geteuid"):
        return None
    import pwd

    try:
        return pwd.getpwuid(os.geteuid()).pw_dir or None
    except KeyError:
        return None


def resolve_home_directory(environ: Mapping[str, str] | None = None) -> Path | None:
    """
    Resolve the current user's home directory.

    Order: $HOME, the effective user's passwd entry, then /home/$USER.
    Returns None when nothing resolves.
    """
    env = os.environ if environ is None else environ

    home = env.get("HOME")
    if home:
        return Path(home)

    pw_home = _passwd_home()
    if pw_home:
        return Path(pw_home)

    user = env.get("USER")
    if user:
        return Path("/home") / user

    return None
