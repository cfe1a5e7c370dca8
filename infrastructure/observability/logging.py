"""
Logging setup with contextvars-based metadata injection.

- Adds the loaded config tag and selected provider into every log line (via contextvars).
- Supports console-only logging OR console + rotating file logs.
- Maps the config file's [general] log_level / enable_logging onto the application loggers.
"""

import contextvars
import hashlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Context variables for dynamic log metadata
cv_config_tag = contextvars.ContextVar("config_tag", default="-")
cv_provider = contextvars.ContextVar("provider", default="-")

# Full path kept in context for metadata (not printed every line)
cv_config_path = contextvars.ContextVar("config_path", default="-")

# Loggers whose level follows the config file
APP_LOGGERS = ("domain", "infrastructure", "application", "main")

_LEVELS_BY_NAME = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def make_config_tag(config_path: str, length: int = 8) -> str:
    """
    Stable short tag derived from the config file path.
    Uses BLAKE2s so the same file always gets the same tag.
    """
    h = hashlib.blake2s(config_path.encode("utf-8"), digest_size=8).hexdigest()
    return h[:length]


class ContextInjectFilter(logging.Filter):
    """Inject context variables into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.config = cv_config_tag.get() or "-"
        record.provider = cv_provider.get() or "-"
        return True


def set_log_context(
    *,
    config_path: str | Path | None = None,
    provider: str | None = None,
) -> None:
    """Update logging context (thread-safe via contextvars)."""
    if config_path is not None:
        cv_config_path.set(str(config_path))
        cv_config_tag.set(make_config_tag(str(config_path)))

    if provider is not None:
        cv_provider.set(str(provider))


def get_log_context() -> dict[str, str]:
    """Return the current context in a convenient dict form."""
    return {
        "config_tag": str(cv_config_tag.get() or "-"),
        "config_path": str(cv_config_path.get() or "-"),
        "provider": str(cv_provider.get() or "-"),
    }


def clear_log_context() -> None:
    """Reset all context variables to their defaults."""
    cv_config_tag.set("-")
    cv_config_path.set("-")
    cv_provider.set("-")


def parse_log_level(name: str) -> int:
    """Map a config log_level string to a logging level; unknown names fall back to INFO."""
    level = _LEVELS_BY_NAME.get(name.strip().upper())
    if level is None:
        logging.getLogger(__name__).warning("Unknown log_level %r, falling back to INFO", name)
        return logging.INFO
    return level


def apply_config_logging(log_level: str, enable_logging: bool) -> int:
    """
    Apply the config file's logging settings to the application loggers.

    With enable_logging off only warnings and errors get through.

    Returns:
        The level that was applied
    """
    level = parse_log_level(log_level) if enable_logging else logging.WARNING
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
    return level


def configure_logging(
    *,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10_000_000,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure application logging with contextvars support.

    Args:
        log_file: Path to log file
        console_level: Minimum level for console output (default: INFO)
        file_level: Minimum level for file output (default: DEBUG)
        max_bytes: Max log file size before rotation
        backup_count: Number of backup files to keep
    """
    # Clear existing handlers to avoid duplicate logs if called multiple times
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)  # keep root permissive; handlers enforce levels

    # Formatter includes context fields injected by ContextInjectFilter
    console_fmt = "%(asctime)s [%(levelname)s] c=%(config)s p=%(provider)s | %(message)s"
    file_fmt = "%(asctime)s [%(levelname)s] %(name)s | c=%(config)s p=%(provider)s | %(message)s"

    console_formatter = logging.Formatter(console_fmt, datefmt="%H:%M:%S")
    file_formatter = logging.Formatter(file_fmt, datefmt="%Y-%m-%d %H:%M:%S")

    ctx_filter = ContextInjectFilter()

    # Console handler (human-readable, INFO+)
    ch = logging.StreamHandler()
    ch.setLevel(console_level)
    ch.setFormatter(console_formatter)
    ch.addFilter(ctx_filter)
    root.addHandler(ch)

    # File handler (detailed, DEBUG+, with rotation)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(file_level)
        fh.setFormatter(file_formatter)
        fh.addFilter(ctx_filter)
        root.addHandler(fh)

    logging.getLogger(__name__).info(
        "Logging configured (console_level=%s, file=%s)",
        logging.getLevelName(console_level),
        str(log_file) if log_file is not None else "None",
    )
