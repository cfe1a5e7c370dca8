"""Configuration loading from the INI config file."""

import logging
from collections.abc import Mapping
from pathlib import Path

from infrastructure.constants import CONFIG_FILE_NAME, DOCS_URL
from infrastructure.io import ensure_file, read_text, resolve_home_directory

from .errors import ConfigLoadError, LoadErrorKind, LoadResult
from .parser import parse_config

logger = logging.getLogger(__name__)


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """
    Return `<home>/.pg_ai.config`.

    Raises:
        ConfigLoadError: HOME_UNRESOLVED if no home directory can be determined
    """
    home = resolve_home_directory(environ)
    if home is None:
        raise ConfigLoadError(
            LoadErrorKind.HOME_UNRESOLVED,
            "Could not determine home directory (HOME, passwd entry and USER are all unavailable)",
        )
    return home / CONFIG_FILE_NAME


def _log_missing_file_hint(path: Path) -> None:
    logger.warning("Configuration file not found at: %s", path)
    logger.info("To create it, run:")
    logger.info("  cat > %s << 'EOF'", path)
    logger.info("  [openai]")
    logger.info('  api_key = "your-api-key-here"')
    logger.info("  EOF")
    logger.info("Documentation: %s", DOCS_URL)


def load_config_file(path: Path) -> LoadResult:
    """
    Read and parse a config file.

    Never raises for file or content problems; inspect `LoadResult.ok`.

    Args:
        path: Config file location

    Returns:
        LoadResult with the parsed base Configuration or the fatal error
    """
    logger.info("Loading configuration from: %s", path)

    try:
        ensure_file(path, "configuration file")
    except FileNotFoundError:
        _log_missing_file_hint(path)
        return LoadResult.failure(
            ConfigLoadError(
                LoadErrorKind.FILE_NOT_FOUND,
                f"Configuration file not found. Create it with your API key. See: {DOCS_URL}",
                path=path,
            ),
            path=path,
        )

    try:
        content = read_text(path)
    except (OSError, UnicodeDecodeError) as err:
        logger.error("Could not read configuration file %s: %s", path, err)
        return LoadResult.failure(
            ConfigLoadError(LoadErrorKind.UNREADABLE, f"Could not read file: {err}", path=path),
            path=path,
        )

    return LoadResult.from_parse(parse_config(content), path)
