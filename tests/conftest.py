import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from infrastructure.config import ConfigService
from infrastructure.observability import clear_log_context
from infrastructure.observability.logging import APP_LOGGERS

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_path() -> Callable[[str], Path]:
    def _path(name: str) -> Path:
        return FIXTURES_DIR / name

    return _path


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write config content to a temp file and return its path."""
    counter = {"n": 0}

    def _write(content: str) -> Path:
        counter["n"] += 1
        path = tmp_path / f"config_{counter['n']}.ini"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def service(tmp_path: Path) -> ConfigService:
    # default path points at a file that does not exist unless a test writes it
    return ConfigService(default_path=tmp_path / ".pg_ai.config")


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Iterator[None]:
    yield
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
    clear_log_context()
