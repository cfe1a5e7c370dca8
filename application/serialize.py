"""Configuration snapshot serialization."""

import json
import logging
from pathlib import Path
from typing import Any

from application.constants import MASK_KEEP_CHARS, MASK_MIN_LENGTH, MASK_PLACEHOLDER
from infrastructure.config import Configuration

logger = logging.getLogger(__name__)


def mask_secret(value: str) -> str:
    """Mask an API key, keeping a few characters at each end of long keys."""
    if not value:
        return ""
    if len(value) < MASK_MIN_LENGTH:
        return MASK_PLACEHOLDER
    return f"{value[:MASK_KEEP_CHARS]}{MASK_PLACEHOLDER}{value[-MASK_KEEP_CHARS:]}"


def config_to_dict(config: Configuration, *, reveal_secrets: bool = False) -> dict[str, Any]:
    """
    Dump a Configuration to JSON-compatible primitives.

    API keys are masked unless `reveal_secrets` is set.
    """
    data = config.model_dump(mode="json")
    if not reveal_secrets:
        data["default_provider"]["api_key"] = mask_secret(config.default_provider.api_key)
        for dumped, entry in zip(data["providers"], config.providers, strict=True):
            dumped["api_key"] = mask_secret(entry.api_key)
    return data


def write_config_snapshot(config: Configuration, path: Path, *, reveal_secrets: bool = False) -> Path:
    """Write the resolved configuration as pretty-printed JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(config_to_dict(config, reveal_secrets=reveal_secrets), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info("Saved configuration snapshot to %s", path)
    return path
