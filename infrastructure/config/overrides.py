"""
Runtime API-key overrides layered on top of the base configuration.

The effective configuration is always rebuilt from the base snapshot, so
clearing an override restores exactly what the config file says and an entry
created only by an override disappears once that override is cleared.
"""

import logging
import os
from collections.abc import Iterator, Mapping

from pydantic import BaseModel, ConfigDict

from infrastructure.constants import (
    ANTHROPIC_API_KEY_VARIABLE_NAME,
    GEMINI_API_KEY_VARIABLE_NAME,
    OPENAI_API_KEY_VARIABLE_NAME,
)

from .models import Configuration, Provider
from .registry import ensure_provider

logger = logging.getLogger(__name__)


class ProviderOverrides(BaseModel):
    """One optional API key per provider. None and "" both mean "no override"."""

    model_config = ConfigDict(frozen=True)

    openai: str | None = None
    anthropic: str | None = None
    gemini: str | None = None

    def for_provider(self, provider: Provider) -> str | None:
        if provider not in Provider.configurable():
            return None
        value = getattr(self, provider.value)
        return value or None

    def active(self) -> Iterator[tuple[Provider, str]]:
        """Yield (provider, api_key) for every non-empty override, in canonical order."""
        for provider in Provider.configurable():
            value = self.for_provider(provider)
            if value is not None:
                yield provider, value

    def is_empty(self) -> bool:
        return next(self.active(), None) is None


def apply_overrides(base: Configuration, overrides: ProviderOverrides) -> Configuration:
    """
    Derive the effective configuration from `base` and the current overrides.

    `base` is never mutated.
    """
    effective = base.model_copy(deep=True)

    for provider, api_key in overrides.active():
        entry = ensure_provider(effective, provider)
        if entry is None:
            continue
        entry.api_key = api_key
        logger.debug("Applied runtime api_key override for provider=%s", provider.value)

    if effective.providers:
        effective.default_provider = effective.providers[0].model_copy()

    return effective


def overrides_from_env(environ: Mapping[str, str] | None = None) -> ProviderOverrides:
    """Read provider API keys from environment variables (OPENAI_API_KEY, ...)."""
    env = os.environ if environ is None else environ
    return ProviderOverrides(
        openai=env.get(OPENAI_API_KEY_VARIABLE_NAME),
        anthropic=env.get(ANTHROPIC_API_KEY_VARIABLE_NAME),
        gemini=env.get(GEMINI_API_KEY_VARIABLE_NAME),
    )
