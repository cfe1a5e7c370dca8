"""Provider selection for a single request."""

import logging
from dataclasses import dataclass

from application.constants import AUTO_PROVIDER
from infrastructure.config import (
    Configuration,
    Provider,
    ProviderConfig,
    default_provider_config,
    resolved_endpoint,
    resolved_model,
)

logger = logging.getLogger(__name__)


class ProviderSelectionError(ValueError):
    """No usable provider could be selected for the request."""


@dataclass(frozen=True)
class ProviderSelection:
    """Everything a provider client needs to make a call."""

    provider: Provider
    api_key: str
    model: str
    endpoint: str
    max_tokens: int
    temperature: float


def _selection(entry: ProviderConfig, api_key: str) -> ProviderSelection:
    return ProviderSelection(
        provider=entry.provider,
        api_key=api_key,
        model=resolved_model(entry),
        endpoint=resolved_endpoint(entry),
        max_tokens=entry.default_max_tokens,
        temperature=entry.default_temperature,
    )


def select_provider(
    config: Configuration,
    provider: str | None = AUTO_PROVIDER,
    api_key: str | None = None,
) -> ProviderSelection:
    """
    Pick the provider and API key for a request.

    Key priority: explicit `api_key` argument > effective configuration
    (runtime override > config file).

    Args:
        config: Effective configuration
        provider: "auto" (or None/empty) or a provider name, case-insensitive
        api_key: Optional key supplied with the request

    Returns:
        ProviderSelection with model/endpoint defaults resolved

    Raises:
        ProviderSelectionError: If the provider name is unknown or no API key is available
    """
    name = (provider or AUTO_PROVIDER).strip().lower() or AUTO_PROVIDER
    explicit_key = api_key or None

    if name == AUTO_PROVIDER:
        if explicit_key is not None:
            logger.debug("Auto-selected default provider=%s (explicit key)", config.default_provider.provider.value)
            return _selection(config.default_provider, explicit_key)

        for entry in config.providers:
            if entry.has_api_key:
                logger.debug("Auto-selected provider=%s", entry.provider.value)
                return _selection(entry, entry.api_key)

        raise ProviderSelectionError(
            "No API key configured for any provider. Add api_key to a provider section "
            "of the config file or set a runtime override."
        )

    selected = Provider.from_string(name)
    if selected is Provider.UNKNOWN:
        choices = ", ".join([AUTO_PROVIDER] + [p.value for p in Provider.configurable()])
        raise ProviderSelectionError(f"Unknown provider {provider!r}. Expected one of: {choices}")

    entry = config.get_provider(selected) or default_provider_config(selected)
    key = explicit_key or entry.api_key
    if not key:
        raise ProviderSelectionError(
            f"No API key for provider '{selected.value}'. Add api_key under [{selected.value}] "
            f"in the config file or set a runtime override."
        )
    return _selection(entry, key)
