"""Per-provider defaults and the provider entry registry inside a Configuration."""

import logging
from dataclasses import dataclass

from domain.ini import ValueKind, coerce
from infrastructure import constants as c

from .models import Configuration, Provider, ProviderConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderDefaults:
    model: str
    max_tokens: int
    temperature: float
    endpoint: str


# Provider -> built-in defaults
# Add future providers here
PROVIDER_DEFAULTS: dict[Provider, ProviderDefaults] = {
    Provider.OPENAI: ProviderDefaults(
        model=c.DEFAULT_OPENAI_MODEL,
        max_tokens=c.DEFAULT_OPENAI_MAX_TOKENS,
        temperature=c.DEFAULT_TEMPERATURE,
        endpoint=c.DEFAULT_OPENAI_ENDPOINT,
    ),
    Provider.ANTHROPIC: ProviderDefaults(
        model=c.DEFAULT_ANTHROPIC_MODEL,
        max_tokens=c.DEFAULT_ANTHROPIC_MAX_TOKENS,
        temperature=c.DEFAULT_TEMPERATURE,
        endpoint=c.DEFAULT_ANTHROPIC_ENDPOINT,
    ),
    Provider.GEMINI: ProviderDefaults(
        model=c.DEFAULT_GEMINI_MODEL,
        max_tokens=c.DEFAULT_GEMINI_MAX_TOKENS,
        temperature=c.DEFAULT_TEMPERATURE,
        endpoint=c.DEFAULT_GEMINI_ENDPOINT,
    ),
}

# Provider section key -> (ProviderConfig field, value kind)
PROVIDER_KEYS: dict[str, tuple[str, ValueKind]] = {
    "api_key": ("api_key", ValueKind.STRING),
    "default_model": ("default_model", ValueKind.STRING),
    "max_tokens": ("default_max_tokens", ValueKind.INTEGER),
    "temperature": ("default_temperature", ValueKind.FLOAT),
    "api_endpoint": ("api_endpoint", ValueKind.STRING),
}


def default_provider_config(provider: Provider) -> ProviderConfig:
    """Synthesize an entry with the provider's built-in defaults."""
    defaults = PROVIDER_DEFAULTS.get(provider)
    if defaults is None:
        return ProviderConfig()
    return ProviderConfig(
        provider=provider,
        default_model=defaults.model,
        default_max_tokens=defaults.max_tokens,
        default_temperature=defaults.temperature,
    )


def find_provider(config: Configuration, provider: Provider) -> ProviderConfig | None:
    return config.get_provider(provider)


def ensure_provider(config: Configuration, provider: Provider) -> ProviderConfig | None:
    """Return the entry for `provider`, appending a default one if absent.

    UNKNOWN never gets an entry; None is returned for it.
    """
    if provider is Provider.UNKNOWN:
        return None

    entry = config.get_provider(provider)
    if entry is None:
        entry = default_provider_config(provider)
        config.providers.append(entry)
        logger.debug("Added provider entry with defaults: %s", provider.value)
    return entry


def resolve_provider(
    config: Configuration,
    key: str,
    value: str,
    provider: Provider,
    warnings: list[str] | None = None,
) -> None:
    """
    Apply one `key = value` pair from a provider section.

    Unrecognised keys are ignored without a warning.

    Raises:
        ValueError: If a numeric key has a non-numeric value
    """
    entry = ensure_provider(config, provider)
    if entry is None:
        return

    binding = PROVIDER_KEYS.get(key)
    if binding is None:
        # TODO: report unrecognised provider keys as parse warnings; a typo like `api_kye` is dropped silently
        logger.debug("Ignoring unrecognised key %r in [%s]", key, provider.value)
        return

    field_name, kind = binding
    coerced = coerce(kind, value, warnings)
    if coerced is not None:
        setattr(entry, field_name, coerced)


def resolved_model(entry: ProviderConfig) -> str:
    """Configured model, or the provider's built-in model when empty."""
    if entry.default_model:
        return entry.default_model
    defaults = PROVIDER_DEFAULTS.get(entry.provider, PROVIDER_DEFAULTS[Provider.OPENAI])
    return defaults.model


def resolved_endpoint(entry: ProviderConfig) -> str:
    """Configured endpoint, or the provider's canonical endpoint when empty."""
    if entry.api_endpoint:
        return entry.api_endpoint
    defaults = PROVIDER_DEFAULTS.get(entry.provider, PROVIDER_DEFAULTS[Provider.OPENAI])
    return defaults.endpoint
