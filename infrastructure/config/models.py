"""Configuration models (Pydantic classes)."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from infrastructure.constants import (
    DEFAULT_MAX_QUERY_LENGTH,
    DEFAULT_MAX_TOKENS,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_TEMPERATURE,
)


class Provider(str, Enum):
    """Supported AI providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str | None) -> "Provider":
        """Case-insensitive lookup; anything unrecognised maps to UNKNOWN."""
        if value is None:
            return cls.UNKNOWN
        try:
            provider = cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        return provider

    @classmethod
    def configurable(cls) -> tuple["Provider", ...]:
        """Providers that may appear in a Configuration, in canonical order."""
        return (cls.OPENAI, cls.ANTHROPIC, cls.GEMINI)


class ProviderConfig(BaseModel):
    """Settings for a single AI provider."""

    provider: Provider = Provider.UNKNOWN
    api_key: str = ""  # empty means "not authenticated"
    default_model: str = ""  # empty means "use the provider's built-in model"
    default_max_tokens: int = DEFAULT_MAX_TOKENS
    default_temperature: float = DEFAULT_TEMPERATURE
    api_endpoint: str = ""  # empty means "use the canonical endpoint"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def _seed_provider() -> ProviderConfig:
    return ProviderConfig(provider=Provider.OPENAI, default_model=DEFAULT_OPENAI_MODEL)


class Configuration(BaseModel):
    """
    Fully resolved settings.
    - Seeded with built-in defaults (one OpenAI entry)
    - Populated by the INI parser from the config file
    - Re-derived with runtime overrides by the override engine
    """

    default_provider: ProviderConfig = Field(
        default_factory=_seed_provider,
        description="Provider used when the caller makes no selection; mirrors providers[0].",
    )
    providers: list[ProviderConfig] = Field(
        default_factory=lambda: [_seed_provider()],
        description="One entry per configured provider, in order of first reference.",
    )

    # General settings
    log_level: str = "INFO"
    enable_logging: bool = False
    request_timeout_ms: int = 30000
    max_retries: int = 3

    # Query generation settings
    enforce_limit: bool = True
    default_limit: int = 1000
    max_query_length: int = DEFAULT_MAX_QUERY_LENGTH

    # Response format settings
    show_explanation: bool = True
    show_warnings: bool = True
    show_suggested_visualization: bool = False
    use_formatted_response: bool = False

    @model_validator(mode="after")
    def _validate(self) -> "Configuration":
        seen: set[Provider] = set()
        for entry in self.providers:
            if entry.provider is Provider.UNKNOWN:
                raise ValueError("providers must not contain an 'unknown' entry")
            if entry.provider in seen:
                raise ValueError(f"Duplicate provider entry: {entry.provider.value}")
            seen.add(entry.provider)

        if self.providers:
            self.default_provider = self.providers[0].model_copy()

        return self

    def get_provider(self, provider: Provider) -> ProviderConfig | None:
        """Return the entry for `provider`, or None if it is not configured."""
        for entry in self.providers:
            if entry.provider is provider:
                return entry
        return None
