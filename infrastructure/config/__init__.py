"""
Configuration management: models, parsing, overrides and loading.

Handles:
- Configuration / ProviderConfig models and the Provider enum
- The INI config file dialect (~/.pg_ai.config)
- Runtime API-key overrides layered over the file
- The ConfigService holding base and effective snapshots

The loader and service modules perform file I/O; the parser is pure.
"""

from infrastructure.config.errors import (
    ConfigLoadError,
    LoadErrorKind,
    LoadResult,
    ParseResult,
    ParseWarning,
)
from infrastructure.config.loader import default_config_path, load_config_file
from infrastructure.config.models import (
    # Main config
    Configuration,
    # Enums
    Provider,
    # Provider configs
    ProviderConfig,
)
from infrastructure.config.overrides import ProviderOverrides, apply_overrides, overrides_from_env
from infrastructure.config.parser import parse_config
from infrastructure.config.registry import (
    PROVIDER_DEFAULTS,
    default_provider_config,
    ensure_provider,
    find_provider,
    resolve_provider,
    resolved_endpoint,
    resolved_model,
)
from infrastructure.config.service import ConfigService

__all__ = [
    # Main config (most commonly used)
    "Configuration",
    "ConfigService",
    # Enums
    "Provider",
    # Provider configs
    "ProviderConfig",
    "PROVIDER_DEFAULTS",
    "default_provider_config",
    "find_provider",
    "ensure_provider",
    "resolve_provider",
    "resolved_model",
    "resolved_endpoint",
    # Overrides
    "ProviderOverrides",
    "apply_overrides",
    "overrides_from_env",
    # Parsing / loading
    "parse_config",
    "load_config_file",
    "default_config_path",
    # Errors
    "ConfigLoadError",
    "LoadErrorKind",
    "LoadResult",
    "ParseResult",
    "ParseWarning",
]
