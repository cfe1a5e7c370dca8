"""
Infrastructure layer: configuration and I/O boundaries.

Contains:
- Configuration models, parsing, overrides and the ConfigService
- Filesystem helpers (config file reads, home directory lookup)
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    ConfigLoadError,
    ConfigService,
    Configuration,
    Provider,
    ProviderConfig,
    ProviderOverrides,
)

__all__ = [
    # Configuration (most commonly used)
    "ConfigService",
    "Configuration",
    "ProviderConfig",
    "Provider",
    "ProviderOverrides",
    "ConfigLoadError",
]
