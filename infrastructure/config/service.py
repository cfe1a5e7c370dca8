"""
Configuration service: owns the base and effective configuration slots.

- base: produced once per successful load, straight from the config file
- effective: base + current runtime overrides, rebuilt on every override call

Callers only ever see copies of the effective configuration.
"""

import logging
import threading
from pathlib import Path

from infrastructure.observability import apply_config_logging, set_log_context

from .errors import ConfigLoadError, LoadErrorKind, LoadResult
from .loader import default_config_path, load_config_file
from .models import Configuration, Provider, ProviderConfig
from .overrides import ProviderOverrides, apply_overrides

logger = logging.getLogger(__name__)


class ConfigService:
    """Caller-owned configuration store with base/effective separation."""

    def __init__(self, *, default_path: Path | None = None) -> None:
        self._default_path = default_path
        self._lock = threading.RLock()
        self._base: Configuration | None = None
        self._effective: Configuration | None = None
        self._overrides = ProviderOverrides()
        self._config_path: Path | None = None

    @property
    def is_loaded(self) -> bool:
        return self._base is not None

    @property
    def config_path(self) -> Path | None:
        """Path of the last successfully loaded file."""
        return self._config_path

    @property
    def overrides(self) -> ProviderOverrides:
        return self._overrides

    def _resolve_path(self, path: Path | None) -> Path:
        if path is not None:
            return path
        if self._default_path is not None:
            return self._default_path
        return default_config_path()

    def load(self, path: Path | None = None) -> LoadResult:
        """
        Load the config file and make it the new base configuration.

        On failure the previously loaded configuration is kept untouched.

        Args:
            path: Explicit config file; defaults to ~/.pg_ai.config

        Returns:
            LoadResult describing success or the fatal error
        """
        try:
            resolved = self._resolve_path(path)
        except ConfigLoadError as err:
            logger.warning("%s", err)
            return LoadResult.failure(err)

        result = load_config_file(resolved)
        config = result.config
        if not result.ok or config is None:
            logger.error("Failed to load configuration: %s", result.error)
            return result

        with self._lock:
            self._base = config
            self._effective = apply_overrides(config, self._overrides)
            self._config_path = resolved

        apply_config_logging(config.log_level, config.enable_logging)
        set_log_context(config_path=resolved)
        logger.info(
            "Configuration loaded successfully (%d provider(s), %d warning(s))",
            len(config.providers),
            len(result.warnings),
        )
        return result

    def load_or_raise(self, path: Path | None = None) -> Configuration:
        """Raising variant of `load`; returns the effective configuration."""
        self.load(path).unwrap()
        return self.get_config()

    def _ensure_loaded(self) -> Configuration:
        """Return the base configuration, loading the default file on first use."""
        if self._base is None:
            return self.load().unwrap()
        return self._base

    def _current_effective(self) -> Configuration:
        self._ensure_loaded()
        if self._effective is None:
            raise ConfigLoadError(LoadErrorKind.UNREADABLE, "No effective configuration available")
        return self._effective

    def apply_overrides(
        self,
        openai: str | None = None,
        anthropic: str | None = None,
        gemini: str | None = None,
        *,
        overrides: ProviderOverrides | None = None,
    ) -> Configuration:
        """
        Rebuild the effective configuration from base plus the given overrides.

        Each call replaces the previous overrides entirely; passing None (or "")
        for a provider clears its override.

        Raises:
            ConfigLoadError: If no configuration is loaded and the default load fails
        """
        if overrides is None:
            overrides = ProviderOverrides(openai=openai, anthropic=anthropic, gemini=gemini)

        with self._lock:
            base = self._ensure_loaded()
            self._overrides = overrides
            self._effective = apply_overrides(base, overrides)
            return self._effective.model_copy(deep=True)

    def get_config(self) -> Configuration:
        """
        Return a copy of the effective configuration, loading the default file on first use.

        Raises:
            ConfigLoadError: If the default load fails
        """
        with self._lock:
            return self._current_effective().model_copy(deep=True)

    def get_base_config(self) -> Configuration | None:
        """Copy of the configuration exactly as parsed from the file (no overrides)."""
        with self._lock:
            return None if self._base is None else self._base.model_copy(deep=True)

    def get_provider_config(self, provider: Provider) -> ProviderConfig | None:
        """Return the effective entry for `provider`, or None if it has none."""
        with self._lock:
            entry = self._current_effective().get_provider(provider)
            return None if entry is None else entry.model_copy()

    def reset(self) -> None:
        """Drop loaded state and overrides (test isolation)."""
        with self._lock:
            self._base = None
            self._effective = None
            self._overrides = ProviderOverrides()
            self._config_path = None
