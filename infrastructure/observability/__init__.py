"""
Observability: structured logging and context management.

Provides:
- Contextual logging with config/provider tags
- Log rotation and file management
- Config-driven application log levels
"""

from infrastructure.observability.logging import (
    apply_config_logging,
    clear_log_context,
    configure_logging,
    get_log_context,
    make_config_tag,
    parse_log_level,
    set_log_context,
)

__all__ = [
    "configure_logging",
    "apply_config_logging",
    "parse_log_level",
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    "make_config_tag",
]
