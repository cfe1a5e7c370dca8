"""
Application layer: Use cases built on top of the resolved configuration.

This layer coordinates between domain logic and infrastructure,
implementing provider selection and configuration snapshots.
"""

from application.selection import ProviderSelection, ProviderSelectionError, select_provider
from application.serialize import config_to_dict, mask_secret, write_config_snapshot

__all__ = [
    # Provider selection
    "select_provider",
    "ProviderSelection",
    "ProviderSelectionError",
    # Snapshots
    "config_to_dict",
    "mask_secret",
    "write_config_snapshot",
]
