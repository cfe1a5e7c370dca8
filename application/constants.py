"""Application-level constants."""

# Provider selection
AUTO_PROVIDER = "auto"

# Secret masking: characters kept at each end of a masked key
MASK_KEEP_CHARS = 4
MASK_PLACEHOLDER = "…"
MASK_MIN_LENGTH = 12  # shorter secrets are masked entirely

# Output
CONFIG_SNAPSHOT_FILENAME = "config.resolved.json"
