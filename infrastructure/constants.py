from pathlib import Path

# Config file (resolved against the user's home directory)
CONFIG_FILE_NAME = ".pg_ai.config"

# Lines longer than this abort the whole load
MAX_CONFIG_LINE_LENGTH = 4096

# Settings section names (provider sections are named by Provider values)
SECTION_GENERAL = "general"
SECTION_QUERY = "query"
SECTION_RESPONSE = "response"

# Default model names
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# Default API endpoints
DEFAULT_OPENAI_ENDPOINT = "https://api.openai.com"
DEFAULT_ANTHROPIC_ENDPOINT = "https://api.anthropic.com"
DEFAULT_GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com"

# Default token limits
DEFAULT_OPENAI_MAX_TOKENS = 16384
DEFAULT_ANTHROPIC_MAX_TOKENS = 8192
DEFAULT_GEMINI_MAX_TOKENS = 8192
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7

DEFAULT_MAX_QUERY_LENGTH = 4000

# Env variables read as runtime overrides by the CLI
OPENAI_API_KEY_VARIABLE_NAME = "OPENAI_API_KEY"
ANTHROPIC_API_KEY_VARIABLE_NAME = "ANTHROPIC_API_KEY"
GEMINI_API_KEY_VARIABLE_NAME = "GEMINI_API_KEY"

DOCS_URL = "https://benodiwal.github.io/pg_ai_query/configuration.html"

# Repo-root conventional files (overrideable from the CLI)
ENV_FILE = Path(".env")
