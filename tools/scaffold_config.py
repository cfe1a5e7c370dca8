"""Scaffold a starter config file (~/.pg_ai.config by default)."""

from __future__ import annotations

import argparse
from pathlib import Path

STUB_HEADER = """# pg_ai_query configuration
# Values may be bare tokens or quoted strings; `#` starts a comment.

[general]
log_level = "INFO"
enable_logging = false
request_timeout_ms = 30000
max_retries = 3

[query]
enforce_limit = true
default_limit = 1000
max_query_length = 4000

[response]
show_explanation = true
show_warnings = true
show_suggested_visualization = false
use_formatted_response = false
"""

STUB_PROVIDER = """
[{provider}]
api_key = "{api_key}"
# default_model = ""   # empty uses the provider's built-in model
# api_endpoint = ""    # empty uses the canonical endpoint
# max_tokens = 4096
# temperature = 0.7
"""

PROVIDERS = ("openai", "anthropic", "gemini")


def render_config(providers: list[str], api_key: str = "your-api-key-here") -> str:
    body = STUB_HEADER
    for provider in providers:
        body += STUB_PROVIDER.format(provider=provider, api_key=api_key)
    return body


def scaffold_config(dest: Path, providers: list[str], force: bool) -> Path:
    if dest.exists() and not force:
        raise SystemExit(f"Config file exists: {dest} (use --force to overwrite)")

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(render_config(providers), encoding="utf-8")
    dest.chmod(0o600)  # holds API keys
    return dest


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--dest", default=str(Path.home() / ".pg_ai.config"), help="Config file to create")
    ap.add_argument(
        "--provider",
        action="append",
        choices=PROVIDERS,
        help="Provider section to include (repeatable, default: openai)",
    )
    ap.add_argument("--force", action="store_true", help="Overwrite if destination exists")
    args = ap.parse_args()

    dest = scaffold_config(Path(args.dest).expanduser(), args.provider or ["openai"], args.force)
    print(f"Wrote starter config to: {dest}")


if __name__ == "__main__":
    main()
