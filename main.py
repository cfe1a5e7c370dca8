"""
CLI entrypoint: resolve and print the effective configuration.

This script performs the following steps:
- loads an optional .env file (runtime API-key overrides)
- loads ~/.pg_ai.config (or --config)
- applies OPENAI_API_KEY / ANTHROPIC_API_KEY / GEMINI_API_KEY as overrides
- selects a provider for a request (--provider, --api-key)
- prints the resolved snapshot as JSON (API keys masked unless --reveal-secrets)
- optionally writes the snapshot under --snapshot-dir
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from application import ProviderSelectionError, config_to_dict, mask_secret, select_provider, write_config_snapshot
from application.constants import AUTO_PROVIDER, CONFIG_SNAPSHOT_FILENAME
from infrastructure.config import ConfigLoadError, ConfigService, overrides_from_env
from infrastructure.constants import ENV_FILE
from infrastructure.observability import configure_logging, set_log_context

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Resolve the AI query tool configuration")
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the config file (default: ~/.pg_ai.config)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=str(ENV_FILE),
        help="Path to .env file with API key overrides (default: .env, skipped if missing)",
    )
    p.add_argument(
        "--provider",
        type=str,
        default=AUTO_PROVIDER,
        help="Provider to select: auto, openai, anthropic or gemini (default: auto)",
    )
    p.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="API key for this request; takes priority over overrides and the config file",
    )
    p.add_argument(
        "--reveal-secrets",
        action="store_true",
        help="Print API keys in clear text instead of masking them.",
    )
    p.add_argument(
        "--snapshot-dir",
        type=str,
        default=None,
        help=f"Also write the resolved configuration to <dir>/{CONFIG_SNAPSHOT_FILENAME}",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional rotating log file (DEBUG level)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    configure_logging(
        log_file=Path(args.log_file) if args.log_file else None,
        console_level=getattr(logging, args.console_level),
    )

    env_file = Path(args.env)
    if env_file.is_file():
        load_dotenv(env_file, override=True)
        logger.info("Loaded environment overrides from %s", env_file)

    service = ConfigService()
    try:
        service.load_or_raise(Path(args.config).expanduser() if args.config else None)
        config = service.apply_overrides(overrides=overrides_from_env())
    except ConfigLoadError as err:
        print(f"error: configuration unusable: {err}", file=sys.stderr)
        return 1

    try:
        selection = select_provider(config, args.provider, args.api_key)
    except ProviderSelectionError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    set_log_context(provider=selection.provider.value)
    logger.info("Selected provider=%s model=%s", selection.provider.value, selection.model)

    output = {
        "config_path": str(service.config_path),
        "selection": {
            "provider": selection.provider.value,
            "api_key": selection.api_key if args.reveal_secrets else mask_secret(selection.api_key),
            "model": selection.model,
            "endpoint": selection.endpoint,
            "max_tokens": selection.max_tokens,
            "temperature": selection.temperature,
        },
        "configuration": config_to_dict(config, reveal_secrets=args.reveal_secrets),
    }
    if args.snapshot_dir:
        write_config_snapshot(
            config,
            Path(args.snapshot_dir).expanduser() / CONFIG_SNAPSHOT_FILENAME,
            reveal_secrets=args.reveal_secrets,
        )

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
