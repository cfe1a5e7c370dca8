import time
from collections.abc import Callable
from pathlib import Path

import pytest

from infrastructure.config import (
    Configuration,
    LoadErrorKind,
    Provider,
    parse_config,
)
from infrastructure.constants import (
    DEFAULT_ANTHROPIC_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_MODEL,
    MAX_CONFIG_LINE_LENGTH,
)


def _parse(content: str) -> Configuration:
    result = parse_config(content)
    assert result.ok, result.error
    assert result.config is not None
    return result.config


def test_valid_complete_config(fixture_path: Callable[[str], Path]) -> None:
    cfg = _parse(fixture_path("valid_config.ini").read_text(encoding="utf-8"))

    assert cfg.log_level == "DEBUG"
    assert cfg.enable_logging is True
    assert cfg.request_timeout_ms == 60000
    assert cfg.max_retries == 5

    assert cfg.enforce_limit is True
    assert cfg.default_limit == 500
    assert cfg.max_query_length == 2000

    assert cfg.show_explanation is True
    assert cfg.show_warnings is True
    assert cfg.show_suggested_visualization is True
    assert cfg.use_formatted_response is False

    assert [p.provider for p in cfg.providers] == [Provider.OPENAI, Provider.ANTHROPIC, Provider.GEMINI]
    anthropic = cfg.get_provider(Provider.ANTHROPIC)
    assert anthropic is not None
    assert anthropic.api_key == "sk-ant-test-key-67890"
    assert anthropic.default_temperature == pytest.approx(0.5)


def test_empty_content_yields_default_snapshot() -> None:
    cfg = _parse("")

    assert cfg.log_level == "INFO"
    assert cfg.enable_logging is False
    assert cfg.request_timeout_ms == 30000
    assert cfg.max_retries == 3
    assert cfg.enforce_limit is True
    assert cfg.default_limit == 1000
    assert cfg.max_query_length == 4000
    assert cfg.show_explanation is True
    assert cfg.show_warnings is True
    assert cfg.show_suggested_visualization is False
    assert cfg.use_formatted_response is False

    assert len(cfg.providers) == 1
    assert cfg.providers[0].provider is Provider.OPENAI
    assert cfg.providers[0].default_model == DEFAULT_OPENAI_MODEL
    assert cfg.default_provider == cfg.providers[0]


def test_parsing_is_deterministic(fixture_path: Callable[[str], Path]) -> None:
    content = fixture_path("valid_config.ini").read_text(encoding="utf-8")
    assert _parse(content) == _parse(content)


def test_whitespace_is_trimmed_and_quoted_spaces_preserved() -> None:
    cfg = _parse(
        """
[general]
  log_level   =   WARNING
  enable_logging=true

[openai]
api_key =   "  sk-with-spaces  "
"""
    )
    assert cfg.log_level == "WARNING"
    assert cfg.enable_logging is True
    openai = cfg.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.api_key == "  sk-with-spaces  "


def test_comments_are_ignored() -> None:
    cfg = _parse(
        """
# This is a comment
[general]
# Another comment
log_level = ERROR
# enable_logging = true  <- this is commented out

[openai]
api_key = sk-test  # inline comment should be stripped
"""
    )
    assert cfg.log_level == "ERROR"
    assert cfg.enable_logging is False
    openai = cfg.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.api_key == "sk-test"


def test_inline_comments_after_quoted_values() -> None:
    cfg = _parse(
        """
[openai]
api_key = "ollama" # Ollama doesn't require a real key
api_endpoint = "http://localhost:11434"
default_model = "gpt-oss:20b" # Or any model you have pulled
"""
    )
    openai = cfg.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.api_key == "ollama"
    assert openai.api_endpoint == "http://localhost:11434"
    assert openai.default_model == "gpt-oss:20b"


def test_escaped_quote_in_value() -> None:
    cfg = _parse('[openai]\napi_key = "a\\"b"\n')
    openai = cfg.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.api_key == 'a"b'


def test_crlf_line_endings() -> None:
    cfg = _parse("[general]\r\nlog_level = DEBUG\r\nmax_retries = 7\r\n")
    assert cfg.log_level == "DEBUG"
    assert cfg.max_retries == 7


def test_numeric_values() -> None:
    cfg = _parse(
        """
[general]
request_timeout_ms = 120000
max_retries = 10

[query]
default_limit = 2500
max_query_length = 8000

[openai]
api_key = sk-test
max_tokens = 16000
temperature = 0.85
"""
    )
    assert cfg.request_timeout_ms == 120000
    assert cfg.max_retries == 10
    assert cfg.default_limit == 2500
    assert cfg.max_query_length == 8000
    openai = cfg.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.default_max_tokens == 16000
    assert openai.default_temperature == pytest.approx(0.85)


def test_boolean_values() -> None:
    cfg = _parse(
        """
[general]
enable_logging = true

[query]
enforce_limit = false

[response]
show_explanation = YES
show_warnings = No
show_suggested_visualization = 1
use_formatted_response = true
"""
    )
    assert cfg.enable_logging is True
    assert cfg.enforce_limit is False
    assert cfg.show_explanation is True
    assert cfg.show_warnings is False
    assert cfg.show_suggested_visualization is True
    assert cfg.use_formatted_response is True


def test_invalid_boolean_warns_and_parse_succeeds() -> None:
    result = parse_config("[general]\nenable_logging = maybe\n")

    assert result.ok
    assert result.config is not None
    assert result.config.enable_logging is False
    assert len(result.warnings) == 1
    assert result.warnings[0].line_number == 2


def test_max_query_length_non_positive_is_ignored() -> None:
    cfg = _parse("[query]\nmax_query_length = 0\n")
    assert cfg.max_query_length == 4000

    cfg = _parse("[query]\nmax_query_length = 6000\nmax_query_length = -3\n")
    assert cfg.max_query_length == 6000


@pytest.mark.parametrize(
    "content",
    [
        "[query]\nmax_query_length = lots\n",
        "[general]\nrequest_timeout_ms = soon\n",
        "[general]\nmax_retries = 3x\n",
        "[openai]\nmax_tokens = many\n",
        "[gemini]\ntemperature = warm\n",
        "[openai]\nmax_tokens = 1_000\n",
        "[general]\nmax_retries = \u0663\n",
    ],
)
def test_non_numeric_value_aborts_parse(content: str) -> None:
    result = parse_config(content)

    assert not result.ok
    assert result.config is None
    assert result.error is not None
    assert result.error.kind is LoadErrorKind.INVALID_NUMBER
    assert result.error.line_number == 2


def test_malformed_line_reports_one_based_line_number() -> None:
    content = "# header\n[general]\nlog_level = INFO\n\nkey : value\n"
    result = parse_config(content)

    assert not result.ok
    assert result.error is not None
    assert result.error.kind is LoadErrorKind.MALFORMED_LINE
    assert result.error.line_number == 5


def test_section_without_closing_bracket_is_malformed() -> None:
    result = parse_config("[general\nlog_level = INFO\n")
    assert result.error is not None
    assert result.error.kind is LoadErrorKind.MALFORMED_LINE
    assert result.error.line_number == 1


def test_unclosed_backslash_run_fails_fast() -> None:
    line = 'api_key = "' + "\\" * (MAX_CONFIG_LINE_LENGTH - 20) + "x"

    started = time.perf_counter()
    result = parse_config(f"[openai]\n{line}\n")
    elapsed = time.perf_counter() - started

    assert result.error is not None
    assert result.error.kind is LoadErrorKind.MALFORMED_LINE
    assert result.error.line_number == 2
    assert elapsed < 1.0


@pytest.mark.parametrize("position", ["first", "middle", "last"])
def test_oversized_line_fails_regardless_of_position(position: str) -> None:
    long_line = "# " + "x" * MAX_CONFIG_LINE_LENGTH
    lines = ["[openai]", "api_key = sk-test", "max_tokens = 100"]
    index = {"first": 0, "middle": 2, "last": len(lines)}[position]
    lines.insert(index, long_line)

    result = parse_config("\n".join(lines))

    assert not result.ok
    assert result.error is not None
    assert result.error.kind is LoadErrorKind.LINE_TOO_LONG
    assert result.error.line_number == index + 1


def test_line_at_maximum_length_is_accepted() -> None:
    line = "# " + "x" * (MAX_CONFIG_LINE_LENGTH - 2)
    assert len(line) == MAX_CONFIG_LINE_LENGTH
    assert parse_config(line).ok


def test_keys_outside_section_are_skipped_with_warning() -> None:
    result = parse_config("log_level = DEBUG\n[general]\nmax_retries = 4\n")

    assert result.ok
    assert result.config is not None
    assert result.config.log_level == "INFO"
    assert result.config.max_retries == 4
    assert [w.line_number for w in result.warnings] == [1]


def test_keys_in_invalid_section_are_skipped() -> None:
    result = parse_config("[ollama]\napi_key = abc\nlog_level = DEBUG\n[general]\nlog_level = ERROR\n")

    assert result.ok
    assert result.config is not None
    assert result.config.log_level == "ERROR"
    assert [p.provider for p in result.config.providers] == [Provider.OPENAI]
    # one warning for the section, one per skipped key
    assert [w.line_number for w in result.warnings] == [1, 2, 3]


def test_unclosed_quote_skips_only_that_key() -> None:
    result = parse_config('[openai]\napi_key = "abc\\"\ndefault_model = gpt-4.1\n')

    assert result.ok
    assert result.config is not None
    openai = result.config.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.api_key == ""
    assert openai.default_model == "gpt-4.1"
    assert len(result.warnings) == 1


def test_unknown_keys_are_ignored_silently() -> None:
    result = parse_config("[general]\ncolour = blue\n[openai]\napi_kye = sk-typo\n")

    assert result.ok
    assert result.warnings == []
    assert result.config is not None
    openai = result.config.get_provider(Provider.OPENAI)
    assert openai is not None
    assert openai.api_key == ""


def test_provider_sections_synthesize_defaults_in_order() -> None:
    cfg = _parse("[gemini]\napi_key = g\n[anthropic]\napi_key = a\n")

    assert [p.provider for p in cfg.providers] == [Provider.OPENAI, Provider.GEMINI, Provider.ANTHROPIC]
    gemini = cfg.get_provider(Provider.GEMINI)
    anthropic = cfg.get_provider(Provider.ANTHROPIC)
    assert gemini is not None and anthropic is not None
    assert gemini.default_model == DEFAULT_GEMINI_MODEL
    assert gemini.default_max_tokens == 8192
    assert anthropic.default_model == DEFAULT_ANTHROPIC_MODEL
    assert anthropic.default_max_tokens == 8192
    assert cfg.default_provider.provider is Provider.OPENAI


def test_repeated_sections_update_the_same_entry() -> None:
    cfg = _parse("[anthropic]\napi_key = first\n[openai]\n[anthropic]\napi_key = second\n")
    assert sum(1 for p in cfg.providers if p.provider is Provider.ANTHROPIC) == 1
    anthropic = cfg.get_provider(Provider.ANTHROPIC)
    assert anthropic is not None
    assert anthropic.api_key == "second"


def test_default_provider_mirrors_first_entry() -> None:
    cfg = _parse("[openai]\napi_key = sk-first\ndefault_model = gpt-4.1\n")
    assert cfg.default_provider == cfg.providers[0]
    assert cfg.default_provider.api_key == "sk-first"
