"""Load errors, warnings and result types for configuration loading."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from infrastructure.config.models import Configuration


class LoadErrorKind(str, Enum):
    """Fatal reasons a load attempt can fail."""

    FILE_NOT_FOUND = "file_not_found"
    UNREADABLE = "unreadable"
    HOME_UNRESOLVED = "home_unresolved"
    LINE_TOO_LONG = "line_too_long"
    MALFORMED_LINE = "malformed_line"
    INVALID_NUMBER = "invalid_number"


class ConfigLoadError(Exception):
    """A fatal configuration error; the whole load attempt is discarded."""

    def __init__(
        self,
        kind: LoadErrorKind,
        message: str,
        *,
        line_number: int | None = None,
        path: Path | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.line_number = line_number
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        location = ""
        if self.path is not None:
            location = f"{self.path}: "
        if self.line_number is not None:
            location += f"line {self.line_number}: "
        return f"{location}{self.message}"


@dataclass(frozen=True)
class ParseWarning:
    """A recoverable problem; the offending key was skipped."""

    line_number: int | None
    message: str

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


@dataclass
class ParseResult:
    """Outcome of a parse or load attempt: a Configuration or a ConfigLoadError."""

    config: Configuration | None = None
    error: ConfigLoadError | None = None
    warnings: list[ParseWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.config is not None

    def unwrap(self) -> Configuration:
        """Return the configuration or raise the load error."""
        if self.error is not None:
            raise self.error
        if self.config is None:
            raise ConfigLoadError(LoadErrorKind.UNREADABLE, "No configuration was produced")
        return self.config


@dataclass
class LoadResult(ParseResult):
    """ParseResult plus the path the configuration was read from."""

    path: Path | None = None

    @classmethod
    def from_parse(cls, result: ParseResult, path: Path) -> "LoadResult":
        error = result.error
        if error is not None and error.path is None:
            error.path = path
        return cls(config=result.config, error=error, warnings=list(result.warnings), path=path)

    @classmethod
    def failure(cls, error: ConfigLoadError, path: Path | None = None) -> "LoadResult":
        return cls(error=error, path=path)
