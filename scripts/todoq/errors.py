"""Error types raised by the persistence and config layers."""

from __future__ import annotations

from pathlib import Path


class TodoqError(Exception):
    """Base class for todoq errors."""


class ParseError(TodoqError):
    """The persisted data file exists but cannot be understood."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot parse {path}: {reason}")
        self.path = path
        self.reason = reason


class WriteError(TodoqError):
    """Saving the task list to disk failed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Cannot write {path}: {cause}")
        self.path = path
        self.cause = cause


class ConfigError(TodoqError):
    """The YAML config file is unreadable or has invalid values."""
