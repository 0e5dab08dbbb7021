"""Runtime configuration for the roster watcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .exceptions import ConfigurationError
from .logging_utils import TRACE

DEFAULT_INPUT_DIRECTORY: Final[Path] = Path("./input")
DEFAULT_OUTPUT_DIRECTORY: Final[Path] = Path("./output")
DEFAULT_ERROR_DIRECTORY: Final[Path] = Path("./errors")
DEFAULT_LOG_LEVEL: Final[str] = "info"
DEFAULT_WORKERS: Final[int] = 1

LOG_LEVELS: Final[dict[str, int]] = {
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}


@dataclass(frozen=True)
class WatcherConfig:
    """
    Directories and runtime options, built once at process entry.

    Directories are expected to exist already; nothing here creates them.
    """

    input_directory: Path = DEFAULT_INPUT_DIRECTORY
    output_directory: Path = DEFAULT_OUTPUT_DIRECTORY
    error_directory: Path = DEFAULT_ERROR_DIRECTORY
    log_level: str = DEFAULT_LOG_LEVEL
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        # Accept plain strings for directories
        for name in ("input_directory", "output_directory", "error_directory"):
            object.__setattr__(self, name, Path(getattr(self, name)))

        level = self.log_level.lower()
        if level not in LOG_LEVELS:
            raise ConfigurationError(
                message=f"Log level must be one of: {', '.join(LOG_LEVELS)}",
                option="log_level",
                value=self.log_level,
            )
        object.__setattr__(self, "log_level", level)

        if self.workers < 1:
            raise ConfigurationError(
                message="At least one worker is required",
                option="workers",
                value=self.workers,
            )

    @property
    def logging_level(self) -> int:
        """The stdlib logging level for ``log_level``."""
        return LOG_LEVELS[self.log_level]
