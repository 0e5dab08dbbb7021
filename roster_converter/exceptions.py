"""Exception hierarchy for file-level and startup errors.

Row validation failures are not exceptions; they are collected as
``RowError`` values and written to the error report.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class RosterConverterError(Exception):
    """Base exception for roster conversion errors."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(RosterConverterError):
    """Raised when a configuration value is not acceptable."""

    option: str
    value: object

    def __str__(self) -> str:
        return f"Invalid value for {self.option}: {self.value!r}\n{self.message}"


@dataclass
class FileProcessingError(RosterConverterError):
    """Base exception for errors that abort processing of a single file."""

    source_path: Path

    def __str__(self) -> str:
        return f"[{self.source_path.name}] {self.message}"


@dataclass
class SourceReadError(FileProcessingError):
    """Raised when the source file cannot be opened or decoded."""

    def __str__(self) -> str:
        return f"[{self.source_path.name}] Failed to read source: {self.message}"


@dataclass
class OutputWriteError(FileProcessingError):
    """Raised when the JSON output or error report cannot be written."""

    output_path: Path

    def __str__(self) -> str:
        return (
            f"[{self.source_path.name}] Failed to write output: {self.output_path}\n"
            f"{self.message}"
        )


@dataclass
class SourceRemoveError(FileProcessingError):
    """Raised when the processed source file cannot be removed."""

    def __str__(self) -> str:
        return f"[{self.source_path.name}] Failed to remove source: {self.message}"


@dataclass
class WatcherError(RosterConverterError):
    """Raised when the input directory cannot be enumerated or watched."""

    directory: Path

    def __str__(self) -> str:
        return f"Cannot watch directory: {self.directory}\n{self.message}"
