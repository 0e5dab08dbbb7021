"""Roster CSV to JSON converter with a directory watcher.

Watches an input directory for CSV files, validates each row against the
roster schema (INTERNAL_ID, FIRST_NAME, MIDDLE_NAME, LAST_NAME, PHONE_NUM),
and writes:
- <name>.json with the valid records to the output directory
- <name>.csv with LINE_NUM,ERROR_MSG rows to the error directory, only when
  some rows failed

Processed input files are removed.

Example usage:
    from roster_converter import WatcherConfig, convert_file

    config = WatcherConfig(output_directory="out", error_directory="errors")
    result = convert_file("input/people.csv", config)
    print(f"Converted {result.record_count:,} records")
    print(f"  {result.error_count:,} rows rejected")
"""

from .config import WatcherConfig
from .converter import (
    ConversionResult,
    ConversionSession,
    convert_file,
    convert_stream,
    render_error_report,
    render_records,
)
from .exceptions import (
    ConfigurationError,
    FileProcessingError,
    OutputWriteError,
    RosterConverterError,
    SourceReadError,
    SourceRemoveError,
    WatcherError,
)
from .schema import REQUIRED_COLUMNS, Name, Record
from .validators import HeaderMap, RowError, RowResult, validate_row
from .watcher import FileDispatcher, run_watcher

__all__ = [
    # Core functions
    "convert_file",
    "convert_stream",
    "render_records",
    "render_error_report",
    "validate_row",
    "run_watcher",
    # Data classes
    "WatcherConfig",
    "ConversionResult",
    "ConversionSession",
    "HeaderMap",
    "RowError",
    "RowResult",
    "Name",
    "Record",
    "FileDispatcher",
    # Schema
    "REQUIRED_COLUMNS",
    # Exceptions
    "RosterConverterError",
    "ConfigurationError",
    "FileProcessingError",
    "SourceReadError",
    "OutputWriteError",
    "SourceRemoveError",
    "WatcherError",
]
