"""Core roster CSV to JSON conversion logic."""

from __future__ import annotations

import csv
import io
import json
import logging
import os
import re
import tempfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .exceptions import OutputWriteError, SourceReadError, SourceRemoveError
from .schema import (
    CSV_EXTENSION,
    ERROR_REPORT_HEADER,
    JSON_EXTENSION,
    JSON_INDENT,
    Record,
)
from .validators import HeaderMap, RowError, validate_row

if TYPE_CHECKING:
    from .config import WatcherConfig

logger = logging.getLogger(__name__)

# Undecodable bytes are kept as lone surrogates so one bad line does not
# abort the file; rows carrying them are reported as row errors.
SOURCE_DECODE_ERRORS = "surrogateescape"
UNDECODABLE_PATTERN = re.compile("[\udc80-\udcff]")


@dataclass
class ConversionSession:
    """State accumulated while reading one source file."""

    source_path: Path
    header: HeaderMap | None = None
    records: list[Record] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    lines_read: int = 0

    def add_error(self, line_number: int, message: str) -> None:
        logger.error(
            message,
            extra={"file": str(self.source_path), "line_number": line_number},
        )
        self.errors.append(RowError(line_number=line_number, message=message))


@dataclass
class ConversionResult:
    """Result of a successful conversion."""

    source_path: Path
    output_path: Path
    error_path: Path | None
    record_count: int
    error_count: int


def is_csv_file(path: Path | str) -> bool:
    """Check the extension case-insensitively."""
    return Path(path).suffix.lower() == CSV_EXTENSION


def output_path_for(source_path: Path, output_directory: Path) -> Path:
    return output_directory / f"{source_path.stem}{JSON_EXTENSION}"


def error_path_for(source_path: Path, error_directory: Path) -> Path:
    return error_directory / source_path.name


class _LineRecorder:
    """Iterate a text stream while keeping the raw lines of the current record."""

    def __init__(self, stream: Iterable[str]):
        self._lines = iter(stream)
        self._consumed: list[str] = []

    def __iter__(self) -> _LineRecorder:
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self._consumed.append(line)
        return line

    def take(self) -> str:
        """Return the raw text consumed since the last call."""
        text = "".join(self._consumed)
        self._consumed.clear()
        return text


def _has_bare_quote(text: str) -> bool:
    """Check raw record text for a quote inside an unquoted field."""
    in_quotes = False
    field_start = True
    i = 0
    while i < len(text):
        char = text[i]
        if in_quotes:
            if char == '"':
                if text[i + 1 : i + 2] == '"':
                    i += 2
                    continue
                in_quotes = False
        elif char == '"':
            if not field_start:
                return True
            in_quotes = True
        field_start = not in_quotes and char in ",\r\n"
        i += 1
    return False


def _read_records(stream: Iterable[str]) -> Iterator[list[str] | csv.Error]:
    """Yield parsed records, or the parse error for a malformed record.

    The csv module keeps a quote that appears inside an unquoted field as a
    literal character, so those records are rejected here from the raw text.
    """
    lines = _LineRecorder(stream)
    reader = csv.reader(lines, strict=True)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            lines.take()
            yield e
            continue
        raw = lines.take()
        if not row:
            continue
        if _has_bare_quote(raw):
            yield csv.Error('bare " in non-quoted field')
            continue
        yield row


def convert_stream(stream: TextIO, source_path: Path) -> ConversionSession:
    """
    Validate every record of a CSV text stream.

    The first record is the header. Row failures and malformed records are
    collected in the session; they never stop the read.

    Args:
        stream: Text stream opened with ``newline=""``
        source_path: Path the stream was opened from (for logging)

    Returns:
        ConversionSession with the header, valid records and row errors
    """
    session = ConversionSession(source_path=source_path)

    for line_number, row in enumerate(_read_records(stream), start=1):
        session.lines_read = line_number

        if isinstance(row, csv.Error):
            session.add_error(line_number, f"err: malformed csv line: {row}")
            continue

        if session.header is None:
            session.header = HeaderMap.from_row(row)
            continue

        if any(UNDECODABLE_PATTERN.search(value) for value in row):
            session.add_error(line_number, "err: line is not valid utf-8")
            continue

        result = validate_row(session.header, row)
        if result.ok:
            session.records.append(result.record)
        else:
            session.add_error(line_number, result.error)

    return session


def render_records(records: Iterable[Record]) -> str:
    """Encode records as a pretty-printed JSON array."""
    return json.dumps(
        [record.to_dict() for record in records],
        indent=JSON_INDENT,
        ensure_ascii=False,
    )


def render_error_report(errors: Iterable[RowError]) -> str:
    """Encode row errors as CSV with a LINE_NUM,ERROR_MSG header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(ERROR_REPORT_HEADER)
    for error in errors:
        writer.writerow([error.line_number, error.message])
    return buffer.getvalue()


def _atomic_write(path: Path, content: str, source_path: Path) -> None:
    """Write to a temporary file beside ``path`` and rename it into place."""
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise OutputWriteError(
            message=str(e),
            source_path=source_path,
            output_path=path,
        ) from e


def convert_file(source_path: Path | str, config: WatcherConfig) -> ConversionResult | None:
    """
    Convert one roster CSV file to JSON and remove it.

    Writes ``<stem>.json`` to the output directory and, when any row failed,
    an error report with the source's file name to the error directory.
    Files without a .csv extension are left alone.

    Args:
        source_path: Path to the input file
        config: Watcher configuration holding the output directories

    Returns:
        ConversionResult, or None if the file is not a CSV file

    Raises:
        SourceReadError: If the source cannot be opened or read
        OutputWriteError: If the JSON output or error report cannot be written
        SourceRemoveError: If the source cannot be removed afterwards
    """
    source_path = Path(source_path)

    if not is_csv_file(source_path):
        logger.debug("ignoring non-csv file", extra={"file": str(source_path)})
        return None

    # Step 1: Read and validate
    try:
        with source_path.open(
            encoding="utf-8-sig", errors=SOURCE_DECODE_ERRORS, newline=""
        ) as stream:
            session = convert_stream(stream, source_path)
    except OSError as e:
        raise SourceReadError(message=str(e), source_path=source_path) from e

    # Step 2: Write valid records
    output_path = output_path_for(source_path, config.output_directory)
    _atomic_write(output_path, render_records(session.records), source_path)

    # Step 3: Write error report
    error_path = None
    if session.errors:
        error_path = error_path_for(source_path, config.error_directory)
        _atomic_write(error_path, render_error_report(session.errors), source_path)

    # Step 4: Remove the processed source
    try:
        source_path.unlink()
    except OSError as e:
        raise SourceRemoveError(message=str(e), source_path=source_path) from e

    logger.info(
        "converted csv file",
        extra={
            "file": str(source_path),
            "lines": session.lines_read,
            "records": len(session.records),
            "row_errors": len(session.errors),
        },
    )

    return ConversionResult(
        source_path=source_path,
        output_path=output_path,
        error_path=error_path,
        record_count=len(session.records),
        error_count=len(session.errors),
    )
