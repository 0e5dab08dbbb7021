"""Shared pytest fixtures for roster converter tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from roster_converter.config import WatcherConfig
from roster_converter.validators import HeaderMap

HEADER = "INTERNAL_ID,FIRST_NAME,MIDDLE_NAME,LAST_NAME,PHONE_NUM"


@pytest.fixture
def header_row() -> list[str]:
    """Header record with every required column in the usual order."""
    return HEADER.split(",")


@pytest.fixture
def header(header_row: list[str]) -> HeaderMap:
    """HeaderMap for the usual column order."""
    return HeaderMap.from_row(header_row)


@pytest.fixture
def valid_row() -> list[str]:
    """A row that passes every rule."""
    return ["12345678", "Jane", "Q", "Doe", "555-123-4567"]


@pytest.fixture
def config(tmp_path: Path) -> WatcherConfig:
    """Config with empty input, output and error directories under tmp_path."""
    input_dir = tmp_path / "input"
    output_dir = tmp_path / "output"
    error_dir = tmp_path / "errors"
    for directory in (input_dir, output_dir, error_dir):
        directory.mkdir()
    return WatcherConfig(
        input_directory=input_dir,
        output_directory=output_dir,
        error_directory=error_dir,
    )


@pytest.fixture
def write_input(config: WatcherConfig) -> Callable[[str, str], Path]:
    """Write a file into the input directory and return its path."""

    def _write(name: str, content: str) -> Path:
        path = config.input_directory / name
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write
