"""Command-line interface for the roster CSV watcher."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .config import (
    DEFAULT_ERROR_DIRECTORY,
    DEFAULT_INPUT_DIRECTORY,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_DIRECTORY,
    DEFAULT_WORKERS,
    LOG_LEVELS,
    WatcherConfig,
)
from .exceptions import RosterConverterError
from .logging_utils import configure_logging
from .watcher import run_watcher

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--input-directory",
    envvar="INPUT_DIRECTORY",
    type=click.Path(path_type=Path),
    default=DEFAULT_INPUT_DIRECTORY,
    show_default=True,
    help="Directory to watch for new csv files",
)
@click.option(
    "--output-directory",
    envvar="OUTPUT_DIRECTORY",
    type=click.Path(path_type=Path),
    default=DEFAULT_OUTPUT_DIRECTORY,
    show_default=True,
    help="Directory to write json files to",
)
@click.option(
    "--error-directory",
    envvar="ERROR_DIRECTORY",
    type=click.Path(path_type=Path),
    default=DEFAULT_ERROR_DIRECTORY,
    show_default=True,
    help="Directory to write error reports to",
)
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    help="Log verbosity",
)
@click.option(
    "--workers",
    envvar="WORKERS",
    type=click.IntRange(min=1),
    default=DEFAULT_WORKERS,
    show_default=True,
    help="Maximum number of files converted at the same time",
)
def main(
    input_directory: Path,
    output_directory: Path,
    error_directory: Path,
    log_level: str,
    workers: int,
):
    """Convert roster CSV files dropped into a directory to JSON.

    Valid rows of each INPUT_DIRECTORY/*.csv file are written to
    OUTPUT_DIRECTORY/<name>.json. Rows that fail validation are listed in
    ERROR_DIRECTORY/<name>.csv. Processed files are removed.

    Examples:

        # Watch the default ./input, ./output and ./errors directories
        roster-converter

        # Custom directories with debug logging
        roster-converter --input-directory /data/in --log-level debug

        # Same, configured through the environment
        INPUT_DIRECTORY=/data/in LOG_LEVEL=debug roster-converter
    """
    try:
        config = WatcherConfig(
            input_directory=input_directory,
            output_directory=output_directory,
            error_directory=error_directory,
            log_level=log_level,
            workers=workers,
        )
        configure_logging(config.logging_level)
        run_watcher(config)
    except RosterConverterError as e:
        logger.critical(str(e), exc_info=e)
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
