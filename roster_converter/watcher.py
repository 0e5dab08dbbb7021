"""Watch the input directory and dispatch CSV files for conversion.

Files already present at startup are converted synchronously before the
watch is attached; later created, modified or moved-in files are handed to a
bounded worker pool. A path is never converted by two workers at once.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import WatcherConfig
from .converter import convert_file, is_csv_file
from .exceptions import FileProcessingError, WatcherError
from .logging_utils import TRACE

logger = logging.getLogger(__name__)


def list_input_files(directory: Path) -> list[Path]:
    """
    List CSV files already present in ``directory``.

    Raises:
        WatcherError: If the directory cannot be read
    """
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise WatcherError(message=str(e), directory=directory) from e
    return sorted(path for path in entries if path.is_file() and is_csv_file(path))


class PathLocks:
    """One lock per path, dropped once nobody holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}
        self._users: dict[Path, int] = {}

    @contextmanager
    def hold(self, path: Path) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(path, threading.Lock())
            self._users[path] = self._users.get(path, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._users[path] -= 1
                if self._users[path] == 0:
                    del self._users[path]
                    del self._locks[path]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


class FileDispatcher:
    """Runs conversions, logging file-level errors instead of raising them."""

    def __init__(self, config: WatcherConfig) -> None:
        self.config = config
        self._locks = PathLocks()
        self._executor = ThreadPoolExecutor(
            max_workers=config.workers,
            thread_name_prefix="roster-converter",
        )

    def process(self, path: Path | str) -> None:
        path = Path(path)
        with self._locks.hold(path):
            logger.info("processing csv file", extra={"file": str(path)})
            try:
                convert_file(path, self.config)
            except FileProcessingError as e:
                logger.error(str(e), exc_info=e, extra={"file": str(path)})

    def submit(self, path: Path | str) -> Future:
        future = self._executor.submit(self.process, path)
        future.add_done_callback(self._log_unexpected)
        return future

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    @staticmethod
    def _log_unexpected(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error("unexpected conversion failure", exc_info=error)


class CSVEventHandler(FileSystemEventHandler):
    """Forward file creation, modification and move events to a dispatcher."""

    def __init__(self, dispatch: Callable[[Path], object]) -> None:
        super().__init__()
        self.dispatch_path = dispatch

    def on_any_event(self, event: FileSystemEvent) -> None:
        logger.log(
            TRACE,
            "received file event",
            extra={"event": event.event_type, "file": os.fsdecode(event.src_path)},
        )

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.dispatch_path(Path(os.fsdecode(event.src_path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.dispatch_path(Path(os.fsdecode(event.src_path)))

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self.dispatch_path(Path(os.fsdecode(event.dest_path)))


def run_watcher(
    config: WatcherConfig,
    *,
    observer_factory: Callable[[], Observer] = Observer,
    stop_event: threading.Event | None = None,
    poll_interval: float = 1.0,
) -> None:
    """
    Convert existing files, then watch the input directory until stopped.

    Args:
        config: Watcher configuration
        observer_factory: Builds the watchdog observer
        stop_event: Set to stop watching (default: run until interrupted)
        poll_interval: Seconds between observer liveness checks

    Raises:
        WatcherError: If the observer cannot be created, the directory cannot
            be enumerated or watched, or the observer dies
    """
    directory = config.input_directory
    stop_event = stop_event or threading.Event()

    try:
        observer = observer_factory()
    except Exception as e:
        raise WatcherError(message=f"could not initialize watcher: {e}", directory=directory) from e

    dispatcher = FileDispatcher(config)
    try:
        # Existing files first; the watch only reports new activity
        for path in list_input_files(directory):
            dispatcher.process(path)

        try:
            observer.schedule(CSVEventHandler(dispatcher.submit), str(directory), recursive=False)
            observer.start()
        except OSError as e:
            raise WatcherError(message=f"could not watch directory: {e}", directory=directory) from e

        logger.info("watching input directory", extra={"directory": str(directory)})

        try:
            while not stop_event.wait(poll_interval):
                if not observer.is_alive():
                    raise WatcherError(message="observer stopped unexpectedly", directory=directory)
        except KeyboardInterrupt:
            logger.info("interrupted, shutting down")
        finally:
            observer.stop()
            observer.join()
    finally:
        dispatcher.shutdown()
