from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger("notizapp.watch")


class _ChangeForwarder(FileSystemEventHandler):
    def __init__(self, subscriber: Callable[[], None]) -> None:
        super().__init__()
        self._subscriber = subscriber

    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            self._subscriber()
        except Exception:
            logger.exception("watch_subscriber_error", extra={"src": event.src_path})


class WatchService:
    """Holds at most one running filesystem watch.

    ``start_watch`` stops whatever is being watched before installing the new
    observer. Both steps happen under one lock so concurrent callers never
    leave two observers registered. Waiting for the stopped observer's thread
    happens after the lock is released, so a subscriber may read
    ``watched_path`` from the dispatch thread without stalling restarts.
    """

    def __init__(self, subscriber: Callable[[], None], observer_factory: Callable[[], Any] = Observer) -> None:
        self._subscriber = subscriber
        self._observer_factory = observer_factory
        self._lock = threading.Lock()
        self._observer: Any | None = None
        self._path: Path | None = None

    @property
    def watched_path(self) -> Path | None:
        with self._lock:
            return self._path

    @property
    def is_watching(self) -> bool:
        with self._lock:
            return self._observer is not None

    def _take_and_stop(self) -> Any | None:
        observer, self._observer, self._path = self._observer, None, None
        if observer is None:
            return None
        try:
            observer.stop()
        except Exception:
            logger.warning("watch_stop_failed", exc_info=True)
        return observer

    @staticmethod
    def _join(observer: Any | None) -> None:
        if observer is None:
            return
        try:
            observer.join(timeout=5)
        except Exception:
            logger.warning("watch_join_failed", exc_info=True)

    def _install(self, path: Path) -> None:
        if not path.exists():
            raise FileNotFoundError(str(path))
        if not path.is_dir():
            raise NotADirectoryError(str(path))

        observer = self._observer_factory()
        try:
            observer.schedule(_ChangeForwarder(self._subscriber), str(path), recursive=True)
            observer.start()
        except Exception:
            try:
                observer.stop()
            except Exception:
                logger.debug("watch_cleanup_failed", exc_info=True)
            raise
        self._observer = observer
        self._path = path

    def start_watch(self, path: Path) -> None:
        path = Path(path)
        previous = None
        try:
            with self._lock:
                previous = self._take_and_stop()
                self._install(path)
        finally:
            self._join(previous)
        logger.info("watch_started", extra={"path": str(path)})

    def stop(self) -> None:
        with self._lock:
            previous = self._take_and_stop()
        self._join(previous)


class ChangeFeed:
    """Counts change notifications so the UI can poll for them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._changes = 0

    def __call__(self) -> None:
        with self._lock:
            self._changes += 1
            changes = self._changes
        logger.debug("file_changed", extra={"changes": changes})

    @property
    def changes(self) -> int:
        with self._lock:
            return self._changes
