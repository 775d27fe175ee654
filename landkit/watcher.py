"""Poll project files for changes and notify a callback.

Uses mtime-based polling on a daemon thread, which needs no platform file
notification support and is adequate for the handful of files in a landing
page project.
"""

from __future__ import annotations

import logging
import threading
import typing as typ
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS: tuple[str, ...] = ("*",)


class FileWatcher:
    """Watch directories for added, modified, or removed files."""

    def __init__(
        self,
        paths: typ.Iterable[Path],
        on_change: typ.Callable[[list[Path]], None],
        *,
        patterns: typ.Iterable[str] = DEFAULT_PATTERNS,
        poll_interval: float = 0.5,
    ) -> None:
        """Initialize the watcher.

        Parameters
        ----------
        paths : Iterable[Path]
            Files or directories to watch; directories are scanned
            recursively. Missing paths are skipped.
        on_change : Callable[[list[Path]], None]
            Called once per poll with every path that changed.
        patterns : Iterable[str], optional
            Glob patterns matched inside watched directories.
        poll_interval : float, optional
            Seconds between scans.
        """
        self.paths = list(paths)
        self.on_change = on_change
        self.patterns = tuple(patterns)
        self.poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._mtimes: dict[Path, float] = {}

    def start(self) -> None:
        self._mtimes = self.scan()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop, name="landkit-watcher", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)
            self._thread = None

    def scan(self) -> dict[Path, float]:
        """Return the current mtime of every watched, non-hidden file."""
        mtimes: dict[Path, float] = {}
        for watch_path in self.paths:
            if watch_path.is_file():
                candidates: typ.Iterable[Path] = [watch_path]
            elif watch_path.is_dir():
                candidates = (
                    found
                    for pattern in self.patterns
                    for found in watch_path.rglob(pattern)
                )
            else:
                continue
            for file_path in candidates:
                if not file_path.is_file() or _is_hidden(file_path, watch_path):
                    continue
                try:
                    mtimes[file_path] = file_path.stat().st_mtime
                except FileNotFoundError:
                    continue
        return mtimes

    def poll(self) -> list[Path]:
        """Scan once and return the paths that changed since the last scan."""
        current = self.scan()
        changed = [
            path
            for path, mtime in current.items()
            if path not in self._mtimes or mtime > self._mtimes[path]
        ]
        changed.extend(path for path in self._mtimes if path not in current)
        self._mtimes = current
        return sorted(changed)

    def _watch_loop(self) -> None:
        while not self._stop_event.wait(self.poll_interval):
            changed = self.poll()
            if not changed:
                continue
            logger.info("changed: %s", ", ".join(str(path) for path in changed))
            try:
                self.on_change(changed)
            except Exception:
                # Keep watching; the next save gets another chance.
                logger.exception("reload after file change failed")


def _is_hidden(path: Path, root: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


__all__ = ["FileWatcher"]
