"""
Watcher Layer - Filesystem monitoring and idle detection.

Monitors the working tree using watchdog and, once changes have settled
for the idle timeout, requests an extra tracking cycle. The tracker's own
output files are ignored so that writing them never re-triggers a cycle.
"""

import os
import threading
import time
from pathlib import Path
from typing import Callable, Iterable, Optional, Set
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler, FileSystemEvent


# Read-only events (opened, closed without write) never count as changes.
CHANGE_EVENTS = {"created", "modified", "deleted", "moved"}


class ChangeTrigger(FileSystemEventHandler):
    """Debounces filesystem events into a single ``on_idle`` call."""

    def __init__(self, root: str, on_idle: Callable[[], object], idle_timeout: float = 3.0,
                 ignore: Iterable[str] = ()):
        super().__init__()
        self.root = Path(root).resolve()
        self.on_idle = on_idle
        self.idle_timeout = idle_timeout
        self.ignore: Set[Path] = {Path(p).resolve() for p in ignore}
        self.last_change_time: Optional[float] = None
        self.idle_timer: Optional[threading.Timer] = None
        self.lock = threading.Lock()

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Handle any filesystem event."""
        if event.is_directory or event.event_type not in CHANGE_EVENTS:
            return
        if self._should_ignore_path(event.src_path):
            return
        self._handle_file_change()

    def _should_ignore_path(self, path) -> bool:
        """Check if path is inside .git/ or one of the tracker's own files."""
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        path_obj = Path(path).resolve()

        if path_obj in self.ignore:
            return True

        try:
            rel_path = path_obj.relative_to(self.root)
            if rel_path.parts and rel_path.parts[0] == '.git':
                return True
        except ValueError:
            # Outside the watched root
            pass

        return False

    def _handle_file_change(self) -> None:
        with self.lock:
            self.last_change_time = time.time()

            if self.idle_timer is not None:
                self.idle_timer.cancel()

            self.idle_timer = threading.Timer(self.idle_timeout, self._on_idle_timeout)
            self.idle_timer.daemon = True
            self.idle_timer.start()

    def _on_idle_timeout(self) -> None:
        with self.lock:
            idle = (self.last_change_time is not None and
                    time.time() - self.last_change_time >= self.idle_timeout)
            if self.idle_timer is threading.current_thread():
                self.idle_timer = None
        # Called outside the lock; a cycle can take a while.
        if idle:
            self.on_idle()

    def cancel(self) -> None:
        with self.lock:
            if self.idle_timer is not None:
                self.idle_timer.cancel()
                self.idle_timer = None


def start_watching(handler: ChangeTrigger) -> Observer:
    """Start recursive filesystem monitoring of the handler's root.

    Args:
        handler: Configured change trigger

    Returns:
        Observer: The started observer; pass it to ``stop_watching``

    Raises:
        RuntimeError: If watching cannot be started
    """
    if not handler.root.is_dir():
        raise RuntimeError(f"Path is not a directory: {handler.root}")

    observer = Observer()
    observer.schedule(handler, str(handler.root), recursive=True)
    try:
        observer.start()
    except OSError as e:
        raise RuntimeError(f"Failed to start filesystem watching: {e}")
    return observer


def stop_watching(observer: Observer, handler: Optional[ChangeTrigger] = None) -> None:
    observer.stop()
    observer.join()
    if handler is not None:
        handler.cancel()
