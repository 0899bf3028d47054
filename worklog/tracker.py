"""
Tracker Layer - One collect, classify, log and summarize cycle.

Wires the snapshot collector, activity classifier, log appender and
summary injector together and drives them from the scheduler.
"""

import os
import sys
from datetime import datetime
from typing import Optional

from .activity import classify
from .config import TrackerConfig
from .core import git as git_mod
from .core.paths import rotated_path
from .core.util import format_timestamp
from .logfile import LogEntry, append_entry
from .readme import inject_summary
from .scheduler import Scheduler, minutes_to_seconds
from .watcher import ChangeTrigger, start_watching, stop_watching


def current_timestamp(now: Optional[datetime] = None) -> str:
    return format_timestamp(now or datetime.now())


class WorkTracker:
    """Periodically records working-tree activity to a log and a doc file."""

    def __init__(self, config: TrackerConfig):
        self.config = config
        self.scheduler: Optional[Scheduler] = None

    def track_progress(self) -> LogEntry:
        """Run one full cycle and return the entry that was recorded."""
        timestamp = current_timestamp()
        snapshot = git_mod.collect_snapshot(self.config.repo_root)
        if not snapshot.tool_available:
            print("Note: git is unavailable here; recording without file data", file=sys.stderr)

        report = classify(snapshot.changed_files, snapshot.status_text)
        entry = LogEntry.from_report(timestamp, report)

        try:
            append_entry(self.config.log_file, entry, self.config.max_log_bytes)
        except OSError as e:
            print(f"Warning: could not write {self.config.log_file}: {e}", file=sys.stderr)

        inject_summary(self.config.doc_file, self.config.heading, entry.readme_bullet())

        print(f"✓ Progress logged at {timestamp}")
        print(f"  {report.summary}")
        return entry

    def _ignored_paths(self) -> list[str]:
        log_file = self.config.log_file
        return [log_file, rotated_path(log_file), self.config.doc_file]

    def start_tracking(self) -> None:
        """Run a cycle now, then every interval, until interrupted."""
        interval = self.config.interval_minutes
        print(f"🚀 Work tracker started - logging every {interval} minutes")
        print(f"📝 Logs saved to: {os.path.relpath(self.config.log_file, self.config.repo_root)}")
        print(f"📄 {os.path.basename(self.config.doc_file)} updated under '{self.config.heading}'")
        print("Press Ctrl+C to stop tracking\n")

        self.scheduler = Scheduler(self.track_progress, minutes_to_seconds(interval))

        observer = None
        handler = None
        if self.config.watch_changes:
            handler = ChangeTrigger(
                self.config.repo_root,
                self.scheduler.trigger,
                self.config.idle_timeout,
                ignore=self._ignored_paths(),
            )
            observer = start_watching(handler)
            print(f"👀 Watching for changes (idle timeout: {self.config.idle_timeout:g}s)")

        try:
            self.scheduler.run_forever()
        finally:
            if observer is not None:
                stop_watching(observer, handler)
