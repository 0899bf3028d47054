"""
Log Layer - Render and append work-log entries.

The log is an append-only UTF-8 text file of blocks, each ended by a
fixed-width divider line. Entries are never rewritten once appended.
"""

import os
import re
from dataclasses import dataclass
from typing import List

from .activity import MAX_SAMPLE_FILES, ActivityReport
from .core.paths import rotated_path
from .core.util import join_labels


DIVIDER = "─" * 80

_TIMESTAMP_RE = re.compile(r"^\[(?P<ts>.*)\]$")
_MORE_RE = re.compile(r" \(and (?P<more>\d+) more\)$")


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    activities: List[str]
    sample_files: List[str]
    total_file_count: int

    @classmethod
    def from_report(cls, timestamp: str, report: ActivityReport) -> "LogEntry":
        return cls(
            timestamp=timestamp,
            activities=list(report.activities),
            sample_files=list(report.sample_files),
            total_file_count=report.total_file_count,
        )

    def render(self) -> str:
        lines = [f"[{self.timestamp}]", f"Activities: {join_labels(self.activities)}"]
        if self.total_file_count > 0:
            files_line = f"Files: {join_labels(self.sample_files)}"
            if self.total_file_count > MAX_SAMPLE_FILES:
                files_line += f" (and {self.total_file_count - MAX_SAMPLE_FILES} more)"
            lines.append(files_line)
        lines.append(DIVIDER)
        return "\n".join(lines) + "\n"

    def readme_bullet(self) -> str:
        return f"- **{self.timestamp}:** {join_labels(self.activities)}"


def rotate_if_needed(path: str, max_bytes: int) -> bool:
    """Move the log aside to ``<path>.1`` once it reaches ``max_bytes``.

    A ``max_bytes`` of zero or less disables rotation.
    """
    if max_bytes <= 0 or not os.path.exists(path):
        return False
    if os.path.getsize(path) < max_bytes:
        return False
    os.replace(path, rotated_path(path))
    return True


def append_entry(path: str, entry: LogEntry, max_bytes: int = 0) -> None:
    """Append one rendered entry, creating the file when missing.

    Raises:
        OSError: If the log cannot be rotated or written
    """
    rotate_if_needed(path, max_bytes)
    with open(path, "a", encoding="utf-8") as f:
        f.write(entry.render())


def _split_labels(text: str) -> List[str]:
    return [part for part in text.split(", ") if part] if text else []


def _parse_block(lines: List[str]) -> LogEntry:
    match = _TIMESTAMP_RE.match(lines[0]) if lines else None
    if not match:
        raise ValueError(f"Malformed log block header: {lines[:1]}")
    if len(lines) < 2 or not lines[1].startswith("Activities:"):
        raise ValueError(f"Missing activities line in block [{match.group('ts')}]")

    activities = _split_labels(lines[1][len("Activities:"):].strip())
    sample_files: List[str] = []
    total = 0
    if len(lines) > 2 and lines[2].startswith("Files:"):
        files_text = lines[2][len("Files:"):].strip()
        more = _MORE_RE.search(files_text)
        extra = 0
        if more:
            extra = int(more.group("more"))
            files_text = files_text[:more.start()]
        sample_files = _split_labels(files_text)
        total = len(sample_files) + extra

    return LogEntry(
        timestamp=match.group("ts"),
        activities=activities,
        sample_files=sample_files,
        total_file_count=total,
    )


def parse_log(text: str) -> List[LogEntry]:
    """Parse log file content back into entries, oldest first.

    Labels and file names are split on ``", "``; a file name that itself
    contains ``", "`` parses back as two names and inflates
    ``total_file_count``.
    """
    entries = []
    block: List[str] = []
    for line in text.split("\n"):
        if line == DIVIDER:
            entries.append(_parse_block(block))
            block = []
        elif line or block:
            block.append(line)
    return entries


def read_log(path: str) -> List[LogEntry]:
    if not os.path.exists(path):
        return []
    with open(path, "r", encoding="utf-8") as f:
        return parse_log(f.read())
