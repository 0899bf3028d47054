"""
Summary Layer - Insert one-line progress bullets into a documentation file.

Locates a heading line and inserts the new bullet directly above the most
recent time-stamped bullet under it, so entries stack newest-first. All
other content is passed through unchanged.
"""

import sys
from typing import List, Optional


def is_timestamped_bullet(line: str) -> bool:
    """Check for a ``- **<timestamp>:** ...`` bullet."""
    stripped = line.strip()
    return stripped.startswith("-") and "**" in stripped and ":**" in stripped


def find_heading(lines: List[str], heading: str) -> Optional[int]:
    for i, line in enumerate(lines):
        if heading in line:
            return i
    return None


def find_insert_index(lines: List[str], heading_index: int) -> int:
    """Return the line index where a new bullet belongs.

    Plain bullets right below the heading are skipped; the scan stops at
    the first time-stamped bullet, the first non-bullet line, or EOF.
    """
    index = heading_index + 1
    while index < len(lines) and lines[index].strip().startswith("-"):
        if is_timestamped_bullet(lines[index]):
            break
        index += 1
    return index


def insert_bullet(text: str, heading: str, bullet: str) -> Optional[str]:
    """Return ``text`` with ``bullet`` inserted, or None if the heading is absent."""
    if not heading or heading not in text:
        return None
    lines = text.split("\n")
    heading_index = find_heading(lines, heading)
    if heading_index is None:
        return None
    # Lines keep their "\r" under CRLF; match the heading's ending.
    if lines[heading_index].endswith("\r"):
        bullet += "\r"
    lines.insert(find_insert_index(lines, heading_index), bullet)
    return "\n".join(lines)


def inject_summary(doc_path: str, heading: str, bullet: str) -> bool:
    """Insert ``bullet`` under ``heading`` in the file at ``doc_path``.

    Args:
        doc_path: Documentation file to update in place
        heading: Literal text identifying the heading line
        bullet: Fully formatted bullet line

    Returns:
        bool: True if the file was rewritten. A missing heading or an I/O
        problem leaves the file untouched and returns False; I/O problems
        are reported as a warning.
    """
    try:
        with open(doc_path, "r", encoding="utf-8", newline="") as f:
            text = f.read()

        updated = insert_bullet(text, heading, bullet)
        if updated is None:
            return False

        with open(doc_path, "w", encoding="utf-8", newline="") as f:
            f.write(updated)
        return True
    except (OSError, UnicodeDecodeError) as e:
        print(f"Warning: could not update {doc_path}: {e}", file=sys.stderr)
        return False
