from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str


def run(cmd: list[str], cwd: str | None = None) -> CmdResult:
    proc = subprocess.run(
        cmd,
        cwd=cwd,
        text=True,
        errors="replace",
        capture_output=True,
        check=False,
    )
    return CmdResult(proc.returncode, proc.stdout.strip(), proc.stderr.strip())


def format_timestamp(when: datetime) -> str:
    # Jan 16, 2026, 03:45 PM
    return when.strftime("%b %d, %Y, %I:%M %p")


def format_date_heading(when: datetime) -> str:
    return f"### {when.strftime('%B')} {when.day}, {when.year}"


def read_json(path: str) -> dict | None:
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def unique_in_order(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def join_labels(labels: Iterable[str]) -> str:
    return ", ".join(labels)
