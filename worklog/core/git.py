from __future__ import annotations

from dataclasses import dataclass, field

from .util import run, unique_in_order


OK = "ok"
UNAVAILABLE = "unavailable"
ERROR = "error"

NO_REPO_STATUS = "No git repository detected"


@dataclass(frozen=True)
class QueryResult:
    status: str
    lines: list[str] = field(default_factory=list)
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == OK


@dataclass(frozen=True)
class Snapshot:
    changed_files: list[str]
    status_text: str
    tool_available: bool = True

    @property
    def is_empty(self) -> bool:
        return not self.changed_files and not self.status_text


def run_query(args: list[str], cwd: str | None = None) -> QueryResult:
    """Run a read-only git query, folding every failure into the result."""
    try:
        res = run(["git"] + args, cwd=cwd)
    except FileNotFoundError:
        return QueryResult(UNAVAILABLE, detail="git is not installed or not found in PATH")
    except OSError as e:
        return QueryResult(ERROR, detail=str(e))

    if res.code != 0:
        if "not a git repository" in res.stderr.lower():
            return QueryResult(UNAVAILABLE, detail=res.stderr)
        return QueryResult(ERROR, detail=res.stderr or f"git {' '.join(args)} exited {res.code}")

    lines = [line.strip() for line in res.stdout.split("\n") if line.strip()]
    return QueryResult(OK, lines=lines)


def modified_files(cwd: str | None = None) -> QueryResult:
    return run_query(["diff", "--name-only"], cwd=cwd)


def untracked_files(cwd: str | None = None) -> QueryResult:
    return run_query(["ls-files", "--others", "--exclude-standard"], cwd=cwd)


def staged_files(cwd: str | None = None) -> QueryResult:
    return run_query(["diff", "--staged", "--name-only"], cwd=cwd)


def status_text(cwd: str | None = None) -> str:
    res = run_query(["status", "--short"], cwd=cwd)
    if not res.ok:
        return NO_REPO_STATUS
    return "\n".join(res.lines)


def collect_snapshot(cwd: str | None = None) -> Snapshot:
    """Gather one cycle's view of the working tree.

    Modified, untracked and staged lists are merged in that order with
    duplicates dropped. A failed query contributes no files.
    """
    results = [modified_files(cwd), untracked_files(cwd), staged_files(cwd)]
    files = unique_in_order(path for res in results if res.ok for path in res.lines)
    available = all(res.status != UNAVAILABLE for res in results)
    return Snapshot(changed_files=files, status_text=status_text(cwd), tool_available=available)
