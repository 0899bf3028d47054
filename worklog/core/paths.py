from __future__ import annotations

import os
from typing import Optional

from .util import run


LOG_FILENAME = "work-log.txt"
DOC_FILENAME = "README.md"
CONFIG_FILENAME = ".worklog.json"


def git_root(cwd: str) -> Optional[str]:
    try:
        res = run(["git", "rev-parse", "--show-toplevel"], cwd=cwd)
    except OSError:
        return None
    if res.code != 0:
        return None
    return res.stdout.strip()


def repo_root_or_cwd(cwd: str | None = None) -> str:
    cwd = cwd or os.getcwd()
    root = git_root(cwd)
    return root if root else cwd


def log_path(repo_root: str) -> str:
    return os.path.join(repo_root, LOG_FILENAME)


def doc_path(repo_root: str) -> str:
    return os.path.join(repo_root, DOC_FILENAME)


def config_path(repo_root: str) -> str:
    return os.path.join(repo_root, CONFIG_FILENAME)


def resolve(repo_root: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(repo_root, path)


def rotated_path(path: str) -> str:
    return path + ".1"
