"""
Config Layer - Resolve tracker settings.

Settings come from, in order of precedence: the command-line interval,
an optional ``.worklog.json`` at the repository root, and built-in
defaults.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .core import paths
from .core.util import format_date_heading, read_json


DEFAULT_INTERVAL_MINUTES = 20
DEFAULT_IDLE_TIMEOUT = 3.0


class ConfigError(ValueError):
    """Exception raised for an unreadable or invalid config file."""
    pass


@dataclass
class TrackerConfig:
    """Resolved settings for one tracker process."""
    repo_root: str
    log_file: str
    doc_file: str
    heading: str = field(default_factory=lambda: format_date_heading(datetime.now()))
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    max_log_bytes: int = 0
    watch_changes: bool = False
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT


# key -> accepted types
_FILE_KEYS: Dict[str, tuple] = {
    "log_file": (str,),
    "doc_file": (str,),
    "heading": (str,),
    "interval_minutes": (int,),
    "max_log_bytes": (int,),
    "watch_changes": (bool,),
    "idle_timeout": (int, float),
}


def _validate(data: Any, source: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a JSON object")
    for key, value in data.items():
        if key not in _FILE_KEYS:
            raise ConfigError(f"{source}: unknown key '{key}'")
        expected = _FILE_KEYS[key]
        # bool is an int subclass; only accept it where asked for.
        if isinstance(value, bool) and bool not in expected:
            raise ConfigError(f"{source}: '{key}' has the wrong type")
        if not isinstance(value, expected):
            raise ConfigError(f"{source}: '{key}' has the wrong type")
    if data.get("interval_minutes", 1) <= 0:
        raise ConfigError(f"{source}: 'interval_minutes' must be positive")
    if data.get("idle_timeout", 1) <= 0:
        raise ConfigError(f"{source}: 'idle_timeout' must be positive")
    return data


def load_config_file(repo_root: str) -> Dict[str, Any]:
    path = paths.config_path(repo_root)
    try:
        data = read_json(path)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON: {e}")
    except (UnicodeDecodeError, OSError) as e:
        raise ConfigError(f"{path}: unreadable: {e}")
    if data is None:
        return {}
    return _validate(data, path)


def load_config(repo_root: str, interval_minutes: Optional[int] = None) -> TrackerConfig:
    """Build the tracker configuration for ``repo_root``.

    Args:
        repo_root: Directory holding the tracked working tree
        interval_minutes: Interval from the command line, if given

    Returns:
        TrackerConfig: Settings with all paths made absolute

    Raises:
        ConfigError: If the config file is malformed
    """
    data = load_config_file(repo_root)
    log_file = data.get("log_file")
    doc_file = data.get("doc_file")

    config = TrackerConfig(
        repo_root=repo_root,
        log_file=paths.resolve(repo_root, log_file) if log_file else paths.log_path(repo_root),
        doc_file=paths.resolve(repo_root, doc_file) if doc_file else paths.doc_path(repo_root),
        max_log_bytes=data.get("max_log_bytes", 0),
        watch_changes=data.get("watch_changes", False),
        idle_timeout=float(data.get("idle_timeout", DEFAULT_IDLE_TIMEOUT)),
        interval_minutes=data.get("interval_minutes", DEFAULT_INTERVAL_MINUTES),
    )
    if "heading" in data:
        config.heading = data["heading"]
    if interval_minutes is not None:
        config.interval_minutes = interval_minutes
    return config
