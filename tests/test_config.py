"""Tests for configuration loading."""

import json
import os
from datetime import datetime

import pytest

from worklog.config import DEFAULT_INTERVAL_MINUTES, ConfigError, load_config
from worklog.core.util import format_date_heading


def write_config(root, data):
    (root / ".worklog.json").write_text(json.dumps(data), encoding="utf-8")


def test_defaults_without_config_file(tmp_path):
    config = load_config(str(tmp_path))

    assert config.interval_minutes == DEFAULT_INTERVAL_MINUTES
    assert config.log_file == os.path.join(str(tmp_path), "work-log.txt")
    assert config.doc_file == os.path.join(str(tmp_path), "README.md")
    assert config.heading == format_date_heading(datetime.now())
    assert config.max_log_bytes == 0
    assert config.watch_changes is False


def test_date_heading_format():
    assert format_date_heading(datetime(2026, 1, 6)) == "### January 6, 2026"


def test_config_file_values_are_applied(tmp_path):
    write_config(tmp_path, {
        "log_file": "logs/activity.txt",
        "doc_file": "/abs/NOTES.md",
        "heading": "## Progress",
        "interval_minutes": 5,
        "max_log_bytes": 4096,
        "watch_changes": True,
        "idle_timeout": 2,
    })

    config = load_config(str(tmp_path))

    assert config.log_file == os.path.join(str(tmp_path), "logs/activity.txt")
    assert config.doc_file == "/abs/NOTES.md"
    assert config.heading == "## Progress"
    assert config.interval_minutes == 5
    assert config.max_log_bytes == 4096
    assert config.watch_changes is True
    assert config.idle_timeout == 2.0


def test_cli_interval_overrides_file(tmp_path):
    write_config(tmp_path, {"interval_minutes": 5})

    assert load_config(str(tmp_path), interval_minutes=45).interval_minutes == 45


@pytest.mark.parametrize("data", [
    {"colour": "blue"},
    {"interval_minutes": "20"},
    {"interval_minutes": True},
    {"interval_minutes": 0},
    {"watch_changes": "yes"},
    {"idle_timeout": -1},
    ["not", "an", "object"],
])
def test_invalid_config_raises(tmp_path, data):
    write_config(tmp_path, data)

    with pytest.raises(ConfigError):
        load_config(str(tmp_path))


def test_malformed_json_raises(tmp_path):
    (tmp_path / ".worklog.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(str(tmp_path))


def test_undecodable_config_raises(tmp_path):
    (tmp_path / ".worklog.json").write_bytes(b'{"heading": "\xff"}')

    with pytest.raises(ConfigError, match="unreadable"):
        load_config(str(tmp_path))


def test_config_path_that_is_a_directory_raises(tmp_path):
    (tmp_path / ".worklog.json").mkdir()

    with pytest.raises(ConfigError, match="unreadable"):
        load_config(str(tmp_path))
