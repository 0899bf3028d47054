"""Tests for log rendering, appending, rotation and parsing."""

from worklog.activity import classify
from worklog.logfile import (
    DIVIDER,
    LogEntry,
    append_entry,
    parse_log,
    read_log,
    rotate_if_needed,
)


def make_entry(timestamp="Jan 16, 2026, 03:45 PM", files=None, status=""):
    return LogEntry.from_report(timestamp, classify(files or [], status))


def test_render_without_files():
    """Test that the Files line is omitted when nothing changed."""
    text = make_entry().render()

    assert text == (
        "[Jan 16, 2026, 03:45 PM]\n"
        "Activities: No changes detected\n"
        f"{DIVIDER}\n"
    )


def test_render_with_files():
    """Test a block with a short file list."""
    text = make_entry(files=["a.js", "b.json"]).render()

    lines = text.splitlines()
    assert lines[1] == "Activities: Working on JavaScript files, Updating configuration files"
    assert lines[2] == "Files: a.js, b.json"
    assert lines[3] == DIVIDER
    assert len(DIVIDER) == 80


def test_render_mentions_overflow():
    """Test the (and K more) suffix for more than ten files."""
    files = [f"f{i}.xyz" for i in range(15)]

    text = make_entry(files=files).render()

    assert "Activities: Modified 15 file(s)" in text
    assert "Files: " + ", ".join(files[:10]) + " (and 5 more)" in text


def test_render_tolerates_empty_activities():
    """Test the status-only report renders an empty activities line."""
    text = make_entry(status="No git repository detected").render()

    assert "Activities: \n" in text


def test_readme_bullet_format():
    """Test the documentation bullet."""
    entry = make_entry(files=["x.proto"])

    assert entry.readme_bullet() == "- **Jan 16, 2026, 03:45 PM:** Modifying schema definitions"


def test_append_creates_file_and_round_trips(tmp_path):
    """Test appending N entries and parsing them back."""
    log = tmp_path / "work-log.txt"
    entries = [
        make_entry("Jan 16, 2026, 09:00 AM"),
        make_entry("Jan 16, 2026, 09:20 AM", files=["a.js"]),
        make_entry("Jan 16, 2026, 09:40 AM", files=[f"f{i}.xyz" for i in range(13)]),
    ]

    for entry in entries:
        append_entry(str(log), entry)

    text = log.read_text(encoding="utf-8")
    assert text.count(DIVIDER) == 3

    parsed = parse_log(text)
    assert parsed == entries
    assert read_log(str(log)) == entries


def test_append_never_rewrites_existing_content(tmp_path):
    """Test that earlier blocks are preserved byte for byte."""
    log = tmp_path / "work-log.txt"
    append_entry(str(log), make_entry("one"))
    first = log.read_text(encoding="utf-8")

    append_entry(str(log), make_entry("two"))

    assert log.read_text(encoding="utf-8").startswith(first)


def test_read_log_missing_file(tmp_path):
    """Test reading a log that does not exist yet."""
    assert read_log(str(tmp_path / "missing.txt")) == []


def test_rotation_disabled_by_default(tmp_path):
    """Test that a zero limit never rotates."""
    log = tmp_path / "work-log.txt"
    log.write_text("x" * 1000, encoding="utf-8")

    assert rotate_if_needed(str(log), 0) is False
    assert log.exists()


def test_rotation_moves_full_log_aside(tmp_path):
    """Test that reaching the limit moves the log to .1 before appending."""
    log = tmp_path / "work-log.txt"
    backup = tmp_path / "work-log.txt.1"
    append_entry(str(log), make_entry("old"))
    size = log.stat().st_size

    append_entry(str(log), make_entry("new"), max_bytes=size)

    assert [e.timestamp for e in read_log(str(backup))] == ["old"]
    assert [e.timestamp for e in read_log(str(log))] == ["new"]


def test_rotation_below_limit_keeps_appending(tmp_path):
    """Test that a log under the limit is appended in place."""
    log = tmp_path / "work-log.txt"
    append_entry(str(log), make_entry("a"), max_bytes=10_000)
    append_entry(str(log), make_entry("b"), max_bytes=10_000)

    assert [e.timestamp for e in read_log(str(log))] == ["a", "b"]
    assert not (tmp_path / "work-log.txt.1").exists()


def test_file_names_with_comma_space_split_on_parse():
    """Test the documented limit: ', ' inside a name splits it in two."""
    entry = make_entry(files=["a, b.txt"])

    parsed = parse_log(entry.render())[0]

    assert parsed.sample_files == ["a", "b.txt"]
    assert parsed.total_file_count == 2
