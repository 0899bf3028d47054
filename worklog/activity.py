"""
Activity Layer - Classify a working-tree snapshot into activity labels.

Maps changed file paths to a short, ordered list of human-readable
labels. Every rule is evaluated independently and all matching rules
fire, in a fixed order.
"""

from dataclasses import dataclass
from typing import Dict, List

from .core.util import join_labels


MAX_SAMPLE_FILES = 10

NO_CHANGES = "No changes detected"

# Extension -> language name; order here is label order.
LANGUAGE_EXTENSIONS: Dict[str, str] = {
    ".js": "JavaScript",
    ".ts": "TypeScript",
    ".py": "Python",
}
SCHEMA_EXTENSIONS = (".proto",)
CONFIG_EXTENSIONS = (".json",)
DOC_MARKER = "README"


@dataclass(frozen=True)
class ActivityReport:
    """Result of classifying one snapshot."""
    activities: List[str]
    sample_files: List[str]
    total_file_count: int

    @property
    def summary(self) -> str:
        return join_labels(self.activities)


def _language_labels(files: List[str]) -> List[str]:
    labels = []
    for ext, language in LANGUAGE_EXTENSIONS.items():
        if any(f.endswith(ext) for f in files):
            labels.append(f"Working on {language} files")
    return labels


def classify(changed_files: List[str], status_text: str) -> ActivityReport:
    """Classify changed files into activity labels.

    Args:
        changed_files: Deduplicated changed paths in discovery order
        status_text: Raw short status output for the same cycle

    Returns:
        ActivityReport: Labels, the first ten files and the total count
    """
    files = list(changed_files)
    activities: List[str] = []

    if not files and not status_text:
        activities.append(NO_CHANGES)
    else:
        activities.extend(_language_labels(files))
        if any(f.endswith(SCHEMA_EXTENSIONS) for f in files):
            activities.append("Modifying schema definitions")
        if any(f.endswith(CONFIG_EXTENSIONS) for f in files):
            activities.append("Updating configuration files")
        if any(DOC_MARKER in f for f in files):
            activities.append("Updating documentation")
        # Status text with no discrete files yields no labels at all.
        if files and not activities:
            activities.append(f"Modified {len(files)} file(s)")

    return ActivityReport(
        activities=activities,
        sample_files=files[:MAX_SAMPLE_FILES],
        total_file_count=len(files),
    )
