"""
Conventional Commit types and their display labels.

The set of recognised types is closed. Anything else is reported as
:attr:`CommitType.OTHER`, which is a sentinel rather than a real
category: it has a label for completeness but commits of that type are
never rendered under it.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


# Fixed icons that replace the type label for the two buckets.
BREAKING_ICON = "⚠️"
NON_CONVENTIONAL_ICON = "🗑️"


class CommitType(Enum):
    """A Conventional Commit type tag."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"
    OTHER = "other"

    @classmethod
    def conventional(cls) -> Tuple["CommitType", ...]:
        """Return every real type, i.e. all members except ``OTHER``."""
        return tuple(member for member in cls if member is not cls.OTHER)

    @property
    def icon(self) -> str:
        return _LABELS[self][0]

    @property
    def title(self) -> str:
        return _LABELS[self][1]

    @property
    def label(self) -> str:
        """Icon and title as shown in front of a commit line, e.g. ``"✨ Features"``."""
        return f"{self.icon} {self.title}"


_LABELS: Dict[CommitType, Tuple[str, str]] = {
    CommitType.FEAT: ("✨", "Features"),
    CommitType.FIX: ("🐛", "Bug Fixes"),
    CommitType.DOCS: ("📝", "Documentation"),
    CommitType.STYLE: ("🎨", "Code Style"),
    CommitType.REFACTOR: ("♻️", "Refactoring"),
    CommitType.PERF: ("⚡", "Performance"),
    CommitType.TEST: ("✅", "Tests"),
    CommitType.BUILD: ("🏗️", "Build System"),
    CommitType.CI: ("🚀", "CI/CD"),
    CommitType.CHORE: ("🧹", "Chores"),
    CommitType.REVERT: ("⏪", "Reverts"),
    CommitType.OTHER: (NON_CONVENTIONAL_ICON, "Other"),
}
