"""
Data models for commit grouping.

A :class:`Commit` is what git hands us. The parser turns it into a
:class:`ParsedCommit`, and the classifier collects rendered lines into a
:class:`ClassifiedCommits` value made of two buckets and an ordered set
of :class:`ScopeGroup` objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from prmate.grouping.commit_types import CommitType


@dataclass(frozen=True)
class Commit:
    """A commit as listed by ``git log``.

    Attributes
    ----------
    hash : str
        Abbreviated commit hash.
    subject : str
        First line of the commit message.
    full_message : str
        Subject and body, used only to look for breaking-change markers.
    """

    hash: str
    subject: str
    full_message: str = ""


@dataclass(frozen=True)
class ParsedCommit:
    """A commit after its subject line has been parsed.

    Attributes
    ----------
    commit : Commit
        The commit this was parsed from.
    type : CommitType
        The Conventional Commit type, ``CommitType.OTHER`` if the subject
        did not follow the convention.
    scope : str
        The parenthesised scope, or the unscoped label.
    clean_subject : str
        The subject without its ``type(scope)!: `` prefix.
    is_breaking : bool
        True if the full message carries a ``BREAKING CHANGE:`` marker.
    has_breaking_indicator : bool
        True if the subject used the ``!`` suffix. Informational only.
    """

    commit: Commit
    type: CommitType
    scope: str
    clean_subject: str
    is_breaking: bool = False
    has_breaking_indicator: bool = False

    @property
    def is_conventional(self) -> bool:
        return self.type is not CommitType.OTHER


@dataclass
class ScopeGroup:
    """Rendered lines of all commits sharing a scope, in encounter order."""

    name: str
    entries: List[str] = field(default_factory=list)


@dataclass
class ClassifiedCommits:
    """Result of classifying a list of commits.

    ``groups`` relies on dict insertion order: scopes appear in the order
    they were first seen.
    """

    breaking: List[str] = field(default_factory=list)
    groups: Dict[str, ScopeGroup] = field(default_factory=dict)
    non_conventional: List[str] = field(default_factory=list)

    def add_to_group(self, scope: str, line: str) -> None:
        group = self.groups.get(scope)
        if group is None:
            group = ScopeGroup(name=scope)
            self.groups[scope] = group
        group.entries.append(line)

    @property
    def total(self) -> int:
        """Number of commits classified, across all sections."""
        return (
            len(self.breaking)
            + sum(len(group.entries) for group in self.groups.values())
            + len(self.non_conventional)
        )
