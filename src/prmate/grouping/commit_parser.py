"""
Parsing of Conventional Commit subject lines.

Parsing never fails: a subject that does not follow the
``type(scope)!: description`` convention is returned unchanged as a
:class:`NonConventionalSubject` and later filed as a non-conventional
commit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from prmate.grouping.commit_types import CommitType
from prmate.grouping.group_model import Commit, ParsedCommit


# Scope label used for typed commits that name no scope.
UNSCOPED_LABEL = "Uncategorized"

BREAKING_CHANGE_MARKER = "BREAKING CHANGE:"

_TYPE_ALTERNATION = "|".join(t.value for t in CommitType.conventional())

SUBJECT_PATTERN = re.compile(
    rf"^(?P<type>{_TYPE_ALTERNATION})"
    r"(?:\((?P<scope>[^)]*)\))?"
    r"(?P<bang>!)?"
    r": (?P<description>.*)$"
)


@dataclass(frozen=True)
class ConventionalSubject:
    """A subject line that matched the convention."""

    type: CommitType
    scope: Optional[str]
    description: str
    breaking_indicator: bool = False


@dataclass(frozen=True)
class NonConventionalSubject:
    """A subject line that did not match; ``text`` is the original line."""

    text: str


SubjectParseResult = Union[ConventionalSubject, NonConventionalSubject]


def parse_subject(subject: str) -> SubjectParseResult:
    """Split a subject line into type, scope and description.

    Parameters
    ----------
    subject : str
        The first line of a commit message.

    Returns
    -------
    SubjectParseResult
        A :class:`ConventionalSubject` if the line starts with a known type
        followed by an optional scope, an optional ``!`` and ``": "``;
        otherwise a :class:`NonConventionalSubject` holding ``subject``.

    Examples
    --------
    >>> parse_subject("feat(auth): add login")
    ConventionalSubject(type=<CommitType.FEAT: 'feat'>, scope='auth', description='add login', breaking_indicator=False)
    >>> parse_subject("improve readme")
    NonConventionalSubject(text='improve readme')
    """
    match = SUBJECT_PATTERN.match(subject)
    if match is None:
        return NonConventionalSubject(text=subject)

    scope = match.group("scope")
    if scope is not None:
        scope = scope.strip() or None
    return ConventionalSubject(
        type=CommitType(match.group("type")),
        scope=scope,
        description=match.group("description"),
        breaking_indicator=match.group("bang") is not None,
    )


def has_breaking_marker(message: str) -> bool:
    """Return True if ``message`` contains the breaking-change marker anywhere."""
    return BREAKING_CHANGE_MARKER in message


def parse_commit(commit: Commit) -> ParsedCommit:
    """Parse a commit into a :class:`ParsedCommit`.

    The breaking flag is taken from the full message only. It is recorded
    alongside the parsed type and scope, which it does not alter.
    """
    is_breaking = has_breaking_marker(commit.full_message)
    result = parse_subject(commit.subject)

    if isinstance(result, NonConventionalSubject):
        return ParsedCommit(
            commit=commit,
            type=CommitType.OTHER,
            scope=UNSCOPED_LABEL,
            clean_subject=result.text,
            is_breaking=is_breaking,
        )

    return ParsedCommit(
        commit=commit,
        type=result.type,
        scope=result.scope or UNSCOPED_LABEL,
        clean_subject=result.description,
        is_breaking=is_breaking,
        has_breaking_indicator=result.breaking_indicator,
    )
