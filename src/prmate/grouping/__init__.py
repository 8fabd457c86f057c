"""
Grouping logic for commits.

This package parses Conventional Commit subject lines and groups commits
by scope. See :mod:`prmate.grouping.commit_parser` and
:mod:`prmate.grouping.classifier` for details. The classifier is not
re-exported here because it depends on :mod:`prmate.formatting`.
"""

from .commit_types import CommitType  # noqa: F401
from .group_model import ClassifiedCommits, Commit, ParsedCommit, ScopeGroup  # noqa: F401
from .commit_parser import parse_commit, parse_subject  # noqa: F401
