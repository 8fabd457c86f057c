"""
Routing of parsed commits into the sections of the PR description.

Each commit ends up in exactly one place, decided in this order:

1. the breaking-changes bucket if its message carries a breaking marker,
2. the non-conventional bucket if its subject had no known type prefix,
3. the scope group named after its scope otherwise.

Buckets and groups hold already rendered lines, so assembling the final
document is plain concatenation.
"""

from __future__ import annotations

from typing import Iterable

from prmate.formatting.line_renderer import render_line
from prmate.grouping.group_model import ClassifiedCommits, ParsedCommit


def classify_commit(parsed: ParsedCommit, base_url: str, result: ClassifiedCommits) -> None:
    """File one commit into ``result``."""
    line = render_line(parsed, base_url)
    if parsed.is_breaking:
        result.breaking.append(line)
    elif not parsed.is_conventional:
        result.non_conventional.append(line)
    else:
        result.add_to_group(parsed.scope, line)


def classify_commits(parsed_commits: Iterable[ParsedCommit], base_url: str) -> ClassifiedCommits:
    """Classify commits in the order given and return the filled buckets.

    Parameters
    ----------
    parsed_commits : Iterable[ParsedCommit]
        Commits in log order.
    base_url : str
        Web URL of the repository, e.g. ``https://github.com/org/repo``.

    Returns
    -------
    ClassifiedCommits
        A new value; scope groups keep the order in which their scope was
        first encountered.
    """
    result = ClassifiedCommits()
    for parsed in parsed_commits:
        classify_commit(parsed, base_url, result)
    return result
