"""
Assembly of the pull-request description.

The document is made of fixed sections in a fixed order::

    ## Description
    ### ⚠️ Breaking Changes          (only if any)
    ### <scope>                      (one per scope, first-seen order)
    ### 🗑️ Non-conventional Commits  (only if any, always after the scopes)
    ## <Tracker> Task
    ## Testing Instructions

Empty buckets and groups contribute nothing, so no heading is ever
rendered without lines under it. Rendering is deterministic: the same
commits always produce the same text.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from prmate.grouping.classifier import classify_commits
from prmate.grouping.commit_parser import parse_commit
from prmate.grouping.commit_types import BREAKING_ICON, NON_CONVENTIONAL_ICON
from prmate.grouping.group_model import ClassifiedCommits, Commit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DESCRIPTION_HEADING = "## Description"
BREAKING_HEADING = f"### {BREAKING_ICON} Breaking Changes"
NON_CONVENTIONAL_HEADING = f"### {NON_CONVENTIONAL_ICON} Non-conventional Commits"
TESTING_HEADING = "## Testing Instructions"

DEFAULT_TASK_TRACKER = "Fibery"
DEFAULT_TEST_COMMAND = "pnpm test"


def render_section(heading: str, lines: List[str]) -> str:
    """Render a ``###`` section, or an empty string if ``lines`` is empty."""
    if not lines:
        return ""
    body = "".join(f"{line}\n" for line in lines)
    return f"{heading}\n\n{body}\n"


def render_testing_instructions(test_command: str) -> str:
    return f"{TESTING_HEADING}\n\n```sh\n{test_command}\n```\n"


def assemble_document(
    classified: ClassifiedCommits,
    task_link: str,
    task_tracker: str = DEFAULT_TASK_TRACKER,
    test_command: str = DEFAULT_TEST_COMMAND,
) -> str:
    """Concatenate the sections of the PR description.

    Parameters
    ----------
    classified : ClassifiedCommits
        Rendered lines grouped by the classifier.
    task_link : str
        Text placed verbatim under the task heading.
    task_tracker : str, optional
        Name of the task tracker used in the task heading.
    test_command : str, optional
        Command shown in the testing-instructions code block.

    Returns
    -------
    str
        The Markdown document.
    """
    parts = [f"{DESCRIPTION_HEADING}\n\n"]
    parts.append(render_section(BREAKING_HEADING, classified.breaking))
    for group in classified.groups.values():
        parts.append(render_section(f"### {group.name}", group.entries))
    parts.append(render_section(NON_CONVENTIONAL_HEADING, classified.non_conventional))
    parts.append(f"## {task_tracker} Task\n{task_link}\n\n")
    parts.append(render_testing_instructions(test_command))
    return "".join(parts)


def build_pr_body(
    commits: Iterable[Commit],
    base_url: str,
    task_link: str,
    task_tracker: str = DEFAULT_TASK_TRACKER,
    test_command: str = DEFAULT_TEST_COMMAND,
) -> str:
    """Parse, classify and render ``commits`` into a PR description."""
    classified = classify_commits((parse_commit(commit) for commit in commits), base_url)
    logger.debug(
        "Classified %d commit(s): %d breaking, %d scope group(s), %d non-conventional",
        classified.total,
        len(classified.breaking),
        len(classified.groups),
        len(classified.non_conventional),
    )
    return assemble_document(
        classified,
        task_link,
        task_tracker=task_tracker,
        test_command=test_command,
    )
