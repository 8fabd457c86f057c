"""
Rendering of a single commit as a Markdown list item.
"""

from __future__ import annotations

from prmate.grouping.commit_types import BREAKING_ICON, NON_CONVENTIONAL_ICON
from prmate.grouping.group_model import ParsedCommit


def commit_url(base_url: str, commit_hash: str) -> str:
    """Return the web URL of a commit, e.g. ``https://github.com/o/r/commit/abc123``."""
    return f"{base_url.rstrip('/')}/commit/{commit_hash}"


def line_icon(parsed: ParsedCommit) -> str:
    """Pick the prefix shown in front of the link.

    Breaking commits always get the warning icon, even though their type
    is kept on the parsed commit.
    """
    if parsed.is_breaking:
        return BREAKING_ICON
    if not parsed.is_conventional:
        return NON_CONVENTIONAL_ICON
    return parsed.type.label


def render_line(parsed: ParsedCommit, base_url: str) -> str:
    """Render ``- <icon> [<subject>](<base_url>/commit/<hash>)``."""
    link = f"[{parsed.clean_subject}]({commit_url(base_url, parsed.commit.hash)})"
    return f"- {line_icon(parsed)} {link}"
