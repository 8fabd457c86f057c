"""
Markdown rendering of classified commits.

:mod:`prmate.formatting.line_renderer` renders single commit lines and
:mod:`prmate.formatting.pr_document` assembles the pull-request body.
"""

from .line_renderer import commit_url, render_line  # noqa: F401
