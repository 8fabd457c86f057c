"""
Self-update support for prmate.

See :mod:`prmate.update.update_checker`.
"""

from .update_checker import UpdateChecker, UpdateError  # noqa: F401
