"""
Git client implementation for prmate.

This module wraps the read-only Git operations prmate needs: locating
the repository, inspecting branches and refs, listing the commits of a
revision range and reading their messages. All subprocess calls go
through :meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from prmate.grouping.group_model import Commit


logger = logging.getLogger(__name__)
# Detached until the CLI turns propagation on for the duration of a command.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Separates hash and subject in ``git log`` output (``%x1f``).
_FIELD_SEPARATOR = "\x1f"


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


@dataclass(frozen=True)
class TargetRef:
    """A resolved PR target.

    Attributes
    ----------
    branch : str
        The branch name the user asked for, e.g. ``develop``.
    ref : str
        The ref commits are compared against, e.g. ``origin/develop``.
    is_remote : bool
        False when the remote-tracking branch was missing and the local
        branch is used instead.
    """

    branch: str
    ref: str
    is_remote: bool


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_available() -> bool:
        """Return True if the ``git`` executable is on the PATH."""
        return shutil.which("git") is not None

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached. ``.git`` may be a file in worktrees.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, or if git cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error("Failed to run git: %s", e)
            raise GitError(f"Failed to run git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    def _ref_exists(self, ref: str) -> bool:
        result = self._run(["show-ref", "--verify", "--quiet", ref], check=False)
        return result.returncode == 0

    # ------------------------------------------------------------------
    # Branches and refs
    # ------------------------------------------------------------------
    def get_current_branch(self) -> str:
        """Get the name of the checked out branch.

        Raises
        ------
        GitError
            If HEAD is detached or the branch cannot be determined.
        """
        result = self._run(["branch", "--show-current"], check=True)
        branch = result.stdout.strip()
        if not branch:
            raise GitError("HEAD is detached; check out a branch first")
        return branch

    def branch_exists(self, branch_name: str) -> bool:
        """Return True if a local branch called ``branch_name`` exists."""
        return self._ref_exists(f"refs/heads/{branch_name}")

    def remote_tracking_branch_exists(self, branch_name: str, remote: str = "origin") -> bool:
        """Return True if ``<remote>/<branch_name>`` is known locally.

        Only the remote-tracking ref is inspected; the remote itself is not
        contacted.
        """
        return self._ref_exists(f"refs/remotes/{remote}/{branch_name}")

    def resolve_target_ref(self, branch_name: str, remote: str = "origin") -> TargetRef:
        """Resolve the branch a PR will be opened against.

        The remote-tracking branch is preferred; the local branch is used
        when the remote one is unknown.

        Raises
        ------
        GitError
            If the branch exists neither remotely nor locally.
        """
        if self.remote_tracking_branch_exists(branch_name, remote):
            return TargetRef(branch=branch_name, ref=f"{remote}/{branch_name}", is_remote=True)
        if self.branch_exists(branch_name):
            logger.warning("'%s/%s' not found, using local branch", remote, branch_name)
            return TargetRef(branch=branch_name, ref=branch_name, is_remote=False)
        raise GitError(
            f"Target branch '{branch_name}' does not exist remotely or locally."
        )

    def get_remote_url(self, remote: str = "origin") -> str:
        """Return the configured URL of ``remote``."""
        result = self._run(["remote", "get-url", remote], check=True)
        return result.stdout.strip()

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------
    def list_commits(self, from_ref: str, to_ref: str) -> List[Tuple[str, str]]:
        """List the commits reachable from ``to_ref`` but not ``from_ref``.

        Returns
        -------
        List[Tuple[str, str]]
            ``(short_hash, subject)`` pairs in ``git log`` order (newest
            first). Empty if the range holds no commits.
        """
        result = self._run(
            ["log", "--pretty=format:%h%x1f%s", f"{from_ref}..{to_ref}"],
            check=True,
        )
        commits = []
        # splitlines() would also break on separators git allows in subjects
        for line in result.stdout.split("\n"):
            if not line.strip():
                continue
            commit_hash, _, subject = line.partition(_FIELD_SEPARATOR)
            commits.append((commit_hash.strip(), subject))
        return commits

    def get_full_message(self, commit_hash: str) -> str:
        """Return the full message (subject and body) of a commit."""
        result = self._run(["show", "--no-patch", "--format=%B", commit_hash], check=True)
        return result.stdout

    def get_commits(self, from_ref: str, to_ref: str) -> List[Commit]:
        """Return the commits of ``from_ref..to_ref`` with their full messages."""
        return [
            Commit(hash=commit_hash, subject=subject, full_message=self.get_full_message(commit_hash))
            for commit_hash, subject in self.list_commits(from_ref, to_ref)
        ]
