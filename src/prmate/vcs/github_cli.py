"""
Pull-request creation through the GitHub CLI (``gh``).

prmate does not talk to the GitHub API itself; it shells out to
``gh pr create`` which takes care of authentication.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class GitHubCLIError(Exception):
    """Raised when a ``gh`` command fails."""

    pass


class GitHubCLI:
    """Thin wrapper around the ``gh`` executable."""

    def __init__(self, repo_root: Path, executable: str = "gh") -> None:
        self.repo_root = repo_root
        self.executable = executable

    @staticmethod
    def is_available(executable: str = "gh") -> bool:
        """Return True if the GitHub CLI is on the PATH."""
        return shutil.which(executable) is not None

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        full_cmd = [self.executable] + args
        # The PR body can be long; log the command without it.
        logger.debug("Executing gh command: %s %s", self.executable, args[0] if args else "")
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
            logger.error("Failed to run %s: %s", self.executable, e)
            raise GitHubCLIError(f"Failed to run {self.executable}: {e}") from e

        if result.returncode != 0:
            logger.error(
                "gh command failed with exit code %s\nSTDOUT: %s\nSTDERR: %s",
                result.returncode,
                result.stdout,
                result.stderr,
            )
            raise GitHubCLIError(result.stderr.strip() or result.stdout.strip() or "gh command failed")
        return result

    def create_pull_request(
        self,
        title: str,
        body: str,
        head: str,
        base: Optional[str] = None,
        draft: bool = False,
    ) -> str:
        """Open a pull request and return its URL.

        Parameters
        ----------
        title : str
            PR title.
        body : str
            PR description in Markdown.
        head : str
            Branch the changes come from.
        base : str, optional
            Branch to merge into. ``gh`` picks the repository default when
            omitted.
        draft : bool, optional
            Open the PR as a draft.

        Raises
        ------
        GitHubCLIError
            If ``gh`` cannot be run or reports a failure.
        """
        args = ["pr", "create", "--title", title, "--body", body, "--head", head]
        if base:
            args += ["--base", base]
        if draft:
            args.append("--draft")
        result = self._run(args)
        # gh prints the URL of the new PR as the last line of stdout
        lines = [line for line in result.stdout.splitlines() if line.strip()]
        return lines[-1].strip() if lines else ""
