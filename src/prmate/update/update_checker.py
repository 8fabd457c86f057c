"""
Update checking and reinstalling of prmate.

An update is available when the latest commit on the published branch
differs from the commit prmate was installed from. Comparing commits
instead of file contents means a change to any module of the package
counts as a new version. Reinstalling runs pip against the configured
install source.
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
import sys
from dataclasses import dataclass
from importlib import metadata
from typing import List, Optional

import requests

from prmate._version import get_git_head_sha


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False

DISTRIBUTION_NAME = "prmate"
_SHA_PATTERN = re.compile(r"^[0-9a-f]{7,40}$")


class UpdateError(Exception):
    """Raised when checking for or installing an update fails."""

    pass


def installed_commit_from_metadata(distribution: str = DISTRIBUTION_NAME) -> Optional[str]:
    """Return the commit pip recorded when installing from a VCS URL.

    pip writes ``direct_url.json`` (PEP 610) into the installed
    distribution's metadata. Its ``vcs_info.commit_id`` is the exact
    commit that was installed. Returns None when prmate was not
    installed from a VCS URL.
    """
    try:
        dist = metadata.distribution(distribution)
    except metadata.PackageNotFoundError:
        return None
    raw = dist.read_text("direct_url.json")
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring malformed direct_url.json")
        return None
    if not isinstance(data, dict):
        return None
    vcs_info = data.get("vcs_info")
    if not isinstance(vcs_info, dict):
        return None
    commit = vcs_info.get("commit_id")
    return commit if isinstance(commit, str) and commit else None


def _normalise_sha(value: str) -> Optional[str]:
    value = value.strip().lower()
    return value if _SHA_PATTERN.match(value) else None


@dataclass
class UpdateChecker:
    """Compare the installed prmate with the published one.

    Parameters
    ----------
    update_url : str
        URL answering with the SHA of the latest published commit, e.g.
        the GitHub ``commits/<branch>`` API endpoint.
    install_source : str
        pip requirement used to reinstall, e.g. a ``git+https://`` URL.
    request_timeout : float, optional
        Timeout in seconds for the request. Defaults to 10 seconds.
    installed_commit : str, optional
        Commit the running prmate was installed from. When omitted it is
        read from the installation metadata, then from the git checkout
        the package was loaded from.
    """

    update_url: str
    install_source: str
    request_timeout: float = 10.0
    installed_commit: Optional[str] = None

    def fetch_latest_commit(self) -> str:
        """Return the SHA of the latest published commit.

        Raises
        ------
        UpdateError
            If the request fails, the server does not answer with 200, or
            the answer is not a commit SHA.
        """
        logger.debug("Fetching latest prmate commit from %s", self.update_url)
        try:
            response = requests.get(
                self.update_url,
                headers={
                    "Accept": "application/vnd.github.sha",
                    "Cache-Control": "no-cache",
                },
                timeout=self.request_timeout,
            )
        except requests.RequestException as exc:
            logger.error("Failed to fetch latest version: %s", exc)
            raise UpdateError(str(exc)) from exc
        if response.status_code != 200:
            logger.error("Update server returned status %s", response.status_code)
            raise UpdateError(f"Update server returned status {response.status_code}")
        sha = _normalise_sha(response.text)
        if sha is None:
            raise UpdateError("Update server did not return a commit SHA")
        return sha

    def local_commit(self) -> str:
        candidates = (
            self.installed_commit,
            installed_commit_from_metadata(),
            get_git_head_sha(),
        )
        for candidate in candidates:
            sha = _normalise_sha(candidate) if candidate else None
            if sha:
                return sha
        raise UpdateError("Cannot determine which prmate commit is installed")

    def is_update_available(self) -> bool:
        """Return True if the published commit differs from the installed one."""
        latest = self.fetch_latest_commit()
        local = self.local_commit()
        logger.debug("Latest commit %s, installed commit %s", latest, local)
        # Either side may be an abbreviated SHA.
        return not (latest.startswith(local) or local.startswith(latest))

    def reinstall_command(self) -> List[str]:
        return [
            sys.executable,
            "-m",
            "pip",
            "install",
            "--upgrade",
            "--force-reinstall",
            self.install_source,
        ]

    def reinstall(self) -> None:
        """Reinstall prmate from :attr:`install_source`.

        Raises
        ------
        UpdateError
            If pip cannot be started or exits with a non-zero status.
        """
        cmd = self.reinstall_command()
        logger.debug("Executing: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except OSError as exc:
            raise UpdateError(f"Failed to run pip: {exc}") from exc
        if result.returncode != 0:
            logger.error("pip failed:\nSTDOUT: %s\nSTDERR: %s", result.stdout, result.stderr)
            raise UpdateError(result.stderr.strip() or "pip install failed")
