"""
Dynamic version generation for prmate.

The version is composed of:
- Major version: set by hand in ``prmate/__init__.py``
- Minor version: the highest ``v{major}.{minor}`` release tag
- Local part: the short SHA of the checkout prmate was loaded from

Format: ``{major}.{minor}.dev0+g{sha}`` (PEP 440 development release)
Example: ``1.3.dev0+ga1b2c3d``
"""

import subprocess
from pathlib import Path
from typing import List, Optional


def _package_checkout() -> Path:
    """Return the directory git commands run in by default.

    The version describes prmate itself, not the repository the user
    happens to run it from, so the package's own directory is used.
    """
    return Path(__file__).resolve().parent


def _git_output(args: List[str], repo_path: Optional[Path] = None) -> Optional[str]:
    """Run a git command and return its stripped stdout, or None on failure."""
    cwd = repo_path or _package_checkout()
    try:
        result = subprocess.run(
            ["git", "-C", str(cwd)] + args,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return result.stdout.strip()


def get_git_commit_sha(repo_path: Optional[Path] = None) -> str:
    """
    Get the short commit SHA of HEAD.

    Returns:
        Short commit SHA (7 characters) or ``'unknown'`` outside a checkout.
    """
    sha = _git_output(["rev-parse", "--short=7", "HEAD"], repo_path)
    return sha or "unknown"


def get_git_head_sha(repo_path: Optional[Path] = None) -> Optional[str]:
    """Return the full SHA of HEAD, or None outside a checkout."""
    return _git_output(["rev-parse", "HEAD"], repo_path) or None


def get_minor_version_from_tags(repo_path: Optional[Path] = None) -> int:
    """
    Return the highest minor number among ``v{major}.{minor}`` tags.

    Tags that do not follow the pattern are ignored. Returns 0 when no
    usable tag exists.
    """
    output = _git_output(["tag", "-l", "v*"], repo_path)
    if not output:
        return 0

    minor_versions = []
    for tag in output.splitlines():
        parts = tag.strip()[1:].split(".")
        if len(parts) < 2:
            continue
        try:
            minor_versions.append(int(parts[1]))
        except ValueError:
            continue

    return max(minor_versions) if minor_versions else 0


def generate_version(base_version: str, repo_path: Optional[Path] = None) -> str:
    """
    Generate the full PEP 440 version string.

    Args:
        base_version: The major version (e.g. ``"1"``).
        repo_path: Checkout to inspect. Defaults to the package directory.
    """
    minor = get_minor_version_from_tags(repo_path)
    commit_sha = get_git_commit_sha(repo_path)
    if commit_sha == "unknown":
        return f"{base_version}.{minor}.dev0"
    return f"{base_version}.{minor}.dev0+g{commit_sha}"
