"""
Conversion of git remote URLs into repository web URLs.

Both remote syntaxes are supported::

    git@github.com:org/repo.git        -> https://github.com/org/repo
    ssh://git@github.com:22/org/repo   -> https://github.com/org/repo
    https://user@github.com/org/repo   -> https://github.com/org/repo
    git@gitlab.com:grp/sub/repo.git    -> https://gitlab.com/grp/sub/repo
"""

from __future__ import annotations

import re


class RemoteURLError(ValueError):
    """Raised when a remote URL cannot be turned into a web URL."""

    pass


# scp-like syntax: [user@]host:org/repo
_SCP_PATTERN = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")

# URL syntax: scheme://[user[:password]@]host[:port]/org/repo
_URL_PATTERN = re.compile(
    r"^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[^:/]+)(?::\d+)?/(?P<path>.+)$"
)


def _split_path(path: str):
    """Return ``(namespace, repo)`` or None.

    The repository is the last path segment. Everything before it is the
    namespace, which may be nested (GitLab subgroups: ``grp/sub/repo``).
    """
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = [part for part in path.split("/") if part]
    if len(parts) < 2:
        return None
    return "/".join(parts[:-1]), parts[-1]


def repo_web_url(remote_url: str) -> str:
    """Normalise ``remote_url`` into ``https://<host>/<namespace>/<repo>``.

    Raises
    ------
    RemoteURLError
        If the URL is in neither the SSH nor the HTTPS syntax or does not
        name an organisation and a repository.
    """
    url = remote_url.strip()
    match = _URL_PATTERN.match(url) or _SCP_PATTERN.match(url)
    if match is None:
        raise RemoteURLError(f"Unsupported remote URL: {remote_url!r}")

    parts = _split_path(match.group("path"))
    if parts is None:
        raise RemoteURLError(f"Remote URL does not name an organisation and repository: {remote_url!r}")

    namespace, repo = parts
    return f"https://{match.group('host')}/{namespace}/{repo}"
