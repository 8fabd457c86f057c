"""
Version control and hosting integrations.

This package contains the :class:`GitClient` used to read branches and
commits, the helpers that turn a remote URL into a repository web URL,
and the :class:`GitHubCLI` wrapper that opens pull requests.
"""

from .git_client import GitClient, GitError, TargetRef  # noqa: F401
from .github_cli import GitHubCLI, GitHubCLIError  # noqa: F401
from .remote_url import RemoteURLError, repo_web_url  # noqa: F401
