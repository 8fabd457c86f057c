"""
Command line interface for prmate.

This module defines the ``main`` function used as the entry point of the
``prmate`` command. It checks the prerequisites, loads the configuration,
optionally updates prmate, collects the commits of the current branch
that are not on the target branch, renders the pull-request description
and finally hands it to ``gh pr create`` (or prints it with
``--dry-run``).
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from prmate import __version__
from prmate.config.loader import ConfigError, load_config
from prmate.formatting.pr_document import build_pr_body
from prmate.grouping.group_model import Commit
from prmate.update.update_checker import UpdateChecker, UpdateError
from prmate.vcs.git_client import GitClient, GitError, TargetRef
from prmate.vcs.github_cli import GitHubCLI, GitHubCLIError
from prmate.vcs.remote_url import RemoteURLError, repo_web_url

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests). ``main`` re-enables propagation for
# every prmate logger while a command runs.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_PRECONDITION_FAILED = 1
EXIT_PR_CREATION_FAILED = 1

TOTAL_STEPS = 6


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.time() - self.start_time
        if exc_type is None:
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        else:
            click.echo(f"  ✗ Failed ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def fail(message: str, code: int = EXIT_PRECONDITION_FAILED) -> click.exceptions.Exit:
    """Print ``message`` as an error and return the matching Exit to raise."""
    print_error(message)
    return click.exceptions.Exit(code)


def set_package_log_propagation(enabled: bool) -> None:
    """Let prmate's module loggers reach the root logger, or detach them.

    Module loggers are created detached (null handler, no propagation).
    ``main`` attaches them for the duration of a command so ``--verbose``
    shows their debug records.
    """
    for candidate in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(candidate, logging.Logger) and candidate.name.startswith("prmate."):
            candidate.propagate = enabled


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def make_update_checker(config: Dict[str, Any]) -> UpdateChecker:
    return UpdateChecker(
        update_url=config["update_url"],
        install_source=config["install_source"],
        request_timeout=float(config["request_timeout"]),
    )


def reinstall_prmate(config: Dict[str, Any]) -> None:
    """Reinstall prmate from the configured source.

    Raises
    ------
    click.exceptions.Exit
        With EXIT_GENERIC_ERROR if pip fails.
    """
    checker = make_update_checker(config)
    try:
        with ProgressIndicator("Fetching the latest version of prmate"):
            checker.reinstall()
    except UpdateError as exc:
        raise fail(f"Reinstall failed: {exc}", EXIT_GENERIC_ERROR)
    print_success("prmate has been reinstalled successfully!")


def check_for_updates(config: Dict[str, Any]) -> None:
    """Offer to update prmate when a newer version is published.

    A failing check is reported as a warning and never stops the run.
    Accepting the update reinstalls prmate and exits.
    """
    checker = make_update_checker(config)
    try:
        with ProgressIndicator("Checking for updates"):
            available = checker.is_update_available()
    except UpdateError as exc:
        print_warning(f"Could not check for updates: {exc}")
        return

    if not available:
        print_success("prmate is up to date.")
        return

    print_info("A new version of prmate is available!")
    if click.confirm("   Do you want to update now?", default=False):
        reinstall_prmate(config)
        raise click.exceptions.Exit(EXIT_SUCCESS)
    print_warning("Skipping update. You can update later with --reinstall.")


def check_prerequisites(dry_run: bool, start_dir: Path) -> Tuple[GitClient, str]:
    """Verify the external tools, the repository and the current branch.

    Returns
    -------
    Tuple[GitClient, str]
        A client for the repository and the name of the current branch.

    Raises
    ------
    click.exceptions.Exit
        With EXIT_PRECONDITION_FAILED if anything required is missing.
    """
    if not GitClient.is_available():
        print_info("Install it from: https://git-scm.com/", indent=1)
        raise fail("Git CLI is not installed.")
    print_success("Git CLI found")

    # A preview never talks to GitHub
    if not dry_run:
        if not GitHubCLI.is_available():
            print_info("Install it from: https://cli.github.com/", indent=1)
            raise fail("GitHub CLI (gh) is not installed.")
        print_success("GitHub CLI found")

    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        raise fail("Current directory is not inside a Git repository.")
    print_success(f"Found Git repository at: {repo_root}")

    client = GitClient(repo_root)
    try:
        branch = client.get_current_branch()
    except GitError as exc:
        raise fail(f"Could not determine the current branch: {exc}")
    if not client.branch_exists(branch):
        raise fail(f"Branch '{branch}' does not exist.")
    print_info(f"Current branch: {click.style(branch, fg='cyan', bold=True)}")
    return client, branch


def collect_pr_details(
    config: Dict[str, Any],
    dry_run: bool,
    title: Optional[str],
    task_link: Optional[str],
) -> Tuple[str, str]:
    """Return the PR title and task link, prompting for what is missing.

    A dry run never prompts and falls back to the configured
    placeholders.
    """
    tracker = config["task_tracker"]
    if dry_run:
        return (
            title or config["dry_run_title"],
            task_link or config["dry_run_task_link"],
        )
    if not title:
        title = click.prompt(f"   Enter {tracker} Title", type=str).strip()
    if not task_link:
        task_link = click.prompt(f"   Enter {tracker} Task Link", type=str).strip()
    return title, task_link


def collect_commits(client: GitClient, branch: str, target: TargetRef) -> List[Commit]:
    """Return the commits on ``branch`` that are not on ``target``.

    Raises
    ------
    click.exceptions.Exit
        With EXIT_PRECONDITION_FAILED if git fails or there are no commits.
    """
    print_info(f"Comparing changes between '{branch}' and '{target.ref}'")
    try:
        with ProgressIndicator("Reading commits"):
            commits = client.get_commits(target.ref, branch)
    except GitError as exc:
        raise fail(f"Failed to read commits: {exc}")

    if not commits:
        raise fail(f"No new commits to create a PR from branch '{branch}' to '{target.ref}'.")
    print_success(f"Found {len(commits)} commit{'s' if len(commits) != 1 else ''} to include in the PR")
    for commit in commits[:5]:
        print_info(f"{commit.hash} {commit.subject}", indent=1)
    if len(commits) > 5:
        print_info(f"... and {len(commits) - 5} more", indent=1)
    return commits


@click.command()
@click.option("-b", "--target-branch", "target_branch", default=None,
              help="Branch the PR is opened against (default: from config, 'develop').")
@click.option("--dry-run", is_flag=True, help="Print the PR description instead of creating the PR.")
@click.option("--draft", is_flag=True, help="Open the pull request as a draft.")
@click.option("--title", default=None, help="PR title (prompted for if omitted).")
@click.option("--task-link", default=None, help="Task link placed in the PR description (prompted for if omitted).")
@click.option("--reinstall", is_flag=True, help="Reinstall prmate to update to the latest version.")
@click.option("--no-update-check", is_flag=True, help="Skip the check for a newer prmate.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="prmate")
def main(
    target_branch: Optional[str],
    dry_run: bool,
    draft: bool,
    title: Optional[str],
    task_link: Optional[str],
    reinstall: bool,
    no_update_check: bool,
    verbose: bool,
) -> None:
    """🤝 Create a pull request whose description groups your commits.

    Commits are grouped by Conventional Commit scope, breaking changes are
    listed first, and every entry links back to its commit.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    set_package_log_propagation(True)

    click.echo("\n" + "="*60)
    click.echo("🤝 PRMate".center(60))
    click.echo("="*60)

    ctx = click.get_current_context(silent=True)
    current_step = 0

    try:
        # Step 1: Load configuration
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Loading Configuration")
        try:
            config = load_config()
        except ConfigError as exc:
            raise fail(f"Configuration error: {exc}")
        print_success("Configuration loaded")

        if reinstall:
            reinstall_prmate(config)
            raise click.exceptions.Exit(EXIT_SUCCESS)

        target_branch = target_branch or config["target_branch"]
        print_info(f"Target branch: {target_branch}", indent=1)

        # Step 2: Prerequisites
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Checking Prerequisites")
        client, branch = check_prerequisites(dry_run, Path.cwd())

        # Step 3: Updates
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Checking for Updates")
        if dry_run or no_update_check or not config["check_for_updates"]:
            print_info("Update check skipped")
        else:
            check_for_updates(config)

        # Step 4: Commits
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Collecting Commits")
        try:
            target = client.resolve_target_ref(target_branch, config["remote"])
        except GitError as exc:
            raise fail(str(exc))
        if not target.is_remote:
            print_warning(f"'{config['remote']}/{target_branch}' not found. Using local '{target_branch}' branch.")

        commits = collect_commits(client, branch, target)

        try:
            base_url = repo_web_url(client.get_remote_url(config["remote"]))
        except (GitError, RemoteURLError) as exc:
            raise fail(f"Could not determine the repository URL: {exc}")
        logger.debug("Repository web URL: %s", base_url)

        # Step 5: PR details
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Pull Request Details")
        pr_title, pr_task_link = collect_pr_details(config, dry_run, title, task_link)
        print_info(f"Title: {pr_title}", indent=1)

        # Step 6: Description and PR
        current_step += 1
        print_step(current_step, TOTAL_STEPS, "Creating Pull Request" if not dry_run else "Previewing Pull Request")
        body = build_pr_body(
            commits,
            base_url,
            pr_task_link,
            task_tracker=config["task_tracker"],
            test_command=config["test_command"],
        )

        if dry_run:
            click.echo("\n## PR Body Preview\n")
            click.echo(body)
            raise click.exceptions.Exit(EXIT_SUCCESS)

        github = GitHubCLI(client.repo_root)
        try:
            with ProgressIndicator(f"Creating PR from branch '{branch}'"):
                pr_url = github.create_pull_request(
                    pr_title,
                    body,
                    head=branch,
                    base=target_branch,
                    draft=draft,
                )
        except GitHubCLIError as exc:
            print_error(f"Failed to create pull request: {exc}")
            print_info("The generated description was:")
            click.echo(body)
            raise click.exceptions.Exit(EXIT_PR_CREATION_FAILED)

        print_success(f"Pull request created successfully from '{branch}'!")
        if pr_url:
            print_info(pr_url, indent=1)
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except click.exceptions.Abort:
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
    finally:
        set_package_log_propagation(False)
