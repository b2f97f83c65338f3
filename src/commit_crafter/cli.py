"""
Command line interface for the commit_crafter tool.

This module defines the ``main`` click group used as the entry point of
the ``commit-crafter`` command and its single ``commit`` subcommand. The
subcommand checks that Subversion is available, loads the configuration,
collects the diff of the selected paths and hands over to the
interactive :class:`~commit_crafter.commit_loop.CommitLoop`.

Handled failures are printed and end the command normally. Set
``COMMIT_CRAFTER_DEBUG=1`` to see debug logging.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

import click

from commit_crafter import __version__
from commit_crafter.commit_loop import CommitLoop, Outcome
from commit_crafter.config.loader import (
    EXAMPLE_CONFIG,
    Config,
    ConfigDirectoryError,
    ConfigError,
    ConfigNotFoundError,
    load_config,
)
from commit_crafter.llm.openai_client import OpenAIClient
from commit_crafter.output import ProgressIndicator, print_error
from commit_crafter.vcs.git_client import GitClient
from commit_crafter.vcs.svn_client import SVNClient, SVNError

# Create a module-level logger. Attach a null handler and disable
# propagation until the CLI configures logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


DEBUG_ENV_VAR = "COMMIT_CRAFTER_DEBUG"

SVN_INSTALL_HINTS = (
    "Ubuntu/Debian: sudo apt install subversion",
    "CentOS/RHEL:   sudo yum install subversion",
    "macOS:         brew install subversion",
)


def configure_logging() -> None:
    """Configure root logging and let package loggers propagate to it."""
    debug = bool(os.environ.get(DEBUG_ENV_VAR))
    # Use force=True so handlers are reconfigured on repeated invocations
    # (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )
    for name, candidate in logging.root.manager.loggerDict.items():
        if name.startswith("commit_crafter") and isinstance(candidate, logging.Logger):
            candidate.propagate = True


def check_svn_installed() -> bool:
    """Return True if svn is usable, printing install hints otherwise."""
    if SVNClient.is_installed():
        return True
    print_error("SVN is not installed")
    click.echo("Please install SVN first:")
    for hint in SVN_INSTALL_HINTS:
        click.echo(f"  {hint}")
    return False


def load_config_or_report() -> Optional[Config]:
    """Load the configuration, printing guidance and returning None on failure."""
    try:
        return load_config()
    except ConfigNotFoundError as exc:
        print_error(f"Configuration file not found: {exc.path}")
        click.echo("\nCreate the configuration file with the following content:")
        click.echo("```toml")
        click.echo(EXAMPLE_CONFIG.rstrip())
        click.echo("```")
    except ConfigDirectoryError as exc:
        print_error(str(exc))
        click.echo("The configuration file should be located at:")
        click.echo("  ~/.config/commit_crafter/config.toml")
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
    return None


def secondary_client() -> Optional[GitClient]:
    """Return a Git client if git is installed, else None."""
    if GitClient.is_installed():
        return GitClient()
    logger.debug("git not found; Git mirroring disabled")
    return None


def handle_commit(files: Tuple[str, ...]) -> Optional[Outcome]:
    """Run the whole commit flow for ``files``.

    Returns the loop outcome, or None when a precondition failed.
    """
    if not check_svn_installed():
        return None

    config = load_config_or_report()
    if config is None:
        return None

    svn = SVNClient()
    try:
        with ProgressIndicator("Collecting changes"):
            diff = svn.diff(files)
    except SVNError as exc:
        print_error(f"Failed to collect changes: {exc}")
        return None

    loop = CommitLoop(
        svn,
        OpenAIClient(config),
        git=secondary_client(),
        model=config.openai_model,
    )
    outcome = loop.run(diff, files)
    logger.debug("Commit loop finished: %s", outcome.value)
    return outcome


@click.group()
@click.version_option(version=__version__, prog_name="commit-crafter")
def main() -> None:
    """Draft SVN commit messages with a chat-completion API."""
    configure_logging()


@main.command()
@click.argument("files", nargs=-1, type=click.Path())
def commit(files: Tuple[str, ...]) -> None:
    """Generate a commit message for FILES (all changes if omitted)."""
    try:
        handle_commit(files)
    except (click.exceptions.Exit, click.Abort):
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        click.get_current_context().exit(1)
