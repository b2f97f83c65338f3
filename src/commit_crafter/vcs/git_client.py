"""
Git client implementation for commit_crafter.

Git is the optional secondary tool: when the SVN working copy is also a
Git work tree, an accepted commit message can be mirrored into Git. All
subprocess calls go through :meth:`GitClient._run` so that unit tests can
mock them easily.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from commit_crafter.vcs.errors import ErrorKind, classify_error


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git work tree."""

    def __init__(self, working_dir: Optional[Path] = None) -> None:
        self.working_dir = working_dir or Path.cwd()

    # ------------------------------------------------------------------
    # Probes
    # ------------------------------------------------------------------
    @staticmethod
    def is_installed() -> bool:
        """Return True if ``git --version`` can be executed successfully."""
        try:
            result = subprocess.run(
                ["git", "--version"],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as exc:
            logger.debug("git executable not available: %s", exc)
            return False
        return result.returncode == 0

    def is_repository(self) -> bool:
        """Return True if git is installed and the working directory is a work tree."""
        if not self.is_installed():
            return False
        try:
            result = self._run(["rev-parse", "--is-inside-work-tree"], check=False)
        except GitError:
            return False
        return result.returncode == 0 and result.stdout.strip() == "true"

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the working directory.

        Raises
        ------
        GitError
            If git cannot be executed, or if the command exits with a
            non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.working_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.debug("Failed to execute Git command: %s", e)
            raise GitError(f"Failed to execute git {args[0]}: {e}") from e

        if check and result.returncode != 0:
            logger.debug(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Staging and committing
    # ------------------------------------------------------------------
    @staticmethod
    def _add_args(files: Sequence[str]) -> List[str]:
        return ["add"] + (list(files) if files else ["."])

    def add(self, files: Sequence[str] = ()) -> None:
        """Stage the given files, or every change when ``files`` is empty."""
        self._run(self._add_args(files), check=True)

    def commit(self, message: str) -> bool:
        """Create a commit with the given message.

        Returns
        -------
        bool
            True if a commit was created, False if Git reported that there
            was nothing to commit.

        Raises
        ------
        GitError
            If the commit fails for any other reason.
        """
        result = self._run(["commit", "-m", message], check=False)
        if result.returncode == 0:
            return True
        output = f"{result.stderr}\n{result.stdout}"
        if classify_error(output) is ErrorKind.NOTHING_TO_COMMIT:
            logger.debug("Git reported nothing to commit")
            return False
        logger.debug("Git commit failed: %s", output.strip())
        raise GitError(result.stderr.strip() or result.stdout.strip())

    @classmethod
    def add_command(cls, files: Sequence[str] = ()) -> str:
        """Return the shell command equivalent to :meth:`add`."""
        return shlex.join(["git"] + cls._add_args(files))

    @staticmethod
    def commit_command(message: str) -> str:
        """Return the shell command equivalent to :meth:`commit`."""
        return shlex.join(["git", "commit", "-m", message])
