"""
Subversion (SVN) client implementation for commit_crafter.

SVN is the primary version-control tool: its diff seeds message
generation and its commit is the authoritative one. This module provides
a thin wrapper around the few ``svn`` command line operations the commit
assistant needs.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from commit_crafter.vcs.errors import ErrorKind, classify_error


logger = logging.getLogger(__name__)
# Attach a null handler to prevent logging errors when no root handlers are
# configured. Logs will still propagate to the root logger when available.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class SVNError(Exception):
    """Raised when an SVN command fails."""

    pass


class SVNClient:
    """Client for interacting with an SVN working copy.

    Parameters
    ----------
    working_dir : Path, optional
        Directory the commands run in. Defaults to the current directory,
        so that file selectors given on the command line resolve the same
        way they would for a plain ``svn`` invocation.
    """

    def __init__(self, working_dir: Optional[Path] = None) -> None:
        self.working_dir = working_dir or Path.cwd()

    @staticmethod
    def is_installed() -> bool:
        """Return True if ``svn --version`` can be executed successfully."""
        try:
            result = subprocess.run(
                ["svn", "--version", "--quiet"],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as exc:
            logger.debug("svn executable not available: %s", exc)
            return False
        return result.returncode == 0

    # Internal helper to run SVN commands
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        full_cmd = ["svn"] + args
        logger.debug("Executing SVN command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.working_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.debug("Failed to execute SVN command: %s", e)
            raise SVNError(f"Failed to execute svn {args[0]}: {e}") from e

        if check and result.returncode != 0:
            logger.debug(
                "SVN command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise SVNError(result.stderr.strip() or result.stdout.strip())
        return result

    def _run_interactive(self, args: List[str]) -> int:
        """Run an SVN command attached to the controlling terminal."""
        full_cmd = ["svn"] + args
        logger.debug("Executing interactive SVN command: %s", " ".join(full_cmd))
        try:
            completed = subprocess.run(full_cmd, cwd=self.working_dir)
        except OSError as e:
            logger.debug("Failed to execute SVN command: %s", e)
            raise SVNError(f"Failed to execute svn {args[0]}: {e}") from e
        return completed.returncode

    # ------------------------------------------------------------------
    # Diff and commit
    # ------------------------------------------------------------------
    def diff(self, files: Sequence[str] = ()) -> str:
        """Return the unified diff of the working copy.

        Parameters
        ----------
        files : Sequence[str]
            Paths restricting the diff. An empty selector diffs every change.

        Returns
        -------
        str
            The diff text. An empty string means there is nothing to commit.

        Raises
        ------
        SVNError
            If ``svn`` cannot be executed or exits with a non-zero status.
        """
        result = self._run(["diff"] + list(files), check=True)
        return result.stdout

    @staticmethod
    def _commit_args(message: str, files: Sequence[str]) -> List[str]:
        return ["commit", "-m", message] + list(files)

    def commit(self, message: str, files: Sequence[str] = ()) -> None:
        """Commit the selected files (or all changes) with ``message``.

        When the non-interactive attempt fails because SVN needs a
        password, the command is re-run attached to the terminal so the
        user can type the credential directly to ``svn``.

        Raises
        ------
        SVNError
            If the commit fails.
        """
        args = self._commit_args(message, files)
        result = self._run(args, check=False)
        if result.returncode == 0:
            return

        error = result.stderr.strip() or result.stdout.strip()
        if classify_error(error) is ErrorKind.AUTH_REQUIRED:
            logger.warning("SVN requires a password; switching to interactive mode")
            if self._run_interactive(args) != 0:
                raise SVNError("Commit failed, check that the password is correct")
            return

        logger.debug("SVN commit failed: %s", error)
        raise SVNError(error)

    @classmethod
    def commit_command(cls, message: str, files: Sequence[str] = ()) -> str:
        """Return the shell command equivalent to :meth:`commit`."""
        return shlex.join(["svn"] + cls._commit_args(message, files))
