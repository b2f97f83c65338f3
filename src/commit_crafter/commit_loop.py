"""
Interactive review loop for generated commit messages.

The loop is an explicit state machine::

    GENERATING -> AWAITING_CHOICE -> COMMITTING | SHOWING_COMMAND | REGENERATING | EXITING
    REGENERATING -> GENERATING

Each step reads at most one line of input and maps it to the next state.
Collaborators (SVN client, message generator, optional Git client and
the input function) are injected so the loop can be driven in tests.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

import click

from commit_crafter.llm.openai_client import LLMError
from commit_crafter.output import (
    print_command,
    print_error,
    print_info,
    print_message_box,
    print_success,
    print_warning,
)
from commit_crafter.vcs.git_client import GitError
from commit_crafter.vcs.svn_client import SVNClient, SVNError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


Prompt = Callable[[str], str]


class LoopState(Enum):
    GENERATING = "generating"
    AWAITING_CHOICE = "awaiting_choice"
    COMMITTING = "committing"
    SHOWING_COMMAND = "showing_command"
    REGENERATING = "regenerating"
    EXITING = "exiting"


class Outcome(Enum):
    """How a run of the loop ended."""

    NO_CHANGES = "no_changes"
    GENERATION_FAILED = "generation_failed"
    COMMITTED = "committed"
    COMMIT_FAILED = "commit_failed"
    SHOWN = "shown"
    EXITED = "exited"


_CHOICES = {
    "y": LoopState.COMMITTING,
    "s": LoopState.SHOWING_COMMAND,
    "r": LoopState.REGENERATING,
    "n": LoopState.EXITING,
}

MENU = (
    "\nOptions:\n"
    "  1. Use this message and commit [y]\n"
    "  2. Show the commit command [s]\n"
    "  3. Regenerate [r]\n"
    "  4. Exit [n]"
)


def first_token(line: Optional[str]) -> str:
    """Return the lower-cased first word of ``line``, or ``""``."""
    parts = (line or "").strip().lower().split()
    return parts[0] if parts else ""


def parse_choice(line: Optional[str]) -> Optional[LoopState]:
    """Map a menu answer to the next state.

    Empty input accepts the message. Unknown answers return None.
    """
    return _CHOICES.get(first_token(line) or "y")


def default_prompt(text: str) -> str:
    """Read one line from the terminal; an empty answer returns ``""``."""
    return click.prompt(text, default="", show_default=False)


class CommitLoop:
    """Drive the review of a generated message and the resulting commit.

    Parameters
    ----------
    svn : SVNClient
        Primary client; performs the authoritative commit.
    generator
        Object with ``generate(diff, extra) -> str``, normally an
        :class:`~commit_crafter.llm.openai_client.OpenAIClient`.
    git : GitClient, optional
        Secondary client. When given and the working directory is a Git
        work tree, the user may mirror the commit into Git.
    model : str
        Model name displayed next to the generated message.
    prompt : callable
        Reads one line of user input for the given prompt text.
    """

    def __init__(self, svn, generator, git=None, model: str = "", prompt: Prompt = default_prompt) -> None:
        self.svn = svn
        self.generator = generator
        self.git = git
        self.model = model
        self.prompt = prompt

    def run(self, diff: str, files: Sequence[str] = ()) -> Outcome:
        """Run the loop for ``diff`` and return how it ended."""
        if not diff.strip():
            print_info("No changes detected")
            return Outcome.NO_CHANGES

        files = list(files)
        extra: Optional[str] = None
        message = ""
        state = LoopState.GENERATING

        while True:
            logger.debug("Commit loop state: %s", state.value)

            if state is LoopState.GENERATING:
                click.echo("Generating commit message...")
                try:
                    message = self.generator.generate(diff, extra)
                except LLMError as exc:
                    print_error(f"Failed to generate commit message: {exc}")
                    return Outcome.GENERATION_FAILED
                state = LoopState.AWAITING_CHOICE

            elif state is LoopState.AWAITING_CHOICE:
                print_message_box(message, self.model)
                click.echo(MENU)
                answer = self.prompt("Choose [Y/s/r/n]")
                next_state = parse_choice(answer)
                if next_state is None:
                    print_warning("Invalid choice, please try again")
                    continue
                state = next_state

            elif state is LoopState.REGENERATING:
                answer = self.prompt("\nEnter an extra instruction (optional, press Enter to skip)")
                extra = answer.strip() or None
                state = LoopState.GENERATING

            elif state is LoopState.SHOWING_COMMAND:
                click.echo("\nCommit with the following command:")
                print_command(SVNClient.commit_command(message, files))
                return Outcome.SHOWN

            elif state is LoopState.EXITING:
                print_info("Exited")
                return Outcome.EXITED

            elif state is LoopState.COMMITTING:
                return self._commit(message, files)

    def _commit(self, message: str, files: List[str]) -> Outcome:
        click.echo("\nCommitting...")
        try:
            self.svn.commit(message, files)
        except SVNError as exc:
            print_error(f"Commit failed: {exc}")
            click.echo("\nYou can run the following command manually:")
            print_command(SVNClient.commit_command(message, files))
            return Outcome.COMMIT_FAILED

        print_success("SVN commit succeeded!")
        if self.git is None:
            return Outcome.COMMITTED
        if self.git.is_repository():
            self._mirror_to_git(message, files)
        else:
            logger.debug("Not a Git work tree; Git mirroring skipped")
        return Outcome.COMMITTED

    def _mirror_to_git(self, message: str, files: List[str]) -> None:
        """Ask for confirmation and repeat the commit in Git.

        A Git failure is only reported; the SVN commit stands.
        """
        click.echo("\nGit repository detected.")
        click.echo("The following commands will be run:")
        print_command(self.git.add_command(files))
        print_command(self.git.commit_command(message))

        answer = first_token(self.prompt("\nCommit to Git as well? [Y/n]"))
        if answer == "n":
            print_info("Git commit cancelled")
            return
        if answer not in ("", "y"):
            print_warning("Invalid choice, Git commit cancelled")
            return

        click.echo("Committing to Git...")
        try:
            self.git.add(files)
            created = self.git.commit(message)
        except GitError as exc:
            print_warning(f"Git commit failed: {exc}")
            return
        if created:
            print_success("Git commit succeeded!")
        else:
            print_info("Nothing to commit in the Git repository")
