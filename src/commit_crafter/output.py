"""
User-facing output helpers.

Everything the user sees goes through :func:`click.echo` so that the CLI
can be exercised with :class:`click.testing.CliRunner`. Errors are
written to stderr, everything else to stdout.
"""

from __future__ import annotations

import time

import click


RULE_WIDTH = 50


class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str) -> None:
        self.message = message
        self.start_time = 0.0

    def __enter__(self) -> "ProgressIndicator":
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_info(message: str, indent: int = 0) -> None:
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0) -> None:
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0) -> None:
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0) -> None:
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


def print_command(command: str) -> None:
    """Print a shell command the user can copy."""
    click.echo(f"  {click.style(command, fg='cyan')}")


def print_message_box(message: str, model: str) -> None:
    """Print a generated commit message between two rules."""
    click.echo(f"\nGenerated commit message (model: {model}):")
    click.echo("-" * RULE_WIDTH)
    click.echo(message)
    click.echo("-" * RULE_WIDTH)
