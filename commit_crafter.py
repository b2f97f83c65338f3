#!/usr/bin/env python
"""
Thin wrapper script to invoke the commit_crafter CLI.

Running ``python commit_crafter.py commit`` is equivalent to running
the ``commit-crafter commit`` console script installed via
``pyproject.toml``.
"""

from commit_crafter.cli import main


if __name__ == "__main__":
    main(prog_name="commit-crafter")
