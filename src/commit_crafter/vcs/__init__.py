"""
Version control system (VCS) integrations.

This package contains the clients for the primary tool (Subversion) and
the optional secondary tool (Git). Each client exposes probes for tool
availability, the commands needed to commit, and their printable shell
equivalents.
"""

from .errors import ErrorKind, classify_error  # noqa: F401
from .git_client import GitClient, GitError  # noqa: F401
from .svn_client import SVNClient, SVNError  # noqa: F401
