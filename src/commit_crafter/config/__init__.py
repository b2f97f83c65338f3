"""
Configuration loading for commit_crafter.

Provides a loader for the per-user ``config.toml`` file holding the
chat-completion API settings. See :mod:`commit_crafter.config.loader`
for implementation details.
"""

from .loader import (  # noqa: F401
    Config,
    ConfigDirectoryError,
    ConfigError,
    ConfigMalformedError,
    ConfigNotFoundError,
    ConfigUnreadableError,
    MissingKeyError,
    load_config,
)
