"""
Configuration loader for commit_crafter.

The tool expects a TOML configuration file named ``config.toml`` located
in the ``~/.config/commit_crafter/`` directory in the user's home
directory. This loader validates the structure of the configuration and
returns an immutable :class:`Config` holding the settings used to reach
an OpenAI-compatible chat-completion API.

Each failure mode raises its own subclass of :class:`ConfigError` so that
the CLI can print matching guidance.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging has not been configured. The CLI re-enables propagation
# when it sets up logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILE_NAME = "config.toml"

DEFAULT_URL = "https://api.openai.com"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_LANGUAGE = "en"

EXAMPLE_CONFIG = """\
openai_api_key = "your-api-key"
openai_url = "https://api.openai.com"
openai_model = "gpt-3.5-turbo"
user_language = "en"
"""


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""

    pass


class ConfigDirectoryError(ConfigError):
    """Raised when the configuration directory cannot be determined."""

    pass


class ConfigNotFoundError(ConfigError):
    """Raised when ``config.toml`` does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file not found: {path}")
        self.path = path


class ConfigUnreadableError(ConfigError):
    """Raised when ``config.toml`` exists but cannot be read."""

    pass


class ConfigMalformedError(ConfigError):
    """Raised when ``config.toml`` is not valid TOML or has bad field types."""

    pass


class MissingKeyError(ConfigError):
    """Raised when the API key is absent or empty."""

    pass


@dataclass(frozen=True)
class Config:
    """Settings for the chat-completion API.

    Parameters
    ----------
    openai_api_key : str
        Bearer token sent with every request.
    openai_url : str
        Base URL of the API, without the ``/v1/chat/completions`` suffix.
    openai_model : str
        Model identifier, e.g. ``"gpt-3.5-turbo"``.
    user_language : str
        Language code used to pick the system prompt.
    request_timeout : float, optional
        Timeout in seconds for HTTP requests. ``None`` waits indefinitely.
    """

    openai_api_key: str
    openai_url: str = DEFAULT_URL
    openai_model: str = DEFAULT_MODEL
    user_language: str = DEFAULT_LANGUAGE
    request_timeout: Optional[float] = None

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        return (
            f"Config(openai_url={self.openai_url!r}, openai_model={self.openai_model!r}, "
            f"user_language={self.user_language!r}, request_timeout={self.request_timeout!r})"
        )


def _get_config_directory() -> Path:
    """Return ``~/.config/commit_crafter``, creating it if needed.

    Raises
    ------
    ConfigDirectoryError
        If the home directory cannot be resolved or the directory cannot
        be created.
    """
    try:
        home = Path.home()
    except RuntimeError as exc:
        logger.debug("Unable to resolve home directory: %s", exc)
        raise ConfigDirectoryError("Unable to determine the configuration directory") from exc

    config_dir = home / ".config" / "commit_crafter"
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("Failed to create configuration directory %s: %s", config_dir, exc)
        raise ConfigDirectoryError(
            f"Unable to create the configuration directory {config_dir}: {exc}"
        ) from exc
    return config_dir


def config_file_path() -> Path:
    """Return the path of the configuration file."""
    return _get_config_directory() / CONFIG_FILE_NAME


def _string_field(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigMalformedError(f"'{key}' must be a string")
    return value


def load_config() -> Config:
    """Load the configuration from the user's config directory and return it.

    Returns
    -------
    Config
        The validated configuration.

    Raises
    ------
    ConfigDirectoryError
        If the configuration directory cannot be determined or created.
    ConfigNotFoundError
        If ``config.toml`` does not exist.
    ConfigUnreadableError
        If the file cannot be read.
    ConfigMalformedError
        If the file is not valid TOML or a field has the wrong type.
    MissingKeyError
        If ``openai_api_key`` is missing or empty.
    """
    config_path = config_file_path()

    if not config_path.exists():
        logger.debug("Configuration file '%s' does not exist", config_path)
        raise ConfigNotFoundError(config_path)

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to read configuration file: %s", exc)
        raise ConfigUnreadableError(f"Failed to read {config_path}: {exc}") from exc

    try:
        data: Dict[str, Any] = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        logger.debug("Failed to parse configuration file: %s", exc)
        raise ConfigMalformedError(f"Invalid TOML in {config_path.name}: {exc}") from exc

    api_key = data.get("openai_api_key", "")
    if not isinstance(api_key, str):
        raise ConfigMalformedError("'openai_api_key' must be a string")
    if not api_key.strip():
        logger.debug("Configuration file has no API key")
        raise MissingKeyError("'openai_api_key' is not set")

    timeout = data.get("request_timeout")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        raise ConfigMalformedError("'request_timeout' must be a number")

    config = Config(
        openai_api_key=api_key,
        openai_url=_string_field(data, "openai_url", DEFAULT_URL),
        openai_model=_string_field(data, "openai_model", DEFAULT_MODEL),
        user_language=_string_field(data, "user_language", DEFAULT_LANGUAGE),
        request_timeout=float(timeout) if timeout is not None else None,
    )
    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %r", config)
    return config
