"""
Client for an OpenAI-compatible chat-completion API.

This client wraps HTTP requests to the ``/v1/chat/completions``
endpoint. Transport failures, non-success statuses and unparsable bodies
raise subclasses of :class:`LLMError`. A well-formed body that lacks the
message content yields :data:`PLACEHOLDER_MESSAGE` instead of an error.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import requests

from commit_crafter.config.loader import Config
from commit_crafter.llm.prompts import system_prompt, user_prompt


logger = logging.getLogger(__name__)
# Attach a null handler to avoid errors when the root logger is missing a
# stream. Messages will still propagate to the root logger if configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


PLACEHOLDER_MESSAGE = "Unable to retrieve the generated commit message"
TEMPERATURE = 0.7


class LLMError(Exception):
    """Raised when communication with the chat-completion API fails."""

    pass


class LLMNetworkError(LLMError):
    """Raised when the request could not be delivered."""

    pass


class LLMStatusError(LLMError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API returned status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class LLMResponseError(LLMError):
    """Raised when the response body is not a JSON object."""

    pass


def strip_thinking_tags(text: str) -> str:
    """Remove reasoning blocks such as ``<think>...</think>`` from ``text``.

    >>> strip_thinking_tags("<think>reasoning...</think>Answer")
    'Answer'
    """
    thinking_patterns = [
        r'<think>.*?</think>',
        r'<thinking>.*?</thinking>',
        r'<thought>.*?</thought>',
        r'<reasoning>.*?</reasoning>',
    ]

    result = text
    for pattern in thinking_patterns:
        result = re.sub(pattern, '', result, flags=re.DOTALL | re.IGNORECASE)
    return result.strip()


def _extract_content(data: Dict[str, Any]) -> Optional[str]:
    """Return ``choices[0].message.content`` or None if any step is missing."""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class OpenAIClient:
    """Generate commit messages through a chat-completion API.

    Parameters
    ----------
    config : Config
        API credentials, base URL, model and language.
    session : requests.Session, optional
        Session used for requests. A new one is created if omitted.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _endpoint(self) -> str:
        return f"{self.config.openai_url.rstrip('/')}/v1/chat/completions"

    def build_payload(self, diff: str, extra: Optional[str] = None) -> Dict[str, Any]:
        """Return the JSON body for a completion request."""
        language = self.config.user_language
        return {
            "model": self.config.openai_model,
            "messages": [
                {"role": "system", "content": system_prompt(language)},
                {"role": "user", "content": user_prompt(diff, extra, language)},
            ],
            "temperature": TEMPERATURE,
        }

    def generate(self, diff: str, extra: Optional[str] = None) -> str:
        """Draft a commit message for ``diff``.

        Parameters
        ----------
        diff : str
            The diff of the pending changes.
        extra : str, optional
            Additional guidance appended to the user instruction.

        Returns
        -------
        str
            The generated message, or :data:`PLACEHOLDER_MESSAGE` when the
            response does not carry one.

        Raises
        ------
        LLMNetworkError
            If the request fails at the network layer.
        LLMStatusError
            If the API answers with a non-success status.
        LLMResponseError
            If the response body is not a JSON object.
        """
        url = self._endpoint()
        payload = self.build_payload(diff, extra)
        headers = {
            "Authorization": f"Bearer {self.config.openai_api_key}",
            "Content-Type": "application/json",
        }
        logger.debug("Sending request to %s (model=%s, extra=%r)", url, self.config.openai_model, extra)
        try:
            response = self.session.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            logger.debug("Failed to reach the API: %s", exc)
            raise LLMNetworkError(f"API request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.debug("API returned status %s: %s", response.status_code, response.text)
            raise LLMStatusError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            logger.debug("Failed to parse API response: %s", exc)
            raise LLMResponseError(f"Failed to parse API response: {exc}") from exc
        if not isinstance(data, dict):
            raise LLMResponseError("Unexpected response structure from API")

        content = _extract_content(data)
        if content is None:
            logger.debug("API response has no message content: %s", data)
            return PLACEHOLDER_MESSAGE
        message = strip_thinking_tags(content)
        if not message:
            logger.debug("API response content is empty after cleanup: %r", content)
            return PLACEHOLDER_MESSAGE
        return message
