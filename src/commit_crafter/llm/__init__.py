"""
Language model integration for commit_crafter.

This package contains the prompt texts and the :class:`OpenAIClient`
which sends a diff to an OpenAI-compatible chat-completion API and
returns the drafted commit message.
"""

from .openai_client import (  # noqa: F401
    LLMError,
    LLMNetworkError,
    LLMResponseError,
    LLMStatusError,
    OpenAIClient,
    PLACEHOLDER_MESSAGE,
)
from .prompts import system_prompt, user_prompt  # noqa: F401
