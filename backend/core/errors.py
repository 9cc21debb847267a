# Role: Error kinds for one chat turn. The API layer maps each to a status code;
# empty answers and malformed history entries are deliberately NOT errors (fallback text / silent drop).

from __future__ import annotations


class ChatError(Exception):
    status_code: int = 500


class ConfigurationError(ChatError):
    """Required provider credential is missing. Never retried."""

    status_code = 500


class MessageValidationError(ChatError):
    """The new user message is missing or empty. No provider call is attempted."""

    status_code = 400


class ProviderError(ChatError):
    """Any failure raised while invoking the remote provider."""

    status_code = 500
