"""Errors surfaced by the chat client.

Each error carries a message suitable for showing to the user. All of them
are scoped to a single send; none is fatal to the process.
"""

from typing import Any


class ChatError(Exception):
    """Base class for chat client failures."""

    default_message = "Failed to get AI response"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(ChatError):
    default_message = "You must be logged in to use this feature."


class ValidationError(ChatError):
    """Message list rejected before any network call."""

    default_message = "Invalid message."


class RateLimitError(ChatError):
    default_message = "Rate limit exceeded. Please wait a moment and try again."


class QuotaError(ChatError):
    default_message = "AI usage limit reached. Please try again later."


class GatewayError(ChatError):
    default_message = "Failed to get AI response"


class NetworkError(ChatError):
    default_message = "Connection to the assistant was lost. Please try again."


class ChatBusyError(ChatError):
    default_message = "Please wait for the current response to finish."


def error_for_status(status_code: int, body: Any = None) -> ChatError:
    """Map a non-2xx relay response to a chat error.

    Args:
        status_code: HTTP status returned by the relay
        body: Decoded JSON body, if any

    Returns:
        The matching ChatError subclass instance
    """
    if status_code == 429:
        return RateLimitError(status_code=status_code)
    if status_code == 402:
        return QuotaError(status_code=status_code)

    detail = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        detail = body["error"]

    if status_code == 401:
        return AuthenticationError(status_code=status_code)
    if status_code == 400:
        return ValidationError(detail, status_code=status_code)
    return GatewayError(detail, status_code=status_code)
