"""Streaming chat client module for onboardly.

Turns the relay's server-sent event stream into a live-updating
assistant message inside an ephemeral conversation.
"""

from .client import ChatClient, validate_outgoing
from .errors import (
    AuthenticationError,
    ChatBusyError,
    ChatError,
    GatewayError,
    NetworkError,
    QuotaError,
    RateLimitError,
    ValidationError,
    error_for_status,
)
from .models import (
    MAX_CONTENT_LENGTH,
    MAX_MESSAGES,
    ChatContext,
    ChatMessage,
    ConversationSession,
    StreamFrame,
    UserSession,
)
from .sse import SSEStreamConsumer

__all__ = [
    "ChatClient",
    "validate_outgoing",
    "AuthenticationError",
    "ChatBusyError",
    "ChatError",
    "GatewayError",
    "NetworkError",
    "QuotaError",
    "RateLimitError",
    "ValidationError",
    "error_for_status",
    "MAX_CONTENT_LENGTH",
    "MAX_MESSAGES",
    "ChatContext",
    "ChatMessage",
    "ConversationSession",
    "StreamFrame",
    "UserSession",
    "SSEStreamConsumer",
]
