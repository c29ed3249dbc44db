"""
Onboardly: the streaming AI assistant core of an employee-onboarding app.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import (
    ChatClient,
    ChatContext,
    ChatError,
    ChatMessage,
    ConversationSession,
    SSEStreamConsumer,
    UserSession,
)
from .relay import RelaySettings, create_app

__all__ = [
    "ChatClient",
    "ChatContext",
    "ChatError",
    "ChatMessage",
    "ConversationSession",
    "SSEStreamConsumer",
    "UserSession",
    "RelaySettings",
    "create_app",
]
