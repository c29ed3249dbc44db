"""Moderated completion relay.

A single parameterized relay that authenticates the caller, bounds the
conversation, injects a system prompt and streams the completion back
as server-sent events.
"""

from .app import create_app
from .auth import SessionVerifier, StaticTokenVerifier, SupabaseSessionVerifier, extract_bearer
from .gateway import (
    CompletionGateway,
    GatewayStream,
    HTTPCompletionGateway,
    ProviderCompletionGateway,
    encode_frame,
    gateway_error,
)
from .models import InboundMessage, RelayError, RelaySettings, SafeContext, VerifiedUser
from .profiles import DEFAULT_PROFILES, ONBOARDING_CHAT, SAFE_MODE_CHAT, RelayProfile
from .validation import sanitize_context, validate_messages

__all__ = [
    "create_app",
    "SessionVerifier",
    "StaticTokenVerifier",
    "SupabaseSessionVerifier",
    "extract_bearer",
    "CompletionGateway",
    "GatewayStream",
    "HTTPCompletionGateway",
    "ProviderCompletionGateway",
    "encode_frame",
    "gateway_error",
    "InboundMessage",
    "RelayError",
    "RelaySettings",
    "SafeContext",
    "VerifiedUser",
    "DEFAULT_PROFILES",
    "ONBOARDING_CHAT",
    "SAFE_MODE_CHAT",
    "RelayProfile",
    "sanitize_context",
    "validate_messages",
]
