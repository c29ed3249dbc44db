"""Provider factory functions for CLI.

Centralizes creation of relay settings, session verifier and completion
gateway from environment variables. Hides configuration details from
command implementations.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from ..chat import ChatContext, UserSession
from ..llm import create_llm_provider
from ..llm.factory import DEFAULT_GATEWAY_BASE_URL
from ..relay import (
    CompletionGateway,
    HTTPCompletionGateway,
    ProviderCompletionGateway,
    RelaySettings,
    SessionVerifier,
    StaticTokenVerifier,
    SupabaseSessionVerifier,
)
from ..relay.models import DEFAULT_GATEWAY_URL

# Default console for output
_console = Console()

DEFAULT_RELAY_URL = "http://localhost:54321/functions/v1"


def configure_logging(level: str | None = None, console: Console | None = None) -> None:
    """Route standard logging through Rich.

    Environment variables:
        ONBOARDLY_LOG_LEVEL: Log level name (default: INFO)
    """
    level_name = (level or os.getenv("ONBOARDLY_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or _console, rich_tracebacks=True)],
        force=True,
    )


def get_relay_settings() -> RelaySettings:
    """Create relay settings from environment variables.

    Environment variables:
        GATEWAY_URL: Chat completions endpoint (default: Lovable AI gateway)
        GATEWAY_API_KEY: Gateway API key (falls back to LOVABLE_API_KEY)
        GATEWAY_MODEL: Model name (default: google/gemini-3-flash-preview)
        SUPABASE_URL: Auth provider base URL
        SUPABASE_ANON_KEY: Auth provider anon key
        RELAY_STATIC_TOKENS: Comma-separated tokens accepted without an auth provider
        RELAY_ALLOWED_ORIGIN: CORS allowed origin (default: *)
    """
    tokens = os.getenv("RELAY_STATIC_TOKENS", "")
    return RelaySettings(
        gateway_url=os.getenv("GATEWAY_URL", DEFAULT_GATEWAY_URL),
        gateway_api_key=os.getenv("GATEWAY_API_KEY") or os.getenv("LOVABLE_API_KEY"),
        gateway_model=os.getenv("GATEWAY_MODEL", RelaySettings.model_fields["gateway_model"].default),
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY"),
        static_tokens=[t.strip() for t in tokens.split(",") if t.strip()],
        allowed_origin=os.getenv("RELAY_ALLOWED_ORIGIN", "*"),
    )


def get_verifier(settings: RelaySettings, console: Console | None = None) -> SessionVerifier:
    """Create the session verifier the settings call for.

    Supabase verification is used when SUPABASE_URL and SUPABASE_ANON_KEY
    are set; otherwise only RELAY_STATIC_TOKENS are accepted.
    """
    con = console or _console
    if settings.supabase_url and settings.supabase_anon_key:
        return SupabaseSessionVerifier(settings.supabase_url, settings.supabase_anon_key)

    if not settings.static_tokens:
        con.print("[yellow]Warning: no SUPABASE_URL or RELAY_STATIC_TOKENS set, every request will be rejected[/yellow]")
    return StaticTokenVerifier(settings.static_tokens)


def get_gateway(settings: RelaySettings, backend: str = "http") -> CompletionGateway:
    """Create the completion gateway.

    Args:
        settings: Relay settings
        backend: 'http' relays gateway bytes verbatim; 'provider' drives the
            OpenAI SDK and re-frames its chunks

    Raises:
        ValueError: If backend is not supported
    """
    if backend == "http":
        return HTTPCompletionGateway(
            url=settings.gateway_url,
            api_key=settings.gateway_api_key,
            model=settings.gateway_model,
        )

    if backend == "provider":
        base_url = os.getenv("GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL)
        provider = create_llm_provider(
            "gateway",
            api_key=settings.gateway_api_key or "",
            model=settings.gateway_model,
            base_url=base_url,
        )
        return ProviderCompletionGateway(provider)

    raise ValueError(
        f"Unsupported gateway backend: {backend}. "
        f"Supported backends: http, provider"
    )


def get_user_session(
    token: str | None = None,
    role: str | None = None,
    department: str | None = None,
    day: int | None = None,
) -> UserSession:
    """Build the chat user session from options and environment.

    Environment variables:
        ONBOARDLY_ACCESS_TOKEN: Bearer token for the relay
    """
    profile = None
    if role or department or day:
        profile = ChatContext(role=role, department=department, current_day=day)
    return UserSession(
        access_token=token or os.getenv("ONBOARDLY_ACCESS_TOKEN"),
        profile=profile,
    )


def get_relay_url(endpoint: str | None = None) -> str:
    """Relay base URL.

    Environment variables:
        ONBOARDLY_RELAY_URL: Base URL of the relay functions (default: local relay)
    """
    return (endpoint or os.getenv("ONBOARDLY_RELAY_URL", DEFAULT_RELAY_URL)).rstrip("/")
