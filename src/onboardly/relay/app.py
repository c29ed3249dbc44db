"""FastAPI application serving the moderated completion relay.

Run locally with:
    uvicorn onboardly.relay.app:create_default_app --factory --port 54321
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from ..llm import CompletionMessage
from .auth import SessionVerifier, extract_bearer
from .gateway import CompletionGateway
from .models import RelayError, RelaySettings
from .profiles import DEFAULT_PROFILES, RelayProfile
from .validation import sanitize_context, validate_messages

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = [
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
    "x-supabase-client-platform",
    "x-supabase-client-platform-version",
    "x-supabase-client-runtime",
    "x-supabase-client-runtime-version",
]

UNEXPECTED = "An unexpected error occurred"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    settings: RelaySettings,
    verifier: SessionVerifier,
    gateway: CompletionGateway,
    profiles: dict[str, RelayProfile] | None = None,
) -> FastAPI:
    """Build the relay application.

    Args:
        settings: Relay configuration
        verifier: Resolves bearer tokens to sessions
        gateway: Produces the completion stream
        profiles: Chat endpoints to serve, keyed by path name

    Returns:
        FastAPI app exposing ``POST /functions/v1/{profile}`` and ``GET /healthz``
    """
    served = profiles if profiles is not None else DEFAULT_PROFILES

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await gateway.close()
        await verifier.close()

    app = FastAPI(title="Onboardly completion relay", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.post("/functions/v1/{profile_name}")
    async def relay(profile_name: str, request: Request) -> Response:
        profile = served.get(profile_name)
        if profile is None:
            return _error(404, f"Unknown chat function: {profile_name}")

        try:
            return await _relay(profile, request, verifier, gateway)
        except RelayError as e:
            return _error(e.status_code, e.message)
        except Exception:
            logger.exception("%s error", profile.name)
            return _error(500, UNEXPECTED)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    return app


async def _relay(
    profile: RelayProfile,
    request: Request,
    verifier: SessionVerifier,
    gateway: CompletionGateway,
) -> Response:
    token = extract_bearer(request.headers.get("authorization"))
    await verifier.verify(token)

    try:
        body: Any = await request.json()
    except ValueError as e:
        raise RelayError(400, "Invalid request body: expected JSON") from e
    if not isinstance(body, dict):
        body = {}

    messages = validate_messages(body.get("messages"))
    context = sanitize_context(body.get("context")) if profile.use_context else None

    outbound = [
        CompletionMessage(role="system", content=profile.build_system_prompt(context)),
        *(CompletionMessage(role=m.role, content=m.content) for m in messages),
    ]

    logger.info("Starting %s for authenticated user", profile.name)
    stream = await gateway.open_stream(outbound)

    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        background=BackgroundTask(stream.aclose),
    )


def create_default_app() -> FastAPI:
    """Build the relay from environment variables (uvicorn ``--factory`` entry)."""
    from ..cli.providers import get_gateway, get_relay_settings, get_verifier

    settings = get_relay_settings()
    return create_app(settings, get_verifier(settings), get_gateway(settings))
