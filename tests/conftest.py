"""Pytest configuration and shared fixtures."""
import json
import os
from collections.abc import AsyncIterator, Iterable

import pytest

from onboardly.llm import CompletionMessage
from onboardly.relay import (
    CompletionGateway,
    GatewayStream,
    RelayError,
    RelaySettings,
    StaticTokenVerifier,
)

VALID_TOKEN = "test-token-123"


def sse_frame(content: str) -> str:
    """One ``data:`` line carrying a content delta."""
    payload = {"choices": [{"delta": {"content": content}}]}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n"


def sse_body(*deltas: str, done: bool = True) -> str:
    """A complete SSE response body for the given deltas."""
    body = "".join(sse_frame(d) for d in deltas)
    if done:
        body += "data: [DONE]\n"
    return body


async def aiter_chunks(chunks: Iterable[bytes | str]) -> AsyncIterator[bytes]:
    """Yield chunks as bytes, the way a streamed HTTP body arrives."""
    for chunk in chunks:
        yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk


class FakeGateway(CompletionGateway):
    """Records forwarded conversations and streams canned chunks."""

    def __init__(self, chunks: list[bytes] | None = None, error: RelayError | None = None):
        self.chunks = chunks if chunks is not None else [sse_body("Hi").encode()]
        self.error = error
        self.calls: list[list[CompletionMessage]] = []
        self.closed_streams = 0

    async def open_stream(self, messages: list[CompletionMessage]) -> GatewayStream:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error

        async def close() -> None:
            self.closed_streams += 1

        return GatewayStream(aiter_chunks(self.chunks), close)


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gateway": os.getenv("GATEWAY_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def relay_settings():
    """Relay settings that accept the test token."""
    return RelaySettings(gateway_api_key="gateway-key", static_tokens=[VALID_TOKEN])


@pytest.fixture
def verifier(relay_settings):
    return StaticTokenVerifier(relay_settings.static_tokens)


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


@pytest.fixture
def user_messages():
    """A minimal valid conversation."""
    return [{"role": "user", "content": "What should I focus on today?"}]
