"""Gateways that turn a validated conversation into an SSE byte stream."""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import openai

from ..llm import CompletionMessage, LLMProvider
from .models import RelayError

logger = logging.getLogger(__name__)

RATE_LIMITED = "Rate limits exceeded, please try again later."
PAYMENT_REQUIRED = "Payment required, please add funds to your workspace."
GATEWAY_FAILED = "AI gateway error"
NOT_CONFIGURED = "AI gateway is not configured"


def gateway_error(status_code: int) -> RelayError:
    """Translate a failed gateway status into the relay's error response."""
    if status_code == 429:
        return RelayError(429, RATE_LIMITED)
    if status_code == 402:
        return RelayError(402, PAYMENT_REQUIRED)
    logger.error("AI gateway error: %s", status_code)
    return RelayError(500, GATEWAY_FAILED)


class GatewayStream:
    """An open completion stream whose status has already been checked.

    Iterating yields SSE bytes; the underlying connection is released when
    iteration ends, fails, or is abandoned.
    """

    def __init__(
        self,
        chunks: AsyncIterator[bytes],
        close: Callable[[], Awaitable[None]],
    ):
        self._chunks = chunks
        self._close = close
        self._closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._chunks:
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if not self._closed:
            self._closed = True
            await self._close()


class CompletionGateway(ABC):
    """Abstract completion gateway.

    Hides how the completion is produced: a raw HTTP passthrough to an AI
    gateway or an SDK-driven provider re-framed as SSE.
    """

    @abstractmethod
    async def open_stream(self, messages: list[CompletionMessage]) -> GatewayStream:
        """Start a streamed completion.

        Args:
            messages: Full message list, system prompt first

        Returns:
            GatewayStream of SSE bytes

        Raises:
            RelayError: 429/402/500 if the gateway refuses the request
        """

    async def close(self) -> None:
        """Release any resources held by the gateway."""


class HTTPCompletionGateway(CompletionGateway):
    """Forwards to an OpenAI-compatible endpoint and relays its bytes verbatim."""

    def __init__(
        self,
        url: str,
        api_key: str | None,
        model: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self._url = url
        self._api_key = api_key
        self._model = model
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, read=None)
        )

    async def open_stream(self, messages: list[CompletionMessage]) -> GatewayStream:
        if not self._api_key:
            logger.error("Gateway API key is not configured")
            raise RelayError(500, NOT_CONFIGURED)

        request = self._http.build_request(
            "POST",
            self._url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            json={
                "model": self._model,
                "messages": [m.model_dump() for m in messages],
                "stream": True,
            },
        )
        try:
            response = await self._http.send(request, stream=True)
        except httpx.HTTPError as e:
            logger.error("AI gateway unreachable: %s", e)
            raise RelayError(500, GATEWAY_FAILED) from e

        if not response.is_success:
            await response.aclose()
            raise gateway_error(response.status_code)

        return GatewayStream(response.aiter_bytes(), response.aclose)

    async def close(self) -> None:
        if self._owns_client:
            await self._http.aclose()


class ProviderCompletionGateway(CompletionGateway):
    """Drives an LLM provider and frames its text chunks as SSE."""

    def __init__(self, provider: LLMProvider, **completion_kwargs: Any):
        self._provider = provider
        self._completion_kwargs = completion_kwargs

    async def open_stream(self, messages: list[CompletionMessage]) -> GatewayStream:
        try:
            stream = await self._provider.chat_completion_stream(
                messages, **self._completion_kwargs
            )
        except openai.APIStatusError as e:
            raise gateway_error(e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error("AI gateway unreachable: %s", e)
            raise RelayError(500, GATEWAY_FAILED) from e

        async def frames() -> AsyncIterator[bytes]:
            async for text in stream:
                yield encode_frame(text)
            yield b"data: [DONE]\n\n"

        return GatewayStream(frames(), stream.aclose)

    async def close(self) -> None:
        await self._provider.close()


def encode_frame(content: str) -> bytes:
    """Encode one text delta as an SSE ``data:`` frame."""
    payload = {"choices": [{"delta": {"content": content}}]}
    return f"data: {json.dumps(payload, separators=(',', ':'))}\n\n".encode()
