from abc import ABC, abstractmethod
from typing import Any

from .models import CompletionMessage, StreamingResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which completion API is used.
    Implementations handle provider-specific details like:
    - API client setup and authentication
    - Request/response format conversion
    - Streaming iteration and usage capture

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            stream = await provider.chat_completion_stream(messages)
    """

    @abstractmethod
    async def chat_completion_stream(
        self,
        messages: list[CompletionMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        The request is sent before this returns, so connection and status
        errors surface here rather than during iteration.

        Returns:
            StreamingResponse that yields text chunks and captures usage info.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
