from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI, AsyncStream
from openai.types.chat import ChatCompletionChunk

from ..base import LLMProvider
from ..models import CompletionMessage, StreamingResponse


class OpenAIProvider(LLMProvider):
    """OpenAI-compatible LLM provider.

    Works against the OpenAI API or any gateway exposing the same chat
    completions contract (set ``base_url``).

    Hidden design decisions:
    - OpenAI SDK client initialization
    - Message format conversion
    - Usage capture from the final stream chunk
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: API key for the endpoint
            model: Default model to use
            base_url: Optional custom API base URL (e.g. an AI gateway)
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion_stream(
        self,
        messages: list[CompletionMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> StreamingResponse:
        """Generate a streaming chat completion.

        Args:
            messages: Conversation history, system prompt first
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional request parameters

        Returns:
            StreamingResponse that yields text chunks and captures usage info

        Raises:
            openai.APIStatusError: If the endpoint rejects the request
            openai.APIConnectionError: If the endpoint cannot be reached
        """
        request_params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "stream": True,
            "stream_options": {"include_usage": True},
            **kwargs,
        }
        if max_tokens is not None:
            request_params["max_tokens"] = max_tokens

        stream = await self._client.chat.completions.create(**request_params)

        response = StreamingResponse()
        response.attach(self._iterate(stream, response))
        return response

    @staticmethod
    async def _iterate(
        stream: AsyncStream[ChatCompletionChunk],
        response: StreamingResponse,
    ) -> AsyncIterator[str]:
        async for chunk in stream:
            if chunk.usage is not None:
                response.set_usage({
                    "prompt_tokens": chunk.usage.prompt_tokens,
                    "completion_tokens": chunk.usage.completion_tokens,
                    "total_tokens": chunk.usage.total_tokens,
                })
            if chunk.choices and chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
