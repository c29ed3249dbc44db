"""Streaming chat client for the completion relay."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx

from .errors import (
    AuthenticationError,
    ChatBusyError,
    ChatError,
    NetworkError,
    ValidationError,
    error_for_status,
)
from .models import (
    MAX_CONTENT_LENGTH,
    MAX_MESSAGES,
    ChatContext,
    ChatMessage,
    ConversationSession,
    UserSession,
)
from .sse import SSEStreamConsumer

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[str, str], None]


class ChatClient:
    """Sends messages to the relay and streams the assistant's reply.

    Hidden design decisions:
    - Request framing and bearer authentication
    - Mapping of relay statuses to user-facing errors
    - Placeholder lifecycle of the in-progress assistant message
    - Concurrency policy: a send while a stream is in flight is rejected

    Supports async context manager protocol:
        async with ChatClient(session, endpoint) as client:
            await client.send("What should I focus on today?")
            print(client.conversation.messages[-1].content)
    """

    def __init__(
        self,
        session: UserSession,
        endpoint: str,
        *,
        context: ChatContext | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
        on_update: UpdateCallback | None = None,
    ):
        """Initialize the chat client.

        Args:
            session: Authenticated user session supplying the bearer token
            endpoint: Full URL of the relay function
            context: Caller context for the system prompt (defaults to session profile)
            http_client: Optional shared httpx client; created and owned if omitted
            timeout: Connect/write/pool timeout in seconds for an owned client
            on_update: Called with (message_id, content) on every streamed update
        """
        self._session = session
        self._endpoint = endpoint
        self._context = context if context is not None else session.profile
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, read=None)
        )
        self._on_update = on_update
        self._conversation = ConversationSession()
        self._error: str | None = None
        self._task: asyncio.Task[ChatMessage | None] | None = None
        self._cancel_requested = False
        self._streaming: ChatMessage | None = None

    @property
    def conversation(self) -> ConversationSession:
        return self._conversation

    @property
    def error(self) -> str | None:
        """Last error message surfaced to the user, if any."""
        return self._error

    @property
    def is_streaming(self) -> bool:
        return self._task is not None and not self._task.done()

    async def send(self, text: str) -> ChatMessage | None:
        """Send a user message and stream the assistant reply.

        Args:
            text: User input

        Returns:
            The assistant message (possibly partial if cancelled), or None
            if the input was blank or no content was received

        Raises:
            ChatBusyError: If a previous reply is still streaming
            AuthenticationError: If the session has no access token
            ValidationError: If the conversation violates relay limits
            RateLimitError, QuotaError, GatewayError: On relay errors
            NetworkError: If the connection fails mid-request
        """
        if not text.strip():
            return None
        if self.is_streaming:
            raise ChatBusyError()

        self._error = None
        try:
            if not self._session.access_token:
                raise AuthenticationError()
            user_message = ChatMessage(role="user", content=text)
            messages = [*self._conversation.to_payload(), user_message.to_payload()]
            validate_outgoing(messages)
        except ChatError as e:
            self._fail(e)
            raise

        self._cancel_requested = False
        self._task = asyncio.create_task(self._exchange(user_message, messages))
        try:
            return await self._task
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            partial = self._streaming
            return partial if partial is not None and partial.content else None
        finally:
            self._task = None
            self._streaming = None

    def cancel(self) -> bool:
        """Stop reading the in-flight stream and release the connection.

        Content already rendered is kept; an empty placeholder is removed.

        Returns:
            True if a stream was cancelled
        """
        task = self._task
        if task is None or task.done():
            return False
        self._cancel_requested = True
        task.cancel()
        return True

    def reset(self) -> None:
        """Clear the conversation and any surfaced error."""
        self.cancel()
        self._conversation.reset()
        self._error = None

    async def _exchange(
        self,
        user_message: ChatMessage,
        messages: list[dict[str, str]],
    ) -> ChatMessage | None:
        self._conversation.add(user_message)

        body: dict[str, Any] = {"messages": messages}
        if self._context is not None:
            body["context"] = self._context.to_payload()
        headers = {"Authorization": f"Bearer {self._session.access_token}"}

        assistant: ChatMessage | None = None
        try:
            async with self._http.stream(
                "POST", self._endpoint, json=body, headers=headers
            ) as response:
                if not response.is_success:
                    await response.aread()
                    raise error_for_status(response.status_code, _json_body(response))

                assistant = self._conversation.add(ChatMessage(role="assistant"))
                self._streaming = assistant
                consumer = SSEStreamConsumer(
                    on_delta=lambda content: self._render(assistant, content)
                )
                await consumer.consume(response.aiter_bytes())
        except ChatError as e:
            self._fail(e)
            raise
        except (httpx.HTTPError, httpx.StreamError) as e:
            error = NetworkError()
            self._fail(error, cause=e)
            raise error from e
        finally:
            if assistant is not None and not assistant.content:
                self._conversation.remove(assistant.id)

        if assistant is None or not assistant.content:
            return None
        return assistant

    def _render(self, message: ChatMessage, content: str) -> None:
        message.append(content[len(message.content):])
        if self._on_update is not None:
            self._on_update(message.id, content)

    def _fail(self, error: ChatError, cause: BaseException | None = None) -> None:
        self._error = error.message
        logger.warning("Chat request failed: %s", cause or error.message)

    async def aclose(self) -> None:
        """Cancel any in-flight stream and close an owned HTTP client."""
        task = self._task
        if self.cancel() and task is not None:
            await asyncio.gather(task, return_exceptions=True)
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "ChatClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()


def validate_outgoing(messages: list[dict[str, str]]) -> None:
    """Apply the relay's message limits before any network call.

    Raises:
        ValidationError: If the list or any message is out of bounds
    """
    if not messages or len(messages) > MAX_MESSAGES:
        raise ValidationError(
            f"Conversation is too long: at most {MAX_MESSAGES} messages are allowed. "
            "Start a new chat to continue."
        )
    for message in messages:
        content = message.get("content", "").strip()
        if not content or len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError(
                f"Messages must be between 1 and {MAX_CONTENT_LENGTH} characters."
            )


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
