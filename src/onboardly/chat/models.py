"""Data models for the streaming chat client.

These models describe an ephemeral conversation held in process memory
and the frames the relay streams back. Nothing here is persisted.
"""

from collections.abc import Iterator
from datetime import datetime
from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]

# Limits shared by the client and the relay
MAX_MESSAGES = 50
MAX_CONTENT_LENGTH = 4000


class ChatMessage(BaseModel):
    """A single message in a conversation.

    Assistant messages start empty and grow as deltas arrive; content is
    only ever appended to while a stream is in progress.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    role: Role = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(default="", description="Message text")
    created_at: datetime = Field(default_factory=datetime.now)

    def append(self, delta: str) -> None:
        """Append a streamed delta to the message content."""
        self.content += delta

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class ConversationSession:
    """Ordered, process-local sequence of chat messages.

    Reset explicitly by the user or when the chat is left.
    """

    def __init__(self, messages: list[ChatMessage] | None = None):
        self._messages: list[ChatMessage] = list(messages or [])

    @property
    def messages(self) -> list[ChatMessage]:
        """Snapshot of the messages in order."""
        return list(self._messages)

    def add(self, message: ChatMessage) -> ChatMessage:
        self._messages.append(message)
        return message

    def remove(self, message_id: str) -> bool:
        for i, message in enumerate(self._messages):
            if message.id == message_id:
                del self._messages[i]
                return True
        return False

    def reset(self) -> None:
        self._messages.clear()

    def to_payload(self) -> list[dict[str, str]]:
        """Convert to the message list sent to the relay."""
        return [m.to_payload() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(list(self._messages))


class ChatContext(BaseModel):
    """Caller context used to personalize the assistant's system prompt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: str | None = None
    department: str | None = None
    current_day: int | None = Field(default=None, alias="currentDay")

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire names, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UserSession(BaseModel):
    """Authenticated user session passed explicitly to the chat client."""

    model_config = ConfigDict(frozen=True)

    access_token: str | None = Field(default=None, description="Bearer token for the relay")
    user_id: str | None = None
    email: str | None = None
    profile: ChatContext | None = Field(
        default=None,
        description="Profile fields used as chat context"
    )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


class FrameDelta(BaseModel):
    content: str | None = None


class FrameChoice(BaseModel):
    delta: FrameDelta = Field(default_factory=FrameDelta)


class StreamFrame(BaseModel):
    """Parsed payload of a single ``data:`` line.

    Only the fields the client reads are modelled; anything else the
    gateway sends is ignored.
    """

    choices: list[FrameChoice] = Field(default_factory=list)

    @property
    def delta_content(self) -> str | None:
        """Content of the first choice's delta, if any."""
        if not self.choices:
            return None
        return self.choices[0].delta.content
