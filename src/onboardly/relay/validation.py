"""Inbound request validation for the completion relay.

Everything here runs before the gateway is contacted; a rejected request
never costs a completion.
"""

from typing import Any

from ..chat.models import MAX_CONTENT_LENGTH, MAX_MESSAGES
from ..plans.models import TOTAL_DAYS
from .models import InboundMessage, RelayError, SafeContext

MAX_CONTEXT_FIELD_LENGTH = 100

INVALID_MESSAGES = (
    f"Invalid messages: must be a non-empty array with at most {MAX_MESSAGES} items"
)
INVALID_FORMAT = "Invalid message format"
INVALID_CONTENT = (
    f"Invalid message: content must be a string between 1 and {MAX_CONTENT_LENGTH} characters"
)
INVALID_ROLE = "Invalid message role: must be 'user' or 'assistant'"


def validate_messages(raw: Any) -> list[InboundMessage]:
    """Validate and trim the caller's message list.

    Args:
        raw: The ``messages`` value from the request body

    Returns:
        Validated messages with trimmed content

    Raises:
        RelayError: 400 describing the first violation found
    """
    if not isinstance(raw, list) or not raw or len(raw) > MAX_MESSAGES:
        raise RelayError(400, INVALID_MESSAGES)

    messages = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("content"), str):
            raise RelayError(400, INVALID_FORMAT)

        content = item["content"].strip()
        if not content or len(content) > MAX_CONTENT_LENGTH:
            raise RelayError(400, INVALID_CONTENT)

        role = item.get("role")
        if role not in ("user", "assistant"):
            raise RelayError(400, INVALID_ROLE)

        messages.append(InboundMessage(role=role, content=content))
    return messages


def sanitize_context(raw: Any) -> SafeContext:
    """Clamp caller-supplied context, falling back to defaults per field."""
    if not isinstance(raw, dict):
        return SafeContext()

    fields: dict[str, Any] = {}

    role = raw.get("role")
    if isinstance(role, str):
        fields["role"] = role[:MAX_CONTEXT_FIELD_LENGTH]

    department = raw.get("department")
    if isinstance(department, str):
        fields["department"] = department[:MAX_CONTEXT_FIELD_LENGTH]

    day = raw.get("currentDay")
    if isinstance(day, float) and day.is_integer():
        day = int(day)
    # bool is an int subclass; a JSON true is not a day number
    if isinstance(day, int) and not isinstance(day, bool) and 1 <= day <= TOTAL_DAYS:
        fields["current_day"] = day

    return SafeContext(**fields)
