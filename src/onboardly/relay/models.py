"""Data models for the completion relay."""

from pydantic import BaseModel, ConfigDict, Field

from ..chat.models import Role
from ..llm.factory import DEFAULT_GATEWAY_MODEL
from ..plans.models import TOTAL_DAYS

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"


class RelayError(Exception):
    """A request the relay refuses, rendered as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class InboundMessage(BaseModel):
    """A validated, trimmed message from the caller."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class SafeContext(BaseModel):
    """Caller context after clamping; every field has a safe default."""

    model_config = ConfigDict(frozen=True)

    role: str = "New Employee"
    department: str = "Not specified"
    current_day: int = Field(default=1, ge=1, le=TOTAL_DAYS)


class VerifiedUser(BaseModel):
    """Identity resolved from a bearer token."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str | None = None


class RelaySettings(BaseModel):
    """Runtime configuration for the relay."""

    gateway_url: str = Field(default=DEFAULT_GATEWAY_URL, description="Chat completions endpoint")
    gateway_api_key: str | None = Field(default=None, description="Bearer key for the gateway")
    gateway_model: str = Field(default=DEFAULT_GATEWAY_MODEL)
    supabase_url: str | None = Field(default=None, description="Auth provider base URL")
    supabase_anon_key: str | None = None
    static_tokens: list[str] = Field(
        default_factory=list,
        description="Tokens accepted without an auth provider (development only)"
    )
    allowed_origin: str = Field(default="*", description="CORS allowed origin")
