"""Relay profiles: one relay, parameterized by system prompt."""

from pydantic import BaseModel, ConfigDict

from ..plans.models import TOTAL_DAYS
from ..prompts import load_prompt
from .models import SafeContext


class RelayProfile(BaseModel):
    """Configuration for one chat endpoint served by the relay."""

    model_config = ConfigDict(frozen=True)

    name: str
    prompt_name: str
    use_context: bool = False
    context_prompt_name: str = "onboarding_context"

    def build_system_prompt(self, context: SafeContext | None = None) -> str:
        """Render the system prompt, appending caller context if enabled."""
        prompt = load_prompt(self.prompt_name)
        if not self.use_context:
            return prompt

        ctx = context or SafeContext()
        suffix = load_prompt(self.context_prompt_name).format(
            role=ctx.role,
            department=ctx.department,
            current_day=ctx.current_day,
            total_days=TOTAL_DAYS,
        )
        return f"{prompt}\n\n{suffix}"


ONBOARDING_CHAT = RelayProfile(
    name="onboarding-chat",
    prompt_name="onboarding",
    use_context=True,
)

SAFE_MODE_CHAT = RelayProfile(
    name="safe-mode-chat",
    prompt_name="safe_mode",
)

DEFAULT_PROFILES: dict[str, RelayProfile] = {
    profile.name: profile for profile in (ONBOARDING_CHAT, SAFE_MODE_CHAT)
}
