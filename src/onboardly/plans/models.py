"""Data models for onboarding day plans."""

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

TOTAL_DAYS = 7

Priority = Literal["high", "medium", "low"]


class TaskTemplate(BaseModel):
    """A checklist task shown on an onboarding day."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    duration: str = Field(description="Human-readable estimate, e.g. '30 min'")
    priority: Priority


class DbTaskTemplate(BaseModel):
    """A task template row as stored by administrators."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    department: str
    day_number: int = Field(ge=1, le=TOTAL_DAYS)
    title: str
    duration: str
    priority: Priority
    sort_order: int = 0

    def to_task(self) -> TaskTemplate:
        return TaskTemplate(
            id=self.id,
            title=self.title,
            duration=self.duration,
            priority=self.priority,
        )
