"""TaskSnapshot: a point-in-time view of a task relevant to scoring."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from procrastination_engine.domain.enums import EnergyLevel, Priority
from procrastination_engine.foundation.clock import ensure_aware


class TaskSnapshot(BaseModel):
    """Immutable copy of a task as the caller saw it when it changed.

    ``deadline`` is the hard cutoff used by the temporal analyzer;
    ``due_date`` is informational only.
    """

    id: str = Field(..., min_length=1)
    title: str
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    deadline: datetime | None = None
    estimated_duration: float | None = Field(None, ge=0, description="Minutes")
    progress_percent: float = Field(0.0, ge=0.0, le=100.0)
    difficulty_level: float | None = Field(None, ge=1, le=10)
    energy_required: EnergyLevel | None = None

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("due_date", "deadline")
    @classmethod
    def instants_must_be_aware(cls, v: datetime | None) -> datetime | None:
        return ensure_aware(v) if v is not None else None
