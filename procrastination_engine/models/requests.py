"""Pydantic request bodies for the HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from procrastination_engine.domain.enums import EmotionalState
from procrastination_engine.domain.task import TaskSnapshot


class AnalyzeRequest(BaseModel):
    """Context for an on-demand analysis: the task at hand and the user's mood."""

    current_task: TaskSnapshot | None = Field(default=None, description="Task the user is about to work on")
    current_mood: EmotionalState | None = Field(default=None, description="Self-reported mood right now")

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
