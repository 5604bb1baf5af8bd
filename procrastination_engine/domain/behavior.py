"""BehaviorEvent: an observed user action fed to the detector.

Events are immutable once created.  They are validated at the boundary
like every other domain model, with one deliberate exception: a timestamp
that cannot be parsed, or that falls outside the representable UTC range,
is kept verbatim instead of rejecting the event.
Such events stay in the rolling history but never move pattern scores
and never match hour-of-day rules.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from procrastination_engine.domain.enums import EmotionalState, UserAction
from procrastination_engine.foundation.clock import ensure_aware

_DATETIME = TypeAdapter(datetime)


class BehaviorEvent(BaseModel):
    """A single user action, with optional mood and context."""

    event_id: UUID = Field(default_factory=uuid4)
    action: UserAction
    context: Any = None
    emotional_state: EmotionalState | None = None
    procrastination_risk: float = Field(
        0.0,
        ge=0.0,
        le=1.0,
        description="Risk value already attached by the caller at capture time",
    )
    intervention_taken: list[str] = Field(default_factory=list)
    timestamp: datetime | str = Field(..., description="When the action happened")
    user_id: str = Field(..., min_length=1, max_length=256)

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v: Any) -> datetime | str:
        # Stored in UTC; instants that cannot be expressed in UTC count as malformed
        try:
            parsed = v if isinstance(v, datetime) else _DATETIME.validate_python(v)
            return ensure_aware(parsed).astimezone(timezone.utc)
        except (ValidationError, OverflowError):
            return str(v)

    @property
    def occurred_at(self) -> datetime | None:
        """The parsed instant, or None when the raw timestamp was malformed."""
        if isinstance(self.timestamp, datetime):
            return self.timestamp
        return None
