"""Output models of an analysis call.

A ProcrastinationSignal is one rule firing: a claim with a severity and a
confidence, never a verdict on its own.  The aggregate lives in
ProcrastinationAnalysis, and Intervention is the UI-facing nudge chosen
from it.  All three are produced fresh per call and never stored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from procrastination_engine.domain.enums import Severity, SignalType, Urgency

_OUTPUT_CONFIG = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class ProcrastinationSignal(BaseModel):
    """A single detected risk indicator."""

    signal_type: SignalType = Field(..., alias="type")
    severity: Severity
    confidence: float = Field(..., ge=0.0, le=1.0)
    description: str
    suggested_intervention: str
    triggers: list[str] = Field(default_factory=list)

    model_config = _OUTPUT_CONFIG


class ProcrastinationAnalysis(BaseModel):
    """Result of one ``analyze`` call."""

    risk_score: float = Field(..., ge=0.0, le=1.0)
    signals: list[ProcrastinationSignal] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    intervention_needed: bool = False

    model_config = _OUTPUT_CONFIG

    @property
    def has_high_severity(self) -> bool:
        return any(s.severity == Severity.HIGH for s in self.signals)


class Intervention(BaseModel):
    """A nudge bundle for the UI: title, message, four actions, urgency."""

    title: str
    message: str
    actions: list[str]
    urgency: Urgency

    model_config = _OUTPUT_CONFIG
