"""Risk aggregation and recommendation generation.

Risk formula:
    risk = min(1, Σ(confidence_i × w(severity_i)) / Σ w(severity_i))

    A confidence-weighted mean biased toward higher-severity signals.
    With no signals the risk is 0.  The ratio only reaches 1 when every
    signal has confidence 1, so the clamp is a bound, not a branch.

Recommendations:
    A fixed preamble chosen by risk band, followed by up to three
    distinct suggested interventions in first-seen signal order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from procrastination_engine.domain.enums import Severity
from procrastination_engine.domain.signal import ProcrastinationSignal

HIGH_RISK_THRESHOLD = 0.7
MODERATE_RISK_THRESHOLD = 0.4
MAX_SIGNAL_RECOMMENDATIONS = 3

HIGH_RISK_PREAMBLE: tuple[str, ...] = (
    "🚨 High procrastination risk detected - take immediate action",
    "🎯 Start with just 2 minutes of work on your most important task",
    "📱 Remove all distractions from your workspace",
)
MODERATE_RISK_PREAMBLE: tuple[str, ...] = (
    "⚠️ Moderate procrastination risk - be proactive",
    "⏰ Use a timer to create urgency and focus",
    "🏆 Set up a small reward for task completion",
)
LOW_RISK_PREAMBLE: tuple[str, ...] = (
    "✅ Low procrastination risk - you're doing well!",
    "📈 Maintain your current momentum",
)


@dataclass(frozen=True)
class SeverityWeights:
    """How much each severity pulls the aggregate toward its confidence."""

    low: float = 0.2
    medium: float = 0.5
    high: float = 0.8

    def weight(self, severity: Severity) -> float:
        if severity == Severity.HIGH:
            return self.high
        if severity == Severity.MEDIUM:
            return self.medium
        return self.low


def compute_risk_score(
    signals: Sequence[ProcrastinationSignal],
    weights: SeverityWeights | None = None,
) -> float:
    """Confidence-weighted average of *signals*, clamped to [0, 1]."""
    if not signals:
        return 0.0

    w = weights or SeverityWeights()
    numerator = 0.0
    denominator = 0.0
    for signal in signals:
        weight = w.weight(signal.severity)
        numerator += signal.confidence * weight
        denominator += weight

    if denominator <= 0.0:
        return 0.0
    return max(0.0, min(1.0, numerator / denominator))


def risk_preamble(risk_score: float) -> tuple[str, ...]:
    if risk_score > HIGH_RISK_THRESHOLD:
        return HIGH_RISK_PREAMBLE
    if risk_score > MODERATE_RISK_THRESHOLD:
        return MODERATE_RISK_PREAMBLE
    return LOW_RISK_PREAMBLE


def unique_interventions(signals: Sequence[ProcrastinationSignal]) -> list[str]:
    """Distinct suggested interventions, in first-occurrence order."""
    return list(dict.fromkeys(s.suggested_intervention for s in signals))


def build_recommendations(
    signals: Sequence[ProcrastinationSignal],
    risk_score: float,
) -> list[str]:
    recommendations = list(risk_preamble(risk_score))
    recommendations.extend(unique_interventions(signals)[:MAX_SIGNAL_RECOMMENDATIONS])
    return recommendations
