"""AnalysisFormatter: deterministic plain-text rendering of an analysis.

Produces the same information a coaching dialog would show: the risk
band, the chosen intervention, the first few recommendations, and the
signals behind the score.  Suitable for logs, APIs, or a terminal.
"""

from __future__ import annotations

from procrastination_engine.core.scoring import HIGH_RISK_THRESHOLD, MODERATE_RISK_THRESHOLD
from procrastination_engine.domain.enums import RiskLevel
from procrastination_engine.domain.signal import Intervention, ProcrastinationAnalysis

MAX_DISPLAYED_RECOMMENDATIONS = 4


def risk_level(score: float) -> RiskLevel:
    """Presentation band for an aggregate risk score."""
    if score > HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if score > MODERATE_RISK_THRESHOLD:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


class AnalysisFormatter:
    """Renders a ProcrastinationAnalysis and its Intervention as text."""

    @staticmethod
    def format_plain(analysis: ProcrastinationAnalysis, intervention: Intervention) -> str:
        level = risk_level(analysis.risk_score)
        lines = [intervention.title]
        lines.append("=" * 50)
        lines.append(
            f"Procrastination risk: {analysis.risk_score:.0%} ({level.value.upper()})"
        )
        if analysis.intervention_needed:
            lines.append("Intervention recommended")
        lines.append("")
        lines.append(intervention.message)
        for action in intervention.actions:
            lines.append(f"  [ ] {action}")
        lines.append("")

        lines.append("--- Recommendations ---")
        for rec in analysis.recommendations[:MAX_DISPLAYED_RECOMMENDATIONS]:
            lines.append(f"  • {rec}")
        lines.append("")

        lines.append(f"--- Signals ({len(analysis.signals)} detected) ---")
        for signal in analysis.signals:
            lines.append(
                f"  [{signal.severity.value}] {signal.signal_type.value} "
                f"({signal.confidence:.0%}): {signal.description}"
            )

        return "\n".join(lines)
