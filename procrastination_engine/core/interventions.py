"""Personalized intervention selection.

A pure function of an analysis result.  Any high-severity signal forces
the high bundle regardless of the aggregate score; otherwise the score
band decides.
"""

from __future__ import annotations

from procrastination_engine.core.scoring import HIGH_RISK_THRESHOLD, MODERATE_RISK_THRESHOLD
from procrastination_engine.domain.enums import Urgency
from procrastination_engine.domain.signal import Intervention, ProcrastinationAnalysis

HIGH_URGENCY_INTERVENTION = Intervention(
    title="🚨 Procrastination Alert!",
    message=(
        "I notice you might be avoiding this task. "
        "That's totally normal, but let's tackle it together!"
    ),
    actions=[
        "Start with just 2 minutes",
        "Break it into tiny steps",
        "Remove one distraction",
        "Ask for help",
    ],
    urgency=Urgency.HIGH,
)

MEDIUM_URGENCY_INTERVENTION = Intervention(
    title="⚠️ Gentle Nudge",
    message="You're at risk of procrastinating. Let's prevent that with some quick action!",
    actions=[
        "Set a 15-minute timer",
        "Choose the easiest part first",
        "Clear your workspace",
        "Play focus music",
    ],
    urgency=Urgency.MEDIUM,
)

LOW_URGENCY_INTERVENTION = Intervention(
    title="💪 Keep Going!",
    message="You're doing great! Here are some tips to maintain momentum:",
    actions=[
        "Celebrate small wins",
        "Take regular breaks",
        "Track your progress",
        "Stay hydrated",
    ],
    urgency=Urgency.LOW,
)


def select_intervention(analysis: ProcrastinationAnalysis) -> Intervention:
    """Pick the nudge bundle matching *analysis*."""
    if analysis.has_high_severity or analysis.risk_score > HIGH_RISK_THRESHOLD:
        return HIGH_URGENCY_INTERVENTION.model_copy(deep=True)
    if analysis.risk_score > MODERATE_RISK_THRESHOLD:
        return MEDIUM_URGENCY_INTERVENTION.model_copy(deep=True)
    return LOW_URGENCY_INTERVENTION.model_copy(deep=True)
