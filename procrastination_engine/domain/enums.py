"""Controlled enumerations for the procrastination-engine domain.

Every categorical field in the domain references an enum defined here.
The rule tables in ``core.analyzers`` are keyed by these members, never by
free-form strings.
"""

from __future__ import annotations

from enum import Enum


class UserAction(str, Enum):
    """Kinds of user activity captured as behavior events."""

    TASK_CREATED = "TASK_CREATED"
    TASK_STARTED = "TASK_STARTED"
    TASK_COMPLETED = "TASK_COMPLETED"
    TASK_POSTPONED = "TASK_POSTPONED"
    GOAL_CREATED = "GOAL_CREATED"
    GOAL_UPDATED = "GOAL_UPDATED"
    HABIT_LOGGED = "HABIT_LOGGED"
    PROCRASTINATION_DETECTED = "PROCRASTINATION_DETECTED"
    INTERVENTION_DISMISSED = "INTERVENTION_DISMISSED"
    AI_ADVICE_REQUESTED = "AI_ADVICE_REQUESTED"


class EmotionalState(str, Enum):
    """Self-reported mood attached to events or supplied at analysis time."""

    MOTIVATED = "MOTIVATED"
    ANXIOUS = "ANXIOUS"
    OVERWHELMED = "OVERWHELMED"
    FOCUSED = "FOCUSED"
    DISTRACTED = "DISTRACTED"
    CONFIDENT = "CONFIDENT"
    DOUBTFUL = "DOUBTFUL"
    ENERGETIC = "ENERGETIC"
    TIRED = "TIRED"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class EnergyLevel(str, Enum):
    """Energy a task demands from the user."""

    VERY_LOW = "VERY_LOW"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"


class SignalType(str, Enum):
    """Which analyzer family produced a signal."""

    PATTERN = "pattern"
    BEHAVIORAL = "behavioral"
    TEMPORAL = "temporal"
    EMOTIONAL = "emotional"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Urgency(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    """Presentation band for an aggregate risk score."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class PatternName(str, Enum):
    """The fixed set of accumulated behavior tendencies."""

    TASK_POSTPONEMENT_FREQUENCY = "task_postponement_frequency"
    DEADLINE_PRESSURE_TENDENCY = "deadline_pressure_tendency"
    PERFECTIONISM_SCORE = "perfectionism_score"
    OVERWHELM_FREQUENCY = "overwhelm_frequency"
    DISTRACTION_SUSCEPTIBILITY = "distraction_susceptibility"
    ENERGY_MISMATCH_FREQUENCY = "energy_mismatch_frequency"
