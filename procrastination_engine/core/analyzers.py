"""Signal analyzers: four independent rule families.

Each analyzer is a pure function of its arguments: it reads the inputs it
is given (the retained history, a copy of the pattern scores, the current
task or mood, and "now") and returns zero or more ProcrastinationSignals.
None of them mutate anything, and none of them read the system clock.

Hour-of-day rules are evaluated in the caller-supplied time zone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, Mapping

from procrastination_engine.domain.behavior import BehaviorEvent
from procrastination_engine.domain.enums import (
    EmotionalState,
    EnergyLevel,
    PatternName,
    Severity,
    SignalType,
    UserAction,
)
from procrastination_engine.domain.signal import ProcrastinationSignal
from procrastination_engine.domain.task import TaskSnapshot

# Temporal
DEADLINE_WINDOW_HOURS = 24.0
DEADLINE_LOW_PROGRESS_PERCENT = 50.0
POSTPONEMENT_HOUR_SPAN = 2
POSTPONEMENT_MIN_COUNT = 2

# Behavioral
POSTPONEMENT_THRESHOLD = 0.5
POSTPONEMENT_HIGH_THRESHOLD = 0.7
PERFECTIONISM_THRESHOLD = 0.4
OVERWHELM_THRESHOLD = 0.3

# Task characteristics
DIFFICULTY_THRESHOLD = 7
CLEAR_DESCRIPTION_MIN_LENGTH = 20
LOW_ENERGY_HOURS: tuple[range, ...] = (range(6, 9), range(14, 17))
DEMANDING_ENERGY = frozenset({EnergyLevel.HIGH, EnergyLevel.VERY_HIGH})


@dataclass(frozen=True)
class MoodRule:
    severity: Severity
    confidence: float
    intervention: str


MOOD_RULES: dict[EmotionalState, MoodRule] = {
    EmotionalState.OVERWHELMED: MoodRule(
        Severity.HIGH, 0.8, "Take 5 deep breaths and list just 3 priority tasks"
    ),
    EmotionalState.ANXIOUS: MoodRule(
        Severity.MEDIUM, 0.7, "Start with the easiest task to build momentum"
    ),
    EmotionalState.DISTRACTED: MoodRule(
        Severity.MEDIUM, 0.6, "Remove distractions and use a focus timer"
    ),
    EmotionalState.TIRED: MoodRule(
        Severity.LOW, 0.5, "Consider taking a short break or doing lighter tasks"
    ),
    EmotionalState.DOUBTFUL: MoodRule(
        Severity.MEDIUM, 0.6, "Review your why and past successes for motivation"
    ),
}


# ── Temporal ─────────────────────────────────────────────────────────────────


def temporal_signals(
    now: datetime,
    behavior: Iterable[BehaviorEvent],
    task: TaskSnapshot | None,
    tz: tzinfo,
) -> list[ProcrastinationSignal]:
    """Deadline pressure on the current task, plus time-of-day postponements.

    The postponement check scans the whole retained history with no date
    bound: a postponement at 15:00 last week counts at 15:00 today.
    """
    signals: list[ProcrastinationSignal] = []

    if task is not None and task.deadline is not None:
        hours_left = (task.deadline - now).total_seconds() / 3600.0
        if hours_left < DEADLINE_WINDOW_HOURS and task.progress_percent < DEADLINE_LOW_PROGRESS_PERCENT:
            signals.append(ProcrastinationSignal(
                signal_type=SignalType.TEMPORAL,
                severity=Severity.HIGH,
                confidence=0.8,
                description="Task deadline approaching with low progress",
                suggested_intervention="Break task into smaller chunks and start immediately",
                triggers=["deadline_pressure", "low_progress"],
            ))

    current_hour = now.astimezone(tz).hour
    same_hour_postponements = 0
    for event in behavior:
        if event.action != UserAction.TASK_POSTPONED or event.occurred_at is None:
            continue
        event_hour = local_hour(event.occurred_at, tz)
        if event_hour is None:
            continue
        if abs(event_hour - current_hour) <= POSTPONEMENT_HOUR_SPAN:
            same_hour_postponements += 1

    if same_hour_postponements >= POSTPONEMENT_MIN_COUNT:
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.TEMPORAL,
            severity=Severity.MEDIUM,
            confidence=0.6,
            description="Frequent postponements during this time of day",
            suggested_intervention="Consider scheduling tasks at your peak energy hours",
            triggers=["time_pattern", "energy_mismatch"],
        ))

    return signals


# ── Behavioral ───────────────────────────────────────────────────────────────


def behavioral_signals(patterns: Mapping[PatternName, float]) -> list[ProcrastinationSignal]:
    """Signals read straight off the accumulated pattern scores."""
    signals: list[ProcrastinationSignal] = []

    postponement = patterns.get(PatternName.TASK_POSTPONEMENT_FREQUENCY, 0.0)
    if postponement > POSTPONEMENT_THRESHOLD:
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.BEHAVIORAL,
            severity=Severity.HIGH if postponement > POSTPONEMENT_HIGH_THRESHOLD else Severity.MEDIUM,
            confidence=postponement,
            description="High frequency of task postponements detected",
            suggested_intervention="Try the 2-minute rule: if it takes less than 2 minutes, do it now",
            triggers=["postponement_pattern"],
        ))

    perfectionism = patterns.get(PatternName.PERFECTIONISM_SCORE, 0.0)
    if perfectionism > PERFECTIONISM_THRESHOLD:
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.BEHAVIORAL,
            severity=Severity.MEDIUM,
            confidence=perfectionism,
            description="Perfectionism tendencies may be causing delays",
            suggested_intervention='Set "good enough" standards and focus on progress over perfection',
            triggers=["perfectionism", "analysis_paralysis"],
        ))

    overwhelm = patterns.get(PatternName.OVERWHELM_FREQUENCY, 0.0)
    if overwhelm > OVERWHELM_THRESHOLD:
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.BEHAVIORAL,
            severity=Severity.MEDIUM,
            confidence=overwhelm,
            description="Frequent overwhelm episodes detected",
            suggested_intervention="Break large tasks into smaller, manageable pieces",
            triggers=["overwhelm", "task_complexity"],
        ))

    return signals


# ── Emotional ────────────────────────────────────────────────────────────────


def emotional_signals(mood: EmotionalState | None) -> list[ProcrastinationSignal]:
    """At most one signal, for moods listed in MOOD_RULES."""
    if mood is None:
        return []
    rule = MOOD_RULES.get(mood)
    if rule is None:
        return []
    return [ProcrastinationSignal(
        signal_type=SignalType.EMOTIONAL,
        severity=rule.severity,
        confidence=rule.confidence,
        description=f"Current emotional state ({mood.value}) increases procrastination risk",
        suggested_intervention=rule.intervention,
        triggers=["emotional_state", mood.value.lower()],
    )]


# ── Task characteristics ─────────────────────────────────────────────────────


def task_signals(task: TaskSnapshot | None, now: datetime, tz: tzinfo) -> list[ProcrastinationSignal]:
    """Difficulty, clarity and energy-timing rules for the current task."""
    if task is None:
        return []

    signals: list[ProcrastinationSignal] = []

    if task.difficulty_level is not None and task.difficulty_level > DIFFICULTY_THRESHOLD:
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.PATTERN,
            severity=Severity.MEDIUM,
            confidence=0.6,
            description="High-difficulty task may trigger avoidance behavior",
            suggested_intervention="Break this complex task into smaller, easier steps",
            triggers=["high_difficulty", "task_complexity"],
        ))

    if not task.description or len(task.description) < CLEAR_DESCRIPTION_MIN_LENGTH:
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.PATTERN,
            severity=Severity.LOW,
            confidence=0.4,
            description="Unclear task definition may cause procrastination",
            suggested_intervention="Define specific, actionable steps for this task",
            triggers=["unclear_task", "lack_of_clarity"],
        ))

    if task.energy_required in DEMANDING_ENERGY and is_low_energy_hour(now.astimezone(tz).hour):
        signals.append(ProcrastinationSignal(
            signal_type=SignalType.PATTERN,
            severity=Severity.MEDIUM,
            confidence=0.5,
            description="High-energy task during typical low-energy time",
            suggested_intervention="Schedule this task during your peak energy hours",
            triggers=["energy_mismatch", "timing_issue"],
        ))

    return signals


def is_low_energy_hour(hour: int) -> bool:
    """Early morning (6–8) and the afternoon dip (14–16), inclusive."""
    return any(hour in window for window in LOW_ENERGY_HOURS)


def local_hour(instant: datetime, tz: tzinfo) -> int | None:
    """Hour of day of *instant* in *tz*, or None when the shifted value
    falls outside the datetime range (instants near year 1 or 9999)."""
    try:
        return instant.astimezone(tz).hour
    except OverflowError:
        return None
