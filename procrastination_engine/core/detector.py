"""ProcrastinationDetector: the stateful procrastination risk engine.

State:
    - rolling BehaviorEvent history (default cap 100, oldest dropped first)
    - rolling TaskSnapshot history (default cap 50, oldest dropped first)
    - PatternScores (six tendencies in [0, 1], monotonic)

Pattern accumulation:
    An event moves pattern scores only when it happened within the pattern
    window (default 24h) of "now" at insertion time.  Older events, and
    events whose timestamp could not be parsed, are still retained for
    the hour-of-day analysis.

        TASK_POSTPONED            → task_postponement_frequency  += 0.10
        PROCRASTINATION_DETECTED  → deadline_pressure_tendency   += 0.20
        INTERVENTION_DISMISSED    → distraction_susceptibility   += 0.15
        mood OVERWHELMED          → overwhelm_frequency          += 0.10
        mood ANXIOUS              → perfectionism_score          += 0.05

    Mood increments apply in addition to any action increment.

Concurrency:
    One logical owner per detector.  There is no internal locking; hosts
    that share a detector across tasks must serialise calls themselves
    (see ``store.detector_store.DetectorStore``).
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Mapping

from procrastination_engine.core.analyzers import (
    behavioral_signals,
    emotional_signals,
    task_signals,
    temporal_signals,
)
from procrastination_engine.core.interventions import select_intervention
from procrastination_engine.core.scoring import (
    SeverityWeights,
    build_recommendations,
    compute_risk_score,
)
from procrastination_engine.domain.behavior import BehaviorEvent
from procrastination_engine.domain.enums import EmotionalState, PatternName, UserAction
from procrastination_engine.domain.patterns import PatternScores
from procrastination_engine.domain.signal import (
    Intervention,
    ProcrastinationAnalysis,
    ProcrastinationSignal,
)
from procrastination_engine.domain.task import TaskSnapshot
from procrastination_engine.foundation.clock import Clock, ensure_aware, utc_now

logger = logging.getLogger(__name__)

ACTION_INCREMENTS: dict[UserAction, tuple[PatternName, float]] = {
    UserAction.TASK_POSTPONED: (PatternName.TASK_POSTPONEMENT_FREQUENCY, 0.10),
    UserAction.PROCRASTINATION_DETECTED: (PatternName.DEADLINE_PRESSURE_TENDENCY, 0.20),
    UserAction.INTERVENTION_DISMISSED: (PatternName.DISTRACTION_SUSCEPTIBILITY, 0.15),
}

MOOD_INCREMENTS: dict[EmotionalState, tuple[PatternName, float]] = {
    EmotionalState.OVERWHELMED: (PatternName.OVERWHELM_FREQUENCY, 0.10),
    EmotionalState.ANXIOUS: (PatternName.PERFECTIONISM_SCORE, 0.05),
}


class ProcrastinationDetector:
    """Rule-based procrastination risk scorer for a single user session.

    Args:
        clock: Source of "now".  Defaults to the system UTC clock.
        tz: Zone in which hour-of-day rules are evaluated.
        behavior_limit: Maximum retained behavior events.
        task_limit: Maximum retained task snapshots.
        pattern_window: Maximum event age that still moves pattern scores.
        intervention_threshold: Risk above which an intervention is needed.
        severity_weights: Weights used by the risk aggregation.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        tz: tzinfo = timezone.utc,
        behavior_limit: int = 100,
        task_limit: int = 50,
        pattern_window: timedelta = timedelta(hours=24),
        intervention_threshold: float = 0.6,
        severity_weights: SeverityWeights | None = None,
    ) -> None:
        if behavior_limit < 1 or task_limit < 1:
            raise ValueError("history limits must be positive")

        self._clock = clock
        self._tz = tz
        self._pattern_window = pattern_window
        self._intervention_threshold = intervention_threshold
        self._severity_weights = severity_weights or SeverityWeights()
        self._behavior: deque[BehaviorEvent] = deque(maxlen=behavior_limit)
        self._tasks: deque[TaskSnapshot] = deque(maxlen=task_limit)
        self._patterns = PatternScores()

    # ── Recording ────────────────────────────────────────────────────────

    def record_behavior(self, event: BehaviorEvent) -> None:
        """Retain *event* and fold it into the pattern scores if recent."""
        self._behavior.append(event)
        self._update_patterns(event)

    def record_task(self, task: TaskSnapshot) -> None:
        """Retain a task snapshot.  No other side effects."""
        self._tasks.append(task)
        logger.debug("Recorded task snapshot %s (tasks=%d)", task.id, len(self._tasks))

    # ── Analysis ─────────────────────────────────────────────────────────

    def analyze(
        self,
        current_task: TaskSnapshot | None = None,
        current_mood: EmotionalState | str | None = None,
    ) -> ProcrastinationAnalysis:
        """Run all analyzers and aggregate them into a risk analysis.

        Signal order is temporal, behavioral, emotional, task.
        """
        now = self._now()
        mood = self._coerce_mood(current_mood)
        patterns = self._patterns.snapshot()

        signals: list[ProcrastinationSignal] = []
        signals.extend(temporal_signals(now, self._behavior, current_task, self._tz))
        signals.extend(behavioral_signals(patterns))
        signals.extend(emotional_signals(mood))
        signals.extend(task_signals(current_task, now, self._tz))

        risk_score = compute_risk_score(signals, self._severity_weights)
        analysis = ProcrastinationAnalysis(
            risk_score=risk_score,
            signals=signals,
            recommendations=build_recommendations(signals, risk_score),
            intervention_needed=risk_score > self._intervention_threshold,
        )
        logger.debug(
            "Analysis: risk=%.3f signals=%d intervention_needed=%s",
            analysis.risk_score,
            len(signals),
            analysis.intervention_needed,
        )
        return analysis

    def get_personalized_intervention(self, analysis: ProcrastinationAnalysis) -> Intervention:
        """Nudge bundle for *analysis*; independent of detector state."""
        return select_intervention(analysis)

    # ── Pattern import / export ──────────────────────────────────────────

    def export_patterns(self) -> dict[str, float]:
        return self._patterns.export_scores()

    def import_patterns(self, patterns: Mapping[str, float]) -> None:
        self._patterns.import_scores(patterns)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def behavior_history(self) -> list[BehaviorEvent]:
        """Read-only view of retained events, oldest first."""
        return list(self._behavior)

    @property
    def task_history(self) -> list[TaskSnapshot]:
        return list(self._tasks)

    @property
    def patterns(self) -> dict[PatternName, float]:
        return self._patterns.snapshot()

    def summary(self) -> dict:
        return {
            "behavior_count": len(self._behavior),
            "task_count": len(self._tasks),
            "patterns": self.export_patterns(),
        }

    # ── Internals ────────────────────────────────────────────────────────

    def _now(self) -> datetime:
        return ensure_aware(self._clock())

    def _update_patterns(self, event: BehaviorEvent) -> None:
        occurred_at = event.occurred_at
        if occurred_at is None:
            logger.warning(
                "Skipping pattern update for event %s: unparseable timestamp %r",
                event.event_id,
                event.timestamp,
            )
            return

        if self._now() - occurred_at > self._pattern_window:
            logger.debug("Event %s outside pattern window; stored only", event.event_id)
            return

        increments: list[tuple[PatternName, float]] = []
        if event.action in ACTION_INCREMENTS:
            increments.append(ACTION_INCREMENTS[event.action])
        if event.emotional_state in MOOD_INCREMENTS:
            increments.append(MOOD_INCREMENTS[event.emotional_state])

        for name, amount in increments:
            updated = self._patterns.increment(name, amount)
            logger.debug("Pattern %s → %.2f after %s", name.value, updated, event.action.value)

    @staticmethod
    def _coerce_mood(mood: EmotionalState | str | None) -> EmotionalState | None:
        if mood is None or isinstance(mood, EmotionalState):
            return mood
        try:
            return EmotionalState(mood)
        except ValueError:
            logger.debug("Unrecognised mood %r; no emotional signal", mood)
            return None
