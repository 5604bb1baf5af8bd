"""PatternScores: slowly accumulating behavior tendencies.

Six named scalars, each clamped to [0, 1].  Scores only ever grow: there
is no time-based decay, so a tendency saturates once it reaches 1.0.
The map can be exported to and imported from a plain ``{name: float}``
mapping for callers that persist it between sessions.
"""

from __future__ import annotations

import logging
from typing import Mapping

from procrastination_engine.domain.enums import PatternName

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


class PatternScores:
    """Mutable map of PatternName → score in [0, 1].

    Not thread-safe.  Owned by a single ProcrastinationDetector.
    """

    __slots__ = ("_scores",)

    def __init__(self) -> None:
        self._scores: dict[PatternName, float] = {name: 0.0 for name in PatternName}

    # ── Mutation ─────────────────────────────────────────────────────────

    def increment(self, name: PatternName, amount: float) -> float:
        """Add *amount* to a score, capped at 1.0.  Returns the new value."""
        updated = _clamp(self._scores[name] + amount)
        self._scores[name] = updated
        return updated

    def import_scores(self, scores: Mapping[str, float]) -> None:
        """Overwrite scores from a plain mapping.

        Values are clamped into [0, 1].  Unknown names and values that are
        not numbers are ignored.
        """
        for key, value in scores.items():
            try:
                name = PatternName(key)
            except ValueError:
                logger.warning("Ignoring unknown pattern name on import: %r", key)
                continue
            try:
                self._scores[name] = _clamp(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric value for pattern %s: %r", key, value)

    # ── Queries ──────────────────────────────────────────────────────────

    def get(self, name: PatternName) -> float:
        return self._scores[name]

    def __getitem__(self, name: PatternName) -> float:
        return self._scores[name]

    def snapshot(self) -> dict[PatternName, float]:
        """Copy of the current scores, safe to hand to pure analyzers."""
        return dict(self._scores)

    def export_scores(self) -> dict[str, float]:
        """Plain ``{pattern_name: score}`` mapping for persistence."""
        return {name.value: score for name, score in self._scores.items()}
