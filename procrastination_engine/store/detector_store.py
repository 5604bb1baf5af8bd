"""In-memory registry of per-user detectors with async-safe access.

Design notes:
    - One ProcrastinationDetector per user id, created lazily from a
      factory on first use.  There is no process-wide detector.
    - An asyncio.Lock guards every read and mutation, which serialises
      concurrent request handlers that touch the same detector.
    - Sessions idle for longer than the TTL are dropped by expire_stale().
      Callers that want pattern scores to survive should export them first.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Mapping

from procrastination_engine.core.detector import ProcrastinationDetector
from procrastination_engine.domain.behavior import BehaviorEvent
from procrastination_engine.domain.enums import EmotionalState
from procrastination_engine.domain.signal import Intervention, ProcrastinationAnalysis
from procrastination_engine.domain.task import TaskSnapshot
from procrastination_engine.foundation.clock import Clock, utc_now

logger = logging.getLogger(__name__)

DetectorFactory = Callable[[], ProcrastinationDetector]


class DetectorSession:
    """A user's detector plus the time it was last touched."""

    __slots__ = ("user_id", "detector", "created_at", "last_active")

    def __init__(self, user_id: str, detector: ProcrastinationDetector, now: datetime) -> None:
        self.user_id = user_id
        self.detector = detector
        self.created_at = now
        self.last_active = now

    def touch(self, now: datetime) -> None:
        self.last_active = now

    def is_expired(self, ttl: timedelta, now: datetime) -> bool:
        return (now - self.last_active) > ttl

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "last_active": self.last_active.isoformat(),
            **self.detector.summary(),
        }


class DetectorStore:
    """Async-safe, in-memory store of DetectorSessions keyed by user id.

    Args:
        factory: Builds a fresh detector for a new user.
        ttl: Idle time after which a session is eligible for removal.
        clock: Source of "now" for session bookkeeping.
    """

    def __init__(
        self,
        factory: DetectorFactory = ProcrastinationDetector,
        ttl: timedelta = timedelta(hours=4),
        clock: Clock = utc_now,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")

        self._factory = factory
        self._ttl = ttl
        self._clock = clock
        self._lock = asyncio.Lock()
        self._sessions: dict[str, DetectorSession] = {}

    # ── Public API ───────────────────────────────────────────────────────

    async def record_behavior(self, event: BehaviorEvent) -> DetectorSession:
        """Route *event* to its user's detector, creating one if needed."""
        async with self._lock:
            session = self._find_or_create(event.user_id)
            session.detector.record_behavior(event)
            logger.debug(
                "Recorded %s for user %s (events=%d)",
                event.action.value,
                event.user_id,
                len(session.detector.behavior_history),
            )
            return session

    async def record_task(self, user_id: str, task: TaskSnapshot) -> DetectorSession:
        async with self._lock:
            session = self._find_or_create(user_id)
            session.detector.record_task(task)
            return session

    async def analyze(
        self,
        user_id: str,
        current_task: TaskSnapshot | None = None,
        current_mood: EmotionalState | str | None = None,
    ) -> tuple[ProcrastinationAnalysis, Intervention]:
        """Analyze a user's current risk and pick the matching intervention."""
        async with self._lock:
            session = self._find_or_create(user_id)
            analysis = session.detector.analyze(current_task, current_mood)
            intervention = session.detector.get_personalized_intervention(analysis)
            return analysis, intervention

    async def export_patterns(self, user_id: str) -> dict[str, float] | None:
        """Pattern scores for *user_id*, or None if there is no session."""
        async with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                return None
            return session.detector.export_patterns()

    async def import_patterns(self, user_id: str, patterns: Mapping[str, float]) -> dict[str, float]:
        async with self._lock:
            session = self._find_or_create(user_id)
            session.detector.import_patterns(patterns)
            return session.detector.export_patterns()

    async def get(self, user_id: str) -> DetectorSession | None:
        async with self._lock:
            return self._sessions.get(user_id)

    async def active_count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def expire_stale(self) -> list[str]:
        """Drop sessions idle past the TTL; return the removed user ids."""
        async with self._lock:
            now = self._clock()
            expired = [
                uid for uid, session in self._sessions.items()
                if session.is_expired(self._ttl, now)
            ]
            for uid in expired:
                del self._sessions[uid]
            if expired:
                logger.info("Expired %d idle detector session(s)", len(expired))
            return expired

    # ── Internals ────────────────────────────────────────────────────────

    def _find_or_create(self, user_id: str) -> DetectorSession:
        """Must be called while holding self._lock."""
        now = self._clock()
        session = self._sessions.get(user_id)
        if session is not None and session.is_expired(self._ttl, now):
            logger.info("Session for user %s expired; starting fresh", user_id)
            session = None

        if session is None:
            session = DetectorSession(user_id, self._factory(), now)
            self._sessions[user_id] = session
            logger.info("Created detector session for user %s", user_id)
        else:
            session.touch(now)
        return session
