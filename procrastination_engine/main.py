"""procrastination-engine: behavior-driven procrastination risk coaching.

This is the application entry point.  It wires the per-user DetectorStore
and the coach endpoints together.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import FastAPI

from procrastination_engine.api.coach import create_coach_router
from procrastination_engine.config import settings
from procrastination_engine.core.detector import ProcrastinationDetector
from procrastination_engine.core.scoring import SeverityWeights
from procrastination_engine.foundation.clock import resolve_timezone
from procrastination_engine.store.detector_store import DetectorStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Detector factory ─────────────────────────────────────────────────────────

_local_tz = resolve_timezone(settings.local_timezone)
_severity_weights = SeverityWeights(
    low=settings.severity_weight_low,
    medium=settings.severity_weight_medium,
    high=settings.severity_weight_high,
)


def build_detector() -> ProcrastinationDetector:
    return ProcrastinationDetector(
        tz=_local_tz,
        behavior_limit=settings.behavior_history_limit,
        task_limit=settings.task_history_limit,
        pattern_window=timedelta(hours=settings.pattern_window_hours),
        intervention_threshold=settings.intervention_threshold,
        severity_weights=_severity_weights,
    )


# ── State ────────────────────────────────────────────────────────────────────

store = DetectorStore(
    factory=build_detector,
    ttl=timedelta(minutes=settings.session_ttl_minutes),
)

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Procrastination risk analysis and coaching interventions",
    version="0.1.0",
    debug=settings.debug,
)

app.include_router(create_coach_router(store))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    expired = await store.expire_stale()
    return {
        "status": "ok",
        "active_sessions": await store.active_count(),
        "expired_sessions": len(expired),
    }


# ── Entry point ──────────────────────────────────────────────────────────────

def run() -> None:
    import uvicorn

    uvicorn.run(
        "procrastination_engine.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
