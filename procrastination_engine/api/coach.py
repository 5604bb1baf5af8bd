"""REST endpoints for the procrastination coach.

Paths:
    POST /api/behavior                      record a behavior event
    POST /api/users/{user_id}/tasks         record a task snapshot
    POST /api/users/{user_id}/analyze       risk analysis + intervention
    GET  /api/users/{user_id}/patterns      export pattern scores
    PUT  /api/users/{user_id}/patterns      import pattern scores

Bodies are validated at the boundary by pydantic; invalid payloads are
rejected with 422 before they reach the store.  Responses use the
camelCase shapes callers already know (riskScore, suggestedIntervention…).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from procrastination_engine.domain.behavior import BehaviorEvent
from procrastination_engine.domain.task import TaskSnapshot
from procrastination_engine.explain.formatter import AnalysisFormatter, risk_level
from procrastination_engine.models.requests import AnalyzeRequest
from procrastination_engine.store.detector_store import DetectorStore

logger = logging.getLogger(__name__)


def create_coach_router(store: DetectorStore) -> APIRouter:
    """Factory that wires the coach endpoints to a concrete DetectorStore."""

    router = APIRouter(prefix="/api", tags=["coach"])

    @router.post("/behavior")
    async def record_behavior(event: BehaviorEvent) -> dict[str, Any]:
        session = await store.record_behavior(event)
        return {
            "status": "accepted",
            "userId": event.user_id,
            "behaviorCount": len(session.detector.behavior_history),
            "patterns": session.detector.export_patterns(),
        }

    @router.post("/users/{user_id}/tasks")
    async def record_task(user_id: str, task: TaskSnapshot) -> dict[str, Any]:
        session = await store.record_task(user_id, task)
        return {
            "status": "accepted",
            "userId": user_id,
            "taskCount": len(session.detector.task_history),
        }

    @router.post("/users/{user_id}/analyze")
    async def analyze(user_id: str, request: AnalyzeRequest) -> dict[str, Any]:
        analysis, intervention = await store.analyze(
            user_id,
            current_task=request.current_task,
            current_mood=request.current_mood,
        )
        if analysis.intervention_needed:
            logger.info("Intervention needed for user %s (risk=%.2f)", user_id, analysis.risk_score)
        return {
            "analysis": analysis.model_dump(mode="json", by_alias=True),
            "intervention": intervention.model_dump(mode="json", by_alias=True),
            "riskLevel": risk_level(analysis.risk_score).value,
            "narrative": AnalysisFormatter.format_plain(analysis, intervention),
        }

    @router.get("/users/{user_id}/patterns")
    async def export_patterns(user_id: str) -> dict[str, float]:
        patterns = await store.export_patterns(user_id)
        if patterns is None:
            raise HTTPException(status_code=404, detail=f"No session for user {user_id}")
        return patterns

    @router.put("/users/{user_id}/patterns")
    async def import_patterns(user_id: str, patterns: dict[str, float]) -> dict[str, float]:
        return await store.import_patterns(user_id, patterns)

    return router
