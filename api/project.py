# api/project.py
import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

import settings
from ai.generation import generate_project_recommendation
from core.errors import SuggesterError, ValidationError
from models.project import ProjectGenerateRequest
from telemetry.logger import log_event

router = APIRouter(tags=["project"])
logger = logging.getLogger(__name__)


@router.post("/project/generate")
async def generate(req: ProjectGenerateRequest) -> JSONResponse:
    roles = [r for r in (req.roles or []) if r and r.strip()]
    field = (req.field or "").strip()
    jobs = req.selectedJobDetails or []

    if not field or not roles or not jobs:
        log_event("project_generate_error", {"error_code": "VALIDATION"})
        raise ValidationError("Missing required fields for project generation")

    t0 = time.time()
    log_event("project_generate_received", {"roles_count": len(roles), "jobs_count": len(jobs)})

    try:
        recommendation = await generate_project_recommendation(field, roles, req.location or "", jobs)
    except SuggesterError as e:
        log_event(
            "project_generate_error",
            {"error_code": "UPSTREAM", "latency_ms": int((time.time() - t0) * 1000)},
        )
        logger.error("project generation failed: %s (%s)", e.message, e.details)
        raise

    latency_ms = int((time.time() - t0) * 1000)

    if recommendation.is_degraded:
        log_event("project_generate_degraded", {"latency_ms": latency_ms})
        return JSONResponse(recommendation.to_payload(), status_code=settings.PARSE_FAILURE_STATUS)

    log_event(
        "project_generate_responded",
        {
            "latency_ms": latency_ms,
            "grounded": bool(recommendation.webSearchQueries),
            "checklist_len": len(recommendation.projectChecklist),
        },
    )
    return JSONResponse(recommendation.to_payload())
