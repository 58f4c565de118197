# api/jobs.py
import logging
import time

from fastapi import APIRouter

from core.errors import SuggesterError, ValidationError
from jobs.search import search_jobs
from models.job import JobSearchRequest, JobSearchResponse
from telemetry.logger import log_event

router = APIRouter(tags=["jobs"])
logger = logging.getLogger(__name__)


@router.post("/jobs/search", response_model=JobSearchResponse, response_model_exclude_none=True)
async def search(req: JobSearchRequest) -> JobSearchResponse:
    """
    Compose the query, make one JSearch call, keep up to 15 entry-level postings.
    An empty result is a normal 200 with `jobs: []`.
    """
    roles = [r for r in (req.roles or []) if r and r.strip()]
    location = (req.location or "").strip()
    field = (req.field or "").strip()

    if not roles or not location or not field:
        log_event("jobs_search_error", {"error_code": "VALIDATION"})
        raise ValidationError("Missing required fields: roles, location, field")

    t0 = time.time()
    log_event("jobs_search_received", {"roles_count": len(roles), "field": field})

    try:
        jobs = await search_jobs(roles, location)
    except SuggesterError as e:
        log_event("jobs_search_error", {"error_code": "UPSTREAM", "latency_ms": int((time.time() - t0) * 1000)})
        logger.error("job search failed: %s (%s)", e.message, e.details)
        raise

    log_event(
        "jobs_search_responded",
        {"jobs_count": len(jobs), "latency_ms": int((time.time() - t0) * 1000)},
    )
    return JobSearchResponse(jobs=jobs)
