# jobs/search.py
from __future__ import annotations

import logging
from typing import List, Sequence

from jobs.jsearch import fetch_jsearch_jobs
from jobs.relevance import filter_relevant_jobs, normalize_posting
from models.job import JobPosting

logger = logging.getLogger(__name__)


def compose_search_query(roles: Sequence[str], location: str) -> str:
    """["Software Engineer"], "Cape Town" -> "Software Engineer internship in Cape Town"."""
    return f"{' or '.join(roles)} internship in {location}"


async def search_jobs(roles: Sequence[str], location: str) -> List[JobPosting]:
    query = compose_search_query(roles, location)
    payload = await fetch_jsearch_jobs(query)

    raw = payload.get("data")
    relevant = filter_relevant_jobs(raw)

    logger.info(
        "JSearch returned %d postings, %d kept for query=%r",
        len(raw or []),
        len(relevant),
        query,
    )
    return [normalize_posting(job) for job in relevant]
