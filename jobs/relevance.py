# jobs/relevance.py
from __future__ import annotations

import hashlib
from typing import Any, Dict, List, Optional

from models.job import JobPosting

# -------------------------------------------------------------------
# Entry-level relevance filter
# -------------------------------------------------------------------
ENTRY_LEVEL_TERMS = ("intern", "graduate", "entry", "junior", "entry level")
MAX_RESULTS = 15


def _lower(x: Any) -> str:
    return str(x).lower() if x is not None else ""


def is_entry_level(job: Dict[str, Any]) -> bool:
    """
    True if title or description mentions any entry-level marker.
    Missing fields count as empty text.
    """
    title = _lower(job.get("job_title"))
    description = _lower(job.get("job_description"))
    return any(term in title for term in ENTRY_LEVEL_TERMS) or any(
        term in description for term in ENTRY_LEVEL_TERMS
    )


def filter_relevant_jobs(raw_jobs: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Keep entry-level postings in provider order, then take the first 15.
    This is a prefix take, not a ranked top-15.
    """
    kept: List[Dict[str, Any]] = []
    for job in raw_jobs or []:
        if not isinstance(job, dict):
            continue
        if is_entry_level(job):
            kept.append(job)
            if len(kept) >= MAX_RESULTS:
                break
    return kept


# -------------------------------------------------------------------
# Normalization into JobPosting
# -------------------------------------------------------------------
def _safe_str(x: Any) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def stable_job_id(*parts: Any) -> str:
    raw = "|".join(_lower(p).strip() for p in parts)
    return "jsearch_" + hashlib.sha1(raw.encode("utf-8")).hexdigest()[:16]


def normalize_posting(job: Dict[str, Any]) -> JobPosting:
    employer = _safe_str(job.get("employer_name"))
    title = _safe_str(job.get("job_title"))
    apply_link = _safe_str(job.get("job_apply_link"))

    job_id = _safe_str(job.get("job_id")) or stable_job_id(employer, title, apply_link)

    return JobPosting(
        job_id=job_id,
        employer_name=employer,
        job_title=title,
        job_description=job.get("job_description") or None,
        job_apply_link=apply_link,
        job_city=_safe_str(job.get("job_city")),
        job_country=_safe_str(job.get("job_country")),
    )
