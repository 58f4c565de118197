# core/selection.py
from __future__ import annotations

from typing import Iterable, List, Sequence

from core.errors import ValidationError
from models.job import JobPosting, SelectedJobDetail


def to_selected_detail(job: JobPosting) -> SelectedJobDetail:
    return SelectedJobDetail(
        title=job.job_title or "N/A",
        description=job.job_description or "N/A",
        company=job.employer_name or "N/A",
    )


def resolve_selection(jobs: Sequence[JobPosting], selected_ids: Iterable[str]) -> List[SelectedJobDetail]:
    """
    Turn selected posting ids into prompt-ready summaries, in result-set order.
    Every id must belong to the current result set.
    """
    wanted = list(dict.fromkeys(selected_ids))
    known = {job.job_id for job in jobs}

    unknown = [jid for jid in wanted if jid not in known]
    if unknown:
        raise ValidationError(
            "Selected jobs are not in the current search results",
            details=", ".join(unknown),
        )

    chosen = set(wanted)
    return [to_selected_detail(job) for job in jobs if job.job_id in chosen]
