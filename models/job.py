# models/job.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobPosting(BaseModel):
    """A single listing from the job-search provider (JSearch field names)."""

    model_config = ConfigDict(frozen=True)

    job_id: str
    employer_name: Optional[str] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    job_apply_link: Optional[str] = None
    job_city: Optional[str] = None
    job_country: Optional[str] = None


class SelectedJobDetail(BaseModel):
    title: str = "N/A"
    description: str = "N/A"
    company: str = "N/A"


class JobSearchRequest(BaseModel):
    roles: Optional[List[str]] = None
    location: Optional[str] = None
    field: Optional[str] = None


class JobSearchResponse(BaseModel):
    jobs: List[JobPosting] = Field(default_factory=list)
