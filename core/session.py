# core/session.py
"""
Consumer-side flow: preferences -> job search -> selection -> generation -> reveal.

Holds only in-memory state for one user; nothing is persisted between sessions.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from core.catalog import get_field_label, get_role_label, get_roles_for_field
from core.errors import ValidationError
from core.reveal import RevealScheduler
from core.selection import resolve_selection
from models.job import JobPosting, SelectedJobDetail
from models.project import ProjectRecommendation

logger = logging.getLogger(__name__)

MISSING_PREFERENCES = "Please select a field, at least one role, and enter a location."
NO_JOBS_FOUND = "No jobs found for your criteria. Try broadening your search."
NO_JOBS_SELECTED = "Please select at least one job you are interested in."
SEARCH_FAILED = "Failed to fetch jobs."
GENERATE_FAILED = "Failed to generate project idea."


def fallback_recommendation(error: str, raw_response: Optional[str]) -> ProjectRecommendation:
    """What the user sees when the server could not structure the model's answer."""
    return ProjectRecommendation(
        projectTitle="Error from AI",
        projectDescription=f"The AI couldn't generate a structured project idea. {error}",
        projectAppeal="Please check the raw response below for details or try again.",
        skillsRequired="N/A",
        keySkillsDemonstrated=[],
        projectChecklist=["Review the raw AI output if available."],
        error=error,
        rawResponse=raw_response,
    )


def _json_object(resp: httpx.Response) -> Dict[str, Any]:
    """The response body as a dict; anything else (no body, HTML, a list) is empty."""
    try:
        body = resp.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(resp: httpx.Response, default: str) -> str:
    return str(_json_object(resp).get("error") or default)


class SuggesterSession:
    def __init__(self, http: httpx.AsyncClient, scheduler: Optional[RevealScheduler] = None):
        self.http = http
        self.scheduler = scheduler or RevealScheduler()

        self.field: str = ""
        self.roles: List[str] = []
        self.location: str = ""

        self.jobs: List[JobPosting] = []
        self.selected_ids: List[str] = []
        self.recommendation: Optional[ProjectRecommendation] = None
        self.error: Optional[str] = None

    # ----------------------------
    # Preferences
    # ----------------------------
    @property
    def available_roles(self) -> List[str]:
        return [r.value for r in get_roles_for_field(self.field)]

    def select_field(self, value: str) -> None:
        self.field = value
        self.roles = []
        self._clear_results()
        self.error = None

    def toggle_role(self, value: str) -> None:
        if value in self.roles:
            self.roles = [r for r in self.roles if r != value]
        else:
            self.roles = [*self.roles, value]

    def set_location(self, value: str) -> None:
        self.location = value

    # ----------------------------
    # Selection
    # ----------------------------
    def toggle_job(self, job_id: str) -> None:
        if job_id in self.selected_ids:
            self.selected_ids = [j for j in self.selected_ids if j != job_id]
            return
        if job_id not in {job.job_id for job in self.jobs}:
            raise ValidationError("Job is not in the current search results", details=job_id)
        self.selected_ids = [*self.selected_ids, job_id]

    def selected_job_details(self) -> List[SelectedJobDetail]:
        return resolve_selection(self.jobs, self.selected_ids)

    # ----------------------------
    # Remote calls
    # ----------------------------
    async def find_jobs(self) -> List[JobPosting]:
        if not self.field or not self.roles or not self.location:
            self.error = MISSING_PREFERENCES
            return []

        self.error = None
        self._clear_results()

        payload: Dict[str, Any] = {
            "field": self.field,
            "roles": [get_role_label(r) for r in self.roles],
            "location": self.location,
        }
        try:
            resp = await self.http.post("/jobs/search", json=payload)
        except httpx.HTTPError as e:
            logger.error("job search request failed: %s", e)
            self.error = SEARCH_FAILED
            return []

        if resp.is_error:
            self.error = _error_message(resp, SEARCH_FAILED)
            return []

        self.jobs = [JobPosting.model_validate(j) for j in (resp.json().get("jobs") or [])]
        if not self.jobs:
            self.error = NO_JOBS_FOUND
        return self.jobs

    async def generate_project(self) -> Optional[ProjectRecommendation]:
        if not self.selected_ids:
            self.error = NO_JOBS_SELECTED
            return None

        self.error = None
        self.recommendation = None
        self.scheduler.cancel()

        payload = {
            "field": get_field_label(self.field),
            "roles": [get_role_label(r) for r in self.roles],
            "location": self.location,
            "selectedJobDetails": [d.model_dump() for d in self.selected_job_details()],
        }
        try:
            resp = await self.http.post("/project/generate", json=payload)
        except httpx.HTTPError as e:
            logger.error("project generation request failed: %s", e)
            self.error = GENERATE_FAILED
            return None

        data = _json_object(resp)

        if data.get("error") and data.get("rawResponse") is not None:
            recommendation = fallback_recommendation(data["error"], data["rawResponse"])
        elif resp.is_error:
            self.error = str(data.get("error") or GENERATE_FAILED)
            return None
        else:
            recommendation = ProjectRecommendation.model_validate(data)
            if recommendation.missing_fields():
                logger.error("project generation returned an incomplete record: %s", recommendation.missing_fields())
                self.error = GENERATE_FAILED
                return None

        self.recommendation = recommendation
        self.scheduler.start(recommendation)
        return recommendation

    # ----------------------------
    # Teardown
    # ----------------------------
    def close(self) -> None:
        self.scheduler.cancel()

    def _clear_results(self) -> None:
        self.jobs = []
        self.selected_ids = []
        self.recommendation = None
        self.scheduler.cancel()
