# models/project.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.job import SelectedJobDetail

# Fields that must all be present for a recommendation to count as complete.
NARRATIVE_FIELDS = (
    "projectTitle",
    "projectDescription",
    "projectAppeal",
    "keySkillsDemonstrated",
    "projectChecklist",
    "skillsRequired",
)


class ProjectRecommendation(BaseModel):
    """
    Structured project idea returned by generation.

    Either every narrative field is populated, or `error` is set together with
    `rawResponse` (the degraded form). Unknown keys the model adds are kept.
    """

    model_config = ConfigDict(extra="allow")

    projectTitle: Optional[str] = None
    projectDescription: Optional[str] = None
    projectAppeal: Optional[str] = None
    keySkillsDemonstrated: List[str] = Field(default_factory=list)
    projectChecklist: List[str] = Field(default_factory=list)
    skillsRequired: Optional[str] = None
    markdownReport: Optional[str] = None

    groundingHtml: Optional[str] = None
    webSearchQueries: Optional[List[str]] = None

    error: Optional[str] = None
    rawResponse: Optional[str] = None

    @field_validator("keySkillsDemonstrated", mode="before")
    @classmethod
    def _split_skills(cls, v: Any) -> Any:
        # The prompt asks for "Skill 1, Skill 2"; clients expect a list.
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("projectChecklist", mode="before")
    @classmethod
    def _split_checklist(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            lines = [re.sub(r"^\s*(?:[-*]\s*(?:\[ \]\s*)?|\d+[.)]\s*)", "", line) for line in v.splitlines()]
            return [line.strip() for line in lines if line.strip()]
        return v

    @property
    def is_degraded(self) -> bool:
        return self.error is not None

    def missing_fields(self) -> List[str]:
        return [name for name in NARRATIVE_FIELDS if not getattr(self, name)]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ProjectGenerateRequest(BaseModel):
    field: Optional[str] = None
    roles: Optional[List[str]] = None
    location: Optional[str] = None
    selectedJobDetails: Optional[List[SelectedJobDetail]] = None
