# core/errors.py
from __future__ import annotations

from typing import Optional


class SuggesterError(Exception):
    """Base class for errors that stop a request at the API boundary."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(SuggesterError):
    """A required request field is missing or empty. No upstream call is made."""

    status_code = 400


class UpstreamError(SuggesterError):
    """The job-search or generative-text collaborator failed. Never retried."""

    status_code = 500


class EmptyResponseError(UpstreamError):
    """The generative-text service answered without any candidates."""
