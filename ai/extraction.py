# ai/extraction.py
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

from pydantic import ValidationError as ModelValidationError

from ai.client import GatewayResponse
from models.project import ProjectRecommendation

logger = logging.getLogger(__name__)

PARSE_ERROR = "Failed to parse project idea from LLM. Raw response included."
MISSING_FIELDS_ERROR = "Project idea from LLM is missing required fields. Raw response included."

CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")

__all__ = [
    "ParsedOutput",
    "DegradedOutput",
    "unwrap_json_text",
    "parse_model_output",
    "extract_project_recommendation",
]


# -------------------------------------------------------------------
# Tagged result
# -------------------------------------------------------------------
@dataclass(frozen=True)
class ParsedOutput:
    data: Any


@dataclass(frozen=True)
class DegradedOutput:
    error: str
    raw_text: str


ModelOutput = Union[ParsedOutput, DegradedOutput]


# -------------------------------------------------------------------
# Unwrapping strategies (ordered; first match wins)
# -------------------------------------------------------------------
def _fenced_block(text: str) -> Optional[str]:
    match = CODE_BLOCK_RE.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return None


def _leading_json_fence(text: str) -> Optional[str]:
    if text.startswith("```json"):
        return text[7:len(text) - 3].strip()
    return None


def _leading_fence(text: str) -> Optional[str]:
    if text.startswith("```"):
        return text[3:len(text) - 3].strip()
    return None


UNWRAP_STRATEGIES: List[Callable[[str], Optional[str]]] = [
    _fenced_block,
    _leading_json_fence,
    _leading_fence,
]


def unwrap_json_text(text: Optional[str]) -> str:
    """Strip markdown code fencing around a JSON answer; plain text passes through."""
    text = text or ""
    for strategy in UNWRAP_STRATEGIES:
        unwrapped = strategy(text)
        if unwrapped is not None:
            return unwrapped
    return text


def parse_model_output(text: Optional[str]) -> ModelOutput:
    """
    Unwrap then attempt one strict JSON parse.
    Never raises: a parse failure is the DegradedOutput branch.
    """
    candidate = unwrap_json_text(text)
    try:
        return ParsedOutput(data=json.loads(candidate))
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse JSON from LLM response: %s", e)
        logger.debug("Original LLM response text: %r", text)
        return DegradedOutput(error=PARSE_ERROR, raw_text=text if text is not None else "")


# -------------------------------------------------------------------
# ProjectRecommendation assembly
# -------------------------------------------------------------------
def _degraded(error: str, response: GatewayResponse) -> ProjectRecommendation:
    return ProjectRecommendation(
        error=error,
        rawResponse=response.text if response.text is not None else "",
        groundingHtml=response.grounding_html,
        webSearchQueries=response.web_search_queries,
    )


def extract_project_recommendation(response: GatewayResponse) -> ProjectRecommendation:
    """Merge the parsed record with grounding artifacts, or degrade with the raw text."""
    output = parse_model_output(response.text)

    if isinstance(output, DegradedOutput):
        return _degraded(output.error, response)

    if not isinstance(output.data, dict):
        logger.warning("LLM response parsed to %s, expected an object", type(output.data).__name__)
        return _degraded(PARSE_ERROR, response)

    merged = {
        **output.data,
        "groundingHtml": response.grounding_html,
        "webSearchQueries": response.web_search_queries,
    }
    # The model does not get to mark its own output as degraded.
    merged.pop("error", None)
    merged.pop("rawResponse", None)

    try:
        recommendation = ProjectRecommendation.model_validate(merged)
    except ModelValidationError as e:
        logger.warning("LLM response has unexpected field types: %s", e)
        return _degraded(PARSE_ERROR, response)

    missing = recommendation.missing_fields()
    if missing:
        logger.warning("LLM response is missing fields: %s", ", ".join(missing))
        return _degraded(MISSING_FIELDS_ERROR, response)

    return recommendation
