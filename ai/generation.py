# ai/generation.py
from typing import Optional, Sequence

from ai.client import GenerativeTextGateway, get_gateway
from ai.extraction import extract_project_recommendation
from ai.prompts import build_project_request
from models.job import SelectedJobDetail
from models.project import ProjectRecommendation


async def generate_project_recommendation(
    field: str,
    roles: Sequence[str],
    location: str,
    jobs: Sequence[SelectedJobDetail],
    gateway: Optional[GenerativeTextGateway] = None,
) -> ProjectRecommendation:
    """
    Build the prompt, make exactly one gateway call, and extract the result.

    Upstream failures (including an empty candidate list) propagate as
    UpstreamError. Unparseable output comes back as a degraded recommendation.
    """
    request = build_project_request(field, roles, location, jobs)
    gateway = gateway or get_gateway()
    response = await gateway.generate(request.prompt, request.config)
    return extract_project_recommendation(response)
