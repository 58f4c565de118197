# jobs/jsearch.py
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

import settings
from core.errors import UpstreamError

logger = logging.getLogger(__name__)

SEARCH_ERROR = "Failed to fetch jobs from JSearch API"


def _headers() -> Dict[str, str]:
    return {
        "X-RapidAPI-Key": settings.RAPIDAPI_KEY,
        "X-RapidAPI-Host": settings.JSEARCH_HOST,
    }


async def fetch_jsearch_jobs(query: str, *, num_pages: int = 1) -> Dict[str, Any]:
    """
    One GET against JSearch's /search endpoint. Returns the raw JSON payload.

    Single attempt: any transport, auth or quota failure becomes an
    UpstreamError carrying the original message.
    """
    if not settings.RAPIDAPI_KEY:
        raise UpstreamError(SEARCH_ERROR, details="RAPIDAPI_KEY is not set")

    url = f"https://{settings.JSEARCH_HOST}/search"
    params = {"query": query, "num_pages": str(num_pages)}

    logger.debug("JSearch request: query=%r num_pages=%s", query, num_pages)

    try:
        async with httpx.AsyncClient(timeout=settings.JSEARCH_TIMEOUT_S) as client_http:
            resp = await client_http.get(url, params=params, headers=_headers())
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as e:
        logger.error("JSearch API error: status=%s body=%s", e.response.status_code, e.response.text[:500])
        raise UpstreamError(SEARCH_ERROR, details=str(e)) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.error("JSearch API error: %s", e)
        raise UpstreamError(SEARCH_ERROR, details=str(e)) from e

    if not isinstance(data, dict):
        raise UpstreamError(SEARCH_ERROR, details=f"Unexpected payload type: {type(data).__name__}")
    return data
