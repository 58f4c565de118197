# ai/client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from google import genai
from google.genai import types
from openai import AsyncOpenAI

import settings
from ai.prompts import GenerationConfig
from core.errors import EmptyResponseError, UpstreamError

logger = logging.getLogger(__name__)

GENERATION_ERROR = "Failed to generate project idea"


@dataclass(frozen=True)
class GatewayResponse:
    text: Optional[str]
    grounding_html: Optional[str] = None
    web_search_queries: Optional[List[str]] = None


class GenerativeTextGateway(Protocol):
    async def generate(self, prompt: str, config: GenerationConfig) -> GatewayResponse: ...


# -------------------------------------------------------------------
# Gemini (search-grounded)
# -------------------------------------------------------------------
class GeminiGateway:
    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    @staticmethod
    def _content_config(config: GenerationConfig) -> types.GenerateContentConfig:
        tools = [types.Tool(google_search=types.GoogleSearch())] if config.enable_search else None
        return types.GenerateContentConfig(
            temperature=config.temperature,
            top_k=config.top_k,
            top_p=config.top_p,
            max_output_tokens=config.max_output_tokens,
            tools=tools,
            safety_settings=[
                types.SafetySetting(
                    category=types.HarmCategory(category),
                    threshold=types.HarmBlockThreshold(threshold),
                )
                for category, threshold in config.safety_settings
            ],
        )

    async def generate(self, prompt: str, config: GenerationConfig) -> GatewayResponse:
        if not self.api_key:
            raise UpstreamError(GENERATION_ERROR, details="GOOGLE_GEMINI_API_KEY is not set")

        try:
            async with genai.Client(api_key=self.api_key).aio as aclient:
                result = await aclient.models.generate_content(
                    model=self.model,
                    contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                    config=self._content_config(config),
                )
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise UpstreamError(GENERATION_ERROR, details=str(e)) from e

        if not result.candidates:
            logger.error("Gemini API error: no candidates in response")
            raise EmptyResponseError(GENERATION_ERROR, details="Gemini API did not return a response.")

        candidate = result.candidates[0]
        meta = candidate.grounding_metadata

        grounding_html = None
        web_search_queries = None
        if meta is not None:
            if meta.search_entry_point is not None:
                grounding_html = meta.search_entry_point.rendered_content
            if meta.web_search_queries:
                web_search_queries = list(meta.web_search_queries)

        text = None
        if candidate.content is not None and candidate.content.parts:
            text = candidate.content.parts[0].text

        return GatewayResponse(text=text, grounding_html=grounding_html, web_search_queries=web_search_queries)


# -------------------------------------------------------------------
# OpenAI (no grounding metadata)
# -------------------------------------------------------------------
class OpenAIGateway:
    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model

    async def generate(self, prompt: str, config: GenerationConfig) -> GatewayResponse:
        if not self.api_key:
            raise UpstreamError(GENERATION_ERROR, details="OPENAI_API_KEY is not set")

        if config.enable_search:
            logger.debug("OpenAI gateway: search grounding requested but not supported, ignoring")

        try:
            async with AsyncOpenAI(api_key=self.api_key) as client:
                response = await client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=config.temperature,
                    top_p=config.top_p,
                    max_tokens=config.max_output_tokens,
                )
        except Exception as e:
            logger.error("OpenAI API error: %s", e)
            raise UpstreamError(GENERATION_ERROR, details=str(e)) from e

        if not response.choices:
            logger.error("OpenAI API error: no choices in response")
            raise EmptyResponseError(GENERATION_ERROR, details="OpenAI API did not return a response.")

        return GatewayResponse(text=response.choices[0].message.content)


def get_gateway() -> GenerativeTextGateway:
    if settings.LLM_PROVIDER == "openai":
        return OpenAIGateway(api_key=settings.OPENAI_API_KEY, model=settings.OPENAI_MODEL)
    return GeminiGateway(api_key=settings.GOOGLE_GEMINI_API_KEY, model=settings.GEMINI_MODEL)
