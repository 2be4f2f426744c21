# ai/generation.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx
from openai import AsyncOpenAI

import settings
from ai.client import build_client
from ai.extraction import parse_questions_payload
from ai.prompts import (
    NARRATIVE_SYSTEM_PROMPT,
    QUESTIONS_SYSTEM_PROMPT,
    build_narrative_prompt,
    build_questions_prompt,
)
from core.errors import ValidationError

logger = logging.getLogger(__name__)


class GenerationService(Protocol):
    """
    External generator of follow-up questions and the closing narrative.
    Implementations fail loudly: transport errors and malformed payloads raise.
    """

    async def generate_questions(self, industry: str, goal: str, pain: str) -> List[Dict[str, Any]]:
        ...

    async def generate_narrative(self, industry: str, goal: str, pain: str, transcript: str) -> str:
        ...


class OpenAIGenerationService:
    def __init__(
        self,
        client: AsyncOpenAI,
        questions_model: str = "gpt-4o-mini",
        narrative_model: str = "gpt-4o",
    ):
        self.client = client
        self.questions_model = questions_model
        self.narrative_model = narrative_model

    async def generate_questions(self, industry: str, goal: str, pain: str) -> List[Dict[str, Any]]:
        response = await self.client.chat.completions.create(
            model=self.questions_model,
            messages=[
                {"role": "system", "content": QUESTIONS_SYSTEM_PROMPT},
                {"role": "user", "content": build_questions_prompt(industry, goal, pain)},
            ],
            temperature=0.7,
            response_format={"type": "json_object"},
        )
        content = (response.choices[0].message.content or "").strip()
        return parse_questions_payload(content)

    async def generate_narrative(self, industry: str, goal: str, pain: str, transcript: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.narrative_model,
            messages=[
                {"role": "system", "content": NARRATIVE_SYSTEM_PROMPT},
                {"role": "user", "content": build_narrative_prompt(industry, goal, pain, transcript)},
            ],
            temperature=0.5,
        )
        return (response.choices[0].message.content or "").strip()


class HttpGenerationService:
    """
    Remote generator speaking JSON:
      POST {base}/questions  {industry, goal, pain}              -> {"questions": [...]}
      POST {base}/narrative  {industry, goal, pain, transcript}  -> {"narrative": "..."}
    """

    def __init__(self, base_url: str, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(f"{self.base_url}{path}", json=body)
            resp.raise_for_status()
            try:
                data = resp.json()
            except ValueError as e:
                raise ValidationError(path, "response is not JSON") from e

        if not isinstance(data, dict):
            raise ValidationError(path, "response is not a JSON object")
        return data

    async def generate_questions(self, industry: str, goal: str, pain: str) -> List[Dict[str, Any]]:
        data = await self._post("/questions", {"industry": industry, "goal": goal, "pain": pain})
        questions = data.get("questions")
        if not isinstance(questions, list):
            raise ValidationError("questions", "missing questions list")
        return questions

    async def generate_narrative(self, industry: str, goal: str, pain: str, transcript: str) -> str:
        data = await self._post(
            "/narrative",
            {"industry": industry, "goal": goal, "pain": pain, "transcript": transcript},
        )
        narrative = data.get("narrative")
        if not isinstance(narrative, str):
            raise ValidationError("narrative", "missing narrative text")
        return narrative


def build_generation_service() -> Optional[GenerationService]:
    """
    HTTP endpoint first, then OpenAI. None means synthesized content only.
    """
    if settings.GENERATION_SERVICE_URL:
        logger.info("Generation backend: http (%s)", settings.GENERATION_SERVICE_URL)
        return HttpGenerationService(settings.GENERATION_SERVICE_URL, timeout=settings.GENERATION_HTTP_TIMEOUT)

    client = build_client()
    if client is not None:
        logger.info("Generation backend: openai")
        return OpenAIGenerationService(
            client,
            questions_model=settings.OPENAI_QUESTIONS_MODEL,
            narrative_model=settings.OPENAI_NARRATIVE_MODEL,
        )

    logger.info("Generation backend: none (fallback content only)")
    return None
