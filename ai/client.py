# ai/client.py
from typing import Optional

from openai import AsyncOpenAI

import settings


def build_client() -> Optional[AsyncOpenAI]:
    """
    One client per generation service. None when no key is configured.
    The SDK's own retries are off: the orchestrator owns the retry schedule.
    """
    if not settings.OPENAI_API_KEY:
        return None
    return AsyncOpenAI(
        api_key=settings.OPENAI_API_KEY,
        timeout=settings.OPENAI_TIMEOUT,
        max_retries=0,
    )
