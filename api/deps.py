# api/deps.py
from functools import lru_cache

from ai.generation import build_generation_service
from core.orchestrator import GenerationOrchestrator


@lru_cache(maxsize=1)
def get_orchestrator() -> GenerationOrchestrator:
    """One orchestrator per process, configured from settings. Tests override this."""
    return GenerationOrchestrator.from_settings(build_generation_service())
