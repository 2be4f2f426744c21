"""
Shared fixtures: fake generation services, a recording sleep, isolated telemetry.
"""
import asyncio
import os
import sys
import tempfile

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings read the environment at import time, so this has to run first.
os.environ["TELEMETRY_DB"] = os.path.join(tempfile.mkdtemp(prefix="flow-telemetry-"), "telemetry.sqlite3")
os.environ["OPENAI_API_KEY"] = ""
os.environ["GENERATION_SERVICE_URL"] = ""
os.environ["ON_EXHAUSTED"] = "fallback"


def make_questions(count=5, options=6):
    return [
        {
            "id": f"Qai{i}",
            "question": f"Generated question {i}?",
            "options": [f"Answer {i}.{j}" for j in range(1, options + 1)],
        }
        for i in range(1, count + 1)
    ]


class FakeGenerationService:
    """Scripted stand-in for the external generator."""

    def __init__(self, questions=None, narrative="A generated narrative.", question_failures=0, narrative_failures=0):
        self.questions = make_questions() if questions is None else questions
        self.narrative = narrative
        self.question_failures = question_failures
        self.narrative_failures = narrative_failures
        self.question_calls = []
        self.narrative_calls = []

    async def generate_questions(self, industry, goal, pain):
        self.question_calls.append((industry, goal, pain))
        if len(self.question_calls) <= self.question_failures:
            raise ConnectionError("upstream unavailable")
        return self.questions

    async def generate_narrative(self, industry, goal, pain, transcript):
        self.narrative_calls.append((industry, goal, pain, transcript))
        if len(self.narrative_calls) <= self.narrative_failures:
            raise ConnectionError("upstream unavailable")
        return self.narrative


class GatedGenerationService(FakeGenerationService):
    """Holds every response until release() is called."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.gate = asyncio.Event()
        self.entered = asyncio.Event()

    def release(self):
        self.gate.set()

    async def generate_questions(self, industry, goal, pain):
        self.entered.set()
        await self.gate.wait()
        return await super().generate_questions(industry, goal, pain)

    async def generate_narrative(self, industry, goal, pain, transcript):
        self.entered.set()
        await self.gate.wait()
        return await super().generate_narrative(industry, goal, pain, transcript)


class SleepRecorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def no_sleep():
    return SleepRecorder()


@pytest.fixture
def fake_service():
    return FakeGenerationService


@pytest.fixture
def gated_service():
    return GatedGenerationService


@pytest.fixture
def question_payload():
    return make_questions


@pytest.fixture
def make_orchestrator(no_sleep):
    from core.orchestrator import GenerationOrchestrator

    def _make(service=None, **kwargs):
        kwargs.setdefault("sleep", no_sleep)
        return GenerationOrchestrator(service, **kwargs)

    return _make


@pytest.fixture
def make_flow(make_orchestrator):
    from core.flow import AssessmentFlow

    def _make(service=None, **kwargs):
        return AssessmentFlow(make_orchestrator(service, **kwargs))

    return _make
