# core/orchestrator.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

import settings
from ai.extraction import validate_questions
from ai.generation import GenerationService
from content.fallback import build_fallback_narrative, build_fallback_questions
from core.answers import build_prompt_context, resolve_preliminary_answers, summarise_answers
from core.errors import GenerationFailure, TransientNetworkError, ValidationError
from memory.models import AIQuestion, AnswersState
from telemetry.logger import log_event

logger = logging.getLogger(__name__)

T = TypeVar("T")

POLICY_FALLBACK = "fallback"
POLICY_RAISE = "raise"
POLICIES = {POLICY_FALLBACK, POLICY_RAISE}

OP_QUESTIONS = "generate questions"
OP_NARRATIVE = "generate narrative"


def _validate_narrative(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("narrative", "empty narrative")
    return raw.strip()


class GenerationOrchestrator:
    """
    Calls the generation service with a bounded retry schedule and validates
    every response before accepting it. A malformed response costs an attempt
    exactly like a transport error.

    Once the budget is spent the policy decides: "fallback" returns synthesized
    content, "raise" raises GenerationFailure. With no service configured the
    network is skipped and synthesized content is returned.
    """

    def __init__(
        self,
        service: Optional[GenerationService] = None,
        *,
        policy: str = POLICY_FALLBACK,
        questions_max_retries: int = 3,
        narrative_max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if policy not in POLICIES:
            raise ValueError(f"Unknown exhaustion policy: {policy!r}")
        if questions_max_retries < 0 or narrative_max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        self.service = service
        self.policy = policy
        self.questions_max_retries = questions_max_retries
        self.narrative_max_retries = narrative_max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.sleep = sleep

    @classmethod
    def from_settings(cls, service: Optional[GenerationService]) -> "GenerationOrchestrator":
        return cls(
            service,
            policy=settings.ON_EXHAUSTED,
            questions_max_retries=settings.QUESTIONS_MAX_RETRIES,
            narrative_max_retries=settings.NARRATIVE_MAX_RETRIES,
            base_delay=settings.RETRY_BASE_DELAY,
            max_delay=settings.RETRY_MAX_DELAY,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Delay after the 0-based `attempt` failed."""
        return min(self.base_delay * (2 ** attempt), self.max_delay)

    async def _with_retries(
        self,
        operation: str,
        call: Callable[[], Awaitable[Any]],
        validate: Callable[[Any], T],
        max_retries: int,
        session_id: Optional[str],
    ) -> T:
        attempts = max_retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            try:
                return validate(await call())
            except Exception as e:
                last_error = TransientNetworkError(operation, attempt + 1, f"{type(e).__name__}: {e}")
                logger.warning("%s (attempt %d/%d)", last_error.message, attempt + 1, attempts)
                log_event(
                    "generation_attempt_failed",
                    {"operation": operation, "attempt": attempt + 1, "error": type(e).__name__},
                    session_id,
                )

            if attempt < attempts - 1:
                await self.sleep(self.backoff_delay(attempt))

        raise GenerationFailure(operation, attempts, last_error.detail if last_error else "")

    def _exhausted(self, failure: GenerationFailure, session_id: Optional[str]) -> None:
        if self.policy == POLICY_RAISE:
            logger.error("%s", failure.message)
            log_event(
                "generation_failed",
                {"operation": failure.operation, "attempts": failure.attempts},
                session_id,
            )
            raise failure

        logger.error("%s; using fallback content", failure.message)
        log_event(
            "generation_fallback",
            {"operation": failure.operation, "reason": "exhausted", "attempts": failure.attempts},
            session_id,
        )

    async def generate_questions(
        self,
        answers: AnswersState,
        session_id: Optional[str] = None,
    ) -> List[AIQuestion]:
        """Exactly 5 questions with 6 options each."""
        resolved = resolve_preliminary_answers(answers)

        if self.service is None:
            log_event("generation_fallback", {"operation": OP_QUESTIONS, "reason": "no_service"}, session_id)
            return build_fallback_questions(resolved)

        ctx = build_prompt_context(resolved)
        service = self.service
        try:
            return await self._with_retries(
                OP_QUESTIONS,
                lambda: service.generate_questions(ctx.industry, ctx.goal, ctx.pain),
                validate_questions,
                self.questions_max_retries,
                session_id,
            )
        except GenerationFailure as failure:
            self._exhausted(failure, session_id)
            return build_fallback_questions(resolved)

    async def generate_narrative(
        self,
        answers: AnswersState,
        questions: Sequence[AIQuestion],
        session_id: Optional[str] = None,
    ) -> str:
        """One non-empty document."""
        resolved = resolve_preliminary_answers(answers)

        if self.service is None:
            log_event("generation_fallback", {"operation": OP_NARRATIVE, "reason": "no_service"}, session_id)
            return build_fallback_narrative(resolved)

        ctx = build_prompt_context(resolved)
        transcript = summarise_answers(answers, questions)
        service = self.service
        try:
            return await self._with_retries(
                OP_NARRATIVE,
                lambda: service.generate_narrative(ctx.industry, ctx.goal, ctx.pain, transcript),
                _validate_narrative,
                self.narrative_max_retries,
                session_id,
            )
        except GenerationFailure as failure:
            self._exhausted(failure, session_id)
            return build_fallback_narrative(resolved)
