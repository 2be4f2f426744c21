# core/flow.py
from __future__ import annotations

import logging
from typing import Optional, Set, Tuple

from core.errors import GenerationFailure
from core.orchestrator import GenerationOrchestrator
from core.selectors import FlowView, select_flow_view
from core.state_machine import (
    AIQuestionsReady,
    Back,
    Confirm,
    EnterOtherText,
    Error,
    Event,
    GenerationRequested,
    NarrativeReady,
    Reset,
    SelectOption,
    SessionController,
    awaiting_artifact,
)
from memory.models import AssessmentContext, Phase
from telemetry.logger import log_event

logger = logging.getLogger(__name__)


class AssessmentFlow:
    """
    Action surface for one session.

    Transitions are synchronous. The two generation calls are the only awaits;
    their results go back through the controller and are applied only if the
    session is still in the requesting phase, the artifact is still missing and
    the epoch hasn't moved.
    """

    def __init__(self, orchestrator: GenerationOrchestrator, context: Optional[AssessmentContext] = None):
        self.orchestrator = orchestrator
        self.controller = SessionController(context)
        self._in_flight: Set[Tuple[Phase, int]] = set()

    @property
    def context(self) -> AssessmentContext:
        return self.controller.context

    @property
    def session_id(self) -> str:
        return self.context.session.id

    def view(self) -> FlowView:
        return select_flow_view(self.context)

    def _dispatch(self, event: Event) -> AssessmentContext:
        before = self.context
        after = self.controller.dispatch(event)
        if after is not before and after.ui.phase != before.ui.phase:
            log_event(
                "flow_transition",
                {
                    "event": type(event).__name__,
                    "from": before.ui.phase.value,
                    "to": after.ui.phase.value,
                    "epoch": after.epoch,
                },
                before.session.id,
            )
        return after

    # -------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------
    def select_option(self, option: int) -> AssessmentContext:
        return self._dispatch(SelectOption(option))

    def enter_other_text(self, text: str) -> AssessmentContext:
        return self._dispatch(EnterOtherText(text))

    def confirm(self) -> AssessmentContext:
        return self._dispatch(Confirm())

    def back(self) -> AssessmentContext:
        return self._dispatch(Back())

    def reset(self) -> AssessmentContext:
        return self._dispatch(Reset())

    # -------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------
    def _is_fresh(self, phase: Phase, epoch: int) -> bool:
        ctx = self.context
        return ctx.ui.phase == phase and ctx.epoch == epoch and awaiting_artifact(ctx)

    def _discard(self, operation: str, phase: Phase, epoch: int) -> None:
        ctx = self.context
        logger.info(
            "Discarding stale %s result (requested in %s@%d, now %s@%d)",
            operation, phase.value, epoch, ctx.ui.phase.value, ctx.epoch,
        )
        log_event(
            "generation_discarded",
            {"operation": operation, "requested_phase": phase.value, "requested_epoch": epoch,
             "phase": ctx.ui.phase.value, "epoch": ctx.epoch},
            ctx.session.id,
        )

    def _begin(self, phase: Phase) -> Optional[Tuple[Phase, int]]:
        ctx = self.context
        if ctx.ui.phase != phase or not awaiting_artifact(ctx):
            return None
        key = (phase, ctx.epoch)
        if key in self._in_flight:
            return None
        self._in_flight.add(key)
        self._dispatch(GenerationRequested())
        return key

    async def request_ai_questions(self) -> bool:
        """
        Generates the 5 follow-up questions for the current epoch.
        No-op (False) when they already exist, the phase moved on, or a call is in flight.
        """
        key = self._begin(Phase.AI_QUESTIONS)
        if key is None:
            return False

        _, epoch = key
        ctx = self.context
        try:
            questions = await self.orchestrator.generate_questions(ctx.answers, session_id=ctx.session.id)
        except GenerationFailure as failure:
            if self._is_fresh(Phase.AI_QUESTIONS, epoch):
                self._dispatch(Error(failure.message))
            else:
                self._discard("questions", Phase.AI_QUESTIONS, epoch)
            return False
        finally:
            self._in_flight.discard(key)

        if not self._is_fresh(Phase.AI_QUESTIONS, epoch):
            self._discard("questions", Phase.AI_QUESTIONS, epoch)
            return False

        self._dispatch(AIQuestionsReady(tuple(questions), epoch))
        log_event(
            "generation_applied",
            {"operation": "questions", "epoch": epoch, "source": questions[0].source if questions else None},
            self.session_id,
        )
        return True

    async def request_narrative(self) -> bool:
        """Same contract as request_ai_questions, for the report."""
        key = self._begin(Phase.REPORT)
        if key is None:
            return False

        _, epoch = key
        ctx = self.context
        try:
            narrative = await self.orchestrator.generate_narrative(
                ctx.answers,
                ctx.ai.questions,
                session_id=ctx.session.id,
            )
        except GenerationFailure as failure:
            if self._is_fresh(Phase.REPORT, epoch):
                self._dispatch(Error(failure.message))
            else:
                self._discard("narrative", Phase.REPORT, epoch)
            return False
        finally:
            self._in_flight.discard(key)

        if not self._is_fresh(Phase.REPORT, epoch):
            self._discard("narrative", Phase.REPORT, epoch)
            return False

        self._dispatch(NarrativeReady(narrative, epoch))
        log_event("generation_applied", {"operation": "narrative", "epoch": epoch}, self.session_id)
        return True

    async def settle(self) -> bool:
        """Runs whichever generation the current state is waiting on. Errors wait for retry()."""
        if self.context.ui.error:
            return False
        return await self._request_current()

    async def retry(self) -> bool:
        """Re-requests the missing artifact after a failure."""
        return await self._request_current()

    async def _request_current(self) -> bool:
        phase = self.context.ui.phase
        if phase == Phase.AI_QUESTIONS:
            return await self.request_ai_questions()
        if phase == Phase.REPORT:
            return await self.request_narrative()
        return False
