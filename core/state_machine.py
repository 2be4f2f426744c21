# core/state_machine.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from core.answers import digit_for_answer
from core.guards import OTHER_OPTION, is_valid_option_id, is_valid_other_text, is_valid_selection, sanitize_other_input
from memory.models import (
    AI_QUESTION_COUNT,
    STATIC_PHASES,
    STATIC_QUESTION_COUNT,
    AIQuestion,
    AIState,
    Answer,
    AssessmentContext,
    Phase,
    UIState,
    default_context,
)

REPORT_STEP = STATIC_QUESTION_COUNT + AI_QUESTION_COUNT - 1


# -------------------------------------------------------------------
# Events
# -------------------------------------------------------------------
@dataclass(frozen=True)
class SelectOption:
    option: int


@dataclass(frozen=True)
class EnterOtherText:
    text: str


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class AIQuestionsReady:
    questions: Tuple[AIQuestion, ...]
    epoch: int


@dataclass(frozen=True)
class NarrativeReady:
    narrative: str
    epoch: int


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class GenerationRequested:
    pass


Event = Union[
    SelectOption,
    EnterOtherText,
    Confirm,
    Back,
    Reset,
    AIQuestionsReady,
    NarrativeReady,
    Error,
    GenerationRequested,
]


# -------------------------------------------------------------------
# Derived state
# -------------------------------------------------------------------
def committed_ai_count(ctx: AssessmentContext) -> int:
    return sum(1 for a in ctx.answers.ai if a.answered)


def active_ai_index(ctx: AssessmentContext) -> int:
    """Committed AI answers, clamped to the last available question."""
    last = max(len(ctx.ai.questions) - 1, 0)
    return min(committed_ai_count(ctx), last)


def active_slot(ctx: AssessmentContext) -> Optional[int]:
    """Answer slot (0-7) the user is on, or None outside a question."""
    phase = ctx.ui.phase
    if phase in STATIC_PHASES:
        return STATIC_PHASES.index(phase)
    if phase == Phase.AI_QUESTIONS and ctx.ai.questions:
        return STATIC_QUESTION_COUNT + active_ai_index(ctx)
    return None


def has_active_question(ctx: AssessmentContext) -> bool:
    if ctx.ui.phase in STATIC_PHASES:
        return True
    if ctx.ui.phase == Phase.AI_QUESTIONS:
        return bool(ctx.ai.questions) and committed_ai_count(ctx) < len(ctx.ai.questions)
    return False


def can_confirm(ctx: AssessmentContext) -> bool:
    ui = ctx.ui
    if ui.busy or not has_active_question(ctx):
        return False
    if is_valid_selection(ui.selected_option):
        return True
    return ui.selected_option == OTHER_OPTION and is_valid_other_text(ui.other_draft)


def can_go_back(ctx: AssessmentContext) -> bool:
    return ctx.ui.phase != Phase.QP1


def awaiting_artifact(ctx: AssessmentContext) -> bool:
    """True when the current phase needs a generated artifact that isn't there yet."""
    if ctx.ui.phase == Phase.AI_QUESTIONS:
        return not ctx.ai.questions
    if ctx.ui.phase == Phase.REPORT:
        return ctx.ai.narrative is None
    return False


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def _ui_from_answer(phase: Phase, answer: Answer, busy: bool = False) -> UIState:
    """Phase entry: transient selection/draft re-derived from the committed answer."""
    return UIState(
        phase=phase,
        selected_option=digit_for_answer(answer),
        other_active=bool(answer.other),
        other_draft=answer.other or "",
        busy=busy,
        error=None,
    )


def _at_step(ctx: AssessmentContext, step: int, **changes) -> AssessmentContext:
    return ctx.evolve(session=replace(ctx.session, step_index=step), **changes)


def _pending_answer(ui: UIState) -> Answer:
    if ui.selected_option == OTHER_OPTION:
        return Answer(other=ui.other_draft.strip())
    return Answer(selection=ui.selected_option)


# -------------------------------------------------------------------
# Handlers
# -------------------------------------------------------------------
def _select_option(ctx: AssessmentContext, event: SelectOption) -> AssessmentContext:
    if ctx.ui.busy or not has_active_question(ctx) or not is_valid_option_id(event.option):
        return ctx

    if event.option == OTHER_OPTION:
        ui = replace(ctx.ui, selected_option=OTHER_OPTION, other_active=True)
    else:
        ui = replace(ctx.ui, selected_option=event.option, other_active=False, other_draft="")
    return ctx.evolve(ui=ui)


def _enter_other_text(ctx: AssessmentContext, event: EnterOtherText) -> AssessmentContext:
    if ctx.ui.busy or not has_active_question(ctx) or ctx.ui.selected_option != OTHER_OPTION:
        return ctx
    return ctx.evolve(ui=replace(ctx.ui, other_draft=sanitize_other_input(event.text)))


def _confirm(ctx: AssessmentContext) -> AssessmentContext:
    if not can_confirm(ctx):
        return ctx

    slot = active_slot(ctx)
    answers = ctx.answers.set(slot, _pending_answer(ctx.ui))
    phase = ctx.ui.phase

    if phase in (Phase.QP1, Phase.QP2):
        nxt = slot + 1
        return _at_step(
            ctx,
            nxt,
            answers=answers,
            ui=_ui_from_answer(STATIC_PHASES[nxt], answers.get(nxt)),
        )

    if phase == Phase.QP3:
        # Preliminary answers changed: everything generated from them is void.
        return _at_step(
            ctx,
            STATIC_QUESTION_COUNT,
            answers=answers.clear_ai(),
            ai=AIState(),
            ui=UIState(phase=Phase.AI_QUESTIONS, busy=True),
            epoch=ctx.epoch + 1,
        )

    # AI_QUESTIONS
    if slot - STATIC_QUESTION_COUNT == len(ctx.ai.questions) - 1:
        return _at_step(
            ctx,
            REPORT_STEP,
            answers=answers,
            ai=replace(ctx.ai, narrative=None),
            ui=UIState(phase=Phase.REPORT, busy=True),
        )

    return _at_step(
        ctx,
        slot + 1,
        answers=answers,
        ui=_ui_from_answer(Phase.AI_QUESTIONS, answers.get(slot + 1)),
    )


def _back(ctx: AssessmentContext) -> AssessmentContext:
    phase = ctx.ui.phase

    if phase in (Phase.QP2, Phase.QP3):
        prev = STATIC_PHASES.index(phase) - 1
        return _at_step(ctx, prev, ui=_ui_from_answer(STATIC_PHASES[prev], ctx.answers.get(prev)))

    if phase == Phase.AI_QUESTIONS:
        # Generated questions and AI answers stay until QP3 is confirmed again.
        qp3 = STATIC_QUESTION_COUNT - 1
        return _at_step(ctx, qp3, ui=_ui_from_answer(Phase.QP3, ctx.answers.get(qp3)))

    if phase == Phase.REPORT:
        slot = STATIC_QUESTION_COUNT + max(committed_ai_count(ctx), 1) - 1
        return _at_step(
            ctx,
            slot,
            answers=ctx.answers.set(slot, Answer()),
            ai=replace(ctx.ai, narrative=None),
            ui=_ui_from_answer(Phase.AI_QUESTIONS, ctx.answers.get(slot)),
            epoch=ctx.epoch + 1,
        )

    return ctx


def _ai_questions_ready(ctx: AssessmentContext, event: AIQuestionsReady) -> AssessmentContext:
    if (
        ctx.ui.phase != Phase.AI_QUESTIONS
        or ctx.ai.questions
        or event.epoch != ctx.epoch
        or len(event.questions) != AI_QUESTION_COUNT
    ):
        return ctx

    first = STATIC_QUESTION_COUNT
    return _at_step(
        ctx,
        first,
        ai=replace(ctx.ai, questions=tuple(event.questions)),
        ui=_ui_from_answer(Phase.AI_QUESTIONS, ctx.answers.get(first)),
    )


def _narrative_ready(ctx: AssessmentContext, event: NarrativeReady) -> AssessmentContext:
    if (
        ctx.ui.phase != Phase.REPORT
        or ctx.ai.narrative is not None
        or event.epoch != ctx.epoch
        or not (event.narrative or "").strip()
    ):
        return ctx

    return _at_step(
        ctx,
        REPORT_STEP,
        ai=replace(ctx.ai, narrative=event.narrative),
        ui=replace(ctx.ui, busy=False, error=None),
    )


def _generation_requested(ctx: AssessmentContext) -> AssessmentContext:
    if not awaiting_artifact(ctx):
        return ctx
    return ctx.evolve(ui=replace(ctx.ui, busy=True, error=None))


def transition(ctx: AssessmentContext, event: Event) -> AssessmentContext:
    """
    Pure (context, event) -> context.
    Events a state doesn't accept return the context unchanged.
    """
    if isinstance(event, Reset):
        return default_context(epoch=ctx.epoch + 1)
    if isinstance(event, Error):
        return ctx.evolve(ui=replace(ctx.ui, error=event.message, busy=False))
    if isinstance(event, SelectOption):
        return _select_option(ctx, event)
    if isinstance(event, EnterOtherText):
        return _enter_other_text(ctx, event)
    if isinstance(event, Confirm):
        return _confirm(ctx)
    if isinstance(event, Back):
        return _back(ctx)
    if isinstance(event, AIQuestionsReady):
        return _ai_questions_ready(ctx, event)
    if isinstance(event, NarrativeReady):
        return _narrative_ready(ctx, event)
    if isinstance(event, GenerationRequested):
        return _generation_requested(ctx)
    return ctx


class SessionController:
    """Owns the current context. dispatch() is the only way it changes."""

    def __init__(self, context: Optional[AssessmentContext] = None):
        self._context = context or default_context()

    @property
    def context(self) -> AssessmentContext:
        return self._context

    def dispatch(self, event: Event) -> AssessmentContext:
        self._context = transition(self._context, event)
        return self._context
