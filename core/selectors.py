# core/selectors.py
from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel

import settings
from content.fallback import normalise_options
from content.preliminary import PRELIMINARY_QUESTIONS
from core.answers import digit_for_answer
from core.guards import OTHER_OPTION, is_valid_other_text
from core.state_machine import active_ai_index, active_slot, can_confirm, can_go_back
from memory.models import AI_OPTION_COUNT, STATIC_PHASES, STATIC_QUESTION_COUNT, AssessmentContext, Phase

OTHER_LABEL = "Other (type your own answer)"
CTA_LABEL = "Book a walkthrough"
COPY_LABEL = "Copy narrative"
QUESTIONS_LOADING_MESSAGE = "Tailoring your follow-up questions..."


# -------------------------------------------------------------------
# View models
# -------------------------------------------------------------------
class HeaderBulb(BaseModel):
    step: int
    digit: Optional[int] = None
    lit: bool = False


class HeaderView(BaseModel):
    bulbs: List[HeaderBulb]


class OtherInputView(BaseModel):
    visible: bool
    draft: str
    valid: bool


class QuestionScreen(BaseModel):
    mode: Literal["question"] = "question"
    step: int
    question_id: str
    prompt: str
    instructions: str = ""
    options: List[str]
    other: OtherInputView
    loading: bool = False
    error: Optional[str] = None


class LoadingScreen(BaseModel):
    mode: Literal["loading"] = "loading"
    step: int
    message: str
    error: Optional[str] = None


class ReportScreen(BaseModel):
    mode: Literal["report"] = "report"
    narrative: Optional[str] = None
    loading: bool = False
    error: Optional[str] = None


ScreenView = Union[QuestionScreen, LoadingScreen, ReportScreen]


class KeypadButton(BaseModel):
    digit: int
    kind: Literal["option", "cta", "copy"]
    label: str
    selected: bool = False
    disabled: bool = False
    href: Optional[str] = None


class KeypadView(BaseModel):
    mode: Literal["question", "loading", "report"]
    buttons: List[KeypadButton]


class FooterView(BaseModel):
    confirm_enabled: bool
    back_enabled: bool
    reset_enabled: bool
    loading: bool
    error: Optional[str] = None


class FlowView(BaseModel):
    session_id: str
    code: str
    phase: Phase
    step: int
    header: HeaderView
    screen: ScreenView
    keypad: KeypadView
    footer: FooterView


# -------------------------------------------------------------------
# Selectors
# -------------------------------------------------------------------
def select_active_step(ctx: AssessmentContext) -> int:
    slot = active_slot(ctx)
    return slot if slot is not None else ctx.session.step_index


def select_header_view(ctx: AssessmentContext) -> HeaderView:
    """Reads committed answers only; the phase doesn't matter."""
    bulbs = []
    for step, answer in enumerate(ctx.answers.slots):
        digit = digit_for_answer(answer)
        bulbs.append(HeaderBulb(step=step, digit=digit, lit=digit is not None))
    return HeaderView(bulbs=bulbs)


def _question_content(ctx: AssessmentContext):
    """(question_id, prompt, instructions, 6 option labels) for the active question, or None."""
    phase = ctx.ui.phase
    if phase in STATIC_PHASES:
        q = PRELIMINARY_QUESTIONS[STATIC_PHASES.index(phase)]
        return q.id, q.question, q.instructions, normalise_options(q.options, AI_OPTION_COUNT)

    if phase == Phase.AI_QUESTIONS and ctx.ai.questions:
        q = ctx.ai.questions[active_ai_index(ctx)]
        return q.id, q.text, "", normalise_options(q.options, AI_OPTION_COUNT)

    return None


def select_screen_view(ctx: AssessmentContext) -> ScreenView:
    ui = ctx.ui

    if ui.phase == Phase.REPORT:
        return ReportScreen(narrative=ctx.ai.narrative, loading=ui.busy, error=ui.error)

    content = _question_content(ctx)
    if content is None:
        return LoadingScreen(step=STATIC_QUESTION_COUNT, message=QUESTIONS_LOADING_MESSAGE, error=ui.error)

    qid, prompt, instructions, options = content
    other_visible = ui.selected_option == OTHER_OPTION
    return QuestionScreen(
        step=select_active_step(ctx),
        question_id=qid,
        prompt=prompt,
        instructions=instructions,
        options=options + [OTHER_LABEL],
        other=OtherInputView(
            visible=other_visible,
            draft=ui.other_draft,
            valid=other_visible and is_valid_other_text(ui.other_draft),
        ),
        loading=ui.busy,
        error=ui.error,
    )


def select_keypad_view(ctx: AssessmentContext) -> KeypadView:
    ui = ctx.ui
    digits = range(1, OTHER_OPTION + 1)

    if ui.phase == Phase.REPORT:
        missing = ctx.ai.narrative is None
        buttons = []
        for d in digits:
            if d % 2 == 1:
                buttons.append(
                    KeypadButton(digit=d, kind="cta", label=CTA_LABEL, disabled=ui.busy, href=settings.CTA_URL)
                )
            else:
                buttons.append(KeypadButton(digit=d, kind="copy", label=COPY_LABEL, disabled=ui.busy or missing))
        return KeypadView(mode="report", buttons=buttons)

    content = _question_content(ctx)
    if content is None:
        return KeypadView(
            mode="loading",
            buttons=[KeypadButton(digit=d, kind="option", label="", disabled=True) for d in digits],
        )

    labels = content[3] + [OTHER_LABEL]
    return KeypadView(
        mode="question",
        buttons=[
            KeypadButton(
                digit=d,
                kind="option",
                label=labels[d - 1],
                selected=ui.selected_option == d,
                disabled=ui.busy,
            )
            for d in digits
        ],
    )


def select_footer_view(ctx: AssessmentContext) -> FooterView:
    return FooterView(
        confirm_enabled=can_confirm(ctx),
        back_enabled=can_go_back(ctx),
        reset_enabled=True,
        loading=ctx.ui.busy,
        error=ctx.ui.error,
    )


def select_flow_view(ctx: AssessmentContext) -> FlowView:
    return FlowView(
        session_id=ctx.session.id,
        code=ctx.session.code,
        phase=ctx.ui.phase,
        step=select_active_step(ctx),
        header=select_header_view(ctx),
        screen=select_screen_view(ctx),
        keypad=select_keypad_view(ctx),
        footer=select_footer_view(ctx),
    )
