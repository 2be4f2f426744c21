# memory/models.py
from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

STATIC_QUESTION_COUNT = 3
AI_QUESTION_COUNT = 5
QUESTION_SLOTS = STATIC_QUESTION_COUNT + AI_QUESTION_COUNT
AI_OPTION_COUNT = 6


class Phase(str, Enum):
    QP1 = "QP1"
    QP2 = "QP2"
    QP3 = "QP3"
    AI_QUESTIONS = "AI_QUESTIONS"
    REPORT = "REPORT"


STATIC_PHASES = (Phase.QP1, Phase.QP2, Phase.QP3)


@dataclass(frozen=True)
class Answer:
    selection: Optional[int] = None  # 1..6
    other: Optional[str] = None      # validated Other text

    @property
    def answered(self) -> bool:
        return self.selection is not None or bool(self.other)


@dataclass(frozen=True)
class AIQuestion:
    id: str
    text: str
    options: Tuple[str, ...]  # always AI_OPTION_COUNT entries; button 7 is Other
    source: str = "ai"        # "ai" | "fallback"


@dataclass(frozen=True)
class SessionState:
    id: str
    step_index: int  # 0-7 across QP1-QP3 + Qai1-Qai5
    code: str


@dataclass(frozen=True)
class AnswersState:
    slots: Tuple[Answer, ...] = field(default_factory=lambda: (Answer(),) * QUESTION_SLOTS)

    def get(self, index: int) -> Answer:
        return self.slots[index]

    def set(self, index: int, answer: Answer) -> "AnswersState":
        slots = list(self.slots)
        slots[index] = answer
        return AnswersState(slots=tuple(slots))

    @property
    def static(self) -> Tuple[Answer, ...]:
        return self.slots[:STATIC_QUESTION_COUNT]

    @property
    def ai(self) -> Tuple[Answer, ...]:
        return self.slots[STATIC_QUESTION_COUNT:]

    def clear_ai(self) -> "AnswersState":
        return AnswersState(slots=self.static + (Answer(),) * AI_QUESTION_COUNT)


@dataclass(frozen=True)
class AIState:
    questions: Tuple[AIQuestion, ...] = ()
    narrative: Optional[str] = None


@dataclass(frozen=True)
class UIState:
    phase: Phase = Phase.QP1
    selected_option: Optional[int] = None  # 1..7, 7 = Other
    other_active: bool = False
    other_draft: str = ""
    busy: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class AssessmentContext:
    session: SessionState
    answers: AnswersState
    ai: AIState
    ui: UIState
    epoch: int = 0

    def evolve(self, **changes) -> "AssessmentContext":
        return replace(self, **changes)


def new_session_state() -> SessionState:
    return SessionState(
        id=uuid.uuid4().hex,
        step_index=0,
        code=secrets.token_hex(3).upper(),
    )


def default_context(epoch: int = 0) -> AssessmentContext:
    """
    Fresh context for a new (or reset) session.
    epoch is carried over by RESET so late results from the old session never apply.
    """
    return AssessmentContext(
        session=new_session_state(),
        answers=AnswersState(),
        ai=AIState(),
        ui=UIState(),
        epoch=epoch,
    )
