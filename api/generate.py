# api/generate.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_orchestrator
from core.errors import ValidationError
from core.guards import is_valid_other_text, is_valid_selection
from core.orchestrator import GenerationOrchestrator
from memory.models import QUESTION_SLOTS, STATIC_QUESTION_COUNT, AIQuestion, Answer, AnswersState

router = APIRouter(prefix="/api", tags=["generate"])


# ----------------------------
# Request models
# ----------------------------
class AnswerIn(BaseModel):
    selection: Optional[int] = None
    other: Optional[str] = None


class QuestionIn(BaseModel):
    id: str
    text: str
    options: List[str] = Field(default_factory=list)


class QuestionsRequest(BaseModel):
    answers: List[AnswerIn] = Field(default_factory=list)


class NarrativeRequest(BaseModel):
    answers: List[AnswerIn] = Field(default_factory=list)
    questions: List[QuestionIn] = Field(default_factory=list)


# ----------------------------
# Helpers
# ----------------------------
def _answers_state(items: List[AnswerIn], limit: int) -> AnswersState:
    if len(items) > limit:
        raise ValidationError("answers", f"at most {limit} answers allowed")

    state = AnswersState()
    for i, item in enumerate(items):
        if item.other is not None and item.selection is not None:
            raise ValidationError(f"answers[{i}]", "give either selection or other, not both")
        if item.other is not None:
            if not is_valid_other_text(item.other):
                raise ValidationError(f"answers[{i}].other", "must be 5-50 characters on one line")
            state = state.set(i, Answer(other=item.other.strip()))
        elif item.selection is not None:
            if not is_valid_selection(item.selection):
                raise ValidationError(f"answers[{i}].selection", "must be between 1 and 6")
            state = state.set(i, Answer(selection=item.selection))
    return state


# ----------------------------
# Routes
# ----------------------------
@router.post("/questions")
async def generate_questions(
    req: QuestionsRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    answers = _answers_state(req.answers, STATIC_QUESTION_COUNT)
    questions = await orchestrator.generate_questions(answers)
    return {
        "questions": [
            {"id": q.id, "text": q.text, "options": list(q.options), "source": q.source}
            for q in questions
        ]
    }


@router.post("/narrative")
async def generate_narrative(
    req: NarrativeRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    answers = _answers_state(req.answers, QUESTION_SLOTS)
    questions = [AIQuestion(id=q.id, text=q.text, options=tuple(q.options)) for q in req.questions]
    narrative = await orchestrator.generate_narrative(answers, questions)
    return {"narrative": narrative}
