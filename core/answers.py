# core/answers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from content.preliminary import PRELIMINARY_QUESTIONS, PreliminaryQuestion
from content.profiles import find_industry_profile
from core.guards import OTHER_MIN_LENGTH, OTHER_OPTION, is_valid_selection, sanitize_other_input
from memory.models import AIQuestion, Answer, AnswersState


@dataclass(frozen=True)
class ResolvedAnswer:
    label: str
    source: str  # "selection" | "other" | "fallback"


@dataclass(frozen=True)
class PromptContext:
    industry: str
    goal: str
    pain: str


def resolve_answer(question: PreliminaryQuestion, answer: Optional[Answer]) -> ResolvedAnswer:
    """
    Other text wins when it survives sanitizing with enough characters,
    then the option label, then the question's fallback phrase.
    """
    if answer is not None:
        other = sanitize_other_input(answer.other).strip()
        if len(other) >= OTHER_MIN_LENGTH:
            return ResolvedAnswer(label=other, source="other")

        if is_valid_selection(answer.selection) and answer.selection <= len(question.options):
            return ResolvedAnswer(label=question.options[answer.selection - 1], source="selection")

    return ResolvedAnswer(label=question.fallback, source="fallback")


def resolve_preliminary_answers(answers: AnswersState) -> Dict[str, ResolvedAnswer]:
    """Resolved role / industry / pain, keyed by PreliminaryQuestion.key."""
    resolved: Dict[str, ResolvedAnswer] = {}
    for index, question in enumerate(PRELIMINARY_QUESTIONS):
        resolved[question.key] = resolve_answer(question, answers.get(index))
    return resolved


def build_prompt_context(resolved: Dict[str, ResolvedAnswer]) -> PromptContext:
    industry = resolved["industry"].label
    pain = resolved["pain"].label

    profile = find_industry_profile(industry)
    goal = profile.default_goal if profile else f"strengthen trust across {industry}"

    return PromptContext(industry=industry, goal=goal, pain=pain)


def digit_for_answer(answer: Answer) -> Optional[int]:
    """Keypad digit a committed answer maps to. Other is 7."""
    if answer.other:
        return OTHER_OPTION
    if is_valid_selection(answer.selection):
        return answer.selection
    return None


def _resolve_ai_answer(question: Optional[AIQuestion], answer: Answer) -> str:
    if answer.other:
        return answer.other.strip()
    if is_valid_selection(answer.selection):
        if question is not None and answer.selection <= len(question.options):
            label = question.options[answer.selection - 1].strip()
            if label:
                return label
        return f"Selected option {answer.selection}"
    return "No response yet"


def summarise_answers(answers: AnswersState, questions: Sequence[AIQuestion]) -> str:
    """
    Line-per-answer transcript of all 8 answers, fed to the narrative service.
    """
    lines = []

    for index, question in enumerate(PRELIMINARY_QUESTIONS):
        resolved = resolve_answer(question, answers.get(index))
        lines.append(f"{question.id} - {question.question}: {resolved.label}")

    for offset, answer in enumerate(answers.ai):
        question = questions[offset] if offset < len(questions) else None
        qid = question.id if question else f"Qai{offset + 1}"
        prompt = question.text if question else "AI follow-up"
        lines.append(f"{qid} - {prompt}: {_resolve_ai_answer(question, answer)}")

    return "\n".join(lines)
