# ai/extraction.py
from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from content.fallback import normalise_options
from core.errors import ValidationError
from memory.models import AI_OPTION_COUNT, AI_QUESTION_COUNT, AIQuestion

# -------------------------------------------------------------------
# Constants
# -------------------------------------------------------------------
_HEADER_RE = re.compile(r"^\s*(?:Question\s*(\d+)|Qai\s*(\d+))\s*[:.)-]\s*(.+?)\s*$", re.I)
_OPTION_PREFIX_RE = re.compile(r"^\s*(?:[A-F]|[1-6])\s*[.)\]:-]\s*", re.I)
_BULLET_RE = re.compile(r"^\s*[-*•]\s+")
_PLACEHOLDER_RE = re.compile(r"^(custom\s+)?option\s*\d+$", re.I)
_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.I)

__all__ = [
    "RawQuestion",
    "QuestionsPayload",
    "parse_questions_payload",
    "validate_questions",
    "is_placeholder_option",
]


# -------------------------------------------------------------------
# Schema
# -------------------------------------------------------------------
class RawQuestion(BaseModel):
    id: Optional[Any] = None
    question: Optional[str] = None
    text: Optional[str] = None
    options: List[Any]


class QuestionsPayload(BaseModel):
    questions: List[RawQuestion]


# -------------------------------------------------------------------
# Parsing
# -------------------------------------------------------------------
def _strip_fences(content: str) -> str:
    return _FENCE_RE.sub("", (content or "").strip()).strip()


def _parse_lines(content: str) -> List[Dict[str, Any]]:
    """
    "Qai1: prompt" / "Question 1: prompt" headers, each followed by option lines
    ("1) ...", "A. ...", "- ...").
    """
    questions: List[Dict[str, Any]] = []
    current: Optional[Dict[str, Any]] = None

    for line in content.splitlines():
        if not line.strip():
            continue
        header = _HEADER_RE.match(line)
        if header:
            current = {"question": header.group(3).strip(), "options": []}
            questions.append(current)
            continue
        if current is None:
            continue
        option = _BULLET_RE.sub("", _OPTION_PREFIX_RE.sub("", line)).strip()
        if option:
            current["options"].append(option)

    return questions


def parse_questions_payload(content: str) -> List[Dict[str, Any]]:
    """
    JSON {"questions": [...]} first, line format second.
    Raises ValidationError when neither yields anything.
    """
    text = _strip_fences(content)
    if not text:
        raise ValidationError("questions", "empty response")

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None

    if isinstance(data, dict) and isinstance(data.get("questions"), list):
        return data["questions"]
    if isinstance(data, list):
        return data

    questions = _parse_lines(text)
    if not questions:
        raise ValidationError("questions", "could not parse questions from response")
    return questions


# -------------------------------------------------------------------
# Validation
# -------------------------------------------------------------------
def is_placeholder_option(option: str) -> bool:
    o = (option or "").strip()
    return not o or bool(_PLACEHOLDER_RE.match(o))


def validate_questions(raw: Any, source: str = "ai") -> List[AIQuestion]:
    """
    Shape check for a generated question set.
    Exactly 5 questions, a non-empty prompt each, 6 real options after normalising.
    """
    try:
        payload = QuestionsPayload.model_validate({"questions": raw})
    except PydanticValidationError as e:
        raise ValidationError("questions", f"malformed payload ({e.error_count()} errors)") from e

    if len(payload.questions) != AI_QUESTION_COUNT:
        raise ValidationError(
            "questions",
            f"expected {AI_QUESTION_COUNT} questions, got {len(payload.questions)}",
        )

    questions: List[AIQuestion] = []
    for i, q in enumerate(payload.questions, start=1):
        prompt = (q.question or q.text or "").strip()
        if not prompt:
            raise ValidationError(f"questions[{i}]", "empty prompt")

        options = normalise_options(q.options, AI_OPTION_COUNT)
        if any(is_placeholder_option(o) for o in options):
            raise ValidationError(f"questions[{i}]", "placeholder or missing options")

        questions.append(AIQuestion(id=f"qai{i}", text=prompt, options=tuple(options), source=source))

    return questions
