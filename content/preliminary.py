# content/preliminary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PreliminaryQuestion:
    id: str
    key: str  # what the resolved answer feeds: role | industry | pain
    question: str
    instructions: str
    options: Tuple[str, ...]
    fallback: str


PRELIMINARY_QUESTIONS: Tuple[PreliminaryQuestion, ...] = (
    PreliminaryQuestion(
        id="Qp1",
        key="role",
        question="What best describes your role in governance decisions?",
        instructions="Pick the closest match, or press 7 to describe your role.",
        options=(
            "Executive leadership (CEO, COO, Board)",
            "VP or Director of Operations",
            "Compliance or Legal Officer",
            "Technology or IT Leadership",
            "Innovation or Strategy Consultant",
            "Partnership or Business Development Lead",
        ),
        fallback="Decision lead",
    ),
    PreliminaryQuestion(
        id="Qp2",
        key="industry",
        question="Which arena do your most important decisions live in?",
        instructions="Pick the closest match, or press 7 to name your industry.",
        options=(
            "Corporate Governance & Board Decisions",
            "Healthcare & Clinical Research",
            "Education & Academic Research",
            "Government & Public Sector",
            "Supply Chain & Regulatory Compliance",
            "Market Research & Stakeholder Polling",
        ),
        fallback="Cross-industry governance",
    ),
    PreliminaryQuestion(
        id="Qp3",
        key="pain",
        question="Which vulnerability keeps you most on edge today?",
        instructions="Pick the closest match, or press 7 to describe it.",
        options=(
            "Election or voting disputes that won't die",
            "Painful audits and evidence gathering",
            "Gaps in proof when challenged by outsiders",
            "Stakeholder skepticism and rumor cycles",
            "Manual, error-prone governance processes",
            "Legacy systems you know will eventually fail",
        ),
        fallback="Proof gaps in critical decisions",
    ),
)
