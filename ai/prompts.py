# ai/prompts.py
from __future__ import annotations

import re
from typing import Dict, List

QUESTIONS_SYSTEM_PROMPT = (
    "You are a governance consultant helping DeVOTE create tailored diagnostic questions "
    "for verifiable-governance pilots. Respond only with valid JSON. "
    "Do not include markdown formatting or explanations."
)

QUESTIONS_PROMPT_TEMPLATE = """
User context:
- Industry: {INDUSTRY}
- Primary goal: {GOAL}
- Biggest vulnerability: {PAIN}

Generate exactly 5 multiple-choice questions (Qai1 to Qai5).
Each question MUST have exactly 6 concrete options.
Questions progress from broad (Qai1) to strategic (Qai5) and surface operational
constraints, stakeholder dynamics and competitive pressure.
Reference the industry, goal and vulnerability without copying the user's words verbatim.

Output format:
{"questions": [{"id": "Qai1", "question": "...", "options": ["...", "...", "...", "...", "...", "..."]}, ...]}
""".strip()

NARRATIVE_SYSTEM_PROMPT = (
    "You are a senior strategy consultant writing board-ready documents about DeVOTE, "
    "a verifiable governance platform."
)

NARRATIVE_PROMPT_TEMPLATE = """
You are drafting a {VESSEL} for a {INDUSTRY} organization evaluating DeVOTE.

Context from their answers:
- Primary goal: {GOAL}
- Key vulnerability: {PAIN}
- All answers:
{TRANSCRIPT}

Narrative requirements:
- Use the emotional arc "{ENGINE}".
- Weave in these DeVOTE capabilities as concrete mechanisms, not buzzwords:
{PROOF_POINTS}
- Length: 300 to 800 words.
- Open with a hook anchored in their vulnerability.
- Structure it as Executive Summary, Strategic Implementation, Technical Architecture,
  Expected Outcomes and Next Steps (numbered list), in Markdown.
- Close with a concrete future-state scenario once DeVOTE is deployed.
- Avoid generic corporate filler.
""".strip()

_REGULATORY_RE = re.compile(r"regulat|audit|compliance", re.I)
_FUNDING_RE = re.compile(r"fund|invest", re.I)
_INTERNAL_RE = re.compile(r"internal|ops|process", re.I)
_CRISIS_RE = re.compile(r"crisis|breach|scandal|fraud|dispute", re.I)
_GROWTH_RE = re.compile(r"growth|expansion|new market|innovation", re.I)
_AUDIT_RE = re.compile(r"audit|regulat|compliance|evidence", re.I)
_IDENTITY_RE = re.compile(r"fraud|abuse|sybil|duplicate|identity", re.I)
_COST_RE = re.compile(r"cost|budget|overrun|expense", re.I)


def pick_vessel(goal: str, pain: str) -> str:
    if _REGULATORY_RE.search(goal) or re.search(r"regulat", pain, re.I):
        return "Regulatory Submission"
    if _FUNDING_RE.search(goal):
        return "Investor Memo"
    if _INTERNAL_RE.search(goal):
        return "Internal Strategic Report"
    return "Case Study"


def pick_dramatic_engine(goal: str, pain: str) -> str:
    if _CRISIS_RE.search(pain):
        return "Crisis Averted"
    if _GROWTH_RE.search(goal):
        return "Opportunity Seized"
    return "Legacy Transformed"


def pick_prompt_proof_points(goal: str, pain: str) -> List[str]:
    both = f"{goal} {pain}"
    points: List[str] = []
    if _AUDIT_RE.search(both):
        points.append("Immutable Audit Trail")
    if _IDENTITY_RE.search(pain):
        points.append("Sybil-Resistant Identity")
    if _COST_RE.search(both):
        points.append("Cost-Per-Trust Metric")
    points.append("ZK-Verified Tally")
    return list(dict.fromkeys(points))[:3]


_PLACEHOLDER_RE = re.compile(r"\{(VESSEL|ENGINE|INDUSTRY|GOAL|PAIN|TRANSCRIPT|PROOF_POINTS)\}")


def _fill(template: str, values: Dict[str, str]) -> str:
    # Single pass so user text that spells a placeholder is never expanded.
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def build_questions_prompt(industry: str, goal: str, pain: str) -> str:
    return _fill(QUESTIONS_PROMPT_TEMPLATE, {"INDUSTRY": industry, "GOAL": goal, "PAIN": pain})


def build_narrative_prompt(industry: str, goal: str, pain: str, transcript: str) -> str:
    proof_lines = "\n".join(f"  - {p}" for p in pick_prompt_proof_points(goal, pain))
    return _fill(
        NARRATIVE_PROMPT_TEMPLATE,
        {
            "VESSEL": pick_vessel(goal, pain),
            "ENGINE": pick_dramatic_engine(goal, pain),
            "INDUSTRY": industry,
            "GOAL": goal,
            "PAIN": pain,
            "TRANSCRIPT": transcript or "- No additional details",
            "PROOF_POINTS": proof_lines,
        },
    )
