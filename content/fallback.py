# content/fallback.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from content.profiles import (
    PROOF_POINTS,
    IndustryProfile,
    NarrativeTemplate,
    QuestionTemplate,
    TemplateContext,
    find_industry_profile,
    pick_proof_points,
    render,
)
from core.answers import ResolvedAnswer, build_prompt_context
from memory.models import AI_OPTION_COUNT, AIQuestion

GENERIC_QUESTIONS: Tuple[QuestionTemplate, ...] = (
    QuestionTemplate(
        "Which decision process in {INDUSTRY} most needs verifiable proof right now?",
        (
            "Leadership or board approvals",
            "Budget and funding allocations",
            "Policy or procedure changes",
            "Partner and vendor selections",
            "Stakeholder consultations and polls",
            "Incident and escalation decisions",
        ),
    ),
    QuestionTemplate(
        "How are those decisions recorded today?",
        (
            "Meeting minutes written after the fact",
            "Email threads and chat messages",
            "Spreadsheets maintained by hand",
            "A legacy tool with limited audit features",
            "Paper records and signatures",
            "It varies by team",
        ),
    ),
    QuestionTemplate(
        "Who challenges your outcomes most often when {PAIN} surfaces?",
        (
            "Regulators and auditors",
            "Investors or funders",
            "Employees and internal teams",
            "Customers or members",
            "Partners and suppliers",
            "The public or the press",
        ),
    ),
    QuestionTemplate(
        "What does it cost you when a decision is disputed?",
        (
            "Weeks of manual evidence gathering",
            "Delayed programs and missed deadlines",
            "Legal and advisory fees",
            "Lost stakeholder confidence",
            "Regulatory penalties or findings",
            "Leadership time pulled from strategy",
        ),
    ),
    QuestionTemplate(
        "As {ROLE}, which trust signal would you automate first?",
        (
            "Instant, verifiable vote tallies",
            "Tamper-evident audit trails",
            "Proof that only eligible people took part",
            "Live dashboards for stakeholders",
            "Automated compliance evidence packs",
            "A measurable cost-per-trust metric",
        ),
    ),
)

GENERIC_NARRATIVE = NarrativeTemplate(
    vessel="Internal Strategic Report",
    dramatic_engine="Opportunity Seized",
    summary=(
        "{ROLE} in {INDUSTRY} carries decisions that others must be able to trust. "
        "DeVOTE turns {PAIN} into verifiable, audit-ready proof."
    ),
    implementation=(
        "Start with the decision process that draws the most scrutiny and bind it to verifiable voting.",
        "Replace manual evidence gathering with proofs generated as each decision closes.",
        "Give stakeholders one tamper-evident record instead of scattered minutes and emails.",
    ),
    technical=(
        "Zero-knowledge tallies confirm outcomes without exposing individual choices.",
        "Sybil-resistant identity keeps participation limited to eligible people.",
        "An immutable ledger integrates with existing document and workflow tools.",
    ),
    outcomes=(
        "Disputes close faster because evidence already exists.",
        "Audits become a review of proofs rather than a hunt for documents.",
        "Stakeholders act on outcomes without second-guessing them.",
    ),
    next_steps=(
        "Select one high-stakes decision process for a pilot.",
        "Measure time-to-proof before and after DeVOTE.",
        "Share the resulting audit trail with your most skeptical stakeholder.",
        "Expand to adjacent processes once the pilot proves out.",
    ),
)

GENERIC_PROOF_POINTS: Tuple[str, ...] = ("immutableAuditTrail", "zkProofs", "sybilIdentity")


def normalise_options(options: Optional[Iterable[object]], expected: int = AI_OPTION_COUNT) -> List[str]:
    """Exactly `expected` trimmed strings: extra entries dropped, missing ones padded with ""."""
    cleaned = [str(o).strip() if o is not None else "" for o in (options or [])]
    cleaned = cleaned[:expected]
    cleaned.extend([""] * (expected - len(cleaned)))
    return cleaned


def _template_context(resolved: Dict[str, ResolvedAnswer]) -> TemplateContext:
    return TemplateContext(
        role=resolved["role"].label,
        industry=resolved["industry"].label,
        pain=resolved["pain"].label,
    )


def build_fallback_questions(resolved: Dict[str, ResolvedAnswer]) -> List[AIQuestion]:
    """
    5 deterministic follow-up questions for the resolved role/industry/pain.
    Uses the matching profile's templates, or the generic set when nothing matches.
    """
    ctx = _template_context(resolved)
    profile = find_industry_profile(ctx.industry)
    templates = profile.questions if profile else GENERIC_QUESTIONS

    questions: List[AIQuestion] = []
    for i, template in enumerate(templates, start=1):
        questions.append(
            AIQuestion(
                id=f"qai{i}",
                text=render(template.prompt, ctx),
                options=tuple(normalise_options(render(o, ctx) for o in template.options)),
                source="fallback",
            )
        )
    return questions


def _bullets(lines: Iterable[str], ctx: TemplateContext) -> List[str]:
    return [f"- {render(line, ctx)}" for line in lines]


def build_fallback_narrative(resolved: Dict[str, ResolvedAnswer]) -> str:
    ctx = _template_context(resolved)
    prompt_ctx = build_prompt_context(resolved)
    profile: Optional[IndustryProfile] = find_industry_profile(ctx.industry)

    template = profile.narrative if profile else GENERIC_NARRATIVE
    defaults = profile.proof_points if profile else GENERIC_PROOF_POINTS
    proof_ids = pick_proof_points(defaults, f"{prompt_ctx.goal} {prompt_ctx.pain}")

    parts: List[str] = [
        f"# {template.vessel}: {ctx.industry}",
        "",
        "## Executive Summary",
        render(template.summary, ctx),
        "",
        "## Strategic Implementation",
        *_bullets(template.implementation, ctx),
        "",
        "## Technical Architecture",
        *_bullets(template.technical, ctx),
        "",
        "## Expected Outcomes",
        *_bullets(template.outcomes, ctx),
        "",
        "## Proof Points That Anchor Trust",
    ]
    for pid in proof_ids:
        point = PROOF_POINTS[pid]
        parts.append(f"- **{point.title}**: {point.hook} {point.benefit}")

    parts += ["", "## Next Steps"]
    parts += [f"{i}. {render(step, ctx)}" for i, step in enumerate(template.next_steps, start=1)]
    parts += ["", f"_Narrative engine: {template.dramatic_engine}._"]

    return "\n".join(parts)
