"""
Answer resolution for the three preliminary questions and the narrative transcript.
"""
from core.answers import (
    build_prompt_context,
    digit_for_answer,
    resolve_preliminary_answers,
    summarise_answers,
)
from memory.models import AIQuestion, Answer, AnswersState


def _answers(*pairs):
    state = AnswersState()
    for i, answer in enumerate(pairs):
        state = state.set(i, answer)
    return state


class TestResolvePreliminary:

    def test_selection_uses_option_label(self):
        resolved = resolve_preliminary_answers(_answers(Answer(selection=3), Answer(selection=1), Answer(selection=2)))
        assert resolved["role"].label == "Compliance or Legal Officer"
        assert resolved["role"].source == "selection"
        assert resolved["industry"].label == "Corporate Governance & Board Decisions"
        assert resolved["pain"].label == "Painful audits and evidence gathering"

    def test_other_text_wins(self):
        resolved = resolve_preliminary_answers(_answers(Answer(other="Chief Trust Officer")))
        assert resolved["role"].label == "Chief Trust Officer"
        assert resolved["role"].source == "other"

    def test_short_other_falls_through_to_selection(self):
        resolved = resolve_preliminary_answers(_answers(Answer(selection=2, other="ok")))
        assert resolved["role"].source == "selection"

    def test_unanswered_uses_fallback_phrases(self):
        resolved = resolve_preliminary_answers(AnswersState())
        assert resolved["role"].label == "Decision lead"
        assert resolved["industry"].label == "Cross-industry governance"
        assert resolved["pain"].label == "Proof gaps in critical decisions"
        assert {r.source for r in resolved.values()} == {"fallback"}

    def test_out_of_range_selection_uses_fallback(self):
        resolved = resolve_preliminary_answers(_answers(Answer(selection=9)))
        assert resolved["role"].source == "fallback"

    def test_resolving_twice_is_identical(self):
        state = _answers(Answer(selection=4), Answer(other="Maritime logistics"), Answer(selection=6))
        assert resolve_preliminary_answers(state) == resolve_preliminary_answers(state)


class TestPromptContext:

    def test_known_industry_uses_profile_goal(self):
        resolved = resolve_preliminary_answers(_answers(Answer(selection=1), Answer(selection=2), Answer(selection=2)))
        ctx = build_prompt_context(resolved)
        assert ctx.industry == "Healthcare & Clinical Research"
        assert ctx.goal == "protect trial integrity while accelerating approvals"
        assert ctx.pain == "Painful audits and evidence gathering"

    def test_unknown_industry_gets_generic_goal(self):
        resolved = resolve_preliminary_answers(_answers(Answer(selection=1), Answer(other="Deep sea fishing")))
        assert build_prompt_context(resolved).goal == "strengthen trust across Deep sea fishing"


class TestDigits:

    def test_digit_for_answer(self):
        assert digit_for_answer(Answer(selection=4)) == 4
        assert digit_for_answer(Answer(other="something long")) == 7
        assert digit_for_answer(Answer()) is None


class TestTranscript:

    def test_has_a_line_per_slot(self):
        questions = [
            AIQuestion(id=f"qai{i}", text=f"Q{i}?", options=tuple(f"o{i}{j}" for j in range(1, 7)))
            for i in range(1, 6)
        ]
        state = _answers(
            Answer(selection=1), Answer(selection=1), Answer(selection=1),
            Answer(selection=2), Answer(other="Our own tooling"),
        )
        lines = summarise_answers(state, questions).splitlines()

        assert len(lines) == 8
        assert lines[3] == "qai1 - Q1?: o12"
        assert lines[4] == "qai2 - Q2?: Our own tooling"
        assert lines[5].endswith("No response yet")

    def test_missing_questions_still_resolve(self):
        state = _answers(Answer(), Answer(), Answer(), Answer(selection=3))
        lines = summarise_answers(state, []).splitlines()
        assert lines[3] == "Qai1 - AI follow-up: Selected option 3"
