"""
View projections: header, screen, keypad, footer.
"""
from core.selectors import (
    OTHER_LABEL,
    select_flow_view,
    select_footer_view,
    select_header_view,
    select_keypad_view,
    select_screen_view,
)
from core.state_machine import (
    AIQuestionsReady,
    Back,
    Confirm,
    EnterOtherText,
    Error,
    NarrativeReady,
    SelectOption,
    transition,
)
from memory.models import AIQuestion, Phase, default_context

QUESTIONS = tuple(
    AIQuestion(id=f"qai{i}", text=f"Question {i}?", options=(f"First {i}", f"Second {i}", "", "", "", ""))
    for i in range(1, 6)
)


def run(ctx, *events):
    for event in events:
        ctx = transition(ctx, event)
    return ctx


def loading_ai():
    return run(default_context(), *[SelectOption(1), Confirm()] * 3)


def report(narrative=None):
    ctx = loading_ai()
    ctx = run(ctx, AIQuestionsReady(QUESTIONS, ctx.epoch), *[SelectOption(1), Confirm()] * 5)
    if narrative:
        ctx = run(ctx, NarrativeReady(narrative, ctx.epoch))
    return ctx


class TestHeader:

    def test_eight_unlit_bulbs_at_start(self):
        bulbs = select_header_view(default_context()).bulbs
        assert len(bulbs) == 8
        assert not any(b.lit for b in bulbs)

    def test_reflects_committed_digits_only(self):
        ctx = run(default_context(), SelectOption(4), Confirm(), SelectOption(7), EnterOtherText("Public health"), Confirm())
        ctx = run(ctx, SelectOption(2))  # transient, not committed
        bulbs = select_header_view(ctx).bulbs
        assert [b.digit for b in bulbs[:3]] == [4, 7, None]
        assert [b.lit for b in bulbs[:3]] == [True, True, False]

    def test_independent_of_phase(self):
        ctx = run(default_context(), SelectOption(4), Confirm())
        assert select_header_view(ctx) == select_header_view(run(ctx, Back()))


class TestScreen:

    def test_static_question(self):
        screen = select_screen_view(default_context())
        assert screen.mode == "question"
        assert screen.question_id == "Qp1"
        assert len(screen.options) == 7
        assert screen.options[-1] == OTHER_LABEL
        assert not screen.other.visible

    def test_other_subview(self):
        screen = select_screen_view(run(default_context(), SelectOption(7), EnterOtherText("abc")))
        assert screen.other.visible
        assert screen.other.draft == "abc"
        assert not screen.other.valid

    def test_loading_while_questions_pending(self):
        screen = select_screen_view(loading_ai())
        assert screen.mode == "loading"
        assert screen.message

    def test_loading_surfaces_error(self):
        screen = select_screen_view(run(loading_ai(), Error("Failed to generate questions after 4 attempts")))
        assert screen.mode == "loading"
        assert "4 attempts" in screen.error

    def test_ai_question_padded_to_seven(self):
        ctx = loading_ai()
        screen = select_screen_view(run(ctx, AIQuestionsReady(QUESTIONS, ctx.epoch)))
        assert screen.mode == "question"
        assert screen.prompt == "Question 1?"
        assert screen.options == ["First 1", "Second 1", "", "", "", "", OTHER_LABEL]

    def test_report_pending_then_ready(self):
        pending = select_screen_view(report())
        assert pending.mode == "report"
        assert pending.narrative is None
        assert pending.loading

        ready = select_screen_view(report("Final story"))
        assert ready.narrative == "Final story"
        assert not ready.loading


class TestKeypad:

    def test_question_mode(self):
        keypad = select_keypad_view(run(default_context(), SelectOption(3)))
        assert keypad.mode == "question"
        assert len(keypad.buttons) == 7
        assert [b.selected for b in keypad.buttons] == [False, False, True, False, False, False, False]
        assert not any(b.disabled for b in keypad.buttons)

    def test_loading_mode_disables_everything(self):
        keypad = select_keypad_view(loading_ai())
        assert keypad.mode == "loading"
        assert all(b.disabled for b in keypad.buttons)

    def test_report_alternates_cta_and_copy(self):
        keypad = select_keypad_view(report("Final story"))
        assert keypad.mode == "report"
        assert [b.kind for b in keypad.buttons] == ["cta", "copy", "cta", "copy", "cta", "copy", "cta"]
        assert not any(b.disabled for b in keypad.buttons)
        assert all(b.href for b in keypad.buttons if b.kind == "cta")

    def test_copy_disabled_without_narrative(self):
        ctx = run(report(), Error("narrative failed"))
        buttons = select_keypad_view(ctx).buttons
        assert all(b.disabled for b in buttons if b.kind == "copy")
        assert not any(b.disabled for b in buttons if b.kind == "cta")


class TestFooter:

    def test_other_text_gates_confirm(self):
        ctx = run(default_context(), SelectOption(7), EnterOtherText("ok"))
        assert select_footer_view(ctx).confirm_enabled is False

        ctx = run(ctx, EnterOtherText("We rely on a legacy voting tool"))
        assert select_footer_view(ctx).confirm_enabled is True

    def test_back_disabled_on_first_question(self):
        footer = select_footer_view(default_context())
        assert footer.back_enabled is False
        assert footer.reset_enabled is True

    def test_busy_disables_confirm_but_not_back(self):
        footer = select_footer_view(loading_ai())
        assert footer.loading
        assert footer.confirm_enabled is False
        assert footer.back_enabled is True

    def test_report_error_keeps_back(self):
        footer = select_footer_view(run(report(), Error("Failed to generate narrative after 3 attempts")))
        assert footer.back_enabled is True
        assert footer.confirm_enabled is False
        assert footer.error


class TestFlowView:

    def test_bundles_all_views(self):
        view = select_flow_view(default_context())
        data = view.model_dump(mode="json")
        assert data["phase"] == "QP1"
        assert data["screen"]["mode"] == "question"
        assert set(data) >= {"header", "screen", "keypad", "footer", "session_id", "code"}

    def test_phase_enum(self):
        assert select_flow_view(report()).phase == Phase.REPORT
