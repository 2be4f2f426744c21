"""
Flow runner: async generation, stale-result guard, retry.
"""
import asyncio

import pytest

from memory.models import Phase
from telemetry.logger import recent_events


def answer_static(flow, selections=(1, 1, 2)):
    for n in selections:
        flow.select_option(n)
        flow.confirm()


def answer_ai(flow, count=5):
    for _ in range(count):
        flow.select_option(2)
        flow.confirm()


class TestHappyPath:

    @pytest.mark.asyncio
    async def test_full_run_with_service(self, make_flow, fake_service):
        service = fake_service(narrative="Tailored story.")
        flow = make_flow(service)

        answer_static(flow)
        assert flow.context.ui.phase == Phase.AI_QUESTIONS
        assert await flow.settle() is True
        assert len(flow.context.ai.questions) == 5

        answer_ai(flow)
        assert flow.context.ui.phase == Phase.REPORT
        assert await flow.settle() is True
        assert flow.context.ai.narrative == "Tailored story."
        assert flow.view().footer.back_enabled

    @pytest.mark.asyncio
    async def test_full_run_without_service(self, make_flow):
        flow = make_flow(None)
        answer_static(flow)
        await flow.settle()
        answer_ai(flow)
        await flow.settle()

        assert flow.context.ai.questions[0].source == "fallback"
        assert flow.context.ai.narrative.startswith("# ")

    @pytest.mark.asyncio
    async def test_requests_are_noops_when_not_needed(self, make_flow, fake_service):
        service = fake_service()
        flow = make_flow(service)

        assert await flow.request_ai_questions() is False
        assert await flow.request_narrative() is False

        answer_static(flow)
        await flow.request_ai_questions()
        assert await flow.request_ai_questions() is False
        assert len(service.question_calls) == 1


class TestStaleResults:

    @pytest.mark.asyncio
    async def test_result_after_reset_is_discarded(self, make_flow, gated_service):
        service = gated_service()
        flow = make_flow(service)
        answer_static(flow)

        task = asyncio.create_task(flow.request_ai_questions())
        await service.entered.wait()
        flow.reset()
        service.release()

        assert await task is False
        assert flow.context.ui.phase == Phase.QP1
        assert flow.context.ai.questions == ()

    @pytest.mark.asyncio
    async def test_result_after_back_and_reconfirm_is_discarded(self, make_flow, gated_service):
        service = gated_service()
        flow = make_flow(service)
        answer_static(flow)

        task = asyncio.create_task(flow.request_ai_questions())
        await service.entered.wait()
        flow.back()
        flow.confirm()  # same answers, new epoch
        service.release()

        assert await task is False
        assert flow.context.ui.phase == Phase.AI_QUESTIONS
        assert flow.context.ai.questions == ()

        assert await flow.settle() is True
        assert len(flow.context.ai.questions) == 5

    @pytest.mark.asyncio
    async def test_narrative_after_back_is_discarded(self, make_flow, fake_service, gated_service):
        flow = make_flow(fake_service())
        answer_static(flow)
        await flow.settle()
        answer_ai(flow)

        gated = gated_service(narrative="late story")
        flow.orchestrator.service = gated
        task = asyncio.create_task(flow.request_narrative())
        await gated.entered.wait()
        flow.back()
        gated.release()

        assert await task is False
        assert flow.context.ui.phase == Phase.AI_QUESTIONS
        assert flow.context.ai.narrative is None

    @pytest.mark.asyncio
    async def test_concurrent_request_is_deduplicated(self, make_flow, gated_service):
        service = gated_service()
        flow = make_flow(service)
        answer_static(flow)

        first = asyncio.create_task(flow.request_ai_questions())
        await service.entered.wait()
        assert await flow.request_ai_questions() is False
        service.release()

        assert await first is True
        assert len(service.question_calls) == 1

    @pytest.mark.asyncio
    async def test_discard_is_recorded(self, make_flow, gated_service):
        service = gated_service()
        flow = make_flow(service)
        answer_static(flow)

        task = asyncio.create_task(flow.request_ai_questions())
        await service.entered.wait()
        flow.reset()
        service.release()
        await task

        events = [e["event"] for e in recent_events(flow.session_id)]
        assert "generation_discarded" in events


class TestFailures:

    @pytest.mark.asyncio
    async def test_narrative_fails_three_times_under_raise_policy(self, make_flow, fake_service):
        service = fake_service(narrative_failures=3)
        flow = make_flow(service, policy="raise")
        answer_static(flow)
        await flow.settle()
        answer_ai(flow)

        assert await flow.settle() is False
        ctx = flow.context
        assert len(service.narrative_calls) == 3
        assert ctx.ui.phase == Phase.REPORT
        assert ctx.ai.narrative is None
        assert ctx.ui.error
        assert not ctx.ui.busy

        footer = flow.view().footer
        assert footer.back_enabled is True
        assert footer.error == ctx.ui.error

    @pytest.mark.asyncio
    async def test_settle_waits_for_retry_after_error(self, make_flow, fake_service):
        service = fake_service(narrative_failures=3)
        flow = make_flow(service, policy="raise")
        answer_static(flow)
        await flow.settle()
        answer_ai(flow)
        await flow.settle()

        assert await flow.settle() is False
        assert len(service.narrative_calls) == 3

        assert await flow.retry() is True
        assert flow.context.ai.narrative == "A generated narrative."
        assert flow.context.ui.error is None

    @pytest.mark.asyncio
    async def test_back_after_error_returns_to_questions(self, make_flow, fake_service):
        flow = make_flow(fake_service(narrative_failures=3), policy="raise")
        answer_static(flow)
        await flow.settle()
        answer_ai(flow)
        await flow.settle()

        flow.back()
        assert flow.context.ui.phase == Phase.AI_QUESTIONS
        assert flow.context.ui.error is None

    @pytest.mark.asyncio
    async def test_question_failure_under_fallback_policy(self, make_flow, fake_service, question_payload):
        flow = make_flow(fake_service(questions=question_payload(count=4)))
        answer_static(flow)
        assert await flow.settle() is True
        assert {q.source for q in flow.context.ai.questions} == {"fallback"}
        assert flow.context.ui.error is None
