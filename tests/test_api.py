"""
HTTP surface: flow sessions and stateless generation endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from api.deps import get_orchestrator
from main import app
from memory.store import clear_flows


@pytest.fixture
def client_for(make_orchestrator):
    def _make(service=None, **kwargs):
        orchestrator = make_orchestrator(service, **kwargs)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
    clear_flows()


def _post(client, flow_id, action, body=None):
    resp = client.post(f"/flow/{flow_id}/{action}", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestHealth:

    def test_health(self, client_for):
        assert client_for().get("/").json() == {"status": "ok"}


class TestFlowRoutes:

    def test_create_and_read(self, client_for):
        client = client_for()
        created = client.post("/flow").json()
        assert created["phase"] == "QP1"
        assert len(created["header"]["bulbs"]) == 8

        read = client.get(f"/flow/{created['flow_id']}").json()
        assert read["session_id"] == created["session_id"]

    def test_unknown_flow_is_404(self, client_for):
        resp = client_for().get("/flow/does-not-exist")
        assert resp.status_code == 404
        assert resp.json()["code"] == "SESSION_NOT_FOUND"

    def test_walkthrough_settles_generation(self, client_for, fake_service):
        client = client_for(fake_service(narrative="Server story."))
        flow_id = client.post("/flow").json()["flow_id"]

        for n in (1, 1, 2):
            _post(client, flow_id, "select", {"option": n})
            view = _post(client, flow_id, "confirm")

        assert view["phase"] == "AI_QUESTIONS"
        assert view["screen"]["mode"] == "question"
        assert view["screen"]["prompt"] == "Generated question 1?"

        for _ in range(5):
            _post(client, flow_id, "select", {"option": 3})
            view = _post(client, flow_id, "confirm")

        assert view["phase"] == "REPORT"
        assert view["screen"]["narrative"] == "Server story."
        assert [b["kind"] for b in view["keypad"]["buttons"]][:2] == ["cta", "copy"]

    def test_other_text_gates_confirm(self, client_for):
        client = client_for()
        flow_id = client.post("/flow").json()["flow_id"]
        _post(client, flow_id, "select", {"option": 7})

        assert _post(client, flow_id, "other", {"text": "ok"})["footer"]["confirm_enabled"] is False
        view = _post(client, flow_id, "other", {"text": "We rely on a legacy voting tool"})
        assert view["footer"]["confirm_enabled"] is True

    def test_narrative_error_then_retry(self, client_for, fake_service):
        client = client_for(fake_service(narrative_failures=3), policy="raise")
        flow_id = client.post("/flow").json()["flow_id"]
        for _ in range(8):
            _post(client, flow_id, "select", {"option": 1})
            view = _post(client, flow_id, "confirm")

        assert view["phase"] == "REPORT"
        assert view["footer"]["error"]
        assert view["footer"]["back_enabled"] is True

        view = _post(client, flow_id, "retry")
        assert view["screen"]["narrative"] == "A generated narrative."

    def test_reset_and_delete(self, client_for):
        client = client_for()
        flow_id = client.post("/flow").json()["flow_id"]
        _post(client, flow_id, "select", {"option": 1})
        _post(client, flow_id, "confirm")

        view = _post(client, flow_id, "reset")
        assert view["phase"] == "QP1"
        assert not any(b["lit"] for b in view["header"]["bulbs"])

        assert client.delete(f"/flow/{flow_id}").json() == {"success": True}
        assert client.get(f"/flow/{flow_id}").status_code == 404


class TestGenerateRoutes:

    def test_questions_fallback_without_service(self, client_for):
        resp = client_for().post("/api/questions", json={"answers": [{"selection": 1}, {"selection": 1}, {"selection": 2}]})
        assert resp.status_code == 200
        questions = resp.json()["questions"]
        assert len(questions) == 5
        assert all(len(q["options"]) == 6 and q["source"] == "fallback" for q in questions)

    def test_invalid_other_text_is_422(self, client_for):
        resp = client_for().post("/api/questions", json={"answers": [{"other": "ok"}]})
        assert resp.status_code == 422
        assert resp.json()["code"] == "VALIDATION_ERROR"

    def test_selection_and_other_together_is_422(self, client_for):
        resp = client_for().post("/api/questions", json={"answers": [{"selection": 2, "other": "Head of trust"}]})
        assert resp.status_code == 422
        assert resp.json()["code"] == "VALIDATION_ERROR"
        assert "answers[0]" in resp.json()["error"]

    def test_exhausted_raise_policy_is_502(self, client_for, fake_service):
        client = client_for(fake_service(narrative_failures=5), policy="raise")
        resp = client.post("/api/narrative", json={"answers": [{"selection": 1}] * 8})
        assert resp.status_code == 502
        assert resp.json()["code"] == "GENERATION_FAILED"

    def test_narrative(self, client_for, fake_service):
        client = client_for(fake_service(narrative="Stateless story."))
        resp = client.post("/api/narrative", json={"answers": [{"selection": 2}] * 3, "questions": []})
        assert resp.json() == {"narrative": "Stateless story."}
