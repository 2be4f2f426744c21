# api/flow.py
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_orchestrator
from core.flow import AssessmentFlow
from core.orchestrator import GenerationOrchestrator
from memory.store import create_flow, drop_flow, get_flow
from telemetry.logger import log_event

router = APIRouter(prefix="/flow", tags=["flow"])


# ----------------------------
# Request models
# ----------------------------
class SelectRequest(BaseModel):
    option: int


class OtherTextRequest(BaseModel):
    text: str


# ----------------------------
# Helpers
# ----------------------------
def _flow_response(flow_id: str, flow: AssessmentFlow) -> Dict[str, Any]:
    return {"flow_id": flow_id, **flow.view().model_dump(mode="json")}


async def _settled(flow_id: str, flow: AssessmentFlow) -> Dict[str, Any]:
    await flow.settle()
    return _flow_response(flow_id, flow)


# ----------------------------
# Routes
# ----------------------------
@router.post("")
async def start_flow(orchestrator: GenerationOrchestrator = Depends(get_orchestrator)):
    flow_id, flow = create_flow(orchestrator)
    return _flow_response(flow_id, flow)


@router.get("/{flow_id}")
async def read_flow(flow_id: str):
    return _flow_response(flow_id, get_flow(flow_id))


@router.post("/{flow_id}/select")
async def select_option(flow_id: str, req: SelectRequest):
    flow = get_flow(flow_id)
    flow.select_option(req.option)
    return await _settled(flow_id, flow)


@router.post("/{flow_id}/other")
async def enter_other_text(flow_id: str, req: OtherTextRequest):
    flow = get_flow(flow_id)
    flow.enter_other_text(req.text)
    return await _settled(flow_id, flow)


@router.post("/{flow_id}/confirm")
async def confirm(flow_id: str):
    flow = get_flow(flow_id)
    flow.confirm()
    return await _settled(flow_id, flow)


@router.post("/{flow_id}/back")
async def back(flow_id: str):
    flow = get_flow(flow_id)
    flow.back()
    return await _settled(flow_id, flow)


@router.post("/{flow_id}/reset")
async def reset(flow_id: str):
    flow = get_flow(flow_id)
    flow.reset()
    return await _settled(flow_id, flow)


@router.post("/{flow_id}/retry")
async def retry(flow_id: str):
    flow = get_flow(flow_id)
    await flow.retry()
    return _flow_response(flow_id, flow)


@router.delete("/{flow_id}")
async def delete_flow(flow_id: str):
    drop_flow(flow_id)
    log_event("flow_deleted", {"flow_id": flow_id})
    return {"success": True}
