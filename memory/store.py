# memory/store.py
from __future__ import annotations

import uuid
from collections import OrderedDict
from typing import Tuple

from core.errors import SessionNotFoundError
from core.flow import AssessmentFlow
from core.orchestrator import GenerationOrchestrator
from settings import MAX_SESSIONS
from telemetry.logger import log_event

# -------------------------------------------------------------------
# Flows store: flow_id -> AssessmentFlow (process-local, not persisted)
# Oldest handles are evicted past MAX_SESSIONS.
# -------------------------------------------------------------------
FLOWS: "OrderedDict[str, AssessmentFlow]" = OrderedDict()


# -----------------------
# Accessors
# -----------------------
def get_flow(flow_id: str) -> AssessmentFlow:
    flow = FLOWS.get(str(flow_id))
    if flow is None:
        raise SessionNotFoundError(flow_id)
    FLOWS.move_to_end(str(flow_id))
    return flow


# -----------------------
# Mutators
# -----------------------
def create_flow(orchestrator: GenerationOrchestrator) -> Tuple[str, AssessmentFlow]:
    flow_id = uuid.uuid4().hex
    flow = AssessmentFlow(orchestrator)
    FLOWS[flow_id] = flow

    while len(FLOWS) > MAX_SESSIONS:
        FLOWS.popitem(last=False)

    log_event("flow_created", {"flow_id": flow_id}, flow.session_id)
    return flow_id, flow


def drop_flow(flow_id: str) -> None:
    if FLOWS.pop(str(flow_id), None) is None:
        raise SessionNotFoundError(flow_id)


def clear_flows() -> None:
    FLOWS.clear()
