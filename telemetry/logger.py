# telemetry/logger.py
from __future__ import annotations

import json
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import settings


def _conn() -> sqlite3.Connection:
    c = sqlite3.connect(settings.TELEMETRY_DB)
    c.execute(
        """
        CREATE TABLE IF NOT EXISTS flow_events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ts TEXT NOT NULL,
            session_id TEXT,
            event TEXT NOT NULL,
            payload TEXT NOT NULL
        )
        """
    )
    c.commit()
    return c


def log_event(event: str, payload: Dict[str, Any], session_id: Optional[str] = None) -> None:
    """
    Telemetry must NEVER break the flow.
    Payloads carry ids, phases and counts only, never answer text.
    """
    try:
        ts = datetime.now(timezone.utc).isoformat()
        with closing(_conn()) as c:
            c.execute(
                "INSERT INTO flow_events (ts, session_id, event, payload) VALUES (?, ?, ?, ?)",
                (ts, session_id, event, json.dumps(payload, ensure_ascii=False, default=str)),
            )
            c.commit()
    except Exception:
        pass


def recent_events(session_id: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
    """Newest first. Used by tests and debugging."""
    query = "SELECT ts, session_id, event, payload FROM flow_events"
    params: tuple = ()
    if session_id is not None:
        query += " WHERE session_id = ?"
        params = (session_id,)
    query += " ORDER BY id DESC LIMIT ?"
    params += (limit,)

    with closing(_conn()) as c:
        rows = c.execute(query, params).fetchall()

    return [
        {"ts": ts, "session_id": sid, "event": event, "payload": json.loads(payload)}
        for ts, sid, event, payload in rows
    ]
