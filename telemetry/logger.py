# telemetry/logger.py
from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict

import settings

DB_PATH = settings.TELEMETRY_DB_PATH

_log = logging.getLogger(__name__)


def _conn() -> sqlite3.Connection:
    c = sqlite3.connect(DB_PATH)
    c.execute(
        """
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            ts TEXT NOT NULL,
            event TEXT NOT NULL,
            payload TEXT NOT NULL
        )
        """
    )
    c.commit()
    return c


def log_event(event: str, payload: Dict[str, Any]) -> None:
    """
    Telemetry must NEVER crash request handling.
    Payload is meta only (counts, latencies, error codes), never raw user text.
    """
    if not DB_PATH:
        return
    try:
        ts = datetime.now(timezone.utc).isoformat()
        c = _conn()
        try:
            c.execute(
                "INSERT INTO events (ts, event, payload) VALUES (?, ?, ?)",
                (ts, event, json.dumps(payload, ensure_ascii=False)),
            )
            c.commit()
        finally:
            c.close()
    except (sqlite3.Error, OSError, TypeError, ValueError) as e:
        _log.debug("telemetry write failed for event=%s: %s", event, e)
