"""
Change log for conversions.

Each create/update/delete request writes one conversion_log row: the
(source_id, destination_id) pair it targeted, the record before and after the
change, the outcome and how long it took.
"""
from __future__ import annotations

import json
import time
import uuid
import datetime as dt
from typing import Any, Dict, List, Optional, Tuple

from .db import get_conn
from .repository import ConversionTime

DDL = """
CREATE TABLE IF NOT EXISTS conversion_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  source_id INTEGER,
  destination_id INTEGER,
  request_id TEXT NOT NULL,
  before_json TEXT,
  after_json TEXT,
  result TEXT NOT NULL,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_conversion_log_pair ON conversion_log(source_id, destination_id);
CREATE INDEX IF NOT EXISTS idx_conversion_log_ts ON conversion_log(ts);
"""


def ensure_log_schema():
    with get_conn() as conn:
        conn.executescript(DDL)


def _snapshot(conversion: Optional[ConversionTime]) -> Optional[str]:
    if conversion is None:
        return None
    return json.dumps(conversion.model_dump(mode="json"), ensure_ascii=False)


class LogContext:
    """Collects one change to a conversion pair; write() stores it once the outcome is known."""

    def __init__(self, action: str, source_id: int | None = None, destination_id: int | None = None,
                 user: str = "admin"):
        self.action = action
        self.user = user
        self.source_id = source_id
        self.destination_id = destination_id
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.before: Optional[ConversionTime] = None
        self.after: Optional[ConversionTime] = None

    def set_pair(self, source_id: int, destination_id: int):
        self.source_id = source_id
        self.destination_id = destination_id

    def set_before(self, conversion: Optional[ConversionTime]): self.before = conversion
    def set_after(self, conversion: Optional[ConversionTime]): self.after = conversion

    def write(self, result: str = "OK", err: Optional[str] = None):
        with get_conn() as conn:
            conn.execute(
                "INSERT INTO conversion_log"
                " (ts, user, action, source_id, destination_id, request_id,"
                "  before_json, after_json, result, err_msg, latency_ms)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    dt.datetime.now(dt.timezone.utc).isoformat(),
                    self.user,
                    self.action,
                    self.source_id,
                    self.destination_id,
                    self.request_id,
                    _snapshot(self.before),
                    _snapshot(self.after),
                    result,
                    err,
                    int((time.perf_counter() - self.start) * 1000),
                ),
            )


def search_logs(
    action: str | None = None,
    source_id: int | None = None,
    destination_id: int | None = None,
    result: str | None = None,
    page: int = 1,
    size: int = 20,
) -> Tuple[int, List[Dict[str, Any]]]:
    """Newest first; before/after come back decoded."""
    filters = [
        ("action = ?", action),
        ("source_id = ?", source_id),
        ("destination_id = ?", destination_id),
        ("result = ?", result),
    ]
    active = [(clause, value) for clause, value in filters if value is not None]
    where = (" WHERE " + " AND ".join(c for c, _ in active)) if active else ""
    params = [v for _, v in active]

    with get_conn() as conn:
        total = conn.execute(f"SELECT COUNT(1) FROM conversion_log{where}", params).fetchone()[0]
        rows = conn.execute(
            f"SELECT * FROM conversion_log{where} ORDER BY id DESC LIMIT ? OFFSET ?",
            [*params, size, (page - 1) * size],
        ).fetchall()

    items = []
    for r in rows:
        item = dict(r)
        for key in ("before", "after"):
            raw = item.pop(f"{key}_json")
            item[key] = json.loads(raw) if raw else None
        items.append(item)
    return total, items
