"""
Query connection capability: the three execution shapes the repository layer uses.

    none(statement, params)         -> None, the statement must not return rows
    any(statement, params)          -> list of rows (possibly empty)
    one_or_none(statement, params)  -> one row, or None; more than one row is an error

Statements are logical names resolved through a StatementRegistry. Blocking sqlite3
calls run in a worker thread so callers can await them.
"""
from __future__ import annotations

import asyncio
import logging
from sqlite3 import Connection, Row
from typing import Any, Mapping, Optional, List

from .errors import QueryResultError
from .statements import StatementRegistry

logger = logging.getLogger(__name__)


class QueryConnection:
    def __init__(self, conn: Connection, statements: StatementRegistry):
        self.conn = conn
        self.statements = statements

    def _fetch(self, statement: str, params: Optional[Mapping[str, Any]]) -> List[Row]:
        sql = self.statements[statement]
        logger.debug("execute %s params=%s", statement, params)
        cursor = self.conn.execute(sql, dict(params or {}))
        return cursor.fetchall()

    async def _run(self, statement: str, params: Optional[Mapping[str, Any]]) -> List[Row]:
        return await asyncio.to_thread(self._fetch, statement, params)

    async def none(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> None:
        rows = await self._run(statement, params)
        if rows:
            raise QueryResultError(statement, "no rows", len(rows))

    async def any(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> List[Row]:
        return await self._run(statement, params)

    async def one_or_none(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> Optional[Row]:
        rows = await self._run(statement, params)
        if len(rows) > 1:
            raise QueryResultError(statement, "one row or none", len(rows))
        return rows[0] if rows else None
