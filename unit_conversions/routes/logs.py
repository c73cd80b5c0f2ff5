from __future__ import annotations

from fastapi import APIRouter, Query

from ..logs import search_logs

router = APIRouter()


@router.get("/api/conversions-time/logs")
def api_conversion_logs(
    action: str | None = None,
    source_id: int | None = None,
    destination_id: int | None = None,
    result: str | None = Query(None, pattern="^(OK|ERROR)$"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=200),
):
    total, items = search_logs(action, source_id, destination_id, result, page, size)
    return {"total": total, "page": page, "items": items}
