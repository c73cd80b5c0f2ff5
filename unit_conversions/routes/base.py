from __future__ import annotations

from fastapi import APIRouter, HTTPException

from .. import __version__
from ..db import get_conn, get_statements

router = APIRouter()


@router.get("/health")
def health():
    """DB reachable and the conversions table present."""
    with get_conn() as conn:
        row = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name='conversions_time'"
        ).fetchone()
    if row is None:
        raise HTTPException(status_code=503, detail="conversions_time table missing")
    return {"status": "ok", "statements": len(get_statements())}


@router.get("/version")
def version():
    return {"app": "unit-conversions-api", "version": __version__}
