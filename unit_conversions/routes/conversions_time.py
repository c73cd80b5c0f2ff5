from __future__ import annotations

import sqlite3
from datetime import datetime

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..errors import ConversionNotFoundError
from ..logs import LogContext
from ..repository import ConversionTime
from ..services.conversion_time_svc import (
    list_conversions,
    get_conversion,
    create_conversion,
    edit_conversion,
    remove_conversion,
)

router = APIRouter()


class ConversionTimeEdit(BaseModel):
    bidirectional: bool
    start_time: datetime
    end_time: datetime
    slope: float | None
    intercept: float | None
    note: str | None = None


@router.get("/api/conversions-time")
async def api_conversions_time_list():
    items = await list_conversions()
    return {"items": items}


@router.get("/api/conversions-time/{source_id}/{destination_id}")
async def api_conversions_time_get(source_id: int, destination_id: int):
    item = await get_conversion(source_id, destination_id)
    if item is None:
        raise HTTPException(status_code=404, detail="conversion_not_found")
    return item


@router.post("/api/conversions-time", status_code=201)
async def api_conversions_time_create(body: ConversionTime):
    log = LogContext("CONVERSION_TIME_CREATE")
    try:
        await create_conversion(body, log)
        log.write("OK")
        return {"message": "ok"}
    except sqlite3.IntegrityError as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/api/conversions-time/{source_id}/{destination_id}")
async def api_conversions_time_update(source_id: int, destination_id: int, body: ConversionTimeEdit):
    log = LogContext("CONVERSION_TIME_UPDATE")
    conversion = ConversionTime(source_id=source_id, destination_id=destination_id, **body.model_dump())
    try:
        await edit_conversion(conversion, log)
        log.write("OK")
        return {"message": "ok"}
    except ConversionNotFoundError as nf:
        log.write("ERROR", str(nf))
        raise HTTPException(status_code=404, detail=str(nf))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/api/conversions-time/{source_id}/{destination_id}")
async def api_conversions_time_delete(source_id: int, destination_id: int):
    log = LogContext("CONVERSION_TIME_DELETE")
    try:
        await remove_conversion(source_id, destination_id, log)
        log.write("OK")
        return {"message": "ok"}
    except ConversionNotFoundError as nf:
        log.write("ERROR", str(nf))
        raise HTTPException(status_code=404, detail=str(nf))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))
