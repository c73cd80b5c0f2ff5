from __future__ import annotations

import logging
from typing import Any

from ..db import open_query_connection
from ..errors import ConversionNotFoundError
from ..logs import LogContext
from ..repository import ConversionTime

logger = logging.getLogger(__name__)


async def ensure_schema():
    with open_query_connection() as conn:
        await ConversionTime.create_table(conn)


async def list_conversions() -> list[dict[str, Any]]:
    with open_query_connection() as conn:
        items = await ConversionTime.get_all(conn)
    return [it.model_dump(mode="json") for it in items]


async def get_conversion(source_id: int, destination_id: int) -> dict[str, Any] | None:
    with open_query_connection() as conn:
        item = await ConversionTime.get_by_source_destination(source_id, destination_id, conn)
    return None if item is None else item.model_dump(mode="json")


async def create_conversion(conversion: ConversionTime, log: LogContext):
    log.set_pair(conversion.source_id, conversion.destination_id)
    with open_query_connection() as conn:
        await conversion.insert(conn)
    log.set_after(conversion)


async def edit_conversion(conversion: ConversionTime, log: LogContext):
    """Replace the stored row for the record's pair; missing pair -> ConversionNotFoundError."""
    log.set_pair(conversion.source_id, conversion.destination_id)
    with open_query_connection() as conn:
        before = await ConversionTime.get_by_source_destination(
            conversion.source_id, conversion.destination_id, conn
        )
        if before is None:
            raise ConversionNotFoundError(conversion.source_id, conversion.destination_id)
        await conversion.update(conn)
    log.set_before(before)
    log.set_after(conversion)


async def remove_conversion(source_id: int, destination_id: int, log: LogContext):
    log.set_pair(source_id, destination_id)
    with open_query_connection() as conn:
        before = await ConversionTime.get_by_source_destination(source_id, destination_id, conn)
        if before is None:
            raise ConversionNotFoundError(source_id, destination_id)
        await ConversionTime.delete(source_id, destination_id, conn)
    log.set_before(before)
    logger.info("deleted conversion %s->%s", source_id, destination_id)
