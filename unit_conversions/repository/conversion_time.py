"""
Time-bounded unit conversion record and its persistence operations.

Every operation is one statement through a QueryConnection; constraint checks
(duplicate pair etc.) are left to the table definition.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from ..connection import QueryConnection

CREATE_TABLE = "conversion/create_conversions_time_table"
GET_ALL = "conversion/get_all_conversions_time"
GET_BY_SOURCE_DESTINATION = "conversion/get_conversions_time_by_source_destination"
INSERT = "conversion/insert_new_conversion_time"
UPDATE = "conversion/update_conversion_time"
DELETE = "conversion/delete_conversion_time"


def _parse_time(value: Any) -> Any:
    # stored as ISO text; anything unparseable is kept as stored
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


def _iso(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


class ConversionTime(BaseModel):
    """
    Args:
        source_id: unit id of the source
        destination_id: unit id of the destination
        bidirectional: whether the reverse conversion uses the same slope/intercept
        start_time: start of the validity window
        end_time: end of the validity window
        slope: destination = slope * source + intercept
        intercept: additive coefficient
        note: admin comment
    """

    source_id: int
    destination_id: int
    bidirectional: bool
    start_time: datetime
    end_time: datetime
    slope: Optional[float]
    intercept: Optional[float]
    note: Optional[str] = None

    @classmethod
    async def create_table(cls, conn: QueryConnection) -> None:
        await conn.none(CREATE_TABLE)

    @staticmethod
    def map_row(row: Mapping[str, Any]) -> "ConversionTime":
        """
        Build a record from a storage row without validating it.

        Only the storage representation is decoded: ISO text -> datetime and the
        0/1 flag -> bool. Values are otherwise taken as stored, so an odd row still
        maps. A missing column raises the row's access error.
        """
        bidirectional = row["bidirectional"]
        return ConversionTime.model_construct(
            source_id=row["source_id"],
            destination_id=row["destination_id"],
            bidirectional=None if bidirectional is None else bool(bidirectional),
            start_time=_parse_time(row["start_time"]),
            end_time=_parse_time(row["end_time"]),
            slope=row["slope"],
            intercept=row["intercept"],
            note=row["note"],
        )

    @classmethod
    async def get_all(cls, conn: QueryConnection) -> List["ConversionTime"]:
        rows = await conn.any(GET_ALL)
        return [cls.map_row(r) for r in rows]

    @classmethod
    async def get_by_source_destination(
        cls, source_id: int, destination_id: int, conn: QueryConnection
    ) -> Optional["ConversionTime"]:
        """Return the conversion for the pair, or None if it does not exist."""
        row = await conn.one_or_none(
            GET_BY_SOURCE_DESTINATION, {"source": source_id, "destination": destination_id}
        )
        return None if row is None else cls.map_row(row)

    def to_params(self) -> Dict[str, Any]:
        return {
            "source_id": self.source_id,
            "destination_id": self.destination_id,
            "bidirectional": self.bidirectional,
            "start_time": _iso(self.start_time),
            "end_time": _iso(self.end_time),
            "slope": self.slope,
            "intercept": self.intercept,
            "note": self.note,
        }

    async def insert(self, conn: QueryConnection) -> None:
        await conn.none(INSERT, self.to_params())

    async def update(self, conn: QueryConnection) -> None:
        # keyed by (source_id, destination_id); no matching row is a no-op
        await conn.none(UPDATE, self.to_params())

    @classmethod
    async def delete(cls, source_id: int, destination_id: int, conn: QueryConnection) -> None:
        await conn.none(DELETE, {"source": source_id, "destination": destination_id})
