"""Repository layer: records and their SQL access (SQLite).

Keep methods thin; SQL text lives in unit_conversions/sql.
"""
from __future__ import annotations

from .conversion_time import ConversionTime

__all__ = ["ConversionTime"]
