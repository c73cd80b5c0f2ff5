"""
SQL statement registry.

All SQL lives in ``*.sql`` files; a statement is addressed by its path relative to
the statement directory without the suffix, e.g. ``conversion/get_all_conversions_time``.
The registry is built once at startup and handed to each QueryConnection.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Mapping

from .errors import StatementNotFoundError

logger = logging.getLogger(__name__)

BUNDLED_SQL_DIR = Path(__file__).resolve().parent / "sql"


class StatementRegistry(Mapping[str, str]):
    def __init__(self, statements: Mapping[str, str]):
        self._statements = dict(statements)

    @classmethod
    def from_directory(cls, sql_dir: str | Path | None = None) -> "StatementRegistry":
        base = Path(sql_dir) if sql_dir else BUNDLED_SQL_DIR
        if not base.is_dir():
            raise FileNotFoundError(f"SQL directory not found: {base}")
        statements = {}
        for path in sorted(base.rglob("*.sql")):
            name = path.relative_to(base).with_suffix("").as_posix()
            statements[name] = path.read_text(encoding="utf-8").strip()
        logger.info("loaded %d SQL statements from %s", len(statements), base)
        return cls(statements)

    def __getitem__(self, name: str) -> str:
        try:
            return self._statements[name]
        except KeyError:
            raise StatementNotFoundError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __repr__(self) -> str:
        return f"StatementRegistry({sorted(self._statements)!r})"
