"""
Storage settings and connections.

Settings come from env vars first, then config.yaml (UNITCONV_CONFIG or the
project root), then defaults:

    database    UNITCONV_DB_PATH > test_db_path (under tests) > db_path > ./conversions.db
    statements  UNITCONV_SQL_DIR > sql_dir > bundled unit_conversions/sql
"""
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os
import yaml

from .connection import QueryConnection
from .statements import StatementRegistry

_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_DEFAULT_DB = os.path.join(_PROJECT_ROOT, "conversions.db")
_CONFIG_KEYS = ("db_path", "test_db_path", "sql_dir")

_statements: StatementRegistry | None = None


def _read_config_yaml() -> dict:
    """String settings from config.yaml; a missing or unreadable file counts as empty."""
    cfg_path = os.environ.get("UNITCONV_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    return {
        k: cfg[k].strip()
        for k in _CONFIG_KEYS
        if isinstance(cfg.get(k), str) and cfg[k].strip()
    }


def _under_test() -> bool:
    return os.environ.get("APP_ENV") == "test" or "PYTEST_CURRENT_TEST" in os.environ


def get_db_path() -> str:
    cfg = _read_config_yaml()
    candidates = [
        os.environ.get("UNITCONV_DB_PATH"),
        cfg.get("test_db_path") if _under_test() else None,
        cfg.get("db_path"),
        _DEFAULT_DB,
    ]
    path = next(c for c in candidates if c)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    return path


def get_sql_dir() -> str | None:
    return os.environ.get("UNITCONV_SQL_DIR") or _read_config_yaml().get("sql_dir")


def get_statements() -> StatementRegistry:
    """Process-wide statement registry, loaded on first use."""
    global _statements
    if _statements is None:
        _statements = StatementRegistry.from_directory(get_sql_dir())
    return _statements


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection. An explicit db_path wins over get_db_path().
    Foreign keys on, rows as sqlite3.Row, autocommit.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


@contextmanager
def open_query_connection(
    db_path: str | None = None, statements: StatementRegistry | None = None
) -> Iterator[QueryConnection]:
    with get_conn(db_path) as conn:
        yield QueryConnection(conn, statements or get_statements())
