import asyncio
import os
import sqlite3
import pytest
from datetime import datetime


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "conversions_test.db"
    # Point the app to this temp DB
    os.environ["UNITCONV_DB_PATH"] = str(path)
    from unit_conversions.logs import ensure_log_schema
    from unit_conversions.services.conversion_time_svc import ensure_schema
    ensure_log_schema()
    asyncio.run(ensure_schema())
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from unit_conversions.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Only ever wipe the temp DB
    assert os.environ.get("UNITCONV_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("conversions_time", "conversion_log"):
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def fresh_db(tmp_path):
    """A private database file with the conversions table created."""
    from unit_conversions.db import open_query_connection
    from unit_conversions.repository import ConversionTime

    path = str(tmp_path / "repo.db")

    async def _create():
        with open_query_connection(path) as conn:
            await ConversionTime.create_table(conn)

    asyncio.run(_create())
    return path


@pytest.fixture()
def sample():
    from unit_conversions.repository import ConversionTime
    return ConversionTime(
        source_id=1,
        destination_id=2,
        bidirectional=True,
        start_time=datetime(2024, 1, 1, 0, 0, 0),
        end_time=datetime(2025, 1, 1, 0, 0, 0),
        slope=2.0,
        intercept=1.0,
        note="test",
    )
