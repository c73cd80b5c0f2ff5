import pytest

from unit_conversions import db


@pytest.fixture()
def no_env_db(monkeypatch, tmp_path):
    monkeypatch.delenv("UNITCONV_DB_PATH", raising=False)
    monkeypatch.delenv("UNITCONV_SQL_DIR", raising=False)
    cfg = tmp_path / "config.yaml"
    monkeypatch.setenv("UNITCONV_CONFIG", str(cfg))
    return cfg


def test_env_path_wins(monkeypatch, tmp_path, no_env_db):
    no_env_db.write_text(f"db_path: {tmp_path / 'cfg.db'}\n", encoding="utf-8")
    monkeypatch.setenv("UNITCONV_DB_PATH", str(tmp_path / "env.db"))
    assert db.get_db_path() == str(tmp_path / "env.db")


def test_test_db_path_under_pytest(tmp_path, no_env_db):
    no_env_db.write_text(
        f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'sub' / 'test.db'}\n",
        encoding="utf-8",
    )
    # PYTEST_CURRENT_TEST is set while a test runs
    assert db.get_db_path() == str(tmp_path / "sub" / "test.db")
    assert (tmp_path / "sub").is_dir()


def test_db_path_from_config(monkeypatch, tmp_path, no_env_db):
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    no_env_db.write_text(
        f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n",
        encoding="utf-8",
    )
    assert db.get_db_path() == str(tmp_path / "prod.db")


def test_broken_config_is_ignored(no_env_db):
    no_env_db.write_text("db_path: [unclosed\n", encoding="utf-8")
    assert db._read_config_yaml() == {}


def test_sql_dir(monkeypatch, tmp_path, no_env_db):
    assert db.get_sql_dir() is None
    no_env_db.write_text("sql_dir: /srv/sql\n", encoding="utf-8")
    assert db.get_sql_dir() == "/srv/sql"
    monkeypatch.setenv("UNITCONV_SQL_DIR", str(tmp_path))
    assert db.get_sql_dir() == str(tmp_path)
