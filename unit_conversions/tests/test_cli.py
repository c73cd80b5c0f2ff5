import json

from unit_conversions.cli import main


ADD_ARGS = [
    "--source", "1", "--destination", "2",
    "--bidirectional", "true",
    "--start-time", "2024-01-01T00:00:00",
    "--end-time", "2025-01-01T00:00:00",
    "--slope", "2.0", "--intercept", "1.0",
    "--note", "test",
]


def test_cli_lifecycle(tmp_path, capsys):
    db = str(tmp_path / "cli.db")
    assert main(["--db", db, "init"]) == 0
    assert main(["--db", db, "list"]) == 0
    assert "(empty)" in capsys.readouterr().out

    assert main(["--db", db, "add", *ADD_ARGS]) == 0
    capsys.readouterr()
    assert main(["--db", db, "show", "--source", "1", "--destination", "2"]) == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown["slope"] == 2.0
    assert shown["bidirectional"] is True
    assert shown["note"] == "test"

    upd = [a if a != "2.0" else "3.0" for a in ADD_ARGS]
    assert main(["--db", db, "update", *upd]) == 0
    capsys.readouterr()
    assert main(["--db", db, "list"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["slope"] == 3.0

    assert main(["--db", db, "delete", "--source", "1", "--destination", "2"]) == 0
    capsys.readouterr()
    assert main(["--db", db, "show", "--source", "1", "--destination", "2"]) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_missing_pair(tmp_path, capsys):
    db = str(tmp_path / "cli.db")
    main(["--db", db, "init"])
    assert main(["--db", db, "update", *ADD_ARGS]) == 1
    assert main(["--db", db, "delete", "--source", "1", "--destination", "2"]) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_duplicate_add(tmp_path, capsys):
    db = str(tmp_path / "cli.db")
    main(["--db", db, "init"])
    assert main(["--db", db, "add", *ADD_ARGS]) == 0
    assert main(["--db", db, "add", *ADD_ARGS]) == 1
    err = capsys.readouterr().err
    assert "1->2 not added" in err
    assert main(["--db", db, "list"]) == 0
    assert len(capsys.readouterr().out.strip().splitlines()) == 1
