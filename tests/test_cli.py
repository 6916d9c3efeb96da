"""
tests.test_cli

`python -m sqlite_store` behavior.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest

import sqlite_store.__main__ as cli

MODEL = {
    "table": "notes",
    "fields": [
        {"name": "id", "dbType": "INTEGER", "primaryKey": True, "autoIncrement": True},
        {"name": "title", "index": True},
    ],
}


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep the test session's structlog configuration untouched.
    monkeypatch.setattr(cli, "configure_logging", lambda **_kwargs: None)


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.json"
    path.write_text(json.dumps(MODEL), encoding="utf-8")
    return path


def test_prints_ddl(model_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(model_file)]) == 0
    out = capsys.readouterr().out
    assert out == (
        "CREATE TABLE `notes` (\n"
        "  `id` INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,\n"
        "  `title` VARCHAR(45));"
        "CREATE INDEX `title_INDEX` on notes(title);\n"
    )


def test_apply_creates_schema_in_file(model_file: Path, tmp_path: Path) -> None:
    db_file = tmp_path / "nested" / "notes.db"

    assert cli.main([str(model_file), "--apply", "--file", str(db_file)]) == 0

    with sqlite3.connect(db_file) as conn:
        names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master")}
    assert {"notes", "title_INDEX"} <= names


def test_store_errors_exit_nonzero(
    model_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    assert cli.main([str(model_file), "--apply", "--file", str(blocker / "x" / "db.sqlite")]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_model_without_table_exits_nonzero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"fields": [{"name": "a"}]}), encoding="utf-8")

    assert cli.main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error: ")


def test_malformed_or_missing_model_file_exits_nonzero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    invalid_field = tmp_path / "invalid.json"
    invalid_field.write_text(json.dumps({"table": "t", "fields": [{"dbType": "INT"}]}), encoding="utf-8")

    assert cli.main([str(bad_json)]) == 1
    assert cli.main([str(tmp_path / "absent.json")]) == 1
    assert cli.main([str(invalid_field)]) == 1
    assert capsys.readouterr().err.count("error: ") == 3
