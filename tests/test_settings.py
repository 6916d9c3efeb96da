"""
tests.test_settings

Env-driven store settings.

Responsibilities:
- Check the in-memory default and working-directory resolution of `file`.
- Check the `SQLITE_STORE_` env prefix.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from sqlite_store.db.store import SqliteStore
from sqlite_store.settings import MEMORY_DATABASE, StoreSettings


def test_unset_file_means_memory(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SQLITE_STORE_FILE", raising=False)
    assert StoreSettings().database_path == MEMORY_DATABASE
    assert StoreSettings(file="").database_path == MEMORY_DATABASE


def test_relative_file_resolves_against_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert StoreSettings(file="data/app.db").database_path == os.path.join(
        os.getcwd(), "data", "app.db"
    )


def test_env_prefix(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SQLITE_STORE_FILE", str(tmp_path / "env.db"))
    monkeypatch.setenv("SQLITE_STORE_PROVISION_MAX_DEPTH", "4")
    s = StoreSettings()
    assert s.database_path == str(tmp_path / "env.db")
    assert s.provision_max_depth == 4


def test_store_resolves_file_once_at_construction(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    settings = StoreSettings(file="app.db")
    store = SqliteStore(settings=settings)
    (tmp_path / "elsewhere").mkdir()
    monkeypatch.chdir(tmp_path / "elsewhere")

    assert store.file == str(tmp_path / "app.db")
    assert settings.database_path == str(tmp_path / "elsewhere" / "app.db")
