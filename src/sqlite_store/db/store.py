"""
sqlite_store.db.store

SQLite store: engine lifecycle plus raw statement execution.

Responsibilities:
- Provision the database directory and open a single async connection.
- Execute mutating statements, reads and DDL batches against that connection.
- Normalize driver results into `ExecResult` / row dicts and driver errors into
  `DriverFailure`.
"""

from __future__ import annotations

import enum
import os
import sqlite3
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from sqlite_store.db.paths import ensure_dir
from sqlite_store.errors import DriverFailure, IOFailure, LifecycleError
from sqlite_store.observability.logging import get_logger
from sqlite_store.schema.ddl import generate_create_table
from sqlite_store.schema.tables import TableSpec
from sqlite_store.settings import MEMORY_DATABASE, StoreSettings

Params = Sequence[Any] | Mapping[str, Any] | None

log = get_logger(__name__)


class StoreState(enum.StrEnum):
    unopened = "UNOPENED"
    opening = "OPENING"
    open = "OPEN"
    closed = "CLOSED"


@dataclass(frozen=True, slots=True)
class ExecResult:
    # Both values are reported by the engine, not computed here.
    affected_rows: int
    insert_id: int | None


def create_engine(database: str) -> AsyncEngine:
    # One static connection per store: the handle is never pooled or shared.
    url = URL.create("sqlite+aiosqlite", database=database)
    return create_async_engine(url, poolclass=StaticPool)


class SqliteStore:
    """
    Lifecycle: UNOPENED --init()--> [OPENING] --> OPEN --close()--> CLOSED (terminal).
    A failed init() returns the store to UNOPENED.

    Statements run in autocommit mode, one at a time, in call order per awaiting
    caller. Overlapping calls from concurrent tasks are ordered by the engine.
    """

    def __init__(
        self,
        *,
        settings: StoreSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._settings = settings
        self._file = settings.database_path
        self._log = logger or log
        self._engine: AsyncEngine | None = None
        self._conn: AsyncConnection | None = None
        self._state = StoreState.unopened

    @property
    def file(self) -> str:
        return self._file

    @property
    def state(self) -> StoreState:
        return self._state

    async def init(self) -> None:
        if self._state is not StoreState.unopened:
            raise LifecycleError(f"init() called on a {self._state.value} store")
        # Claimed before the first await so an overlapping init() is rejected.
        self._state = StoreState.opening

        try:
            if self._file != MEMORY_DATABASE:
                await ensure_dir(
                    os.path.dirname(self._file),
                    max_depth=self._settings.provision_max_depth,
                    logger=self._log,
                )
            engine = create_engine(self._file)
            try:
                conn = await engine.connect()
                conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
            except SQLAlchemyError as e:
                await engine.dispose()
                raise IOFailure(f"cannot open {self._file}: {e}") from e
        except BaseException:
            self._state = StoreState.unopened
            raise

        self._engine, self._conn = engine, conn
        self._state = StoreState.open
        self._log.debug("store.open", file=self._file)

    async def close(self) -> None:
        if self._state is not StoreState.open:
            raise LifecycleError(f"close() called on a {self._state.value} store")
        assert self._engine is not None and self._conn is not None

        engine, conn = self._engine, self._conn
        self._engine, self._conn = None, None
        self._state = StoreState.closed
        try:
            await conn.close()
        except SQLAlchemyError as e:
            raise IOFailure(f"cannot close {self._file}: {e}") from e
        finally:
            await engine.dispose()
        self._log.debug("store.close", file=self._file)

    async def exec(self, sql: str, params: Params = None) -> ExecResult:
        self._log.debug("sql.exec", sql=sql, params=params)
        conn = self._require_conn()
        try:
            result = await conn.exec_driver_sql(sql, _driver_params(params))
        except SQLAlchemyError as e:
            raise _driver_failure(e) from e
        return ExecResult(affected_rows=result.rowcount, insert_id=result.lastrowid)

    async def query(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        self._log.debug("sql.query", sql=sql, params=params)
        conn = self._require_conn()
        try:
            result = await conn.exec_driver_sql(sql, _driver_params(params))
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise _driver_failure(e) from e

    async def exec_script(self, script: str) -> None:
        """
        Run a multi-statement batch (e.g. generated DDL) with the driver's
        `executescript`. Stops at the first failing statement; earlier ones
        stay committed.
        """

        self._log.debug("sql.script", sql=script)
        conn = self._require_conn()
        try:
            raw = await conn.get_raw_connection()
            cursor = await raw.driver_connection.executescript(script)
            await cursor.close()
        except sqlite3.Error as e:
            raise DriverFailure(str(e), cause=e) from e
        except SQLAlchemyError as e:
            raise _driver_failure(e) from e

    async def create_table(self, table: TableSpec) -> str:
        ddl = generate_create_table(table)
        await self.exec_script(ddl)
        return ddl

    def _require_conn(self) -> AsyncConnection:
        if self._conn is None:
            raise DriverFailure(f"store is not open ({self._state.value})")
        return self._conn


def _driver_params(params: Params) -> Any:
    # qmark placeholders take a tuple; named placeholders take a dict.
    if params is None:
        return None
    if isinstance(params, Mapping):
        return dict(params)
    return tuple(params)


def _driver_failure(e: SQLAlchemyError) -> DriverFailure:
    # Surface the DB-API error (sqlite3.*Error) rather than SQLAlchemy's wrapper.
    cause = getattr(e, "orig", None) or e
    return DriverFailure(str(cause), cause=cause)


# --- Module Notes -----------------------------------------------------------
# There is no retry or statement rewriting here; every failure goes straight to
# the caller, which owns error reporting.
