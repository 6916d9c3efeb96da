"""
sqlite_store.__main__

Entrypoint for `python -m sqlite_store`.

Responsibilities:
- Load settings and configure logging (to stderr, so stdout stays pure DDL).
- Print the DDL for a JSON model description.
- Optionally apply that DDL to the configured database file.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from sqlite_store.db.store import SqliteStore
from sqlite_store.errors import StoreError
from sqlite_store.observability.logging import configure_logging, get_logger
from sqlite_store.schema.ddl import generate_create_table
from sqlite_store.schema.tables import TableSpec
from sqlite_store.settings import StoreSettings, get_settings

log = get_logger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sqlite_store",
        description="Generate (and optionally apply) SQLite DDL for a model description.",
    )
    parser.add_argument("model", type=Path, help="JSON file with table, fields and indices")
    parser.add_argument("--apply", action="store_true", help="execute the DDL against the store")
    parser.add_argument("--file", help="database file (overrides SQLITE_STORE_FILE)")
    return parser.parse_args(argv)


async def _apply(settings: StoreSettings, table: TableSpec) -> None:
    store = SqliteStore(settings=settings)
    await store.init()
    try:
        await store.create_table(table)
    finally:
        await store.close()
    log.info("schema.applied", table=table.name, file=store.file)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    if args.file is not None:
        settings = settings.model_copy(update={"file": args.file})

    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=False,
        stream=sys.stderr,
    )

    try:
        table = TableSpec.from_model(json.loads(args.model.read_text(encoding="utf-8")))
        print(generate_create_table(table))
        if args.apply:
            asyncio.run(_apply(settings, table))
    except (StoreError, OSError, ValueError, KeyError) as e:
        # Store failures, unreadable or malformed model files, invalid field declarations.
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())


# --- Module Notes -----------------------------------------------------------
# Model files use the ORM's camelCase keys (dbType, primaryKey, defaultValue, ...).
