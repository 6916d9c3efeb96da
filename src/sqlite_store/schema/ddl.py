"""
sqlite_store.schema.ddl

CREATE TABLE / CREATE INDEX generation.

Responsibilities:
- Render a `TableSpec` into a deterministic, semicolon-terminated DDL batch.

Notes:
- Identifiers and default values are interpolated as-is; model metadata is trusted.
- Foreign keys are not generated.
"""

from __future__ import annotations

from typing import Any

from sqlite_store.schema.fields import FieldDescriptor
from sqlite_store.schema.tables import IndexSpec, TableSpec


def collect_indices(table: TableSpec) -> list[IndexSpec]:
    # Explicit model-level indices first, then per-field `index` flags in field order.
    collected = list(table.indices)
    collected.extend(IndexSpec(name=f.name, columns=f.name) for f in table.fields if f.index)
    return collected


def generate_create_table(table: TableSpec) -> str:
    columns = ",\n  ".join(_column_clause(f) for f in table.fields)
    sql = f"CREATE TABLE `{table.name}` (\n  {columns});"
    for index in collect_indices(table):
        sql += f"CREATE INDEX `{index.name}_INDEX` on {table.name}({index.columns});"
    return sql


def _column_clause(field: FieldDescriptor) -> str:
    clause = f"`{field.name}` {(field.db_type or '').upper()}"
    if field.require or field.primary_key:
        clause += " NOT NULL"
    if field.default is not None:
        clause += f" DEFAULT '{_literal(field.default.value)}'"
    if field.primary_key:
        clause += " PRIMARY KEY"
    if field.auto_increment:
        clause += " AUTOINCREMENT"
    if field.unique:
        clause += " UNIQUE"
    return clause


def _literal(value: Any) -> str:
    # Booleans and None render as lowercase true/false/null text.
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


# --- Module Notes -----------------------------------------------------------
# Output format is consumed verbatim by callers comparing DDL text; keep spacing stable.
