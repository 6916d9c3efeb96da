"""
sqlite_store.schema

Model metadata types and DDL generation.

Responsibilities:
- Normalize field descriptors into canonical column types.
- Emit CREATE TABLE / CREATE INDEX text for a table spec.
"""

from sqlite_store.schema.ddl import collect_indices, generate_create_table
from sqlite_store.schema.fields import DefaultValue, FieldDescriptor, normalize_field
from sqlite_store.schema.tables import IndexSpec, TableSpec

__all__ = [
    "DefaultValue",
    "FieldDescriptor",
    "IndexSpec",
    "TableSpec",
    "collect_indices",
    "generate_create_table",
    "normalize_field",
]
