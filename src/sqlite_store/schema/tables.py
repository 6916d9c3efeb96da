"""
sqlite_store.schema.tables

Table-level metadata: table spec and index specs.

Responsibilities:
- Hold one model's table name, ordered fields and explicit indices.
- Normalize every field on construction so downstream DDL sees canonical types.
- Adapt ORM model classes (or plain mappings) into a `TableSpec`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sqlite_store.schema.fields import FieldDescriptor, normalize_field


class IndexSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    # Comma-joined column list, e.g. "owner,created_at".
    columns: str

    @classmethod
    def from_declaration(cls, name: str, columns: str | Sequence[str]) -> IndexSpec:
        if isinstance(columns, str):
            return cls(name=name, columns=columns)
        return cls(name=name, columns=",".join(columns))


class TableSpec(BaseModel):
    """
    A fresh, per-generation view of one model's metadata.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="table")
    fields: tuple[FieldDescriptor, ...] = ()
    indices: tuple[IndexSpec, ...] = ()

    @field_validator("fields", mode="after")
    @classmethod
    def _normalize_fields(cls, value: tuple[FieldDescriptor, ...]) -> tuple[FieldDescriptor, ...]:
        return tuple(normalize_field(f) for f in value)

    @field_validator("indices", mode="before")
    @classmethod
    def _coerce_indices(cls, value: Any) -> Any:
        # The ORM declares indices as {name: column | [columns]}; keep declaration order.
        if value is None:
            return ()
        if isinstance(value, Mapping):
            return tuple(IndexSpec.from_declaration(k, v) for k, v in value.items())
        return value

    @classmethod
    def from_model(cls, model: Any) -> TableSpec:
        """
        Build a spec from an ORM model class/object exposing `table`, `fields`
        and `indices`, or from a mapping with the same keys.
        """

        if isinstance(model, Mapping):
            table, fields, indices = model["table"], model.get("fields"), model.get("indices")
        else:
            table = model.table
            fields = getattr(model, "fields", None)
            indices = getattr(model, "indices", None)
        return cls(table=table, fields=tuple(fields or ()), indices=indices)


# --- Module Notes -----------------------------------------------------------
# Specs are never cached: the ORM's live metadata may change between generations.
