"""
sqlite_store.schema.fields

Field descriptors and type normalization.

Responsibilities:
- Define the immutable `FieldDescriptor` read from ORM model metadata.
- Map loose `type`/`dbType` declarations onto a canonical column type.
- Infer a `maxLength` rule from bounded character types.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_CHAR_LENGTH = 45

_INT_PREFIX = re.compile(r"^INT")
_NUMBER_ALIASES = re.compile(r"^(FLOAT|DOUBLE|SHORT)")
_BARE_CHAR = re.compile(r"^(VAR)?CHAR$")
_BOUNDED_CHAR = re.compile(r"^(?:VAR)?CHAR\((\d+)\)$")
_STRING_TYPES = re.compile(r"^(VARCHAR|CHAR|TEXT)")
_NUMBER_TYPES = re.compile(r"^(INT|NUM|FLOAT|DOUBLE|SHORT)")

_DEFAULT_KEYS = ("defaultValue", "default_value")


class DefaultValue(BaseModel):
    """
    A column default that was explicitly declared.

    Wrapping keeps "no default" (``None`` on the descriptor) apart from a
    declared default whose value is falsy, e.g. ``""`` or ``0``.
    """

    model_config = ConfigDict(frozen=True)

    value: Any


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        from_attributes=True,
    )

    name: str
    type: str | None = None
    db_type: str | None = None
    rules: dict[str, Any] | None = None

    require: bool = False
    primary_key: bool = False
    auto_increment: bool = False
    unique: bool = False
    index: bool = False

    default: DefaultValue | None = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_default(cls, data: Any) -> Any:
        # ORM field objects carry their declaration as instance attributes.
        if not isinstance(data, (dict, BaseModel)) and hasattr(data, "__dict__"):
            data = dict(vars(data))
        # Presence of the key, not its truthiness, declares a default.
        if not isinstance(data, dict):
            return data
        present = [key for key in _DEFAULT_KEYS if key in data]
        if not present:
            return data
        data = dict(data)
        raw = data.pop(present[0])
        for key in present[1:]:
            data.pop(key)
        data["default"] = raw if isinstance(raw, DefaultValue) else DefaultValue(value=raw)
        return data


def normalize_field(field: FieldDescriptor) -> FieldDescriptor:
    """
    Return a copy of `field` with a canonical `db_type`, a matching logical
    `type` and inferred length rules. `field` itself is left untouched.

    Unrecognized column types (e.g. ``BLOB``) are kept, uppercased, without
    any rule or logical-type inference.
    """

    rules = dict(field.rules or {})
    logical = field.type

    db_type = (field.db_type or field.type or "VARCHAR").strip().upper()

    if _INT_PREFIX.match(db_type):
        db_type = "INTEGER"
    if _NUMBER_ALIASES.match(db_type):
        db_type = "NUMBER"
    if _BARE_CHAR.match(db_type):
        db_type = f"{db_type}({DEFAULT_CHAR_LENGTH})"

    bounded = _BOUNDED_CHAR.match(db_type)
    if bounded and "maxLength" not in rules and "rangeLength" not in rules:
        rules["maxLength"] = int(bounded.group(1))

    if _STRING_TYPES.match(db_type):
        logical = "string"
    elif _NUMBER_TYPES.match(db_type):
        logical = "number"

    return field.model_copy(update={"db_type": db_type, "type": logical, "rules": rules})


# --- Module Notes -----------------------------------------------------------
# Rule order matters: INT*/FLOAT*/DOUBLE*/SHORT* are rewritten before the logical
# type is inferred, and bare CHAR types get their bound before maxLength is read.
