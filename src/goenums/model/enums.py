# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Enum groups, members and field metadata recovered from Go source."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class TypeTag(Enum):
    """Go types accepted in a field schema."""

    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    STRING = "string"
    DURATION = "time.Duration"
    TIME = "time.Time"


def normalize_type_tag(tag: str) -> str:
    """Return the canonical spelling of a schema type tag.

    ``byte`` and ``rune`` are Go aliases for ``uint8`` and ``int32``. Unknown
    tags are returned unchanged.
    """
    tag = tag.strip()
    return _TAG_ALIASES.get(tag, tag)


def known_type_tag(tag: str) -> TypeTag | None:
    """Return the TypeTag for *tag*, or None when the tag is not supported."""
    try:
        return TypeTag(normalize_type_tag(tag))
    except ValueError:
        return None


class SchemaStyle(Enum):
    """Delimiter style used by a field schema comment."""

    SPACE = "space"
    BRACKET = "bracket"
    PARENTHESIS = "parenthesis"


class FieldSpec(BaseModel):
    """One named, typed field declared in a type comment, e.g. ``Gravity[float64]``."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_tag: str


class FieldSchema(BaseModel):
    """The ordered fields every member of an enum group may carry."""

    model_config = ConfigDict(frozen=True)

    fields: list[FieldSpec] = _Field(default_factory=list)
    style: SchemaStyle = SchemaStyle.SPACE

    @property
    def opener(self) -> str:
        return _DELIMITERS[self.style][0]

    @property
    def closer(self) -> str:
        return _DELIMITERS[self.style][1]

    @property
    def is_empty(self) -> bool:
        return not self.fields


FieldScalar = bool | int | float | timedelta | datetime | str


class FieldValue(BaseModel):
    """A member's coerced value for one schema field.

    Attributes:
        name: The schema field name.
        type_tag: The schema type tag the value was coerced to.
        raw: The payload text as written in the comment.
        value: The typed Python value.
        literal: The value rendered as a Go expression.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_tag: str
    raw: str
    value: FieldScalar
    literal: str


class EnumMember(BaseModel):
    """A single named constant of an enum group."""

    model_config = ConfigDict(frozen=True)

    name: str
    ordinal: int
    valid: bool = True
    aliases: list[str] = _Field(default_factory=list)
    field_values: list[FieldValue] = _Field(default_factory=list)
    comment: str = ""

    @property
    def alias(self) -> str:
        """The canonical string form of the member."""
        return self.aliases[0] if self.aliases else self.name


class EnumGroup(BaseModel):
    """All members declared for one constant type, in declaration order."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    start_index: int = 0
    field_schema: FieldSchema = _Field(default_factory=FieldSchema)
    members: list[EnumMember] = _Field(default_factory=list)
    comment: str = ""


# ################
# Implementation
# ################

_TAG_ALIASES: dict[str, str] = {
    "byte": "uint8",
    "rune": "int32",
}

_DELIMITERS: dict[SchemaStyle, tuple[str, str]] = {
    SchemaStyle.SPACE: (" ", " "),
    SchemaStyle.BRACKET: ("[", "]"),
    SchemaStyle.PARENTHESIS: ("(", ")"),
}
