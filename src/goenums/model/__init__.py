# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for goenums (enum groups, members, requests)."""

from goenums.model.enums import (
    EnumGroup,
    EnumMember,
    FieldSchema,
    FieldSpec,
    FieldValue,
    SchemaStyle,
    TypeTag,
    known_type_tag,
    normalize_type_tag,
)
from goenums.model.request import HANDLER_NAMES, Configuration, GenerationRequest, Handlers

__all__ = [
    # Enums
    "TypeTag",
    "SchemaStyle",
    "FieldSpec",
    "FieldSchema",
    "FieldValue",
    "EnumMember",
    "EnumGroup",
    "normalize_type_tag",
    "known_type_tag",
    # Requests
    "HANDLER_NAMES",
    "Handlers",
    "Configuration",
    "GenerationRequest",
]
