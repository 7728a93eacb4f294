# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Enum extraction: comment decoding, value coercion and the parse pipeline."""

from goenums.extraction.annotations import (
    MemberAnnotation,
    bind_field_values,
    decode_member_comment,
    parse_field_schema,
    split_annotation,
    split_payload,
)
from goenums.extraction.coercion import coerce
from goenums.extraction.pipeline import (
    ExtractionError,
    InternalParserError,
    NoEnumsFoundError,
    ParseCancelled,
    SourceReadError,
    SourceSyntaxError,
    parse_source,
)
from goenums.extraction.walker import extract_enum_groups

__all__ = [
    # Pipeline
    "parse_source",
    "ExtractionError",
    "SourceReadError",
    "SourceSyntaxError",
    "NoEnumsFoundError",
    "InternalParserError",
    "ParseCancelled",
    # Walker
    "extract_enum_groups",
    # Annotations
    "MemberAnnotation",
    "decode_member_comment",
    "split_annotation",
    "split_payload",
    "parse_field_schema",
    "bind_field_values",
    # Coercion
    "coerce",
]
