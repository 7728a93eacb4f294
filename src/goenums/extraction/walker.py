# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recovery of enum groups from iota-driven const declarations.

A const block is an enum candidate when its first spec declares one named
constant with an explicit type and an initializer of ``iota`` or
``iota <op> <int>``. Every later spec position advances the ordinal by one,
``_`` included. Blocks declaring the same type merge into one group.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from goenums.extraction.annotations import (
    bind_field_values,
    comment_text,
    decode_member_comment,
    parse_field_schema,
)
from goenums.model.enums import EnumGroup, EnumMember, FieldSchema
from goenums.parser.syntax import (
    BasicLit,
    BinaryExpr,
    DeclKind,
    Expr,
    GenDecl,
    GoFile,
    Ident,
    LiteralKind,
    TypeSpec,
    ValueSpec,
    expr_text,
)

# ###############
# Public Interface
# ###############

IOTA = "iota"
SKIP_IDENTIFIER = "_"


@dataclass(frozen=True)
class TypeComment:
    """A type declaration's trailing comment and the schema it declares."""

    text: str
    schema: FieldSchema


def collect_type_comments(tree: GoFile) -> dict[str, TypeComment]:
    """Map each commented type name to its comment text and field schema."""
    comments: dict[str, TypeComment] = {}
    for decl in tree.decls:
        if decl.kind != DeclKind.TYPE:
            continue
        for spec in decl.specs:
            if not isinstance(spec, TypeSpec) or spec.comment is None:
                continue
            text = comment_text(spec.comment).strip()
            comments[spec.name] = TypeComment(text=text, schema=parse_field_schema(text))
    return comments


def iota_start(expr: Expr) -> int | None:
    """Return the start index encoded by a first-member initializer.

    ``iota`` starts at 0 and ``iota <op> N`` starts at ``0 <op> N`` for the
    operators ``+ - * /``. Division truncates toward zero and division by
    zero yields 0. Any other expression returns None.
    """
    if isinstance(expr, Ident):
        return 0 if expr.name == IOTA else None
    if not isinstance(expr, BinaryExpr):
        return None
    if not (isinstance(expr.left, Ident) and expr.left.name == IOTA):
        return None
    if not (isinstance(expr.right, BasicLit) and expr.right.kind == LiteralKind.INT):
        return None
    operand = go_int_literal(expr.right.value)
    if operand is None:
        return None
    if expr.op == "+":
        return operand
    if expr.op == "-":
        return -operand
    if expr.op in ("*", "/"):
        return 0
    return None


def go_int_literal(text: str) -> int | None:
    """Evaluate a Go integer literal such as ``1_000``, ``0x1F`` or ``017``."""
    digits = text.replace("_", "")
    try:
        if len(digits) > 1 and digits[0] == "0" and digits[1] in "xXoObB":
            return int(digits, 0)
        if len(digits) > 1 and digits[0] == "0":
            return int(digits, 8)
        return int(digits, 10)
    except ValueError:
        return None


def extract_enum_groups(
    tree: GoFile,
    *,
    marker: str = "invalid",
    logger: logging.Logger | None = None,
) -> list[EnumGroup]:
    """Walk a parsed file and return its enum groups in first-appearance order.

    Args:
        tree: The parsed Go file.
        marker: Validity marker token looked for in member comments.
        logger: Logger for diagnostics; defaults to this module's logger.

    Returns:
        One EnumGroup per const type with at least one member.
    """
    log = logger or _logger
    type_comments = collect_type_comments(tree)
    builders: dict[str, _GroupBuilder] = {}
    for decl in tree.decls:
        if decl.kind != DeclKind.CONST:
            continue
        candidate = _enum_candidate(decl, log)
        if candidate is None:
            continue
        type_name, start = candidate
        builder = builders.get(type_name)
        if builder is None:
            type_comment = type_comments.get(type_name)
            builder = _GroupBuilder(
                type_name=type_name,
                start_index=start,
                schema=type_comment.schema if type_comment else FieldSchema(),
                comment=type_comment.text if type_comment else "",
            )
            builders[type_name] = builder
        else:
            log.debug("merging const block at line %d into %s", decl.line, type_name)
        builder.add_block(decl, start, marker=marker, logger=log)

    groups: list[EnumGroup] = []
    for builder in builders.values():
        if not builder.members:
            log.debug("dropping %s: no members", builder.type_name)
            continue
        groups.append(builder.build())
    return groups


# ################
# Implementation
# ################

_logger = logging.getLogger(__name__)


def _enum_candidate(decl: GenDecl, log: logging.Logger) -> tuple[str, int] | None:
    """Return ``(type name, start index)`` when *decl* is an iota enum block."""
    if not decl.specs:
        return None
    first = decl.specs[0]
    if not isinstance(first, ValueSpec) or len(first.values) != 1:
        return None
    if first.names[0].name == SKIP_IDENTIFIER or first.type is None:
        return None
    start = iota_start(first.values[0])
    if start is None:
        log.debug(
            "skipping const block at line %d: initializer %s is not iota based",
            decl.line,
            expr_text(first.values[0]),
        )
        return None
    return expr_text(first.type), start


@dataclass
class _GroupBuilder:
    type_name: str
    start_index: int
    schema: FieldSchema
    comment: str
    members: list[EnumMember] = field(default_factory=list)

    def add_block(self, decl: GenDecl, start: int, *, marker: str, logger: logging.Logger) -> None:
        has_schema = not self.schema.is_empty
        for position, spec in enumerate(decl.specs):
            if not isinstance(spec, ValueSpec):
                continue
            text = comment_text(spec.comment)
            for ident in spec.names:
                if ident.name == SKIP_IDENTIFIER:
                    continue
                annotation = decode_member_comment(text, has_schema=has_schema, marker=marker)
                member = EnumMember(
                    name=ident.name,
                    ordinal=start + position,
                    valid=annotation.valid,
                    aliases=annotation.aliases or [ident.name],
                    field_values=bind_field_values(
                        annotation.payload,
                        self.schema,
                        member=ident.name,
                        logger=logger,
                    ),
                    comment=text.strip(),
                )
                logger.debug("enum member %s.%s = %d", self.type_name, member.name, member.ordinal)
                self.members.append(member)

    def build(self) -> EnumGroup:
        return EnumGroup(
            type_name=self.type_name,
            start_index=self.start_index,
            field_schema=self.schema,
            members=self.members,
            comment=self.comment,
        )
