# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Syntax tree nodes for the subset of Go understood by the parser.

Only the declarations relevant to enum extraction are represented: the
package clause, imports, type specs and const specs. Function and variable
declarations are recognised by the parser but not kept in the tree.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############


class LiteralKind(enum.Enum):
    """Kinds of basic literals."""

    INT = "INT"
    FLOAT = "FLOAT"
    IMAG = "IMAG"
    RUNE = "RUNE"
    STRING = "STRING"


@dataclass(frozen=True)
class Ident:
    """A bare identifier such as ``iota`` or ``Status``."""

    name: str
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class BasicLit:
    """A literal as written in the source, e.g. ``0x1F`` or ``"text"``."""

    kind: LiteralKind
    value: str


@dataclass(frozen=True)
class BinaryExpr:
    """A binary operation ``left op right``."""

    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnaryExpr:
    """A prefix operation ``op operand``."""

    op: str
    operand: Expr


@dataclass(frozen=True)
class ParenExpr:
    """A parenthesised expression."""

    inner: Expr


@dataclass(frozen=True)
class SelectorExpr:
    """A qualified reference ``x.sel``."""

    x: Expr
    sel: str


@dataclass(frozen=True)
class CallExpr:
    """A call or conversion ``fn(args...)``."""

    fn: Expr
    args: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class IndexExpr:
    """An index expression ``x[index]``."""

    x: Expr
    index: Expr


Expr = Ident | BasicLit | BinaryExpr | UnaryExpr | ParenExpr | SelectorExpr | CallExpr | IndexExpr


class DeclKind(enum.Enum):
    """Kinds of general declarations kept in the tree."""

    TYPE = "type"
    CONST = "const"


@dataclass(frozen=True)
class ImportSpec:
    """One import path with its optional local name."""

    path: str
    name: str | None = None


@dataclass(frozen=True)
class TypeSpec:
    """A type declaration.

    Attributes:
        name: The declared type name.
        comment: Raw text of the trailing comment on the same line, including
            the comment delimiters, or None.
        line: 1-based line of the type name.
    """

    name: str
    comment: str | None = None
    line: int = 0


@dataclass(frozen=True)
class ValueSpec:
    """One line of a const declaration.

    Attributes:
        names: The declared identifiers, in order. ``_`` is kept.
        type: The explicit type, if any.
        values: The initializer expressions; empty when the spec repeats the
            previous expression implicitly.
        comment: Raw text of the trailing comment, including delimiters, or None.
        line: 1-based line of the first name.
    """

    names: tuple[Ident, ...]
    type: Expr | None = None
    values: tuple[Expr, ...] = ()
    comment: str | None = None
    line: int = 0


@dataclass(frozen=True)
class GenDecl:
    """A ``type`` or ``const`` declaration, either single or grouped."""

    kind: DeclKind
    specs: tuple[TypeSpec | ValueSpec, ...] = ()
    grouped: bool = False
    line: int = 0


@dataclass(frozen=True)
class GoFile:
    """A parsed Go source file."""

    package: str
    imports: tuple[ImportSpec, ...] = ()
    decls: tuple[GenDecl, ...] = field(default_factory=tuple)


def expr_text(expr: Expr) -> str:
    """Render an expression back to compact Go source text.

    Used to key enum groups by their declared type (``Status`` or
    ``pkg.Status``) and to describe skipped initializers in log output.
    """
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, BasicLit):
        return expr.value
    if isinstance(expr, BinaryExpr):
        return f"{expr_text(expr.left)} {expr.op} {expr_text(expr.right)}"
    if isinstance(expr, UnaryExpr):
        return f"{expr.op}{expr_text(expr.operand)}"
    if isinstance(expr, ParenExpr):
        return f"({expr_text(expr.inner)})"
    if isinstance(expr, SelectorExpr):
        return f"{expr_text(expr.x)}.{expr.sel}"
    if isinstance(expr, CallExpr):
        args = ", ".join(expr_text(arg) for arg in expr.args)
        return f"{expr_text(expr.fn)}({args})"
    return f"{expr_text(expr.x)}[{expr_text(expr.index)}]"
