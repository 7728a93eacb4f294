# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for Go source files.

Converts a token stream produced by the lexer into a GoFile syntax tree. Only
the package clause, imports, type declarations and const declarations are
parsed in full; function and variable declarations are skipped by balanced
bracket scanning.
"""

from goenums.parser.lexer import Token, TokenType, tokenize
from goenums.parser.syntax import (
    BasicLit,
    BinaryExpr,
    CallExpr,
    DeclKind,
    Expr,
    GenDecl,
    GoFile,
    Ident,
    ImportSpec,
    IndexExpr,
    LiteralKind,
    ParenExpr,
    SelectorExpr,
    TypeSpec,
    UnaryExpr,
    ValueSpec,
)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse(source: str) -> GoFile:
    """Parse Go source text into a GoFile syntax tree.

    Args:
        source: The full text of a Go source file.

    Returns:
        A GoFile holding the package name, imports and the type and const
        declarations in source order.

    Raises:
        LexerError: If the source contains invalid characters or unterminated literals.
        ParseError: If the source is syntactically invalid.
    """
    tokens = tokenize(source)
    return _Parser(tokens).parse()


# ################
# Implementation
# ################

_BINARY_PRECEDENCE: dict[str, int] = {
    "||": 1,
    "&&": 2,
    "==": 3,
    "!=": 3,
    "<": 3,
    "<=": 3,
    ">": 3,
    ">=": 3,
    "+": 4,
    "-": 4,
    "|": 4,
    "^": 4,
    "*": 5,
    "/": 5,
    "%": 5,
    "<<": 5,
    ">>": 5,
    "&": 5,
    "&^": 5,
}

_UNARY_OPERATORS: frozenset[str] = frozenset({"+", "-", "!", "^", "*", "&", "<-", "~"})

_LITERALS: dict[TokenType, LiteralKind] = {
    TokenType.INT: LiteralKind.INT,
    TokenType.FLOAT: LiteralKind.FLOAT,
    TokenType.IMAG: LiteralKind.IMAG,
    TokenType.RUNE: LiteralKind.RUNE,
    TokenType.STRING: LiteralKind.STRING,
}

_OPENERS: dict[TokenType, TokenType] = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
    TokenType.LBRACE: TokenType.RBRACE,
}

_CLOSERS: frozenset[TokenType] = frozenset(_OPENERS.values())

_TERMINATORS: frozenset[TokenType] = frozenset({TokenType.NEWLINE, TokenType.SEMICOLON})


class _Parser:
    """Recursive-descent parser for Go token streams.

    COMMENT tokens are invisible to the grammar rules. They are only consulted
    when attaching a trailing comment to the spec that was just parsed.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._prev: Token | None = None
        self._prev_pos = -1
        self._skip_comments()

    def parse(self) -> GoFile:
        """Parse the full token stream and return a GoFile."""
        self._expect(TokenType.PACKAGE)
        package = self._expect(TokenType.IDENTIFIER).value
        self._expect_terminator()

        imports: list[ImportSpec] = []
        while self._check(TokenType.IMPORT):
            imports.extend(self._parse_import_decl())

        decls: list[GenDecl] = []
        while not self._at_end():
            tok = self._current()
            if tok.type == TokenType.TYPE:
                decls.append(self._parse_gen_decl(DeclKind.TYPE))
            elif tok.type == TokenType.CONST:
                decls.append(self._parse_gen_decl(DeclKind.CONST))
            elif tok.type in (TokenType.VAR, TokenType.FUNC):
                self._advance()
                self._skip_to_terminator()
                self._expect_terminator()
            elif tok.type == TokenType.IMPORT:
                raise ParseError("imports must appear before other declarations", tok.line, tok.column)
            else:
                raise ParseError(f"Expected declaration, got {tok.value!r}", tok.line, tok.column)
        return GoFile(package=package, imports=tuple(imports), decls=tuple(decls))

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _skip_comments(self) -> None:
        while self._tokens[self._pos].type == TokenType.COMMENT:
            self._pos += 1

    def _current(self) -> Token:
        """Return the current (un-consumed) non-comment token."""
        return self._tokens[self._pos]

    def _peek_type(self) -> TokenType:
        return self._tokens[self._pos].type

    def _at_end(self) -> bool:
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if tok.type != TokenType.EOF:
            self._prev = tok
            self._prev_pos = self._pos
            self._pos += 1
            self._skip_comments()
        return tok

    def _check(self, *types: TokenType) -> bool:
        return self._peek_type() in types

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            raise ParseError(f"Expected {expected}, got {tok.value!r}", tok.line, tok.column)
        return self._advance()

    def _expect_terminator(self, closer: TokenType | None = None) -> None:
        """Consume a statement terminator.

        A terminator may be omitted before EOF or before the closing token of
        the enclosing group.
        """
        if self._check(*_TERMINATORS):
            self._advance()
            return
        if self._at_end() or (closer is not None and self._check(closer)):
            return
        tok = self._current()
        raise ParseError(f"Expected end of statement, got {tok.value!r}", tok.line, tok.column)

    def _trailing_comment(self) -> str | None:
        """Return the first comment on the same line as the last consumed token."""
        if self._prev is None:
            return None
        idx = self._prev_pos + 1
        while idx < len(self._tokens) and self._tokens[idx].type == TokenType.COMMENT:
            tok = self._tokens[idx]
            if tok.line == self._prev.line:
                return tok.value
            idx += 1
        return None

    def _skip_to_terminator(self, closer: TokenType | None = None) -> None:
        """Consume tokens until a terminator at bracket depth zero.

        Stops in front of the terminator, in front of the enclosing group's
        closer, or at EOF.
        """
        stack: list[TokenType] = []
        while not self._at_end():
            tok = self._current()
            if not stack:
                if tok.type in _TERMINATORS:
                    return
                if closer is not None and tok.type == closer:
                    return
            if tok.type in _OPENERS:
                stack.append(_OPENERS[tok.type])
            elif tok.type in _CLOSERS:
                if not stack or stack[-1] != tok.type:
                    raise ParseError(f"Unexpected {tok.value!r}", tok.line, tok.column)
                stack.pop()
            self._advance()
        if stack:
            tok = self._current()
            raise ParseError("Unexpected end of file", tok.line, tok.column)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_import_decl(self) -> list[ImportSpec]:
        self._expect(TokenType.IMPORT)
        specs: list[ImportSpec] = []
        if self._check(TokenType.LPAREN):
            self._advance()
            while not self._check(TokenType.RPAREN):
                specs.append(self._parse_import_spec())
                self._expect_terminator(TokenType.RPAREN)
            self._expect(TokenType.RPAREN)
        else:
            specs.append(self._parse_import_spec())
        self._expect_terminator()
        return specs

    def _parse_import_spec(self) -> ImportSpec:
        name: str | None = None
        if self._check(TokenType.IDENTIFIER, TokenType.DOT):
            name = self._advance().value
        path = self._expect(TokenType.STRING).value
        return ImportSpec(path=path[1:-1], name=name)

    def _parse_gen_decl(self, kind: DeclKind) -> GenDecl:
        keyword = self._advance()
        parse_spec = self._parse_type_spec if kind == DeclKind.TYPE else self._parse_value_spec
        specs: list[TypeSpec | ValueSpec] = []
        if self._check(TokenType.LPAREN):
            self._advance()
            while not self._check(TokenType.RPAREN):
                if self._at_end():
                    tok = self._current()
                    raise ParseError("Unexpected end of file", tok.line, tok.column)
                specs.append(parse_spec(TokenType.RPAREN))
                self._expect_terminator(TokenType.RPAREN)
            self._expect(TokenType.RPAREN)
            self._expect_terminator()
            return GenDecl(kind=kind, specs=tuple(specs), grouped=True, line=keyword.line)
        specs.append(parse_spec(None))
        self._expect_terminator()
        return GenDecl(kind=kind, specs=tuple(specs), line=keyword.line)

    def _parse_type_spec(self, closer: TokenType | None) -> TypeSpec:
        name_tok = self._expect(TokenType.IDENTIFIER)
        if self._check(*_TERMINATORS) or self._at_end():
            raise ParseError("Expected type", name_tok.line, name_tok.column)
        self._skip_to_terminator(closer)
        return TypeSpec(name=name_tok.value, comment=self._trailing_comment(), line=name_tok.line)

    def _parse_value_spec(self, closer: TokenType | None) -> ValueSpec:
        first = self._expect(TokenType.IDENTIFIER)
        names = [Ident(first.value, first.line, first.column)]
        while self._check(TokenType.COMMA):
            self._advance()
            tok = self._expect(TokenType.IDENTIFIER)
            names.append(Ident(tok.value, tok.line, tok.column))

        spec_type: Expr | None = None
        if self._check(TokenType.IDENTIFIER, TokenType.LPAREN):
            spec_type = self._parse_type_name()

        values: list[Expr] = []
        if self._check(TokenType.ASSIGN):
            self._advance()
            values.append(self._parse_expr())
            while self._check(TokenType.COMMA):
                self._advance()
                values.append(self._parse_expr())
        elif spec_type is not None:
            tok = self._current()
            raise ParseError("Missing init expr for const declaration", tok.line, tok.column)

        return ValueSpec(
            names=tuple(names),
            type=spec_type,
            values=tuple(values),
            comment=self._trailing_comment(),
            line=first.line,
        )

    def _parse_type_name(self) -> Expr:
        """Parse a (possibly qualified or parenthesised) type name."""
        if self._check(TokenType.LPAREN):
            self._advance()
            inner = self._parse_type_name()
            self._expect(TokenType.RPAREN)
            return ParenExpr(inner)
        tok = self._expect(TokenType.IDENTIFIER)
        result: Expr = Ident(tok.value, tok.line, tok.column)
        if self._check(TokenType.DOT):
            self._advance()
            sel = self._expect(TokenType.IDENTIFIER)
            result = SelectorExpr(result, sel.value)
        return result

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expr(self, min_precedence: int = 1) -> Expr:
        """Parse a binary expression by precedence climbing."""
        left = self._parse_unary()
        while True:
            tok = self._current()
            if tok.type != TokenType.OPERATOR:
                return left
            precedence = _BINARY_PRECEDENCE.get(tok.value, 0)
            if precedence < min_precedence:
                return left
            self._advance()
            right = self._parse_expr(precedence + 1)
            left = BinaryExpr(tok.value, left, right)

    def _parse_unary(self) -> Expr:
        tok = self._current()
        if tok.type == TokenType.OPERATOR and tok.value in _UNARY_OPERATORS:
            self._advance()
            return UnaryExpr(tok.value, self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        expr = self._parse_operand()
        while True:
            if self._check(TokenType.DOT):
                self._advance()
                sel = self._expect(TokenType.IDENTIFIER)
                expr = SelectorExpr(expr, sel.value)
            elif self._check(TokenType.LPAREN):
                self._advance()
                args: list[Expr] = []
                while not self._check(TokenType.RPAREN):
                    args.append(self._parse_expr())
                    if not self._check(TokenType.COMMA):
                        break
                    self._advance()
                self._expect(TokenType.RPAREN)
                expr = CallExpr(expr, tuple(args))
            elif self._check(TokenType.LBRACKET):
                self._advance()
                index = self._parse_expr()
                self._expect(TokenType.RBRACKET)
                expr = IndexExpr(expr, index)
            else:
                return expr

    def _parse_operand(self) -> Expr:
        tok = self._current()
        if tok.type == TokenType.IDENTIFIER:
            self._advance()
            return Ident(tok.value, tok.line, tok.column)
        if tok.type in _LITERALS:
            self._advance()
            return BasicLit(_LITERALS[tok.type], tok.value)
        if tok.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_expr()
            self._expect(TokenType.RPAREN)
            return ParenExpr(inner)
        raise ParseError(f"Expected expression, got {tok.value!r}", tok.line, tok.column)
