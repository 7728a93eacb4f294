# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for Go source files.

Converts raw Go source text into a sequence of tokens for subsequent parsing.
Comments are kept in the token stream so that the parser can attach trailing
comments to declarations. Newlines are reported as NEWLINE tokens only where
Go's automatic semicolon insertion rule would place a semicolon.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the Go lexer."""

    # Keywords
    BREAK = "break"
    CASE = "case"
    CHAN = "chan"
    CONST = "const"
    CONTINUE = "continue"
    DEFAULT = "default"
    DEFER = "defer"
    ELSE = "else"
    FALLTHROUGH = "fallthrough"
    FOR = "for"
    FUNC = "func"
    GO = "go"
    GOTO = "goto"
    IF = "if"
    IMPORT = "import"
    INTERFACE = "interface"
    MAP = "map"
    PACKAGE = "package"
    RANGE = "range"
    RETURN = "return"
    SELECT = "select"
    STRUCT = "struct"
    SWITCH = "switch"
    TYPE = "type"
    VAR = "var"

    # Delimiters
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    COMMA = ","
    SEMICOLON = ";"
    DOT = "."
    COLON = ":"
    ASSIGN = "="

    # Every other operator; the token value holds the operator text.
    OPERATOR = "OPERATOR"

    # Literals
    INT = "INT"
    FLOAT = "FLOAT"
    IMAG = "IMAG"
    RUNE = "RUNE"
    STRING = "STRING"

    # Identifiers
    IDENTIFIER = "IDENTIFIER"

    # Trivia kept for the parser
    COMMENT = "COMMENT"
    NEWLINE = "NEWLINE"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw source text of the token. For COMMENT tokens this
            includes the comment delimiters.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(Exception):
    """Raised when the scanner encounters an invalid character or unterminated literal.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Tokenize Go source text into a sequence of tokens.

    Returns a list of tokens. The final token is always an EOF token.
    Whitespace is consumed; comments are emitted as COMMENT tokens and
    significant line breaks as NEWLINE tokens.

    Args:
        source: The full text of a Go source file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unexpected characters, unterminated string, rune or
            raw string literals, or unterminated block comments.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "break": TokenType.BREAK,
    "case": TokenType.CASE,
    "chan": TokenType.CHAN,
    "const": TokenType.CONST,
    "continue": TokenType.CONTINUE,
    "default": TokenType.DEFAULT,
    "defer": TokenType.DEFER,
    "else": TokenType.ELSE,
    "fallthrough": TokenType.FALLTHROUGH,
    "for": TokenType.FOR,
    "func": TokenType.FUNC,
    "go": TokenType.GO,
    "goto": TokenType.GOTO,
    "if": TokenType.IF,
    "import": TokenType.IMPORT,
    "interface": TokenType.INTERFACE,
    "map": TokenType.MAP,
    "package": TokenType.PACKAGE,
    "range": TokenType.RANGE,
    "return": TokenType.RETURN,
    "select": TokenType.SELECT,
    "struct": TokenType.STRUCT,
    "switch": TokenType.SWITCH,
    "type": TokenType.TYPE,
    "var": TokenType.VAR,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
}

# Longest operators first so that scanning is maximal munch.
_OPERATORS: tuple[str, ...] = (
    "<<=",
    ">>=",
    "&^=",
    "...",
    "&&",
    "||",
    "<-",
    "++",
    "--",
    "==",
    "!=",
    "<=",
    ">=",
    ":=",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "<<",
    ">>",
    "&^",
    "+",
    "-",
    "*",
    "/",
    "%",
    "&",
    "|",
    "^",
    "<",
    ">",
    "!",
    "~",
    "=",
    ".",
)

# Tokens after which a line break terminates the statement.
_SEMICOLON_TRIGGERS: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.INT,
        TokenType.FLOAT,
        TokenType.IMAG,
        TokenType.RUNE,
        TokenType.STRING,
        TokenType.BREAK,
        TokenType.CONTINUE,
        TokenType.FALLTHROUGH,
        TokenType.RETURN,
        TokenType.RPAREN,
        TokenType.RBRACKET,
        TokenType.RBRACE,
    }
)

_ESCAPES = frozenset("abfnrtv\\'\"")

# ASCII only; str.isdigit() also accepts digits such as "²".
_DECIMAL_DIGITS = frozenset("0123456789")


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []
        self._last_significant: Token | None = None

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r":
                self._advance()
            elif ch == "\n":
                self._emit_newline(self._line, self._column)
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._scan_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._scan_block_comment()
            else:
                self._scan_token()
        self._emit_newline(self._line, self._column)
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' at end of input."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _emit(self, token: Token) -> None:
        self._tokens.append(token)
        if token.type not in (TokenType.COMMENT, TokenType.NEWLINE):
            self._last_significant = token

    def _emit_newline(self, line: int, col: int) -> None:
        """Insert a NEWLINE token if the previous token ends a statement."""
        last = self._last_significant
        if last is None:
            return
        ends_statement = last.type in _SEMICOLON_TRIGGERS or (
            last.type == TokenType.OPERATOR and last.value in ("++", "--")
        )
        if not ends_statement:
            return
        self._tokens.append(Token(TokenType.NEWLINE, "\n", line, col))
        self._last_significant = None

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _scan_line_comment(self) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        line = self._line
        col = self._column
        start = self._pos
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()
        self._emit(Token(TokenType.COMMENT, self._source[start : self._pos], line, col))

    def _scan_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'.

        A block comment that spans lines acts like a newline.
        """
        line = self._line
        col = self._column
        start = self._pos
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                text = self._source[start : self._pos]
                self._emit(Token(TokenType.COMMENT, text, line, col))
                if "\n" in text:
                    self._emit_newline(line, col)
                return
            self._advance()
        raise LexerError("comment not terminated", line, col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._emit(Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col))
        elif ch == '"':
            self._scan_string(line, col)
        elif ch == "`":
            self._scan_raw_string(line, col)
        elif ch == "'":
            self._scan_rune(line, col)
        elif ch in _DECIMAL_DIGITS or (ch == "." and self._peek() in _DECIMAL_DIGITS):
            self._scan_number(line, col)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier_or_keyword(line, col)
        else:
            self._scan_operator(line, col)

    def _scan_operator(self, line: int, col: int) -> None:
        for op in _OPERATORS:
            if self._source.startswith(op, self._pos):
                for _ in op:
                    self._advance()
                if op == "=":
                    self._emit(Token(TokenType.ASSIGN, op, line, col))
                elif op == ".":
                    self._emit(Token(TokenType.DOT, op, line, col))
                else:
                    self._emit(Token(TokenType.OPERATOR, op, line, col))
                return
        raise LexerError(f"invalid character {self._current()!r}", line, col)

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_escape(self, quote: str, line: int, col: int) -> None:
        """Consume one escape sequence after the backslash."""
        esc = self._current()
        if esc == "":
            raise LexerError("escape sequence not terminated", line, col)
        if esc in _ESCAPES:
            if esc in "'\"" and esc != quote:
                raise LexerError("unknown escape sequence", self._line, self._column)
            self._advance()
            return
        digits = {"x": 2, "u": 4, "U": 8}
        if esc in digits:
            self._advance()
            for _ in range(digits[esc]):
                if self._current() not in "0123456789abcdefABCDEF" or self._current() == "":
                    raise LexerError("illegal character in escape sequence", self._line, self._column)
                self._advance()
            return
        if esc in "01234567":
            for _ in range(3):
                if self._current() not in "01234567" or self._current() == "":
                    raise LexerError("illegal character in escape sequence", self._line, self._column)
                self._advance()
            return
        raise LexerError("unknown escape sequence", self._line, self._column)

    def _scan_string(self, line: int, col: int) -> None:
        """Scan an interpreted string literal; the token value keeps its quotes."""
        start = self._pos
        self._advance()  # opening "
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()  # closing "
                self._emit(Token(TokenType.STRING, self._source[start : self._pos], line, col))
                return
            if ch == "\n":
                break
            self._advance()
            if ch == "\\":
                self._scan_escape('"', line, col)
        raise LexerError("string literal not terminated", line, col)

    def _scan_raw_string(self, line: int, col: int) -> None:
        """Scan a back-quoted raw string literal, which may span lines."""
        start = self._pos
        self._advance()  # opening `
        while self._pos < len(self._source):
            if self._current() == "`":
                self._advance()
                self._emit(Token(TokenType.STRING, self._source[start : self._pos], line, col))
                return
            self._advance()
        raise LexerError("raw string literal not terminated", line, col)

    def _scan_rune(self, line: int, col: int) -> None:
        """Scan a rune literal such as 'a' or '\\n'."""
        start = self._pos
        self._advance()  # opening '
        if self._current() in ("'", "\n", ""):
            raise LexerError("empty rune literal or unescaped ' in rune literal", line, col)
        ch = self._advance()
        if ch == "\\":
            self._scan_escape("'", line, col)
        if self._current() != "'":
            raise LexerError("rune literal not terminated", line, col)
        self._advance()
        self._emit(Token(TokenType.RUNE, self._source[start : self._pos], line, col))

    def _scan_digits(self, valid: str) -> None:
        while self._current() != "" and (self._current() in valid or self._current() == "_"):
            self._advance()

    def _scan_number(self, line: int, col: int) -> None:
        """Scan an integer, floating-point or imaginary literal.

        Hexadecimal, octal and binary prefixes and '_' digit separators are
        accepted. Numeric validity beyond the character classes is left to
        the consumer.
        """
        start = self._pos
        kind = TokenType.INT
        decimal = "0123456789"
        hexdigits = "0123456789abcdefABCDEF"

        if self._current() == "0" and self._peek() in "xX" and self._peek() != "":
            self._advance()
            self._advance()
            self._scan_digits(hexdigits)
            if self._current() == ".":
                kind = TokenType.FLOAT
                self._advance()
                self._scan_digits(hexdigits)
            if self._current() in ("p", "P"):
                kind = TokenType.FLOAT
                self._scan_exponent()
        elif self._current() == "0" and self._peek() in "oObB" and self._peek() != "":
            self._advance()
            self._advance()
            self._scan_digits(decimal)
        else:
            self._scan_digits(decimal)
            if self._current() == ".":
                kind = TokenType.FLOAT
                self._advance()
                self._scan_digits(decimal)
            if self._current() in ("e", "E"):
                kind = TokenType.FLOAT
                self._scan_exponent()

        if self._current() == "i":
            kind = TokenType.IMAG
            self._advance()
        value = self._source[start : self._pos]
        self._emit(Token(kind, value, line, col))

    def _scan_exponent(self) -> None:
        self._advance()  # e, E, p or P
        if self._current() in ("+", "-"):
            self._advance()
        if self._current() not in _DECIMAL_DIGITS:
            raise LexerError("exponent has no digits", self._line, self._column)
        self._scan_digits("0123456789")

    def _scan_identifier_or_keyword(self, line: int, col: int) -> None:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        value = self._source[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._emit(Token(token_type, value, line, col))
