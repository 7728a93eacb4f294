# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for Go source files."""

from goenums.parser.lexer import LexerError
from goenums.parser.parser import ParseError, parse
from goenums.parser.syntax import GoFile, expr_text

__all__ = [
    "parse",
    "ParseError",
    "LexerError",
    "GoFile",
    "expr_text",
]
