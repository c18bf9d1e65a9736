"""
Lox Lexer Package

Implements the lexical analyzer for the Lox expression language.

Key Features:
- Maximal-munch scanning with one character of lookahead
- Line and block comments
- Error-tolerant: bad characters are reported and skipped
- Exact line/column tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, scan, scan_file
from .errors import Diagnostic, ErrorReporter, LexerError

__all__ = [
    "Lexer",
    "scan",
    "scan_file",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "ErrorReporter",
    "LexerError",
]
