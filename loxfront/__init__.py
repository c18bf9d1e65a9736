"""
loxfront - front end for the Lox expression language

Turns source text into a typed expression tree and renders trees back to
text.

Architecture:
    loxfront/
    ├── lexer/           # Tokens, scanning and diagnostics
    ├── parser/          # AST nodes, visitor contract, recursive descent
    ├── printer/         # Postfix (RPN) and prefix reference visitors
    └── cli.py           # Command-line driver
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, ErrorReporter, scan
from .parser import Parser, ParseResult, parse, parse_string
from .printer import RpnPrinter, AstPrinter, to_rpn, to_sexpr

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "ParseResult",
    "Token",
    "TokenType",
    "ErrorReporter",
    "RpnPrinter",
    "AstPrinter",

    # Convenience functions
    "scan",
    "parse",
    "parse_string",
    "to_rpn",
    "to_sexpr",

    # Version info
    "__version__",
    "__license__",
]
