"""
Lox Printer Package

Reference visitors that turn expression trees back into text.
"""

from .rpn_printer import RpnPrinter, to_rpn, format_literal
from .ast_printer import AstPrinter, to_sexpr

__all__ = [
    "RpnPrinter",
    "AstPrinter",
    "to_rpn",
    "to_sexpr",
    "format_literal",
]
