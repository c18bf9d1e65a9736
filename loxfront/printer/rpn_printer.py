"""
Reverse Polish notation rendering of expression trees.

The reference visitor: every node type is handled, operands always come
before their operator.
"""

from typing import Any

from ..parser.ast_nodes import Expression, Binary, Grouping, Literal, Unary, Conditional
from .base import TreeRenderer


def format_literal(value: Any) -> str:
    """Render a literal value the way Lox source would spell it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


class RpnPrinter(TreeRenderer):
    """
    Renders an expression in postfix order.

    Binary: `left right op`; unary: `operand op`; conditional:
    `condition then else ?:`. Groupings disappear since postfix needs no
    parentheses.
    """

    def visit_binary(self, expr: Binary) -> str:
        return f"{self._text(expr.left)} {self._text(expr.right)} {expr.operator.lexeme}"

    def visit_grouping(self, expr: Grouping) -> str:
        return self._text(expr.expression)

    def visit_literal(self, expr: Literal) -> str:
        return format_literal(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return f"{self._text(expr.right)} {expr.operator.lexeme}"

    def visit_conditional(self, expr: Conditional) -> str:
        return (f"{self._text(expr.condition)} {self._text(expr.then_branch)} "
                f"{self._text(expr.else_branch)} ?:")


def to_rpn(expr: Expression) -> str:
    """Convenience function: render `expr` in postfix notation."""
    return RpnPrinter().render(expr)
