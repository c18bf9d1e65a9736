"""
Parenthesized prefix rendering, handy for eyeballing tree shape.

    1 + 2 * (4 - 3)   ->   (+ 1 (* 2 (group (- 4 3))))
"""

from ..parser.ast_nodes import Expression, Binary, Grouping, Literal, Unary, Conditional
from .base import TreeRenderer
from .rpn_printer import format_literal


class AstPrinter(TreeRenderer):
    """Renders each node as `(name child ...)`."""

    def visit_binary(self, expr: Binary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping(self, expr: Grouping) -> str:
        return self._parenthesize("group", expr.expression)

    def visit_literal(self, expr: Literal) -> str:
        return format_literal(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return self._parenthesize(expr.operator.lexeme, expr.right)

    def visit_conditional(self, expr: Conditional) -> str:
        return self._parenthesize("?:", expr.condition, expr.then_branch, expr.else_branch)

    def _parenthesize(self, name: str, *exprs: Expression) -> str:
        parts = [name] + [self._text(expr) for expr in exprs]
        return f"({' '.join(parts)})"


def to_sexpr(expr: Expression) -> str:
    """Convenience function: render `expr` as a parenthesized prefix form."""
    return AstPrinter().render(expr)
