"""
Shared machinery for the text-rendering visitors.
"""

from typing import Dict

from ..parser.ast_nodes import ExpressionVisitor, Expression, postorder


class TreeRenderer(ExpressionVisitor[str]):
    """
    Base for visitors that build one string per node.

    `render` walks the tree bottom-up with `postorder`, so each `visit_*`
    call finds its children already rendered and only has to combine them
    through `_text`. Tree depth is therefore bounded by memory, not by the
    interpreter's recursion limit.
    """

    def __init__(self):
        self._rendered: Dict[int, str] = {}

    def render(self, expr: Expression) -> str:
        self._rendered = {}
        for node in postorder(expr):
            self._rendered[id(node)] = node.accept(self)
        return self._rendered.pop(id(expr))

    def _text(self, child: Expression) -> str:
        """Rendering of a child; each entry is consumed by its parent."""
        text = self._rendered.pop(id(child), None)
        if text is None:
            # Called outside render(), or the same node object appears twice
            text = child.accept(self)
        return text
