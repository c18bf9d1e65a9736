"""
Abstract Syntax Tree node definitions for Lox expressions.

The node set is closed: Binary, Grouping, Literal, Unary and Conditional.
Every node is an immutable dataclass that owns its children and dispatches
to exactly one method of an `ExpressionVisitor` through `accept`.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Iterator, List, Tuple, TypeVar
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import Token

R = TypeVar("R")


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    BINARY = "Binary"
    GROUPING = "Grouping"
    LITERAL = "Literal"
    UNARY = "Unary"
    CONDITIONAL = "Conditional"


class ExpressionVisitor(ABC, Generic[R]):
    """
    Visitor interface over the closed expression node set.

    Subclasses must implement all five methods; an incomplete visitor
    cannot be instantiated.
    """

    @abstractmethod
    def visit_binary(self, expr: "Binary") -> R:
        pass

    @abstractmethod
    def visit_grouping(self, expr: "Grouping") -> R:
        pass

    @abstractmethod
    def visit_literal(self, expr: "Literal") -> R:
        pass

    @abstractmethod
    def visit_unary(self, expr: "Unary") -> R:
        pass

    @abstractmethod
    def visit_conditional(self, expr: "Conditional") -> R:
        pass


class Expression(ABC):
    """Base class for expression nodes."""
    node_type: ClassVar[ASTNodeType]

    @abstractmethod
    def accept(self, visitor: ExpressionVisitor[R]) -> R:
        """Accept a visitor (double dispatch)."""
        pass

    @abstractmethod
    def children(self) -> List["Expression"]:
        """Direct sub-expressions in source order."""
        pass


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Binary(Expression):
    """Two-operand infix operation, including the comma operator."""
    left: Expression
    operator: Token
    right: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.BINARY

    def accept(self, visitor: ExpressionVisitor[R]) -> R:
        return visitor.visit_binary(self)

    def children(self) -> List[Expression]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping(Expression):
    """Parenthesized expression, kept so re-rendering can show precedence."""
    expression: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.GROUPING

    def accept(self, visitor: ExpressionVisitor[R]) -> R:
        return visitor.visit_grouping(self)

    def children(self) -> List[Expression]:
        return [self.expression]


@dataclass(frozen=True)
class Literal(Expression):
    """Constant: a float, a string, a bool, or None for nil."""
    value: Any

    node_type: ClassVar[ASTNodeType] = ASTNodeType.LITERAL

    def accept(self, visitor: ExpressionVisitor[R]) -> R:
        return visitor.visit_literal(self)

    def children(self) -> List[Expression]:
        return []


@dataclass(frozen=True)
class Unary(Expression):
    """Prefix negation (-) or logical not (!)."""
    operator: Token
    right: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.UNARY

    def accept(self, visitor: ExpressionVisitor[R]) -> R:
        return visitor.visit_unary(self)

    def children(self) -> List[Expression]:
        return [self.right]


@dataclass(frozen=True)
class Conditional(Expression):
    """Ternary `condition ? then_branch : else_branch`."""
    condition: Expression
    then_branch: Expression
    else_branch: Expression

    node_type: ClassVar[ASTNodeType] = ASTNodeType.CONDITIONAL

    def accept(self, visitor: ExpressionVisitor[R]) -> R:
        return visitor.visit_conditional(self)

    def children(self) -> List[Expression]:
        return [self.condition, self.then_branch, self.else_branch]


# ============================================================================
# Traversal
# ============================================================================

def postorder(expr: Expression) -> Iterator[Expression]:
    """
    Yield every node of the tree, children before parents.

    Uses an explicit stack, so arbitrarily deep trees (a long `+` chain
    nests leftwards once per operator) never hit the recursion limit.
    """
    stack: List[Tuple[Expression, bool]] = [(expr, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(node.children()):
            stack.append((child, False))
