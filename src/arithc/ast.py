"""
Expression Abstract Syntax Tree (AST)
=====================================

This module defines the binary tree the parser builds and the code
generator walks.

Node Shape
----------
Every node carries an operation Token and two optional children:

    ASTNode(ASTERISK)
    ├── ASTNode(PLUS)
    │   ├── ASTNode(INT(5))
    │   └── ASTNode(INT(3))
    └── ASTNode(INT(2))

Invariants
----------
- A leaf (no children) always carries an INT token.
- An operator node (PLUS, MINUS, ASTERISK, SLASH) always has both children.

Both are enforced by the ASTNode.leaf() and ASTNode.binary() constructors,
which the parser uses exclusively. Nodes are frozen: nothing mutates the
tree once it has been built.
"""

from dataclasses import dataclass
from typing import Optional

from arithc.errors import (
    ExpectedIntegerError,
    InvalidLeafNodeError,
    UnexpectedTokenError,
)
from arithc.lexer import Token, TokenType


# =============================================================================
# Operator Precedence
# =============================================================================

# Higher binds tighter; anything absent is "not an operator" (0)
PRECEDENCE: dict[TokenType, int] = {
    TokenType.PLUS: 1,
    TokenType.MINUS: 1,
    TokenType.ASTERISK: 2,
    TokenType.SLASH: 2,
}

SYMBOLS: dict[TokenType, str] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.ASTERISK: "*",
    TokenType.SLASH: "/",
}


def get_precedence(token: object) -> int:
    """
    Return the binding strength of token, or 0 if it is not an operator.

    Accepts any scan result, so a TokenError simply reports 0.
    """
    if isinstance(token, Token):
        return PRECEDENCE.get(token.type, 0)
    return 0


# =============================================================================
# AST Node
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    A node of the expression tree.

    Attributes:
        operation: INT token for leaves, operator token for inner nodes
        left: Left operand subtree (None for leaves)
        right: Right operand subtree (None for leaves)
    """
    operation: Token
    left: Optional["ASTNode"] = None
    right: Optional["ASTNode"] = None

    @classmethod
    def leaf(cls, operation: Token) -> "ASTNode":
        """
        Build a leaf node.

        Raises:
            InvalidLeafNodeError: If operation is not an INT token
        """
        if operation.type != TokenType.INT:
            raise InvalidLeafNodeError(operation)
        return cls(operation)

    @classmethod
    def binary(
        cls,
        operation: Token,
        left: Optional["ASTNode"],
        right: Optional["ASTNode"],
    ) -> "ASTNode":
        """
        Build an operator node over two operand subtrees.

        Raises:
            UnexpectedTokenError: If operation is not an arithmetic operator
            ExpectedIntegerError: If either operand is missing
        """
        if not operation.is_operator():
            raise UnexpectedTokenError(operation)
        if left is None or right is None:
            raise ExpectedIntegerError(operation)
        return cls(operation, left, right)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def depth(self) -> int:
        """Return the height of the tree (a single leaf has depth 1)."""
        children = [c.depth() for c in (self.left, self.right) if c is not None]
        return 1 + max(children, default=0)

    def evaluate(self) -> int:
        """
        Evaluate the tree with integer arithmetic.

        Division truncates toward zero. Unlike the generated code, division
        by zero is not deferred: it raises ZeroDivisionError.
        """
        if self.is_leaf:
            return self.operation.value

        left = self.left.evaluate()
        right = self.right.evaluate()
        op = self.operation.type

        if op == TokenType.PLUS:
            return left + right
        if op == TokenType.MINUS:
            return left - right
        if op == TokenType.ASTERISK:
            return left * right
        if op == TokenType.SLASH:
            quotient = abs(left) // abs(right)
            return quotient if (left < 0) == (right < 0) else -quotient
        raise UnexpectedTokenError(self.operation)

    def __str__(self) -> str:
        """Render fully parenthesized infix, e.g. ``(2 + (3 * 4))``."""
        if self.is_leaf:
            return str(self.operation.value)
        symbol = SYMBOLS.get(self.operation.type, str(self.operation))
        return f"({self.left} {symbol} {self.right})"


# =============================================================================
# AST Printer
# =============================================================================

class ASTPrinter:
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))

    Output for ``2 + 3 * 4``:
        PLUS
          INT(2)
          ASTERISK
            INT(3)
            INT(4)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self._visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _visit(self, node: ASTNode) -> None:
        self._emit(str(node.operation))
        self.indent_level += 1
        for child in (node.left, node.right):
            if child is not None:
                self._visit(child)
        self.indent_level -= 1
