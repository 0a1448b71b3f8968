"""
Precedence-Climbing Expression Parser
=====================================

This module turns the lexer's scan results into an ASTNode.

Grammar
-------
expression  ::= primary (operator primary)*
primary     ::= INT
operator    ::= '+' | '-' | '*' | '/'

Operator Precedence (lowest to highest)
---------------------------------------
1. additive        + -
2. multiplicative  * /

Algorithm
---------
parse_expression(min_precedence) parses one primary as the left operand,
then keeps absorbing operators whose precedence is at least min_precedence.
For each one it parses the right operand with min_precedence set to the
operator's precedence + 1, so that only tighter-binding operators are pulled
into the right subtree, and folds the result back into the left operand.
Equal-precedence operators therefore group left to right:

    10 - 3 - 2   ->   ((10 - 3) - 2)
    2 + 3 * 4    ->   (2 + (3 * 4))

Errors
------
Parsing stops at the first error; no partial tree is returned.

| Condition                            | Exception               |
|--------------------------------------|-------------------------|
| empty input / operand past the end   | EmptyExpressionError    |
| operator where an integer is needed  | UnexpectedTokenError    |
| TokenError anywhere it is reached    | LexicalError            |
| TokenError among leftover tokens     | LexicalError            |
| other tokens left after expression   | ExpectedOperatorError   |

Example Usage
-------------
>>> from arithc.lexer import scan_line
>>> from arithc.parser import parse
>>> str(parse(scan_line("2 + 3 * 4", 1)))
'(2 + (3 * 4))'
"""

import logging
from typing import Optional, Sequence

from arithc.ast import ASTNode, get_precedence
from arithc.errors import (
    EmptyExpressionError,
    ExpectedOperatorError,
    LexicalError,
    UnexpectedTokenError,
)
from arithc.lexer import ScanResult, Token, TokenError, TokenType


logger = logging.getLogger(__name__)


class ExpressionParser:
    """
    Precedence-climbing parser over a sequence of scan results.

    Usage:
        parser = ExpressionParser(scan_line("1 + 2", 1))
        ast = parser.parse()

    Attributes:
        tokens: The scan results being parsed
    """

    def __init__(self, tokens: Sequence[ScanResult]):
        self.tokens = list(tokens)
        self._pos = 0

    def parse(self) -> ASTNode:
        """
        Parse the whole token sequence as one expression.

        Returns:
            Root of the expression tree

        Raises:
            ASTError: If the tokens do not form a valid expression
        """
        if not self.tokens:
            raise EmptyExpressionError()

        self._pos = 0
        ast = self._parse_expression(0)

        leftover = self._peek()
        if leftover is not None:
            # Climbing only stops early on a non-operator token; a bad
            # character further on still outranks the missing operator
            for token in self.tokens[self._pos:]:
                if isinstance(token, TokenError):
                    raise LexicalError(token)
            raise ExpectedOperatorError(leftover)

        logger.debug(f"Parsed expression from {len(self.tokens)} tokens")
        return ast

    # =========================================================================
    # Token Access
    # =========================================================================

    def _peek(self) -> Optional[ScanResult]:
        if self._pos >= len(self.tokens):
            return None
        return self.tokens[self._pos]

    def _advance(self) -> Optional[ScanResult]:
        token = self._peek()
        if token is not None:
            self._pos += 1
        return token

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    def _parse_primary(self) -> ASTNode:
        """Parse an integer literal into a leaf node."""
        token = self._advance()

        if token is None:
            raise EmptyExpressionError()
        if isinstance(token, TokenError):
            raise LexicalError(token)
        if token.type != TokenType.INT:
            raise UnexpectedTokenError(token)
        return ASTNode.leaf(token)

    def _parse_expression(self, min_precedence: int) -> ASTNode:
        """Parse operators binding at least as tightly as min_precedence."""
        left = self._parse_primary()

        while True:
            lookahead = self._peek()
            if lookahead is None:
                break
            if isinstance(lookahead, TokenError):
                raise LexicalError(lookahead)

            precedence = get_precedence(lookahead)
            if precedence == 0 or precedence < min_precedence:
                break

            operator: Token = self._advance()
            right = self._parse_expression(precedence + 1)
            left = ASTNode.binary(operator, left, right)

        return left


def parse(tokens: Sequence[ScanResult]) -> ASTNode:
    """Parse scan results into an AST (see ExpressionParser)."""
    return ExpressionParser(tokens).parse()
