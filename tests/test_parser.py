# =============================================================================
# test_parser.py - Parser and AST Unit Tests
# =============================================================================
# Tests for the precedence-climbing parser and the ASTNode type.
#
# Test coverage includes:
#   - Operator precedence and left associativity
#   - The full error taxonomy (empty, unexpected, lexical, leftover tokens)
#   - Leaf and operator node invariants
#   - Evaluation and printing helpers
# =============================================================================

import sys

import pytest

from arithc.ast import ASTNode, ASTPrinter, get_precedence
from arithc.errors import (
    ASTError,
    EmptyExpressionError,
    ExpectedIntegerError,
    ExpectedOperatorError,
    InvalidLeafNodeError,
    LexicalError,
    UnexpectedTokenError,
)
from arithc.lexer import (
    ASTERISK,
    END_OF_LINE,
    MINUS,
    PLUS,
    SLASH,
    Token,
    TokenError,
    scan_line,
)
from arithc.parser import ExpressionParser, parse


def parse_text(text: str) -> ASTNode:
    """Helper to scan and parse a single line."""
    return parse(scan_line(text, 1))


def leaf(value: int) -> ASTNode:
    return ASTNode.leaf(Token.integer(value))


# =============================================================================
# Successful Parses
# =============================================================================

class TestParse:
    """Tests for well-formed expressions."""

    def test_single_integer(self):
        ast = parse_text("42")
        assert ast == leaf(42)
        assert ast.is_leaf

    def test_simple_addition(self):
        assert parse_text("1 + 2") == ASTNode.binary(PLUS, leaf(1), leaf(2))

    def test_precedence(self):
        """Multiplication binds tighter than addition."""
        ast = parse_text("2 + 3 * 4")
        assert ast.evaluate() == 14
        assert ast.operation == PLUS
        assert ast.right.operation == ASTERISK

    def test_precedence_on_the_left(self):
        ast = parse_text("2 * 3 + 4")
        assert str(ast) == "((2 * 3) + 4)"
        assert ast.evaluate() == 10

    def test_subtraction_is_left_associative(self):
        ast = parse_text("10 - 3 - 2")
        assert str(ast) == "((10 - 3) - 2)"
        assert ast.evaluate() == 5

    def test_division_is_left_associative(self):
        ast = parse_text("100 / 10 / 5")
        assert str(ast) == "((100 / 10) / 5)"
        assert ast.evaluate() == 2

    def test_mixed_chain(self):
        ast = parse_text("1+3-5*44/6+4")
        assert str(ast) == "(((1 + 3) - ((5 * 44) / 6)) + 4)"
        assert ast.evaluate() == 1 + 3 - (5 * 44) // 6 + 4

    def test_multiplicative_chain_inside_additive(self):
        ast = parse_text("1 + 2 * 3 * 4")
        assert str(ast) == "(1 + ((2 * 3) * 4))"

    def test_long_flat_chain(self):
        """Flat chains parse iteratively, past the recursion limit."""
        count = sys.getrecursionlimit() + 50
        ast = parse_text("+".join(["1"] * count))
        assert ast.operation == PLUS
        assert ast.right == leaf(1)

    def test_parser_class(self):
        parser = ExpressionParser(scan_line("8 / 2", 1))
        assert parser.parse() == ASTNode.binary(SLASH, leaf(8), leaf(2))


# =============================================================================
# Parse Errors
# =============================================================================

class TestParseErrors:
    """Tests for the parser's error taxonomy."""

    def test_empty_input(self):
        with pytest.raises(EmptyExpressionError):
            parse([])

    def test_whitespace_only_line(self):
        with pytest.raises(EmptyExpressionError):
            parse_text("   ")

    def test_trailing_operator(self):
        with pytest.raises(EmptyExpressionError):
            parse_text("1 +")

    def test_leading_operator(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_text("+ 1")
        assert exc_info.value.token == PLUS

    def test_two_operators(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_text("1 * / 2")
        assert exc_info.value.token == SLASH

    def test_lexical_error_as_primary(self):
        with pytest.raises(LexicalError) as exc_info:
            parse_text("@")
        assert exc_info.value.token_error == TokenError(1, 0, "@")

    def test_lexical_error_in_lookahead(self):
        """A bad character after an operand is reported, not skipped."""
        with pytest.raises(LexicalError) as exc_info:
            parse_text("1 @ 2")
        assert exc_info.value.token_error == TokenError(1, 2, "@")

    def test_trailing_lexical_error(self):
        with pytest.raises(LexicalError):
            parse_text("1 + 2 $")

    def test_first_lexical_error_wins(self):
        with pytest.raises(LexicalError) as exc_info:
            parse_text("1 + 2 # 3 !")
        assert exc_info.value.token_error.character == "#"

    def test_missing_operator(self):
        with pytest.raises(ExpectedOperatorError) as exc_info:
            parse_text("1 2")
        assert exc_info.value.found == Token.integer(2)

    def test_lexical_error_after_leftover_tokens(self):
        """A bad character past the end of the expression is still reported."""
        with pytest.raises(LexicalError) as exc_info:
            parse_text("1 + 2 3 @ 4")
        assert exc_info.value.token_error == TokenError(1, 8, "@")

    def test_leftover_without_lexical_error(self):
        with pytest.raises(ExpectedOperatorError) as exc_info:
            parse_text("1 + 2 3 4")
        assert exc_info.value.found == Token.integer(3)

    def test_boundary_token_in_stream(self):
        with pytest.raises(ExpectedOperatorError):
            parse([Token.integer(1), END_OF_LINE])

    def test_all_errors_share_a_base(self):
        for text in ("", "+", "1 2", "1 @"):
            with pytest.raises(ASTError):
                parse_text(text)

    def test_lexical_error_message_has_location(self):
        with pytest.raises(LexicalError) as exc_info:
            parse_text("12 ? 3")
        assert "1:4" in str(exc_info.value)
        assert "'?'" in str(exc_info.value)


# =============================================================================
# ASTNode
# =============================================================================

class TestASTNode:
    """Tests for node construction and helpers."""

    def test_leaf_requires_integer(self):
        with pytest.raises(InvalidLeafNodeError) as exc_info:
            ASTNode.leaf(MINUS)
        assert exc_info.value.token == MINUS

    def test_binary_requires_both_operands(self):
        with pytest.raises(ExpectedIntegerError):
            ASTNode.binary(PLUS, leaf(1), None)
        with pytest.raises(ExpectedIntegerError):
            ASTNode.binary(PLUS, None, leaf(1))

    def test_binary_requires_operator(self):
        with pytest.raises(UnexpectedTokenError):
            ASTNode.binary(Token.integer(3), leaf(1), leaf(2))

    def test_nodes_are_immutable(self):
        node = leaf(1)
        with pytest.raises(AttributeError):
            node.left = leaf(2)

    def test_depth(self):
        assert leaf(1).depth() == 1
        assert parse_text("1 + 2 * 3").depth() == 3

    def test_evaluate_truncates_toward_zero(self):
        node = ASTNode.binary(SLASH, ASTNode.binary(MINUS, leaf(1), leaf(8)), leaf(2))
        assert node.evaluate() == -3

    def test_evaluate_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            parse_text("1 / 0").evaluate()

    def test_precedence_table(self):
        assert get_precedence(PLUS) == get_precedence(MINUS) == 1
        assert get_precedence(ASTERISK) == get_precedence(SLASH) == 2
        assert get_precedence(Token.integer(1)) == 0
        assert get_precedence(END_OF_LINE) == 0
        assert get_precedence(TokenError(1, 0, "@")) == 0

    def test_printer(self):
        output = ASTPrinter().print(parse_text("2 + 3 * 4"))
        assert output.splitlines() == [
            "PLUS",
            "  INT(2)",
            "  ASTERISK",
            "    INT(3)",
            "    INT(4)",
        ]
