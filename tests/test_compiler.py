"""
Expression Compiler Pipeline Tests
==================================

End-to-end tests for ExpressionCompiler and compile_expression: source
text in, assembly text out.

Test Organization
-----------------
- TestCompileSource: successful compiles and result contents
- TestCompileErrors: diagnostics surfaced from each stage
- TestCompileFile: reading sources from disk
"""

import pytest

from arithc import (
    ArithcError,
    CompilerOptions,
    EmptyExpressionError,
    ExpectedOperatorError,
    ExpressionCompiler,
    LexicalError,
    Token,
    TokenError,
    compile_expression,
)


# =============================================================================
# Successful Compiles
# =============================================================================

class TestCompileSource:
    """Tests for compiling expression source strings."""

    def test_compile_expression_returns_assembly(self):
        asm = compile_expression("5 + 3 * 2")
        assert asm.startswith(".arch armv8-a\n")
        assert "mul x3, x1, x2" in asm
        assert "add x2, x0, x3" in asm
        assert asm.rstrip().endswith("svc #0x80")

    def test_result_fields(self):
        result = ExpressionCompiler().compile_source("2 + 3 * 4", "calc.txt")
        assert result.success
        assert result.filename == "calc.txt"
        assert result.token_count == 5
        assert result.tokens[0] == Token.integer(2)
        assert result.ast.evaluate() == 14
        assert result.lexical_errors == []

    def test_lines_form_one_expression(self):
        result = ExpressionCompiler().compile_source("1 +\n2\n")
        assert str(result.ast) == "(1 + 2)"

    def test_blank_lines_are_ignored(self):
        result = ExpressionCompiler().compile_source("\n\n  7  \n\n")
        assert "mov x0, #7" in result.assembly

    def test_entry_label_option(self):
        options = CompilerOptions(entry_label="_main")
        asm = compile_expression("1", options)
        assert ".global _main" in asm
        assert "_main:" in asm

    def test_compiler_is_reusable(self):
        compiler = ExpressionCompiler()
        first = compiler.compile_source("1 + 2").assembly
        second = compiler.compile_source("1 + 2").assembly
        assert first == second


# =============================================================================
# Compile Errors
# =============================================================================

class TestCompileErrors:
    """Tests for errors raised through the compiler driver."""

    def test_empty_source(self):
        with pytest.raises(EmptyExpressionError):
            compile_expression("")

    def test_whitespace_only_source(self):
        with pytest.raises(EmptyExpressionError):
            compile_expression("   \n\t\n")

    def test_lexical_error_points_into_file(self):
        compiler = ExpressionCompiler()
        with pytest.raises(LexicalError) as exc_info:
            compiler.compile_source("1 + 2\n3 @ 4\n", "calc.txt")

        error = exc_info.value
        assert error.token_error == TokenError(line=2, column=2, character="@")
        message = str(error)
        assert message.startswith("calc.txt:2:3: error: invalid character '@'")
        assert "    3 @ 4" in message
        assert message.splitlines()[-1] == "      ^"

    def test_missing_operator(self):
        with pytest.raises(ExpectedOperatorError):
            compile_expression("1 2")

    def test_positionless_error_names_the_file(self):
        with pytest.raises(ExpectedOperatorError) as exc_info:
            ExpressionCompiler().compile_source("1 2", "calc.txt")
        assert str(exc_info.value).startswith(
            "calc.txt: error: expected operator, found INT(2)"
        )

    def test_form_feed_does_not_shift_source_line(self):
        compiler = ExpressionCompiler()
        with pytest.raises(LexicalError) as exc_info:
            compiler.compile_source("1 +\x0c 2 @\n", "calc.txt")
        message = str(exc_info.value)
        assert message.startswith("calc.txt:1:8: error:")
        assert "    1 +\x0c 2 @" in message

    def test_register_exhaustion_is_unreachable_from_parsed_input(self):
        """Two precedence levels never need more than four registers."""
        asm = compile_expression("1 + 2 * 3 * 4 - 5 * 6 / 7 + 8 * 9")
        assert "svc #0x80" in asm

    def test_all_errors_are_arithc_errors(self):
        for source in ("", "+", "1 2", "1 # 2"):
            with pytest.raises(ArithcError):
                compile_expression(source)

    def test_unknown_architecture(self):
        with pytest.raises(ValueError):
            compile_expression("1", CompilerOptions(architecture="6502"))


# =============================================================================
# File Input
# =============================================================================

class TestCompileFile:
    """Tests for ExpressionCompiler.compile_file."""

    def test_compile_file(self, expression_file):
        path = expression_file("8 / 2 - 1\n")
        result = ExpressionCompiler().compile_file(path)
        assert result.filename == str(path)
        assert "udiv x2, x0, x1" in result.assembly

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ExpressionCompiler().compile_file(tmp_path / "missing.txt")
