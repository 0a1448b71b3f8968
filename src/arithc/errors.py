"""
arithc Error Hierarchy
======================

This module defines the exception hierarchy for the arithc compiler.
All exceptions inherit from ArithcError, allowing callers to catch every
compiler error with a single except clause.

Exception Hierarchy
-------------------
ArithcError (base)
└── CompilerError - errors with location, hint and formatted message
    ├── ASTError - parser errors
    │   ├── UnexpectedTokenError - token where an integer was required
    │   ├── LexicalError - TokenError reached by the parser
    │   ├── ExpectedOperatorError - tokens left after a complete expression
    │   ├── ExpectedIntegerError - operator node without both operands
    │   ├── EmptyExpressionError - nothing to parse
    │   └── InvalidLeafNodeError - leaf built from a non-integer token
    └── CodegenError - code generation errors
        ├── RegisterExhaustedError - no free register left in the pool
        └── UnsupportedOperationError - token the backend cannot emit

Lexical problems are NOT exceptions at scan time: the lexer records them as
TokenError values in the token stream and keeps going. They only become
exceptions (LexicalError) once the parser runs into them.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from arithc.lexer import Token, TokenError


# =============================================================================
# Base Exception Class
# =============================================================================

class ArithcError(Exception):
    """
    Base exception for all arithc errors.

        try:
            compile_expression("2 + 3 * 4")
        except ArithcError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Compiler Error Base
# =============================================================================

class CompilerError(ArithcError):
    """
    Base exception for errors raised while compiling an expression.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
        filename: Source file, set by with_context() (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        self.filename: Optional[str] = None
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            input.txt:1:3: error: invalid character '@'
                1 @ 2
                  ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        elif self.filename:
            parts.append(f"{self.filename}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def with_context(
        self,
        filename: str,
        source_lines: Optional[list[str]] = None,
    ) -> "CompilerError":
        """
        Attach a filename and source text to an already raised error.

        The parser only sees tokens, so the compiler driver fills in the
        file name and the offending source line before reporting. Errors
        without a position are reported against the file as a whole.
        """
        self.filename = filename
        if self.location is not None:
            self.location = SourceLocation(
                filename, self.location.line, self.location.column
            )
            if source_lines and 0 < self.location.line <= len(source_lines):
                self.source_line = source_lines[self.location.line - 1]
        self.args = (self._format_message(),)
        return self


# =============================================================================
# Parser Errors
# =============================================================================

class ASTError(CompilerError):
    """
    Error while building the abstract syntax tree.

    Parsing stops at the first ASTError; no partial tree is returned.
    """
    pass


class UnexpectedTokenError(ASTError):
    """A token appeared where an integer literal was required."""

    def __init__(self, token: "Token"):
        self.token = token
        super().__init__(
            f"unexpected token {token}",
            hint="expressions must start with, and alternate back to, an integer",
        )


class LexicalError(ASTError):
    """
    A TokenError recorded by the lexer was reached by the parser.

    The first lexical error in the stream aborts parsing.
    """

    def __init__(self, token_error: "TokenError"):
        self.token_error = token_error
        super().__init__(
            f"invalid character '{token_error.character}'",
            location=token_error.location,
        )


class ExpectedOperatorError(ASTError):
    """Tokens remain after a complete expression (e.g. ``1 2``)."""

    def __init__(self, found: Optional["Token"] = None):
        self.found = found
        message = "expected operator"
        if found is not None:
            message = f"expected operator, found {found}"
        super().__init__(message, hint="join operands with one of + - * /")


class ExpectedIntegerError(ASTError):
    """An operator node was built without both of its operands."""

    def __init__(self, operation: Optional["Token"] = None):
        self.operation = operation
        message = "expected integer operand"
        if operation is not None:
            message = f"expected integer operand for {operation}"
        super().__init__(message)


class EmptyExpressionError(ASTError):
    """The token sequence ended where an operand was required."""

    def __init__(self):
        super().__init__("empty expression")


class InvalidLeafNodeError(ASTError):
    """A leaf node was requested for a token that is not an integer."""

    def __init__(self, token: "Token"):
        self.token = token
        super().__init__(f"invalid leaf node {token}: leaves must be integers")


# =============================================================================
# Code Generation Errors
# =============================================================================

class CodegenError(CompilerError):
    """
    Error during code generation.

    Lines already written to the output sink are not retracted; callers
    should discard the output on failure.
    """
    pass


class RegisterExhaustedError(CodegenError):
    """
    Every register in the pool is holding a live value.

    The expression needs more simultaneously live values than the target
    has registers.
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(
            f"register pool exhausted ({capacity} registers)",
            hint="the expression nests too deeply for the available registers",
        )


class UnsupportedOperationError(CodegenError):
    """The AST contains a token the code generator cannot translate."""

    def __init__(self, token: "Token"):
        self.token = token
        super().__init__(f"unsupported or invalid operation {token}")
