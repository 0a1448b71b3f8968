"""
arithc - Arithmetic Expression Compiler
=======================================

This package compiles integer arithmetic expressions (``+ - * /`` with the
usual precedence) into ARM64 assembly.

Pipeline
--------
    Source → Lexer → Parser → AST → Code Generator → Assembly

Main Components
---------------
- **lexer**: scan_line / scan_file produce Token and TokenError values
- **parser**: precedence-climbing parse() builds an ASTNode
- **assembly**: AssemblyWriter walks the AST with a bounded register pool
- **compiler**: ExpressionCompiler runs the whole pipeline

Quick Start
-----------
    >>> from arithc import compile_expression
    >>> print(compile_expression("5 + 3 * 2"))

Step by step:
    >>> import io
    >>> from arithc import scan_line, parse, ARM64Writer
    >>> ast = parse(scan_line("2 + 3 * 4", 1))
    >>> sink = io.StringIO()
    >>> ARM64Writer(sink).compile_ast(ast)

Or use the command-line tool:
    $ arithcc expr.txt -o expr.s
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from arithc.errors import (
    ArithcError,
    SourceLocation,
    CompilerError,
    ASTError,
    UnexpectedTokenError,
    LexicalError,
    ExpectedOperatorError,
    ExpectedIntegerError,
    EmptyExpressionError,
    InvalidLeafNodeError,
    CodegenError,
    RegisterExhaustedError,
    UnsupportedOperationError,
)
from arithc.lexer import (
    Token,
    TokenType,
    TokenError,
    ScanResult,
    scan_token,
    scan_line,
    scan_file,
    scan_source,
    split_lines,
)
from arithc.ast import ASTNode, ASTPrinter, get_precedence
from arithc.parser import ExpressionParser, parse
from arithc.assembly import (
    SupportedArchitecture,
    create_assembly_writer,
    AssemblyWriter,
    ARM64Writer,
    RegisterList,
    RegisterPool,
)
from arithc.compiler import (
    CompilerOptions,
    CompilerResult,
    ExpressionCompiler,
    compile_expression,
)

__all__ = [
    "__version__",
    # Errors
    "ArithcError",
    "SourceLocation",
    "CompilerError",
    "ASTError",
    "UnexpectedTokenError",
    "LexicalError",
    "ExpectedOperatorError",
    "ExpectedIntegerError",
    "EmptyExpressionError",
    "InvalidLeafNodeError",
    "CodegenError",
    "RegisterExhaustedError",
    "UnsupportedOperationError",
    # Lexer
    "Token",
    "TokenType",
    "TokenError",
    "ScanResult",
    "scan_token",
    "scan_line",
    "scan_file",
    "scan_source",
    "split_lines",
    # AST and parser
    "ASTNode",
    "ASTPrinter",
    "get_precedence",
    "ExpressionParser",
    "parse",
    # Code generation
    "SupportedArchitecture",
    "create_assembly_writer",
    "AssemblyWriter",
    "ARM64Writer",
    "RegisterList",
    "RegisterPool",
    # Compiler
    "CompilerOptions",
    "CompilerResult",
    "ExpressionCompiler",
    "compile_expression",
]
