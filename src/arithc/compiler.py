"""
Expression Compiler Main Module
===============================

This module drives the complete pipeline:

    Source → Lex → Parse → Generate → Assembly

Usage
-----
Command line:
    $ arithcc expr.txt -o expr.s

Programmatic:
    >>> from arithc import compile_expression
    >>> asm = compile_expression("2 + 3 * 4")

All lines of a source text are scanned into one token stream and parsed
as a single expression. Blank lines contribute nothing.

The generated assembly is collected in memory, so a failed compile never
leaves a half-written file behind: callers decide what to write.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from arithc.assembly import create_assembly_writer
from arithc.ast import ASTNode
from arithc.errors import CompilerError
from arithc.lexer import ScanResult, TokenError, scan_source, split_lines
from arithc.parser import parse


logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        architecture: Target architecture name (only "arm64" today)
        entry_label: Global label the generated program starts at
    """
    architecture: str = "arm64"
    entry_label: str = "_start"


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        assembly: Generated assembly code (if successful)
        tokens: Scan results from the lexer
        ast: Expression tree (if parsing succeeded)
    """
    filename: str = ""
    success: bool = False
    assembly: str = ""
    tokens: list[ScanResult] = field(default_factory=list)
    ast: Optional[ASTNode] = None

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def lexical_errors(self) -> list[TokenError]:
        return [t for t in self.tokens if isinstance(t, TokenError)]


class ExpressionCompiler:
    """
    Arithmetic expression compiler.

    Example:
        compiler = ExpressionCompiler()
        result = compiler.compile_file("expr.txt")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile expression source to assembly.

        Args:
            source: Expression text
            filename: Source filename for error messages

        Returns:
            CompilerResult with tokens, AST and assembly

        Raises:
            CompilerError: If lexing, parsing or code generation fails. The
                error's location is rewritten to point into filename.
        """
        result = CompilerResult(filename=filename)
        source_lines = split_lines(source)

        try:
            result.tokens = scan_source(source)
            result.ast = parse(result.tokens)
            result.assembly = self._generate(result.ast)
        except CompilerError as e:
            e.with_context(filename, source_lines)
            raise

        result.success = True
        logger.debug(
            f"Compiled {filename}: {result.token_count} tokens, "
            f"{len(result.assembly.splitlines())} lines of assembly"
        )
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile an expression file to assembly.

        Raises:
            CompilerError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(path))

    def _generate(self, ast: ASTNode) -> str:
        """Generate assembly for ast into a string."""
        sink = io.StringIO()
        writer = create_assembly_writer(
            self.options.architecture,
            sink,
            entry_label=self.options.entry_label,
        )
        writer.compile_ast(ast)
        return sink.getvalue()


def compile_expression(source: str, options: Optional[CompilerOptions] = None) -> str:
    """
    Compile expression source and return the assembly text.

    Raises:
        CompilerError: If compilation fails
    """
    return ExpressionCompiler(options).compile_source(source).assembly
