"""
arithcc - Expression Compiler Command-Line Interface
====================================================

This module implements the command-line interface for the arithmetic
expression compiler.

Usage Examples
--------------
Basic compilation:
    $ arithcc expr.txt

With output file:
    $ arithcc expr.txt -o expr.s

Inspect the token stream or the tree:
    $ arithcc --tokens expr.txt
    $ arithcc --ast expr.txt

Verbose mode:
    $ arithcc -v expr.txt
"""

import logging
from pathlib import Path
from typing import Optional

import click

from arithc import __version__
from arithc.assembly import SupportedArchitecture
from arithc.ast import ASTPrinter
from arithc.compiler import CompilerOptions, ExpressionCompiler
from arithc.cli.errors import handle_cli_exception
from arithc.lexer import TokenError, scan_source


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file (default: input.s)",
)
@click.option(
    "-a", "--arch",
    type=click.Choice([a.value for a in SupportedArchitecture], case_sensitive=False),
    default=SupportedArchitecture.ARM64.value,
    show_default=True,
    help="Target architecture",
)
@click.option(
    "--entry",
    default="_start",
    show_default=True,
    help="Entry-point label of the generated program",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="arithcc")
def main(
    input_file: Path,
    output: Optional[Path],
    arch: str,
    entry: str,
    tokens: bool,
    ast: bool,
    verbose: bool,
) -> None:
    """
    Compile an arithmetic expression to assembly.

    INPUT_FILE holds one expression made of integers and + - * /.

    \b
    Examples:
        arithcc expr.txt                 # Outputs expr.s
        arithcc expr.txt -o out.s        # Specify output file
        arithcc --tokens expr.txt        # Dump tokens
        arithcc --ast expr.txt           # Dump the expression tree
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".s")

    options = CompilerOptions(architecture=arch.lower(), entry_label=entry)

    try:
        source = input_file.read_text(encoding="utf-8")

        if tokens:
            for token in scan_source(source):
                if isinstance(token, TokenError):
                    click.echo(str(token))
                else:
                    click.echo(f"Token: {token}")
            return

        if verbose:
            click.echo(f"Compiling {input_file} for {options.architecture}...")

        result = ExpressionCompiler(options).compile_source(source, str(input_file))

        if ast:
            click.echo(ASTPrinter().print(result.ast))
            return

        output.write_text(result.assembly)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parsed: {result.ast} (depth {result.ast.depth()})")
            click.echo(f"Wrote {len(result.assembly)} bytes to {output}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
