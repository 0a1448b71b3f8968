"""
Expression Lexer (Scanner)
==========================

This module converts raw expression text, one line at a time, into a
sequence of scan results. Each result is either a Token or a TokenError.

Token Categories
----------------
| Text        | Token                |
|-------------|----------------------|
| +           | PLUS                 |
| -           | MINUS                |
| *           | ASTERISK             |
| /           | SLASH                |
| 0-9 digits  | INT(value)           |

END_OF_LINE and END_OF_FILE belong to the token vocabulary so the parser and
code generator can name them, but the lexer never produces them.

Error Recovery
--------------
The lexer never raises on bad input. A character that cannot start a token
becomes a TokenError carrying its exact (line, column, character), and
scanning carries on with the next character. It is up to the parser to
decide that a TokenError is fatal.

Positions
---------
Lines are numbered from 1. Columns are zero-based character offsets from
the start of the line and are reset for each line.

Example Usage
-------------
>>> from arithc.lexer import scan_line
>>> scan_line("1 @ 2", 1)
[Token(INT, 1), TokenError(line=1, column=2, character='@'), Token(INT, 2)]
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Union

from arithc.errors import SourceLocation


logger = logging.getLogger(__name__)

# Largest value a literal may take (signed 32-bit)
INT_MAX = 2**31 - 1


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for arithmetic expressions."""

    # === Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    ASTERISK = auto()       # *
    SLASH = auto()          # /

    # === Literals ===
    INT = auto()            # Integer literal (signed 32-bit)

    # === Structural Tokens ===
    END_OF_LINE = auto()    # Never emitted by the lexer
    END_OF_FILE = auto()    # Never emitted by the lexer


# Map operator characters to their token types
OPERATORS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
}


# =============================================================================
# Token and TokenError Data Classes
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified unit of expression text.

    Tokens compare structurally, so ``Token.integer(5) == Token.integer(5)``.

    Attributes:
        type: The TokenType classification
        value: The literal value for INT tokens, None otherwise
    """
    type: TokenType
    value: Optional[int] = None

    @classmethod
    def integer(cls, value: int) -> "Token":
        """Create an INT token."""
        return cls(TokenType.INT, value)

    def is_operator(self) -> bool:
        """Return True for the four arithmetic operators."""
        return self.type in OPERATORS.values()

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value})"
        return f"Token({self.type.name})"

    def __str__(self) -> str:
        if self.type == TokenType.INT:
            return f"INT({self.value})"
        return self.type.name


PLUS = Token(TokenType.PLUS)
MINUS = Token(TokenType.MINUS)
ASTERISK = Token(TokenType.ASTERISK)
SLASH = Token(TokenType.SLASH)
END_OF_LINE = Token(TokenType.END_OF_LINE)
END_OF_FILE = Token(TokenType.END_OF_FILE)


@dataclass(frozen=True)
class TokenError:
    """
    A character the lexer could not turn into a token.

    Also used for integer literals that overflow 32 bits, in which case the
    position and character are those of the literal's first digit.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (0-indexed, in characters)
        character: The offending character
    """
    line: int
    column: int
    character: str

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation (1-indexed column) for error reporting."""
        return SourceLocation("<input>", self.line, self.column + 1)

    def __str__(self) -> str:
        return (
            f"Error at line {self.line}, column {self.column}: "
            f"invalid character '{self.character}'"
        )


ScanResult = Union[Token, TokenError]


# =============================================================================
# Scanner
# =============================================================================

class _Peekable:
    """Iterator wrapper with a single item of lookahead."""

    _EMPTY = object()

    def __init__(self, iterable: Iterable):
        self._iterator = iter(iterable)
        self._peeked = self._EMPTY

    def __iter__(self) -> "_Peekable":
        return self

    def __next__(self):
        if self._peeked is not self._EMPTY:
            item, self._peeked = self._peeked, self._EMPTY
            return item
        return next(self._iterator)

    def peek(self, default=None):
        """Return the next item without consuming it."""
        if self._peeked is self._EMPTY:
            try:
                self._peeked = next(self._iterator)
            except StopIteration:
                return default
        return self._peeked


def scan_token(
    current_char: str,
    chars: "_Peekable",
    line: int,
    column: int,
) -> ScanResult:
    """
    Scan a single token starting at current_char.

    Args:
        current_char: The character that opens the token
        chars: Peekable iterator of (column, character) pairs for the rest of
            the line; only consumed while more digits follow
        line: Line number, for error reporting
        column: Column of current_char, for error reporting

    Returns:
        The scanned Token, or a TokenError for an unknown character or an
        integer literal that does not fit in 32 bits
    """
    if current_char in OPERATORS:
        return Token(OPERATORS[current_char])

    if current_char in string.digits:
        number = current_char
        # Maximal munch: peek, and only consume digits
        while True:
            upcoming = chars.peek()
            if upcoming is None or upcoming[1] not in string.digits:
                break
            number += upcoming[1]
            next(chars)

        # Check the length before int(), which rejects very long digit strings
        digits = number.lstrip("0") or "0"
        if len(digits) > len(str(INT_MAX)) or int(digits) > INT_MAX:
            logger.debug(f"Integer literal of {len(number)} digits overflows at {line}:{column}")
            return TokenError(line, column, current_char)
        return Token.integer(int(digits))

    logger.debug(f"Invalid character {current_char!r} at {line}:{column}")
    return TokenError(line, column, current_char)


def scan_line(line: str, line_number: int) -> list[ScanResult]:
    """
    Scan a single line into tokens.

    Args:
        line: The line that will be scanned
        line_number: Line number of the given line, for error reporting

    Returns:
        Scan results in source order. A bad character yields a TokenError
        and does not stop the rest of the line from being scanned.

    Example:
        >>> len(scan_line("10 + 9 * 6", 1))
        5
    """
    tokens: list[ScanResult] = []
    chars = _Peekable(enumerate(line))

    for column, char in chars:
        if char.isspace():
            continue
        tokens.append(scan_token(char, chars, line_number, column))

    return tokens


def scan_file(line_source: Iterable[str]) -> list[ScanResult]:
    """
    Scan every line from line_source and flatten the results.

    Args:
        line_source: Any iterable of lines, e.g. an open text file or a list
            of strings. Trailing newlines are stripped.

    Returns:
        Scan results for all lines, in order. Lines are numbered from 1.
    """
    tokens: list[ScanResult] = []

    for line_number, line in enumerate(line_source, start=1):
        tokens.extend(scan_line(line.rstrip("\r\n"), line_number))

    logger.debug(f"Scanned {len(tokens)} tokens")
    return tokens


def split_lines(source: str) -> list[str]:
    """
    Split source into lines at line feeds only.

    Unlike str.splitlines(), form feeds and Unicode separators stay inside
    their line, where the lexer skips them as whitespace.
    """
    return [line.rstrip("\r") for line in source.split("\n")]


def scan_source(source: str) -> list[ScanResult]:
    """Scan a whole source string (see scan_file)."""
    return scan_file(split_lines(source))
