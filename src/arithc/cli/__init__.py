"""
arithc Command-Line Interface
=============================

- **arithcc**: arithmetic expression compiler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["arithcc"]
