"""
arithc Test Configuration
=========================

Shared pytest fixtures for the arithc test suite.
"""

from pathlib import Path

import pytest


@pytest.fixture
def expression_file(tmp_path: Path):
    """
    Fixture: factory writing an expression source file into tmp_path.

    Usage:
        def test_x(expression_file):
            path = expression_file("1 + 2")
    """
    def _write(source: str, name: str = "expr.txt") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path

    return _write
