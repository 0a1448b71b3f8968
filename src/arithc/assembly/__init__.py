"""
Assembly Generation
===================

Code generators that turn an expression AST into assembly text.

- **writer**: RegisterList, RegisterPool and the AssemblyWriter base class
- **arm64**: ARM64Writer, the AArch64 backend

Backends are looked up by architecture:

    >>> import io
    >>> from arithc.assembly import SupportedArchitecture, create_assembly_writer
    >>> sink = io.StringIO()
    >>> writer = create_assembly_writer(SupportedArchitecture.ARM64, sink)
"""

from enum import Enum
from typing import TextIO

from arithc.assembly.arm64 import ARM64Writer
from arithc.assembly.writer import AssemblyWriter, RegisterList, RegisterPool


class SupportedArchitecture(Enum):
    """Target architectures with a backend."""
    ARM64 = "arm64"


WRITERS: dict[SupportedArchitecture, type[AssemblyWriter]] = {
    SupportedArchitecture.ARM64: ARM64Writer,
}


def create_assembly_writer(
    architecture: SupportedArchitecture | str,
    output: TextIO,
    **kwargs,
) -> AssemblyWriter:
    """
    Create the writer for architecture, writing into output.

    Args:
        architecture: A SupportedArchitecture or its name (e.g. "arm64")
        output: Text sink for the generated assembly
        **kwargs: Backend-specific options (e.g. entry_label)

    Raises:
        ValueError: If no backend exists for architecture
    """
    if isinstance(architecture, str):
        architecture = SupportedArchitecture(architecture.lower())
    return WRITERS[architecture](output, **kwargs)


__all__ = [
    "SupportedArchitecture",
    "create_assembly_writer",
    "AssemblyWriter",
    "ARM64Writer",
    "RegisterList",
    "RegisterPool",
]
