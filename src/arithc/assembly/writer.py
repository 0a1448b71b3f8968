"""
Assembly Writer Base Class and Register Pool
============================================

This module holds the architecture-independent half of code generation:
the register pool and the post-order AST walk. Backends subclass
AssemblyWriter and supply register names and instruction text.

Code Generation Strategy
------------------------
Every subtree evaluates into a register:

1. An INT leaf allocates a register and loads the literal into it.
2. An operator node generates its left subtree (register L), then its right
   subtree (register R), allocates a destination D, emits ``op D, L, R``,
   and returns L and R to the pool.

The destination is allocated BEFORE the operands are freed, so a binary
node briefly holds three registers.

Register Pool
-------------
The pool is a stack. Allocation pops and freeing pushes, so the most
recently freed register is reused first. The initial stack is ordered so
that the first allocation yields R0:

    [R4, R3, R2, R1, R0]   <- top

Compiling ``(5 + 3) * 2``:

| Step          | Emits            | Pool after          |
|---------------|------------------|---------------------|
| load 5        | mov x0, #5       | R4 R3 R2 R1         |
| load 3        | mov x1, #3       | R4 R3 R2            |
| add           | add x2, x0, x1   | R4 R3 R0 R1         |
| load 2        | mov x1, #2       | R4 R3 R0            |
| mul           | mul x0, x2, x1   | R4 R3 R2 R1         |

Deep right-nested trees keep every left operand alive and can need more
registers than the pool holds; that is reported as RegisterExhaustedError.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TextIO

from arithc.ast import ASTNode
from arithc.errors import RegisterExhaustedError, UnsupportedOperationError
from arithc.lexer import TokenType


logger = logging.getLogger(__name__)


# =============================================================================
# Registers
# =============================================================================

class RegisterList(Enum):
    """General-purpose registers available to the code generator."""
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4


class RegisterPool:
    """
    Stack of free registers.

    Attributes:
        capacity: Number of registers when the pool is full
    """

    # Top of the stack is the end of the list
    INITIAL_ORDER = (
        RegisterList.R4,
        RegisterList.R3,
        RegisterList.R2,
        RegisterList.R1,
        RegisterList.R0,
    )

    def __init__(self):
        self._free: list[RegisterList] = list(self.INITIAL_ORDER)

    @property
    def capacity(self) -> int:
        return len(self.INITIAL_ORDER)

    @property
    def available(self) -> list[RegisterList]:
        """Snapshot of the free registers, bottom of the stack first."""
        return list(self._free)

    def __len__(self) -> int:
        return len(self._free)

    def is_full(self) -> bool:
        return len(self._free) == self.capacity

    def allocate(self) -> RegisterList:
        """
        Pop the most recently freed register.

        Raises:
            RegisterExhaustedError: If no register is free
        """
        if not self._free:
            raise RegisterExhaustedError(self.capacity)
        return self._free.pop()

    def free(self, register: RegisterList) -> None:
        """Push register back; not checked against earlier allocations."""
        self._free.append(register)

    def reset(self) -> None:
        """Return the pool to its full initial state."""
        self._free = list(self.INITIAL_ORDER)


# =============================================================================
# Assembly Writer
# =============================================================================

class AssemblyWriter(ABC):
    """
    Generates assembly text for one target architecture.

    The writer streams lines into the caller's sink as it walks the tree.
    On failure the lines written so far stay in the sink.

    Subclasses implement format_register() and the emit_* methods.

    Attributes:
        output: Text sink receiving the assembly
        registers: The register pool for the current compile
    """

    # Line comment marker for the target assembler
    COMMENT = "//"

    # Mnemonics for each operator token
    MNEMONICS: dict[TokenType, str] = {}

    def __init__(self, output: TextIO):
        self.output = output
        self.registers = RegisterPool()

    # =========================================================================
    # Output Helpers
    # =========================================================================

    def _emit(self, line: str = "") -> None:
        """Emit a line of assembly."""
        self.output.write(line + "\n")

    def _emit_instruction(self, text: str, comment: str = "") -> None:
        """Emit an indented instruction with an optional trailing comment."""
        if comment:
            self._emit(f"    {text:<20} {self.COMMENT} {comment}")
        else:
            self._emit(f"    {text}")

    def _emit_comment(self, comment: str) -> None:
        self._emit(f"    {self.COMMENT} {comment}")

    # =========================================================================
    # Architecture Hooks
    # =========================================================================

    @abstractmethod
    def format_register(self, register: RegisterList) -> str:
        """Return the assembler name of register."""

    @abstractmethod
    def emit_prologue(self) -> None:
        """Emit directives and the entry-point label."""

    @abstractmethod
    def emit_load(self, register: RegisterList, value: int) -> None:
        """Emit a load of an immediate value into register."""

    @abstractmethod
    def emit_binary(
        self,
        mnemonic: str,
        dest: RegisterList,
        reg_1: RegisterList,
        reg_2: RegisterList,
    ) -> None:
        """Emit a three-operand ALU instruction."""

    @abstractmethod
    def emit_print(self, register: RegisterList) -> None:
        """Emit the block that reports the value in register."""

    @abstractmethod
    def emit_epilogue(self) -> None:
        """Emit the process-exit sequence."""

    # =========================================================================
    # Register Management
    # =========================================================================

    def allocate_register(self) -> RegisterList:
        register = self.registers.allocate()
        logger.debug(f"Allocated {self.format_register(register)} ({len(self.registers)} free)")
        return register

    def free_register(self, register: RegisterList) -> None:
        self.registers.free(register)
        logger.debug(f"Freed {self.format_register(register)} ({len(self.registers)} free)")

    def free_all_registers(self) -> None:
        self.registers.reset()

    # =========================================================================
    # Instruction Generation
    # =========================================================================

    def load_register(self, value: int) -> RegisterList:
        """Load value into a freshly allocated register and return it."""
        register = self.allocate_register()
        self.emit_load(register, value)
        return register

    def print_register(self, register: RegisterList) -> RegisterList:
        self.emit_print(register)
        return register

    def _binary_op(
        self,
        operation: TokenType,
        reg_1: RegisterList,
        reg_2: RegisterList,
    ) -> RegisterList:
        """Emit operation into a new register and release both operands."""
        result_reg = self.allocate_register()
        self.emit_binary(self.MNEMONICS[operation], result_reg, reg_1, reg_2)
        self.free_register(reg_1)
        self.free_register(reg_2)
        return result_reg

    def add_registers(self, reg_1: RegisterList, reg_2: RegisterList) -> RegisterList:
        return self._binary_op(TokenType.PLUS, reg_1, reg_2)

    def subtract_registers(self, reg_1: RegisterList, reg_2: RegisterList) -> RegisterList:
        return self._binary_op(TokenType.MINUS, reg_1, reg_2)

    def multiply_registers(self, reg_1: RegisterList, reg_2: RegisterList) -> RegisterList:
        return self._binary_op(TokenType.ASTERISK, reg_1, reg_2)

    def divide_registers(self, reg_1: RegisterList, reg_2: RegisterList) -> RegisterList:
        """Unsigned divide; a zero divisor is left to the target at runtime."""
        return self._binary_op(TokenType.SLASH, reg_1, reg_2)

    def generate_assembly_from_ast(self, node: ASTNode) -> RegisterList:
        """
        Generate code for node and its subtrees, children first.

        Returns:
            The register holding the value of node

        Raises:
            RegisterExhaustedError: If the pool runs dry
            UnsupportedOperationError: If node carries a non-arithmetic token
        """
        op = node.operation.type

        if op == TokenType.INT:
            return self.load_register(node.operation.value)

        handlers = {
            TokenType.PLUS: self.add_registers,
            TokenType.MINUS: self.subtract_registers,
            TokenType.ASTERISK: self.multiply_registers,
            TokenType.SLASH: self.divide_registers,
        }
        handler = handlers.get(op)
        if handler is None or node.left is None or node.right is None:
            raise UnsupportedOperationError(node.operation)

        left_reg = self.generate_assembly_from_ast(node.left)
        right_reg = self.generate_assembly_from_ast(node.right)
        return handler(left_reg, right_reg)

    def compile_ast(self, ast: ASTNode) -> None:
        """
        Write a complete program that computes and reports ast.

        The sink is flushed before returning. On error, output already
        written is left as is.
        """
        self.free_all_registers()
        logger.debug(f"Compiling expression rooted at {ast.operation}")

        self.emit_prologue()

        result_reg = self.generate_assembly_from_ast(ast)
        self.print_register(result_reg)
        self.free_register(result_reg)

        self.emit_epilogue()
        self.output.flush()
