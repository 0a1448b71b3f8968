"""
ARM64 Assembly Writer
=====================

Backend producing AArch64 assembly for Darwin-style system calls
(syscall number in x16, ``svc #0x80``).

Register Usage
--------------
| RegisterList | ARM64 |
|--------------|-------|
| R0           | x0    |
| R1           | x1    |
| R2           | x2    |
| R3           | x3    |
| R4           | x4    |

x16 is reserved for the syscall number and never handed out by the pool.

Program Layout
--------------
    .arch armv8-a
    .text
    .global _start
    .align 2

    _start:
        mov x0, #5           // x0=5
        ...
        // Print register value
        mov x1, x0           // value to report
        mov x0, #1           // stdout
        mov x16, #4          // write syscall
        svc #0x80
        // Exit program
        mov x0, #0           // exit status
        mov x16, #1          // exit syscall
        svc #0x80

Limitations
-----------
``udiv`` is used for division and no check is made for a zero divisor or
for overflow; both are left to the hardware at runtime.
"""

from typing import TextIO

from arithc.assembly.writer import AssemblyWriter, RegisterList
from arithc.lexer import TokenType


class ARM64Writer(AssemblyWriter):
    """
    AssemblyWriter for AArch64.

    Attributes:
        entry_label: Global label the program starts at
    """

    REGISTER_NAMES = {
        RegisterList.R0: "x0",
        RegisterList.R1: "x1",
        RegisterList.R2: "x2",
        RegisterList.R3: "x3",
        RegisterList.R4: "x4",
    }

    MNEMONICS = {
        TokenType.PLUS: "add",
        TokenType.MINUS: "sub",
        TokenType.ASTERISK: "mul",
        TokenType.SLASH: "udiv",
    }

    def __init__(self, output: TextIO, entry_label: str = "_start"):
        super().__init__(output)
        self.entry_label = entry_label

    def format_register(self, register: RegisterList) -> str:
        return self.REGISTER_NAMES[register]

    def emit_prologue(self) -> None:
        self._emit(".arch armv8-a")
        self._emit(".text")
        self._emit(f".global {self.entry_label}")
        self._emit(".align 2")
        self._emit()
        self._emit(f"{self.entry_label}:")

    def emit_load(self, register: RegisterList, value: int) -> None:
        name = self.format_register(register)
        self._emit_instruction(f"mov {name}, #{value}", f"{name}={value}")

    def emit_binary(
        self,
        mnemonic: str,
        dest: RegisterList,
        reg_1: RegisterList,
        reg_2: RegisterList,
    ) -> None:
        self._emit_instruction(
            f"{mnemonic} {self.format_register(dest)}, "
            f"{self.format_register(reg_1)}, {self.format_register(reg_2)}"
        )

    def emit_print(self, register: RegisterList) -> None:
        # x1 is loaded first: the result may live in x0
        self._emit_comment("Print register value")
        self._emit_instruction(f"mov x1, {self.format_register(register)}", "value to report")
        self._emit_instruction("mov x0, #1", "stdout")
        self._emit_instruction("mov x16, #4", "write syscall")
        self._emit_instruction("svc #0x80")

    def emit_epilogue(self) -> None:
        self._emit_comment("Exit program")
        self._emit_instruction("mov x0, #0", "exit status")
        self._emit_instruction("mov x16, #1", "exit syscall")
        self._emit_instruction("svc #0x80")
