"""
Instruction model and program parser for the CRT machine.

The instruction set is closed: ``noop`` and ``addx V``. Each variant is a
frozen dataclass carrying its own cycle latency, so the machine never has
to special-case an opcode to know how long it takes.

Program text is one instruction per line:

    noop
    addx 3
    addx -5
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import ClassVar, Deque, Union

__all__ = [
    'Noop', 'Addx', 'Instruction',
    'ProgramError', 'MalformedOperand', 'UnknownInstruction',
    'parse_instruction', 'parse_program',
]


class ProgramError(ValueError):
    """Raised when program text cannot be turned into instructions."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


class MalformedOperand(ProgramError):
    """The operand of an ``addx`` is missing or is not an integer."""


class UnknownInstruction(ProgramError):
    """The mnemonic is not part of the instruction set."""


# ──────────────────────────────────────────────
# Instruction variants
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Noop:
    """Do nothing for one cycle."""
    mnemonic: ClassVar[str] = "noop"
    latency: ClassVar[int] = 1

    def apply(self, register: int) -> int:
        return register

    def __str__(self) -> str:
        return self.mnemonic


@dataclass(frozen=True)
class Addx:
    """Add ``delta`` to the register. Takes two cycles; the register only
    changes once the second cycle has completed."""
    delta: int
    mnemonic: ClassVar[str] = "addx"
    latency: ClassVar[int] = 2

    def apply(self, register: int) -> int:
        return register + self.delta

    def __str__(self) -> str:
        return f"{self.mnemonic} {self.delta}"


Instruction = Union[Noop, Addx]


# ──────────────────────────────────────────────
# Parser
# ──────────────────────────────────────────────

def parse_instruction(line: str, line_num: int = 0) -> Instruction:
    """Parse a single line of program text."""
    text = line.strip()
    parts = text.split()
    if not parts:
        raise UnknownInstruction("empty instruction", line_num, line)

    mnem = parts[0]
    if mnem == Noop.mnemonic:
        if len(parts) != 1:
            raise MalformedOperand(f"noop takes no operand, got '{text}'", line_num, line)
        return Noop()

    if mnem == Addx.mnemonic:
        if len(parts) != 2:
            raise MalformedOperand(f"addx expects one integer operand, got '{text}'",
                                   line_num, line)
        try:
            delta = int(parts[1])
        except ValueError:
            raise MalformedOperand(f"Can't parse integer from '{parts[1]}'",
                                   line_num, line) from None
        return Addx(delta)

    raise UnknownInstruction(f"Unknown mnemonic: {mnem}", line_num, line)


def parse_program(text: str) -> Deque[Instruction]:
    """Parse program text into the queue the machine consumes.

    Blank lines are skipped, so a trailing newline is harmless. Line numbers
    in errors are 1-based.
    """
    program: Deque[Instruction] = deque()
    for line_num, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        program.append(parse_instruction(line, line_num))
    return program
