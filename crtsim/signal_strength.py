"""
Signal strength checksum.

The signal strength during a cycle is the cycle number multiplied by the
X register during that cycle. Summing it at a handful of cycles is a cheap
way to check that a program was executed with the right timing.
"""

from __future__ import annotations
from typing import Dict, Iterable

from .instructions import Instruction
from .machine import VirtualMachine

DEFAULT_SAMPLE_CYCLES = (20, 60, 100, 140, 180, 220)


def sample_signal_strengths(machine: VirtualMachine,
                            cycles: Iterable[int] = DEFAULT_SAMPLE_CYCLES) -> Dict[int, int]:
    """Run ``machine`` to completion, recording the signal strength at ``cycles``.

    Cycles the program never reaches are left out of the result.
    """
    wanted = set(cycles)
    strengths: Dict[int, int] = {}
    while machine.is_executing():
        sample = machine.step()
        if sample.cycle in wanted:
            strengths[sample.cycle] = sample.signal_strength
    return strengths


def total_signal_strength(program: Iterable[Instruction],
                          cycles: Iterable[int] = DEFAULT_SAMPLE_CYCLES) -> int:
    """Sum of the signal strengths of ``program`` at ``cycles``."""
    return sum(sample_signal_strengths(VirtualMachine(program), cycles).values())
