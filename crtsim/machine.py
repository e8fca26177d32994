"""
CRT Virtual Machine — cycle-stepped CPU with a single X register

Execution model (one call to ``cycle()`` == one clock cycle):
  1. If nothing is in flight, pull the next instruction off the program
     and start it with its full latency.
  2. Burn one cycle of the in-flight instruction. When its remaining
     count reaches zero, apply its effect to the register and retire it.
  3. Advance the tick counter.

The tick counter starts at 1: it names the cycle that is *about to*
execute. Reading the register before calling ``cycle()`` therefore gives
the value "during" that cycle, which is what the screen and the signal
checksum both want. ``step()`` packages that read-then-advance order.

Latencies:
  noop  — 1 cycle, no effect
  addx  — 2 cycles, register += V at the end of the second cycle
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional

from .config import INITIAL_REGISTER
from .instructions import Instruction

log = logging.getLogger(__name__)

__all__ = ['VirtualMachine', 'ExhaustedProgram', 'Sample', 'InFlight']


class ExhaustedProgram(RuntimeError):
    """Raised when the machine is cycled after its program has finished.

    Callers must check ``is_executing()`` first; hitting this is a bug in
    the caller's loop, not in the program.
    """


@dataclass(frozen=True)
class Sample:
    """Register value observed *during* a cycle (before it completed)."""
    cycle: int
    register: int

    @property
    def signal_strength(self) -> int:
        return self.cycle * self.register


@dataclass
class InFlight:
    """An instruction that has started but not yet retired."""
    instruction: Instruction
    remaining: int


class VirtualMachine:
    """Executes a program of ``noop``/``addx`` instructions one cycle at a time.

    Usage:
        vm = VirtualMachine(parse_program(text))
        while vm.is_executing():
            sample = vm.step()
            print(sample.cycle, sample.register)
    """

    def __init__(self, program: Iterable[Instruction]):
        self.program = deque(program)
        self.in_flight: Optional[InFlight] = None
        self.register = INITIAL_REGISTER
        self.ticks = 1

    def __repr__(self) -> str:
        return (f"VirtualMachine(tick={self.ticks}, X={self.register}, "
                f"pending={len(self.program)}, in_flight={self.in_flight})")

    # ══════════════════════════════════════════════
    # Inspection
    # ══════════════════════════════════════════════

    def is_executing(self) -> bool:
        """False once every instruction has been pulled and retired."""
        return bool(self.program) or self.in_flight is not None

    def read_register(self) -> int:
        """Register value as of the last completed cycle.

        An in-flight ``addx`` is not reflected until it retires.
        """
        return self.register

    def cycle_count(self) -> int:
        """1-based number of the cycle about to execute."""
        return self.ticks

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def cycle(self):
        """Advance the machine by exactly one clock cycle."""
        if self.in_flight is None:
            self._schedule()

        self._execute()
        self.ticks += 1

    def step(self) -> Sample:
        """Observe the register for the current cycle, then run that cycle."""
        sample = Sample(self.ticks, self.register)
        self.cycle()
        return sample

    def run(self) -> int:
        """Cycle until the program has finished. Returns the final register."""
        while self.is_executing():
            self.cycle()
        return self.register

    def _schedule(self):
        """Nothing is executing: start the next instruction of the program."""
        if not self.program:
            raise ExhaustedProgram(
                f"cycle() called on tick {self.ticks} with no instruction left to execute"
            )
        instruction = self.program.popleft()
        self.in_flight = InFlight(instruction, instruction.latency)

    def _execute(self):
        """Spend one cycle on the in-flight instruction, retiring it if done."""
        current = self.in_flight
        current.remaining -= 1
        if current.remaining > 0:
            log.debug("tick %d: %s in flight (X=%d)", self.ticks, current.instruction, self.register)
            return

        self.register = current.instruction.apply(self.register)
        self.in_flight = None
        log.debug("tick %d: %s retired (X=%d)", self.ticks, current.instruction, self.register)
