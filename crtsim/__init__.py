"""
crtsim — Cycle-accurate CRT machine simulator
==============================================
Runs a ``noop``/``addx`` program on a one-register CPU and draws the
handheld's CRT by sampling that register once per clock cycle.

Architecture:
    ┌──────────┐    ┌──────────────┐    ┌────────────────┐    ┌──────────┐    ┌────────┐
    │ Program  │───>│ Instructions │───>│ VirtualMachine │───>│  Screen  │───>│ render │
    │ (text)   │    │ (parser)     │    │ (cycle/step)   │    │ (pixels) │    │ (text) │
    └──────────┘    └──────────────┘    └────────────────┘    └──────────┘    └────────┘

    - instructions.py:    Noop / Addx dataclasses + line parser
    - machine.py:         VirtualMachine, one cycle per call, latency-driven
    - screen.py:          Screen samples the register before every cycle
    - signal_strength.py: cycle x register checksum at chosen cycles
    - config.py:          ScreenGeometry and named display profiles
    - log_setup.py:       rich-backed logging for the CLI
"""

__version__ = "0.1.0"

from typing import Optional

from .config import ScreenGeometry, DISPLAY_PROFILES, geometry_for
from .instructions import (
    Noop, Addx, Instruction,
    ProgramError, MalformedOperand, UnknownInstruction,
    parse_instruction, parse_program,
)
from .machine import VirtualMachine, ExhaustedProgram, Sample
from .screen import Screen, Pixel
from .signal_strength import (
    DEFAULT_SAMPLE_CYCLES, sample_signal_strengths, total_signal_strength,
)


def run_program(source: str, *, geometry: Optional[ScreenGeometry] = None) -> str:
    """Parse ``source``, run it on a fresh machine and return the rendered raster.

    Full pipeline: parse_program -> VirtualMachine -> Screen.refresh -> render.
    """
    screen = Screen(VirtualMachine(parse_program(source)), geometry)
    screen.refresh()
    return screen.render()
