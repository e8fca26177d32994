"""
CRT screen driven by the virtual machine.

The beam draws one pixel per clock cycle, left to right, top to bottom.
A 3-pixel sprite is centred on the X register; the pixel under the beam
is lit when the sprite covers its column. The sprite position used for
pixel *i* is the register as it stood before cycle *i+1* ran, i.e. after
the previous cycle completed.
"""

from __future__ import annotations
import enum
import logging
from typing import List, Optional

from .config import INITIAL_REGISTER, SPRITE_WIDTH, ScreenGeometry
from .machine import VirtualMachine

log = logging.getLogger(__name__)

__all__ = ['Pixel', 'Screen']


class Pixel(enum.Enum):
    LIT = "#"
    DARK = "."


class Screen:
    """A raster whose pixels are lit by sampling a running machine.

    The screen owns its machine: ``refresh()`` drives it to completion.

    Usage:
        screen = Screen(VirtualMachine(parse_program(text)))
        screen.refresh()
        print(screen.render(), end="")
    """

    def __init__(self, machine: VirtualMachine, geometry: Optional[ScreenGeometry] = None):
        self.machine = machine
        self.geometry = geometry or ScreenGeometry()
        self.pixels: List[Pixel] = [Pixel.DARK] * self.geometry.capacity
        # Middle of the sprite; columns middle-1 .. middle+1 are covered
        self.sprite_middle = INITIAL_REGISTER
        self._overflow_logged = False

    @property
    def width(self) -> int:
        return self.geometry.width

    @property
    def height(self) -> int:
        return self.geometry.height

    def refresh(self):
        """Run the machine to completion, lighting pixels as the beam passes.

        Does nothing once the machine has finished.
        """
        while self.machine.is_executing():
            self._light(self.machine.cycle_count() - 1)
            self.machine.cycle()
            self.sprite_middle = self.machine.read_register()

    def _light(self, index: int):
        """Light pixel ``index`` if the sprite covers its column."""
        if index >= self.geometry.capacity:
            # Programs longer than the raster keep running; extra cycles draw nothing
            if not self._overflow_logged:
                log.debug("cycle %d is past the %dx%d raster; no longer sampling",
                          index + 1, self.width, self.height)
                self._overflow_logged = True
            return

        column = index % self.width
        reach = SPRITE_WIDTH // 2
        if self.sprite_middle - reach <= column <= self.sprite_middle + reach:
            self.pixels[index] = Pixel.LIT

    # ══════════════════════════════════════════════
    # Output
    # ══════════════════════════════════════════════

    def rows(self) -> List[str]:
        """One string of '#'/'.' per raster row."""
        w = self.width
        return [
            "".join(p.value for p in self.pixels[start:start + w])
            for start in range(0, self.geometry.capacity, w)
        ]

    def render(self) -> str:
        """Rows joined with newlines, including a trailing newline."""
        return "".join(row + "\n" for row in self.rows())

    def lit_count(self) -> int:
        """Number of lit pixels."""
        return sum(1 for p in self.pixels if p is Pixel.LIT)

    def __str__(self) -> str:
        return self.render()
