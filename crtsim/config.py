"""
Display configuration for the CRT simulator.

Geometry used to be baked into the screen as two constants. It now lives
here as a small frozen dataclass so the screen can be built against any
raster size (tests use tiny synthetic ones), plus a table of named
profiles in the same spirit as the compiler's target profiles.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional


# ──────────────────────────────────────────────
# Machine / display defaults
# ──────────────────────────────────────────────

DEFAULT_WIDTH = 40        # pixels per row on the handheld CRT
DEFAULT_HEIGHT = 6        # rows
INITIAL_REGISTER = 1      # X register value at power-on
SPRITE_WIDTH = 3          # sprite is centred on X, one pixel either side


@dataclass(frozen=True)
class ScreenGeometry:
    """Width and height of a raster, in pixels."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"Screen {name} must be a positive integer, got {value!r}")

    @property
    def capacity(self) -> int:
        """Number of pixels (and therefore sampled cycles) the raster holds."""
        return self.width * self.height


DISPLAY_PROFILES: Dict[str, Dict] = {
    "crt": {
        "width": DEFAULT_WIDTH,
        "height": DEFAULT_HEIGHT,
        "description": "Handheld CRT, 40x6 (one pixel per cycle, 240 cycles)",
    },
    "debug": {
        "width": 10,
        "height": 3,
        "description": "Small 10x3 raster for eyeballing short programs",
    },
}


def geometry_for(profile: str = "crt", width: Optional[int] = None,
                 height: Optional[int] = None) -> ScreenGeometry:
    """Build a ScreenGeometry from a named profile, with optional overrides.

    Raises KeyError for an unknown profile name.
    """
    try:
        entry = DISPLAY_PROFILES[profile]
    except KeyError:
        known = ", ".join(sorted(DISPLAY_PROFILES))
        raise KeyError(f"Unknown display profile '{profile}' (known: {known})") from None
    return ScreenGeometry(
        width=entry["width"] if width is None else width,
        height=entry["height"] if height is None else height,
    )
