"""
Display geometry / profile tests.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from crtsim.config import DISPLAY_PROFILES, ScreenGeometry, geometry_for


class TestScreenGeometry:
    def test_defaults(self):
        g = ScreenGeometry()
        assert (g.width, g.height, g.capacity) == (40, 6, 240)

    @pytest.mark.parametrize("width,height", [(0, 6), (40, -1), (2.5, 3), (True, 3)])
    def test_rejects_bad_dimensions(self, width, height):
        with pytest.raises(ValueError):
            ScreenGeometry(width, height)


class TestProfiles:
    def test_crt_is_default(self):
        assert geometry_for() == ScreenGeometry(40, 6)

    def test_debug_profile(self):
        assert geometry_for("debug") == ScreenGeometry(10, 3)

    def test_overrides(self):
        assert geometry_for("crt", width=8) == ScreenGeometry(8, 6)
        assert geometry_for("debug", height=1) == ScreenGeometry(10, 1)

    def test_unknown_profile(self):
        with pytest.raises(KeyError, match="crt"):
            geometry_for("vga")

    def test_every_profile_has_description(self):
        for name, profile in DISPLAY_PROFILES.items():
            assert profile["description"], name
