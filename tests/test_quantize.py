"""Tests for drag gesture quantization."""

import pytest

from blockday.service.quantize import clamp_minute_of_day, quantize, select_gear


class TestSelectGear:
    @pytest.mark.parametrize(
        "distance,step",
        [(0, 1), (39.9, 1), (40, 5), (119.9, 5), (120, 10), (249.9, 10), (250, 30), (900, 30)],
    )
    def test_gear_boundaries(self, distance, step):
        """Each gear starts at its lower bound, inclusive."""
        assert select_gear(distance).step == step


class TestQuantize:
    def test_medium_drag(self):
        """200px from 08:00: 48 + 80 * 0.8 = 112, rounded to 110, already on a boundary."""
        assert quantize(200, 480) == 110

    def test_zero_drag_is_zero(self):
        """No movement never moves the block."""
        assert quantize(0, 480) == 0
        assert quantize(0, 481) == 0

    def test_fast_drag(self):
        """300px: 152 + 50 * 1.5 = 227, rounded to the nearest 30 minutes."""
        assert quantize(300, 0) == 240

    def test_sign_follows_gesture(self):
        """Dragging up yields the same magnitude, negated."""
        assert quantize(-300, 600) == -240
        assert quantize(-200, 480) == -110

    def test_snaps_up_onto_boundary(self):
        """A total one minute short of a 5-minute boundary is pushed onto it."""
        # 10px -> 4 minutes, 484 % 5 == 4
        assert quantize(10, 480) == 5

    def test_snaps_down_onto_boundary(self):
        """A total one minute past a 5-minute boundary is pulled back onto it."""
        # -10px -> -4 minutes, 476 % 5 == 1
        assert quantize(-10, 480) == -5

    def test_leaves_other_totals_alone(self):
        """Two or three minutes off a boundary is not corrected."""
        # 5px -> 2 minutes, 482 % 5 == 2
        assert quantize(5, 480) == 2

    def test_is_pure(self):
        """Same inputs, same output."""
        assert quantize(173.5, 615) == quantize(173.5, 615)

    def test_does_not_clamp(self):
        """The delta may take the block before midnight; clamping is separate."""
        assert quantize(-300, 60) == -240


class TestClamp:
    def test_clamps_to_day(self):
        """Results stay inside [0, 1440)."""
        assert clamp_minute_of_day(1400, 100) == 1439
        assert clamp_minute_of_day(10, -100) == 0
        assert clamp_minute_of_day(480, 110) == 590
