"""Tests for gradient construction."""

import numpy as np

from packlab import (
    PackedColor,
    append_gradient,
    append_gradient_chain,
    from_rgba8888,
    gradient_chain,
    in_gamut,
    make_gradient,
)
from packlab.interpolation import smooth

TEAL = from_rgba8888(0x008080FF)
ORANGE = from_rgba8888(0xFF8800FF)
VIOLET = from_rgba8888(0x7722CCFF)


class TestMakeGradient:
    """make_gradient()."""

    def test_degenerate_steps(self):
        assert make_gradient(TEAL, ORANGE, 0) == []
        assert make_gradient(TEAL, ORANGE, -3) == []
        assert make_gradient(TEAL, ORANGE, 1) == [TEAL]

    def test_length_and_endpoints(self):
        for steps in (2, 3, 10):
            ramp = make_gradient(TEAL, ORANGE, steps)
            assert len(ramp) == steps
            assert ramp[0] == TEAL
            assert ramp[-1] == ORANGE

    def test_all_colors(self):
        ramp = make_gradient(TEAL, ORANGE, 16)
        assert all(isinstance(c, PackedColor) for c in ramp)
        assert np.all(in_gamut(np.array(ramp, dtype=np.uint32)))

    def test_end_returned_as_given(self):
        """Even an out-of-gamut or odd-alpha end color is the last element."""
        end = 0xFFFFFFFF
        assert make_gradient(TEAL, end, 5)[-1] == end

    def test_lightness_monotonic(self):
        dark = from_rgba8888(0x101010FF)
        light = from_rgba8888(0xF0F0F0FF)
        ls = [c.l_byte for c in make_gradient(dark, light, 12)]
        assert ls == sorted(ls)

    def test_linear_midpoint(self):
        ramp = make_gradient(0xFE808000, 0xFE8080C8, 3)
        assert ramp[1].l_byte == 100

    def test_interpolation_by_name_or_callable(self):
        by_name = make_gradient(TEAL, ORANGE, 9, "smooth")
        by_func = make_gradient(TEAL, ORANGE, 9, smooth)
        assert by_name == by_func
        assert by_name != make_gradient(TEAL, ORANGE, 9)


class TestGradientChain:
    """gradient_chain()."""

    def test_degenerate(self):
        assert gradient_chain([TEAL, ORANGE], 0) == []
        assert gradient_chain([], 5) == []
        assert gradient_chain([TEAL, ORANGE], 1) == [TEAL]
        assert gradient_chain([VIOLET], 4) == [VIOLET]

    def test_passes_through_stops(self):
        ramp = gradient_chain([TEAL, ORANGE, VIOLET], 5)
        assert len(ramp) == 5
        assert ramp[0] == TEAL
        assert ramp[2] == ORANGE
        assert ramp[-1] == VIOLET

    def test_even_spacing(self):
        """Positions run over i / (steps - 1), so the segments are equal."""
        ramp = gradient_chain([0xFE808000, 0xFE808064, 0xFE8080C8], 5)
        assert [c.l_byte for c in ramp] == [0, 50, 100, 150, 200]

    def test_two_stops_matches_make_gradient_ends(self):
        ramp = gradient_chain([TEAL, ORANGE], 7)
        assert ramp[0] == TEAL
        assert ramp[-1] == ORANGE
        assert len(ramp) == 7

    def test_in_gamut(self):
        ramp = gradient_chain([TEAL, ORANGE, VIOLET, TEAL], 30, "sine")
        assert np.all(in_gamut(np.array(ramp, dtype=np.uint32)))


class TestAppend:
    """append_gradient() / append_gradient_chain()."""

    def test_append_gradient(self):
        out = [VIOLET]
        result = append_gradient(out, TEAL, ORANGE, 4)
        assert result is out
        assert out[0] == VIOLET
        assert out[1:] == make_gradient(TEAL, ORANGE, 4)

    def test_append_chain(self):
        out = []
        append_gradient_chain(out, [TEAL, ORANGE, VIOLET], 6, "smoother")
        append_gradient_chain(out, [VIOLET, TEAL], 3)
        assert len(out) == 9
        assert out[5] == VIOLET
        assert out[-1] == TEAL
