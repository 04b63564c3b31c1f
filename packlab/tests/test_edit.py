"""Tests for channel edits."""

import numpy as np
import pytest

from packlab import (
    PackedColor,
    blot,
    darken,
    dullen,
    edit_oklab,
    enrich,
    fade,
    from_bytes,
    from_rgba8888,
    in_gamut,
    lerp_colors,
    lessen_change,
    lighten,
    lower_a,
    lower_b,
    raise_a,
    raise_b,
)


@pytest.fixture
def colors():
    """A mix of in-gamut and out-of-gamut packed colors."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 2**32, size=20_000, dtype=np.uint64).astype(np.uint32)


@pytest.fixture
def rgb_colors():
    """Packed colors converted from RGB, so all in gamut with alpha LSB 0."""
    rng = np.random.default_rng(3)
    rgba = rng.integers(0, 2**32, size=5_000, dtype=np.uint64).astype(np.uint32)
    return from_rgba8888(rgba)


class TestLightness:
    """lighten() / darken()."""

    def test_zero_is_identity(self, colors):
        np.testing.assert_array_equal(lighten(colors, 0.0), colors)
        np.testing.assert_array_equal(darken(colors, 0.0), colors)

    def test_full(self, colors):
        np.testing.assert_array_equal(lighten(colors, 1.0) & 0xFF, 255)
        np.testing.assert_array_equal(darken(colors, 1.0) & 0xFF, 0)

    def test_other_bytes_untouched(self, colors):
        for edit in (lighten, darken):
            np.testing.assert_array_equal(edit(colors, 0.37) & 0xFFFFFF00, colors & 0xFFFFFF00)

    def test_halfway(self):
        c = from_bytes(100, 128, 128)
        assert lighten(c, 0.5).l_byte == 177
        assert darken(c, 0.5).l_byte == 50

    def test_fraction_clamped(self):
        c = from_bytes(100, 128, 128)
        assert lighten(c, 2.0) == lighten(c, 1.0)
        assert darken(c, -1.0) == c

    def test_vectorized_fraction(self):
        c = from_bytes(100, 128, 128)
        out = lighten(c, np.array([0.0, 1.0]))
        np.testing.assert_array_equal(out & 0xFF, [100, 255])

    def test_scalar_type(self):
        assert isinstance(lighten(0xFE808080, 0.5), PackedColor)


class TestChromaAxes:
    """raise_a / lower_a / raise_b / lower_b."""

    def test_targets(self):
        c = from_bytes(100, 100, 100)
        assert raise_a(c, 1.0).a_byte == 255
        assert lower_a(c, 1.0).a_byte == 0
        assert raise_b(c, 1.0).b_byte == 255
        assert lower_b(c, 1.0).b_byte == 0

    def test_only_own_byte_changes(self, colors):
        np.testing.assert_array_equal(raise_a(colors, 0.4) & 0xFFFF00FF, colors & 0xFFFF00FF)
        np.testing.assert_array_equal(lower_a(colors, 0.4) & 0xFFFF00FF, colors & 0xFFFF00FF)
        np.testing.assert_array_equal(raise_b(colors, 0.4) & 0xFF00FFFF, colors & 0xFF00FFFF)
        np.testing.assert_array_equal(lower_b(colors, 0.4) & 0xFF00FFFF, colors & 0xFF00FFFF)


class TestAlpha:
    """blot() / fade()."""

    def test_targets(self):
        c = from_bytes(100, 128, 128, 100)
        assert blot(c, 1.0).alpha_byte == 254
        assert fade(c, 1.0).alpha_byte == 0

    def test_lsb_stays_clear(self, colors):
        for edit in (blot, fade):
            out = edit(colors, 0.33)
            assert np.all(out & 0x01000000 == 0)
            np.testing.assert_array_equal(out & 0x00FFFFFF, colors & 0x00FFFFFF)


class TestSaturation:
    """dullen() / enrich()."""

    def test_dullen_always_in_gamut(self, colors):
        rng = np.random.default_rng(5)
        t = rng.random(colors.shape)
        assert np.all(in_gamut(dullen(colors, t)))

    def test_dullen_full_is_gray(self, colors):
        out = dullen(colors, 1.0)
        np.testing.assert_array_equal(out >> 8 & 0xFFFF, 0x8080)

    def test_dullen_zero_keeps_in_gamut_colors(self, rgb_colors):
        np.testing.assert_array_equal(dullen(rgb_colors, 0.0), rgb_colors)

    def test_enrich_always_in_gamut(self, colors):
        assert np.all(in_gamut(enrich(colors, 0.8)))

    def test_enrich_moves_away_from_neutral(self):
        c = from_bytes(128, 140, 120)
        out = enrich(c, 0.5)
        assert out.a_byte > c.a_byte
        assert out.b_byte < c.b_byte

    def test_keep_lightness(self, colors):
        for edit in (dullen, enrich):
            np.testing.assert_array_equal(edit(colors, 0.5) & 0xFF, colors & 0xFF)


class TestEditOklab:
    """edit_oklab()."""

    def test_identity(self, rgb_colors):
        np.testing.assert_array_equal(edit_oklab(rgb_colors), rgb_colors)

    def test_always_in_gamut(self, colors):
        out = edit_oklab(colors, add_a=0.3, mul_b=1.5)
        assert np.all(in_gamut(out))

    def test_lightness_add_clamps(self, rgb_colors):
        np.testing.assert_array_equal(edit_oklab(rgb_colors, add_l=2.0) & 0xFF, 255)
        np.testing.assert_array_equal(edit_oklab(rgb_colors, mul_l=0.0) & 0xFF, 0)

    def test_alpha(self):
        c = from_bytes(128, 128, 128, 254)
        assert edit_oklab(c, mul_alpha=0.0).alpha_byte == 0
        assert edit_oklab(c, add_alpha=-0.5).alpha_byte == 128

    def test_chroma_to_neutral(self):
        c = from_bytes(128, 150, 100)
        out = edit_oklab(c, mul_a=0.0, mul_b=0.0)
        assert out.a_byte == 128
        assert out.b_byte == 128

    def test_add_a_counts_double(self):
        """add_a=0.1 moves A by about 0.1 of the [0, 1] channel."""
        c = from_bytes(128, 128, 128)
        out = edit_oklab(c, add_a=0.1)
        assert abs(out.a_byte - (128 + 0.1 * 255)) <= 1

    def test_scalar_type(self):
        assert isinstance(edit_oklab(0xFE808080, add_l=0.1), PackedColor)


class TestBlending:
    """lerp_colors() / lessen_change()."""

    def test_lerp_endpoints(self):
        a = from_bytes(10, 20, 30, 40)
        b = from_bytes(210, 220, 230, 240)
        assert lerp_colors(a, b, 0.0) == a
        assert lerp_colors(a, b, 1.0) == b

    def test_lerp_midpoint_truncates(self):
        a = from_bytes(10, 20, 30, 40)
        b = from_bytes(21, 220, 230, 240)
        mid = lerp_colors(a, b, 0.5)
        assert mid.l_byte == 15
        assert mid.a_byte == 120
        assert mid.alpha_byte == 140

    def test_lessen_change_endpoints(self):
        c = from_rgba8888(0x3366CCFF)
        assert lessen_change(c, 1.0) == c
        assert lessen_change(c, 0.0) == 0xFE808080

    def test_lessen_change_halfway(self):
        c = from_bytes(0, 0, 255, 0)
        half = lessen_change(c, 0.5)
        assert half.l_byte == 64
        assert half.a_byte == 64
        assert half.b_byte == 191
        assert half.alpha_byte == 126
