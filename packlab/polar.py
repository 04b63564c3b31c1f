"""Polar views of packed Oklab colors.

Two unrelated parameterizations live here, and callers pick one on purpose:

HSL-style (hue, saturation, lightness, from_hsl, to_edited):
    Computed from the sRGB conversion of the color, the way HSL is. Note that
    saturation() is simply max - min of the RGB channels, not the classic HSL
    saturation that divides by 1 - |2L - 1|, and is 0 for near-black and
    near-white colors.

Oklab-native (oklab_hue, oklab_saturation, oklab_lightness, oklab_by_hsl,
oklab_by_hcl):
    Computed on the (A, B) plane directly. Saturation is chroma relative to
    the gamut boundary at that hue and lightness, so 1.0 is the boundary.

All hues are in turns, [0, 1).
"""

import numpy as np

from packlab.defaults import HSL_BLACK_LIGHTNESS, HSL_EPSILON, HSL_SATURATION_EDGE
from packlab.gamut import hue_index, lightness_index, project
from packlab.gamut_table import get_gamut_table
from packlab.oklab import bytes_to_srgb, oklab_to_srgb, reverse_light, srgb_to_bytes
from packlab.packed import as_float, as_packed, clamp_unit, is_scalar, pack, quantize, unpack
from packlab.trig import atan2_turns, wrap_turns


# === HSL-style ===

def _extent(r, g, b):
    return np.maximum(np.maximum(r, g), b), np.minimum(np.minimum(r, g), b)


def _rgb_extent(packed):
    l, a, b, _ = unpack(packed)
    r, g, b = bytes_to_srgb(l, a, b)
    hi, lo = _extent(r, g, b)
    return r, g, b, hi, lo


def _rgb_hue(r, g, b, hi, lo):
    d = 6.0 * (hi - lo) + HSL_EPSILON
    h = np.select(
        [hi == r, hi == g],
        [(g - b) / d, 1.0 / 3.0 + (b - r) / d],
        2.0 / 3.0 + (r - g) / d,
    )
    return wrap_turns(h)


def _hsl_to_rgb(h, s, light):
    """Standard HSL -> sRGB floats; inputs already wrapped/clamped."""
    def channel(offset):
        t = wrap_turns(h + offset)
        return np.clip(np.abs(t * 6.0 - 3.0) - 1.0, 0.0, 1.0)

    v = light + s * np.minimum(light, 1.0 - light)
    d = 2.0 * (1.0 - light / (v + HSL_EPSILON))
    return tuple(v * (1.0 + (channel(offset) - 1.0) * d) for offset in (0.0, 2.0 / 3.0, 1.0 / 3.0))


def hue(packed):
    """HSL-style hue in turns, from the sRGB conversion."""
    return as_float(_rgb_hue(*_rgb_extent(packed)), is_scalar(packed))


def saturation(packed):
    """HSL-style saturation: max - min of the sRGB channels.

    Colors with |L - 0.5| above HSL_SATURATION_EDGE (near black or white) report 0.
    """
    l = unpack(packed)[0]
    _, _, _, hi, lo = _rgb_extent(packed)
    sat = np.where(np.abs(l / 255.0 - 0.5) > HSL_SATURATION_EDGE, 0.0, hi - lo)
    return as_float(sat, is_scalar(packed))


def lightness(packed):
    """HSL-style lightness: max * (1 - (max - min) / (2 * max))."""
    _, _, _, hi, lo = _rgb_extent(packed)
    return as_float(hi * (1.0 - (hi - lo) / (2.0 * hi + HSL_EPSILON)), is_scalar(packed))


def from_hsl(hue, saturation, lightness, alpha=1.0):
    """Build a packed color from HSL (hue in turns), via sRGB.

    Lightness at or below HSL_BLACK_LIGHTNESS gives black with the given alpha.
    """
    scalar = is_scalar(hue, saturation, lightness, alpha)
    light = clamp_unit(lightness)
    r, g, b = _hsl_to_rgb(wrap_turns(hue), clamp_unit(saturation), light)
    l_byte, a_byte, b_byte, alpha_byte = srgb_to_bytes(r, g, b, alpha)

    black = light <= HSL_BLACK_LIGHTNESS
    bits = pack(
        np.where(black, 0, l_byte),
        np.where(black, 0x80, a_byte),
        np.where(black, 0x80, b_byte),
        alpha_byte,
    )
    return as_packed(bits, scalar)


def to_edited(basis, hue=0.0, saturation=0.0, light=0.0, opacity=0.0):
    """Shift a color's HSL hue, saturation, lightness and opacity.

    Each argument is an additive change, typically in [-1, 1]. Hue wraps
    around the color wheel; the others are clamped to [0, 1]. light is added
    to the un-curved Oklab lightness before converting to sRGB, and saturation
    here is the classic HSL one (chroma over 1 - |2L - 1|). Edits that leave
    lightness at or below HSL_BLACK_LIGHTNESS give black with the new opacity.

    Args:
        basis: Packed color(s) to start from
        hue: Change in hue, in turns
        saturation: Change in HSL saturation
        light: Change in Oklab lightness
        opacity: Change in alpha

    Returns:
        Edited packed color(s); not limited to the gamut table
    """
    scalar = is_scalar(basis, hue, saturation, light, opacity)
    l, a, b, alpha = unpack(basis)
    L = clamp_unit(np.asarray(light, dtype=np.float64) + reverse_light(l / 255.0))
    op = clamp_unit(np.asarray(opacity, dtype=np.float64) + alpha / 254.0)

    r, g, b = oklab_to_srgb(L, (a - 127.5) / 127.5, (b - 127.5) / 127.5)
    hi, lo = _extent(r, g, b)
    lum = hi * (1.0 - 0.5 * (hi - lo) / (hi + HSL_EPSILON))
    h = _rgb_hue(r, g, b, hi, lo)
    s = (hi - lum) / (np.minimum(lum, 1.0 - lum) + HSL_EPSILON)

    r, g, b = _hsl_to_rgb(wrap_turns(h + hue), clamp_unit(s + saturation), lum)
    l_byte, a_byte, b_byte, _ = srgb_to_bytes(r, g, b)

    black = L <= HSL_BLACK_LIGHTNESS
    bits = pack(
        np.where(black, 0, l_byte),
        np.where(black, 0x80, a_byte),
        np.where(black, 0x80, b_byte),
        np.floor(op * 255.0).astype(np.int64),
    )
    return as_packed(bits, scalar)


# === Oklab-native ===

def _centered_ab(packed):
    l, a, b, _ = unpack(packed)
    return l, (a - 127.5) / 255.0, (b - 127.5) / 255.0


def oklab_hue(packed):
    """Hue of the (A, B) point in turns."""
    _, x, y = _centered_ab(packed)
    return as_float(atan2_turns(y, x), is_scalar(packed))


def oklab_saturation(packed):
    """Chroma relative to the gamut boundary: 1.0 on the boundary.

    Not clipped, so values above 1.0 mark out-of-gamut colors. Where the
    boundary itself is at distance 0 the result is 0.
    """
    l, x, y = _centered_ab(packed)
    d = get_gamut_table().distance(l, hue_index(atan2_turns(y, x))).astype(np.float64)
    radius = np.sqrt(x * x + y * y)
    sat = np.where(d > 0, radius * 256.0 / np.maximum(d, 1.0), 0.0)
    return as_float(sat, is_scalar(packed))


def oklab_lightness(packed):
    """The raw L channel in [0, 1], with no curve remap."""
    return as_float(unpack(packed)[0] / 255.0, is_scalar(packed))


def _by_polar(hue, light, alpha, radius_of):
    table = get_gamut_table()
    h = wrap_turns(hue)
    l = lightness_index(light)
    d = table.distance(l, hue_index(h)).astype(np.float64)
    a, b = project(l, h, radius_of(d), table)
    return pack(l, a, b, quantize(clamp_unit(alpha)))


def oklab_by_hsl(hue, saturation, lightness, alpha=1.0):
    """Build a color from Oklab-native hue (turns), saturation and lightness.

    Saturation 1.0 lands on the gamut boundary; results are always in gamut.
    """
    scalar = is_scalar(hue, saturation, lightness, alpha)
    sat = clamp_unit(saturation)
    return as_packed(_by_polar(hue, lightness, alpha, lambda d: sat * d), scalar)


def oklab_by_hcl(hue, chroma, lightness, alpha=1.0):
    """Build a color from hue (turns), chroma (as from chroma()) and lightness.

    Chroma beyond the gamut boundary is reduced to the boundary.
    """
    scalar = is_scalar(hue, chroma, lightness, alpha)
    c = np.maximum(np.nan_to_num(np.asarray(chroma, dtype=np.float64)), 0.0)
    return as_packed(_by_polar(hue, lightness, alpha, lambda d: np.minimum(c * 128.0, d)), scalar)
