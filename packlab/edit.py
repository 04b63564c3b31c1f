"""Channel edits on packed Oklab colors.

Edits work directly on the packed bytes and touch only the bytes they
change; everything else is carried over bit-for-bit. Fractions are clamped
to [0, 1] rather than rejected.

lighten/darken, raise_a/lower_a, raise_b/lower_b and blot/fade never consult
the gamut table, so they can leave the gamut. dullen, enrich and edit_oklab
always return in-gamut colors.
"""

import numpy as np

from packlab.gamut import limit_to_gamut
from packlab.packed import ALPHA_MASK, as_bits, as_packed, clamp_unit, is_scalar, pack, unpack


def _toward(byte, target: float, t) -> np.ndarray:
    """Move a byte toward target by fraction t, truncating."""
    return np.floor(byte + (target - byte) * clamp_unit(t)).astype(np.int64)


def _set_byte(packed, shift: int, t, target: float):
    scalar = is_scalar(packed, t)
    bits = as_bits(packed).astype(np.int64)
    byte = bits >> shift & 0xFF
    edited = bits & ~(0xFF << shift) & 0xFFFFFFFF | _toward(byte, target, t) << shift
    return as_packed(edited, scalar)


# === Lightness ===

def lighten(packed, t):
    """Move L toward white by fraction t."""
    return _set_byte(packed, 0, t, 255.0)


def darken(packed, t):
    """Move L toward black by fraction t."""
    return _set_byte(packed, 0, t, 0.0)


# === Chroma axes ===

def raise_a(packed, t):
    """Move A toward its maximum (more red/magenta) by fraction t."""
    return _set_byte(packed, 8, t, 255.0)


def lower_a(packed, t):
    """Move A toward its minimum (more green) by fraction t."""
    return _set_byte(packed, 8, t, 0.0)


def raise_b(packed, t):
    """Move B toward its maximum (more yellow) by fraction t."""
    return _set_byte(packed, 16, t, 255.0)


def lower_b(packed, t):
    """Move B toward its minimum (more blue) by fraction t."""
    return _set_byte(packed, 16, t, 0.0)


# === Alpha ===

def _set_alpha(packed, t, target: float):
    scalar = is_scalar(packed, t)
    bits = as_bits(packed).astype(np.int64)
    opacity = _toward(bits >> 24 & ALPHA_MASK, target, t) & ALPHA_MASK
    return as_packed(bits & 0x00FFFFFF | opacity << 24, scalar)


def blot(packed, t):
    """Move alpha toward fully opaque by fraction t."""
    return _set_alpha(packed, t, float(ALPHA_MASK))


def fade(packed, t):
    """Move alpha toward fully transparent by fraction t."""
    return _set_alpha(packed, t, 0.0)


# === Saturation ===

def _scale_chroma(packed, factor):
    bits = as_bits(packed).astype(np.int64)
    _, a, b, _ = unpack(bits)
    a = np.clip(np.floor((a - 127.5) * factor + 128.0), 0, 255).astype(np.int64)
    b = np.clip(np.floor((b - 127.5) * factor + 128.0), 0, 255).astype(np.int64)
    return (bits & 0xFF0000FF | b << 16 | a << 8).astype(np.uint32)


def dullen(packed, t):
    """Pull (A, B) toward neutral gray by fraction t.

    Moving toward neutral stays in gamut for in-gamut input; the final limit
    also covers colors that started outside.
    """
    scalar = is_scalar(packed, t)
    dulled = _scale_chroma(packed, 1.0 - clamp_unit(t))
    return as_packed(limit_to_gamut(dulled), scalar)


def enrich(packed, t):
    """Push (A, B) away from neutral by a factor of 1 + t, then limit to gamut."""
    scalar = is_scalar(packed, t)
    enriched = _scale_chroma(packed, 1.0 + clamp_unit(t))
    return as_packed(limit_to_gamut(enriched), scalar)


# === General edit ===

def edit_oklab(
    packed,
    add_l=0.0,
    add_a=0.0,
    add_b=0.0,
    add_alpha=0.0,
    mul_l=1.0,
    mul_a=1.0,
    mul_b=1.0,
    mul_alpha=1.0,
):
    """Multiply-add every channel, then limit to gamut.

    L and alpha are in [0, 1]. A and B are handled as [-1, 1] offsets from
    neutral, so their add terms count double to stay on the same scale as
    L and alpha. Every result is clamped to its range before re-encoding.

    Args:
        packed: Packed color(s) to edit
        add_l, add_a, add_b, add_alpha: Added after multiplying
        mul_l, mul_a, mul_b, mul_alpha: Channel multipliers

    Returns:
        Edited packed color(s), always in gamut
    """
    scalar = is_scalar(packed, add_l, add_a, add_b, add_alpha, mul_l, mul_a, mul_b, mul_alpha)
    l, a, b, alpha = unpack(packed)

    L = clamp_unit(l / 255.0 * mul_l + add_l)
    A = np.clip(np.nan_to_num((a - 127.5) / 127.5 * mul_a + add_a * 2.0), -1.0, 1.0)
    B = np.clip(np.nan_to_num((b - 127.5) / 127.5 * mul_b + add_b * 2.0), -1.0, 1.0)
    opacity = clamp_unit(alpha / 254.0 * mul_alpha + add_alpha)

    edited = pack(
        np.floor(L * 255.0 + 0.5),
        np.floor((A * 0.5 + 0.5) * 255.0 + 0.5),
        np.floor((B * 0.5 + 0.5) * 255.0 + 0.5),
        np.floor(opacity * 255.0 + 0.5),
    )
    return as_packed(limit_to_gamut(edited), scalar)


# === Blending ===

def lerp_colors(start, end, change):
    """Blend two packed colors byte by byte; change 0 is start, 1 is end.

    Does not limit the result to the gamut; callers that need that (such as
    gradients) apply limit_to_gamut() themselves.
    """
    scalar = is_scalar(start, end, change)
    s = unpack(start)
    e = unpack(end)
    t = np.nan_to_num(np.asarray(change, dtype=np.float64))
    channels = [np.trunc(sc + t * (ec - sc)).astype(np.int64) for sc, ec in zip(s, e)]
    return as_packed(pack(*channels), scalar)


def lessen_change(packed, fraction):
    """Blend from neutral opaque gray toward a color; fraction 1 is the color."""
    return lerp_colors(0xFE808080, packed, fraction)
