"""Contrast heuristics and random sampling of packed Oklab colors."""

import numpy as np

from packlab.defaults import (
    CONTRAST_CHROMA_THRESHOLD,
    INVERSE_LIGHT_DARK_BASE,
    INVERSE_LIGHT_LIGHT_BASE,
    INVERSE_LIGHT_SCALE,
    RANDOM_EDIT_TRIALS,
    RANDOM_SEED_INCREMENT,
    RANDOM_TAP_MULTIPLIERS,
)
from packlab.gamut import in_gamut, in_gamut_bytes, limit_to_gamut
from packlab.gamut_table import get_gamut_table
from packlab.packed import as_bits, as_packed, encode, is_scalar, unpack

_U64 = 0xFFFFFFFFFFFFFFFF
_TAP_CENTER = 0x7FFFFF / 2
_TAP_SCALE = 2.0 ** -22


# === Lightness contrast ===

def inverse_lightness(main, contrast):
    """Move main's lightness into a band far from contrast's lightness.

    Colors whose (A, B) bytes are already far apart (squared distance of at
    least CONTRAST_CHROMA_THRESHOLD) contrast well enough, and main comes
    back unchanged. The result is not limited to the gamut.
    """
    scalar = is_scalar(main, contrast)
    bits = as_bits(main).astype(np.int64)
    l, a, b, _ = unpack(bits)
    cl, ca, cb, _ = unpack(contrast)
    far = (a - ca) ** 2 + (b - cb) ** 2 >= CONTRAST_CHROMA_THRESHOLD
    light = np.where(
        cl < 128,
        l * INVERSE_LIGHT_SCALE + INVERSE_LIGHT_DARK_BASE,
        INVERSE_LIGHT_LIGHT_BASE - l * INVERSE_LIGHT_SCALE,
    ).astype(np.int64)
    edited = bits & 0xFFFFFF00 | light
    return as_packed(np.where(far, bits, edited), scalar)


def differentiate_lightness(main, contrast):
    """Average main's L with contrast's L shifted by half the range, then limit."""
    scalar = is_scalar(main, contrast)
    bits = as_bits(main).astype(np.int64)
    shifted = (unpack(contrast)[0] + 128) & 0xFF
    light = (shifted + (bits & 0xFF)) >> 1
    return as_packed(limit_to_gamut((bits & 0xFFFFFF00 | light).astype(np.uint32)), scalar)


def offset_lightness(packed):
    """Push light colors darker and dark colors lighter, toward mid-range."""
    return differentiate_lightness(packed, packed)


# === Random sampling ===

def _tap(seed: np.ndarray, multiplier: int) -> np.ndarray:
    """One tap of the counter stream, in [-1, 1)."""
    raw = (seed * np.uint64(multiplier)) >> np.uint64(41)
    return (raw.astype(np.float64) - _TAP_CENTER) * _TAP_SCALE


def random_edit(packed, seed, variance):
    """Randomly nudge L, A and B by up to ``variance`` (about 0.05 to 0.25).

    Deterministic for a given seed. Up to RANDOM_EDIT_TRIALS candidates are
    drawn; the first whose offset lies inside a sphere of radius variance and
    whose result is in gamut wins. If none does, the color comes back as-is.
    Alpha is always kept.

    Args:
        packed: Packed color(s) to edit
        seed: 64-bit seed(s); vary it per call for different results
        variance: Largest distance the edit may move the color

    Returns:
        Edited packed color(s)
    """
    scalar = is_scalar(packed, seed, variance)
    bits, seeds, var = np.broadcast_arrays(
        np.atleast_1d(as_bits(packed)).astype(np.int64),
        np.atleast_1d(np.asarray(seed, dtype=object) & _U64).astype(np.uint64),
        np.atleast_1d(np.nan_to_num(np.asarray(variance, dtype=np.float64))),
    )
    shape = bits.shape
    bits, seeds, var = bits.ravel(), seeds.ravel().copy(), var.ravel()
    table = get_gamut_table()
    l, a, b, _ = unpack(bits)
    L = l / 255.0
    A = (a - 127.5) / 127.5
    B = (b - 127.5) / 127.5

    result = bits.copy()
    pending = np.ones(bits.shape, dtype=bool)
    step = np.uint64(RANDOM_SEED_INCREMENT)
    for _ in range(RANDOM_EDIT_TRIALS):
        x = _tap(seeds, RANDOM_TAP_MULTIPLIERS[0]) * var
        y = _tap(seeds, RANDOM_TAP_MULTIPLIERS[1]) * var
        z = _tap(seeds, RANDOM_TAP_MULTIPLIERS[2]) * var
        seeds += step

        nL = L + x
        nA = (A + y) * 0.5 + 0.5
        nB = (B + z) * 0.5 + 0.5
        ok = pending & (x * x + y * y + z * z <= var * var)
        ok &= (nL >= 0) & (nL <= 1) & (nA >= 0) & (nA <= 1) & (nB >= 0) & (nB <= 1)
        nl = np.floor(nL * 255.0 + 0.5).astype(np.int64)
        na = np.floor(nA * 255.0 + 0.5).astype(np.int64)
        nb = np.floor(nB * 255.0 + 0.5).astype(np.int64)
        ok &= in_gamut_bytes(nl, na, nb, table)
        if ok.any():
            result[ok] = bits[ok] & 0xFF000000 | nb[ok] << 16 | na[ok] << 8 | nl[ok]
            pending &= ~ok
        if not pending.any():
            break
    return as_packed(result.reshape(() if scalar else shape), scalar)


def random_color(rng: np.random.Generator | None = None, size=None, alpha: float = 1.0):
    """Draw uniformly random in-gamut colors by rejection sampling.

    Args:
        rng: numpy Generator; a fresh default_rng() if omitted
        size: None for one PackedColor, or an int/shape for an array
        alpha: Alpha of every returned color

    Returns:
        PackedColor, or uint32 array of the given shape
    """
    if rng is None:
        rng = np.random.default_rng()
    count = 1 if size is None else int(np.prod(size))
    colors = encode(rng.random(count), rng.random(count), rng.random(count), alpha)
    rejected = ~in_gamut(colors)
    while rejected.any():
        n = int(rejected.sum())
        redrawn = encode(rng.random(n), rng.random(n), rng.random(n), alpha)
        colors[rejected] = redrawn
        rejected[rejected] = ~in_gamut(redrawn)
    if size is None:
        return as_packed(colors[0], True)
    return colors.reshape(size)
