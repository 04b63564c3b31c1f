"""Gamut queries and clamping for packed Oklab colors.

A color is in gamut when its (A, B) point, recentered to [-0.5, 0.5], lies
within the boundary distance stored in the gamut table for its lightness and
hue. The table already accounts for sRGB, so no RGB conversion is needed.

Strategies:
- limit_to_gamut: keep L, alpha and hue; pull (A, B) onto the boundary only
  when the color is outside. Idempotent.
- maximize_saturation: always push (A, B) out to the boundary.
"""

import numpy as np

from packlab.defaults import CHROMA_LIMIT_BIAS, MAX_CHROMA
from packlab.gamut_table import GamutTable, get_gamut_table
from packlab.packed import as_bits, as_float, as_packed, clamp_unit, is_scalar, unpack
from packlab.trig import atan2_turns, cos_turns, sin_turns, wrap_turns


# === Indexing ===

def hue_index(hue) -> np.ndarray:
    """Hue in turns [0, 1) -> table column 0..255."""
    return np.floor(np.asarray(hue, dtype=np.float64) * 256.0).astype(np.int64) & 0xFF


def lightness_index(L) -> np.ndarray:
    """Lightness in [0, 1] -> table row 0..255."""
    return np.floor(clamp_unit(L) * 255.999).astype(np.int64)


def gamut_index(L, hue):
    """Table index for a lightness in [0, 1] and a hue in turns."""
    index = lightness_index(L) << 8 | hue_index(wrap_turns(hue))
    if is_scalar(L, hue):
        return int(index)
    return index


# === Gamut checking ===

def _centered(byte) -> np.ndarray:
    """A or B byte -> recentered coordinate in [-0.5, 0.5]."""
    return (np.asarray(byte, dtype=np.float64) - 127.5) / 255.0


def _inside(l, x, y, table: GamutTable) -> np.ndarray:
    """In-gamut test on a byte lightness and recentered (A, B)."""
    d = table.distance(l, hue_index(atan2_turns(y, x))).astype(np.float64)
    return d * d / 65536.0 >= x * x + y * y


def in_gamut_bytes(l, a, b, table: GamutTable | None = None) -> np.ndarray:
    """In-gamut test on raw (L, A, B) byte arrays."""
    if table is None:
        table = get_gamut_table()
    return _inside(l, _centered(a), _centered(b), table)


def in_gamut(packed):
    """Check whether packed colors lie inside the sRGB gamut."""
    l, a, b, _ = unpack(packed)
    inside = in_gamut_bytes(l, a, b, get_gamut_table())
    if is_scalar(packed):
        return bool(inside)
    return inside


def in_gamut_channels(L, A, B):
    """Check channel floats in [0, 1] (A, B neutral at 0.5) against the gamut."""
    x = np.asarray(A, dtype=np.float64) - 0.5
    y = np.asarray(B, dtype=np.float64) - 0.5
    finite = np.isfinite(x) & np.isfinite(y)
    x, y = np.where(finite, x, 0.0), np.where(finite, y, 0.0)
    inside = _inside(lightness_index(L), x, y, get_gamut_table()) & finite
    if is_scalar(L, A, B):
        return bool(inside)
    return inside


# === Projection onto the boundary ===

def _offset_byte(direction, dist) -> np.ndarray:
    return np.clip(np.floor(direction * dist + 128.0), 0, 255).astype(np.int64)


def project(l, hue, dist, table: GamutTable) -> tuple[np.ndarray, np.ndarray]:
    """Place (A, B) bytes ``dist`` byte steps from neutral along ``hue``.

    Quantization can leave a point on the boundary just outside it, so the
    distance shrinks one step at a time until the point tests in gamut.
    Neutral gray (distance 0) is always accepted.

    Returns:
        (a_byte, b_byte) int64 arrays, broadcast over the inputs
    """
    l, cos_h, sin_h, dist = np.broadcast_arrays(
        np.asarray(l, dtype=np.int64),
        cos_turns(hue),
        sin_turns(hue),
        np.maximum(np.nan_to_num(np.asarray(dist, dtype=np.float64)), 0.0),
    )
    dist = dist.copy()
    a = _offset_byte(cos_h, dist)
    b = _offset_byte(sin_h, dist)
    pending = ~in_gamut_bytes(l, a, b, table) & (dist > 0)
    while pending.any():
        dist = np.where(pending, np.maximum(np.floor(dist) - 1.0, 0.0), dist)
        a = np.where(pending, _offset_byte(cos_h, dist), a)
        b = np.where(pending, _offset_byte(sin_h, dist), b)
        pending &= ~in_gamut_bytes(l, a, b, table) & (dist > 0)
    return a, b


def _with_ab(bits: np.ndarray, a, b) -> np.ndarray:
    """Replace the A and B bytes, keeping every other bit as-is."""
    keep = bits.astype(np.int64) & 0xFF0000FF
    return (keep | np.asarray(b, dtype=np.int64) << 16 | np.asarray(a, dtype=np.int64) << 8).astype(np.uint32)


def limit_to_gamut(packed):
    """Bring packed colors into gamut by reducing chroma along their hue.

    Colors already in gamut come back bit-for-bit unchanged. Otherwise L,
    alpha and hue are kept and (A, B) moves onto the boundary.
    """
    scalar = is_scalar(packed)
    bits = np.atleast_1d(as_bits(packed))
    table = get_gamut_table()
    l, a, b, _ = unpack(bits)
    x, y = _centered(a), _centered(b)
    hue = atan2_turns(y, x)
    d = table.distance(l, hue_index(hue))
    outside = ~_inside(l, x, y, table)
    if outside.any():
        bits = bits.copy()
        na, nb = project(l[outside], hue[outside], d[outside], table)
        bits[outside] = _with_ab(bits[outside], na, nb)
    return as_packed(bits.reshape(np.shape(packed)), scalar)


def maximize_saturation(packed):
    """Push packed colors out to the gamut boundary along their hue."""
    scalar = is_scalar(packed)
    bits = as_bits(packed)
    table = get_gamut_table()
    l, a, b, _ = unpack(bits)
    hue = atan2_turns(_centered(b), _centered(a))
    na, nb = project(l, hue, table.distance(l, hue_index(hue)), table)
    return as_packed(_with_ab(bits, na, nb), scalar)


# === Chroma ===

def chroma(packed):
    """Distance from neutral on the (A, B) plane, about 0..1.

    Near 0.3 is very saturated; most colors stay well below that.
    """
    _, a, b, _ = unpack(packed)
    x = (a - 127.5) / 128.0
    y = (b - 127.5) / 128.0
    return as_float(np.sqrt(x * x + y * y), is_scalar(packed))


def chroma_limit(hue, lightness):
    """Largest chroma() reachable at a hue (turns) and lightness in [0, 1].

    Never more than MAX_CHROMA, and 0 at (or beyond) pure black and white.
    """
    L = np.nan_to_num(np.asarray(lightness, dtype=np.float64), nan=0.0)
    d = get_gamut_table().distance(lightness_index(L), hue_index(wrap_turns(hue)))
    limit = np.minimum((d + CHROMA_LIMIT_BIAS) / 256.0, MAX_CHROMA)
    limit = np.where((L <= 0.0) | (L >= 1.0), 0.0, limit)
    return as_float(limit, is_scalar(hue, lightness))
