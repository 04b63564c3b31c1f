"""RGB <-> packed Oklab conversions.

Reference: https://bottosson.github.io/posts/oklab/

This is an engineered approximation tuned for speed and for a guaranteed
round trip through the packed representation, not a colorimetric reference:
gamma is approximated by c**2 / sqrt(c), and lightness is remapped with a
rational curve so the 8-bit L channel spends its levels more evenly.
"""

import numpy as np

from packlab.defaults import FORWARD_LIGHT_K, REVERSE_LIGHT_K
from packlab.packed import (
    ALPHA_MASK,
    as_bits,
    as_packed,
    clamp_unit,
    is_scalar,
    pack,
    unpack,
)

# === Oklab <-> Linear RGB matrices ===

# Linear RGB -> LMS
_RGB_TO_LMS = (
    (0.4121656120, 0.5362752080, 0.0514575653),
    (0.2118591070, 0.6807189584, 0.1074065790),
    (0.0883097947, 0.2818474174, 0.6302613616),
)

# LMS cube root -> Oklab
_LMS_TO_OKLAB = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)

# Oklab -> LMS cube root
_OKLAB_TO_LMS = (
    (1.0, 0.3963377774, 0.2158037573),
    (1.0, -0.1055613458, -0.0638541728),
    (1.0, -0.0894841775, -1.2914855480),
)

# LMS -> Linear RGB
_LMS_TO_RGB = (
    (+4.0767245293, -3.3072168827, +0.2307590544),
    (-1.2681437731, +2.6093323231, -0.3411344290),
    (-0.0041119885, -0.7034763098, +1.7068625689),
)


# === Lightness curve ===

def forward_light(L):
    """Remap Oklab L before quantizing: (L-1)/(1-k*L)+1."""
    L = np.asarray(L, dtype=np.float64)
    return (L - 1.0) / (1.0 - FORWARD_LIGHT_K * L) + 1.0


def reverse_light(L):
    """Inverse of forward_light(): (L-1)/(1+k*L)+1."""
    L = np.asarray(L, dtype=np.float64)
    return (L - 1.0) / (1.0 + REVERSE_LIGHT_K * L) + 1.0


# === Core Conversions ===

def srgb_to_bytes(r, g, b, a=1.0) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """sRGB floats -> packed (L, A, B, alpha) bytes.

    Inputs are clamped to [0, 1]. A and B are recentered from [-1, 1] into a
    byte with 127.5 per unit; L goes through forward_light() first.
    """
    r, g, b, a = clamp_unit(r), clamp_unit(g), clamp_unit(b), clamp_unit(a)
    r, g, b = r * r, g * g, b * b

    l = np.cbrt(_RGB_TO_LMS[0][0]*r + _RGB_TO_LMS[0][1]*g + _RGB_TO_LMS[0][2]*b)
    m = np.cbrt(_RGB_TO_LMS[1][0]*r + _RGB_TO_LMS[1][1]*g + _RGB_TO_LMS[1][2]*b)
    s = np.cbrt(_RGB_TO_LMS[2][0]*r + _RGB_TO_LMS[2][1]*g + _RGB_TO_LMS[2][2]*b)

    L = _LMS_TO_OKLAB[0][0]*l + _LMS_TO_OKLAB[0][1]*m + _LMS_TO_OKLAB[0][2]*s
    A = _LMS_TO_OKLAB[1][0]*l + _LMS_TO_OKLAB[1][1]*m + _LMS_TO_OKLAB[1][2]*s
    B = _LMS_TO_OKLAB[2][0]*l + _LMS_TO_OKLAB[2][1]*m + _LMS_TO_OKLAB[2][2]*s

    l_byte = np.clip(np.floor(forward_light(L) * 255.0 + 0.5), 0, 255)
    # A and B use floor(x * 127.5 + 128), not trunc(x * 127.999 + 127.5), so
    # bytes can sit one above the truncating mapping; neutral 0.0 is byte 128.
    a_byte = np.clip(np.floor(A * 127.5 + 128.0), 0, 255)
    b_byte = np.clip(np.floor(B * 127.5 + 128.0), 0, 255)
    alpha_byte = np.floor(a * 255.0 + 0.5).astype(np.int64) & ALPHA_MASK
    return l_byte.astype(np.int64), a_byte.astype(np.int64), b_byte.astype(np.int64), alpha_byte


def bytes_to_srgb(l, a, b) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Packed (L, A, B) bytes -> sRGB floats clamped to [0, 1]."""
    return oklab_to_srgb(
        reverse_light(np.asarray(l, dtype=np.float64) / 255.0),
        (np.asarray(a, dtype=np.float64) - 127.5) / 127.5,
        (np.asarray(b, dtype=np.float64) - 127.5) / 127.5,
    )


def oklab_to_srgb(L, A, B) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Oklab floats (L already un-curved, A and B in [-1, 1]) -> sRGB in [0, 1]."""
    L = np.asarray(L, dtype=np.float64)
    A = np.asarray(A, dtype=np.float64)
    B = np.asarray(B, dtype=np.float64)

    l_ = (L + _OKLAB_TO_LMS[0][1]*A + _OKLAB_TO_LMS[0][2]*B) ** 3
    m_ = (L + _OKLAB_TO_LMS[1][1]*A + _OKLAB_TO_LMS[1][2]*B) ** 3
    s_ = (L + _OKLAB_TO_LMS[2][1]*A + _OKLAB_TO_LMS[2][2]*B) ** 3

    r = _LMS_TO_RGB[0][0]*l_ + _LMS_TO_RGB[0][1]*m_ + _LMS_TO_RGB[0][2]*s_
    g = _LMS_TO_RGB[1][0]*l_ + _LMS_TO_RGB[1][1]*m_ + _LMS_TO_RGB[1][2]*s_
    b = _LMS_TO_RGB[2][0]*l_ + _LMS_TO_RGB[2][1]*m_ + _LMS_TO_RGB[2][2]*s_

    return (
        np.sqrt(np.clip(r, 0.0, 1.0)),
        np.sqrt(np.clip(g, 0.0, 1.0)),
        np.sqrt(np.clip(b, 0.0, 1.0)),
    )


# === Public API ===

def from_rgba(r, g, b, a=1.0):
    """sRGB(A) floats in [0, 1] -> packed Oklab color."""
    bits = pack(*srgb_to_bytes(r, g, b, a))
    return as_packed(bits, is_scalar(r, g, b, a))


def from_rgba8888(rgba):
    """RGBA8888 integer(s) (r << 24 | g << 16 | b << 8 | a) -> packed Oklab color."""
    bits = as_bits(rgba).astype(np.int64)
    r = (bits >> 24 & 0xFF) / 255.0
    g = (bits >> 16 & 0xFF) / 255.0
    b = (bits >> 8 & 0xFF) / 255.0
    a = (bits & 0xFF) / 255.0
    return as_packed(pack(*srgb_to_bytes(r, g, b, a)), is_scalar(rgba))


def to_rgba(packed) -> np.ndarray:
    """Packed Oklab color -> sRGBA floats, shape (..., 4)."""
    l, a, b, alpha = unpack(packed)
    r, g, b = bytes_to_srgb(l, a, b)
    return np.stack([r, g, b, alpha / 254.0], axis=-1)


def to_rgba8888(packed):
    """Packed Oklab color -> RGBA8888 integer(s).

    Returns a Python int for scalar input, a uint32 array otherwise.
    """
    l, a, b, alpha = unpack(packed)
    r, g, b = (np.floor(c * 255.0 + 0.5).astype(np.int64) for c in bytes_to_srgb(l, a, b))
    a8 = np.floor(alpha * (255.0 / 254.0) + 0.5).astype(np.int64)
    rgba = (r << 24 | g << 16 | b << 8 | a8).astype(np.uint32)
    if is_scalar(packed):
        return int(rgba)
    return rgba


def _rgb_channel(packed, index: int):
    l, a, b, _ = unpack(packed)
    c = np.floor(bytes_to_srgb(l, a, b)[index] * 255.0 + 0.5).astype(np.int64)
    if is_scalar(packed):
        return int(c)
    return c


def red(packed):
    """Red channel of the sRGB conversion, 0..255."""
    return _rgb_channel(packed, 0)


def green(packed):
    """Green channel of the sRGB conversion, 0..255."""
    return _rgb_channel(packed, 1)


def blue(packed):
    """Blue channel of the sRGB conversion, 0..255."""
    return _rgb_channel(packed, 2)
