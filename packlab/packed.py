"""Packed Oklab color codec.

A packed color is one 32-bit word:

    bits  0-7   L      (lightness, 0..255)
    bits  8-15  A      (green/red axis, 128 ~ neutral)
    bits 16-23  B      (blue/yellow axis, 128 ~ neutral)
    bits 24-31  alpha  (7 significant bits, bit 24 always 0)

The same word doubles as an IEEE-754 float32 bit pattern for rendering
pipelines that carry a color per vertex. Keeping bit 24 clear means the
exponent can never be all ones, so the float is never NaN or infinite.

Every function here accepts a Python int, a PackedColor, a numpy scalar or
any integer array. Scalars come back as PackedColor (or float), arrays as
uint32 (or float64) arrays.
"""

from __future__ import annotations

import numpy as np

ALPHA_MASK = 0xFE


class PackedColor(int):
    """Immutable 32-bit packed Oklab color.

    Any integer is accepted and masked to 32 bits; whether the color is
    inside the sRGB gamut is a separate question (see packlab.gamut).
    """

    __slots__ = ()

    def __new__(cls, value: int = 0) -> PackedColor:
        return super().__new__(cls, int(value) & 0xFFFFFFFF)

    @classmethod
    def from_bytes(cls, l: int, a: int, b: int, alpha: int = 0xFE) -> PackedColor:
        """Pack raw channel bytes. The alpha LSB is dropped."""
        return cls((l & 0xFF) | (a & 0xFF) << 8 | (b & 0xFF) << 16 | (alpha & ALPHA_MASK) << 24)

    @classmethod
    def from_float(cls, value: float) -> PackedColor:
        """Reinterpret a float32 bit pattern as a packed color."""
        return cls(int(np.array(value, dtype=np.float32).view(np.uint32)))

    @property
    def l_byte(self) -> int:
        return int(self) & 0xFF

    @property
    def a_byte(self) -> int:
        return int(self) >> 8 & 0xFF

    @property
    def b_byte(self) -> int:
        return int(self) >> 16 & 0xFF

    @property
    def alpha_byte(self) -> int:
        return int(self) >> 24 & ALPHA_MASK

    @property
    def L(self) -> float:
        return self.l_byte / 255.0

    @property
    def A(self) -> float:
        return self.a_byte / 255.0

    @property
    def B(self) -> float:
        return self.b_byte / 255.0

    @property
    def alpha(self) -> float:
        return self.alpha_byte / 254.0

    def to_float(self) -> float:
        """Reinterpret this color as a float32 bit pattern."""
        return float(np.array(int(self), dtype=np.uint32).view(np.float32))

    def hex(self) -> str:
        return f"{int(self):08X}"

    def __repr__(self) -> str:
        return f"PackedColor(0x{int(self):08X})"


# === Scalar / array plumbing ===

def is_scalar(*values) -> bool:
    """True if every value is a Python or numpy scalar (not an ndarray)."""
    return all(not isinstance(v, np.ndarray) and np.ndim(v) == 0 for v in values)


def as_bits(packed) -> np.ndarray:
    """Packed colors as a uint32 array (0-d for scalars), masked to 32 bits."""
    bits = np.asarray(packed)
    if bits.dtype != np.uint32:
        bits = (bits.astype(np.int64) & 0xFFFFFFFF).astype(np.uint32)
    return bits


def as_packed(bits, scalar: bool):
    """Return a PackedColor for scalar calls, a uint32 array otherwise."""
    if scalar:
        return PackedColor(int(bits))
    return np.asarray(bits).astype(np.uint32)


def as_float(values, scalar: bool):
    """Return a Python float for scalar calls, a float64 array otherwise."""
    if scalar:
        return float(values)
    return np.asarray(values, dtype=np.float64)


def clamp_unit(x) -> np.ndarray:
    """Clamp to [0, 1] as float64, mapping NaN to 0."""
    x = np.nan_to_num(np.asarray(x, dtype=np.float64), nan=0.0)
    return np.clip(x, 0.0, 1.0)


def unpack(packed) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Split packed colors into int64 (L, A, B, alpha) byte arrays."""
    bits = as_bits(packed).astype(np.int64)
    return bits & 0xFF, bits >> 8 & 0xFF, bits >> 16 & 0xFF, bits >> 24 & ALPHA_MASK


def pack(l, a, b, alpha) -> np.ndarray:
    """Join (L, A, B, alpha) byte arrays into uint32 words."""
    l = np.asarray(l, dtype=np.int64) & 0xFF
    a = np.asarray(a, dtype=np.int64) & 0xFF
    b = np.asarray(b, dtype=np.int64) & 0xFF
    alpha = np.asarray(alpha, dtype=np.int64) & ALPHA_MASK
    return (alpha << 24 | b << 16 | a << 8 | l).astype(np.uint32)


def quantize(x) -> np.ndarray:
    """round(x * 255) as int64, without clamping (callers mask or clip)."""
    x = np.nan_to_num(np.asarray(x, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    x = np.clip(np.floor(x * 255.0 + 0.5), -2.0**31, 2.0**31)
    return x.astype(np.int64)


# === Codec ===

def encode(L, A, B, alpha=1.0):
    """Pack four channels in [0, 1] into a packed color.

    Each channel is stored as round(x * 255). Out-of-range input is masked to
    its byte, not rejected; alpha keeps only its top 7 bits.
    """
    scalar = is_scalar(L, A, B, alpha)
    bits = pack(quantize(L), quantize(A), quantize(B), quantize(alpha))
    return as_packed(bits, scalar)


def decode(packed):
    """Unpack into (L, A, B, alpha) floats.

    L, A and B are byte / 255; alpha is byte / 254 so that opaque is 1.0.
    """
    scalar = is_scalar(packed)
    l, a, b, alpha = unpack(packed)
    return (
        as_float(l / 255.0, scalar),
        as_float(a / 255.0, scalar),
        as_float(b / 255.0, scalar),
        as_float(alpha / 254.0, scalar),
    )


def from_bytes(l, a, b, alpha=0xFE):
    """Pack raw channel bytes (scalars or arrays). The alpha LSB is dropped."""
    return as_packed(pack(l, a, b, alpha), is_scalar(l, a, b, alpha))


def channel_l(packed):
    """L channel in [0, 1]."""
    return as_float(unpack(packed)[0] / 255.0, is_scalar(packed))


def channel_a(packed):
    """A channel in [0, 1]; 0.5 is neutral."""
    return as_float(unpack(packed)[1] / 255.0, is_scalar(packed))


def channel_b(packed):
    """B channel in [0, 1]; 0.5 is neutral."""
    return as_float(unpack(packed)[2] / 255.0, is_scalar(packed))


def alpha(packed):
    """Alpha in [0, 1]."""
    return as_float(unpack(packed)[3] / 254.0, is_scalar(packed))


# === Float bit pattern ===

def to_float(packed):
    """Reinterpret packed colors as float32 bit patterns."""
    floats = as_bits(packed).view(np.float32)
    if is_scalar(packed):
        return float(floats)
    return floats


def from_float(value):
    """Reinterpret float32 bit patterns as packed colors."""
    bits = np.asarray(value, dtype=np.float32).view(np.uint32)
    return as_packed(bits, is_scalar(value))
