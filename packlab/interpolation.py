"""Easing curves for gradients.

Each curve maps [0, 1] onto [0, 1] with f(0) == 0 and f(1) == 1, and works on
floats or numpy arrays.
"""

from typing import Callable

import numpy as np

from packlab.trig import cos_turns, sin_turns

Interpolation = Callable[[np.ndarray], np.ndarray]


def linear(a):
    return np.asarray(a, dtype=np.float64)


def smooth(a):
    """Aka "smoothstep"."""
    a = np.asarray(a, dtype=np.float64)
    return a * a * (3.0 - 2.0 * a)


def smooth2(a):
    """smoothstep applied twice."""
    return smooth(smooth(a))


def smoother(a):
    """Perlin's smootherstep."""
    a = np.asarray(a, dtype=np.float64)
    return a * a * a * (a * (a * 6.0 - 15.0) + 10.0)


def pow_in(power: int) -> Interpolation:
    """Slow, then fast."""
    def curve(a):
        return np.asarray(a, dtype=np.float64) ** power
    return curve


def pow_out(power: int) -> Interpolation:
    """Fast, then slow."""
    sign = -1.0 if power % 2 == 0 else 1.0

    def curve(a):
        return (np.asarray(a, dtype=np.float64) - 1.0) ** power * sign + 1.0
    return curve


def pow_in_out(power: int) -> Interpolation:
    """Slow at both ends, fast in the middle."""
    divisor = -2.0 if power % 2 == 0 else 2.0

    def curve(a):
        a = np.asarray(a, dtype=np.float64)
        return np.where(
            a <= 0.5,
            (a * 2.0) ** power / 2.0,
            ((a - 1.0) * 2.0) ** power / divisor + 1.0,
        )
    return curve


def sine(a):
    return (1.0 - cos_turns(np.asarray(a, dtype=np.float64) * 0.5)) * 0.5


def sine_in(a):
    return 1.0 - cos_turns(np.asarray(a, dtype=np.float64) * 0.25)


def sine_out(a):
    return sin_turns(np.asarray(a, dtype=np.float64) * 0.25)


def circle(a):
    a = np.asarray(a, dtype=np.float64)
    lo = (1.0 - np.sqrt(np.maximum(1.0 - 4.0 * a * a, 0.0))) / 2.0
    b = a * 2.0 - 2.0
    hi = (np.sqrt(np.maximum(1.0 - b * b, 0.0)) + 1.0) / 2.0
    return np.where(a <= 0.5, lo, hi)


# Built-in curves
INTERPOLATIONS: dict[str, Interpolation] = {
    "linear": linear,
    "smooth": smooth,
    "smooth2": smooth2,
    "smoother": smoother,
    "pow2": pow_in_out(2),
    "pow2_in": pow_in(2),
    "pow2_out": pow_out(2),
    "pow3": pow_in_out(3),
    "pow3_in": pow_in(3),
    "pow3_out": pow_out(3),
    "sine": sine,
    "sine_in": sine_in,
    "sine_out": sine_out,
    "circle": circle,
}


def get_interpolation(name: str) -> Interpolation:
    """Get a built-in curve by name."""
    try:
        return INTERPOLATIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown interpolation: {name!r}. Available: {', '.join(INTERPOLATIONS)}"
        ) from None


def list_interpolations() -> list[str]:
    """List built-in curve names."""
    return list(INTERPOLATIONS.keys())
