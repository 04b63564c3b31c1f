"""Trigonometry measured in turns (one full circle == 1.0).

Hue indices are computed by multiply-and-truncate, so atan2_turns() must
return values in [0, 1) and never a negative number.
"""

from math import tau

import numpy as np


def sin_turns(turns):
    """Sine of an angle given in turns."""
    return np.sin(np.asarray(turns, dtype=np.float64) * tau)


def cos_turns(turns):
    """Cosine of an angle given in turns."""
    return np.cos(np.asarray(turns, dtype=np.float64) * tau)


def atan2_turns(y, x):
    """Angle of (x, y) in turns, always in [0, 1). atan2_turns(0, 0) == 0."""
    t = np.arctan2(np.asarray(y, dtype=np.float64), np.asarray(x, dtype=np.float64)) / tau
    t = t - np.floor(t)
    # -1e-17 / tau floors to -1 and lands on exactly 1.0
    return np.where(t >= 1.0, 0.0, t)


def wrap_turns(turns):
    """Wrap any angle in turns into [0, 1)."""
    t = np.asarray(turns, dtype=np.float64)
    t = t - np.floor(t)
    return np.where(t >= 1.0, 0.0, t)
