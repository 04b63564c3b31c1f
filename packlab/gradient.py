"""Gradients between packed Oklab colors.

Every in-between color is a bytewise lerp followed by limit_to_gamut(), so
gradients never leave the displayable range. The last color of a gradient
is always the final stop exactly as given.
"""

from typing import Sequence

import numpy as np

from packlab.edit import lerp_colors
from packlab.gamut import limit_to_gamut
from packlab.interpolation import Interpolation, get_interpolation, linear
from packlab.packed import PackedColor


def _curve(interpolation: Interpolation | str) -> Interpolation:
    if isinstance(interpolation, str):
        return get_interpolation(interpolation)
    return interpolation


def _partial(start, end, steps: int, interpolation: Interpolation) -> list[PackedColor]:
    """``steps`` colors from start toward end, excluding end itself."""
    change = interpolation(np.arange(steps, dtype=np.float64) / steps)
    colors = limit_to_gamut(lerp_colors(PackedColor(start), PackedColor(end), change))
    return [PackedColor(int(c)) for c in colors]


def make_gradient(
    start: int,
    end: int,
    steps: int,
    interpolation: Interpolation | str = linear,
) -> list[PackedColor]:
    """Build a gradient of ``steps`` colors from start to end.

    Args:
        start: First packed color
        end: Last packed color (returned exactly as the final element)
        steps: Number of colors; <= 0 gives an empty list
        interpolation: Easing curve, or the name of a built-in one

    Returns:
        List of PackedColor
    """
    if steps <= 0:
        return []
    if steps == 1:
        return [PackedColor(start)]
    return _partial(start, end, steps - 1, _curve(interpolation)) + [PackedColor(end)]


def gradient_chain(
    chain: Sequence[int],
    steps: int,
    interpolation: Interpolation | str = linear,
) -> list[PackedColor]:
    """Build a gradient of ``steps`` colors running through every stop in order.

    The curve is applied across the whole chain, not per segment. Positions
    are spaced i / (steps - 1), not i / steps, so the last segment is not
    squeezed and every stop lands on an exact index when steps - 1 is a
    multiple of len(chain) - 1.
    """
    if steps <= 0 or len(chain) == 0:
        return []
    if steps == 1 or len(chain) == 1:
        return [PackedColor(chain[0])]

    stops = np.asarray([PackedColor(c) for c in chain], dtype=np.uint32)
    splits = len(chain) - 1
    change = _curve(interpolation)(np.arange(steps - 1, dtype=np.float64) / (steps - 1))
    position = np.clip(change * splits, 0.0, splits - 1e-6)
    index = position.astype(np.int64)
    colors = limit_to_gamut(lerp_colors(stops[index], stops[index + 1], position - index))
    return [PackedColor(int(c)) for c in colors] + [PackedColor(chain[-1])]


def append_gradient(
    appending: list,
    start: int,
    end: int,
    steps: int,
    interpolation: Interpolation | str = linear,
) -> list:
    """Extend ``appending`` with make_gradient(...) and return it."""
    appending.extend(make_gradient(start, end, steps, interpolation))
    return appending


def append_gradient_chain(
    appending: list,
    chain: Sequence[int],
    steps: int,
    interpolation: Interpolation | str = linear,
) -> list:
    """Extend ``appending`` with gradient_chain(...) and return it."""
    appending.extend(gradient_chain(chain, steps, interpolation))
    return appending
