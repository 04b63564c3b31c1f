"""Packed Oklab colors: codec, RGB conversion, gamut-aware edits.

This package provides:
- PackedColor: one Oklab color (L, A, B, alpha) in a 32-bit word that also
  travels as a float32 bit pattern
- RGB <-> Oklab conversion through the packed form
- Gamut queries and clamping backed by a fixed boundary table
- Channel edits, polar views, contrast helpers, random edits and gradients
- Vectorized: every operation takes Python ints or numpy arrays

Example:
    from packlab import from_rgba8888, to_rgba8888, enrich, make_gradient

    teal = from_rgba8888(0x008080FF)
    vivid = enrich(teal, 0.5)            # always in gamut
    rgba = to_rgba8888(vivid)

    ramp = make_gradient(teal, vivid, 8, "smooth")
"""

from .packed import (
    PackedColor,
    encode,
    decode,
    from_bytes,
    channel_l,
    channel_a,
    channel_b,
    alpha,
    to_float,
    from_float,
)

from .oklab import (
    forward_light,
    reverse_light,
    from_rgba,
    from_rgba8888,
    to_rgba,
    to_rgba8888,
    red,
    green,
    blue,
)

from .gamut_table import GamutTable, GamutTableError, get_gamut_table

from .gamut import (
    gamut_index,
    in_gamut,
    in_gamut_channels,
    limit_to_gamut,
    maximize_saturation,
    chroma,
    chroma_limit,
)

from .edit import (
    lighten,
    darken,
    raise_a,
    lower_a,
    raise_b,
    lower_b,
    blot,
    fade,
    dullen,
    enrich,
    edit_oklab,
    lerp_colors,
    lessen_change,
)

from .polar import (
    hue,
    saturation,
    lightness,
    from_hsl,
    to_edited,
    oklab_hue,
    oklab_saturation,
    oklab_lightness,
    oklab_by_hsl,
    oklab_by_hcl,
)

from .contrast import (
    inverse_lightness,
    differentiate_lightness,
    offset_lightness,
    random_edit,
    random_color,
)

from .interpolation import INTERPOLATIONS, get_interpolation, list_interpolations

from .gradient import make_gradient, gradient_chain, append_gradient, append_gradient_chain

from .trig import sin_turns, cos_turns, atan2_turns

__all__ = [
    # Codec
    'PackedColor',
    'encode',
    'decode',
    'from_bytes',
    'channel_l',
    'channel_a',
    'channel_b',
    'alpha',
    'to_float',
    'from_float',
    # RGB conversion
    'forward_light',
    'reverse_light',
    'from_rgba',
    'from_rgba8888',
    'to_rgba',
    'to_rgba8888',
    'red',
    'green',
    'blue',
    # Gamut
    'GamutTable',
    'GamutTableError',
    'get_gamut_table',
    'gamut_index',
    'in_gamut',
    'in_gamut_channels',
    'limit_to_gamut',
    'maximize_saturation',
    'chroma',
    'chroma_limit',
    # Edits
    'lighten',
    'darken',
    'raise_a',
    'lower_a',
    'raise_b',
    'lower_b',
    'blot',
    'fade',
    'dullen',
    'enrich',
    'edit_oklab',
    'lerp_colors',
    'lessen_change',
    # Polar
    'hue',
    'saturation',
    'lightness',
    'from_hsl',
    'to_edited',
    'oklab_hue',
    'oklab_saturation',
    'oklab_lightness',
    'oklab_by_hsl',
    'oklab_by_hcl',
    # Contrast and sampling
    'inverse_lightness',
    'differentiate_lightness',
    'offset_lightness',
    'random_edit',
    'random_color',
    # Gradients
    'INTERPOLATIONS',
    'get_interpolation',
    'list_interpolations',
    'make_gradient',
    'gradient_chain',
    'append_gradient',
    'append_gradient_chain',
    # Trig
    'sin_turns',
    'cos_turns',
    'atan2_turns',
]
