"""Color values, conversions and perceptual distance.

This package provides the scalar API on top of colordist.utils.color:
    - Color value type and ColorSpace tag (value)
    - 8-bit and ARGB packing (packing)
    - CIEDE2000 and Oklab distance (distance)
    - Color string parsing (parsing)

Convenience imports:
    from colordist.colors import from_rgb_int, cie2000_distance
"""

from . import distance
from . import packing
from . import parsing
from . import value

from .distance import cie2000_distance, oklab_distance
from .parsing import parse_color
from .value import (
    Color,
    ColorSpace,
    from_argb_int,
    from_lab,
    from_rgb,
    from_rgb_int,
    to_argb_int,
    to_lab,
    to_rgb,
)

__all__ = [
    # Modules
    'distance',
    'packing',
    'parsing',
    'value',
    # Direct exports
    'Color',
    'ColorSpace',
    'cie2000_distance',
    'from_argb_int',
    'from_lab',
    'from_rgb',
    'from_rgb_int',
    'oklab_distance',
    'parse_color',
    'to_argb_int',
    'to_lab',
    'to_rgb',
]
