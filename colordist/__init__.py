"""colordist: perceptual color values and color difference.

Immutable RGB/LAB color values, conversions between them (CIE XYZ, D65,
sRGB companding) and two perceptual distances: CIEDE2000 and Euclidean
distance in Oklab.

Architecture layers (strict one-way dependency):
    scripts/ → colordist/compare.py → colordist/colors/ → colordist/utils/

Key invariants:
    - Colors are immutable; conversions return new values
    - Only RGB and LAB are public spaces; Oklab exists for distance only
    - Colorimetric constants live once, in colordist.utils.color
    - YAML-only configs, validated with pydantic
"""

__version__ = "0.3.0"

from .colors import (
    Color,
    ColorSpace,
    cie2000_distance,
    from_argb_int,
    from_lab,
    from_rgb,
    from_rgb_int,
    oklab_distance,
    parse_color,
    to_argb_int,
    to_lab,
    to_rgb,
)

__all__ = [
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
