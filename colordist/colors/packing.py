"""8-bit component and ARGB bit packing.

Layout (32-bit unsigned, most significant byte first):
    bits 31-24 alpha | 23-16 red | 15-8 green | 7-0 blue

Float → int uses truncation, floor(c * 255), not round-to-nearest.
This biases every channel slightly downward. Products within float
rounding of an integer snap to it first, so
to_argb_int(from_rgb_int(r, g, b, a)) reproduces the input exactly.

A truncated component outside [0, 255] means a conversion produced an
out-of-range float; that is a bug upstream, so it raises AssertionError
instead of clamping or wrapping.
"""

import math
import re
from typing import Tuple

ARGB_MIN = -(1 << 31)
ARGB_MAX = (1 << 32) - 1
_SNAP_EPS = 1e-9

_HEX_RE = re.compile(r"^(?:#|0[xX])([0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def component_to_int(c: float) -> int:
    """Truncate a [0,1] float component to an 8-bit integer.

    k / 255 * 255 can come out one ulp below k; products that close to an
    integer snap to it before truncating.
    """
    scaled = c * 255.0
    if not math.isfinite(scaled):
        raise AssertionError(f"Component {c!r} is not finite")
    nearest = round(scaled)
    value = nearest if abs(scaled - nearest) <= _SNAP_EPS else math.floor(scaled)
    if not 0 <= value <= 255:
        raise AssertionError(
            f"Component {c!r} packs to {value}, outside [0, 255]"
        )
    return value


def int_to_component(value: int) -> float:
    """Scale an 8-bit integer to a [0,1] float component.

    Raises
    ------
    ValueError
        If value is not an int in [0, 255]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer channel, got {type(value).__name__}: {value!r}")
    if not 0 <= value <= 255:
        raise ValueError(f"Channel value {value} out of range [0, 255]")
    return value / 255.0


def pack_argb(alpha: int, red: int, green: int, blue: int) -> int:
    """Pack four 8-bit channels into an unsigned 32-bit ARGB integer."""
    return alpha << 24 | red << 16 | green << 8 | blue


def unpack_argb(argb: int) -> Tuple[int, int, int, int]:
    """Unpack a 32-bit ARGB integer into (alpha, red, green, blue).

    Signed 32-bit values are accepted and read as their two's-complement
    bit pattern, so -1 unpacks to (255, 255, 255, 255).

    Raises
    ------
    ValueError
        If argb does not fit in 32 bits
    """
    if isinstance(argb, bool) or not isinstance(argb, int):
        raise ValueError(f"Expected integer ARGB value, got {type(argb).__name__}: {argb!r}")
    if not ARGB_MIN <= argb <= ARGB_MAX:
        raise ValueError(f"ARGB value {argb:#x} does not fit in 32 bits")
    return (
        (argb >> 24) & 0xFF,
        (argb >> 16) & 0xFF,
        (argb >> 8) & 0xFF,
        argb & 0xFF,
    )


def parse_hex(text: str) -> int:
    """Parse '#RRGGBB', '#AARRGGBB' or '0xAARRGGBB' into an ARGB integer.

    Six-digit forms are opaque (alpha 0xFF).
    """
    match = _HEX_RE.match(text.strip())
    if match is None:
        raise ValueError(
            f"Invalid hex color {text!r}. Use #RRGGBB, #AARRGGBB or 0xAARRGGBB."
        )
    digits = match.group(1)
    value = int(digits, 16)
    if len(digits) == 6:
        value |= 0xFF000000
    return value


def format_hex(argb: int) -> str:
    """Render an ARGB integer as '#AARRGGBB'."""
    return "#{:08x}".format(argb & ARGB_MAX)
