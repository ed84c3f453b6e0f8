"""Parse color strings from the command line and config files.

Accepted forms:
    #RRGGBB, #AARRGGBB, 0xAARRGGBB    hex, alpha first when present
    rgb(r, g, b) / rgb(r, g, b, a)    0-255 integers
    lab(L, a, b) / lab(L, a, b, alpha) finite floats, alpha in [0, 1]

Everything else raises ValueError naming the accepted forms.
"""

import math
import re

from . import packing
from .value import Color, from_argb_int, from_lab, from_rgb_int

_FUNC_RE = re.compile(r"^(rgb|lab)\s*\(([^)]*)\)$", re.IGNORECASE)

_FORMS = "#RRGGBB, #AARRGGBB, 0xAARRGGBB, rgb(r, g, b[, a]) or lab(L, a, b[, alpha])"


def parse_color(text: str) -> Color:
    """Parse a color string into an RGB or LAB Color."""
    text = text.strip()
    if text.startswith("#") or text[:2].lower() == "0x":
        return from_argb_int(packing.parse_hex(text))

    match = _FUNC_RE.match(text)
    if match is None:
        raise ValueError(f"Unrecognized color {text!r}. Use {_FORMS}.")

    kind = match.group(1).lower()
    parts = [p.strip() for p in match.group(2).split(",")]
    if len(parts) not in (3, 4):
        raise ValueError(f"{kind}() takes 3 or 4 components, got {len(parts)} in {text!r}")

    if kind == "rgb":
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise ValueError(f"rgb() components must be integers 0-255: {text!r}") from None
        return from_rgb_int(*values)

    try:
        values = [float(p) for p in parts]
    except ValueError:
        raise ValueError(f"lab() components must be numbers: {text!r}") from None
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"lab() components must be finite: {text!r}")
    if len(values) == 4 and not 0.0 <= values[3] <= 1.0:
        raise ValueError(f"lab() alpha {values[3]} out of range [0, 1]: {text!r}")
    return from_lab(*values)
