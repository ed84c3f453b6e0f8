"""Compare two colors and report their perceptual distance.

Callable core of scripts/compare_colors.py:
    - compare_colors(a, b, metric, weights) → dict
    - format_report(result, precision) → str

Result dict keys:
    a, b        : {"hex": "#AARRGGBB", "lab": [L, a, b], "space": "RGB"|"LAB"}
    cie2000     : float (metric "cie2000" or "all")
    oklab       : float (metric "oklab" or "all")

Operands may be Color values or strings accepted by parse_color().
"""

import logging
from typing import Any, Dict, Optional, Union

from .colors import Color, cie2000_distance, oklab_distance, parse_color
from .utils.validators import DeltaEWeights

logger = logging.getLogger(__name__)

METRICS = ("cie2000", "oklab", "all")


def _describe(c: Color) -> Dict[str, Any]:
    lab = c.to_lab()
    return {
        "space": c.space.value,
        "hex": c.to_hex(),
        "lab": [lab.c1, lab.c2, lab.c3],
    }


def compare_colors(
    a: Union[Color, str],
    b: Union[Color, str],
    metric: str = "cie2000",
    weights: Optional[DeltaEWeights] = None,
) -> Dict[str, Any]:
    """Compute the requested distance(s) between two colors.

    Parameters
    ----------
    a, b : Color or str
        Colors to compare; strings go through parse_color()
    metric : str
        "cie2000", "oklab" or "all"
    weights : DeltaEWeights, optional
        CIEDE2000 parametric factors; reference conditions when None

    Returns
    -------
    dict
        See module docstring

    Raises
    ------
    ValueError
        If a color string is malformed or metric is unknown
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric: {metric}. Use one of {METRICS}.")

    color_a = parse_color(a) if isinstance(a, str) else a
    color_b = parse_color(b) if isinstance(b, str) else b
    weights = weights or DeltaEWeights()

    result: Dict[str, Any] = {"a": _describe(color_a), "b": _describe(color_b)}

    if metric in ("cie2000", "all"):
        result["cie2000"] = cie2000_distance(
            color_a, color_b, k_l=weights.k_l, k_c=weights.k_c, k_h=weights.k_h
        )
    if metric in ("oklab", "all"):
        result["oklab"] = oklab_distance(color_a, color_b)

    logger.debug(
        "Compared %s vs %s: %s",
        result["a"]["hex"],
        result["b"]["hex"],
        {k: v for k, v in result.items() if k in ("cie2000", "oklab")},
    )
    return result


def format_report(result: Dict[str, Any], precision: int = 4) -> str:
    """Render a compare_colors() result as aligned text lines."""
    lines = []
    for key in ("a", "b"):
        info = result[key]
        L, a, b = info["lab"]
        lines.append(
            f"{key}: {info['hex']}  Lab({L:.{precision}f}, {a:.{precision}f}, {b:.{precision}f})"
        )
    if "cie2000" in result:
        lines.append(f"ΔE00:   {result['cie2000']:.{precision}f}")
    if "oklab" in result:
        lines.append(f"ΔEok:   {result['oklab']:.{precision}f}")
    return "\n".join(lines)
