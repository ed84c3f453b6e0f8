"""Perceptual distance between Color values.

Provides:
    - cie2000_distance(): CIEDE2000 on Lab (operands converted as needed)
    - oklab_distance(): Euclidean distance in Oklab, alpha ignored

Both are symmetric, return exactly 0.0 for identical colors and never
raise for finite inputs. Typical scales:
    - ΔE00 < 1: not perceptible; ΔE00 > 50: unrelated hues
    - Oklab: black to white is 1.0
"""

import torch

from colordist.utils import color as colorimetry

from .value import Color


def _lab_tensor(c: Color) -> torch.Tensor:
    lab = c.to_lab()
    return torch.tensor(lab.channels, dtype=torch.float64)


def cie2000_distance(
    a: Color,
    b: Color,
    k_l: float = 1.0,
    k_c: float = 1.0,
    k_h: float = 1.0,
) -> float:
    """CIEDE2000 color difference between two colors.

    Parameters
    ----------
    a, b : Color
        Operands in any space; RGB operands are converted to Lab (D65)
    k_l, k_c, k_h : float
        Parametric weights for lightness, chroma and hue, default 1.0

    Returns
    -------
    float
        ΔE00 >= 0
    """
    de = colorimetry.delta_e2000(_lab_tensor(a), _lab_tensor(b), kL=k_l, kC=k_c, kH=k_h)
    return float(de)


def oklab_distance(a: Color, b: Color) -> float:
    """Euclidean distance between two colors in Oklab (L, a, b only)."""
    ok_a = torch.tensor(a.to_oklab()[:3], dtype=torch.float64)
    ok_b = torch.tensor(b.to_oklab()[:3], dtype=torch.float64)
    return float(colorimetry.delta_e_oklab(ok_a, ok_b))
