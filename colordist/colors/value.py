"""Immutable color value tagged with its color space.

A Color holds four floats and a ColorSpace tag:
    - RGB: red, green, blue, alpha, gamma-encoded sRGB in [0, 1]
    - LAB: L [0, 100], a, b (nominally [-128, 127]), alpha [0, 1]

The tag alone decides how c1..c4 are read. ColorSpace has exactly two
members and every dispatch handles both; there is no fallback branch.

Equality and hashing compare the raw IEEE-754 bit patterns of all four
components plus the tag. 0.0 and -0.0 differ; identical NaNs are equal.
An RGB color never equals the LAB color that looks the same.

Conversions always return a new Color. Converting to the current space
returns an equal copy without touching the conversion engine.

Usage:
    from colordist.colors import from_rgb_int

    red = from_rgb_int(255, 0, 0, 255)
    red_lab = red.to_lab()
    red.cie2000_distance(red_lab)  # 0.0
"""

import dataclasses
import enum
import struct
from dataclasses import dataclass
from typing import Tuple

import torch

from colordist.utils import color as colorimetry

from . import packing


class ColorSpace(enum.Enum):
    """Closed set of public color spaces."""
    RGB = "RGB"
    LAB = "LAB"


_CHANNEL_NAMES = {
    ColorSpace.RGB: ("red", "green", "blue"),
    ColorSpace.LAB: ("L", "a", "b"),
}


def _bits(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _as_tensor(c1: float, c2: float, c3: float) -> torch.Tensor:
    return torch.tensor([c1, c2, c3], dtype=torch.float64)


@dataclass(frozen=True, eq=False)
class Color:
    """Four float components and the space that gives them meaning.

    Prefer the factories (from_rgb, from_rgb_int, from_argb_int, from_lab)
    over calling the constructor directly.
    """
    c1: float
    c2: float
    c3: float
    c4: float
    space: ColorSpace

    def __post_init__(self):
        if not isinstance(self.space, ColorSpace):
            raise ValueError(f"space must be a ColorSpace, got {self.space!r}")
        for name in ("c1", "c2", "c3", "c4"):
            object.__setattr__(self, name, float(getattr(self, name)))

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, alpha: float = 1.0) -> "Color":
        return cls(r, g, b, alpha, ColorSpace.RGB)

    @classmethod
    def from_rgb_int(cls, r: int, g: int, b: int, alpha: int = 255) -> "Color":
        return cls(
            packing.int_to_component(r),
            packing.int_to_component(g),
            packing.int_to_component(b),
            packing.int_to_component(alpha),
            ColorSpace.RGB,
        )

    @classmethod
    def from_argb_int(cls, argb: int) -> "Color":
        a, r, g, b = packing.unpack_argb(argb)
        return cls.from_rgb_int(r, g, b, a)

    @classmethod
    def from_lab(cls, l: float, a: float, b: float, alpha: float = 1.0) -> "Color":
        return cls(l, a, b, alpha, ColorSpace.LAB)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def channels(self) -> Tuple[float, float, float]:
        """The three color components, without alpha."""
        return (self.c1, self.c2, self.c3)

    @property
    def alpha(self) -> float:
        return self.c4

    def copy(self) -> "Color":
        return dataclasses.replace(self)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_rgb(self) -> "Color":
        """Return this color in RGB, clamped to the unit cube."""
        if self.space is ColorSpace.RGB:
            return self.copy()
        rgb = colorimetry.lab_to_srgb(_as_tensor(*self.channels)).tolist()
        return Color(rgb[0], rgb[1], rgb[2], self.c4, ColorSpace.RGB)

    def to_lab(self) -> "Color":
        """Return this color in CIE Lab (D65)."""
        if self.space is ColorSpace.LAB:
            return self.copy()
        lab = colorimetry.srgb_to_lab(_as_tensor(*self.channels)).tolist()
        return Color(lab[0], lab[1], lab[2], self.c4, ColorSpace.LAB)

    def to_oklab(self) -> Tuple[float, float, float, float]:
        """Project into Oklab as (L, a, b, alpha).

        Oklab is not a Color space; the tuple exists for distance only.
        Lab colors pass through clamped sRGB first.
        """
        if self.space is ColorSpace.RGB:
            ok = colorimetry.srgb_to_oklab(_as_tensor(*self.channels))
        else:
            ok = colorimetry.lab_to_oklab(_as_tensor(*self.channels))
        L, a, b = ok.tolist()
        return (L, a, b, self.c4)

    def to_argb_int(self) -> int:
        """Pack as unsigned 32-bit AARRGGBB, truncating each channel."""
        rgb = self if self.space is ColorSpace.RGB else self.to_rgb()
        return packing.pack_argb(
            packing.component_to_int(rgb.c4),
            packing.component_to_int(rgb.c1),
            packing.component_to_int(rgb.c2),
            packing.component_to_int(rgb.c3),
        )

    def to_hex(self) -> str:
        """Render as '#AARRGGBB' via to_argb_int."""
        return packing.format_hex(self.to_argb_int())

    # ------------------------------------------------------------------
    # Distance
    # ------------------------------------------------------------------

    def cie2000_distance(self, other: "Color", **weights: float) -> float:
        from .distance import cie2000_distance
        return cie2000_distance(self, other, **weights)

    def oklab_distance(self, other: "Color") -> float:
        from .distance import oklab_distance
        return oklab_distance(self, other)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def _key(self) -> Tuple:
        return (self.space, _bits(self.c1), _bits(self.c2), _bits(self.c3), _bits(self.c4))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        n1, n2, n3 = _CHANNEL_NAMES[self.space]
        return (
            f"{self.space.value}({n1}={self.c1}, {n2}={self.c2}, "
            f"{n3}={self.c3}, alpha={self.c4})"
        )


# Module-level API mirroring the methods

def from_rgb(r: float, g: float, b: float, alpha: float = 1.0) -> Color:
    """Create an RGB color from [0,1] floats."""
    return Color.from_rgb(r, g, b, alpha)


def from_rgb_int(r: int, g: int, b: int, alpha: int = 255) -> Color:
    """Create an RGB color from [0,255] integers (each divided by 255)."""
    return Color.from_rgb_int(r, g, b, alpha)


def from_argb_int(argb: int) -> Color:
    """Create an RGB color from a packed AARRGGBB integer."""
    return Color.from_argb_int(argb)


def from_lab(l: float, a: float, b: float, alpha: float = 1.0) -> Color:
    """Create a CIE Lab color."""
    return Color.from_lab(l, a, b, alpha)


def to_rgb(color: Color) -> Color:
    return color.to_rgb()


def to_lab(color: Color) -> Color:
    return color.to_lab()


def to_argb_int(color: Color) -> int:
    return color.to_argb_int()
