"""Dot colors.

A dot color is one of three variants:

- ``Named("red")`` / ``Named("#ff0000")``: a fill-style string passed through
- ``Channels(r, g, b)``: numeric channels rendered as ``rgb(r,g,b)``
- ``DEFAULT``: the display's "off" style

Plain strings, 3-sequences and ``None`` are accepted at the API boundary and
converted once by :func:`as_color`.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Union


@dataclass(frozen=True)
class Named:
    """Fill-style string (CSS color name, hex or ``rgb(...)``)."""

    style: str

    def to_style(self) -> str:
        return self.style


@dataclass(frozen=True)
class Channels:
    """RGB channel triple."""

    r: float
    g: float
    b: float

    def to_style(self) -> str:
        """Convert to an ``rgb(r,g,b)`` fill style."""
        return "rgb(" + ",".join(_format_channel(c) for c in (self.r, self.g, self.b)) + ")"

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Default:
    """Marker for the display's unlit color."""


DEFAULT = Default()

Color = Union[Named, Channels, Default]
ColorLike = Union[Color, str, Sequence[float], None]


def _format_channel(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_channel(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def as_color(value: ColorLike) -> Color | None:
    """Convert a user supplied color into a :data:`Color` variant.

    Args:
        value: Color variant, fill-style string, ``(r, g, b)`` sequence or None

    Returns:
        The color variant, or None if ``value`` has no valid color shape
    """
    if isinstance(value, (Named, Channels, Default)):
        return value
    if value is None:
        return DEFAULT
    if isinstance(value, str):
        return Named(value)
    if isinstance(value, Sequence) and len(value) == 3 and all(_is_channel(c) for c in value):
        return Channels(*value)
    return None


def resolve(color: Color, off: str) -> str:
    """Resolve a color variant to the fill style stored in a dot.

    Args:
        color: Color variant
        off: Fill style used for :data:`DEFAULT`

    Returns:
        Fill-style string
    """
    if isinstance(color, Default):
        return off
    return color.to_style()
