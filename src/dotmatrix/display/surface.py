"""Drawing surfaces.

The repaint engine only needs two primitives from a surface: fill an
axis-aligned rectangle and fill a circular arc, each with a fill style.
:class:`ImageSurface` implements them on an in-memory Pillow image.
"""

import logging
import math
from functools import lru_cache
from typing import Protocol, runtime_checkable

from PIL import Image, ImageColor, ImageDraw

from ..core.errors import SurfaceError

logger = logging.getLogger(__name__)


@runtime_checkable
class Surface(Protocol):
    """Drawing surface the repaint engine paints on."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, style: str) -> None: ...

    def fill_arc(
        self,
        cx: float,
        cy: float,
        r: float,
        start: float,
        end: float,
        style: str,
    ) -> None: ...


@lru_cache(maxsize=256)
def parse_style(style: str) -> tuple[int, int, int]:
    """Parse a fill style into an RGB tuple with caching.

    Args:
        style: CSS-like color string (``rgb(1,2,3)``, ``#102030``, ``red``)

    Returns:
        RGB tuple

    Raises:
        SurfaceError: If Pillow cannot parse the style
    """
    try:
        return ImageColor.getrgb(style)[:3]
    except ValueError as e:
        raise SurfaceError(
            "Unsupported fill style",
            details={"style": style},
            cause=e,
        ) from e


class ImageSurface:
    """Surface backed by a Pillow RGB image.

    Usage:
        surface = ImageSurface(640, 160)
        display = DotMatrixDisplay(surface, scheduler)
        ...
        surface.image.save("frame.png")
    """

    def __init__(self, width: int, height: int, background: str = "black") -> None:
        """Initialize an image surface.

        Args:
            width: Surface width in pixels
            height: Surface height in pixels
            background: Initial fill style of the image
        """
        self._image = Image.new("RGB", (width, height), parse_style(background))
        self._draw = ImageDraw.Draw(self._image)

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def image(self) -> Image.Image:
        """Copy of the current frame."""
        return self._image.copy()

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Get the RGB value of a single pixel."""
        return self._image.getpixel((x, y))

    def _color(self, style: str) -> tuple[int, int, int] | None:
        # Like a canvas fillStyle, an unparseable style is ignored
        try:
            return parse_style(style)
        except SurfaceError:
            logger.debug("Ignoring unsupported fill style %r", style)
            return None

    def fill_rect(self, x: float, y: float, w: float, h: float, style: str) -> None:
        """Fill the rectangle ``[x, x+w) x [y, y+h)``."""
        color = self._color(style)
        if color is None or w <= 0 or h <= 0:
            return
        # ImageDraw rectangles include their far edge
        self._draw.rectangle([(x, y), (x + w - 1, y + h - 1)], fill=color)

    def fill_arc(
        self,
        cx: float,
        cy: float,
        r: float,
        start: float,
        end: float,
        style: str,
    ) -> None:
        """Fill a circular sector; angles are in radians."""
        color = self._color(style)
        if color is None:
            return
        bbox = [(cx - r, cy - r), (cx + r, cy + r)]
        if end - start >= 2 * math.pi:
            self._draw.ellipse(bbox, fill=color)
        else:
            self._draw.pieslice(bbox, math.degrees(start), math.degrees(end), fill=color)
