"""Text printing on a dot grid.

Characters are drawn left to right with one blank column between glyphs.
Glyph widths are kept in a side table owned by the printer so font data
passed in by callers is never modified.
"""

import logging

from ..display.buffer import DotGrid
from ..display.color import ColorLike
from .font import FontTable, FrozenGlyph, Glyph, freeze_glyph, glyph_width

logger = logging.getLogger(__name__)


class TextPrinter:
    """Draws strings with a bitmap font onto a dot grid.

    Usage:
        printer = TextPrinter(display.grid)
        printer.update_font(FONT)
        printer.print(0, 0, "HELLO", FONT, color="orange")
    """

    def __init__(self, grid: DotGrid, spacing: int = 1) -> None:
        """Initialize the printer.

        Args:
            grid: Grid to draw on (not owned)
            spacing: Blank columns between characters
        """
        self._grid = grid
        self._spacing = spacing
        self._widths: dict[FrozenGlyph, int] = {}

    @property
    def spacing(self) -> int:
        return self._spacing

    def glyph_width(self, glyph: Glyph) -> int:
        """Cached width of a glyph."""
        key = freeze_glyph(glyph)
        width = self._widths.get(key)
        if width is None:
            width = glyph_width(glyph)
            self._widths[key] = width
        return width

    def update_font(self, font: FontTable) -> None:
        """Compute widths for every glyph of a font not seen before."""
        for glyph in font.values():
            self.glyph_width(glyph)

    def print(
        self,
        x: int,
        y: int,
        text: str,
        font: FontTable,
        color: ColorLike = None,
        fill: bool = False,
    ) -> bool:
        """Draw a string with its top-left corner at ``(x, y)``.

        Characters missing from the font are skipped without advancing.
        Drawing stops once the cursor is past the right edge of the grid.

        Args:
            x: Starting column
            y: Top row
            text: String to draw
            font: Character to glyph mapping
            color: Text color; None uses the off style
            fill: Erase unlit glyph dots to the off style

        Returns:
            True if any character painted at least one dot
        """
        current_x = x
        printed = False
        for char in text:
            if current_x > self._grid.width:
                break
            glyph = font.get(char)
            if glyph is None:
                logger.debug("Skipping character %r", char)
                continue
            if self._grid.draw(current_x, y, glyph, color=color, fill=fill):
                printed = True
            current_x += self.glyph_width(glyph) + self._spacing
        return printed

    def text_width(self, text: str, font: FontTable) -> int:
        """Number of columns a string occupies when printed.

        Trailing spacing after the last character is not counted.
        """
        widths = [self.glyph_width(font[char]) for char in text if char in font]
        if not widths:
            return 0
        return sum(widths) + self._spacing * (len(widths) - 1)
