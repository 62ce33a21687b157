"""Repaint engine.

Turns the dot grid's pending repaint work into surface calls. One call to
:meth:`RepaintEngine.paint` is one frame.
"""

import logging
import math
from typing import get_args

from ..core.config import DrawMode
from ..core.errors import ConfigurationError
from .buffer import Clean, DotGrid, FullyDirty
from .surface import Surface

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "rgb(60,60,60)"

# Dot radius in circle mode is dot_size / CIRCLE_RATIO
CIRCLE_RATIO = 2.5


class RepaintEngine:
    """Paints dirty dots of a grid onto a surface.

    A fully dirty grid repaints the background and every dot. A partially
    dirty grid erases and repaints only the changed dots. A clean grid
    issues no surface calls at all.
    """

    def __init__(
        self,
        grid: DotGrid,
        surface: Surface,
        dot_size: int = 20,
        draw_mode: DrawMode = "circle",
        background: str = DEFAULT_BACKGROUND,
    ) -> None:
        """Initialize the engine.

        Args:
            grid: Dot grid to read from
            surface: Surface to paint on
            dot_size: Pixel footprint of one dot
            draw_mode: "circle" for inset discs, "rectangle" for full squares
            background: Fill style of the area around and between dots

        Raises:
            ConfigurationError: If draw_mode or dot_size is invalid
        """
        if draw_mode not in get_args(DrawMode):
            raise ConfigurationError(
                "Unknown draw mode",
                details={"draw_mode": draw_mode, "allowed": ", ".join(get_args(DrawMode))},
            )
        if dot_size < 1:
            raise ConfigurationError("Dot size must be positive", details={"dot_size": dot_size})
        self._grid = grid
        self._surface = surface
        self._dot_size = dot_size
        self._draw_mode = draw_mode
        self._background = background
        self._frames = 0

    @property
    def dot_size(self) -> int:
        return self._dot_size

    @property
    def draw_mode(self) -> DrawMode:
        return self._draw_mode

    @property
    def background(self) -> str:
        return self._background

    @property
    def frames(self) -> int:
        """Number of cycles that issued surface calls."""
        return self._frames

    def paint(self) -> int:
        """Run one repaint cycle.

        Returns:
            Number of dots painted
        """
        state = self._grid.drain()
        if isinstance(state, Clean):
            return 0

        cells = self._grid.cells
        try:
            if isinstance(state, FullyDirty):
                self._surface.fill_rect(
                    0, 0, self._surface.width, self._surface.height, self._background
                )
                for index, style in enumerate(cells):
                    self._paint_dot(index, style)
                count = len(cells)
            else:
                for index in state.indices:
                    self._erase_dot(index)
                    self._paint_dot(index, cells[index])
                count = len(state.indices)
        except Exception:
            # Retry the whole cycle on the next tick
            self._grid.restore(state)
            raise

        self._frames += 1
        logger.debug(
            "Painted frame %d: %d dots (%s)",
            self._frames,
            count,
            "full" if isinstance(state, FullyDirty) else "partial",
        )
        return count

    def dot_origin(self, index: int) -> tuple[int, int]:
        """Pixel origin of the dot at a flat index."""
        column, row = self._grid.position(index)
        return column * self._dot_size, row * self._dot_size

    def _erase_dot(self, index: int) -> None:
        px, py = self.dot_origin(index)
        self._surface.fill_rect(px, py, self._dot_size, self._dot_size, self._background)

    def _paint_dot(self, index: int, style: str) -> None:
        px, py = self.dot_origin(index)
        size = self._dot_size
        if self._draw_mode == "circle":
            self._surface.fill_arc(
                px + size / 2,
                py + size / 2,
                size / CIRCLE_RATIO,
                0,
                2 * math.pi,
                style,
            )
        else:
            self._surface.fill_rect(px, py, size, size, style)
