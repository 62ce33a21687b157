"""Dot-matrix display.

Ties together the dot grid, the repaint engine, a drawing surface and the
recurring repaint task.
"""

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from ..core.config import DisplayConfig
from ..core.errors import ConfigurationError, DotMatrixError
from .buffer import DirtyState, DotGrid, Shape
from .color import ColorLike
from .engine import RepaintEngine
from .scheduler import Scheduler, TaskHandle
from .surface import Surface

if TYPE_CHECKING:
    from ..text.printer import TextPrinter

logger = logging.getLogger(__name__)


class DotMatrixDisplay:
    """Simulated LED dot-matrix display on a drawing surface.

    The grid size is derived from the surface size and the dot size. Drawing
    calls change the grid immediately; the surface catches up on the next
    scheduled repaint.

    Usage:
        display = DotMatrixDisplay(surface, scheduler, dot_size=10)
        display.rect(0, 0, display.dot_width, display.dot_height, "red")
        ...
        display.close()
    """

    def __init__(
        self,
        surface: Surface,
        scheduler: Scheduler,
        config: DisplayConfig | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize the display and start repainting.

        Args:
            surface: Surface to paint on
            scheduler: Scheduler driving the repaint
            config: Display configuration (None = defaults)
            **overrides: DisplayConfig fields overriding ``config``
        """
        config = config or DisplayConfig()
        if overrides:
            try:
                config = DisplayConfig.model_validate({**config.model_dump(), **overrides})
            except PydanticValidationError as e:
                raise ConfigurationError(
                    "Invalid display options",
                    details={"options": ", ".join(sorted(overrides))},
                    cause=e,
                ) from e
        self._config = config

        self._surface = surface
        self._grid: DotGrid | None = DotGrid(
            surface.width // config.dot_size,
            surface.height // config.dot_size,
            off=config.off,
            strict_bounds=config.strict_bounds,
        )
        self._engine: RepaintEngine | None = RepaintEngine(
            self._grid,
            surface,
            dot_size=config.dot_size,
            draw_mode=config.draw_mode,
            background=config.background,
        )
        self._task: TaskHandle | None = scheduler.schedule(self._engine.paint, config.refresh)

        logger.info(
            "Display started: %dx%d dots, dot_size=%d, mode=%s, refresh=%d ms",
            self._grid.width,
            self._grid.height,
            config.dot_size,
            config.draw_mode,
            config.refresh,
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def config(self) -> DisplayConfig:
        return self._config

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def grid(self) -> DotGrid:
        """The dot grid.

        Raises:
            DotMatrixError: If the display has been closed
        """
        if self._grid is None:
            raise DotMatrixError("Display is closed")
        return self._grid

    @property
    def engine(self) -> RepaintEngine:
        if self._engine is None:
            raise DotMatrixError("Display is closed")
        return self._engine

    @property
    def dot_width(self) -> int:
        return self.grid.width

    @property
    def dot_height(self) -> int:
        return self.grid.height

    @property
    def dirty(self) -> DirtyState:
        return self.grid.dirty

    @property
    def closed(self) -> bool:
        return self._grid is None

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Turn every dot off."""
        self.grid.clear()

    def set(self, x: int, y: int, color: ColorLike = None) -> bool:
        """Set a single dot. See :meth:`DotGrid.set`."""
        return self.grid.set(x, y, color)

    def get(self, x: int, y: int) -> str:
        return self.grid.get(x, y)

    def draw(
        self,
        x: int,
        y: int,
        shape: Shape,
        color: ColorLike = None,
        fill: bool = False,
    ) -> bool:
        """Composite a bitmap. See :meth:`DotGrid.draw`."""
        return self.grid.draw(x, y, shape, color=color, fill=fill)

    def fill(self, x: int, y: int, w: int, h: int, color: ColorLike = None) -> None:
        self.grid.fill(x, y, w, h, color)

    def rect(self, x: int, y: int, w: int, h: int, color: ColorLike = None) -> None:
        self.grid.rect(x, y, w, h, color)

    def printer(self) -> "TextPrinter":
        """Create a text printer drawing on this display."""
        from ..text.printer import TextPrinter

        return TextPrinter(self.grid)

    def paint(self) -> int:
        """Repaint now instead of waiting for the next tick.

        Returns:
            Number of dots painted
        """
        return self.engine.paint()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Cancel the repaint task and release the grid.

        Safe to call more than once.
        """
        if self._grid is None:
            return
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._engine = None
        self._grid = None
        logger.info("Display closed")

    def __enter__(self) -> "DotMatrixDisplay":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
