"""Dot grid buffer.

Holds the color of every dot in a flat list indexed by ``y * width + x``
together with the pending repaint work, tracked as one of three states:

- ``CLEAN``: nothing to repaint
- ``FULLY_DIRTY``: repaint the whole surface (after construction or clear)
- ``PartiallyDirty``: repaint only the listed dot indices

A full repaint always covers any pending per-dot work, so marking a dot on a
fully dirty grid leaves the state unchanged.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from ..core.errors import ValidationError
from .color import DEFAULT, Color, ColorLike, as_color, resolve

logger = logging.getLogger(__name__)

DEFAULT_OFF = "rgb(50,50,50)"

Shape = Sequence[Sequence[int]]


@dataclass(frozen=True)
class Clean:
    """No repaint pending."""


@dataclass(frozen=True)
class FullyDirty:
    """Whole grid must be repainted."""


@dataclass
class PartiallyDirty:
    """Only the listed dot indices must be repainted."""

    indices: set[int] = field(default_factory=set)


DirtyState = Union[Clean, FullyDirty, PartiallyDirty]

CLEAN = Clean()
FULLY_DIRTY = FullyDirty()


class DotGrid:
    """Fixed-size grid of dots with dirty tracking.

    Out-of-range coordinates never touch the backing list. By default they
    are ignored; with ``strict_bounds`` they raise ValidationError.

    Usage:
        grid = DotGrid(4, 4)
        grid.set(1, 1, "rgb(1,2,3)")
        grid.fill(0, 0, 2, 2, (255, 0, 0))
        state = grid.drain()
    """

    def __init__(
        self,
        width: int,
        height: int,
        off: str = DEFAULT_OFF,
        strict_bounds: bool = False,
    ) -> None:
        """Initialize an all-off grid.

        Args:
            width: Number of dot columns
            height: Number of dot rows
            off: Fill style of an unlit dot
            strict_bounds: Raise instead of ignoring out-of-range writes

        Raises:
            ValidationError: If a dimension is negative
        """
        if width < 0 or height < 0:
            raise ValidationError(
                "Grid dimensions must not be negative",
                details={"width": width, "height": height},
            )
        self._width = width
        self._height = height
        self._off = off
        self._strict_bounds = strict_bounds
        self._cells: list[str] = []
        self._dirty: DirtyState = FULLY_DIRTY
        self.clear()

    @property
    def width(self) -> int:
        """Number of dot columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of dot rows."""
        return self._height

    @property
    def off(self) -> str:
        """Fill style of an unlit dot."""
        return self._off

    @property
    def cells(self) -> tuple[str, ...]:
        """Snapshot of every dot's fill style in index order."""
        return tuple(self._cells)

    @property
    def dirty(self) -> DirtyState:
        """Pending repaint work."""
        return self._dirty

    @property
    def is_dirty(self) -> bool:
        """Check if a repaint is pending."""
        return not isinstance(self._dirty, Clean)

    def __len__(self) -> int:
        return len(self._cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def index(self, x: int, y: int) -> int:
        """Flat index of dot ``(x, y)``."""
        return y * self._width + x

    def position(self, index: int) -> tuple[int, int]:
        """Grid ``(column, row)`` of a flat index."""
        return index % self._width, index // self._width

    def get(self, x: int, y: int) -> str:
        """Get the fill style stored at ``(x, y)``.

        Raises:
            ValidationError: If the coordinates are outside the grid
        """
        if not self.in_bounds(x, y):
            raise self._bounds_error(x, y)
        return self._cells[self.index(x, y)]

    def clear(self) -> None:
        """Turn every dot off and schedule a full repaint."""
        self._cells = [self._off] * (self._width * self._height)
        self._dirty = FULLY_DIRTY

    def set(self, x: int, y: int, color: ColorLike = None) -> bool:
        """Set a single dot.

        Args:
            x: Column
            y: Row
            color: Dot color; None uses the off style

        Returns:
            True if the dot was written, False if the call was dropped

        Raises:
            ValidationError: Out-of-range coordinates in strict mode
        """
        resolved = as_color(color)
        if resolved is None:
            logger.debug("Dropping invalid color %r at (%s, %s)", color, x, y)
            return False
        return self._write(x, y, resolved)

    def draw(
        self,
        x: int,
        y: int,
        shape: Shape,
        color: ColorLike = None,
        fill: bool = False,
    ) -> bool:
        """Composite a bitmap onto the grid with its top-left at ``(x, y)``.

        Each row of ``shape`` is a sequence of bits. Lit bits paint ``color``.
        Unlit bits erase to the off style when ``fill`` is set and are left
        untouched otherwise. Parts of the shape outside the grid are clipped.

        Returns:
            True if at least one dot was painted
        """
        lit = as_color(color)
        if lit is None:
            logger.debug("Dropping invalid color %r for shape at (%s, %s)", color, x, y)
            if not fill:
                return False
        painted = False
        for i, row in enumerate(shape):
            target_y = y + i
            if not 0 <= target_y < self._height:
                continue
            if isinstance(row, str) or not isinstance(row, Sequence):
                continue
            for j, bit in enumerate(row):
                target_x = x + j
                if not 0 <= target_x < self._width:
                    continue
                if bit == 1:
                    if lit is not None:
                        painted = self._write(target_x, target_y, lit) or painted
                elif fill:
                    painted = self._write(target_x, target_y, DEFAULT) or painted
        return painted

    def fill(self, x: int, y: int, w: int, h: int, color: ColorLike = None) -> None:
        """Paint every dot of the rectangle ``[x, x+w) x [y, y+h)``."""
        resolved = as_color(color)
        if resolved is None:
            logger.debug("Dropping invalid color %r for fill", color)
            return
        for i in range(x, x + w):
            for j in range(y, y + h):
                self._write(i, j, resolved)

    def rect(self, x: int, y: int, w: int, h: int, color: ColorLike = None) -> None:
        """Paint the border dots of the rectangle ``[x, x+w) x [y, y+h)``."""
        resolved = as_color(color)
        if resolved is None:
            logger.debug("Dropping invalid color %r for rect", color)
            return
        for i in range(x, x + w):
            for j in range(y, y + h):
                if j == y or j == y + h - 1 or i == x or i == x + w - 1:
                    self._write(i, j, resolved)

    def drain(self) -> DirtyState:
        """Return the pending repaint work and mark the grid clean."""
        state, self._dirty = self._dirty, CLEAN
        return state

    def restore(self, state: DirtyState) -> None:
        """Put drained repaint work back, merged with anything marked since."""
        if isinstance(state, FullyDirty):
            self._dirty = FULLY_DIRTY
        elif isinstance(state, PartiallyDirty):
            for index in state.indices:
                self._mark(index)

    def is_pending(self, index: int) -> bool:
        """Check if the dot at a flat index will be painted on the next repaint."""
        if isinstance(self._dirty, FullyDirty):
            return 0 <= index < len(self._cells)
        if isinstance(self._dirty, PartiallyDirty):
            return index in self._dirty.indices
        return False

    def _write(self, x: int, y: int, color: Color) -> bool:
        if not self.in_bounds(x, y):
            if self._strict_bounds:
                raise self._bounds_error(x, y)
            logger.debug("Ignoring out-of-range dot (%s, %s)", x, y)
            return False
        index = self.index(x, y)
        self._cells[index] = resolve(color, self._off)
        self._mark(index)
        return True

    def _mark(self, index: int) -> None:
        if isinstance(self._dirty, FullyDirty):
            return
        if isinstance(self._dirty, Clean):
            self._dirty = PartiallyDirty()
        self._dirty.indices.add(index)

    def _bounds_error(self, x: int, y: int) -> ValidationError:
        return ValidationError(
            "Dot coordinates out of range",
            details={"x": x, "y": y, "width": self._width, "height": self._height},
        )
