"""Display subsystem.

Provides:
- DotGrid buffer with dirty tracking
- RepaintEngine painting dirty dots onto a surface
- DotMatrixDisplay owning both plus the repaint task
- Surfaces, schedulers and colors
"""

from .buffer import CLEAN, FULLY_DIRTY, Clean, DotGrid, FullyDirty, PartiallyDirty
from .color import DEFAULT, Channels, Default, Named, as_color
from .dmd import DotMatrixDisplay
from .engine import RepaintEngine
from .scheduler import AsyncioScheduler, Scheduler, TaskHandle
from .surface import ImageSurface, Surface

__all__ = [
    "CLEAN",
    "FULLY_DIRTY",
    "Clean",
    "FullyDirty",
    "PartiallyDirty",
    "DotGrid",
    "DEFAULT",
    "Channels",
    "Default",
    "Named",
    "as_color",
    "DotMatrixDisplay",
    "RepaintEngine",
    "AsyncioScheduler",
    "Scheduler",
    "TaskHandle",
    "ImageSurface",
    "Surface",
]
