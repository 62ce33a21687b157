"""Simulated LED dot-matrix display.

A grid of dots rendered onto a drawing surface featuring:
- Incremental repaint of changed dots only
- Circle (LED) or rectangle dot shapes
- Bitmap font text printing
"""

from .display import DotGrid, DotMatrixDisplay, ImageSurface, AsyncioScheduler
from .text import TextPrinter

__version__ = "1.0.0"

__all__ = [
    "DotGrid",
    "DotMatrixDisplay",
    "ImageSurface",
    "AsyncioScheduler",
    "TextPrinter",
]
