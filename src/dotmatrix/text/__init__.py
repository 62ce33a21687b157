"""Bitmap text rendering on the dot grid."""

from .font import FontTable, Glyph, glyph_width, validate_font
from .printer import TextPrinter

__all__ = [
    "FontTable",
    "Glyph",
    "glyph_width",
    "validate_font",
    "TextPrinter",
]
