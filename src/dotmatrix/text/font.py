"""Bitmap font data.

A glyph is a sequence of rows, each row a sequence of bits (1 = lit).
A font maps single characters to glyphs.
"""

from collections.abc import Mapping, Sequence

from ..core.errors import ValidationError

Glyph = Sequence[Sequence[int]]
FontTable = Mapping[str, Glyph]
FrozenGlyph = tuple[tuple[int, ...], ...]


def _is_row(row: object) -> bool:
    return isinstance(row, Sequence) and not isinstance(row, str)


def glyph_width(glyph: Glyph) -> int:
    """Width of a glyph: its longest row."""
    return max((len(row) for row in glyph if _is_row(row)), default=0)


def freeze_glyph(glyph: Glyph) -> FrozenGlyph:
    """Hashable copy of a glyph."""
    return tuple(tuple(row) if _is_row(row) else () for row in glyph)


def validate_font(font: FontTable) -> None:
    """Check font data loaded from an untrusted source.

    Raises:
        ValidationError: If a key is not a single character or a glyph
            contains anything but rows of 0/1 bits
    """
    for char, glyph in font.items():
        if not isinstance(char, str) or len(char) != 1:
            raise ValidationError("Font keys must be single characters", details={"key": char})
        if not _is_row(glyph):
            raise ValidationError("Glyph must be a sequence of rows", details={"char": char})
        for row_number, row in enumerate(glyph):
            if not _is_row(row):
                raise ValidationError(
                    "Glyph row must be a sequence of bits",
                    details={"char": char, "row": row_number},
                )
            if any(bit not in (0, 1) for bit in row):
                raise ValidationError(
                    "Glyph bits must be 0 or 1",
                    details={"char": char, "row": row_number},
                )
