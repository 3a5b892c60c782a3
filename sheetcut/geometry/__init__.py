"""Rectangle fit predicates and sheet count estimates."""

from sheetcut.geometry.fit import (
    FullSheetLayout,
    fits,
    full_sheet_layout,
    pieces_per_sheet,
)

__all__ = [
    "FullSheetLayout",
    "fits",
    "full_sheet_layout",
    "pieces_per_sheet",
]
