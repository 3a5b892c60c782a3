"""Nesting module for splitting oversized parts and packing stock sheets.

Provides oversize resolution and first-fit-decreasing sheet nesting.
"""

from sheetcut.nesting.models import (
    FreeRegion,
    NestingResult,
    Part,
    PartCategory,
    PartValidationError,
    Piece,
    Placement,
    Position,
    Sheet,
    StockSheet,
    StockValidationError,
)
from sheetcut.nesting.free_space import FreeSpaceTracker
from sheetcut.nesting.sheet_packer import SheetPacker
from sheetcut.nesting.splitter import (
    OversizeSplitter,
    Resolution,
    ResolutionKind,
    SeamPolicy,
    SplitAxis,
    SplitPiece,
    resolve_oversize,
)
from sheetcut.nesting.orchestrator import (
    NestingOrchestrator,
    expand_parts,
    nest_parts,
    sort_pieces,
)

__all__ = [
    "FreeRegion",
    "NestingResult",
    "Part",
    "PartCategory",
    "PartValidationError",
    "Piece",
    "Placement",
    "Position",
    "Sheet",
    "StockSheet",
    "StockValidationError",
    "FreeSpaceTracker",
    "SheetPacker",
    "OversizeSplitter",
    "Resolution",
    "ResolutionKind",
    "SeamPolicy",
    "SplitAxis",
    "SplitPiece",
    "resolve_oversize",
    "NestingOrchestrator",
    "expand_parts",
    "nest_parts",
    "sort_pieces",
]
