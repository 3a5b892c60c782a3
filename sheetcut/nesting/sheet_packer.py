"""Placement search and bookkeeping for one sheet."""

from typing import Optional

from sheetcut.nesting.free_space import FreeSpaceTracker
from sheetcut.nesting.models import FreeRegion, Piece, Placement, Position, Sheet
from sheetcut.utils import get_logger

logger = get_logger("nesting.sheet_packer")

# Regions ending this close to the sheet edge count as reaching it
EDGE_TOLERANCE = 1e-9


class SheetPacker:
    """
    Owns one sheet's placements and free space.

    Positions are chosen by best short-side fit: the placement leaving the
    smallest slack on its tighter axis wins. A piece's trailing kerf never
    runs into another piece.
    """

    def __init__(self, index: int, width: float, length: float, kerf: float = 0.0):
        """
        Initialize an empty sheet.

        Args:
            index: 1-based sheet number
            width: Sheet width
            length: Sheet length
            kerf: Clearance reserved after each piece
        """
        self.tracker = FreeSpaceTracker(width, length, kerf)
        self.sheet = Sheet(
            index=index,
            width=width,
            length=length,
            kerf=kerf,
            free_regions=self.tracker.regions,
        )

    @property
    def index(self) -> int:
        return self.sheet.index

    def find_best_position(self, piece_width: float, piece_height: float) -> Optional[Position]:
        """
        Find the best free region for a piece in either orientation.

        Regions are scanned in list order, unrotated before rotated, and
        only a strictly better score replaces the current best. Scores use
        the raw piece size; eligibility also counts the kerf wherever the
        region ends inside the sheet.

        Returns:
            Best position, or None if the piece fits no free region
        """
        best = None
        best_score = float("inf")

        for region in self.tracker.regions:
            if self._accepts(region, piece_width, piece_height):
                score = min(region.width - piece_width, region.height - piece_height)
                if score < best_score:
                    best_score = score
                    best = Position(region.x, region.y, rotated=False)

            if self._accepts(region, piece_height, piece_width):
                score = min(region.width - piece_height, region.height - piece_width)
                if score < best_score:
                    best_score = score
                    best = Position(region.x, region.y, rotated=True)

        return best

    def _accepts(self, region: FreeRegion, width: float, height: float) -> bool:
        """
        Check a footprint plus its trailing kerf fits the region.

        The kerf may run off the sheet edge but not past an inner edge.
        """
        kerf = self.sheet.kerf
        if region.right < self.sheet.width - EDGE_TOLERANCE:
            width += kerf
        if region.bottom < self.sheet.length - EDGE_TOLERANCE:
            height += kerf
        return width <= region.width and height <= region.height

    def place(self, piece: Piece, position: Position) -> Placement:
        """Record a placement and update the free regions."""
        placement = Placement(piece=piece, x=position.x, y=position.y, rotated=position.rotated)
        self.sheet.placements.append(placement)
        self.sheet.free_regions = self.tracker.occupy(
            placement.x, placement.y, placement.width, placement.height
        )
        logger.debug(
            f"Sheet {self.index}: placed {piece.display_name} at "
            f"({placement.x:.3f}, {placement.y:.3f}){' rotated' if placement.rotated else ''}, "
            f"{len(self.sheet.free_regions)} free regions"
        )
        return placement

    def try_place(self, piece: Piece) -> Optional[Placement]:
        """Place a piece at its best position, if it has one."""
        position = self.find_best_position(piece.width, piece.length)
        if position is None:
            return None
        return self.place(piece, position)
