"""Free-rectangle bookkeeping for one stock sheet.

Regions are kept as maximal rectangles: a region cut by a placement is
replaced by the strips left of, right of, above and below the occupied
area, each spanning the full extent of the original region. Regions may
therefore overlap each other, but never overlap a placement.
"""

from typing import Iterable, List, Tuple

from sheetcut.nesting.models import FreeRegion


class FreeSpaceTracker:
    """
    Free regions remaining on one sheet.

    The region tuple is rebuilt on every update and never mutated in
    place, so callers may hold on to a snapshot from ``regions``.
    """

    def __init__(self, width: float, length: float, kerf: float = 0.0):
        """
        Initialize tracker with the whole sheet free.

        Args:
            width: Sheet width
            length: Sheet length
            kerf: Clearance consumed after each placed piece
        """
        self.width = width
        self.length = length
        self.kerf = kerf
        self._regions: Tuple[FreeRegion, ...] = (FreeRegion(0.0, 0.0, width, length),)

    @property
    def regions(self) -> Tuple[FreeRegion, ...]:
        """Current free regions, in search order."""
        return self._regions

    def occupy(self, x: float, y: float, width: float, height: float) -> Tuple[FreeRegion, ...]:
        """
        Remove an occupied rectangle from the free space.

        The rectangle is grown by kerf on its +x and +y sides before it is
        cut out.

        Returns:
            The new region tuple
        """
        occupied = FreeRegion(x, y, width + self.kerf, height + self.kerf)

        split: List[FreeRegion] = []
        for region in self._regions:
            if not region.intersects(occupied):
                split.append(region)
                continue
            split.extend(split_region(region, occupied))

        self._regions = tuple(prune_contained(split))
        return self._regions


def split_region(region: FreeRegion, occupied: FreeRegion) -> List[FreeRegion]:
    """Guillotine residuals of region around an intersecting occupied rectangle."""
    residuals = []

    # Left
    if occupied.x > region.x:
        residuals.append(FreeRegion(region.x, region.y, occupied.x - region.x, region.height))
    # Right
    if occupied.right < region.right:
        residuals.append(FreeRegion(occupied.right, region.y, region.right - occupied.right, region.height))
    # Above (towards y = 0)
    if occupied.y > region.y:
        residuals.append(FreeRegion(region.x, region.y, region.width, occupied.y - region.y))
    # Below
    if occupied.bottom < region.bottom:
        residuals.append(FreeRegion(region.x, occupied.bottom, region.width, region.bottom - occupied.bottom))

    return [r for r in residuals if r.width > 0 and r.height > 0]


def prune_contained(regions: Iterable[FreeRegion]) -> List[FreeRegion]:
    """
    Drop regions contained in another region.

    Of two identical regions the first one is kept.
    """
    regions = list(regions)
    kept = []

    for i, region in enumerate(regions):
        if region.width <= 0 or region.height <= 0:
            continue
        contained = False
        for j, other in enumerate(regions):
            if i == j or not other.contains(region):
                continue
            # An exact duplicate only loses to an earlier copy
            if region == other and j > i:
                continue
            contained = True
            break
        if not contained:
            kept.append(region)

    return kept
