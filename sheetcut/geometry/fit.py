"""Fit predicates for rectangular parts on stock sheets.

All functions are pure. Dimensions are in inches but nothing here
depends on the unit.
"""

import math
from dataclasses import dataclass


def fits(part_width: float, part_length: float, stock_width: float, stock_length: float) -> bool:
    """Check if a part fits the stock as-is or rotated 90 degrees."""
    fits_normal = part_width <= stock_width and part_length <= stock_length
    fits_rotated = part_length <= stock_width and part_width <= stock_length
    return fits_normal or fits_rotated


def pieces_per_sheet(
    part_width: float,
    part_length: float,
    stock_width: float,
    stock_length: float,
    kerf: float = 0.0,
) -> int:
    """
    Estimate how many copies of a part fit on one empty sheet.

    Uses a plain row/column grid in both orientations and returns the
    larger count. This is an estimate for cut lists, the packer does not
    use it.
    """
    pw = part_width + kerf
    pl = part_length + kerf
    if pw <= 0 or pl <= 0:
        return 0

    fit_normal = math.floor(stock_width / pw) * math.floor(stock_length / pl)
    fit_rotated = math.floor(stock_width / pl) * math.floor(stock_length / pw)
    return max(fit_normal, fit_rotated)


@dataclass(frozen=True)
class FullSheetLayout:
    """Whole-sheet count needed to cover an oversized part."""
    fits: bool
    count: int
    wide: int = 1
    long: int = 1
    description: str = "Fits on sheet"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "fits": self.fits,
            "count": self.count,
            "wide": self.wide,
            "long": self.long,
            "description": self.description,
        }


def full_sheet_layout(
    part_width: float,
    part_length: float,
    stock_width: float,
    stock_length: float,
) -> FullSheetLayout:
    """Count full sheets needed to cover a part that does not fit."""
    if fits(part_width, part_length, stock_width, stock_length):
        return FullSheetLayout(fits=True, count=0)

    wide_a = math.ceil(part_width / stock_width)
    long_a = math.ceil(part_length / stock_length)
    wide_b = math.ceil(part_width / stock_length)
    long_b = math.ceil(part_length / stock_width)

    if wide_a * long_a <= wide_b * long_b:
        wide, long = wide_a, long_a
    else:
        wide, long = wide_b, long_b

    count = wide * long
    return FullSheetLayout(
        fits=False,
        count=count,
        wide=wide,
        long=long,
        description=f"{wide}×{long} layout ({count} full sheets)",
    )
