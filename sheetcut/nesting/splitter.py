"""Oversize resolution: fit, split into strips or a grid, or give up.

A part that does not fit the stock in either orientation is split into
parallel strips when one of its sides fits the stock, or into a grid when
neither does. Every seam between two pieces consumes one kerf, so N pieces
of size s cover ``N * s + (N - 1) * kerf`` of the original dimension.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from sheetcut.geometry.fit import fits
from sheetcut.utils import get_logger

logger = get_logger("nesting.splitter")

# Smallest strip or cell size worth cutting (inches)
MIN_PIECE_SIZE = 0.5

# Attempts at growing the piece count until kerf-adjusted pieces fit
MAX_REFINE_ATTEMPTS = 10

WARNING_NO_SEAMS = "exceeds stock (seams not allowed)"
WARNING_UNSPLITTABLE = "cannot be split to fit stock"


class ResolutionKind(str, Enum):
    """Outcome of resolving one part against a stock sheet."""
    FITS = "fits"
    SPLIT = "split"
    UNSPLITTABLE = "unsplittable"


class SplitAxis(str, Enum):
    """Which part dimension a split cuts across."""
    WIDTH = "width"
    LENGTH = "length"
    GRID = "grid"


@dataclass(frozen=True)
class SplitPiece:
    """One piece of a resolved part."""
    width: float
    length: float
    suffix: str = ""


@dataclass(frozen=True)
class StripLayout:
    """Strip split of one dimension with the other kept whole."""
    strip_size: float
    keep_size: float
    strip_count: int
    max_strip_size: float


@dataclass(frozen=True)
class GridLayout:
    """Rows x columns split when both dimensions exceed the stock."""
    columns: int
    rows: int
    piece_width: float
    piece_length: float

    @property
    def total(self) -> int:
        return self.columns * self.rows


@dataclass
class Resolution:
    """Result of resolving one part."""
    kind: ResolutionKind
    pieces: List[SplitPiece] = field(default_factory=list)
    warning: Optional[str] = None
    split_axis: Optional[SplitAxis] = None
    columns: int = 1
    rows: int = 1

    @property
    def fits(self) -> bool:
        return self.kind == ResolutionKind.FITS

    @property
    def is_split(self) -> bool:
        return self.kind == ResolutionKind.SPLIT

    @property
    def piece_count(self) -> int:
        return len(self.pieces)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "pieces": [
                {"width": p.width, "length": p.length, "suffix": p.suffix}
                for p in self.pieces
            ],
            "warning": self.warning,
            "split_axis": self.split_axis.value if self.split_axis else None,
            "columns": self.columns,
            "rows": self.rows,
        }


class SeamPolicy:
    """
    Decides which materials may be split with seams.

    Every material permits seams unless it is listed as prohibited.
    """

    def __init__(self, prohibited: Optional[Iterable[str]] = None):
        self.prohibited = frozenset(m.strip().lower() for m in (prohibited or ()))

    def allows_seams(self, material: Optional[str]) -> bool:
        """Check if a material may be split."""
        if not material:
            return True
        return material.strip().lower() not in self.prohibited


def refine_count(size: float, limit: float, count: int, kerf: float) -> Tuple[int, float]:
    """
    Grow a piece count until kerf-adjusted pieces fit the limit.

    Stops after MAX_REFINE_ATTEMPTS even if the last size is still too
    large; callers validate the returned size.

    Returns:
        Tuple of (count, piece size)
    """
    for _ in range(MAX_REFINE_ATTEMPTS):
        piece_size = (size - (count - 1) * kerf) / count
        if piece_size <= limit and piece_size > MIN_PIECE_SIZE:
            break
        count += 1

    return count, (size - (count - 1) * kerf) / count


def strip_layout(
    split_size: float,
    keep_size: float,
    stock_width: float,
    stock_length: float,
    kerf: float = 0.0,
) -> Optional[StripLayout]:
    """
    Lay out strips across split_size, keeping keep_size whole.

    Returns:
        Strip layout, or None if keep_size fits neither stock axis or no
        kerf-adjusted strip fits
    """
    keep_fits_width = keep_size <= stock_width
    keep_fits_length = keep_size <= stock_length

    if not keep_fits_width and not keep_fits_length:
        return None

    if keep_fits_width and keep_fits_length:
        max_strip = max(stock_width, stock_length)
    elif keep_fits_length:
        max_strip = stock_width
    else:
        max_strip = stock_length

    if max_strip <= 0:
        return None

    count, strip_size = refine_count(split_size, max_strip, math.ceil(split_size / max_strip), kerf)

    if strip_size <= 0 or strip_size > max_strip:
        return None

    return StripLayout(
        strip_size=strip_size,
        keep_size=keep_size,
        strip_count=count,
        max_strip_size=max_strip,
    )


def grid_layout(
    part_width: float,
    part_length: float,
    stock_width: float,
    stock_length: float,
    kerf: float = 0.0,
) -> Optional[GridLayout]:
    """
    Lay out a grid of cells when both part dimensions exceed the stock.

    Both stock orientations are tried; the one with fewer cells wins and
    the first orientation wins a tie.
    """
    best = None

    for cell_limit_w, cell_limit_l in ((stock_width, stock_length), (stock_length, stock_width)):
        columns, piece_width = refine_count(
            part_width, cell_limit_w, math.ceil(part_width / cell_limit_w), kerf
        )
        rows, piece_length = refine_count(
            part_length, cell_limit_l, math.ceil(part_length / cell_limit_l), kerf
        )

        valid = (
            piece_width > MIN_PIECE_SIZE and piece_length > MIN_PIECE_SIZE and
            piece_width <= cell_limit_w and piece_length <= cell_limit_l
        )
        if not valid:
            continue

        layout = GridLayout(columns, rows, piece_width, piece_length)
        if best is None or layout.total < best.total:
            best = layout

    return best


class OversizeSplitter:
    """
    Resolves parts that may exceed the stock sheet.

    Strips are preferred over a grid since they need fewer seams; the
    grid is only tried when no strip split exists.
    """

    def __init__(self, seam_policy: Optional[SeamPolicy] = None):
        """
        Initialize splitter.

        Args:
            seam_policy: Materials that must not be split (default: none)
        """
        self.seam_policy = seam_policy or SeamPolicy()

    def can_split(self, material: Optional[str], allow_split: bool = True) -> bool:
        """Check if a part of this material may be split."""
        return allow_split and self.seam_policy.allows_seams(material)

    def resolve(
        self,
        part_width: float,
        part_length: float,
        stock_width: float,
        stock_length: float,
        kerf: float = 0.0,
        allow_split: bool = True,
        material: Optional[str] = None,
    ) -> Resolution:
        """
        Fit a part on stock, or split it if it is oversized.

        Args:
            part_width: Part width
            part_length: Part length
            stock_width: Stock sheet width
            stock_length: Stock sheet length
            kerf: Gap consumed by each seam
            allow_split: If False, oversized parts are never split
            material: Material tag checked against the seam policy

        Returns:
            Resolution describing the pieces to cut
        """
        kerf = kerf or 0.0
        original = [SplitPiece(part_width, part_length)]
        allow_split = self.can_split(material, allow_split)

        if fits(part_width, part_length, stock_width, stock_length):
            return Resolution(kind=ResolutionKind.FITS, pieces=original)

        if not allow_split:
            return Resolution(
                kind=ResolutionKind.UNSPLITTABLE,
                pieces=original,
                warning=WARNING_NO_SEAMS,
            )

        # A cuts across the width and keeps the length, B the other way round
        option_a = strip_layout(part_width, part_length, stock_width, stock_length, kerf)
        option_b = strip_layout(part_length, part_width, stock_width, stock_length, kerf)

        if option_a and (not option_b or option_a.strip_count <= option_b.strip_count):
            return self._strip_resolution(option_a, SplitAxis.WIDTH)
        if option_b:
            return self._strip_resolution(option_b, SplitAxis.LENGTH)

        grid = grid_layout(part_width, part_length, stock_width, stock_length, kerf)
        if grid:
            return self._grid_resolution(grid)

        logger.debug(
            f"No split for {part_width}x{part_length} on {stock_width}x{stock_length}"
        )
        return Resolution(
            kind=ResolutionKind.UNSPLITTABLE,
            pieces=original,
            warning=WARNING_UNSPLITTABLE,
        )

    def _strip_resolution(self, layout: StripLayout, axis: SplitAxis) -> Resolution:
        count = layout.strip_count
        pieces = []
        for i in range(count):
            if axis == SplitAxis.WIDTH:
                width, length = layout.strip_size, layout.keep_size
            else:
                width, length = layout.keep_size, layout.strip_size
            pieces.append(SplitPiece(width, length, f" [{i + 1}/{count}]"))

        return Resolution(
            kind=ResolutionKind.SPLIT,
            pieces=pieces,
            warning=f"will be split into {count} pieces",
            split_axis=axis,
            columns=count if axis == SplitAxis.WIDTH else 1,
            rows=count if axis == SplitAxis.LENGTH else 1,
        )

    def _grid_resolution(self, layout: GridLayout) -> Resolution:
        total = layout.total
        pieces = []
        index = 0
        for _row in range(layout.rows):
            for _col in range(layout.columns):
                index += 1
                pieces.append(SplitPiece(layout.piece_width, layout.piece_length, f" [{index}/{total}]"))

        return Resolution(
            kind=ResolutionKind.SPLIT,
            pieces=pieces,
            warning=f"will be split into {layout.columns}×{layout.rows} grid ({total} pieces)",
            split_axis=SplitAxis.GRID,
            columns=layout.columns,
            rows=layout.rows,
        )


def resolve_oversize(
    part_width: float,
    part_length: float,
    stock_width: float,
    stock_length: float,
    kerf: float = 0.0,
    allow_split: bool = True,
    material: Optional[str] = None,
) -> Resolution:
    """Resolve a part with a default splitter."""
    return OversizeSplitter().resolve(
        part_width, part_length, stock_width, stock_length, kerf, allow_split, material
    )
