"""First-fit-decreasing nesting of parts onto stock sheets."""

from typing import Iterable, List

from sheetcut.geometry.fit import fits
from sheetcut.nesting.models import NestingResult, Part, Piece, StockSheet
from sheetcut.nesting.sheet_packer import SheetPacker
from sheetcut.utils import get_logger

logger = get_logger("nesting.orchestrator")


def expand_parts(parts: Iterable[Part]) -> List[Piece]:
    """Expand each part into one piece per unit of quantity."""
    pieces = []
    for part in parts:
        for _ in range(part.quantity):
            pieces.append(Piece.from_part(part, piece_id=len(pieces)))
    return pieces


def sort_pieces(pieces: Iterable[Piece]) -> List[Piece]:
    """Order pieces by area, then longest side, both largest first."""
    return sorted(pieces, key=lambda p: (p.area, p.longest_side), reverse=True)


class NestingOrchestrator:
    """
    Packs pieces onto as few stock sheets as practical.

    Holds no per-run state: every call to nest() builds its own sheets.
    """

    def nest(
        self,
        parts: Iterable[Part],
        stock_width: float,
        stock_length: float,
        kerf: float = 0.0,
    ) -> NestingResult:
        """
        Nest parts onto stock sheets.

        Args:
            parts: Parts to cut, each with a quantity
            stock_width: Stock sheet width
            stock_length: Stock sheet length
            kerf: Gap reserved after each piece

        Returns:
            Sheets in creation order and pieces that fit no sheet
        """
        stock = StockSheet(stock_width, stock_length, kerf or 0.0)
        pieces = sort_pieces(expand_parts(parts))

        packers: List[SheetPacker] = []
        unplaced: List[Piece] = []

        for piece in pieces:
            if not fits(piece.width, piece.length, stock.width, stock.length):
                logger.warning(
                    f"{piece.display_name} ({piece.width:.2f}x{piece.length:.2f}) "
                    f"cannot fit {stock.width}x{stock.length} stock"
                )
                unplaced.append(piece)
                continue

            if any(packer.try_place(piece) for packer in packers):
                continue

            packer = SheetPacker(len(packers) + 1, stock.width, stock.length, stock.kerf)
            if packer.try_place(piece) is None:
                # Unreachable for a piece that fits the raw stock
                unplaced.append(piece)
                continue
            packers.append(packer)
            logger.debug(f"Opened sheet {packer.index} for {piece.display_name}")

        result = NestingResult(sheets=[p.sheet for p in packers], unplaced=unplaced)
        logger.info(
            f"Nested {result.placed_count} pieces on {result.sheet_count} sheets, "
            f"{len(unplaced)} unplaced"
        )
        return result


def nest_parts(
    parts: Iterable[Part],
    stock_width: float,
    stock_length: float,
    kerf: float = 0.0,
) -> NestingResult:
    """
    Nest parts onto stock sheets.

    Args:
        parts: Parts to cut
        stock_width: Stock sheet width
        stock_length: Stock sheet length
        kerf: Gap reserved after each piece

    Returns:
        Nesting result
    """
    return NestingOrchestrator().nest(parts, stock_width, stock_length, kerf)
