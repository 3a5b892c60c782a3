"""Cut planning: resolve oversized parts, nest them, collect warnings.

Ties the splitter and the nesting orchestrator together for one job on
one stock size. Problems with individual parts never stop the run; they
are reported as warnings in the order they were found.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable, List, Optional, Union

from sheetcut.config import Settings, get_settings
from sheetcut.materials.catalog import UnknownMaterialError, get_stock
from sheetcut.nesting.models import (
    NestingResult,
    Part,
    PartCategory,
    PartValidationError,
    StockSheet,
    StockValidationError,
)
from sheetcut.nesting.orchestrator import NestingOrchestrator
from sheetcut.nesting.splitter import OversizeSplitter, ResolutionKind, SeamPolicy
from sheetcut.utils import format_size, get_logger

logger = get_logger("planning.cut_plan")


@dataclass
class CutPlan:
    """Result of planning one job."""
    success: bool
    parts: List[Part] = field(default_factory=list)  # After oversize resolution
    nesting: Optional[NestingResult] = None
    warnings: List[str] = field(default_factory=list)
    stock_width: float = 0.0
    stock_length: float = 0.0
    kerf: float = 0.0
    processing_time: float = 0.0
    error_message: Optional[str] = None

    @property
    def total_sheets(self) -> int:
        return self.nesting.sheet_count if self.nesting else 0

    @property
    def utilization(self) -> float:
        """Overall fraction of the used sheets covered by pieces (0-1)."""
        if not self.nesting or not self.nesting.sheets:
            return 0.0
        used = sum(s.used_area for s in self.nesting.sheets)
        return used / (self.total_sheets * self.stock_width * self.stock_length)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "parts": [p.to_dict() for p in self.parts],
            "nesting": self.nesting.to_dict() if self.nesting else None,
            "warnings": self.warnings,
            "stock_width": self.stock_width,
            "stock_length": self.stock_length,
            "kerf": self.kerf,
            "total_sheets": self.total_sheets,
            "processing_time": self.processing_time,
            "error_message": self.error_message,
        }


class CutPlanner:
    """
    Plans how a job's parts are cut from one stock size.

    Each plan() call works on its own data, so a planner can be shared.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        splitter: Optional[OversizeSplitter] = None,
        orchestrator: Optional[NestingOrchestrator] = None,
    ):
        """
        Initialize planner.

        Args:
            settings: Settings to use (default: global settings)
            splitter: Oversize splitter (default: built from settings)
            orchestrator: Nesting orchestrator
        """
        self.settings = settings or get_settings()
        self.splitter = splitter or OversizeSplitter(
            SeamPolicy(self.settings.seam_prohibited_materials)
        )
        self.orchestrator = orchestrator or NestingOrchestrator()

    def resolve_part(
        self,
        part: Part,
        stock_width: float,
        stock_length: float,
        kerf: float,
        warnings: List[str],
    ) -> List[Part]:
        """
        Fit or split one part, appending any warning.

        Unsplittable parts come back unchanged so nesting reports them as
        unplaced instead of dropping them.
        """
        resolution = self.splitter.resolve(
            part.width,
            part.length,
            stock_width,
            stock_length,
            kerf,
            allow_split=self.settings.allow_split,
            material=part.material,
        )

        if resolution.kind == ResolutionKind.FITS:
            return [part]

        warnings.append(f"{part.display_name} {format_size(part.width, part.length)} {resolution.warning}")

        if resolution.kind == ResolutionKind.UNSPLITTABLE:
            return [part]

        logger.debug(f"{part.display_name}: {resolution.warning}")
        return [
            replace(part, width=piece.width, length=piece.length, sequence_suffix=piece.suffix)
            for piece in resolution.pieces
        ]

    def plan(
        self,
        parts: Iterable[Union[Part, dict]],
        stock_width: float,
        stock_length: float,
        kerf: Optional[float] = None,
    ) -> CutPlan:
        """
        Resolve and nest parts on one stock size.

        Args:
            parts: Parts, or part dictionaries (see Part.from_dict)
            stock_width: Stock sheet width
            stock_length: Stock sheet length
            kerf: Gap between pieces (default: settings.kerf)

        Returns:
            Cut plan; success is False only for invalid input
        """
        start_time = datetime.now()
        kerf = self.settings.kerf if kerf is None else kerf

        try:
            stock = StockSheet(stock_width, stock_length, kerf)
            part_list = [p if isinstance(p, Part) else Part.from_dict(p) for p in parts]
        except (PartValidationError, StockValidationError) as e:
            logger.error(f"Invalid input: {e}")
            return CutPlan(
                success=False,
                stock_width=stock_width,
                stock_length=stock_length,
                kerf=kerf,
                error_message=str(e),
                processing_time=(datetime.now() - start_time).total_seconds(),
            )
        except (KeyError, TypeError) as e:
            logger.error(f"Invalid part definition: {e}")
            return CutPlan(
                success=False,
                stock_width=stock_width,
                stock_length=stock_length,
                kerf=kerf,
                error_message=f"Invalid part definition: {e}",
                processing_time=(datetime.now() - start_time).total_seconds(),
            )

        if not part_list:
            return CutPlan(
                success=False,
                stock_width=stock.width,
                stock_length=stock.length,
                kerf=stock.kerf,
                error_message="No parts provided",
            )

        warnings: List[str] = []
        resolved: List[Part] = []
        for part in part_list:
            resolved.extend(self.resolve_part(part, stock.width, stock.length, stock.kerf, warnings))

        nesting = self.orchestrator.nest(resolved, stock.width, stock.length, stock.kerf)

        for piece in nesting.unplaced:
            warnings.append(
                f"OVERSIZED: {piece.display_name} ({format_size(piece.width, piece.length)}) "
                f"cannot fit on sheet"
            )

        return CutPlan(
            success=True,
            parts=resolved,
            nesting=nesting,
            warnings=warnings,
            stock_width=stock.width,
            stock_length=stock.length,
            kerf=stock.kerf,
            processing_time=(datetime.now() - start_time).total_seconds(),
        )

    def plan_for_material(
        self,
        parts: Iterable[Union[Part, dict]],
        material_key: str,
        size_label: Optional[str] = None,
        kerf: Optional[float] = None,
    ) -> CutPlan:
        """Plan parts on a catalog material's stock size."""
        try:
            stock = get_stock(material_key, size_label)
        except UnknownMaterialError as e:
            logger.error(f"Stock lookup failed: {e}")
            return CutPlan(success=False, error_message=str(e.args[0]))
        return self.plan(parts, stock.width, stock.length, kerf)

    def plan_panel(
        self,
        width: float,
        length: float,
        stock_width: float,
        stock_length: float,
        quantity: int = 1,
        name: str = "Sheet",
        material: str = "",
        kerf: Optional[float] = None,
    ) -> CutPlan:
        """Plan a single flat panel, split if it exceeds the stock."""
        if not width or not length:
            return CutPlan(success=False, error_message="Enter width and length")
        try:
            part = Part(
                name=name,
                quantity=quantity,
                width=width,
                length=length,
                category=PartCategory.PANEL,
                material=material,
            )
        except PartValidationError as e:
            return CutPlan(success=False, error_message=str(e))
        return self.plan([part], stock_width, stock_length, kerf)


def plan_cuts(
    parts: Iterable[Union[Part, dict]],
    stock_width: float,
    stock_length: float,
    kerf: Optional[float] = None,
) -> CutPlan:
    """Plan parts on one stock size with the global settings."""
    return CutPlanner().plan(parts, stock_width, stock_length, kerf)
