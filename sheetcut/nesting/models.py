"""Data records shared by the splitter, the packer and the orchestrator.

Everything here is a plain dataclass. Pieces, regions and placements are
frozen; a Sheet is the only record that grows during a nesting run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class PartValidationError(ValueError):
    """Raised when a part has a bad size, quantity or category."""
    pass


class StockValidationError(ValueError):
    """Raised when a stock sheet or kerf is invalid."""
    pass


class PartCategory(str, Enum):
    """Part categories, used downstream to group and color parts."""
    SKIN = "skin"
    WALL = "wall"
    RIB = "rib"
    PANEL = "panel"
    CASE = "case"
    OBO = "obo"
    HDPE = "hdpe"


@dataclass
class Part:
    """A logical part with a quantity, before expansion into pieces."""
    name: str
    quantity: int
    width: float  # inches
    length: float  # inches
    category: PartCategory = PartCategory.PANEL
    material: str = ""
    source_id: Optional[str] = None
    source_label: Optional[str] = None
    sequence_suffix: str = ""  # e.g. " [2/3]" for one piece of a split

    def __post_init__(self):
        try:
            self.category = PartCategory(self.category)
        except ValueError:
            raise PartValidationError(
                f"{self.name}: unknown category {self.category!r}"
            ) from None
        if not self.width > 0 or not self.length > 0:
            raise PartValidationError(
                f"{self.name}: width and length must be positive "
                f"(got {self.width} x {self.length})"
            )
        try:
            quantity = int(self.quantity)
        except (TypeError, ValueError):
            quantity = None
        if quantity is None or quantity != self.quantity or quantity < 1:
            raise PartValidationError(
                f"{self.name}: quantity must be a positive integer (got {self.quantity})"
            )
        self.quantity = quantity

    @property
    def display_name(self) -> str:
        """Name including the split ordinal, if any."""
        return self.name + self.sequence_suffix

    @property
    def area(self) -> float:
        """Area of one unit."""
        return self.width * self.length

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "quantity": self.quantity,
            "width": self.width,
            "length": self.length,
            "category": self.category.value,
            "material": self.material,
            "source_id": self.source_id,
            "source_label": self.source_label,
            "sequence_suffix": self.sequence_suffix,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Part":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            quantity=data.get("quantity", 1),
            width=data["width"],
            length=data["length"],
            category=data.get("category", PartCategory.PANEL),
            material=data.get("material", ""),
            source_id=data.get("source_id"),
            source_label=data.get("source_label"),
            sequence_suffix=data.get("sequence_suffix", ""),
        )


@dataclass(frozen=True)
class Piece:
    """One physically cuttable unit of a part."""
    piece_id: int  # Expansion order within one nesting run
    name: str
    width: float
    length: float
    category: PartCategory = PartCategory.PANEL
    material: str = ""
    source_id: Optional[str] = None
    source_label: Optional[str] = None
    sequence_suffix: str = ""

    @classmethod
    def from_part(cls, part: Part, piece_id: int) -> "Piece":
        """Create one unit of a part."""
        return cls(
            piece_id=piece_id,
            name=part.name,
            width=part.width,
            length=part.length,
            category=part.category,
            material=part.material,
            source_id=part.source_id,
            source_label=part.source_label,
            sequence_suffix=part.sequence_suffix,
        )

    @property
    def display_name(self) -> str:
        """Name including the split ordinal, if any."""
        return self.name + self.sequence_suffix

    @property
    def area(self) -> float:
        return self.width * self.length

    @property
    def longest_side(self) -> float:
        return max(self.width, self.length)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "piece_id": self.piece_id,
            "name": self.display_name,
            "width": self.width,
            "length": self.length,
            "category": self.category.value,
            "material": self.material,
            "source_id": self.source_id,
            "source_label": self.source_label,
        }


@dataclass(frozen=True)
class StockSheet:
    """Dimensions of one raw sheet plus the kerf used when cutting it."""
    width: float
    length: float
    kerf: float = 0.0

    def __post_init__(self):
        if not self.width > 0 or not self.length > 0:
            raise StockValidationError(
                f"Stock dimensions must be positive (got {self.width} x {self.length})"
            )
        if self.kerf < 0:
            raise StockValidationError(f"Kerf must not be negative (got {self.kerf})")

    @property
    def area(self) -> float:
        return self.width * self.length


@dataclass(frozen=True)
class FreeRegion:
    """Unused axis-aligned rectangle in a sheet's local coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def intersects(self, other: "FreeRegion") -> bool:
        """Check for overlap with positive area. Shared edges do not count."""
        return not (
            other.x >= self.right or other.right <= self.x or
            other.y >= self.bottom or other.bottom <= self.y
        )

    def contains(self, other: "FreeRegion") -> bool:
        """Check if other lies entirely within this region."""
        return (
            other.x >= self.x and other.y >= self.y and
            other.right <= self.right and other.bottom <= self.bottom
        )

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Position:
    """Candidate position returned by the best-fit search."""
    x: float
    y: float
    rotated: bool


@dataclass(frozen=True)
class Placement:
    """A piece bound to a sheet position."""
    piece: Piece
    x: float
    y: float
    rotated: bool

    @property
    def width(self) -> float:
        """Occupied width on the sheet (swapped when rotated)."""
        return self.piece.length if self.rotated else self.piece.width

    @property
    def height(self) -> float:
        """Occupied height on the sheet (swapped when rotated)."""
        return self.piece.width if self.rotated else self.piece.length

    @property
    def area(self) -> float:
        return self.width * self.height

    def occupied(self, kerf: float = 0.0) -> FreeRegion:
        """Occupied rectangle, grown by kerf on its trailing edges."""
        return FreeRegion(self.x, self.y, self.width + kerf, self.height + kerf)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "piece": self.piece.to_dict(),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotated": self.rotated,
        }


@dataclass
class Sheet:
    """A packed stock sheet."""
    index: int  # 1-based, creation order within a run
    width: float
    length: float
    kerf: float = 0.0
    placements: List[Placement] = field(default_factory=list)
    free_regions: Tuple[FreeRegion, ...] = ()

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def utilization(self) -> float:
        """Fraction of the sheet covered by placed pieces (0-1)."""
        sheet_area = self.width * self.length
        if sheet_area <= 0:
            return 0.0
        return self.used_area / sheet_area

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "index": self.index,
            "width": self.width,
            "length": self.length,
            "kerf": self.kerf,
            "placements": [p.to_dict() for p in self.placements],
            "free_regions": [r.to_tuple() for r in self.free_regions],
            "utilization": self.utilization,
        }


@dataclass
class NestingResult:
    """Result of one nesting run."""
    sheets: List[Sheet] = field(default_factory=list)
    unplaced: List[Piece] = field(default_factory=list)

    @property
    def sheet_count(self) -> int:
        return len(self.sheets)

    @property
    def placed_count(self) -> int:
        return sum(len(s.placements) for s in self.sheets)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "sheets": [s.to_dict() for s in self.sheets],
            "unplaced": [p.to_dict() for p in self.unplaced],
            "sheet_count": self.sheet_count,
            "placed_count": self.placed_count,
        }
