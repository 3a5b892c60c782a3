"""
Stock sheet catalog for sheetcut.

Read-only lookup of sheet materials, the stock sizes they come in and
their available thicknesses. The nesting core only needs the width and
length of one stock size; this module supplies them.

Usage:
    from sheetcut.materials import get_material, get_stock

    mdo = get_material('mdo')
    print(mdo.default_size.width)  # 48

    stock = get_stock('mdf', "5'×10'")
    print(stock.width, stock.length)  # 60 120
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class UnknownMaterialError(KeyError):
    """Raised when a material or stock size is not in the catalog."""
    pass


class MaterialGroup(str, Enum):
    """Catalog grouping of sheet materials."""
    WOOD = "wood"
    PLASTIC = "plastic"
    METAL = "metal"
    OTHER = "other"


@dataclass(frozen=True)
class StockSize:
    """One standard sheet size (inches)."""
    width: float
    length: float
    label: str

    @property
    def area(self) -> float:
        return self.width * self.length

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"width": self.width, "length": self.length, "label": self.label}


@dataclass
class SheetMaterial:
    """A sheet material and the stock it is sold in."""
    key: str
    name: str
    group: MaterialGroup
    sizes: List[StockSize] = field(default_factory=list)
    thicknesses: List[float] = field(default_factory=list)  # inches

    @property
    def default_size(self) -> StockSize:
        """First listed size, the one offered by default."""
        return self.sizes[0]

    def size(self, label: Optional[str] = None) -> StockSize:
        """Get a stock size by label, or the default size."""
        if label is None:
            return self.default_size
        for size in self.sizes:
            if size.label == label:
                return size
        raise UnknownMaterialError(f"{self.name} is not stocked in {label}")


@dataclass(frozen=True)
class StockSelection:
    """A material picked at one size and thickness."""
    name: str
    material_key: str
    width: float
    length: float
    thickness: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "material_key": self.material_key,
            "width": self.width,
            "length": self.length,
            "thickness": self.thickness,
        }


FOUR_BY_EIGHT = StockSize(48, 96, "4'×8'")
FIVE_BY_EIGHT = StockSize(60, 96, "5'×8'")
FOUR_BY_TEN = StockSize(48, 120, "4'×10'")
FIVE_BY_TEN = StockSize(60, 120, "5'×10'")

# Fixed stock for the case liner materials
SHEET_SIZES: Dict[str, StockSize] = {
    "obo": StockSize(20, 80, 'Obomodulan 20"×80"'),
    "hdpe": StockSize(48, 96, "HDPE 4'×8'"),
}

MATERIAL_CATALOG: Dict[str, SheetMaterial] = {
    # =====================
    # WOOD
    # =====================
    "mdo": SheetMaterial(
        key="mdo",
        name="MDO",
        group=MaterialGroup.WOOD,
        sizes=[FOUR_BY_EIGHT, FIVE_BY_EIGHT, FOUR_BY_TEN],
        thicknesses=[0.25, 0.5, 0.75, 1.0],
    ),
    "mdf": SheetMaterial(
        key="mdf",
        name="MDF",
        group=MaterialGroup.WOOD,
        sizes=[FOUR_BY_EIGHT, FIVE_BY_EIGHT, FOUR_BY_TEN, FIVE_BY_TEN],
        thicknesses=[0.25, 0.5, 0.75, 1.0],
    ),
    "shopply": SheetMaterial(
        key="shopply",
        name="Shop Ply",
        group=MaterialGroup.WOOD,
        sizes=[FOUR_BY_EIGHT, FOUR_BY_TEN],
        thicknesses=[0.25, 0.5, 0.75, 1.0],
    ),
    # =====================
    # PLASTIC
    # =====================
    "plexi": SheetMaterial(
        key="plexi",
        name="Plexi/Acrylic",
        group=MaterialGroup.PLASTIC,
        sizes=[FOUR_BY_EIGHT, FIVE_BY_TEN],
        thicknesses=[0.125, 0.25, 0.375, 0.5, 0.75],
    ),
    "optium": SheetMaterial(
        key="optium",
        name="Optium",
        group=MaterialGroup.PLASTIC,
        sizes=[FOUR_BY_EIGHT],
        thicknesses=[0.25],
    ),
    "hdpe": SheetMaterial(
        key="hdpe",
        name="HDPE",
        group=MaterialGroup.PLASTIC,
        sizes=[FOUR_BY_EIGHT],
        thicknesses=[0.5, 0.75],
    ),
    # =====================
    # METAL
    # =====================
    "steel": SheetMaterial(
        key="steel",
        name="Steel",
        group=MaterialGroup.METAL,
        sizes=[FOUR_BY_EIGHT, FOUR_BY_TEN],
        thicknesses=[0.0625, 0.125, 0.25, 0.375, 0.5],
    ),
    "aluminum": SheetMaterial(
        key="aluminum",
        name="Aluminum",
        group=MaterialGroup.METAL,
        sizes=[FOUR_BY_EIGHT, FOUR_BY_TEN],
        thicknesses=[0.0625, 0.125, 0.25, 0.375, 0.5],
    ),
    # =====================
    # OTHER
    # =====================
    "obomodulan": SheetMaterial(
        key="obomodulan",
        name="Obomodulan",
        group=MaterialGroup.OTHER,
        sizes=[StockSize(20, 80, '20"×80"')],
        thicknesses=[1.0],
    ),
}


def get_material(key: str) -> Optional[SheetMaterial]:
    """Get a material by key."""
    return MATERIAL_CATALOG.get(key.lower())


def find_material(name: str) -> Optional[SheetMaterial]:
    """Find a material by key or display name, ignoring case."""
    needle = name.strip().lower()
    material = MATERIAL_CATALOG.get(needle)
    if material:
        return material
    for candidate in MATERIAL_CATALOG.values():
        if candidate.name.lower() == needle:
            return candidate
    return None


def get_materials_by_group(group: MaterialGroup) -> List[SheetMaterial]:
    """Get all materials in a group."""
    return [m for m in MATERIAL_CATALOG.values() if m.group == group]


def list_all_materials() -> List[str]:
    """List all material keys."""
    return list(MATERIAL_CATALOG.keys())


def get_stock(key: str, size_label: Optional[str] = None) -> StockSize:
    """
    Look up the stock size for a material.

    Args:
        key: Material key, or "obo"/"hdpe" for the fixed liner stock
        size_label: Size label such as "4'×10'" (default: first size)

    Raises:
        UnknownMaterialError: If the material or size is not stocked
    """
    material = get_material(key)
    if material is None:
        if size_label is None and key.lower() in SHEET_SIZES:
            return SHEET_SIZES[key.lower()]
        raise UnknownMaterialError(f"Unknown material: {key}")
    return material.size(size_label)


def select_stock(key: str, size_label: Optional[str] = None, thickness: Optional[float] = None) -> StockSelection:
    """
    Pick a material at one size and thickness.

    The selection is named like a cut-list header, e.g. MDO 0.75" 4'×8'.
    """
    material = get_material(key)
    if material is None:
        raise UnknownMaterialError(f"Unknown material: {key}")

    size = material.size(size_label)
    if thickness is None:
        thickness = material.thicknesses[0]
    elif thickness not in material.thicknesses:
        raise UnknownMaterialError(f'{material.name} is not stocked at {thickness}"')

    return StockSelection(
        name=f'{material.name} {thickness:g}" {size.label}',
        material_key=material.key,
        width=size.width,
        length=size.length,
        thickness=thickness,
    )
