"""Stock sheet catalog for sheetcut."""

from sheetcut.materials.catalog import (
    MATERIAL_CATALOG,
    SHEET_SIZES,
    MaterialGroup,
    SheetMaterial,
    StockSelection,
    StockSize,
    UnknownMaterialError,
    find_material,
    get_material,
    get_materials_by_group,
    get_stock,
    list_all_materials,
    select_stock,
)

__all__ = [
    "MATERIAL_CATALOG",
    "SHEET_SIZES",
    "MaterialGroup",
    "SheetMaterial",
    "StockSelection",
    "StockSize",
    "UnknownMaterialError",
    "find_material",
    "get_material",
    "get_materials_by_group",
    "get_stock",
    "list_all_materials",
    "select_stock",
]
