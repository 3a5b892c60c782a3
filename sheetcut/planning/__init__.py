"""Cut planning for jobs: oversize resolution, nesting and warnings."""

from sheetcut.planning.cut_plan import (
    CutPlan,
    CutPlanner,
    plan_cuts,
)

__all__ = [
    "CutPlan",
    "CutPlanner",
    "plan_cuts",
]
