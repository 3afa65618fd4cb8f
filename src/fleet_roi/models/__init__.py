"""Result models — validation and calculation output contracts."""

from fleet_roi.models.results import (
    EngineMode,
    EngineResult,
    MonthlySnapshot,
    ProgramCosts,
    Recompute,
    ROIResult,
    SavingsBreakdown,
    StraightLineResult,
    ValidationResult,
)

__all__ = [
    "EngineMode",
    "EngineResult",
    "MonthlySnapshot",
    "ProgramCosts",
    "Recompute",
    "ROIResult",
    "SavingsBreakdown",
    "StraightLineResult",
    "ValidationResult",
]
