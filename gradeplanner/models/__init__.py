"""
Data models for the grade planner.

This package contains all dataclasses used throughout the system.
These serve as "contracts" between different parts of the system.
"""

from .module import (
    ModuleRecord,
    CatalogEntry,
    ModuleDetail,
    coerce_credit,
    is_real_grade,
    is_pass_fail_grade,
)
from .state import AcademicSettings, YearView, UiToggles, ProgramState
from .results import (
    ScoreSummary,
    SemesterSummary,
    QuotaStatus,
    QuotaRejection,
    Transition,
)

__all__ = [
    # Module models
    "ModuleRecord",
    "CatalogEntry",
    "ModuleDetail",
    "coerce_credit",
    "is_real_grade",
    "is_pass_fail_grade",
    # State records
    "AcademicSettings",
    "YearView",
    "UiToggles",
    "ProgramState",
    # Engine results
    "ScoreSummary",
    "SemesterSummary",
    "QuotaStatus",
    "QuotaRejection",
    "Transition",
]
