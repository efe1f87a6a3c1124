"""
Planning and scoring engines.

This package contains the pure business logic of the planner. Nothing in
here performs I/O.
"""

from .semesters import SemesterCatalog, year_of, term_of, is_special_term
from .scoring import ScoringEngine
from .quota import ExemptionQuotaEngine, FIRST_WINDOW, SECOND_WINDOW
from .placement import PlacementEngine, next_module_id

__all__ = [
    "SemesterCatalog",
    "year_of",
    "term_of",
    "is_special_term",
    "ScoringEngine",
    "ExemptionQuotaEngine",
    "FIRST_WINDOW",
    "SECOND_WINDOW",
    "PlacementEngine",
    "next_module_id",
]
