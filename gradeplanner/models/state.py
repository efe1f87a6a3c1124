"""
Program state data models.

ProgramState is the single snapshot the placement engine transforms. It is
split into the same five records the store persists, so a transition can
report exactly which records it touched.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..config import DEFAULT_PROGRAM_START, PROGRAM_START_OPTIONS
from .module import ModuleRecord


@dataclass(frozen=True)
class AcademicSettings:
    """
    Cohort settings from which the semester catalog is derived.

    program_start: One of PROGRAM_START_OPTIONS (e.g., "AY24/25")
    high_exemption_tier: Lowers the first-window exemption cap
    """
    program_start: str = DEFAULT_PROGRAM_START
    high_exemption_tier: bool = False

    def to_dict(self) -> dict:
        return {
            "programStart": self.program_start,
            "highExemptionTier": self.high_exemption_tier,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AcademicSettings":
        if not isinstance(data, dict):
            raise ValueError("Academic settings must be an object")
        program_start = data.get("programStart", DEFAULT_PROGRAM_START)
        if program_start not in PROGRAM_START_OPTIONS:
            raise ValueError(f"Unknown program start: {program_start!r}")
        return cls(
            program_start=program_start,
            high_exemption_tier=bool(data.get("highExemptionTier", False)),
        )


@dataclass(frozen=True)
class YearView:
    """Which program years are on screen, and which one has focus."""
    visible_years: tuple = ()
    selected_year: str = ""

    def to_dict(self) -> dict:
        return {
            "visibleYears": list(self.visible_years),
            "selectedYear": self.selected_year,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "YearView":
        if not isinstance(data, dict):
            raise ValueError("Year view must be an object")
        visible = data.get("visibleYears", [])
        selected = data.get("selectedYear", "")
        if not isinstance(visible, list) or not all(isinstance(y, str) for y in visible):
            raise ValueError("visibleYears must be a list of strings")
        if not isinstance(selected, str):
            raise ValueError("selectedYear must be a string")
        return cls(visible_years=tuple(visible), selected_year=selected)


@dataclass(frozen=True)
class UiToggles:
    show_hint: bool = True
    hide_grades: bool = False

    def to_dict(self) -> dict:
        return {"showHint": self.show_hint, "hideGrades": self.hide_grades}

    @classmethod
    def from_dict(cls, data: dict) -> "UiToggles":
        if not isinstance(data, dict):
            raise ValueError("UI toggles must be an object")
        return cls(
            show_hint=bool(data.get("showHint", True)),
            hide_grades=bool(data.get("hideGrades", False)),
        )


@dataclass(frozen=True)
class ProgramState:
    """
    Everything the planner knows about one student's plan.

    modules: Ordered tuple of ModuleRecord (order within a semester is the
             display order)
    active_semesters: Ordered tuple of labels open for module entry
    """
    modules: tuple = ()
    settings: AcademicSettings = field(default_factory=AcademicSettings)
    active_semesters: tuple = ()
    year_view: YearView = field(default_factory=YearView)
    ui: UiToggles = field(default_factory=UiToggles)

    def find_module(self, module_id: int) -> Optional[ModuleRecord]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def has_module_code(self, module_code: str) -> bool:
        return any(m.module_code == module_code for m in self.modules)

    def modules_in(self, semester: str) -> list:
        return [m for m in self.modules if m.semester == semester]
