"""
Module data models.

Contains the ModuleRecord dataclass that represents one course on the
student's plan, plus the shapes returned by the module catalog.
"""

import math
from dataclasses import dataclass
from typing import Any

from ..config import GRADE_POINTS, PASS_FAIL_GRADES, UNGRADED


def coerce_credit(value: Any) -> float:
    """
    Turn a credit value from any source into a number.

    The catalog reports credits as strings ("4"), and persisted data may be
    hand-edited. Anything that is not a finite, non-negative number counts
    as 0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        credit = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(credit) or math.isinf(credit) or credit < 0:
        return 0.0
    return credit


def is_real_grade(grade: str) -> bool:
    """True if the grade carries a point value (A+ down to F)."""
    return GRADE_POINTS.get(grade) is not None


def is_pass_fail_grade(grade: str) -> bool:
    """True for S/U, CS/CU and N/A - grades that were never converted."""
    return grade in PASS_FAIL_GRADES


@dataclass(frozen=True)
class ModuleRecord:
    """
    A single module placed on the student's plan.

    Records are immutable; every placement operation produces a replacement
    via dataclasses.replace, so an earlier snapshot of the collection is
    never changed underneath its reader.

    Attributes:
        module_code: Catalog code (e.g., "CS1101S"), unique within a plan
        title: Human-readable module title
        module_credit: Credit weight
        letter_grade: Grade symbol from GRADE_POINTS, or "" when ungraded
        is_exempted: True if the module is marked pass/fail exempted
        semester: Semester label (e.g., "AY24/25 Sem 1")
        id: Stable identifier used by every positional operation
    """
    module_code: str
    title: str
    module_credit: float
    semester: str
    id: int
    letter_grade: str = UNGRADED
    is_exempted: bool = False

    @property
    def counts_against_quota(self) -> bool:
        """Exempted with a real grade, i.e. a converted grade."""
        return self.is_exempted and is_real_grade(self.letter_grade)

    @property
    def can_toggle_exemption(self) -> bool:
        return self.letter_grade != UNGRADED and not is_pass_fail_grade(self.letter_grade)

    def to_dict(self) -> dict:
        return {
            "moduleCode": self.module_code,
            "title": self.title,
            "moduleCredit": self.module_credit,
            "letterGrade": self.letter_grade,
            "isExempted": self.is_exempted,
            "semester": self.semester,
            "id": self.id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ModuleRecord":
        """
        Build a record from its persisted shape.

        Raises:
            ValueError: if a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Module record must be an object, got {type(data).__name__}")
        try:
            code = data["moduleCode"]
            semester = data["semester"]
            module_id = data["id"]
        except KeyError as e:
            raise ValueError(f"Module record missing field {e}") from e

        if not isinstance(code, str) or not code:
            raise ValueError("moduleCode must be a non-empty string")
        if not isinstance(semester, str):
            raise ValueError("semester must be a string")
        if isinstance(module_id, bool) or not isinstance(module_id, int):
            raise ValueError("id must be an integer")

        grade = data.get("letterGrade") or UNGRADED
        if not isinstance(grade, str):
            raise ValueError("letterGrade must be a string")
        exempted = data.get("isExempted", False)
        if not isinstance(exempted, bool):
            raise ValueError("isExempted must be a boolean")

        return cls(
            module_code=code,
            title=str(data.get("title", "")),
            module_credit=coerce_credit(data.get("moduleCredit")),
            semester=semester,
            id=module_id,
            letter_grade=grade,
            is_exempted=exempted,
        )


@dataclass(frozen=True)
class CatalogEntry:
    """One row of the catalog's module list (used for search)."""
    module_code: str
    title: str


@dataclass(frozen=True)
class ModuleDetail:
    """Catalog metadata needed to place a module."""
    module_code: str
    title: str
    module_credit: float
