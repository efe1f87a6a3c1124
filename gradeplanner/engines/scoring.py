"""
Scoring Engine.

Computes grade point averages and credit totals from a module collection.
"""

from ..config import GRADE_POINTS
from ..models import ScoreSummary, SemesterSummary, coerce_credit


class ScoringEngine:
    """
    Aggregates grades and credits.

    RULES:
    ------
    - Every module adds its credit to total_credits, graded or not.
    - A module exempted with a real letter grade is left out of the average
      entirely (it was converted to pass/fail).
    - Otherwise a grade with a point value adds points x credit to the
      numerator and credit to graded_credits. S/U, CS/CU and N/A carry no
      points and therefore never move the average.

    Example:
        A (5.0) x 4 credits + B- (3.0) x 4 credits
        -> (20 + 12) / 8 = 4.00

    Both entry points are pure: they read the collection and return a fresh
    summary. Callers re-run them after every change instead of keeping
    running totals.
    """

    @staticmethod
    def aggregate(modules) -> ScoreSummary:
        total_points = 0.0
        graded_credits = 0.0
        total_credits = 0.0

        for module in modules:
            credit = coerce_credit(module.module_credit)
            total_credits += credit

            if module.counts_against_quota:
                continue

            points = GRADE_POINTS.get(module.letter_grade)
            if points is not None and credit > 0:
                total_points += points * credit
                graded_credits += credit

        average = total_points / graded_credits if graded_credits > 0 else 0.0
        return ScoreSummary(
            average=round(average, 2),
            graded_credits=graded_credits,
            total_credits=total_credits,
        )

    @classmethod
    def semester_summary(cls, modules, semester: str) -> SemesterSummary:
        semester_modules = [m for m in modules if m.semester == semester]
        return SemesterSummary(
            semester=semester,
            module_count=len(semester_modules),
            score=cls.aggregate(semester_modules),
            exempted_credits=cls.exempted_credits(semester_modules),
        )

    @staticmethod
    def exempted_credits(modules) -> float:
        """Credits converted to pass/fail among the given modules."""
        return sum(coerce_credit(m.module_credit) for m in modules if m.counts_against_quota)
