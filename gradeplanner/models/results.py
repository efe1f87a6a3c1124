"""
Engine result data models.

Scoring and quota results are derived views: they are rebuilt from the
module collection on every query and never stored.
"""

from dataclasses import dataclass, field
from typing import Optional

from .state import ProgramState


@dataclass
class ScoreSummary:
    """
    Result of aggregating a module collection.

    average: Grade point average rounded to 2 places (0.0 if nothing graded)
    graded_credits: Credits that count toward the average
    total_credits: Every credit in the collection, graded or not
    """
    average: float
    graded_credits: float
    total_credits: float

    @property
    def average_display(self) -> str:
        return f"{self.average:.2f}"


@dataclass
class SemesterSummary:
    """Per-semester breakdown shown under each semester column."""
    semester: str
    module_count: int
    score: ScoreSummary
    exempted_credits: float


@dataclass
class QuotaStatus:
    """
    Remaining pass/fail exemption capacity in both windows.

    Example (standard tier, one 4-credit module exempted in Sem 1):
        first_used: 4
        first_cap: 32
        first_remaining: 28
        second_cap: 12
        second_remaining: 12
        first_slots: 7
        second_slots: 3
    """
    first_used: float
    second_used: float
    first_cap: float
    second_cap: float
    first_remaining: float
    second_remaining: float
    first_slots: int
    second_slots: int


@dataclass
class QuotaRejection:
    """
    An exemption toggle refused for lack of capacity.

    window: "first" or "second"
    available: Credits still free in that window
    required: Credits the module would have consumed
    """
    module_id: int
    window: str
    available: float
    required: float

    @property
    def message(self) -> str:
        where = "the first two semesters" if self.window == "first" else "subsequent semesters"
        return (
            f"Not enough exemption credits remaining for {where}. "
            f"Available: {self.available:g} credits"
        )


@dataclass
class Transition:
    """
    Outcome of one placement command.

    state: The state to commit (the input state itself when nothing changed)
    changed: Storage keys whose records differ from the input state
    rejection: Set when a quota check refused the command
    """
    state: ProgramState
    changed: frozenset = field(default_factory=frozenset)
    rejection: Optional[QuotaRejection] = None

    @property
    def applied(self) -> bool:
        return bool(self.changed)
