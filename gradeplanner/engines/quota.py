"""
Exemption Quota Engine.

Computes how many pass/fail exemption credits remain in each window.
"""

from typing import Optional

from ..config import (
    CREDITS_PER_SLOT,
    FIRST_WINDOW_CAP,
    FIRST_WINDOW_CAP_HIGH_TIER,
    SECOND_WINDOW_CAP,
)
from ..models import QuotaStatus, coerce_credit
from .semesters import is_special_term

FIRST_WINDOW = "first"
SECOND_WINDOW = "second"


class ExemptionQuotaEngine:
    """
    Tracks pass/fail exemption usage against the two-window policy.

    ═══════════════════════════════════════════════════════════════════════════
    WINDOWS
    ═══════════════════════════════════════════════════════════════════════════

    FIRST WINDOW:  the first two regular (non-special-term) semesters of the
                   catalog, e.g. AY24/25 Sem 1 and AY24/25 Sem 2.
    SECOND WINDOW: every other semester in the catalog, special terms
                   included.

    CAPS:
        first cap        = 20 (high tier) or 32
        first remaining  = max(0, first cap - first used)
        second cap       = min(first remaining, 12)
        second remaining = max(0, second cap - second used)

    The second cap depends on what is left of the first window at query
    time, so exempting more in the first window can shrink the second.

    Only modules exempted with a real letter grade consume quota; a module
    graded S/U or CS/CU natively was never converted.

    ═══════════════════════════════════════════════════════════════════════════

    The engine holds no counters. compute() walks the whole collection on
    every call, because grade edits, removals and semester/year cascades can
    all change usage.
    """

    def __init__(self, semesters: list, high_exemption_tier: bool = False):
        self.semesters = list(semesters)
        self.high_exemption_tier = high_exemption_tier
        self.first_window = [s for s in self.semesters if not is_special_term(s)][:2]
        self.second_window = [s for s in self.semesters if s not in self.first_window]

    @property
    def first_cap(self) -> int:
        return FIRST_WINDOW_CAP_HIGH_TIER if self.high_exemption_tier else FIRST_WINDOW_CAP

    def window_of(self, semester: str) -> Optional[str]:
        """Return FIRST_WINDOW, SECOND_WINDOW, or None for unknown labels."""
        if semester in self.first_window:
            return FIRST_WINDOW
        if semester in self.second_window:
            return SECOND_WINDOW
        return None

    def compute(self, modules) -> QuotaStatus:
        first_used = 0.0
        second_used = 0.0

        for module in modules:
            if not module.counts_against_quota:
                continue
            credit = coerce_credit(module.module_credit)
            window = self.window_of(module.semester)
            if window == FIRST_WINDOW:
                first_used += credit
            elif window == SECOND_WINDOW:
                second_used += credit

        first_cap = self.first_cap
        first_remaining = max(0, first_cap - first_used)

        second_cap = min(first_remaining, SECOND_WINDOW_CAP)
        second_remaining = max(0, second_cap - second_used)

        return QuotaStatus(
            first_used=first_used,
            second_used=second_used,
            first_cap=first_cap,
            second_cap=second_cap,
            first_remaining=first_remaining,
            second_remaining=second_remaining,
            first_slots=int(first_remaining // CREDITS_PER_SLOT),
            second_slots=int(second_remaining // CREDITS_PER_SLOT),
        )

    def remaining_for(self, status: QuotaStatus, semester: str) -> float:
        """Remaining capacity of the window holding `semester`.

        Labels outside the catalog are checked against the second window.
        """
        if self.window_of(semester) == FIRST_WINDOW:
            return status.first_remaining
        return status.second_remaining
