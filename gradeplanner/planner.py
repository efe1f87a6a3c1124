"""
Academic Planner - Main Orchestrator.

This module contains the AcademicPlanner class that owns the program state
and connects the engines to the catalog, storage and notification
collaborators.
"""

import logging
from typing import Optional

from .config import SEARCH_MAX_RESULTS, SEARCH_MIN_CHARS
from .data import CatalogClient, ProgramStateStore
from .engines import (
    ExemptionQuotaEngine,
    PlacementEngine,
    ScoringEngine,
    SemesterCatalog,
    year_of,
)
from .errors import CatalogUnavailableError
from .models import (
    ModuleRecord,
    ProgramState,
    QuotaRejection,
    QuotaStatus,
    ScoreSummary,
    SemesterSummary,
    Transition,
)
from .notifications import NotificationChannel

logger = logging.getLogger(__name__)


class AcademicPlanner:
    """
    Main interface for the planner.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: SINGLE WRITER
    ═══════════════════════════════════════════════════════════════════════════

    The planner is the only object that replaces the program state. Every
    operation follows the same path:

    1. Read the current snapshot
    2. Ask PlacementEngine for a Transition (pure, no I/O)
    3. Commit: swap in the new snapshot and save the records it changed
    4. Publish the rejection message, if the transition carries one

    Scores and quotas are never stored; summary(), quota() and
    semester_summary() recompute them from the committed snapshot.

    The one operation that waits on the outside world is add_module(): it
    fetches module details from the catalog before building its
    transition. If the lookup raises, nothing has been committed.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        planner = AcademicPlanner()
        planner.load_catalog()

        module = planner.add_module("CS1101S", "AY24/25 Sem 1")
        planner.update_grade(module.id, "A")
        planner.toggle_exemption(module.id)

        print(planner.summary().average_display)
    """

    def __init__(self, catalog: CatalogClient = None, store: ProgramStateStore = None,
                 notifications: NotificationChannel = None):
        self.catalog = catalog or CatalogClient()
        self.store = store or ProgramStateStore()
        self.notifications = notifications or NotificationChannel()
        self.placement = PlacementEngine()

        self.catalog_entries = []
        self.catalog_error = None
        self._catalog_loaded = False

        self.state = self.store.load()
        self._apply(self.placement.apply_view_defaults(self.state))

    # -------------------------------------------------------------------------
    # Commit path
    # -------------------------------------------------------------------------

    def _apply(self, transition: Transition) -> Transition:
        if transition.rejection is not None:
            logger.info("Rejected: %s", transition.rejection.message)
            self.notifications.publish(transition.rejection.message)
        if transition.changed:
            self.state = transition.state
            self.store.save(self.state, transition.changed)
        return transition

    def _apply_with_defaults(self, transition: Transition) -> Transition:
        """Commit, then re-open the focused year's semesters if needed."""
        self._apply(transition)
        if transition.changed:
            self._apply(self.placement.apply_view_defaults(self.state))
        return transition

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    @property
    def catalog_ready(self) -> bool:
        return self._catalog_loaded

    def load_catalog(self) -> bool:
        """
        Fetch the catalog's module list. Call again to retry after a failure.

        Until this succeeds, add_module() refuses to run. The failure is kept
        in `catalog_error` for the caller to display next to a retry prompt.
        """
        try:
            self.catalog_entries = self.catalog.list_all_modules()
        except CatalogUnavailableError as e:
            self.catalog_error = str(e)
            self._catalog_loaded = False
            logger.error("Module list unavailable: %s", e)
            return False
        self.catalog_error = None
        self._catalog_loaded = True
        return True

    def search_modules(self, term: str) -> list:
        """Case-insensitive code/title search over the loaded module list."""
        if len(term) < SEARCH_MIN_CHARS:
            return []
        needle = term.lower()
        matches = (
            e for e in self.catalog_entries
            if needle in e.module_code.lower() or needle in e.title.lower()
        )
        return [e for _, e in zip(range(SEARCH_MAX_RESULTS), matches)]

    # -------------------------------------------------------------------------
    # Module operations
    # -------------------------------------------------------------------------

    def add_module(self, module_code: str, semester: str) -> Optional[ModuleRecord]:
        """
        Look up a module in the catalog and place it in `semester`.

        Returns:
            The new ModuleRecord, or None if the module is already on the
            plan or the semester does not exist.

        Raises:
            CatalogUnavailableError: module list not loaded, or the lookup
                failed; nothing was changed and the call may be retried
            ModuleNotInCatalogError: the catalog has no such module
        """
        if not self.catalog_ready:
            raise CatalogUnavailableError("Module list is not loaded; retry loading the catalog")
        if self.state.has_module_code(module_code):
            return None
        if semester not in self.semester_catalog:
            logger.warning("Cannot add %s to unknown semester %r", module_code, semester)
            return None

        detail = self.catalog.get_module_detail(module_code)

        transition = self._apply(self.placement.add_module(self.state, detail, semester))
        if not transition.applied:
            return None
        return transition.state.modules[-1]

    def remove_module(self, module_id: int) -> bool:
        return self._apply(self.placement.remove_module(self.state, module_id)).applied

    def update_grade(self, module_id: int, grade: str) -> bool:
        return self._apply(self.placement.update_grade(self.state, module_id, grade)).applied

    def toggle_exemption(self, module_id: int) -> Optional[QuotaRejection]:
        """
        Flip a module's exemption.

        Returns:
            QuotaRejection when the window is out of capacity (the message is
            also published to `notifications`), else None
        """
        return self._apply(self.placement.toggle_exemption(self.state, module_id)).rejection

    def move_module(self, module_id: int, target_semester: str,
                    insert_index: Optional[int] = None) -> bool:
        transition = self.placement.move_module(
            self.state, module_id, target_semester, insert_index
        )
        return self._apply(transition).applied

    # -------------------------------------------------------------------------
    # Semester, year and settings operations
    # -------------------------------------------------------------------------

    def add_semester(self, semester: str) -> bool:
        return self._apply(self.placement.add_semester(self.state, semester)).applied

    def remove_semester(self, semester: str) -> bool:
        """
        Drop a semester and its modules. A regular semester of the focused
        year is reopened empty right away, since those are always active.
        """
        transition = self.placement.remove_semester(self.state, semester)
        return self._apply_with_defaults(transition).applied

    def add_year(self) -> bool:
        return self._apply(self.placement.add_year(self.state)).applied

    def remove_year(self, year: str) -> bool:
        return self._apply_with_defaults(self.placement.remove_year(self.state, year)).applied

    def select_year(self, year: str) -> bool:
        return self._apply_with_defaults(self.placement.select_year(self.state, year)).applied

    def change_program_start(self, program_start: str) -> bool:
        transition = self.placement.change_program_start(self.state, program_start)
        return self._apply_with_defaults(transition).applied

    def toggle_high_exemption_tier(self) -> bool:
        return self._apply(self.placement.toggle_high_exemption_tier(self.state)).applied

    def toggle_hide_grades(self) -> bool:
        return self._apply(self.placement.toggle_hide_grades(self.state)).applied

    def dismiss_hint(self) -> bool:
        return self._apply(self.placement.dismiss_hint(self.state)).applied

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    @property
    def semester_catalog(self) -> SemesterCatalog:
        return SemesterCatalog(self.state.settings.program_start)

    def summary(self) -> ScoreSummary:
        return ScoringEngine.aggregate(self.state.modules)

    def semester_summary(self, semester: str) -> SemesterSummary:
        return ScoringEngine.semester_summary(self.state.modules, semester)

    def quota(self) -> QuotaStatus:
        engine = ExemptionQuotaEngine(
            self.semester_catalog.semesters, self.state.settings.high_exemption_tier
        )
        return engine.compute(self.state.modules)

    def visible_semesters(self) -> list:
        """Active semesters of the selected year, in catalog order."""
        year = self.state.year_view.selected_year
        return [
            s for s in self.semester_catalog.semesters
            if year_of(s) == year and s in self.state.active_semesters
        ]

    @property
    def modules(self) -> tuple:
        return self.state.modules

    def modules_in(self, semester: str) -> list:
        return self.state.modules_in(semester)
