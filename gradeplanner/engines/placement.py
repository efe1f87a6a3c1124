"""
Placement Engine.

Every change to a student's plan goes through one of the commands in this
module. Commands are pure: they take a ProgramState snapshot and return a
Transition holding the next state, the storage keys it touched and, for
refused exemption toggles, the rejection.
"""

import logging
import time
from dataclasses import replace
from typing import Optional

from ..config import (
    DEFAULT_FOCUS_YEAR,
    GRADE_POINTS,
    PROGRAM_START_OPTIONS,
    STORAGE_KEYS,
    UNGRADED,
)
from ..models import (
    ModuleDetail,
    ModuleRecord,
    ProgramState,
    QuotaRejection,
    Transition,
    coerce_credit,
)
from .quota import ExemptionQuotaEngine
from .semesters import SemesterCatalog

logger = logging.getLogger(__name__)

MODULES = STORAGE_KEYS["MODULES"]
SETTINGS = STORAGE_KEYS["ACADEMIC_SETTINGS"]
ACTIVE = STORAGE_KEYS["ACTIVE_SEMESTERS"]
YEAR_VIEW = STORAGE_KEYS["YEAR_VIEW"]
UI = STORAGE_KEYS["UI_TOGGLES"]


def next_module_id(state: ProgramState, clock=time.time_ns) -> int:
    """
    Allocate an id greater than every id already in the plan.

    Ids are millisecond timestamps, bumped past the current maximum so two
    adds in the same millisecond (or a clock step backwards) still yield
    strictly increasing ids.
    """
    now_ms = clock() // 1_000_000
    highest = max((m.id for m in state.modules), default=0)
    return max(now_ms, highest + 1)


class PlacementEngine:
    """
    Command set over ProgramState.

    ═══════════════════════════════════════════════════════════════════════════
    CONTRACT
    ═══════════════════════════════════════════════════════════════════════════

    - A command never mutates its input. It returns Transition(state=...)
      with a new snapshot, or the same snapshot and an empty `changed` set
      when it is a no-op.
    - Unknown module ids and unknown semester labels are no-ops, not errors.
    - Cascades (semester/year removal, program start change) update the
      view records and the module collection in one transition, so no
      caller ever sees a module whose semester has already been removed.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def catalog_for(state: ProgramState) -> SemesterCatalog:
        return SemesterCatalog(state.settings.program_start)

    @classmethod
    def quota_engine_for(cls, state: ProgramState) -> ExemptionQuotaEngine:
        return ExemptionQuotaEngine(
            cls.catalog_for(state).semesters, state.settings.high_exemption_tier
        )

    @staticmethod
    def _replace_module(state: ProgramState, updated: ModuleRecord) -> ProgramState:
        modules = tuple(updated if m.id == updated.id else m for m in state.modules)
        return replace(state, modules=modules)

    @staticmethod
    def _unchanged(state: ProgramState) -> Transition:
        return Transition(state=state)

    # -------------------------------------------------------------------------
    # Module commands
    # -------------------------------------------------------------------------

    def add_module(self, state: ProgramState, detail: ModuleDetail, semester: str,
                   module_id: Optional[int] = None) -> Transition:
        """
        Append a module resolved from the catalog to `semester`.

        The catalog lookup happens before this call; by the time it runs the
        module detail is in hand, so the append itself cannot fail halfway.
        """
        if state.has_module_code(detail.module_code):
            logger.debug("Module %s already on plan; add ignored", detail.module_code)
            return self._unchanged(state)
        if semester not in self.catalog_for(state):
            logger.warning("Cannot add %s to unknown semester %r", detail.module_code, semester)
            return self._unchanged(state)

        record = ModuleRecord(
            module_code=detail.module_code,
            title=detail.title,
            module_credit=coerce_credit(detail.module_credit),
            semester=semester,
            id=module_id if module_id is not None else next_module_id(state),
            letter_grade=UNGRADED,
            is_exempted=False,
        )
        return Transition(
            state=replace(state, modules=state.modules + (record,)),
            changed=frozenset({MODULES}),
        )

    def remove_module(self, state: ProgramState, module_id: int) -> Transition:
        if state.find_module(module_id) is None:
            return self._unchanged(state)
        modules = tuple(m for m in state.modules if m.id != module_id)
        return Transition(state=replace(state, modules=modules), changed=frozenset({MODULES}))

    def update_grade(self, state: ProgramState, module_id: int, grade: str) -> Transition:
        """
        Set a module's grade. Always clears its exemption, since the
        exemption was granted against the previous grade.
        """
        module = state.find_module(module_id)
        if module is None:
            return self._unchanged(state)
        if grade != UNGRADED and grade not in GRADE_POINTS:
            logger.warning("Ignoring unknown grade %r for %s", grade, module.module_code)
            return self._unchanged(state)

        updated = replace(module, letter_grade=grade, is_exempted=False)
        return Transition(
            state=self._replace_module(state, updated),
            changed=frozenset({MODULES}),
        )

    def toggle_exemption(self, state: ProgramState, module_id: int) -> Transition:
        """
        Flip a module's pass/fail exemption.

        Turning it ON consults the quota for the module's window first; if
        the module's credit exceeds what is left, the transition carries a
        QuotaRejection and the state is returned untouched. Turning it OFF
        is always allowed.
        """
        module = state.find_module(module_id)
        if module is None or not module.can_toggle_exemption:
            return self._unchanged(state)

        if not module.is_exempted:
            quota_engine = self.quota_engine_for(state)
            status = quota_engine.compute(state.modules)
            available = quota_engine.remaining_for(status, module.semester)
            credit = coerce_credit(module.module_credit)
            if available < credit:
                window = quota_engine.window_of(module.semester) or "second"
                return Transition(
                    state=state,
                    rejection=QuotaRejection(
                        module_id=module_id,
                        window=window,
                        available=available,
                        required=credit,
                    ),
                )

        updated = replace(module, is_exempted=not module.is_exempted)
        return Transition(
            state=self._replace_module(state, updated),
            changed=frozenset({MODULES}),
        )

    def move_module(self, state: ProgramState, module_id: int, target_semester: str,
                    insert_index: Optional[int] = None) -> Transition:
        """
        Move a module to `target_semester`, optionally at a position.

        ALGORITHM:
        1. Take the module out of the collection.
        2. Reassign its semester.
        3. With an index: split the rest into modules outside the target
           semester and the target's ordered sublist, splice the module into
           the sublist, and concatenate (others first, then the target).
           Without an index: append it to the end of the collection, which
           is also the end of the target semester's sublist.

        Indexes follow list.insert: past the end appends, negative counts
        from the end.
        """
        module = state.find_module(module_id)
        if module is None:
            return self._unchanged(state)
        if target_semester not in self.catalog_for(state):
            logger.warning("Cannot move %s to unknown semester %r",
                           module.module_code, target_semester)
            return self._unchanged(state)

        remaining = [m for m in state.modules if m.id != module_id]
        moved = replace(module, semester=target_semester)

        if insert_index is None:
            modules = remaining + [moved]
        else:
            target = [m for m in remaining if m.semester == target_semester]
            others = [m for m in remaining if m.semester != target_semester]
            target.insert(insert_index, moved)
            modules = others + target

        modules = tuple(modules)
        if modules == state.modules:
            return self._unchanged(state)
        return Transition(state=replace(state, modules=modules), changed=frozenset({MODULES}))

    # -------------------------------------------------------------------------
    # Semester and year commands
    # -------------------------------------------------------------------------

    def add_semester(self, state: ProgramState, semester: str) -> Transition:
        if semester in state.active_semesters or semester not in self.catalog_for(state):
            return self._unchanged(state)
        return Transition(
            state=replace(state, active_semesters=state.active_semesters + (semester,)),
            changed=frozenset({ACTIVE}),
        )

    def remove_semester(self, state: ProgramState, semester: str) -> Transition:
        """Close a semester and drop every module placed in it."""
        return self._remove_semesters(state, [semester])

    def _remove_semesters(self, state: ProgramState, semesters: list) -> Transition:
        active = tuple(s for s in state.active_semesters if s not in semesters)
        modules = tuple(m for m in state.modules if m.semester not in semesters)

        changed = set()
        if active != state.active_semesters:
            changed.add(ACTIVE)
        if modules != state.modules:
            changed.add(MODULES)
        if not changed:
            return self._unchanged(state)
        return Transition(
            state=replace(state, active_semesters=active, modules=modules),
            changed=frozenset(changed),
        )

    def add_year(self, state: ProgramState) -> Transition:
        """Show the next catalog year that is not visible yet."""
        visible = state.year_view.visible_years
        next_year = next((y for y in self.catalog_for(state).years if y not in visible), None)
        if next_year is None:
            return self._unchanged(state)
        view = replace(state.year_view, visible_years=visible + (next_year,))
        return Transition(state=replace(state, year_view=view), changed=frozenset({YEAR_VIEW}))

    def remove_year(self, state: ProgramState, year: str) -> Transition:
        """
        Remove a year window: its four semesters, their modules, and the
        year itself from the visible list. If the year had focus, focus
        moves to the first remaining visible year.
        """
        cascade = self._remove_semesters(state, self.catalog_for(state).semesters_of_year(year))
        new_state = cascade.state
        changed = set(cascade.changed)

        view = new_state.year_view
        visible = tuple(y for y in view.visible_years if y != year)
        selected = view.selected_year
        if selected == year:
            selected = visible[0] if visible else ""
        if visible != view.visible_years or selected != view.selected_year:
            new_state = replace(
                new_state,
                year_view=replace(view, visible_years=visible, selected_year=selected),
            )
            changed.add(YEAR_VIEW)

        return Transition(state=new_state, changed=frozenset(changed))

    def select_year(self, state: ProgramState, year: str) -> Transition:
        view = state.year_view
        if year not in view.visible_years or year == view.selected_year:
            return self._unchanged(state)
        return Transition(
            state=replace(state, year_view=replace(view, selected_year=year)),
            changed=frozenset({YEAR_VIEW}),
        )

    def apply_view_defaults(self, state: ProgramState) -> Transition:
        """
        Fill in an empty year view and open the focused year's semesters.

        - Nothing visible: show and select DEFAULT_FOCUS_YEAR if the catalog
          has it, else the first catalog year.
        - Nothing selected: select the first visible year.
        - The regular semesters (Sem 1, Sem 2) of the selected year are
          always active.
        """
        catalog = self.catalog_for(state)
        years = catalog.years
        view = state.year_view
        changed = set()

        if not view.visible_years:
            default_year = DEFAULT_FOCUS_YEAR if DEFAULT_FOCUS_YEAR in years else years[0]
            view = replace(view, visible_years=(default_year,), selected_year=default_year)
        elif not view.selected_year:
            view = replace(view, selected_year=view.visible_years[0])
        if view != state.year_view:
            changed.add(YEAR_VIEW)

        active = state.active_semesters
        missing = tuple(
            s for s in catalog.regular_semesters_of_year(view.selected_year) if s not in active
        )
        if missing:
            active = active + missing
            changed.add(ACTIVE)

        if not changed:
            return self._unchanged(state)
        return Transition(
            state=replace(state, year_view=view, active_semesters=active),
            changed=frozenset(changed),
        )

    # -------------------------------------------------------------------------
    # Settings commands
    # -------------------------------------------------------------------------

    def change_program_start(self, state: ProgramState, program_start: str) -> Transition:
        """
        Switch cohort. The semester catalog is regenerated, modules whose
        semester is not in it are dropped, and the view state is reset.
        """
        if program_start not in PROGRAM_START_OPTIONS:
            logger.warning("Ignoring unknown program start %r", program_start)
            return self._unchanged(state)
        if program_start == state.settings.program_start:
            return self._unchanged(state)

        semesters = SemesterCatalog(program_start).semesters
        modules = tuple(m for m in state.modules if m.semester in semesters)
        dropped = len(state.modules) - len(modules)
        if dropped:
            logger.info("Program start changed to %s; dropped %d module(s)", program_start, dropped)

        new_state = replace(
            state,
            settings=replace(state.settings, program_start=program_start),
            modules=modules,
            active_semesters=(),
            year_view=replace(state.year_view, visible_years=(), selected_year=""),
        )
        return Transition(
            state=new_state,
            changed=frozenset({SETTINGS, MODULES, ACTIVE, YEAR_VIEW}),
        )

    def toggle_high_exemption_tier(self, state: ProgramState) -> Transition:
        settings = replace(
            state.settings, high_exemption_tier=not state.settings.high_exemption_tier
        )
        return Transition(state=replace(state, settings=settings), changed=frozenset({SETTINGS}))

    def toggle_hide_grades(self, state: ProgramState) -> Transition:
        ui = replace(state.ui, hide_grades=not state.ui.hide_grades)
        return Transition(state=replace(state, ui=ui), changed=frozenset({UI}))

    def dismiss_hint(self, state: ProgramState) -> Transition:
        if not state.ui.show_hint:
            return self._unchanged(state)
        ui = replace(state.ui, show_hint=False)
        return Transition(state=replace(state, ui=ui), changed=frozenset({UI}))
