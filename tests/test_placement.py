"""Tests for placement commands over ProgramState."""

from dataclasses import replace

import pytest

from gradeplanner.engines import PlacementEngine, next_module_id
from gradeplanner.models import AcademicSettings, ModuleDetail, YearView

from .conftest import S1, S2, ST1, Y2S1, make_module, make_state


@pytest.fixture
def engine():
    return PlacementEngine()


def codes_in(state, semester):
    return [m.module_code for m in state.modules_in(semester)]


# --- Add / remove ----------------------------------------------------------


def test_add_appends_ungraded_module(engine):
    state = make_state(make_module(1, code="MA1521"))

    transition = engine.add_module(state, ModuleDetail("CS1101S", "Programming", 4), S1, 99)

    assert transition.changed == {"modules"}
    added = transition.state.modules[-1]
    assert added.module_code == "CS1101S"
    assert added.letter_grade == ""
    assert added.is_exempted is False
    assert added.semester == S1
    assert added.id == 99


def test_add_duplicate_code_is_noop(engine):
    state = make_state(make_module(1, code="CS1101S"))

    transition = engine.add_module(state, ModuleDetail("CS1101S", "Programming", 4), S2)

    assert not transition.applied
    assert transition.state is state


def test_add_to_unknown_semester_is_noop(engine):
    state = make_state()
    transition = engine.add_module(state, ModuleDetail("CS1101S", "Programming", 4), "AY40/41 Sem 1")
    assert not transition.applied


def test_add_coerces_string_credit(engine):
    transition = engine.add_module(make_state(), ModuleDetail("CS1101S", "Programming", "4"), S1, 1)
    assert transition.state.modules[0].module_credit == 4.0


def test_next_module_id_is_monotonic():
    state = make_state(make_module(5_000_000_000_000))
    assert next_module_id(state, clock=lambda: 1_000_000_000_000_000_000) == 5_000_000_000_001

    assert next_module_id(make_state(), clock=lambda: 7_000_000) == 7


def test_remove_module(engine):
    state = make_state(make_module(1), make_module(2), make_module(3))

    transition = engine.remove_module(state, 2)

    assert [m.id for m in transition.state.modules] == [1, 3]


def test_remove_unknown_module_is_noop(engine):
    state = make_state(make_module(1))
    assert not engine.remove_module(state, 42).applied


# --- Grades and exemptions -------------------------------------------------


def test_update_grade_clears_exemption(engine):
    state = make_state(make_module(1, grade="A", exempted=True))

    transition = engine.update_grade(state, 1, "B")

    module = transition.state.find_module(1)
    assert module.letter_grade == "B"
    assert module.is_exempted is False


def test_update_grade_preserves_order(engine):
    state = make_state(make_module(1), make_module(2), make_module(3))
    transition = engine.update_grade(state, 2, "A")
    assert [m.id for m in transition.state.modules] == [1, 2, 3]


def test_update_grade_to_ungraded(engine):
    state = make_state(make_module(1, grade="A"))
    assert engine.update_grade(state, 1, "").state.find_module(1).letter_grade == ""


def test_update_grade_rejects_unknown_symbol(engine):
    state = make_state(make_module(1, grade="A"))
    assert not engine.update_grade(state, 1, "Z").applied


def test_toggle_exemption_within_quota(engine):
    state = make_state(make_module(1, grade="A", semester=S1))

    transition = engine.toggle_exemption(state, 1)

    assert transition.rejection is None
    assert transition.state.find_module(1).is_exempted is True
    status = engine.quota_engine_for(transition.state).compute(transition.state.modules)
    assert status.first_remaining == 28


def test_toggle_exemption_off_always_allowed(engine):
    # Usage is far over cap, yet switching off must still work
    state = make_state(make_module(1, grade="A", semester=S1, credit=50, exempted=True))

    transition = engine.toggle_exemption(state, 1)

    assert transition.state.find_module(1).is_exempted is False


def test_toggle_exemption_rejected_when_window_full(engine):
    modules = [make_module(i, grade="B", semester=ST1, exempted=True) for i in range(1, 4)]
    candidate = make_module(4, grade="B", semester=Y2S1)
    state = make_state(*modules, candidate)

    transition = engine.toggle_exemption(state, 4)

    assert not transition.applied
    assert transition.state is state
    assert transition.rejection.window == "second"
    assert transition.rejection.available == 0
    assert transition.rejection.required == 4
    assert "subsequent semesters" in transition.rejection.message
    assert "Available: 0 credits" in transition.rejection.message


def test_toggle_exemption_rejection_reports_first_window_remaining(engine):
    settings = AcademicSettings(high_exemption_tier=True)
    modules = [make_module(i, grade="B", semester=S1, exempted=True) for i in range(1, 5)]
    big = make_module(9, grade="A", semester=S2, credit=6)
    state = make_state(*modules, big, settings=settings)

    transition = engine.toggle_exemption(state, 9)

    assert transition.rejection.window == "first"
    assert transition.rejection.available == 4
    assert "first two semesters" in transition.rejection.message


@pytest.mark.parametrize("grade", ["", "CS", "CU", "S", "U"])
def test_toggle_exemption_needs_a_real_grade(engine, grade):
    state = make_state(make_module(1, grade=grade))
    transition = engine.toggle_exemption(state, 1)
    assert not transition.applied
    assert transition.rejection is None


def test_toggle_unknown_module_is_noop(engine):
    assert not engine.toggle_exemption(make_state(), 1).applied


# --- Move ------------------------------------------------------------------


@pytest.fixture
def four_modules():
    return make_state(
        make_module(1, code="A", semester=S1),
        make_module(2, code="B", semester=S1),
        make_module(3, code="C", semester=S2),
        make_module(4, code="D", semester=S1),
    )


def test_move_within_semester_to_front(engine, four_modules):
    transition = engine.move_module(four_modules, 4, S1, 0)

    state = transition.state
    assert codes_in(state, S1) == ["D", "A", "B"]
    assert codes_in(state, S2) == ["C"]
    assert len(state.modules) == 4


def test_move_to_other_semester_without_index_appends(engine, four_modules):
    state = engine.move_module(four_modules, 1, S2).state

    assert codes_in(state, S2) == ["C", "A"]
    assert codes_in(state, S1) == ["B", "D"]
    assert state.find_module(1).semester == S2


def test_move_to_other_semester_at_index(engine, four_modules):
    state = engine.move_module(four_modules, 1, S2, 0).state

    assert [m.module_code for m in state.modules] == ["B", "D", "A", "C"]


def test_move_index_past_end_appends(engine, four_modules):
    state = engine.move_module(four_modules, 1, S1, 99).state
    assert codes_in(state, S1) == ["B", "D", "A"]


def test_move_negative_index_counts_from_end(engine, four_modules):
    state = engine.move_module(four_modules, 4, S1, -1).state
    assert codes_in(state, S1) == ["A", "D", "B"]


def test_move_negative_index_before_start_inserts_first(engine, four_modules):
    state = engine.move_module(four_modules, 4, S1, -9).state
    assert codes_in(state, S1) == ["D", "A", "B"]


def test_move_keeps_single_membership(engine, four_modules):
    state = engine.move_module(four_modules, 2, ST1, 0).state

    ids = [m.id for m in state.modules]
    assert sorted(ids) == [1, 2, 3, 4]
    assert [m.semester for m in state.modules if m.id == 2] == [ST1]


def test_move_unknown_module_or_semester_is_noop(engine, four_modules):
    assert not engine.move_module(four_modules, 42, S2).applied
    assert not engine.move_module(four_modules, 1, "AY40/41 Sem 1").applied


# --- Semesters and years ---------------------------------------------------


def test_add_semester_once(engine):
    state = make_state()
    state = engine.add_semester(state, ST1).state
    assert state.active_semesters == (ST1,)
    assert not engine.add_semester(state, ST1).applied
    assert not engine.add_semester(state, "nonsense").applied


def test_remove_semester_cascades(engine):
    state = make_state(
        make_module(1, semester=S1),
        make_module(2, semester=S2),
        make_module(3, semester=S1),
        active_semesters=(S1, S2),
    )

    transition = engine.remove_semester(state, S1)

    assert transition.changed == {"modules", "activeSemesters"}
    assert [m.id for m in transition.state.modules] == [2]
    assert transition.state.active_semesters == (S2,)


def test_remove_year_cascades_over_all_terms(engine):
    state = make_state(
        make_module(1, semester=S1),
        make_module(2, semester=ST1),
        make_module(3, semester=Y2S1),
        active_semesters=(S1, S2, ST1, Y2S1),
        year_view=YearView(visible_years=("AY24/25", "AY25/26"), selected_year="AY24/25"),
    )

    transition = engine.remove_year(state, "AY24/25")

    new_state = transition.state
    assert [m.id for m in new_state.modules] == [3]
    assert new_state.active_semesters == (Y2S1,)
    assert new_state.year_view.visible_years == ("AY25/26",)
    assert new_state.year_view.selected_year == "AY25/26"


def test_remove_unfocused_year_keeps_selection(engine):
    state = make_state(
        year_view=YearView(visible_years=("AY24/25", "AY25/26"), selected_year="AY24/25"),
    )
    new_state = engine.remove_year(state, "AY25/26").state
    assert new_state.year_view.selected_year == "AY24/25"


def test_add_year_shows_next_catalog_year(engine):
    state = make_state(year_view=YearView(visible_years=("AY24/25",), selected_year="AY24/25"))

    state = engine.add_year(state).state

    assert state.year_view.visible_years == ("AY24/25", "AY25/26")


def test_add_year_stops_at_catalog_end(engine):
    years = tuple(f"AY{y}/{y + 1}" for y in range(24, 30))
    state = make_state(year_view=YearView(visible_years=years, selected_year="AY24/25"))
    assert not engine.add_year(state).applied


def test_select_year_must_be_visible(engine):
    state = make_state(year_view=YearView(visible_years=("AY24/25",), selected_year="AY24/25"))
    assert not engine.select_year(state, "AY25/26").applied


def test_view_defaults_on_empty_state(engine):
    transition = engine.apply_view_defaults(make_state())

    view = transition.state.year_view
    assert view.visible_years == ("AY24/25",)
    assert view.selected_year == "AY24/25"
    assert transition.state.active_semesters == (S1, S2)
    assert transition.changed == {"yearView", "activeSemesters"}


def test_view_defaults_fall_back_to_first_catalog_year(engine):
    state = make_state(settings=AcademicSettings(program_start="AY25/26"))
    view = engine.apply_view_defaults(state).state.year_view
    assert view.selected_year == "AY25/26"


def test_view_defaults_select_first_visible(engine):
    state = make_state(
        year_view=YearView(visible_years=("AY25/26", "AY24/25"), selected_year=""),
        active_semesters=("AY25/26 Sem 1", "AY25/26 Sem 2"),
    )
    transition = engine.apply_view_defaults(state)
    assert transition.state.year_view.selected_year == "AY25/26"
    assert transition.changed == {"yearView"}


def test_view_defaults_idempotent(engine):
    state = engine.apply_view_defaults(make_state()).state
    assert not engine.apply_view_defaults(state).applied


# --- Settings --------------------------------------------------------------


def test_change_program_start_drops_modules_outside_catalog(engine):
    state = make_state(
        make_module(1, semester=S1),
        make_module(2, semester="AY29/30 Sem 1"),
        active_semesters=(S1, S2),
        year_view=YearView(visible_years=("AY24/25",), selected_year="AY24/25"),
        settings=AcademicSettings(program_start="AY24/25", high_exemption_tier=True),
    )

    transition = engine.change_program_start(state, "AY23/24")

    new_state = transition.state
    assert new_state.settings == AcademicSettings(program_start="AY23/24", high_exemption_tier=True)
    assert [m.id for m in new_state.modules] == [1]
    assert new_state.active_semesters == ()
    assert new_state.year_view == YearView()
    catalog = engine.catalog_for(new_state)
    assert all(m.semester in catalog for m in new_state.modules)


def test_change_program_start_rejects_unknown_or_same_token(engine):
    state = make_state()
    assert not engine.change_program_start(state, "AY99/00").applied
    assert not engine.change_program_start(state, "AY24/25").applied


def test_toggles(engine):
    state = make_state()

    state = engine.toggle_high_exemption_tier(state).state
    assert state.settings.high_exemption_tier is True

    state = engine.toggle_hide_grades(state).state
    assert state.ui.hide_grades is True

    transition = engine.dismiss_hint(state)
    assert transition.state.ui.show_hint is False
    assert not engine.dismiss_hint(transition.state).applied


def test_commands_never_mutate_their_input(engine, four_modules):
    snapshot = replace(four_modules)
    engine.move_module(four_modules, 1, S2, 0)
    engine.remove_semester(four_modules, S1)
    engine.update_grade(four_modules, 1, "A")
    assert four_modules == snapshot
