"""
Command-Line Interface for the Grade Planner.

This module provides an interactive command loop over AcademicPlanner.
It parses user input and hands results to TerminalDisplay.

Run with:
    python -m gradeplanner
"""

import logging
import shlex

from .config import LOG_FORMAT, LOG_LEVEL, TERM_MARKERS
from .errors import CatalogError
from .planner import AcademicPlanner
from .ui import TerminalDisplay

HELP = """
  show                          Show the plan for the focused year
  search TERM                   Search the module list
  add CODE [SEMESTER]           Add a module (default: first open semester)
  rm ID                         Remove a module
  grade ID GRADE                Set a grade (use - to clear)
  su ID                         Toggle pass/fail exemption
  mv ID SEMESTER [INDEX]        Move a module, optionally to a position
  open SEMESTER | close SEMESTER
  year add | year rm YEAR | year YEAR
  start TOKEN                   Change program start (e.g. AY23/24)
  tier                          Toggle the high exemption tier
  hide                          Toggle grade hiding
  hint                          Stop showing the hint
  retry                         Reload the module list
  quit

  SEMESTER may be a full label ("AY24/25 Sem 1") or a term of the
  focused year ("Sem 2", ST1).
"""


def _resolve_semester(planner: AcademicPlanner, text: str) -> str:
    if text in TERM_MARKERS:
        return f"{planner.state.year_view.selected_year} {text}"
    return text


def show_plan(planner: AcademicPlanner):
    state = planner.state
    hide = state.ui.hide_grades
    TerminalDisplay.print_overview(
        planner.summary(),
        planner.quota(),
        state.settings.program_start,
        state.settings.high_exemption_tier,
        hide,
    )
    semesters = [
        (planner.semester_summary(s), planner.modules_in(s)) for s in planner.visible_semesters()
    ]
    TerminalDisplay.print_year(
        state.year_view.selected_year, list(state.year_view.visible_years), semesters, hide
    )
    if state.ui.show_hint:
        TerminalDisplay.print_info("Hint: 'su ID' converts a graded module to pass/fail.")


def run_command(planner: AcademicPlanner, line: str) -> bool:
    """
    Execute one command line.

    Returns:
        False when the user asked to quit, True otherwise
    """
    try:
        args = shlex.split(line)
    except ValueError as e:
        TerminalDisplay.print_info(f"Could not parse command: {e}")
        return True
    if not args:
        return True

    cmd, rest = args[0].lower(), args[1:]

    try:
        if cmd in ("quit", "exit"):
            return False
        elif cmd == "help":
            print(HELP)
        elif cmd == "show":
            show_plan(planner)
        elif cmd == "search" and rest:
            TerminalDisplay.print_search_results(planner.search_modules(" ".join(rest)))
        elif cmd == "add" and rest:
            if len(rest) > 1:
                semester = _resolve_semester(planner, " ".join(rest[1:]))
            else:
                open_semesters = planner.visible_semesters()
                semester = open_semesters[0] if open_semesters else ""
            module = planner.add_module(rest[0].upper(), semester)
            if module is None:
                TerminalDisplay.print_info(f"{rest[0].upper()} not added (already planned or bad semester).")
            else:
                TerminalDisplay.print_info(f"Added {module.module_code} to {module.semester} as #{module.id}.")
        elif cmd == "rm" and len(rest) == 1:
            planner.remove_module(int(rest[0]))
        elif cmd == "grade" and len(rest) == 2:
            grade = "" if rest[1] == "-" else rest[1].upper()
            planner.update_grade(int(rest[0]), grade)
        elif cmd == "su" and len(rest) == 1:
            planner.toggle_exemption(int(rest[0]))
        elif cmd == "mv" and len(rest) >= 2:
            index = int(rest[2]) if len(rest) > 2 else None
            planner.move_module(int(rest[0]), _resolve_semester(planner, rest[1]), index)
        elif cmd == "open" and rest:
            planner.add_semester(_resolve_semester(planner, " ".join(rest)))
        elif cmd == "close" and rest:
            planner.remove_semester(_resolve_semester(planner, " ".join(rest)))
        elif cmd == "year" and rest:
            if rest[0] == "add":
                planner.add_year()
            elif rest[0] == "rm" and len(rest) == 2:
                planner.remove_year(rest[1])
            else:
                planner.select_year(rest[0])
        elif cmd == "start" and len(rest) == 1:
            planner.change_program_start(rest[0])
        elif cmd == "tier":
            planner.toggle_high_exemption_tier()
        elif cmd == "hide":
            planner.toggle_hide_grades()
        elif cmd == "hint":
            planner.dismiss_hint()
        elif cmd == "retry":
            if not planner.load_catalog():
                TerminalDisplay.print_catalog_error(planner.catalog_error)
        else:
            TerminalDisplay.print_info("Unknown command. Type 'help' for a list.")
    except ValueError:
        TerminalDisplay.print_info("Module ids and indexes must be numbers.")
    except CatalogError as e:
        TerminalDisplay.print_notification(str(e))

    message = planner.notifications.current()
    if message:
        TerminalDisplay.print_notification(message)
        planner.notifications.dismiss()
    return True


def main():
    """Interactive entry point."""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    planner = AcademicPlanner()

    print(f"\n{TerminalDisplay.BOLD}{TerminalDisplay.CYAN}")
    print("╔══════════════════════════════════════════════════════════════════╗")
    print("║         GRADE PLANNER                                            ║")
    print("║         Modules, grades and pass/fail exemptions                 ║")
    print("╚══════════════════════════════════════════════════════════════════╝")
    print(f"{TerminalDisplay.RESET}")

    if not planner.load_catalog():
        TerminalDisplay.print_catalog_error(planner.catalog_error)
    show_plan(planner)

    while True:
        try:
            line = input(f"\n{TerminalDisplay.BOLD}planner> {TerminalDisplay.RESET}")
        except EOFError:
            break
        if not run_command(planner, line):
            break


if __name__ == "__main__":
    main()
