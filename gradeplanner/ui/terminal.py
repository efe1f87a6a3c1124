"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the gradeplanner package.

To create a different UI (web, desktop, etc.), create a new class with
the same method signatures but different output handling.
"""

from ..engines import is_special_term
from ..models import ModuleRecord, QuotaStatus, ScoreSummary, SemesterSummary


class TerminalDisplay:
    """
    Pretty terminal output for the plan.

    Every method takes plain data (summaries, records, strings) so the
    planner never has to know how its results are shown.
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_RED = "\033[41m"

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def print_overview(cls, summary: ScoreSummary, quota: QuotaStatus, program_start: str,
                       high_exemption_tier: bool, hide_grades: bool = False):
        """Print cumulative average, credit totals and exemption quota."""
        cls.print_header(f"ACADEMIC PLAN ({program_start})")

        average = "*.**" if hide_grades else summary.average_display
        print(f"\n  {cls.BOLD}Cumulative Average:{cls.RESET} {cls.GREEN}{average}{cls.RESET}")
        print(f"  {cls.BOLD}Graded Credits:{cls.RESET}    {summary.graded_credits:g}")
        print(f"  {cls.BOLD}Total Credits:{cls.RESET}     {summary.total_credits:g}")

        tier = " (high tier)" if high_exemption_tier else ""
        cls.print_subheader(f"Pass/Fail Exemptions{tier}")
        print(f"  {cls.BOLD}{'WINDOW':<22} {'USED':>6} {'CAP':>6} {'LEFT':>6} {'SLOTS':>6}{cls.RESET}")
        print(f"  {cls.DIM}{'-' * 50}{cls.RESET}")
        print(f"  {'First two semesters':<22} {quota.first_used:>6g} {quota.first_cap:>6g} "
              f"{cls._left(quota.first_remaining)} {quota.first_slots:>6}")
        print(f"  {'Subsequent semesters':<22} {quota.second_used:>6g} {quota.second_cap:>6g} "
              f"{cls._left(quota.second_remaining)} {quota.second_slots:>6}")

    @classmethod
    def _left(cls, remaining: float) -> str:
        color = cls.GREEN if remaining > 0 else cls.RED
        return f"{color}{remaining:>6g}{cls.RESET}"

    @classmethod
    def print_year(cls, year: str, visible_years: list, semesters: list, hide_grades: bool = False):
        """
        Print the focused year.

        Args:
            semesters: List of (SemesterSummary, [ModuleRecord, ...]) tuples
        """
        tabs = " ".join(
            f"{cls.BOLD}[{y}]{cls.RESET}" if y == year else f"{cls.DIM}{y}{cls.RESET}"
            for y in visible_years
        )
        cls.print_header(f"YEAR {year}")
        print(f"  {tabs}")

        if not semesters:
            print(f"\n  {cls.DIM}(no open semesters){cls.RESET}")
        for summary, modules in semesters:
            cls.print_semester(summary, modules, hide_grades)

    @classmethod
    def print_semester(cls, summary: SemesterSummary, modules: list, hide_grades: bool = False):
        color = cls.BLUE if is_special_term(summary.semester) else cls.GREEN
        average = "*.**" if hide_grades else summary.score.average_display
        print(f"\n  {cls.BOLD}{color}{summary.semester}{cls.RESET}  "
              f"{cls.DIM}avg {average} | {summary.score.total_credits:g} credits"
              f" | exempted {summary.exempted_credits:g}{cls.RESET}")

        if not modules:
            print(f"     {cls.DIM}(no modules){cls.RESET}")
        for index, module in enumerate(modules):
            cls._print_module(index, module, hide_grades)

    @classmethod
    def _print_module(cls, index: int, module: ModuleRecord, hide_grades: bool):
        if hide_grades and module.letter_grade:
            grade = "*"
        else:
            grade = module.letter_grade or "-"
        exempt = f" {cls.YELLOW}S/U{cls.RESET}" if module.is_exempted else ""
        title = module.title[:36] + "..." if len(module.title) > 36 else module.title
        print(f"     {cls.DIM}{index}.{cls.RESET} {cls.BOLD}{module.module_code:<10}{cls.RESET} "
              f"{title:<39} {module.module_credit:>4g}  {grade:<3}{exempt}  "
              f"{cls.DIM}#{module.id}{cls.RESET}")

    @classmethod
    def print_search_results(cls, entries: list):
        if not entries:
            print(f"  {cls.DIM}No matching modules.{cls.RESET}")
            return
        for entry in entries:
            print(f"    {cls.BOLD}{entry.module_code:<10}{cls.RESET} {entry.title}")

    @classmethod
    def print_notification(cls, message: str):
        """Print a rejected-operation message."""
        print(f"\n  {cls.BG_RED}{cls.WHITE} ! {cls.RESET} {cls.RED}{message}{cls.RESET}")

    @classmethod
    def print_catalog_error(cls, error: str):
        cls.print_header("CONNECTION ERROR")
        print(f"\n  {cls.RED}{error}{cls.RESET}")
        print(f"  {cls.DIM}Type 'retry' to load the module list again.{cls.RESET}")

    @classmethod
    def print_info(cls, message: str):
        print(f"  {cls.DIM}{message}{cls.RESET}")
