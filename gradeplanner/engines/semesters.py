"""
Semester Catalog Generator.

Derives every semester label of a program from its start token.
"""

from ..config import MAX_PROGRAM_YEARS, SPECIAL_TERMS, TERM_MARKERS


class SemesterCatalog:
    """
    Enumerates the semester labels of a program.

    A program-start token such as "AY24/25" yields 6 year windows
    (AY24/25 .. AY29/30), each with four terms in this order:

        AY24/25 Sem 1
        AY24/25 Sem 2
        AY24/25 ST1      <- special (short) term
        AY24/25 ST2

    The catalog is a pure function of the token. Nothing is cached, so two
    catalogs built from the same token are always identical.
    """

    def __init__(self, program_start: str):
        self.program_start = program_start
        self.start_year = self.parse_start_year(program_start)

    @staticmethod
    def parse_start_year(program_start: str) -> int:
        """Extract the two-digit start year ("AY24/25" -> 24)."""
        try:
            return int(program_start[2:4])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid program start token: {program_start!r}") from e

    @staticmethod
    def year_window(start_year: int) -> str:
        return f"AY{start_year:02d}/{start_year + 1:02d}"

    @property
    def years(self) -> list:
        """Year windows in program order."""
        return [self.year_window(self.start_year + offset) for offset in range(MAX_PROGRAM_YEARS)]

    @property
    def semesters(self) -> list:
        """All semester labels in catalog order."""
        return [f"{year} {term}" for year in self.years for term in TERM_MARKERS]

    def semesters_by_year(self) -> dict:
        """Year window -> its four labels (insertion-ordered)."""
        return {year: [f"{year} {term}" for term in TERM_MARKERS] for year in self.years}

    def semesters_of_year(self, year: str) -> list:
        return self.semesters_by_year().get(year, [])

    def regular_semesters_of_year(self, year: str) -> list:
        return [s for s in self.semesters_of_year(year) if not is_special_term(s)]

    def __contains__(self, label: str) -> bool:
        return label in self.semesters


def year_of(label: str) -> str:
    """Year window part of a label ("AY24/25 Sem 1" -> "AY24/25")."""
    return label.split(" ")[0]


def term_of(label: str) -> str:
    """Term marker part of a label ("AY24/25 Sem 1" -> "Sem 1")."""
    _, _, term = label.partition(" ")
    return term


def is_special_term(label: str) -> bool:
    return term_of(label) in SPECIAL_TERMS
