"""
Configuration constants for the grade planner.

This module contains all configuration values and constants used throughout
the planner. Centralizing these makes it easy to adjust behavior as the
grading and exemption policies change.
"""

import os
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Persisted planner records live here, one JSON file per storage key.
# Override with GRADEPLANNER_DATA_DIR to keep several plans apart.
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.environ.get("GRADEPLANNER_DATA_DIR", BASE_DIR / "data"))


# =============================================================================
# GRADE DEFINITIONS
# =============================================================================

# Letter grade -> grade points. None marks pass/fail-native symbols that
# never carry a point value (S/U, CS/CU and "not applicable").
GRADE_POINTS = {
    "A+": 5.0, "A": 5.0, "A-": 4.5,
    "B+": 4.0, "B": 3.5, "B-": 3.0,
    "C+": 2.5, "C": 2.0, "C-": 1.5,
    "D+": 1.0, "D": 0.5, "F": 0.0,
    "N/A": None, "S": None, "U": None, "CS": None, "CU": None,
}

PASS_FAIL_GRADES = {grade for grade, points in GRADE_POINTS.items() if points is None}

# Empty string = module added but not graded yet
UNGRADED = ""


# =============================================================================
# PROGRAM CALENDAR
# =============================================================================

# Cohort tokens the user may pick, newest first
PROGRAM_START_OPTIONS = [
    "AY25/26", "AY24/25", "AY23/24", "AY22/23", "AY21/22", "AY20/21", "AY19/20",
]
DEFAULT_PROGRAM_START = "AY24/25"

# Year window shown first when nothing is visible yet
DEFAULT_FOCUS_YEAR = "AY24/25"

MAX_PROGRAM_YEARS = 6

REGULAR_TERMS = ["Sem 1", "Sem 2"]
SPECIAL_TERMS = ["ST1", "ST2"]
TERM_MARKERS = REGULAR_TERMS + SPECIAL_TERMS


# =============================================================================
# PASS/FAIL EXEMPTION POLICY
# =============================================================================

# Credits that may be exempted in the first two regular semesters.
# Students on the high exemption tier (e.g. with advanced placement credit)
# get the lower cap.
FIRST_WINDOW_CAP = 32
FIRST_WINDOW_CAP_HIGH_TIER = 20

# Ceiling for every later term. The effective cap is also bounded by
# whatever is left over from the first window.
SECOND_WINDOW_CAP = 12

# Slot counts assume a standard 4-credit module
CREDITS_PER_SLOT = 4


# =============================================================================
# MODULE CATALOG SERVICE
# =============================================================================

CATALOG_BASE_URL = os.environ.get(
    "GRADEPLANNER_CATALOG_URL", "https://api.nusmods.com/v2/2024-2025"
)
CATALOG_TIMEOUT = 15  # seconds

SEARCH_MIN_CHARS = 2
SEARCH_MAX_RESULTS = 10


# =============================================================================
# PERSISTENCE AND NOTIFICATIONS
# =============================================================================

STORAGE_PREFIX = "gradeplanner"

STORAGE_KEYS = {
    "MODULES": "modules",
    "ACADEMIC_SETTINGS": "academicSettings",
    "ACTIVE_SEMESTERS": "activeSemesters",
    "YEAR_VIEW": "yearView",
    "UI_TOGGLES": "uiToggles",
}

# Rejection messages stay on screen this long before auto-dismissal
NOTIFICATION_TIMEOUT = 4.0  # seconds


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("GRADEPLANNER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
