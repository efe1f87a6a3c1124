"""
Grade Planner Package
=====================

Plans modules across the semesters of a multi-year degree and tracks the
grade point average, credit totals and pass/fail exemption quota.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                         ENGINE LAYER                                     │
│        (Pure logic - returns data structures, NO I/O/printing)          │
│                                                                         │
│  ┌─────────────────┐  ┌───────────────┐  ┌───────────────────────────┐  │
│  │ SemesterCatalog │  │ ScoringEngine │  │  ExemptionQuotaEngine     │  │
│  │ (labels)        │  │ (averages)    │  │  (two-window quota)       │  │
│  └─────────────────┘  └───────────────┘  └───────────────────────────┘  │
│                                                                         │
│  ┌───────────────────────────────────────────────────────────────────┐  │
│  │                      PlacementEngine                               │  │
│  │   (ProgramState -> Transition: add/remove/grade/exempt/move/...)  │  │
│  └───────────────────────────────────────────────────────────────────┘  │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      AcademicPlanner                                     │
│   (Single writer - commits transitions, saves records, notifies)        │
│                                                                         │
│   CatalogClient (HTTP)   ProgramStateStore (JSON files)                 │
│   NotificationChannel (transient messages)                              │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│              TerminalDisplay + interactive CLI                          │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

gradeplanner/
├── __init__.py          # This file - main exports
├── config.py            # Configuration constants
├── errors.py            # Exception hierarchy
├── notifications.py     # NotificationChannel
├── planner.py           # AcademicPlanner orchestrator
├── cli.py               # Command-line interface
│
├── models/              # Data classes
│   ├── module.py        # ModuleRecord, CatalogEntry, ModuleDetail
│   ├── state.py         # AcademicSettings, YearView, UiToggles, ProgramState
│   └── results.py       # ScoreSummary, QuotaStatus, Transition, ...
│
├── data/                # I/O collaborators
│   ├── catalog.py       # CatalogClient
│   ├── storage.py       # JsonFileStorage
│   └── store.py         # ProgramStateStore
│
├── engines/             # Pure planning and scoring logic
│   ├── semesters.py     # SemesterCatalog
│   ├── scoring.py       # ScoringEngine
│   ├── quota.py         # ExemptionQuotaEngine
│   └── placement.py     # PlacementEngine
│
└── ui/
    └── terminal.py      # TerminalDisplay

USAGE
-----

    from gradeplanner import AcademicPlanner

    planner = AcademicPlanner()
    planner.load_catalog()

    module = planner.add_module("CS1101S", "AY24/25 Sem 1")
    planner.update_grade(module.id, "A")
    print(planner.summary().average_display)

Running from command line:

    python -m gradeplanner

"""

# Version
__version__ = "1.0.0"

# Main exports
from .planner import AcademicPlanner
from .cli import main

# Model exports
from .models import (
    ModuleRecord,
    CatalogEntry,
    ModuleDetail,
    AcademicSettings,
    YearView,
    UiToggles,
    ProgramState,
    ScoreSummary,
    SemesterSummary,
    QuotaStatus,
    QuotaRejection,
    Transition,
)

# Engine exports
from .engines import (
    SemesterCatalog,
    ScoringEngine,
    ExemptionQuotaEngine,
    PlacementEngine,
)

# Collaborator exports
from .data import CatalogClient, JsonFileStorage, ProgramStateStore
from .notifications import NotificationChannel
from .errors import (
    PlannerError,
    CatalogError,
    CatalogUnavailableError,
    ModuleNotInCatalogError,
)

# UI exports
from .ui import TerminalDisplay

# Configuration exports
from .config import (
    DATA_DIR,
    GRADE_POINTS,
    PASS_FAIL_GRADES,
    PROGRAM_START_OPTIONS,
    DEFAULT_PROGRAM_START,
)

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "AcademicPlanner",
    "main",
    # Models
    "ModuleRecord",
    "CatalogEntry",
    "ModuleDetail",
    "AcademicSettings",
    "YearView",
    "UiToggles",
    "ProgramState",
    "ScoreSummary",
    "SemesterSummary",
    "QuotaStatus",
    "QuotaRejection",
    "Transition",
    # Engines
    "SemesterCatalog",
    "ScoringEngine",
    "ExemptionQuotaEngine",
    "PlacementEngine",
    # Collaborators
    "CatalogClient",
    "JsonFileStorage",
    "ProgramStateStore",
    "NotificationChannel",
    # Errors
    "PlannerError",
    "CatalogError",
    "CatalogUnavailableError",
    "ModuleNotInCatalogError",
    # UI
    "TerminalDisplay",
    # Config
    "DATA_DIR",
    "GRADE_POINTS",
    "PASS_FAIL_GRADES",
    "PROGRAM_START_OPTIONS",
    "DEFAULT_PROGRAM_START",
]
