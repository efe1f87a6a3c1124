"""
Program State Store.

Loads the five planner records into a ProgramState and writes them back
one record at a time.
"""

import logging

from ..config import STORAGE_KEYS
from ..models import AcademicSettings, ModuleRecord, ProgramState, UiToggles, YearView
from .storage import JsonFileStorage

logger = logging.getLogger(__name__)


def _parse_modules(raw) -> tuple:
    if not isinstance(raw, list):
        raise ValueError("Module collection must be a list")
    modules = tuple(ModuleRecord.from_dict(item) for item in raw)
    codes = [m.module_code for m in modules]
    ids = [m.id for m in modules]
    if len(set(codes)) != len(codes) or len(set(ids)) != len(ids):
        raise ValueError("Module collection has duplicate codes or ids")
    return modules


def _parse_active(raw) -> tuple:
    if not isinstance(raw, list) or not all(isinstance(s, str) for s in raw):
        raise ValueError("Active semesters must be a list of labels")
    return tuple(dict.fromkeys(raw))


class ProgramStateStore:
    """
    Owns load/save of the planner's durable records.

    RECORDS (storage key -> shape):
        modules          [{moduleCode, title, moduleCredit, letterGrade,
                           isExempted, semester, id}, ...]
        academicSettings {programStart, highExemptionTier}
        activeSemesters  [label, ...]
        yearView         {visibleYears: [...], selectedYear}
        uiToggles        {showHint, hideGrades}

    Each record loads independently. A record that is missing, unparseable
    or the wrong shape falls back to its default without affecting the
    others, and the failure is only logged.
    """

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else JsonFileStorage()
        self._codecs = {
            STORAGE_KEYS["MODULES"]: (
                "modules", _parse_modules, lambda s: [m.to_dict() for m in s.modules]),
            STORAGE_KEYS["ACADEMIC_SETTINGS"]: (
                "settings", AcademicSettings.from_dict, lambda s: s.settings.to_dict()),
            STORAGE_KEYS["ACTIVE_SEMESTERS"]: (
                "active_semesters", _parse_active, lambda s: list(s.active_semesters)),
            STORAGE_KEYS["YEAR_VIEW"]: (
                "year_view", YearView.from_dict, lambda s: s.year_view.to_dict()),
            STORAGE_KEYS["UI_TOGGLES"]: (
                "ui", UiToggles.from_dict, lambda s: s.ui.to_dict()),
        }

    def load(self) -> ProgramState:
        values = {}
        for key, (attr, parse, _) in self._codecs.items():
            raw = self.storage.load(key)
            if raw is None:
                continue
            try:
                values[attr] = parse(raw)
            except (ValueError, TypeError) as e:
                logger.warning("Discarding corrupt %s record: %s", key, e)
        return ProgramState(**values)

    def save(self, state: ProgramState, keys=None) -> dict:
        """
        Persist the given records (all of them by default).

        Returns:
            {key: bool} - whether each save succeeded
        """
        keys = self._codecs.keys() if keys is None else keys
        results = {}
        for key in keys:
            _, _, serialize = self._codecs[key]
            results[key] = self.storage.save(key, serialize(state))
        return results
