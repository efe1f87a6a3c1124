"""Shared fixtures: in-memory collaborators and module builders."""

import copy

import pytest

from gradeplanner.data import ProgramStateStore
from gradeplanner.errors import CatalogUnavailableError, ModuleNotInCatalogError
from gradeplanner.models import CatalogEntry, ModuleDetail, ModuleRecord, ProgramState
from gradeplanner.planner import AcademicPlanner

S1 = "AY24/25 Sem 1"
S2 = "AY24/25 Sem 2"
ST1 = "AY24/25 ST1"
Y2S1 = "AY25/26 Sem 1"


class MemoryStorage:
    """Storage collaborator backed by a dict; records are deep-copied like JSON would."""

    def __init__(self, records=None):
        self.records = dict(records or {})
        self.saves = []

    def load(self, key):
        return copy.deepcopy(self.records.get(key))

    def save(self, key, record):
        self.records[key] = copy.deepcopy(record)
        self.saves.append(key)
        return True


class FakeCatalog:
    """Catalog collaborator with a fixed module table and switchable failures."""

    def __init__(self, modules=None):
        self.modules = modules if modules is not None else {
            "CS1101S": ("Programming Methodology", 4),
            "MA1521": ("Calculus for Computing", 4),
            "GEA1000": ("Quantitative Reasoning with Data", 4),
            "CS2103T": ("Software Engineering", 4),
            "CS4248": ("Natural Language Processing", 4),
            "HSA1000": ("Asian Interconnections", 2),
        }
        self.fail_list = False
        self.fail_detail = False
        self.detail_calls = []

    def list_all_modules(self):
        if self.fail_list:
            raise CatalogUnavailableError("Could not reach module catalog")
        return [CatalogEntry(code, title) for code, (title, _) in self.modules.items()]

    def get_module_detail(self, module_code):
        self.detail_calls.append(module_code)
        if self.fail_detail:
            raise CatalogUnavailableError("Could not reach module catalog")
        if module_code not in self.modules:
            raise ModuleNotInCatalogError(module_code)
        title, credit = self.modules[module_code]
        return ModuleDetail(module_code, title, credit)


def make_module(module_id, code=None, semester=S1, grade="", credit=4, exempted=False):
    return ModuleRecord(
        module_code=code or f"MOD{module_id}",
        title=f"Module {module_id}",
        module_credit=credit,
        semester=semester,
        id=module_id,
        letter_grade=grade,
        is_exempted=exempted,
    )


def make_state(*modules, **kwargs):
    return ProgramState(modules=tuple(modules), **kwargs)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def planner(catalog, storage):
    p = AcademicPlanner(catalog=catalog, store=ProgramStateStore(storage))
    p.load_catalog()
    return p
