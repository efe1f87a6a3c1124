"""Exceptions raised across the planner's collaborator boundaries."""


class PlannerError(Exception):
    """Base class for planner errors."""


class CatalogError(PlannerError):
    """Raised when the module catalog cannot answer a lookup."""


class CatalogUnavailableError(CatalogError):
    """Raised when the catalog service is unreachable or returns garbage.

    Retrievable: the caller may retry the whole operation.
    """


class ModuleNotInCatalogError(CatalogError):
    """Raised when the catalog has no module with the requested code."""

    def __init__(self, module_code: str):
        super().__init__(f"No module found in catalog: {module_code}")
        self.module_code = module_code
