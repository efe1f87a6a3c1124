"""
Module catalog client.

Talks to the remote module catalog (NUSMods-style JSON API) over HTTP.
"""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import CATALOG_BASE_URL, CATALOG_TIMEOUT
from ..errors import CatalogUnavailableError, ModuleNotInCatalogError
from ..models import CatalogEntry, ModuleDetail, coerce_credit

logger = logging.getLogger(__name__)


def create_retry_session() -> requests.Session:
    """
    Session with transport-level retries for flaky catalog responses.

    Backs off 1s, 2s, 4s on 429 and 5xx. This is the only retrying in the
    system; a lookup that still fails is reported to the caller, who decides
    whether to try the whole operation again.
    """
    session = requests.Session()
    retries = Retry(
        total=3,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


class CatalogClient:
    """
    Fetches the module list and module details.

    ENDPOINTS:
    - {base}/moduleList.json       -> [{"moduleCode", "title", ...}, ...]
    - {base}/modules/{code}.json   -> {"moduleCode", "title", "moduleCredit", ...}

    ERRORS:
    - ModuleNotInCatalogError: the detail endpoint answered 404
    - CatalogUnavailableError: network failure, any other non-200 status, or
      a body that is not the expected JSON

    Usage:
        client = CatalogClient()
        entries = client.list_all_modules()
        detail = client.get_module_detail("CS1101S")
    """

    def __init__(self, base_url: str = CATALOG_BASE_URL, session: requests.Session = None,
                 timeout: float = CATALOG_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or create_retry_session()
        self.timeout = timeout

    def _get_json(self, path: str):
        url = f"{self.base_url}/{path}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Catalog request to %s failed: %s", url, e)
            raise CatalogUnavailableError(f"Could not reach module catalog: {e}") from e

        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            logger.error("Catalog request to %s returned HTTP %s", url, resp.status_code)
            raise CatalogUnavailableError(
                f"Module catalog returned HTTP {resp.status_code}: {resp.reason}"
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error("Catalog response from %s is not JSON", url)
            raise CatalogUnavailableError("Module catalog returned malformed data") from e

    def list_all_modules(self) -> list:
        """Every module in the catalog as CatalogEntry, in catalog order."""
        data = self._get_json("moduleList.json")
        if not isinstance(data, list):
            raise CatalogUnavailableError("Module list is missing or malformed")

        entries = []
        for item in data:
            if not isinstance(item, dict):
                continue
            code = item.get("moduleCode")
            if not code:
                continue
            entries.append(CatalogEntry(module_code=code, title=item.get("title", "")))

        logger.info("Loaded %d modules from catalog", len(entries))
        return entries

    def get_module_detail(self, module_code: str) -> ModuleDetail:
        data = self._get_json(f"modules/{module_code}.json")
        if data is None:
            raise ModuleNotInCatalogError(module_code)
        if not isinstance(data, dict) or not data.get("moduleCode"):
            raise CatalogUnavailableError(f"Malformed catalog entry for {module_code}")

        return ModuleDetail(
            module_code=data["moduleCode"],
            title=data.get("title", ""),
            module_credit=coerce_credit(data.get("moduleCredit")),
        )
