# dexsearch/DB/json_store.py
from __future__ import annotations
import logging
from typing import Optional

from .api import CatalogStore, read_document
from .catalog import Catalog

log = logging.getLogger(__name__)


class JsonStore(CatalogStore):
    """Read-only store over a catalog JSON file; parsed once, on first load."""
    def __init__(self, path: str) -> None:
        self.path = path
        self._catalog: Optional[Catalog] = None

    def load(self) -> Catalog:
        if self._catalog is None:
            from ..loader import catalog_from_dict
            self._catalog = catalog_from_dict(read_document(self.path))
            log.info("Loaded catalog from %s", self.path)
        return self._catalog

    def close(self) -> None:
        self._catalog = None
