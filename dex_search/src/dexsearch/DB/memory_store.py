# dexsearch/DB/memory_store.py
from __future__ import annotations
from typing import Optional

from ..config import DATA_DIR
from .api import CatalogStore
from .catalog import Catalog

SAMPLE_CATALOG = DATA_DIR / "sample_catalog.json"


class MemoryStore(CatalogStore):
    """Holds a catalog in memory (useful for tests or ephemeral runs)."""
    def __init__(self, catalog: Optional[Catalog] = None) -> None:
        self._catalog: Optional[Catalog] = catalog if catalog is not None else Catalog()

    @classmethod
    def sample(cls) -> "MemoryStore":
        from ..loader import load_catalog
        return cls(catalog=load_catalog(str(SAMPLE_CATALOG)))

    def load(self) -> Catalog:
        if self._catalog is None:
            raise RuntimeError("store is closed")
        return self._catalog

    def close(self) -> None:
        self._catalog = None
