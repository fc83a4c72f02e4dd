# dexsearch/DB/api.py
from __future__ import annotations
import json
import os
from typing import Any, Dict, Optional, Protocol

from .catalog import Catalog


class CatalogStore(Protocol):
    # Read
    def load(self) -> Catalog: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str, *, catalog: Optional[Catalog] = None,
               document: Optional[Dict[str, Any]] = None) -> CatalogStore:
    """
    Factory:
      - memory://              -> MemoryStore (injected catalog, else empty)
      - memory://sample        -> MemoryStore over the bundled sample catalog
      - json:///path           -> JsonStore reading a catalog document
      - sqlite:///path         -> SQLiteStore; built from `document` if the file is missing
    """
    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteStore
        path = dsn.removeprefix("sqlite://")
        if not SQLiteStore.is_valid(path):
            if document is None:
                raise RuntimeError(
                    f"{path} is not a catalog database and no document was provided. "
                    f"Pass a catalog document to build it, or point the DSN at an existing one."
                )
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            SQLiteStore.build_from_document(document, path).close()
        return SQLiteStore(path)

    if dsn.startswith("json:///"):
        from .json_store import JsonStore
        return JsonStore(dsn.removeprefix("json://"))

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        name = dsn.removeprefix("memory://")
        if name == "sample":
            return MemoryStore.sample()
        if name:
            raise ValueError(f"Unknown in-memory catalog: {name}")
        return MemoryStore(catalog=catalog)

    raise ValueError(f"Unsupported store DSN: {dsn}")


def read_document(path: str) -> Dict[str, Any]:
    """Decode a catalog JSON document from disk."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"catalog file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
