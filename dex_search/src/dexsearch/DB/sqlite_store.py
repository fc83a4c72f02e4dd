# dexsearch/DB/sqlite_store.py
from __future__ import annotations
import json
import logging
import os
import sqlite3
from typing import Any, Dict, Optional

from .api import CatalogStore
from .catalog import Catalog

log = logging.getLogger(__name__)

# one row per top-level section of a catalog document
_SCHEMA = """
CREATE TABLE IF NOT EXISTS catalog_sections (
  name TEXT PRIMARY KEY,
  body TEXT NOT NULL
);
"""


class SQLiteStore(CatalogStore):
    """Catalog persisted in SQLite as JSON sections; decoded once on first load."""
    def __init__(self, db_path: str) -> None:
        self.db_path = os.path.abspath(db_path)
        self.conn: Optional[sqlite3.Connection] = sqlite3.connect(self.db_path)
        self.conn.executescript(_SCHEMA)
        self._catalog: Optional[Catalog] = None

    @staticmethod
    def is_valid(path: str) -> bool:
        if not os.path.isfile(path):
            return False
        try:
            conn = sqlite3.connect(path)
            try:
                row = conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' AND name='catalog_sections'"
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.DatabaseError:
            return False
        return row is not None

    @classmethod
    def build_from_document(cls, document: Dict[str, Any], db_path: str) -> "SQLiteStore":
        store = cls(db_path)
        store.write_document(document)
        log.info("Built catalog database %s (%d sections)", store.db_path, len(document))
        return store

    # ---- Write ----
    def write_document(self, document: Dict[str, Any]) -> int:
        rows = [(name, json.dumps(body, ensure_ascii=False)) for name, body in document.items()]
        self.conn.executemany(
            "INSERT OR REPLACE INTO catalog_sections(name, body) VALUES (?,?)", rows,
        )
        self.conn.commit()
        self._catalog = None
        return len(rows)

    # ---- Read ----
    def read_document(self) -> Dict[str, Any]:
        cur = self.conn.execute("SELECT name, body FROM catalog_sections ORDER BY name")
        return {name: json.loads(body) for name, body in cur}

    def load(self) -> Catalog:
        if self.conn is None:
            raise RuntimeError("store is closed")
        if self._catalog is None:
            from ..loader import catalog_from_dict
            self._catalog = catalog_from_dict(self.read_document())
        return self._catalog

    # ---- lifecycle ----
    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
        self._catalog = None
