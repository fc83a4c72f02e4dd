# dexsearch/engine.py
from __future__ import annotations

import os
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from . import config as CFG
from .models import Entry, Filter, PokemonSet, SearchRow, Species
from .normalize import title_id, to_id
from .search import text_search
from .typed import TypedSearch, make_typed_search
from .DB.catalog import Catalog
from .DB.index import SearchIndex
from .DB.api import CatalogStore, make_store

log = logging.getLogger(__name__)

# filter dimensions a typed search accepts, per category
FILTER_DIMENSIONS: Dict[str, tuple] = {
    "species": ("type", "move", "ability", "egggroup", "tier"),
    "move": ("type", "category", "pokemon"),
}


class DexSearch:
    """
    State behind one search widget: the current query and results, the typed
    search it is scoped to, and the user's filters and sort column.
    """

    def __init__(self, index: SearchIndex, catalog: Catalog, search_type: str = "",
                 format_id: str = "", species_or_set: Union[str, PokemonSet] = "") -> None:
        self.index = index
        self.catalog = catalog
        self.query = ""
        self.typed: Optional[TypedSearch] = None
        self.results: Optional[List[SearchRow]] = None
        self.exact_match = False
        self.filters: Optional[List[Filter]] = None
        self.sort_col: Optional[str] = None
        self.reverse_sort = False
        self.set_type(search_type, format_id, species_or_set)

    @property
    def search_type(self) -> str:
        return self.typed.category if self.typed is not None else ""

    # /* ~~~ run a query; False when nothing changed since the last call ~~~ */
    def find(self, query: str) -> bool:
        query = to_id(query)
        if self.query == query and self.results is not None:
            return False
        self.query = query
        if not query:
            self.exact_match = False
            self.results = self.typed.get_results(self.filters, self.sort_col, self.reverse_sort) \
                if self.typed is not None else []
        else:
            self.results = self.text_search(query)
        return True

    def text_search(self, query: str) -> List[SearchRow]:
        found = text_search(self.index, self.catalog, query, self.typed, self.filters)
        self.exact_match = found.exact_match
        return found.rows

    def set_type(self, search_type: str, format_id: str = "",
                 species_or_set: Union[str, PokemonSet] = "") -> None:
        self.results = None
        if search_type != self.search_type:
            self.filters = None
            self.sort_col = None
            self.reverse_sort = False
        self.typed = make_typed_search(self.catalog, search_type, format_id, species_or_set)

    # ---- filters ----
    def add_filter(self, entry: Filter) -> bool:
        if self.typed is None:
            return False
        dimensions = FILTER_DIMENSIONS.get(self.typed.category)
        if dimensions is None:
            return False
        dimension, value = entry
        if dimension == self.sort_col:
            self.sort_col = None
        if dimension not in dimensions:
            return False
        if dimension in ("move", "pokemon"):
            value = to_id(value)
        self.results = None
        if self.filters is None:
            self.filters = []
        if (dimension, value) not in self.filters:
            self.filters.append((dimension, value))
        return True

    def remove_filter(self, entry: Optional[Filter] = None) -> bool:
        if not self.filters:
            return False
        if entry is not None:
            entry = tuple(entry)
            if entry not in self.filters:
                return False
            self.filters.remove(entry)
        else:
            self.filters.pop()
        if not self.filters:
            self.filters = None
        self.results = None
        return True

    # /* ~~~ unsorted -> ascending -> reversed -> unsorted ~~~ */
    def toggle_sort(self, sort_col: str) -> None:
        if self.sort_col == sort_col:
            if not self.reverse_sort:
                self.reverse_sort = True
            else:
                self.sort_col = None
                self.reverse_sort = False
        else:
            self.sort_col = sort_col
            self.reverse_sort = False
        self.results = None

    # ---- labels ----
    def filter_label(self, filter_type: str) -> Optional[str]:
        if self.typed is not None and self.typed.category != filter_type:
            return "Filter"
        return None

    def illegal_label(self, id_: str) -> Optional[str]:
        if self.typed is None or not self.typed.illegal_reasons:
            return None
        return self.typed.illegal_reasons.get(id_)

    def display_name(self, row: Entry) -> str:
        """Name the highlight offsets of `row` refer to."""
        mod = self.typed.mod if self.typed is not None else ""
        try:
            entity = self.catalog.get_entity_table(row.category, mod).get(row.id)
        except ValueError:
            entity = None
        return entity.name if entity is not None else title_id(row.id)

    def get_tier(self, species: Species) -> str:
        return self.typed.get_tier(species) if self.typed is not None else ""


class Engine:
    """
    Thin orchestration layer that glues together:
      - catalog storage via a CatalogStore (memory, JSON file or SQLite),
      - the sorted search index (SearchIndex),
      - the search pipeline (DexSearch / search.text_search).

    Public API (used by CLI/Flask):
      * load(dsn, ...):  open the store -> read the catalog -> build the index
      * searcher(...):   a DexSearch bound to this engine's index and catalog
      * search(query, ...): one-shot search returning rows
      * shutdown():      close underlying resources

    Storage DSNs (via dexsearch.DB.api.make_store):
      - "memory://sample"
      - "json:///path/to/catalog.json"
      - "sqlite:///path/to/catalog.sqlite"
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.index: Optional[SearchIndex] = None
        self.catalog: Optional[Catalog] = None
        self._store: Optional[CatalogStore] = None

    # /* ~~~ Open storage, read the catalog and build the index ~~~ */
    def load(
        self,
        *,
        dsn: Optional[str] = None,              # e.g. "memory://sample" or "json:///./catalog.json"
        catalog: Optional[Catalog] = None,      # injected catalog for "memory://"
        document: Optional[Dict[str, Any]] = None,   # seeds a new SQLite store
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["DEXSEARCH_VERBOSE"] = "1"

        if dsn is None:
            dsn = "memory://" if catalog is not None else CFG.DEFAULT_DSN
        log.info("Initializing catalog store: %s", dsn)
        self._store = make_store(dsn, catalog=catalog, document=document)
        self.catalog = self._store.load()

        log.info("Building search index")
        self.index = SearchIndex.build(self.catalog)
        log.info("Engine load() complete: entries=%d", len(self.index))

    # ------------- query -------------

    def _require(self) -> None:
        if self.index is None or self.catalog is None:
            raise RuntimeError("Engine not initialized. Call load() first.")

    def searcher(self, search_type: str = "", format_id: str = "",
                 species_or_set: Union[str, PokemonSet] = "") -> DexSearch:
        self._require()
        return DexSearch(self.index, self.catalog, search_type, format_id, species_or_set)

    # /* ~~~ One-shot search: build a searcher, apply filters/sort, run the query ~~~ */
    def search(
        self,
        query: str,
        *,
        search_type: str = "",
        format_id: str = "",
        species: str = "",
        filters: Sequence[Filter] = (),
        sort: Optional[str] = None,
        reverse: bool = False,
    ) -> List[SearchRow]:
        ds = self.searcher(search_type, format_id, species)
        for f in filters:
            if not ds.add_filter(f):
                raise ValueError(f"filter {f[0]!r} is not supported for {search_type or 'untyped'} searches")
        if sort:
            ds.toggle_sort(sort)
            if reverse:
                ds.toggle_sort(sort)
        ds.find(query)
        return ds.results or []

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self.index = None
            self.catalog = None
            log.info("Engine shutdown complete")
