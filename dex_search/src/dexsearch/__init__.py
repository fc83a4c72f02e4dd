"""
Dex Search Engine Module

A typed, categorized search engine over a static game catalog (species,
types, tiers, moves, items, abilities, egg groups, move categories and
articles). A free-text query becomes an ordered, headered list of rows for an
incremental search widget: prefix matches first, then mid-word alias
matches, then the alphabetically closest entries when nothing matches.

The module is split into:
- Catalog storage and JSON loading (DB/, loader)
- The sorted search index and the scan passes over it
- Category-scoped listings with legality, filters and sorting (typed)
- The stateful widget backend and engine lifecycle (engine)

Example Usage:
    from dexsearch import Engine

    engine = Engine()
    engine.load(dsn="memory://sample")

    ds = engine.searcher("species", "gen9ou")
    ds.add_filter(("type", "Flying"))
    ds.find("fly")
    for row in ds.results:
        print(row)
"""

# src/dexsearch/__init__.py
from .engine import DexSearch, Engine  # re-export
from .models import Entry, Header, Html, SortMarker, row_to_json
from .search import text_search

__version__ = "1.0.0"
__all__ = [
    "DexSearch", "Engine", "Entry", "Header", "Html", "SortMarker",
    "row_to_json", "text_search",
]
