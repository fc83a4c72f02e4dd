# dexsearch/DB/__init__.py
from .api import CatalogStore, make_store
from .catalog import Catalog
from .index import SearchIndex

__all__ = ["Catalog", "CatalogStore", "SearchIndex", "make_store"]
