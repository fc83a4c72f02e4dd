"""Public API for the dex search engine (module-level, single engine)."""
from __future__ import annotations
import time
from typing import List, Optional, Sequence

from dexsearch.config import DEFAULT_DSN
from dexsearch.engine import Engine
from dexsearch.models import Filter, SearchRow

_engine: Engine | None = None

def initialize(dsn: str = DEFAULT_DSN, verbose: bool = False) -> Engine:
    """
    Open the catalog store named by `dsn` and build the search index.
    Calling it again replaces the previous engine.
    """
    global _engine
    t0 = time.perf_counter()
    if _engine is not None:
        _engine.shutdown()
    eng = Engine()
    eng.load(dsn=dsn, verbose=verbose)
    _engine = eng
    if verbose:
        print(f"[ready] init complete in {time.perf_counter() - t0:.2f}s")
    return eng

def search(query: str,
           search_type: str = "",
           format_id: str = "",
           species: str = "",
           filters: Sequence[Filter] = (),
           sort: Optional[str] = None,
           reverse: bool = False) -> List[SearchRow]:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call initialize() first.")
    return _engine.search(query, search_type=search_type, format_id=format_id,
                          species=species, filters=filters, sort=sort, reverse=reverse)

def shutdown() -> None:
    global _engine
    if _engine is not None:
        _engine.shutdown()
        _engine = None
