from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional

from . import config as CFG
from .DB.index import SearchIndex

# Pass kinds
NORMAL = "normal"   # from start, while ids start with the query
ALIAS = "alias"     # same range as normal, alias entries only
FUZZY = "fuzzy"     # from start, until FUZZY_MAX_RESULTS accepted
EXACT = "exact"     # from start, until EXACT_MAX_RESULTS accepted


@dataclass(frozen=True)
class SearchPass:
    kind: str
    start: int
    query: str


@dataclass
class PassPlan:
    passes: Deque[SearchPass]
    exact_match: bool = False
    query_alias: Optional[str] = None   # curated alias target, if redirected


def _shares(index: SearchIndex, i: int, prefix: str) -> bool:
    return index[i].id[:len(prefix)] == prefix


def fuzzy_start(index: SearchIndex, i: int, query: str) -> int:
    """
    Left edge of the run of entries sharing the longest possible prefix with
    `query` around position i.
    """
    if len(index) < 2:
        return 0
    i = max(1, min(i, len(index) - 1))
    match_length = len(query) - 1
    while match_length > 0 and not _shares(index, i, query[:match_length]) \
            and not _shares(index, i - 1, query[:match_length]):
        match_length -= 1
    match_query = query[:match_length]
    while i >= 1 and _shares(index, i - 1, match_query):
        i -= 1
    return i


def build_passes(index: SearchIndex, query: str, aliases: Dict[str, str]) -> PassPlan:
    """Queue the scan passes for a normalized, non-empty query."""
    i = index.closest(query)
    plan = PassPlan(passes=deque([SearchPass(NORMAL, i, query)]))
    if len(index):
        plan.exact_match = index[i].id == query

    # /* ~~~ performance: only do an alias pass if query is at least 2 chars ~~~ */
    if len(query) > 1:
        plan.passes.append(SearchPass(ALIAS, i, query))

    # curated aliases outrank everything; scan the target first
    if query in aliases:
        target = aliases[query]
        if query in CFG.ALWAYS_REDIRECT_ALIASES or not target.startswith(query):
            plan.query_alias = target
            kind = EXACT if target == CFG.LONG_NAME_ALIAS else NORMAL
            plan.passes.appendleft(SearchPass(kind, index.closest(target), target))
        plan.exact_match = True

    # nothing starts with the query: show the alphabetically closest entries
    if len(index) and not plan.exact_match and not index[i].id.startswith(query):
        plan.passes.append(SearchPass(FUZZY, fuzzy_start(index, i, query), ""))
    return plan


class PassCursor:
    """
    Drains a pass plan: yields (pass, index position) for every entry the
    active pass wants examined. `accepted()` reports an accepted entry so the
    count-limited passes know when to stop.
    """
    def __init__(self, index: SearchIndex, plan: PassPlan) -> None:
        self.index = index
        self._queue = plan.passes
        self._accepted = 0
        self.current: Optional[SearchPass] = None

    def accepted(self) -> None:
        self._accepted += 1

    def _exhausted(self, kind: str, entry_id: str, query: str) -> bool:
        if kind == FUZZY:
            return self._accepted >= CFG.FUZZY_MAX_RESULTS
        if kind == EXACT:
            return self._accepted >= CFG.EXACT_MAX_RESULTS
        return not entry_id.startswith(query)

    def __iter__(self):
        while self._queue:
            self.current = p = self._queue.popleft()
            self._accepted = 0
            i = p.start
            while i < len(self.index):
                entry = self.index[i]
                if not entry.id or self._exhausted(p.kind, entry.id, p.query):
                    break
                yield p, i
                i += 1
        self.current = None
