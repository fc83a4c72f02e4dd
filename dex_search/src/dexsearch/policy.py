from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple


# Categories a typed search accepts besides its own; anything else is rejected.
# Extra entries become filter candidates rather than results.
_FILTER_CANDIDATES: Dict[str, FrozenSet[str]] = {
    "species": frozenset({"type", "tier", "move", "ability", "egggroup"}),
    "move": frozenset({"species", "type", "category"}),
    "ability": frozenset(),
    "item": frozenset(),
}

# Literal alias collisions: (alias ids, prefix) -- rejected while the query is a prefix of `prefix`
ALIAS_COLLISIONS: Tuple[Tuple[FrozenSet[str], str], ...] = (
    (frozenset({"megax", "megay"}), "mega"),
)


@dataclass(frozen=True)
class QueryMeta:
    """Per-pass facts the policy needs about the query being scanned."""
    query: str
    type_suffix: bool = False      # query was "<type>type"
    legality: bool = False         # an illegal-reasons map is active
    gen: int = 9
    is_mod: bool = False


def accepts(context_category: str, entry_category: str, entry_id: str, meta: QueryMeta) -> bool:
    """
    Decide whether an index entry may enter the result buckets.
    `context_category` is "" for an untyped search.
    """
    # single characters match too much; only fill the primary bucket
    if len(meta.query) == 1 and entry_category != (context_category or "species"):
        return False

    if context_category in _FILTER_CANDIDATES and entry_category != context_category:
        if entry_category not in _FILTER_CANDIDATES[context_category]:
            return False
        if context_category == "species" and entry_category == "tier" and meta.gen < 9 and not meta.is_mod:
            return False
        # teambuilder move lists don't filter by species
        if context_category == "move" and entry_category == "species" and meta.legality:
            return False

    if meta.type_suffix and entry_category != "type":
        return False

    for ids, prefix in ALIAS_COLLISIONS:
        if entry_id in ids and prefix.startswith(meta.query):
            return False
    return True
