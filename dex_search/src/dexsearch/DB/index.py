from __future__ import annotations
import bisect
import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from ..config import VERBOSE
from ..models import IndexEntry
from ..normalize import acronym, offset_digits, to_id, word_starts
from .catalog import MOVE_CATEGORIES, Catalog

log = logging.getLogger(__name__)


class SearchIndex:
    """
    Sorted search index + offset table.

    Entries are sorted by id (stable, so canonical entries of one id keep
    category order and precede that id's alias entries). `offsets[i]` holds the
    skew digits of canonical entry i and is empty for alias entries.
    Built once, then only read.
    """
    def __init__(self, entries: Sequence[IndexEntry] = (), offsets: Sequence[str] = ()) -> None:
        self._entries: Tuple[IndexEntry, ...] = tuple(entries)
        self._offsets: Tuple[str, ...] = tuple(offsets) or ("",) * len(self._entries)
        self._ids: List[str] = [e.id for e in self._entries]
        if len(self._offsets) != len(self._entries):
            raise ValueError("offset table must be parallel to the index")

    # ---- Build (offline) ----
    @classmethod
    def build(cls, catalog: Catalog) -> "SearchIndex":
        canon: List[Tuple[str, str, str]] = []    # (id, category, display name)
        seen = set()

        def add(category: str, id_: str, name: str) -> None:
            if id_ and (category, id_) not in seen:
                seen.add((category, id_))
                canon.append((id_, category, name))

        mod_species = [s for m in catalog.mods.values() for s in m.species.values()]
        for s in list(catalog.species.values()) + mod_species:
            add("species", s.id, s.name)
        mod_types = [t for m in catalog.mods.values() for t in m.types.values()]
        for t in list(catalog.types.values()) + mod_types:
            add("type", t.id, t.name)
        for name in catalog.tier_names:
            add("tier", to_id(name), name)
        mod_moves = [mv for m in catalog.mods.values() for mv in m.moves.values()]
        for mv in list(catalog.moves.values()) + mod_moves:
            add("move", mv.id, mv.name)
        mod_items = [it for m in catalog.mods.values() for it in m.items.values()]
        for it in list(catalog.items.values()) + mod_items:
            add("item", it.id, it.name)
        mod_abilities = [a for m in catalog.mods.values() for a in m.abilities.values()]
        for a in list(catalog.abilities.values()) + mod_abilities:
            add("ability", a.id, a.name)
        for g in catalog.egg_groups:
            add("egggroup", to_id(g), g)
        for c in MOVE_CATEGORIES:
            add("category", to_id(c), c)
        for art in catalog.articles.values():
            add("article", art.id, art.name)

        # alias rows: (alias id, category, canonical key, match start)
        aliases: List[Tuple[str, str, Tuple[str, str], int]] = []
        for id_, category, name in canon:
            for pos in word_starts(name):
                alias = id_[pos:]
                if alias and alias != id_:
                    aliases.append((alias, category, (category, id_), pos))
            acr = acronym(name)
            if len(acr) > 1 and acr != id_:
                aliases.append((acr, category, (category, id_), 0))

        # sort canonical and alias rows together; canonical rows come first on ties
        rows = [(id_, 0, n, category) for n, (id_, category, _) in enumerate(canon)]
        rows += [(a[0], 1, n, a[1]) for n, a in enumerate(aliases)]
        rows.sort(key=lambda r: (r[0], r[1], r[2]))

        position: Dict[Tuple[str, str], int] = {}
        for i, (id_, is_alias, _, category) in enumerate(rows):
            if not is_alias:
                position[(category, id_)] = i

        entries: List[IndexEntry] = []
        offsets: List[str] = []
        for id_, is_alias, n, category in rows:
            if is_alias:
                _, _, key, start = aliases[n]
                entries.append(IndexEntry(id_, category, position[key], start))
                offsets.append("")
            else:
                entries.append(IndexEntry(id_, category))
                offsets.append(offset_digits(canon[n][2]))

        if VERBOSE:
            print(f"[index built] entries={len(entries):,} aliases={len(aliases):,}")
        log.info("Search index built: %d entries (%d aliases)", len(entries), len(aliases))
        return cls(entries, offsets)

    # ---- Query ----
    def closest(self, query: str) -> int:
        """
        Seed position for a scan: the leftmost entry equal to `query`, else the
        leftmost entry sorting after it, clamped to the last entry (0 if empty).
        """
        if not self._ids:
            return 0
        i = bisect.bisect_left(self._ids, query)
        return min(i, len(self._ids) - 1)

    # ---- Getters ----
    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, i: int) -> IndexEntry:
        return self._entries[i]

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def offset(self, i: int) -> str:
        return self._offsets[i]

    def canonical(self, i: int) -> IndexEntry:
        entry = self._entries[i]
        return self._entries[entry.canonical_index] if entry.is_alias else entry
