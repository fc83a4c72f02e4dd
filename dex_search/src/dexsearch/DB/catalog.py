# dexsearch/DB/catalog.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from ..models import (
    Ability, Article, Item, ModTables, Move, Species, TierTable, TypeInfo,
)
from ..normalize import to_id

MOVE_CATEGORIES = ("Physical", "Special", "Status")

# category -> (base attribute, ModTables attribute)
_TABLES = {
    "species": ("species", "species"),
    "move": ("moves", "moves"),
    "item": ("items", "items"),
    "ability": ("abilities", "abilities"),
    "type": ("types", "types"),
}


class Catalog:
    """
    Read-only game data consumed by the search engine.

    Replaces the process-wide dex tables with an explicit value: every lookup
    takes an optional `mod` id whose override tables are consulted before the
    base tables. Nothing here is mutated after construction.
    """

    def __init__(
        self,
        *,
        species: Optional[Dict[str, Species]] = None,
        moves: Optional[Dict[str, Move]] = None,
        items: Optional[Dict[str, Item]] = None,
        abilities: Optional[Dict[str, Ability]] = None,
        types: Optional[Dict[str, TypeInfo]] = None,
        articles: Optional[Dict[str, Article]] = None,
        tier_names: Iterable[str] = (),
        tier_tables: Optional[Dict[str, TierTable]] = None,
        learnsets: Optional[Dict[str, Dict[str, str]]] = None,
        aliases: Optional[Dict[str, str]] = None,
        mods: Optional[Dict[str, ModTables]] = None,
    ) -> None:
        self.species: Dict[str, Species] = dict(species or {})
        self.moves: Dict[str, Move] = dict(moves or {})
        self.items: Dict[str, Item] = dict(items or {})
        self.abilities: Dict[str, Ability] = dict(abilities or {})
        self.types: Dict[str, TypeInfo] = dict(types or {})
        self.articles: Dict[str, Article] = dict(articles or {})
        self.tier_tables: Dict[str, TierTable] = dict(tier_tables or {})
        self.learnsets: Dict[str, Dict[str, str]] = dict(learnsets or {})
        self.aliases: Dict[str, str] = {to_id(k): to_id(v) for k, v in (aliases or {}).items()}
        self.mods: Dict[str, ModTables] = dict(mods or {})
        self.tier_names: List[str] = self._collect_tier_names(tier_names)

    # ---- derived listings ----
    def _collect_tier_names(self, explicit: Iterable[str]) -> List[str]:
        names: List[str] = []
        seen = set()
        for name in list(explicit) + [s.tier for s in self.species.values()]:
            if name and to_id(name) not in seen:
                seen.add(to_id(name))
                names.append(name)
        return names

    @property
    def egg_groups(self) -> List[str]:
        groups: List[str] = []
        for s in self.species.values():
            for g in s.egg_groups:
                if g not in groups:
                    groups.append(g)
        return groups

    # ---- collaborator interface ----
    def mod_tables(self, mod: str = "") -> Optional[ModTables]:
        if not mod:
            return None
        try:
            return self.mods[mod]
        except KeyError:
            raise KeyError(f"unknown mod: {mod}")

    def get_entity_table(self, category: str, mod: str = "") -> Dict[str, object]:
        """Entity table for a category, with the mod's overrides layered on top."""
        if category not in _TABLES:
            raise ValueError(f"no entity table for category {category!r}")
        base_attr, mod_attr = _TABLES[category]
        base = getattr(self, base_attr)
        tables = self.mod_tables(mod)
        if tables is None:
            return base
        merged = dict(base)
        merged.update(getattr(tables, mod_attr))
        return merged

    def exists_in_catalog(self, category: str, id_: str, mod: str = "") -> bool:
        """
        Existence check used while bucketing. Categories without an entity
        table (tiers, egg groups, move categories, articles) always exist.
        """
        if category not in _TABLES:
            return True
        base_attr, mod_attr = _TABLES[category]
        tables = self.mod_tables(mod)
        if tables is not None and id_ in getattr(tables, mod_attr):
            return True
        entity = getattr(self, base_attr).get(id_)
        return entity is not None and entity.exists

    def _get(self, category: str, id_: str, mod: str = ""):
        tables = self.mod_tables(mod)
        base_attr, mod_attr = _TABLES[category]
        if tables is not None:
            entity = getattr(tables, mod_attr).get(id_)
            if entity is not None:
                return entity
        return getattr(self, base_attr).get(id_)

    def get_species(self, id_: str, mod: str = "") -> Optional[Species]:
        return self._get("species", to_id(id_), mod)

    def get_move(self, id_: str, mod: str = "") -> Optional[Move]:
        return self._get("move", to_id(id_), mod)

    def get_item(self, id_: str, mod: str = "") -> Optional[Item]:
        return self._get("item", to_id(id_), mod)

    def get_ability(self, id_: str, mod: str = "") -> Optional[Ability]:
        return self._get("ability", to_id(id_), mod)

    def get_tier_table(self, key: str, mod: str = "") -> Optional[TierTable]:
        tables = self.mod_tables(mod)
        if tables is not None and key in tables.tier_tables:
            return tables.tier_tables[key]
        return self.tier_tables.get(key)

    def get_learnset(self, species_id: str, mod: str = "") -> Optional[Dict[str, str]]:
        """Learnset for one learnset id, with the mod's added moves merged in."""
        learnset = self.learnsets.get(species_id)
        tables = self.mod_tables(mod)
        if tables is not None and species_id in tables.learnsets:
            merged = dict(learnset or {})
            merged.update(tables.learnsets[species_id])
            return merged
        return learnset

    def has_learnset(self, species_id: str, mod: str = "") -> bool:
        return self.get_learnset(species_id, mod) is not None

    def move_viability(self, move_id: str, mod: str = "") -> Optional[bool]:
        tables = self.mod_tables(mod)
        if tables is None:
            return None
        return tables.move_viability.get(move_id)

    def find_mod_format(self, format_id: str) -> Optional[tuple[str, str, dict]]:
        """Return (mod id, mod format id, format table) for a format a mod defines."""
        for modid, tables in self.mods.items():
            for formatid, table in tables.formats.items():
                if formatid == format_id or format_id[4:] == formatid:
                    return modid, formatid, table
        return None
