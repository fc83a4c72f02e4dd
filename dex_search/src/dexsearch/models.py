from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple, Union

# Search categories in bucket order; index 0 is the neutral bucket
CATEGORIES: Tuple[str, ...] = (
    "species", "type", "tier", "move", "item", "ability", "egggroup", "category", "article",
)
CATEGORY_INDEX: Dict[str, int] = {c: i for i, c in enumerate(CATEGORIES, start=1)}

CATEGORY_NAMES: Dict[str, str] = {
    "species": "Pokémon",
    "type": "Type",
    "tier": "Tiers",
    "move": "Moves",
    "item": "Items",
    "ability": "Abilities",
    "egggroup": "Egg group",
    "category": "Category",
    "article": "Article",
}

STAT_IDS: Tuple[str, ...] = ("hp", "atk", "def", "spa", "spd", "spe")

Filter = Tuple[str, str]


# ---- result rows ----

@dataclass(frozen=True)
class Header:
    text: str
    kind = "header"


@dataclass(frozen=True)
class Html:
    markup: str
    kind = "html"


@dataclass(frozen=True)
class Entry:
    category: str
    id: str
    match_start: int = 0
    match_end: int = 0
    kind = "entry"


@dataclass(frozen=True)
class SortMarker:
    sort: str             # "sortpokemon" | "sortmove"
    kind = "sort"


SearchRow = Union[Header, Html, Entry, SortMarker]


def row_to_json(row: SearchRow) -> dict:
    """Flatten a row into a JSON-friendly dict tagged with its kind."""
    out = {"kind": row.kind}
    out.update(asdict(row))
    return out


# ---- search index ----

@dataclass(frozen=True)
class IndexEntry:
    id: str
    category: str
    canonical_index: Optional[int] = None   # set on alias entries only
    alias_match_start: int = 0

    @property
    def is_alias(self) -> bool:
        return self.canonical_index is not None


# ---- catalog records ----

@dataclass(frozen=True)
class Species:
    id: str
    name: str
    num: int = 0
    gen: int = 0
    types: Tuple[str, ...] = ()
    abilities: Dict[str, str] = field(default_factory=dict)   # slot "0" | "1" | "H" | "S" -> name
    base_stats: Dict[str, int] = field(default_factory=dict)
    egg_groups: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    tier: str = ""
    base_species: str = ""
    forme: str = ""
    prevo: str = ""
    battle_only: str = ""
    changes_from: str = ""
    other_formes: Tuple[str, ...] = ()
    evos: Tuple[str, ...] = ()
    weightkg: float = 0
    is_nonstandard: Optional[str] = None
    exists: bool = True

    @property
    def is_mega(self) -> bool:
        return self.forme in ("Mega", "Mega-X", "Mega-Y")

    @property
    def bst(self) -> int:
        return sum(self.base_stats.get(s, 0) for s in STAT_IDS)

    def has_ability(self, ability: str) -> bool:
        return ability in self.abilities.values()


@dataclass(frozen=True)
class Move:
    id: str
    name: str
    type: str = "Normal"
    category: str = "Status"
    base_power: int = 0
    accuracy: Union[int, bool] = True
    pp: int = 0
    gen: int = 0
    flags: Tuple[str, ...] = ()
    status: str = ""
    is_nonstandard: Optional[str] = None
    is_z: bool = False
    is_max: bool = False
    no_sketch: bool = False
    exists: bool = True


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    gen: int = 0
    item_user: Tuple[str, ...] = ()
    is_nonstandard: Optional[str] = None
    exists: bool = True


@dataclass(frozen=True)
class Ability:
    id: str
    name: str
    gen: int = 0
    rating: float = 0
    is_nonstandard: Optional[str] = None
    exists: bool = True


@dataclass(frozen=True)
class TypeInfo:
    id: str
    name: str
    exists: bool = True


@dataclass(frozen=True)
class Article:
    id: str
    name: str
    exists: bool = True


@dataclass
class TierTable:
    """
    One format family's tier listing.

    `rows` mixes species ids and ("header", text) pairs in display order;
    `format_slices` maps a tier label to the row position where it begins.
    """
    rows: List[Union[str, Tuple[str, str]]] = field(default_factory=list)
    format_slices: Dict[str, int] = field(default_factory=dict)
    override_tier: Dict[str, str] = field(default_factory=dict)
    items: List[Union[str, Tuple[str, str]]] = field(default_factory=list)
    ubers_uu_bans: Tuple[str, ...] = ()
    nd_doubles_bans: Tuple[str, ...] = ()
    monotype_bans: Tuple[str, ...] = ()


@dataclass
class ModTables:
    """Per-mod override tables consulted before the base catalog."""
    species: Dict[str, Species] = field(default_factory=dict)
    moves: Dict[str, Move] = field(default_factory=dict)
    items: Dict[str, Item] = field(default_factory=dict)
    abilities: Dict[str, Ability] = field(default_factory=dict)
    types: Dict[str, TypeInfo] = field(default_factory=dict)
    learnsets: Dict[str, Dict[str, str]] = field(default_factory=dict)
    move_viability: Dict[str, bool] = field(default_factory=dict)
    formats: Dict[str, dict] = field(default_factory=dict)
    tier_tables: Dict[str, TierTable] = field(default_factory=dict)


@dataclass(frozen=True)
class PokemonSet:
    species: str
    ability: str = ""
    item: str = ""
    moves: Tuple[str, ...] = ()
