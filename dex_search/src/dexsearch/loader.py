"""
Catalog loader.

Reads a catalog JSON document into a `Catalog`. The document mirrors the
dataclass fields in `models` (snake_case keys); entity tables are objects
keyed by id, tier rows are either an id string or a ``["header", "OU"]``
pair, and a `mods` object holds per-mod override tables with the same shape.

Example (trimmed)::

    {
      "species": {"pidgey": {"name": "Pidgey", "num": 16, "types": ["Normal", "Flying"]}},
      "moves": {"fly": {"name": "Fly", "type": "Flying", "category": "Physical", "base_power": 90}},
      "tier_tables": {"gen9": {"rows": [["header", "OU"], "pidgeot"], "format_slices": {"OU": 0}}},
      "aliases": {"sub": "substitute"}
    }
"""
from __future__ import annotations
import json
import logging
import os
from dataclasses import fields, replace
from typing import Any, Dict, List, Type, TypeVar

from .config import VERBOSE
from .DB.catalog import Catalog
from .models import (
    Ability, Article, Item, ModTables, Move, Species, TierTable, TypeInfo,
)
from .normalize import to_id

log = logging.getLogger(__name__)

T = TypeVar("T")

# National dex number where each generation ends
_GEN_LAST_NUM = (151, 251, 386, 493, 649, 721, 809, 905, 1025)


def _gen_from_num(num: int) -> int:
    for gen, last in enumerate(_GEN_LAST_NUM, start=1):
        if num <= last:
            return gen
    return len(_GEN_LAST_NUM)


def _record(cls: Type[T], id_: str, raw: Dict[str, Any]) -> T:
    """Build one frozen record, turning JSON lists into tuples and ignoring unknown keys."""
    known = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {"id": to_id(id_)}
    for key, value in raw.items():
        if key not in known or key == "id":
            continue
        kwargs[key] = tuple(value) if isinstance(value, list) else value
    kwargs.setdefault("name", id_)
    return cls(**kwargs)


def _table(cls: Type[T], raw: Any) -> Dict[str, T]:
    out: Dict[str, T] = {}
    if isinstance(raw, list):
        # plain list of display names
        for name in raw:
            rec = _record(cls, to_id(name), {"name": name})
            out[rec.id] = rec
        return out
    for id_, value in (raw or {}).items():
        rec = _record(cls, id_, value or {})
        out[rec.id] = rec
    return out


def _species_table(raw: Any) -> Dict[str, Species]:
    table = _table(Species, raw)
    for id_, sp in list(table.items()):
        if not sp.gen and sp.num > 0:
            table[id_] = replace(sp, gen=_gen_from_num(sp.num))
    return table


def _rows(raw: List[Any]) -> List[Any]:
    return [r if isinstance(r, str) else (r[0], r[1]) for r in raw or ()]


def _tier_table(raw: Dict[str, Any]) -> TierTable:
    return TierTable(
        rows=_rows(raw.get("rows", ())),
        format_slices=dict(raw.get("format_slices", {})),
        override_tier=dict(raw.get("override_tier", {})),
        items=_rows(raw.get("items", ())),
        ubers_uu_bans=tuple(raw.get("ubers_uu_bans", ())),
        nd_doubles_bans=tuple(raw.get("nd_doubles_bans", ())),
        monotype_bans=tuple(raw.get("monotype_bans", ())),
    )


def _mod_tables(raw: Dict[str, Any]) -> ModTables:
    return ModTables(
        species=_species_table(raw.get("species")),
        moves=_table(Move, raw.get("moves")),
        items=_table(Item, raw.get("items")),
        abilities=_table(Ability, raw.get("abilities")),
        types=_table(TypeInfo, raw.get("types")),
        learnsets={to_id(k): dict(v) for k, v in raw.get("learnsets", {}).items()},
        move_viability={to_id(k): bool(v) for k, v in raw.get("move_viability", {}).items()},
        formats={to_id(k): dict(v) for k, v in raw.get("formats", {}).items()},
        tier_tables={k: _tier_table(v) for k, v in raw.get("tier_tables", {}).items()},
    )


def catalog_from_dict(doc: Dict[str, Any]) -> Catalog:
    """Parse an already-decoded catalog document."""
    if not isinstance(doc, dict):
        raise ValueError("catalog document must be a JSON object")
    catalog = Catalog(
        species=_species_table(doc.get("species")),
        moves=_table(Move, doc.get("moves")),
        items=_table(Item, doc.get("items")),
        abilities=_table(Ability, doc.get("abilities")),
        types=_table(TypeInfo, doc.get("types")),
        articles=_table(Article, doc.get("articles")),
        tier_names=doc.get("tiers", ()),
        tier_tables={k: _tier_table(v) for k, v in doc.get("tier_tables", {}).items()},
        learnsets={to_id(k): dict(v) for k, v in doc.get("learnsets", {}).items()},
        aliases=doc.get("aliases", {}),
        mods={to_id(k): _mod_tables(v) for k, v in doc.get("mods", {}).items()},
    )
    if VERBOSE:
        print(f"[catalog] species={len(catalog.species):,} moves={len(catalog.moves):,} "
              f"items={len(catalog.items):,} abilities={len(catalog.abilities):,}")
    return catalog


def load_catalog(path: str) -> Catalog:
    """Read a catalog JSON file from disk."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"catalog file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)
    log.info("Loaded catalog from %s", path)
    return catalog_from_dict(doc)
