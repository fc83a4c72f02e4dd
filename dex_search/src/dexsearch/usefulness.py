"""
Move usability lookup.

Decides whether a move a species can learn belongs under "Moves" or under
"Usually useless moves". All per-move knowledge lives in
``data/move_heuristics.json``; this module only evaluates it.

A rule is a list of clauses. The rule holds when any clause holds, and a
clause holds when every condition in it holds (``{}`` always holds, ``[]``
never does).
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

from .config import DATA_DIR
from .models import Move, PokemonSet, Species
from .normalize import to_id

HEURISTICS_FILE = DATA_DIR / "move_heuristics.json"


@dataclass(frozen=True)
class MoveHeuristics:
    good_status: frozenset
    good_weak: frozenset
    bad_strong: frozenset
    good_doubles: frozenset
    always_useful: frozenset
    gen1: Dict[str, Any]
    stadium: Dict[str, Any]
    format_usable: Dict[str, List[str]]
    mega_item_abilities: Dict[str, str]
    rules: Dict[str, List[Dict[str, Any]]]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MoveHeuristics":
        return cls(
            good_status=frozenset(raw.get("good_status", ())),
            good_weak=frozenset(raw.get("good_weak", ())),
            bad_strong=frozenset(raw.get("bad_strong", ())),
            good_doubles=frozenset(raw.get("good_doubles", ())),
            always_useful=frozenset(raw.get("always_useful", ())),
            gen1=raw.get("gen1", {}),
            stadium=raw.get("stadium", {}),
            format_usable=raw.get("format_usable", {}),
            mega_item_abilities=raw.get("mega_item_abilities", {}),
            rules=raw.get("rules", {}),
        )


@lru_cache(maxsize=1)
def load_heuristics() -> MoveHeuristics:
    with open(HEURISTICS_FILE, "r", encoding="utf-8") as f:
        return MoveHeuristics.from_dict(json.load(f))


@dataclass(frozen=True)
class MoveContext:
    """Everything a rule clause may look at."""
    species: Species
    moves: Sequence[str]
    gen: int
    format_type: Optional[str] = None
    ability: str = ""
    item: str = ""
    set_moves: Optional[int] = None     # number of moves on the set, if a set is known


def _clause_holds(clause: Dict[str, Any], ctx: MoveContext) -> bool:
    sp = ctx.species
    for key, want in clause.items():
        if key == "ability":
            ok = ctx.ability in want
        elif key == "not_ability":
            ok = ctx.ability not in want
        elif key == "item":
            ok = ctx.item in want
        elif key == "item_suffix":
            ok = ctx.item.endswith(want)
        elif key == "without":
            ok = not any(m in ctx.moves for m in want)
        elif key == "with_any":
            ok = any(m in ctx.moves for m in want)
        elif key == "types":
            ok = any(t in sp.types for t in want)
        elif key == "species":
            ok = sp.id in want
        elif key == "base_species":
            ok = (sp.base_species or sp.name) in want
        elif key == "min_gen":
            ok = ctx.gen >= want
        elif key == "max_gen":
            ok = ctx.gen <= want
        elif key == "min_stat":
            ok = all(sp.base_stats.get(s, 0) >= v for s, v in want.items())
        elif key == "max_stat":
            ok = all(sp.base_stats.get(s, 0) <= v for s, v in want.items())
        elif key == "min_weight":
            ok = sp.weightkg >= want
        elif key == "has_evos":
            ok = bool(sp.evos) == want
        elif key == "format_type":
            ok = ctx.format_type in want
        elif key == "format_type_contains":
            ok = want in (ctx.format_type or "")
        elif key == "set_moves_below":
            ok = ctx.set_moves is not None and ctx.set_moves < want
        else:
            raise ValueError(f"unknown move rule condition: {key!r}")
        if not ok:
            return False
    return True


def rule_holds(rule: List[Dict[str, Any]], ctx: MoveContext) -> bool:
    return any(_clause_holds(clause, ctx) for clause in rule)


def _gen1_verdict(move_id: str, ctx: MoveContext, h: MoveHeuristics) -> Optional[bool]:
    if move_id in h.gen1.get("usable", ()):
        return True
    if move_id in h.gen1.get("useless", ()):
        return False
    rule = h.gen1.get("rules", {}).get(move_id)
    if rule is not None:
        return rule_holds(rule, ctx)
    # Stadium changes many mechanics
    if ctx.format_type == "stadium":
        if move_id in h.stadium.get("usable", ()):
            return True
        if move_id in h.stadium.get("useless", ()):
            return False
        rule = h.stadium.get("rules", {}).get(move_id)
        if rule is not None:
            return rule_holds(rule, ctx)
    return None


def move_is_not_useless(
    move_id: str,
    species: Species,
    moves: Sequence[str],
    *,
    gen: int,
    format_type: Optional[str] = None,
    pset: Optional[PokemonSet] = None,
    move: Optional[Move] = None,
    forced: Optional[bool] = None,
    heuristics: Optional[MoveHeuristics] = None,
) -> bool:
    """
    True when `move_id` is worth listing above the "Usually useless moves"
    header for `species`, given the other learnable `moves`.

    `move` is the catalog record (None when unknown), `forced` a mod's
    explicit viability verdict, which wins over everything else.
    """
    if forced is not None:
        return forced
    h = heuristics or load_heuristics()

    ability = to_id(pset.ability) if pset else ""
    item = to_id(pset.item) if pset else ""
    # mega stones decide the ability the move will be used with
    ability = h.mega_item_abilities.get(item, ability)
    ctx = MoveContext(
        species=species, moves=moves, gen=gen, format_type=format_type,
        ability=ability, item=item, set_moves=len(pset.moves) if pset else None,
    )

    if gen == 1:
        verdict = _gen1_verdict(move_id, ctx, h)
        if verdict is not None:
            return verdict

    if move_id in h.format_usable.get(format_type or "", ()):
        return True

    rule = h.rules.get(move_id)
    if rule is not None:
        return rule_holds(rule, ctx)

    if format_type == "doubles" and move_id in h.good_doubles:
        return True

    if move is None or not move.exists:
        return True
    if (move.status == "slp" or move_id == "yawn") and gen == 9 and not format_type:
        return False
    if move.category == "Status":
        return move_id in h.good_status
    if move.base_power < 75:
        return move_id in h.good_weak
    if move_id in h.always_useful:
        return True

    # strong moves
    if "charge" in move.flags:
        return item == "powerherb"
    if "recharge" in move.flags:
        return False
    if "slicing" in move.flags and ability == "sharpness":
        return True
    return move_id not in h.bad_strong
