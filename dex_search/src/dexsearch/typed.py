"""
Category-scoped ("typed") searches.

A typed search answers "what should the list show before anything is typed"
for one category, narrowed by a format and optionally a species or a full
set. Each subclass supplies the table, the default and base listings, a row
filter and a sort; `TypedSearch.get_results` combines them.
"""
from __future__ import annotations
import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

from . import config as CFG
from .DB.catalog import MOVE_CATEGORIES, Catalog
from .formats import FormatInfo, base_table_key, is_hackmons, is_vgc_or_bs, parse_format, tier_key
from .models import (
    Entry, Filter, Header, Html, PokemonSet, SearchRow, SortMarker, Species, TierTable,
)
from .normalize import to_id
from .usefulness import move_is_not_useless

log = logging.getLogger(__name__)

HIDDEN_POWER_TYPES = (
    "bug", "dark", "dragon", "electric", "fighting", "fire", "flying", "ghost",
    "grass", "ground", "ice", "poison", "psychic", "rock", "steel", "water",
)

# learnset gen code a region-born (VGC / Battle Stadium / gen 9) move must carry
REGION_GEN_CODES: Dict[int, str] = {6: "p", 7: "q", 8: "g", 9: "a"}

# learnsets that chain to a differently named species
LEARNSET_REDIRECTS: Dict[str, str] = {
    "gastrodoneast": "gastrodon",
    "pumpkaboosuper": "pumpkaboo",
    "sinisteaantique": "sinistea",
    "tatsugiristretchy": "tatsugiri",
}

TRADEBACK_MODS = ("gen1expansionpack", "gen1burgundy")

# effective power of variable-power moves, for the "power" sort
MOVE_POWER: Dict[str, int] = {
    "return": 102, "frustration": 102, "spitup": 300, "trumpcard": 200, "naturalgift": 80,
    "grassknot": 120, "lowkick": 120, "gyroball": 150, "electroball": 150, "flail": 200,
    "reversal": 200, "present": 120, "wringout": 120, "crushgrip": 120, "heatcrash": 120,
    "heavyslam": 120, "fling": 130, "magnitude": 150, "beatup": 24, "punishment": 1020,
    "psywave": 1250, "nightshade": 1200, "seismictoss": 1200, "dragonrage": 1140,
    "sonicboom": 1120, "superfang": 1350, "endeavor": 1399, "sheercold": 1501,
    "fissure": 1500, "horndrill": 1500, "guillotine": 1500,
}

_REGION_BORN_FORMAT = re.compile(r"^battle(spot|stadium|festival)")
_KEEPS_GMAX = re.compile(r"^(battlestadium|vgc|doublesubers)")


def table_rows(rows: Iterable[Union[str, Tuple[str, str]]], category: str) -> List[SearchRow]:
    """Tier/item table rows: plain ids become entries, ("header", text) pairs headers."""
    out: List[SearchRow] = []
    for r in rows:
        if isinstance(r, str):
            out.append(Entry(category, r))
        else:
            out.append(Header(r[1]))
    return out


def drop_empty_headers(rows: Sequence[SearchRow]) -> List[SearchRow]:
    """Keep the last of consecutive headers and drop a trailing one."""
    out: List[SearchRow] = []
    for row in rows:
        if out and isinstance(row, Header) and isinstance(out[-1], Header):
            out[-1] = row
        else:
            out.append(row)
    if out and isinstance(out[-1], Header):
        out.pop()
    return out


class TypedSearch:
    """Base strategy; subclasses set `category` and implement the listing hooks."""

    category: str = ""
    sort_row: Optional[SortMarker] = None

    def __init__(self, catalog: Catalog, format_id: str = "",
                 species_or_set: Union[str, PokemonSet] = "") -> None:
        self.catalog = catalog
        self.format_id = to_id(format_id)
        self.info: FormatInfo = parse_format(self.format_id, catalog)
        self.gen = self.info.gen
        self.format = self.info.format
        self.format_type = self.info.format_type
        self.mod = self.info.mod
        self.mod_format = self.info.mod_format

        self.set: Optional[PokemonSet] = None
        if isinstance(species_or_set, PokemonSet):
            self.set = species_or_set
            self.species = to_id(species_or_set.species)
        else:
            self.species = to_id(species_or_set)

        # /* ~~~ lazily filled, private to this context ~~~ */
        self.base_results: Optional[List[SearchRow]] = None
        self.base_illegal_results: Optional[List[SearchRow]] = None
        self.illegal_reasons: Optional[Dict[str, str]] = None

    # ---- hooks ----
    def get_table(self) -> Dict[str, object]:
        return self.catalog.get_entity_table(self.category, self.mod)

    def get_default_results(self) -> List[SearchRow]:
        raise NotImplementedError

    def get_base_results(self) -> List[SearchRow]:
        return self.get_default_results()

    def filter(self, row: SearchRow, filters: Sequence[Filter]) -> bool:
        return True

    def sort(self, rows: List[SearchRow], sort_col: str, reverse: bool = False) -> List[SearchRow]:
        raise ValueError(f"invalid sort column for {self.category}: {sort_col!r}")

    # ---- pipeline ----
    def has_context(self) -> bool:
        return bool(self.format_id or self.species)

    def legality(self) -> Optional[Dict[str, str]]:
        """
        Illegal-reasons map used by text searches, or None when nothing
        narrows this search (no format and no species).
        """
        if not self.has_context():
            return None
        self._ensure_base()
        return self.illegal_reasons

    def _ensure_base(self) -> None:
        if self.base_results is None:
            self.base_results = self.get_base_results()
            log.debug("base results for %s/%s/%s: %d rows", self.category,
                      self.format_id, self.species, len(self.base_results))
        if self.base_illegal_results is None:
            legal = {r.id for r in self.base_results
                     if isinstance(r, Entry) and r.category == self.category}
            self.base_illegal_results = []
            self.illegal_reasons = {}
            for id_ in self.get_table():
                if id_ not in legal:
                    self.base_illegal_results.append(Entry(self.category, id_))
                    self.illegal_reasons[id_] = CFG.ILLEGAL_REASON

    def get_results(self, filters: Optional[Sequence[Filter]] = None,
                    sort_col: Optional[str] = None, reverse: bool = False) -> List[SearchRow]:
        virtual = VIRTUAL_SORTS.get(sort_col or "")
        if virtual is not None:
            lead: List[SearchRow] = [self.sort_row] if self.sort_row else []
            return lead + virtual(self.catalog, self.format_id).get_default_results()

        self._ensure_base()
        results: List[SearchRow]
        illegal: Optional[List[SearchRow]] = None
        if filters:
            results = drop_empty_headers([r for r in self.base_results if self.filter(r, filters)])
            illegal = [r for r in self.base_illegal_results if self.filter(r, filters)]
        else:
            results = list(self.base_results)

        if sort_col:
            results = self.sort(self._own_rows(results), sort_col, reverse)
            if illegal is not None:
                illegal = self.sort(self._own_rows(illegal), sort_col, reverse)

        if self.sort_row:
            results = [self.sort_row] + results
        if illegal:
            results = results + [Header(CFG.ILLEGAL_HEADER)] + illegal
        return results

    def _own_rows(self, rows: Iterable[SearchRow]) -> List[SearchRow]:
        return [r for r in rows if isinstance(r, Entry) and r.category == self.category]

    # ---- tiers ----
    def get_tier(self, species: Species) -> str:
        if self.format_type == "metronome":
            return str(species.num) if species.num >= 0 else species.tier
        table = self.catalog.get_tier_table(tier_key(self.info), self.mod)
        if table is None and self.mod:
            table = self.catalog.get_tier_table(base_table_key(self.info, self.catalog)[0], self.mod)
        if table is None:
            return species.tier
        override = table.override_tier
        if species.id in override:
            return override[species.id]
        if species.id.endswith("totem") and species.id[:-5] in override:
            return override[species.id[:-5]]
        base = to_id(species.base_species)
        if base in override:
            return override[base]
        return species.tier

    # ---- learnsets ----
    def uses_region_gen_codes(self) -> bool:
        fmt = self.format
        return fmt.startswith(("vgc", "bss", "battlespot", "battlestadium", "battlefestival")) or \
            (self.gen == 9 and self.format_type != "natdex")

    def learnset_gen_char(self) -> str:
        if self.uses_region_gen_codes() and self.gen in REGION_GEN_CODES:
            return REGION_GEN_CODES[self.gen]
        return str(self.gen)

    def is_tradebacks(self) -> bool:
        return self.format.startswith("tradebacks") or "tradebacks" in self.format or self.mod in TRADEBACK_MODS

    def first_learnset_id(self, species_id: str) -> str:
        if self.catalog.has_learnset(species_id, self.mod):
            return species_id
        species = self.catalog.get_species(species_id, self.mod)
        if species is None or not species.exists:
            return ""
        base_id = to_id(species.base_species or species.name)
        if species.battle_only and species.battle_only != species.base_species:
            base_id = to_id(species.battle_only)
        if self.catalog.has_learnset(base_id, self.mod):
            return base_id
        return ""

    def next_learnset_id(self, learnset_id: str, species_id: str) -> str:
        if learnset_id == "lycanrocdusk" or (species_id == "rockruff" and learnset_id == "rockruff"):
            return "rockruffdusk"
        species = self.catalog.get_species(learnset_id, self.mod)
        if species is None or not species.exists:
            return ""
        if species.id in LEARNSET_REDIRECTS:
            return LEARNSET_REDIRECTS[species.id]
        return to_id(species.battle_only or species.changes_from or species.prevo)

    def learnset_chain(self, species_id: str) -> Iterable[Tuple[str, Dict[str, str]]]:
        """Yield (learnset id, learnset) along base species / battle-only / prevo links."""
        seen = set()
        learnset_id = self.first_learnset_id(species_id)
        while learnset_id and learnset_id not in seen:
            seen.add(learnset_id)
            learnset = self.catalog.get_learnset(learnset_id, self.mod)
            if learnset is not None and not learnset:
                # placeholder learnset: the base species holds the real one
                species = self.catalog.get_species(learnset_id, self.mod)
                learnset_id = to_id(species.base_species) if species else ""
                continue
            if learnset:
                yield learnset_id, learnset
            learnset_id = self.next_learnset_id(learnset_id, species_id)

    def can_learn(self, species_id: str, move_id: str) -> bool:
        move = self.catalog.get_move(move_id, self.mod)
        if self.format_type == "natdex" and move is not None and \
                move.is_nonstandard and move.is_nonstandard != "Past":
            return False
        gen_char = self.learnset_gen_char()
        tradebacks = self.is_tradebacks()
        for _, learnset in self.learnset_chain(to_id(species_id)):
            sources = learnset.get(move_id)
            if sources is None:
                continue
            if gen_char in sources:
                return True
            if tradebacks and move is not None and move.gen == self.gen and str(self.gen + 1) in sources:
                return True
        return False


# /* ~~~ species ~~~ */

class SpeciesSearch(TypedSearch):
    category = "species"
    sort_row = SortMarker("sortpokemon")
    SORT_COLUMNS = ("hp", "atk", "def", "spa", "spd", "spe", "bst", "name")

    def get_default_results(self) -> List[SearchRow]:
        results: List[SearchRow] = []
        group = None
        for species in self.catalog.species.values():
            if species.is_nonstandard == "CAP":
                label = "CAP"
            elif species.num <= 0:
                label = "Glitch"
            else:
                label = f"Generation {species.gen}"
            if label != group:
                results.append(Header(label))
                group = label
            results.append(Entry("species", species.id))
        return results

    def _tier_table(self) -> Tuple[Optional[TierTable], bool]:
        key, doubles = base_table_key(self.info, self.catalog)
        return self.catalog.get_tier_table(key, self.mod), doubles

    def get_base_results(self) -> List[SearchRow]:
        fmt = self.format
        if not fmt:
            return self.get_default_results()
        table, doubles = self._tier_table()
        if table is None:
            log.debug("no tier table for %s; using the full dex", self.format_id)
            return self.get_default_results()

        rows = table_rows(table.rows, "species")
        slices = table.format_slices
        gen, ft = self.gen, self.format_type or ""
        hackmons = is_hackmons(fmt)

        def at(*labels: str) -> Optional[int]:
            for label in labels:
                if slices.get(label):
                    return slices[label]
            return None

        def sl(start: Optional[int], end: Optional[int] = None) -> List[SearchRow]:
            return rows[start:end]

        if fmt in ("ubers", "uber", "ubersuu", "nationaldexdoubles"):
            rows = sl(at("Uber"))
        elif is_vgc_or_bs(fmt) or (hackmons and gen == 9 and not ft):
            if fmt.endswith("series13") or hackmons:
                pass    # mythicals allowed
            elif fmt in ("vgc2010", "vgc2016", "vgc2022") or fmt.startswith("vgc2019") \
                    or fmt.endswith(("series10", "series11")):
                rows = sl(at("Restricted Legendary"))
            else:
                rows = sl(at("Regular"))
        elif fmt == "ou":
            rows = sl(at("OU"))
        elif fmt == "uu" or (fmt == "ru" and gen == 3):
            rows = sl(at("UU"))
        elif fmt == "ru":
            rows = sl(at("RU", "UU"))
        elif fmt == "nu":
            rows = sl(at("NU", "RU", "UU"))
        elif fmt == "pu":
            rows = sl(at("PU", "NU"))
        elif fmt == "zu":
            rows = sl(at("ZU", "PU", "NU"))
        elif fmt.startswith("lc") or (fmt != "caplc" and fmt.endswith("lc")):
            rows = sl(at("LC"))
        elif fmt.endswith("cap"):
            rows = sl(None, at("AG", "Uber")) + sl(at("OU"))
        elif fmt == "caplc":
            rows = sl(at("CAP LC"), at("AG", "Uber")) + sl(at("LC"))
        elif fmt == "anythinggoes" or fmt.endswith("ag") or fmt.startswith("ag"):
            rows = sl(at("AG"))
        elif hackmons and (gen < 9 or ft == "natdex"):
            rows = sl(at("AG", "Uber"))
        elif fmt == "monotype" or fmt.startswith("monothreat"):
            rows = sl(at("Uber"))
        elif fmt == "doublesubers":
            rows = sl(at("DUber"))
        elif fmt == "doublesou" and gen > 4:
            rows = sl(at("DOU"))
        elif fmt == "doublesuu":
            rows = sl(at("DUU"))
        elif fmt == "doublesnu":
            rows = sl(at("DNU", "DUU"))
        elif ft.startswith("bdsp") or ft in ("letsgo", "stadium"):
            rows = sl(at("Uber"))
        elif not doubles:
            rows = sl(at("OU"), at("UU")) + sl(at("AG"), at("Uber")) \
                + sl(at("Uber"), at("OU")) + sl(at("UU"))
        else:
            rows = sl(at("DOU"), at("DUU")) + sl(at("DUber"), at("DOU")) + sl(at("DUU"))

        bans: Tuple[str, ...] = ()
        if fmt == "ubersuu":
            bans = table.ubers_uu_bans
        elif fmt == "nationaldexdoubles":
            bans = table.nd_doubles_bans
        elif gen >= 5 and (fmt == "monotype" or fmt.startswith("monothreat")):
            bans = table.monotype_bans
        if bans:
            rows = [r for r in rows if not (isinstance(r, Entry) and r.id in bans)]

        rows = self._apply_mod_bans(rows)

        # Gigantamax formes only show where they are allowed
        if not _KEEPS_GMAX.match(fmt):
            rows = [r for r in rows
                    if not (isinstance(r, Header) and r.text == "DUber by technicality")
                    and not (isinstance(r, Entry) and r.id.endswith("gmax"))]
        return rows

    def _apply_mod_bans(self, rows: List[SearchRow]) -> List[SearchRow]:
        if not self.mod:
            return rows
        fmt_table = self.catalog.mods[self.mod].formats.get(self.mod_format, {})
        bans = [to_id(b) for b in fmt_table.get("bans", ())]
        unbans = [to_id(u) for u in fmt_table.get("unbans", ())]
        if bans and "allpokemon" not in bans:
            rows = [r for r in rows if not (isinstance(r, Entry) and r.id in bans)]
        elif unbans and "allpokemon" in bans:
            rows = [r for r in rows if isinstance(r, Header) or r.id in unbans]
        else:
            return rows
        return drop_empty_headers(rows)

    def filter(self, row: SearchRow, filters: Sequence[Filter]) -> bool:
        if not filters or not isinstance(row, Entry) or row.category != "species":
            return True
        species = self.catalog.get_species(row.id, self.mod)
        if species is None:
            return False
        for dimension, value in filters:
            if dimension == "type":
                if value not in species.types:
                    return False
            elif dimension == "egggroup":
                if value not in species.egg_groups:
                    return False
            elif dimension == "tier":
                if self.get_tier(species) != value:
                    return False
            elif dimension == "ability":
                if not species.has_ability(value):
                    return False
            elif dimension == "move":
                if not self.can_learn(species.id, value):
                    return False
        return True

    def sort(self, rows: List[SearchRow], sort_col: str, reverse: bool = False) -> List[SearchRow]:
        if sort_col not in self.SORT_COLUMNS:
            raise ValueError(f"invalid sort column for species: {sort_col!r}")
        if sort_col == "name":
            return sorted(rows, key=lambda r: r.id, reverse=reverse)

        def stat(row: SearchRow) -> int:
            species = self.catalog.get_species(row.id, self.mod)
            if species is None:
                return 0
            if sort_col == "bst":
                total = species.bst
                if self.gen == 1:
                    total -= species.base_stats.get("spd", 0)
                return total
            return species.base_stats.get(sort_col, 0)

        # highest first; reversed lists lowest first
        return sorted(rows, key=lambda r: -stat(r), reverse=reverse)


# /* ~~~ moves ~~~ */

class MoveSearch(TypedSearch):
    category = "move"
    sort_row = SortMarker("sortmove")
    SORT_COLUMNS = ("power", "accuracy", "pp", "name")

    def get_default_results(self) -> List[SearchRow]:
        regular: List[SearchRow] = [Header("Moves")]
        cap: List[SearchRow] = []
        for id_, move in self.get_table().items():
            if move.is_nonstandard == "CAP":
                cap.append(Entry("move", id_))
            else:
                regular.append(Entry("move", id_))
        if cap:
            return regular + [Header("CAP moves")] + cap
        return regular

    def _learnable(self, species: Species) -> Tuple[List[str], bool]:
        """Moves the species' learnset chain grants in this format, and whether Sketch is among them."""
        gen = self.gen
        ft = self.format_type
        fmt = self.format
        region_born = gen >= 6 and (
            bool(_REGION_BORN_FORMAT.match(fmt)) or fmt.startswith(("bss", "vgc"))
            or (gen == 9 and ft != "natdex")
        )
        tradebacks = self.is_tradebacks()
        moves: List[str] = []
        sketch = False
        for _, learnset in self.learnset_chain(species.id):
            for move_id, sources in learnset.items():
                move = self.catalog.get_move(move_id, self.mod)
                if region_born and REGION_GEN_CODES.get(gen, "") not in sources:
                    continue
                if str(gen) not in sources and not (
                        tradebacks and move is not None and move.gen <= gen and str(gen + 1) in sources):
                    continue
                if ft != "natdex" and move is not None and move.is_nonstandard == "Past":
                    continue
                if move_id in moves:
                    continue
                moves.append(move_id)
                if move_id == "sketch":
                    sketch = True
                if move_id == "hiddenpower":
                    moves.extend("hiddenpower" + t for t in HIDDEN_POWER_TYPES)
        return moves, sketch

    def _pool(self, moves: List[str], sketch: bool, hackmons: bool) -> Tuple[List[str], List[str]]:
        """Extend with every move Sketch or Hackmons allows; returns (moves, sketched moves)."""
        gen, ft = self.gen, self.format_type
        sketched: List[str] = []
        if hackmons:
            moves = []
        for id_, move in self.get_table().items():
            if not self.format.startswith("cap") and id_ in ("paleowave", "shadowstrike"):
                continue
            if not move.exists or id_ in moves or move.gen > gen:
                continue
            if sketch:
                if move.no_sketch or move.is_max or move.is_z:
                    continue
                if move.is_nonstandard and move.is_nonstandard != "Past":
                    continue
                if move.is_nonstandard == "Past" and ft != "natdex":
                    continue
                sketched.append(id_)
            else:
                if not (gen < 8 or ft == "natdex") and move.is_z:
                    continue
                if move.is_max and gen > 8:
                    continue
                if move.is_nonstandard == "Past" and ft != "natdex":
                    continue
                if move.is_nonstandard == "LGPE" and ft != "letsgo":
                    continue
                moves.append(id_)
        return moves, sketched

    def _stab_types(self, species: Species) -> List[str]:
        types = [] if species.battle_only else list(species.types)
        prevo = species.prevo
        while prevo:
            pre = self.catalog.get_species(prevo, self.mod)
            if pre is None:
                break
            types.extend(pre.types)
            prevo = pre.prevo
        base = self.catalog.get_species(species.changes_from or species.base_species or species.name, self.mod)
        if base is not None:
            types.extend(base.types)
        return types

    def get_base_results(self) -> List[SearchRow]:
        if not self.species:
            return self.get_default_results()
        species = self.catalog.get_species(self.species, self.mod)
        if species is None:
            return self.get_default_results()
        fmt = self.format
        hackmons = is_hackmons(fmt)
        stabmons = "stabmons" in fmt or "stylemons" in fmt or fmt == "staaabmons"

        moves, sketch = self._learnable(species)
        sketched: List[str] = []
        if sketch or hackmons:
            moves, sketched = self._pool(moves, sketch, hackmons)
        if self.format_type == "metronome":
            moves = ["metronome"]
        if stabmons:
            stab = self._stab_types(species)
            for id_, move in self.get_table().items():
                if id_ in moves or move.gen > self.gen:
                    continue
                if move.is_z or move.is_max or (move.is_nonstandard and move.is_nonstandard != "Unobtainable"):
                    continue
                if move.type in stab:
                    moves.append(id_)

        moves.sort()
        sketched.sort()

        usable: List[SearchRow] = []
        useless: List[SearchRow] = []
        for id_ in moves:
            if self._usable(id_, species, moves):
                if not usable:
                    usable.append(Header("Moves"))
                usable.append(Entry("move", id_))
            else:
                if not useless:
                    useless.append(Header("Usually useless moves"))
                useless.append(Entry("move", id_))

        sketched_usable = [i for i in sketched if self._usable(i, species, sketched)]
        sketched_useless = [i for i in sketched if i not in sketched_usable]
        if sketched_usable:
            usable += [Header("Sketched moves")] + [Entry("move", i) for i in sketched_usable]
        if sketched_useless:
            useless += [Header("Useless sketched moves")] + [Entry("move", i) for i in sketched_useless]
        return usable + useless

    def _usable(self, move_id: str, species: Species, moves: Sequence[str]) -> bool:
        return move_is_not_useless(
            move_id, species, moves,
            gen=self.gen, format_type=self.format_type, pset=self.set,
            move=self.catalog.get_move(move_id, self.mod),
            forced=self.catalog.move_viability(move_id, self.mod),
        )

    def filter(self, row: SearchRow, filters: Sequence[Filter]) -> bool:
        if not filters or not isinstance(row, Entry) or row.category != "move":
            return True
        move = self.catalog.get_move(row.id, self.mod)
        if move is None:
            return False
        for dimension, value in filters:
            if dimension == "type":
                if move.type != value:
                    return False
            elif dimension == "category":
                if move.category != value:
                    return False
            elif dimension == "pokemon":
                if not self.can_learn(value, move.id):
                    return False
        return True

    def sort(self, rows: List[SearchRow], sort_col: str, reverse: bool = False) -> List[SearchRow]:
        if sort_col not in self.SORT_COLUMNS:
            raise ValueError(f"invalid sort column for moves: {sort_col!r}")
        if sort_col == "name":
            return sorted(rows, key=lambda r: r.id, reverse=reverse)

        def value(row: SearchRow) -> int:
            move = self.catalog.get_move(row.id, self.mod)
            if move is None:
                return 0
            if sort_col == "power":
                return move.base_power or MOVE_POWER.get(row.id) or (-1 if move.category == "Status" else 1400)
            if sort_col == "accuracy":
                return 101 if move.accuracy is True else int(move.accuracy or 0)
            return move.pp or 0

        return sorted(rows, key=lambda r: -value(r), reverse=reverse)


# /* ~~~ items ~~~ */

class ItemSearch(TypedSearch):
    category = "item"

    def _item_table_key(self) -> str:
        ft = self.format_type or ""
        if self.mod:
            return base_table_key(self.info, self.catalog)[0]
        if ft.startswith("bdsp"):
            return "gen8bdsp"
        if ft in ("natdex", "metronome"):
            return f"gen{self.gen}{ft}"
        return f"gen{self.gen}"

    def get_default_results(self) -> List[SearchRow]:
        table = self.catalog.get_tier_table(self._item_table_key(), self.mod)
        if table is not None and table.items:
            return table_rows(table.items, "item")
        return [Entry("item", id_) for id_ in self.get_table()]

    def get_base_results(self) -> List[SearchRow]:
        species = self.catalog.get_species(self.species, self.mod) if self.species else None
        results: List[SearchRow] = []
        specific: List[SearchRow] = []
        for row in list(self.get_default_results()):
            if not isinstance(row, Entry):
                results.append(row)
                continue
            item = self.catalog.get_item(row.id, self.mod)
            if item is None or not item.exists or item.is_nonstandard:
                if item is None or item.is_nonstandard != "Past" or self.format_type != "natdex":
                    continue
            results.append(row)
            if species is None:
                continue
            if species.name in item.item_user or (row.id == "boosterenergy" and "Paradox" in species.tags):
                specific.append(row)
        if specific:
            return [Header(f"Specific to {species.name}")] + specific + results
        return results


# /* ~~~ abilities ~~~ */

class AbilitySearch(TypedSearch):
    category = "ability"

    def get_default_results(self) -> List[SearchRow]:
        return [Entry("ability", id_) for id_ in self.catalog.abilities]

    def get_base_results(self) -> List[SearchRow]:
        if not self.species:
            return self.get_default_results()
        species = self.catalog.get_species(self.species, self.mod)
        if species is None:
            return self.get_default_results()
        fmt = self.format
        aaa = fmt == "almostanyability" or "aaa" in fmt
        rows: List[SearchRow] = [Header("Abilities")]

        mega_note = None
        if species.is_mega:
            mega_note = Html(f"Will be <strong>{species.abilities.get('0', '')}</strong> after Mega Evolving.")
            rows.insert(0, mega_note)
            species = self.catalog.get_species(species.base_species, self.mod) or species
        abilities = species.abilities
        rows.append(Entry("ability", to_id(abilities.get("0"))))
        if abilities.get("1"):
            rows.append(Entry("ability", to_id(abilities["1"])))
        if abilities.get("H"):
            rows += [Header("Hidden Ability"), Entry("ability", to_id(abilities["H"]))]
        if abilities.get("S"):
            rows += [Header("Special Event Ability"), Entry("ability", to_id(abilities["S"]))]

        if aaa or "metronomebattle" in fmt or is_hackmons(fmt):
            rows = self._rated_listing()
            if mega_note is not None and aaa:
                rows.insert(0, mega_note)
        return rows

    def _rated_listing(self) -> List[SearchRow]:
        good: List[SearchRow] = [Header("Abilities")]
        situational: List[SearchRow] = [Header("Situational Abilities")]
        unviable: List[SearchRow] = [Header("Unviable Abilities")]
        for id_ in sorted(self.get_table()):
            ability = self.catalog.get_ability(id_, self.mod)
            if ability is None or ability.is_nonstandard or ability.gen > self.gen:
                continue
            rating = 3 if ability.id == "normalize" else ability.rating
            if rating >= 3:
                good.append(Entry("ability", ability.id))
            elif rating >= 2:
                situational.append(Entry("ability", ability.id))
            else:
                unviable.append(Entry("ability", ability.id))
        return good + situational + unviable

    def filter(self, row: SearchRow, filters: Sequence[Filter]) -> bool:
        if not filters or not isinstance(row, Entry) or row.category != "ability":
            return True
        ability = self.catalog.get_ability(row.id, self.mod)
        for dimension, value in filters:
            if dimension == "pokemon":
                species = self.catalog.get_species(value, self.mod)
                if ability is None or species is None or not species.has_ability(ability.name):
                    return False
        return True


# /* ~~~ fixed listings ~~~ */

class TypeSearch(TypedSearch):
    category = "type"

    def get_default_results(self) -> List[SearchRow]:
        return [Entry("type", id_) for id_ in self.catalog.types]

    def filter(self, row: SearchRow, filters: Sequence[Filter]) -> bool:
        raise ValueError("type searches cannot be filtered")


class CategorySearch(TypedSearch):
    category = "category"

    def get_table(self) -> Dict[str, object]:
        return {to_id(c): c for c in MOVE_CATEGORIES}

    def get_default_results(self) -> List[SearchRow]:
        return [Entry("category", to_id(c)) for c in MOVE_CATEGORIES]

    def filter(self, row: SearchRow, filters: Sequence[Filter]) -> bool:
        raise ValueError("move category searches cannot be filtered")


# Sorting by another category's attribute lists that category instead
VIRTUAL_SORTS: Dict[str, Type[TypedSearch]] = {
    "type": TypeSearch,
    "category": CategorySearch,
    "ability": AbilitySearch,
}

SEARCH_TYPES: Dict[str, Type[TypedSearch]] = {
    "species": SpeciesSearch,
    "move": MoveSearch,
    "item": ItemSearch,
    "ability": AbilitySearch,
    "type": TypeSearch,
    "category": CategorySearch,
}


def make_typed_search(catalog: Catalog, search_type: str, format_id: str = "",
                      species_or_set: Union[str, PokemonSet] = "") -> Optional[TypedSearch]:
    """Strategy for `search_type`, or None for an untyped search."""
    if not search_type:
        return None
    try:
        cls = SEARCH_TYPES[search_type]
    except KeyError:
        raise ValueError(f"unknown search type: {search_type!r}")
    return cls(catalog, format_id, species_or_set)
