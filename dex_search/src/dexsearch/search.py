from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from . import config as CFG
from .buckets import ResultBucketer
from .DB.catalog import Catalog
from .DB.index import SearchIndex
from .models import Entry, Filter, Header, Html, SearchRow
from .normalize import skew_at, title_id, to_id
from .passes import ALIAS, FUZZY, PassCursor, build_passes
from .policy import QueryMeta, accepts
from .typed import TypedSearch

log = logging.getLogger(__name__)


@dataclass
class TextSearchResult:
    rows: List[SearchRow]
    exact_match: bool = False


def _type_name(catalog: Catalog, type_id: str, mod: str) -> str:
    info = catalog.get_entity_table("type", mod).get(type_id)
    return info.name if info is not None else title_id(type_id)


def _egg_group_name(catalog: Catalog, group_id: str) -> str:
    for name in catalog.egg_groups:
        if to_id(name) == group_id:
            return name
    return title_id(group_id)


def instafilter(catalog: Catalog, context_category: str, category: str, id_: str,
                illegal: Optional[dict] = None, mod: str = "") -> List[SearchRow]:
    """
    Every entity of the contextual category sharing the matched attribute
    (a species' type, ability or egg group; a move's type or category),
    legal ones first.
    """
    header: Optional[str] = None
    matches: Optional[Callable[[object], bool]] = None

    if context_category == "species":
        if category == "type":
            name = _type_name(catalog, id_, mod)
            header, matches = f"{name}-type Pokémon", lambda s: name in s.types
        elif category == "ability":
            ability = catalog.get_ability(id_, mod)
            name = ability.name if ability is not None else title_id(id_)
            header, matches = f"{name} Pokémon", lambda s: s.has_ability(name)
        elif category == "egggroup":
            name = _egg_group_name(catalog, id_)
            header, matches = f"{name} egg group", lambda s: name in s.egg_groups
    elif context_category == "move":
        if category == "type":
            name = _type_name(catalog, id_, mod)
            header, matches = f"{name}-type moves", lambda m: m.type == name
        elif category == "category":
            name = title_id(id_)
            header, matches = f"{name} moves", lambda m: m.category == name

    if header is None:
        return []
    legal_rows: List[SearchRow] = [Header(header)]
    illegal_rows: List[SearchRow] = []
    for entity_id, entity in catalog.get_entity_table(context_category, mod).items():
        if not matches(entity):
            continue
        row = Entry(context_category, entity_id)
        (illegal_rows if illegal and entity_id in illegal else legal_rows).append(row)
    if len(legal_rows) == 1 and not illegal_rows:
        return []
    return legal_rows + illegal_rows


def text_search(
    index: SearchIndex,
    catalog: Catalog,
    query: str,
    typed: Optional[TypedSearch] = None,
    filters: Optional[Sequence[Filter]] = None,
) -> TextSearchResult:
    """
    Scan the search index for `query` and return bucketed, headered rows.
    With a typed search, its category's results come first and other
    categories only serve as filter candidates.
    """
    query = to_id(query)
    if not query:
        return TextSearchResult([], False)

    context = typed.category if typed is not None else ""
    mod = typed.mod if typed is not None else ""
    gen = typed.gen if typed is not None else CFG.DEFAULT_GEN
    illegal = typed.legality() if typed is not None else None

    # searching for "Psychic type" shows the type over the move
    type_suffix = False
    if query.endswith("type") and query[:-4] in catalog.get_entity_table("type", mod):
        query = query[:-4]
        type_suffix = True

    plan = build_passes(index, query, catalog.aliases)
    cursor = PassCursor(index, plan)
    bucketer = ResultBucketer(context, illegal)

    for p, i in cursor:
        entry = index[i]
        is_alias_pass = p.kind == ALIAS
        # alias entries only in the alias pass, canonical entries only elsewhere
        if entry.is_alias != is_alias_pass:
            continue

        meta = QueryMeta(query=p.query, type_suffix=type_suffix, legality=illegal is not None,
                         gen=gen, is_mod=bool(mod))
        if not accepts(context, entry.category, entry.id, meta):
            continue

        q_len = len(p.query)
        if is_alias_pass:
            canon = entry.canonical_index
            digits = index.offset(canon)
            match_start, match_end = entry.alias_match_start, 0
            if match_start:
                match_end = match_start + q_len
                match_start += skew_at(digits, match_start)
                match_end += skew_at(digits, match_end - 1)
            id_ = index[canon].id
        else:
            match_start, match_end = 0, q_len
            if match_end:
                match_end += skew_at(index.offset(i), match_end - 1)
            id_ = entry.id

        # some aliases are substrings of their target
        if plan.query_alias == id_ and p.query != id_:
            continue

        row = Entry(entry.category, id_, match_start, match_end)
        if filters and entry.category == context and not typed.filter(row, filters):
            continue
        if not catalog.exists_in_catalog(entry.category, id_, mod):
            continue

        bucketer.note_candidate(entry.category, id_)
        bucketer.maybe_promote_types(is_alias_pass)
        if bucketer.add(row, is_alias_pass=is_alias_pass):
            cursor.accepted()
            if p.kind == FUZZY:
                bucketer.near_match = True

    leading: List[SearchRow] = [Html(CFG.NO_EXACT_MATCH_HTML)] if bucketer.near_match else []
    trailing: List[SearchRow] = []
    if bucketer.instafilter is not None and bucketer.count < CFG.INSTAFILTER_MAX_RESULTS:
        f_category, f_id = bucketer.instafilter
        trailing = instafilter(catalog, context, f_category, f_id, illegal, mod)

    rows = bucketer.assemble(leading, trailing)
    log.debug("text search %r (%s): %d rows, exact=%s", query, context or "any", len(rows), plan.exact_match)
    return TextSearchResult(rows, plan.exact_match)
