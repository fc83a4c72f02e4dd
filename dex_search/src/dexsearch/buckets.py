from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from .models import CATEGORY_INDEX, CATEGORY_NAMES, Entry, Header, SearchRow

# Instafilter tie-break: lower wins. Literal table; item ranks ahead of tier.
INSTAFILTER_PRIORITY: Dict[str, int] = {
    "species": 1, "type": 2, "tier": 5, "move": 4, "item": 3,
    "ability": 6, "egggroup": 7, "category": 8, "article": 9,
}

# (category, resolved id)
Candidate = Tuple[str, str]


class ResultBucketer:
    """
    Ten ordered output buffers. Bucket 0 holds legal results of the contextual
    category (under that category's header) when a legality map is active, so
    the contextual bucket right after it holds only the illegal ones.
    Buckets 1..9 follow CATEGORY_INDEX.
    """

    def __init__(self, context_category: str = "", illegal: Optional[Dict[str, str]] = None) -> None:
        self.context_category = context_category
        self.context_index = CATEGORY_INDEX.get(context_category, -1)
        self.illegal = illegal
        self.bufs: List[List[SearchRow]] = [[] for _ in range(10)]
        self.count = 0
        self.instafilter: Optional[Candidate] = None
        self.top_index = -1
        self.near_match = False

    def note_candidate(self, category: str, id_: str) -> None:
        """Remember the best cross-category match as the instafilter candidate."""
        if not self.context_category or category == self.context_category:
            return
        if self.instafilter is None or \
                INSTAFILTER_PRIORITY[category] < INSTAFILTER_PRIORITY[self.instafilter[0]]:
            self.instafilter = (category, id_)

    def maybe_promote_types(self, is_alias_pass: bool) -> None:
        # show types above Arceus formes
        if self.top_index < 0 and self.context_index < 2 and is_alias_pass \
                and not self.bufs[1] and self.bufs[2]:
            self.top_index = 2

    def add(self, row: Entry, *, is_alias_pass: bool) -> bool:
        """Insert one accepted match. Returns False when it was a duplicate alias hit."""
        index = CATEGORY_INDEX[row.category]
        target = index
        legality_split = self.illegal is not None and index == self.context_index
        if legality_split and row.id not in self.illegal:
            target = 0

        # don't match duplicate aliases
        buf = self.bufs[target]
        if is_alias_pass and buf and isinstance(buf[-1], Entry) and buf[-1].id == row.id:
            return False

        if legality_split:
            if not self.bufs[index] and not self.bufs[0]:
                self.bufs[0].append(Header(CATEGORY_NAMES[row.category]))
        elif not buf:
            buf.append(Header(CATEGORY_NAMES[row.category]))
        buf.append(row)
        self.count += 1
        return True

    def assemble(self, leading: List[SearchRow], trailing: List[SearchRow]) -> List[SearchRow]:
        """
        Final order: leading rows, promoted types, bucket 0 and the contextual
        bucket, the remaining buckets in index order, then trailing rows.
        """
        bufs = [list(b) for b in self.bufs]
        top: List[SearchRow] = list(leading)
        if self.top_index >= 0:
            top += bufs[self.top_index]
            bufs[self.top_index] = []
        if self.context_index >= 0:
            top += bufs[0] + bufs[self.context_index]
            bufs[0] = []
            bufs[self.context_index] = []
        for buf in bufs:
            top += buf
        return top + list(trailing)
