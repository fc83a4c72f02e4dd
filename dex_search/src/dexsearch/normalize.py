from __future__ import annotations
import re
import unicodedata
from typing import List

from .config import MAX_OFFSET_SKEW

_WORD_SPLIT = re.compile(r"[\s\-]+")


def _fold(ch: str) -> str:
    """Lowercase ASCII letters/digits of one character (accents decomposed away)."""
    out = []
    for c in unicodedata.normalize("NFKD", ch):
        c = c.lower()
        if ("a" <= c <= "z") or ("0" <= c <= "9"):
            out.append(c)
    return "".join(out)


def normalize_and_map(text: str) -> tuple[str, List[int]]:
    """
    Normalize a display name into an id and return:
      - normalized string (lowercase, ascii alnum only)
      - mapping list: normalized index -> original index (in the ORIGINAL string)
    """
    out_chars: list[str] = []
    mapping: List[int] = []
    for orig_i, ch in enumerate(text):
        for c in _fold(ch):
            out_chars.append(c)
            mapping.append(orig_i)
    return "".join(out_chars), mapping


def to_id(text) -> str:
    """Convenience: normalize and return only the id."""
    if text is None:
        return ""
    return normalize_and_map(str(text))[0]


def offset_digits(name: str) -> str:
    """
    Skew string for the offset table: one digit per id position giving how many
    display characters were stripped up to that position. Capped at 9.
    """
    _, mapping = normalize_and_map(name)
    return "".join(str(min(orig - i, MAX_OFFSET_SKEW)) for i, orig in enumerate(mapping))


def skew_at(digits: str, pos: int) -> int:
    if 0 <= pos < len(digits):
        return ord(digits[pos]) - 48
    return 0


def word_starts(name: str) -> List[int]:
    """Id positions where the 2nd, 3rd, ... words of a display name begin."""
    starts: List[int] = []
    pos = 0
    words = [w for w in _WORD_SPLIT.split(name) if w]
    for n, word in enumerate(words):
        wid = to_id(word)
        if n and wid:
            starts.append(pos)
        pos += len(wid)
    return starts


def acronym(name: str) -> str:
    words = [to_id(w) for w in _WORD_SPLIT.split(name)]
    words = [w for w in words if w]
    if len(words) < 2:
        return ""
    return "".join(w[0] for w in words)


def title_id(id_: str) -> str:
    """'flying' -> 'Flying' (type and category ids map back to display names this way)."""
    return id_[:1].upper() + id_[1:]
