"""
Format id parsing.

Turns a raw format id such as ``gen8nationaldexuu`` into the pieces typed
searches care about: the generation, the format with generation and variant
words stripped (``uu``), the variant (``natdex``) and the mod whose data
applies, if any.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_GEN
from .DB.catalog import Catalog
from .normalize import to_id


@dataclass(frozen=True)
class FormatInfo:
    gen: int = DEFAULT_GEN
    format: str = ""
    format_type: Optional[str] = None
    mod: str = ""
    mod_format: str = ""
    game_type: str = ""


def _variant(fmt: str, doubles: str, natdex: str, plain: str) -> str:
    if "doubles" in fmt and "nationaldex" not in fmt:
        return doubles
    if "nationaldex" in fmt:
        return natdex
    return plain


def parse_format(format_id: str, catalog: Optional[Catalog] = None) -> FormatInfo:
    fmt = to_id(format_id)
    mod_format = fmt
    gen = DEFAULT_GEN
    mod = ""
    game_type = ""
    format_type: Optional[str] = None

    if fmt.startswith("gen"):
        gen = int(fmt[3]) if fmt[3:4].isdigit() and fmt[3] != "0" else 6
        override = ""
        found = catalog.find_mod_format(fmt) if catalog is not None else None
        if found:
            mod, formatid, table = found
            if fmt[4:] == formatid:
                mod_format = formatid
            override = to_id(table.get("teambuilder_format", ""))
            format_type = to_id(table.get("format_type", "")) or None
            game_type = table.get("game_type", "")
        fmt = override or fmt[4:] or "customgame"

    if fmt.startswith("dlc1") and gen == 8:
        format_type = "ssdlc1doubles" if "doubles" in fmt else "ssdlc1"
        fmt = fmt[4:]
    if fmt.startswith("predlc"):
        format_type = _variant(fmt, "predlcdoubles", "predlcnatdex", "predlc")
        fmt = fmt[6:]
    if fmt.startswith("dlc1") and gen == 9:
        format_type = _variant(fmt, "svdlc1doubles", "svdlc1natdex", "svdlc1")
        fmt = fmt[4:]
    if fmt.startswith("stadium"):
        format_type = "stadium"
        fmt = fmt[7:] or "ou"
    if fmt.startswith("vgc"):
        format_type = "doubles"
    if fmt == "vgc2020":
        format_type = "ssdlc1doubles"
    if fmt == "vgc2023regulationd":
        format_type = "predlcdoubles"
    if fmt == "vgc2023regulatione":
        format_type = "svdlc1doubles"
    if "bdsp" in fmt:
        format_type = "bdspdoubles" if "doubles" in fmt else "bdsp"
        fmt = fmt[4:]
    if fmt == "partnersincrime" or fmt.startswith("ffa") or fmt == "freeforall":
        format_type = "doubles"
    if "letsgo" in fmt:
        format_type = "letsgo"
    if "nationaldex" in fmt or fmt.startswith("nd") or "natdex" in fmt:
        if fmt != "nationaldexdoubles":
            if fmt.startswith("nd"):
                fmt = fmt[2:]
            elif "natdex" in fmt:
                fmt = fmt[6:]
            else:
                fmt = fmt[11:]
        format_type = "natdex"
        fmt = fmt or "ou"
    if "doubles" in fmt and gen > 4 and not format_type:
        format_type = "doubles"
    if format_type == "letsgo":
        fmt = fmt[6:]
    if "metronome" in fmt:
        format_type = "metronome"
    if fmt.endswith("nfe"):
        fmt = fmt[3:] or "ou"
        format_type = "nfe"
    if (fmt.endswith("lc") or fmt.startswith("lc")) and fmt != "caplc" and not format_type:
        format_type = "lc"
        fmt = "lc"
    if fmt.endswith("draft"):
        fmt = fmt[:-5]

    return FormatInfo(gen=gen, format=fmt, format_type=format_type, mod=mod,
                      mod_format=mod_format, game_type=game_type)


def tier_key(info: FormatInfo) -> str:
    """Tier-table key used to look up a species' tier for this format."""
    gen, ft = info.gen, info.format_type
    return {
        "doubles": f"gen{gen}doubles",
        "letsgo": "gen7letsgo",
        "bdsp": "gen8bdsp",
        "bdspdoubles": "gen8bdspdoubles",
        "nfe": f"gen{gen}nfe",
        "lc": f"gen{gen}lc",
        "ssdlc1": "gen8dlc1",
        "ssdlc1doubles": "gen8dlc1doubles",
        "predlc": "gen9predlc",
        "predlcdoubles": "gen9predlcdoubles",
        "predlcnatdex": "gen9predlcnatdex",
        "svdlc1": "gen9dlc1",
        "svdlc1doubles": "gen9dlc1doubles",
        "svdlc1natdex": "gen9dlc1natdex",
        "natdex": f"gen{gen}natdex",
        "stadium": f"gen{gen}stadium{gen if gen > 1 else ''}",
    }.get(ft or "", f"gen{gen}")


def is_vgc_or_bs(fmt: str) -> bool:
    return fmt.startswith(("battlespot", "bss", "battlestadium", "vgc"))


def is_hackmons(fmt: str) -> bool:
    return "hackmons" in fmt or fmt.endswith("bh")


def base_table_key(info: FormatInfo, catalog: Catalog) -> tuple[str, bool]:
    """
    Tier-table key for a species listing, plus whether the format plays as
    doubles (or Battle Spot).
    """
    fmt, gen, ft = info.format, info.gen, info.format_type or ""
    doubles = is_vgc_or_bs(fmt) or "doubles" in ft
    if info.mod:
        return ("doubles" if info.game_type == "doubles" else "default", doubles)
    if (fmt.endswith("cap") or fmt.endswith("caplc")) and gen < 9:
        return f"gen{gen}", doubles
    if is_vgc_or_bs(fmt):
        return f"gen{gen}vgc", doubles
    if gen == 9 and is_hackmons(fmt) and not ft:
        return "bh", doubles
    plays_doubles = (
        "doubles" in fmt or "triples" in fmt or fmt == "freeforall"
        or fmt.startswith("ffa") or fmt == "partnersincrime"
    )
    if catalog.get_tier_table(f"gen{gen}doubles") is not None and gen > 4 and plays_doubles \
            and ft not in ("letsgo", "bdspdoubles", "ssdlc1doubles", "predlcdoubles", "svdlc1doubles") \
            and "natdex" not in ft:
        return f"gen{gen}doubles", True
    if gen < 9 and not ft:
        return f"gen{gen}", doubles
    if ft.startswith("bdsp"):
        return f"gen8{ft}", doubles
    if ft in ("letsgo", "natdex", "metronome", "nfe", "lc", "stadium") or ft.startswith(("ssdlc1", "predlc", "svdlc1")):
        return tier_key(info), doubles
    return f"gen{gen}", doubles
