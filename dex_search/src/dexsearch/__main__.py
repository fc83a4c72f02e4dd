from __future__ import annotations
import argparse, json, os, re, sys
from typing import List, Optional

from . import config as CFG
from .engine import DexSearch, Engine
from .models import Entry, Header, Html, SearchRow, SortMarker, row_to_json

_TAG = re.compile(r"<[^>]+>")


def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def _clear_screen():
    # ANSI clear; fallback to newlines if not a TTY
    if sys.stdout.isatty():
        print("\033[2J\033[H", end="", flush=True)
    else:
        print("\n" * 100)

def _highlight(name: str, row: Entry) -> str:
    if row.match_end <= row.match_start:
        return name
    s, e = row.match_start, row.match_end
    return name[:s] + _c(name[s:e], "1;33") + name[e:]

def _print_rows(ds: DexSearch, rows: List[SearchRow]):
    if not rows:
        print(_c("(no matches)", "2;37")); return
    for row in rows:
        if isinstance(row, Header):
            print(_c(row.text, "1;37"))
        elif isinstance(row, Html):
            print(_c(_TAG.sub("", row.markup), "2;36"))
        elif isinstance(row, SortMarker):
            print(_c(f"[{row.sort}]", "2;37"))
        else:
            label = ds.illegal_label(row.id)
            suffix = _c(f"  ({label})", "2;31") if label else ""
            print(f"  {row.category:<9} {_highlight(ds.display_name(row), row)}{suffix}")

def _parse_filter(text: str):
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"filter must look like dimension=value, got {text!r}")
    dim, value = text.split("=", 1)
    return dim.strip(), value.strip()

def _emit(ds: DexSearch, as_json: bool):
    rows = ds.results or []
    if as_json:
        print(json.dumps([row_to_json(r) for r in rows], ensure_ascii=False, indent=2))
    else:
        _print_rows(ds, rows)

def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Dex search REPL (typed, categorized prefix search)")
    parser.add_argument("--db", default=CFG.DEFAULT_DSN, help="Catalog store DSN (memory://sample, json:///path, sqlite:///path)")
    parser.add_argument("--type", dest="search_type", default="", help="species | move | item | ability | type | category")
    parser.add_argument("--format", default="", help="Format id, e.g. gen9ou")
    parser.add_argument("--species", default="", help="Species the typed search is scoped to")
    parser.add_argument("--filter", action="append", type=_parse_filter, default=[], help="dimension=value (repeatable)")
    parser.add_argument("--sort", default=None)
    parser.add_argument("--reverse", action="store_true")
    parser.add_argument("--q", default=None, help="Run one query and exit")
    parser.add_argument("--json", action="store_true", help="Print rows as JSON")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    engine = Engine()
    engine.load(dsn=args.db, verbose=args.verbose)
    ds = engine.searcher(args.search_type, args.format, args.species)
    for f in args.filter:
        if not ds.add_filter(f):
            parser.error(f"filter {f[0]!r} is not supported for this search type")
    if args.sort:
        ds.toggle_sort(args.sort)
        if args.reverse:
            ds.toggle_sort(args.sort)

    try:
        if args.q is not None:
            ds.find(args.q)
            _emit(ds, args.json)
            return 0

        print("Type a query and press Enter (empty line to quit).  Type '#' to reset the buffer.")
        print(_c("Commands: :type T, :format F, :species S, :filter dim=value, :unfilter, :sort col, :clear, :reset", "2;37"))
        buffer = ""
        while True:
            try:
                raw = input("> ")
            except EOFError:
                print(); break
            cmd = raw.strip()
            if raw == "":
                print("Goodbye!"); break
            if cmd in ("#", ":reset"):
                buffer = ""; print(_c("(reset)", "2;36")); continue
            if cmd in (":clear", ":cls"):
                _clear_screen(); continue
            if cmd.startswith(":"):
                name, _, arg = cmd[1:].partition(" ")
                typed = ds.typed
                if name == "type":
                    ds.set_type(arg, typed.format_id if typed else "", typed.species if typed else "")
                elif name == "format":
                    ds.set_type(ds.search_type, arg, typed.species if typed else "")
                elif name == "species":
                    ds.set_type(ds.search_type, typed.format_id if typed else "", arg)
                elif name == "filter":
                    try:
                        ok = ds.add_filter(_parse_filter(arg))
                    except argparse.ArgumentTypeError as e:
                        print(_c(str(e), "2;31")); continue
                    print(_c("(filter added)" if ok else "(filter not supported)", "2;36"))
                elif name == "unfilter":
                    ds.remove_filter()
                elif name == "sort":
                    ds.toggle_sort(arg)
                else:
                    print(_c(f"unknown command: {name}", "2;31")); continue
                ds.find(buffer)
                _emit(ds, args.json)
                continue

            buffer += raw
            try:
                ds.find(buffer)
            except ValueError as e:
                print(_c(str(e), "2;31")); continue
            _emit(ds, args.json)
        return 0
    finally:
        engine.shutdown()

if __name__ == "__main__":
    sys.exit(main())
