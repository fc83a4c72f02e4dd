import os
from pathlib import Path

# Generation assumed when no format is given
DEFAULT_GEN: int = 9

# Storage DSN used by the CLI and the web front end when none is passed
DEFAULT_DSN: str = "memory://sample"

# Bundled JSON assets (sample catalog, move heuristics)
DATA_DIR: Path = Path(__file__).resolve().parent / "data"

# Progress logging (set DEXSEARCH_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("DEXSEARCH_VERBOSE") == "1"

# /* ~~~ pass limits ~~~ */
FUZZY_MAX_RESULTS: int = 2
EXACT_MAX_RESULTS: int = 1

# Instafilter only expands when fewer matches than this were accepted
INSTAFILTER_MAX_RESULTS: int = 20

# Curated alias whose redirect pass stops after one hit
LONG_NAME_ALIAS: str = "hiddenpower"

# Curated aliases that always redirect, even when the target starts with them
ALWAYS_REDIRECT_ALIASES: tuple[str, ...] = ("sub", "tr")

# Offset table digits are single characters
MAX_OFFSET_SKEW: int = 9

# /* ~~~ fixed row texts ~~~ */
NO_EXACT_MATCH_HTML: str = "<em>No exact match found. The closest matches alphabetically are:</em>"
ILLEGAL_HEADER: str = "Illegal results"
ILLEGAL_REASON: str = "Illegal"
