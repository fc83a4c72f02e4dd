import pytest
from dexsearch.engine import Engine
from dexsearch.models import Entry, Header

def _ids(rows):
    return [r.id for r in rows if isinstance(r, Entry)]

@pytest.mark.e2e
def test_mod_format_uses_mod_tables_and_bans():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("", search_type="species", format_id="gen9sandboxou")
        split = rows.index(Header("Illegal results")) if Header("Illegal results") in rows else len(rows)
        legal = _ids(rows[:split])
        assert legal == ["voltzard", "dragonite", "gyarados", "charizard", "pikachu"]

        ds = eng.searcher("species", "gen9sandboxou")
        ds.find("volt")
        assert ("species", "voltzard") in [(r.category, r.id) for r in ds.results if isinstance(r, Entry)]
        assert ds.illegal_label("garchomp") == "Illegal"
        assert ds.illegal_label("voltzard") is None
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_mod_learnsets_and_move_verdicts():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        base = eng.search("", search_type="move", format_id="gen9ou", species="pikachu")
        split = base.index(Header("Usually useless moves"))
        assert "charge" in _ids(base[split:])
        assert "flamethrower" not in _ids(base)

        modded = eng.search("", search_type="move", format_id="gen9sandboxou", species="pikachu")
        split = modded.index(Header("Usually useless moves"))
        assert "charge" in _ids(modded[:split])
        assert "flamethrower" in _ids(modded[:split])
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_unknown_mod_species_are_not_in_base_listing():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        assert "voltzard" not in _ids(eng.search("", search_type="species", format_id="gen9ou"))
        assert eng.catalog.get_species("voltzard") is None
        assert eng.catalog.get_species("voltzard", "sandbox").name == "Voltzard"
        with pytest.raises(KeyError):
            eng.catalog.get_species("pikachu", "nosuchmod")
    finally:
        eng.shutdown()
