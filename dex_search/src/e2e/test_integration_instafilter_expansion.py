import pytest
from dexsearch.engine import Engine
from dexsearch.loader import load_catalog
from dexsearch.DB.memory_store import SAMPLE_CATALOG
from dexsearch.models import Entry, Header
from dexsearch.typed import make_typed_search

def _expanded(rows, header):
    start = rows.index(Header(header))
    return [r.id for r in rows[start + 1:]]

@pytest.mark.e2e
def test_ability_match_lists_species_with_that_ability():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("levitate", search_type="species")
        assert Entry("ability", "levitate", 0, 8) in rows
        assert _expanded(rows, "Levitate Pokémon") == ["flygon"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_egg_group_match_lists_its_members():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("monster", search_type="species")
        assert set(_expanded(rows, "Monster egg group")) == {
            "bulbasaur", "ivysaur", "venusaur", "charmander", "charmeleon",
            "charizard", "charizardmegax", "charizardmegay", "garchomp",
        }
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_move_category_match_lists_its_moves():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("physical", search_type="move")
        physical = _expanded(rows, "Physical moves")
        assert set(physical) == {
            "acrobatics", "bravebird", "closecombat", "collisioncourse", "dragonclaw",
            "drillpeck", "earthquake", "extremespeed", "flareblitz", "fly", "outrage",
            "quickattack", "return", "scratch", "tackle", "waterfall", "wingattack",
        }
        assert "ember" not in physical
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_no_header_without_members():
    # nothing in the sample is Steel or Dark type
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        for query, header in (("steel", "Steel-type Pokémon"), ("dark", "Dark-type Pokémon")):
            rows = eng.search(query, search_type="species")
            assert Header(header) not in rows
            assert not isinstance(rows[-1], Header)
    finally:
        eng.shutdown()

def test_ability_listing_filtered_by_pokemon():
    catalog = load_catalog(str(SAMPLE_CATALOG))
    search = make_typed_search(catalog, "ability", "gen9ou")
    rows = search.get_results([("pokemon", "garchomp")])
    assert sorted(r.id for r in rows if isinstance(r, Entry)) == ["roughskin", "sandveil"]
