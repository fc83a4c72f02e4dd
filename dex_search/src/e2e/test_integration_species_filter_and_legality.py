import pytest
from dexsearch import config as CFG
from dexsearch.engine import Engine
from dexsearch.models import Entry, Header

def _entries(rows):
    return [(r.category, r.id) for r in rows if isinstance(r, Entry)]

@pytest.mark.e2e
def test_fly_with_flying_filter_drops_non_flying_species():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher("species", "gen9ou")
        assert ds.add_filter(("type", "Flying")) is True
        ds.find("fly")
        rows = ds.results
        assert ("species", "flygon") not in _entries(rows)

        # a Flying type match goes above species found through aliases
        assert rows[:4] == [
            Header("Type"), Entry("type", "flying", 0, 3),
            Header("Pokémon"), Entry("species", "arceusflying", 7, 10),
        ]
        assert ds.illegal_label("arceusflying") == CFG.ILLEGAL_REASON
        assert ds.exact_match is True

        # the type match expands into every Flying species, legal ones first
        start = rows.index(Header("Flying-type Pokémon"))
        expanded = [r.id for r in rows[start + 1:]]
        assert expanded[:2] == ["charizard", "pidgey"]
        assert expanded[-2:] == ["charizardmegay", "arceusflying"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_legal_species_come_before_illegal_ones():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("char", search_type="species", format_id="gen9ou")
        assert rows == [
            Header("Pokémon"),
            Entry("species", "charizard", 0, 4),
            Entry("species", "charmander", 0, 4),
            Entry("species", "charmeleon", 0, 4),
            Entry("species", "charizardmegax", 0, 4),
            Entry("species", "charizardmegay", 0, 4),
            Header("Moves"),
            Entry("move", "charge", 0, 4),
            Entry("move", "chargebeam", 0, 4),
            Entry("move", "charm", 0, 4),
        ]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_filter_dimensions_per_search_type():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher("species", "gen9ou")
        assert ds.add_filter(("move", "Earthquake")) is True
        assert ds.filters == [("move", "earthquake")]
        assert ds.add_filter(("move", "earthquake")) is True
        assert ds.filters == [("move", "earthquake")]
        assert ds.add_filter(("category", "Physical")) is False
        assert ds.filter_label("move") == "Filter"
        assert ds.filter_label("species") is None

        ds.find("")
        ids = [r.id for r in ds.results if isinstance(r, Entry)]
        assert ids == [
            "garchomp", "dragonite", "gyarados", "venusaur", "charizard", "flygon",
            "charizardmegax", "charizardmegay", "arceus", "arceusflying",
        ]
        assert ds.results[-5] == Header(CFG.ILLEGAL_HEADER)

        assert ds.remove_filter(("move", "earthquake")) is True
        assert ds.filters is None
        assert ds.remove_filter() is False

        # changing the search type resets filters
        ds.add_filter(("type", "Fire"))
        ds.set_type("move", "gen9ou")
        assert ds.filters is None
        assert ds.add_filter(("pokemon", "Charizard")) is True

        with pytest.raises(ValueError):
            eng.search("", search_type="item", filters=[("type", "Fire")])
    finally:
        eng.shutdown()
