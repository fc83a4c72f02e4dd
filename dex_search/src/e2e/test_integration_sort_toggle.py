import pytest
from dexsearch.engine import Engine
from dexsearch.models import Entry, SortMarker

def _atk(eng, rows):
    return [eng.catalog.species[r.id].base_stats["atk"] for r in rows if isinstance(r, Entry)]

@pytest.mark.e2e
def test_atk_sort_cycles_back_to_unsorted():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher("species")
        ds.find("")
        unsorted = list(ds.results)

        ds.toggle_sort("atk")
        assert (ds.sort_col, ds.reverse_sort) == ("atk", False)
        ds.find("")
        assert ds.results[0] == SortMarker("sortpokemon")
        atk = _atk(eng, ds.results)
        assert atk == sorted(atk, reverse=True)

        ds.toggle_sort("atk")
        assert (ds.sort_col, ds.reverse_sort) == ("atk", True)
        ds.find("")
        atk = _atk(eng, ds.results)
        assert atk == sorted(atk)

        ds.toggle_sort("atk")
        assert (ds.sort_col, ds.reverse_sort) == (None, False)
        ds.find("")
        assert ds.results == unsorted
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_sort_by_other_category_lists_that_category():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("", search_type="species", sort="type")
        assert rows[0] == SortMarker("sortpokemon")
        assert {r.category for r in rows if isinstance(r, Entry)} == {"type"}

        rows = eng.search("", search_type="move", sort="category")
        assert [r.id for r in rows if isinstance(r, Entry)] == ["physical", "special", "status"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_invalid_sort_column_raises():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        with pytest.raises(ValueError):
            eng.search("", search_type="species", sort="power")
        with pytest.raises(ValueError):
            eng.search("", search_type="move", sort="spe")
        rows = eng.search("", search_type="move", sort="power", reverse=True)
        power = [eng.catalog.moves[r.id] for r in rows if isinstance(r, Entry)]
        assert power[0].category == "Status"
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_filter_on_sort_column_clears_the_sort():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher("move")
        ds.toggle_sort("type")
        ds.add_filter(("type", "Fire"))
        assert ds.sort_col is None
    finally:
        eng.shutdown()
