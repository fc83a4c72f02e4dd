import pytest
from dexsearch.engine import Engine
from dexsearch.models import Entry, Header

def _ids(rows):
    return [r.id for r in rows if isinstance(r, Entry)]

@pytest.mark.e2e
def test_curated_alias_redirects_without_duplicates():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher()
        ds.find("sub")
        assert ds.results == [Header("Moves"), Entry("move", "substitute", 0, 10)]
        assert ds.exact_match is True

        ds.find("tr")
        assert _ids(ds.results)[0] == "trickroom"
        assert ds.exact_match is True
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_hidden_power_alias_takes_one_exact_hit():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher()
        ds.find("hp")
        ids = _ids(ds.results)
        assert ids[0] == "hiddenpower"
        assert ids.count("hiddenpower") == 1
        # acronym aliases of the typed variants follow
        assert ids[1:] == ["hiddenpowerfire", "hiddenpowerice"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_type_suffix_shows_only_the_type():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("Flying type")
        assert rows == [Header("Type"), Entry("type", "flying", 0, 6)]
    finally:
        eng.shutdown()
