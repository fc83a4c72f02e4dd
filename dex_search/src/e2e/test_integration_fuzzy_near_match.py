import pytest
from dexsearch import config as CFG
from dexsearch.engine import Engine
from dexsearch.models import Entry, Html

@pytest.mark.e2e
def test_no_prefix_match_falls_back_to_closest_entries():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        ds = eng.searcher()
        ds.find("charx")
        rows = ds.results
        assert rows[0] == Html(CFG.NO_EXACT_MATCH_HTML)
        entries = [r for r in rows if isinstance(r, Entry)]
        assert len(entries) == CFG.FUZZY_MAX_RESULTS
        assert [r.id for r in entries] == ["charge", "chargebeam"]
        assert all(r.match_end == 0 for r in entries)
        assert ds.exact_match is False
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_query_past_the_end_clamps_to_last_entry():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("zzzz")
        assert isinstance(rows[0], Html)
        entries = [r for r in rows if isinstance(r, Entry)]
        assert entries == [Entry("tier", "zu")]
    finally:
        eng.shutdown()
