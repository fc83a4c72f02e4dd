import pytest
from dexsearch.engine import Engine
from dexsearch.models import Entry

@pytest.mark.e2e
def test_empty_and_single_char_query():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        assert eng.search("") == []
        assert eng.search("  ") == []
        single = eng.search("m")
        entries = [r for r in single if isinstance(r, Entry)]
        assert entries
        # one character only fills the species bucket
        assert {r.category for r in entries} == {"species"}
        assert [r.id for r in entries] == ["missingno", "mrmime"]
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_single_char_query_in_move_search_stays_in_moves():
    eng = Engine()
    try:
        eng.load(dsn="memory://sample")
        rows = eng.search("e", search_type="move")
        entries = [r for r in rows if isinstance(r, Entry)]
        assert [r.id for r in entries] == ["earthquake", "ember", "extremespeed"]
    finally:
        eng.shutdown()
