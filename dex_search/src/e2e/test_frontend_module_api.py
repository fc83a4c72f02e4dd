import pytest
import frontend
from dexsearch.models import Entry

@pytest.mark.e2e
def test_module_level_initialize_and_search():
    with pytest.raises(RuntimeError):
        frontend.search("char")
    eng = frontend.initialize("memory://sample")
    try:
        rows = frontend.search("pika", search_type="species", format_id="gen9ou")
        assert Entry("species", "pikachu", 0, 4) in rows
        assert frontend.initialize("memory://sample") is not eng
    finally:
        frontend.shutdown()
    with pytest.raises(RuntimeError):
        frontend.search("char")
