import json
from pathlib import Path
import pytest
from dexsearch.engine import Engine
from dexsearch.loader import catalog_from_dict, load_catalog
from dexsearch.DB.api import make_store
from dexsearch.DB.catalog import Catalog
from dexsearch.DB.memory_store import SAMPLE_CATALOG, MemoryStore
from dexsearch.DB.sqlite_store import SQLiteStore
from dexsearch.models import Entry

def _document() -> dict:
    return json.loads(SAMPLE_CATALOG.read_text(encoding="utf-8"))

@pytest.mark.e2e
def test_json_store_matches_sample(tmp_path: Path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_document()), encoding="utf-8")
    eng = Engine()
    try:
        eng.load(dsn=f"json://{path}")
        sample = Engine(); sample.load(dsn="memory://sample")
        assert len(eng.index) == len(sample.index)
        assert eng.search("char") == sample.search("char")
        sample.shutdown()
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_sqlite_store_build_and_reload(tmp_path: Path):
    path = tmp_path / "db" / "catalog.sqlite"
    dsn = f"sqlite://{path}"
    with pytest.raises(RuntimeError):
        make_store(dsn)

    eng = Engine()
    try:
        eng.load(dsn=dsn, document=_document())
        assert SQLiteStore.is_valid(str(path))
        built = eng.search("fly", search_type="species", format_id="gen9ou")
    finally:
        eng.shutdown()

    # reopen without a document
    eng = Engine()
    try:
        eng.load(dsn=dsn)
        assert eng.search("fly", search_type="species", format_id="gen9ou") == built
        assert set(eng.catalog.species) == set(load_catalog(str(SAMPLE_CATALOG)).species)
    finally:
        eng.shutdown()

def test_sqlite_store_rejects_use_after_close(tmp_path: Path):
    store = SQLiteStore.build_from_document({"species": {"mew": {"name": "Mew", "num": 151}}},
                                            str(tmp_path / "c.sqlite"))
    assert store.read_document() == {"species": {"mew": {"name": "Mew", "num": 151}}}
    assert store.load().species["mew"].gen == 1
    store.close()
    with pytest.raises(RuntimeError):
        store.load()
    assert not SQLiteStore.is_valid(str(tmp_path / "missing.sqlite"))

def test_memory_store_and_bad_dsns():
    store = MemoryStore(Catalog())
    assert store.load().species == {}
    store.close()
    with pytest.raises(RuntimeError):
        store.load()
    with pytest.raises(ValueError):
        make_store("memory://nope")
    with pytest.raises(ValueError):
        make_store("ftp://catalog")

def test_loader_errors_and_shapes(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_catalog(str(tmp_path / "missing.json"))
    with pytest.raises(ValueError):
        catalog_from_dict(["not", "a", "document"])
    catalog = catalog_from_dict({
        "species": {"Mr. Mime": {"name": "Mr. Mime", "num": 122, "types": ["Psychic", "Fairy"], "shiny": True}},
        "tier_tables": {"gen9": {"rows": [["header", "ZU"], "mrmime"], "format_slices": {"ZU": 0}}},
        "aliases": {"Mime": "Mr. Mime"},
    })
    mime = catalog.species["mrmime"]
    assert mime.types == ("Psychic", "Fairy") and mime.gen == 1
    assert catalog.tier_tables["gen9"].rows == [("header", "ZU"), "mrmime"]
    assert catalog.aliases == {"mime": "mrmime"}

@pytest.mark.e2e
def test_engine_lifecycle():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.searcher()
    eng.load(catalog=Catalog())
    assert [r for r in eng.search("status") if isinstance(r, Entry)] == [Entry("category", "status", 0, 6)]
    eng.shutdown()
    assert eng.index is None and eng.catalog is None
    with pytest.raises(RuntimeError):
        eng.search("status")
