import pytest
from dexsearch.engine import Engine
from frontend.web import app as flask_app

@pytest.fixture
def client():
    eng = Engine(); eng.load(dsn="memory://sample")
    import frontend.web as webmod
    webmod._engine = eng
    yield flask_app.test_client()
    eng.shutdown()
    webmod._engine = None

@pytest.mark.e2e
def test_untyped_search_rows(client):
    rv = client.get("/api/search?q=char")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["query"] == "char"
    assert data["exact_match"] is False
    first = data["rows"][0]
    assert first == {"kind": "header", "text": "Pokémon"}
    entry = data["rows"][1]
    for key in ("kind", "category", "id", "match_start", "match_end"):
        assert key in entry
    assert entry["category"] == "species"

@pytest.mark.e2e
def test_typed_search_with_filter_marks_illegal(client):
    rv = client.get("/api/search?q=fly&type=species&format=gen9ou&filter=type:Flying")
    assert rv.status_code == 200
    rows = rv.get_json()["rows"]
    species = [r for r in rows if r["kind"] == "entry" and r["category"] == "species"]
    assert "flygon" not in [r["id"] for r in species]
    arceus = next(r for r in species if r["id"] == "arceusflying")
    assert arceus["illegal"] == "Illegal"

@pytest.mark.e2e
def test_empty_query_lists_typed_results_with_sort(client):
    rv = client.get("/api/search?q=&type=species&format=gen9ou&sort=spe")
    assert rv.status_code == 200
    rows = rv.get_json()["rows"]
    assert rows[0] == {"kind": "sort", "sort": "sortpokemon"}
    assert rows[1]["id"] == "talonflame"

@pytest.mark.e2e
def test_bad_requests(client):
    assert client.get("/api/search?q=a&filter=type").status_code == 400
    assert client.get("/api/search?q=a&type=bogus").status_code == 400
    assert client.get("/api/search?q=&type=type&filter=type:Fire").status_code == 400
    rv = client.get("/api/search?q=&type=species&sort=power")
    assert rv.status_code == 400
    assert "sort" in rv.get_json()["error"]

@pytest.mark.e2e
def test_search_before_load():
    import frontend.web as webmod
    webmod._engine = None
    rv = flask_app.test_client().get("/api/search?q=char")
    assert rv.status_code == 503

@pytest.mark.e2e
def test_entry_rows_carry_display_name_for_highlight(client):
    rows = client.get("/api/search?q=mime").get_json()["rows"]
    mime = next(r for r in rows if r["kind"] == "entry" and r["id"] == "mrmime")
    assert mime["name"] == "Mr. Mime"
    assert mime["name"][mime["match_start"]:mime["match_end"]] == "Mime"
