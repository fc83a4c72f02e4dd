import pytest
from dexsearch.engine import Engine
from frontend.web import app as flask_app

@pytest.mark.e2e
def test_frontend_home_page_renders():
    eng = Engine(); eng.load(dsn="memory://sample")

    import frontend.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    r = client.get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore").lower()
    assert "dex search" in html
    assert "/api/search" in html

    eng.shutdown()
    webmod._engine = None
