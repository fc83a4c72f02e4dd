import pytest
from dexsearch.engine import Engine
from frontend.web import app as flask_app

@pytest.mark.e2e
def test_frontend_health():
    eng = Engine(); eng.load(dsn="memory://sample")

    import frontend.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data["ok"] is True
    assert data["entries"] == len(eng.index)

    eng.shutdown()
    r = client.get("/api/health")
    assert r.status_code == 503
    assert r.get_json()["ok"] is False
    webmod._engine = None
