def test_health(anon_client):
    res = anon_client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "database": "ok"}


def test_ping(anon_client):
    assert anon_client.get("/api/ping").json() == {"ping": "pong"}


def test_security_headers(anon_client):
    res = anon_client.get("/api/ping")
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
