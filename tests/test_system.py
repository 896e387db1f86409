def test_health(test_client):
    r = test_client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert data["storage"] is True

def test_version(test_client):
    r = test_client.get("/version")
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "PrepPal API (tests)"
    assert data["env"] == "test"

def test_root_redirects_to_docs(test_client):
    r = test_client.get("/", follow_redirects=False)
    assert r.status_code in (301, 302, 307, 308)
    assert "/docs" in r.headers.get("location", "")

def test_runner_starts_uvicorn(monkeypatch):
    from prepal import __main__ as runner

    calls = []
    monkeypatch.setattr(runner.uvicorn, "run", lambda target, **kw: calls.append((target, kw)))
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("APP_ENV", "prod")
    runner.main()
    assert calls == [("prepal.main:app", {"host": "127.0.0.1", "port": 8080, "reload": False})]
