def test_health(mocked_client):
    r = mocked_client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data

def test_version(mocked_client):
    r = mocked_client.get("/version")
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "NEET PREP API (tests)"
    assert data["env"] == "test"

def test_root_redirects_to_docs(mocked_client):
    r = mocked_client.get("/", follow_redirects=False)
    assert r.status_code in (301, 302, 307, 308)
    assert "/docs" in r.headers.get("location", "")

def test_database_health(test_client):
    r = test_client.get("/health/db")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "reachable"}
