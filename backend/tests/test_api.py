from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

URL = "https://example.com/foo/bar"


def create(client, url=URL):
    return client.post("/api/links", json={"url": url})


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_link(client):
    response = create(client)

    assert response.status_code == 201
    body = response.json()
    assert body["originalUrl"] == URL
    assert body["title"] == "Example"
    assert body["tags"] == ["a", "b", "c"]
    assert body["summary"] == "s"
    assert body["shortUrl"] == f"lp.ai/{body['shortCode']}"
    assert body["analytics"]["clicks"] == 0
    assert [p["clicks"] for p in body["analytics"]["history"]] == [0] * 7
    assert "X-Persistence-Warning" not in response.headers


def test_create_rejects_url_without_scheme(client, stub_enrichment):
    response = create(client, "example.com/foo")

    assert response.status_code == 400
    assert "http" in response.json()["detail"]
    assert stub_enrichment.calls == []
    assert client.get("/api/links").json() == []


def test_list_is_most_recent_first(client):
    first = create(client, "https://first.example.com/a").json()
    second = create(client, "https://second.example.com/b").json()

    ids = [link["id"] for link in client.get("/api/links").json()]

    assert ids == [second["id"], first["id"]]


def test_search(client, stub_enrichment):
    create(client, "https://docs.python.org/3/")

    assert len(client.get("/api/links", params={"search": "PYTHON"}).json()) == 1
    assert len(client.get("/api/links", params={"search": "b"}).json()) == 1  # tag
    assert client.get("/api/links", params={"search": "rust"}).json() == []


def test_get_link(client):
    created = create(client).json()

    assert client.get(f"/api/links/{created['id']}").json() == created
    assert client.get("/api/links/unknown").status_code == 404


def test_delete_is_idempotent(client):
    created = create(client).json()

    assert client.delete(f"/api/links/{created['id']}").status_code == 204
    assert client.delete(f"/api/links/{created['id']}").status_code == 204
    assert client.get("/api/links").json() == []


def test_persistence_failure_is_reported_but_not_fatal(client, monkeypatch):
    def broken_write(db, key, value):
        raise OperationalError("UPDATE kv_store", {}, Exception("database is locked"))

    monkeypatch.setattr("linkpulse.services.store.write_slot", broken_write)

    response = create(client)

    assert response.status_code == 201
    assert "X-Persistence-Warning" in response.headers
    assert len(client.get("/api/links").json()) == 1


def test_analytics_summary(client):
    create(client)

    body = client.get("/api/analytics").json()

    assert body["windowDays"] == 7
    assert body["totalClicks"] == 0
    assert body["averageClicksPerDay"] == 0
    assert body["activeLinks"] == 1
    assert len(body["series"]) == 7


def test_analytics_window_is_bounded(client):
    assert client.get("/api/analytics", params={"days": 30}).json()["windowDays"] == 30
    assert client.get("/api/analytics", params={"days": 0}).status_code == 422


def test_settings_defaults_and_update(client):
    assert client.get("/api/settings").json() == {
        "autoEnrichment": True,
        "qrCodes": True,
        "linkDomain": "lp.ai",
    }

    response = client.put("/api/settings", json={
        "autoEnrichment": True,
        "qrCodes": True,
        "linkDomain": "shrt.ly",
    })

    assert response.status_code == 200
    created = create(client).json()
    assert created["shortUrl"] == f"shrt.ly/{created['shortCode']}"


def test_settings_reject_unknown_domain(client):
    response = client.put("/api/settings", json={"linkDomain": "evil.example"})

    assert response.status_code == 422


def test_auto_enrichment_setting_skips_model(client, stub_enrichment):
    client.put("/api/settings", json={"autoEnrichment": False})

    body = create(client).json()

    assert stub_enrichment.calls == []
    assert body["title"] == "bar"
    assert body["summary"] == f"Shortened link for {URL}"


def test_qr_code(client):
    created = create(client).json()

    response = client.get(f"/api/links/{created['id']}/qr")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_qr_code_unknown_link(client):
    assert client.get("/api/links/unknown/qr").status_code == 404


def test_qr_code_disabled(client):
    created = create(client).json()
    client.put("/api/settings", json={"qrCodes": False})

    assert client.get(f"/api/links/{created['id']}/qr").status_code == 403


def test_overlong_url_is_a_bad_request(client, stub_enrichment):
    response = create(client, "https://example.com/" + "a" * 2100)

    assert response.status_code == 400
    assert "too long" in response.json()["detail"]
    assert stub_enrichment.calls == []


def test_create_strips_leading_whitespace(client):
    body = create(client, " https://example.com/x").json()

    assert body["originalUrl"] == "https://example.com/x"


def test_lifespan_loads_links_before_serving(monkeypatch, link_service):
    from linkpulse import main

    calls = []
    monkeypatch.setattr(main, "init_db", lambda: calls.append("init_db"))
    monkeypatch.setattr(main, "get_link_service", lambda: calls.append("load") or link_service)

    with TestClient(main.app) as client:
        assert client.get("/health").status_code == 200

    assert calls == ["init_db", "load"]
