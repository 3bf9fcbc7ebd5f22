"""API tests. Adapters are stubbed on app.state; no network."""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from friendmap.application import ContactMapService
from friendmap.domain import Coordinate
from friendmap.infrastructure import AccessGate, InMemoryContactRepository

KEY = {"X-Access-Key": "yhk"}


class StubGeocoder:
    async def resolve(self, address: str) -> Coordinate | None:
        return {"Paris": Coordinate(48.85, 2.35)}.get(address.strip())


class StubFeed:
    async def fetch_rows(self) -> list[dict[str, str]]:
        return [
            {"Name": "Ann", "Present Address": "Paris", "lat": "", "lng": ""},
            {"Name": "Bo", "Present Address": "12 Main St", "lat": "10.0", "lng": "20.0"},
            {"Name": "Zed", "Present Address": "Atlantis", "lat": "", "lng": ""},
        ]


@pytest.fixture
def client():
    app.state.service = ContactMapService(
        InMemoryContactRepository(), StubGeocoder(), feed=StubFeed()
    )
    app.state.gate = AccessGate("YHK")
    yield TestClient(app)
    app.state.service = None
    app.state.gate = None


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_access_check(client):
    assert client.post("/access", json={"key": "yHk"}).json() == {"granted": True}
    r = client.post("/access", json={"key": "nope"})
    assert r.status_code == 401


def test_contacts_require_key(client):
    assert client.get("/contacts").status_code == 401
    assert client.get("/contacts", headers={"X-Access-Key": "bad"}).status_code == 401
    assert client.get("/contacts", headers=KEY).status_code == 200


def test_empty_map_uses_fallback_viewport(client):
    body = client.get("/contacts", headers=KEY).json()
    assert body["contacts"] == []
    assert body["viewport"]["fallback"] is True
    assert body["viewport"]["bounds"] is None
    assert body["viewport"]["zoom"] == 4
    assert (body["shown"], body["total"]) == (0, 0)


def test_reload_then_search(client):
    r = client.post("/contacts/reload", headers=KEY)
    assert r.status_code == 200
    assert r.json() == {"batch_id": 1, "loaded": 2, "dropped": 1}

    body = client.get("/contacts", headers=KEY).json()
    assert [c["name"] for c in body["contacts"]] == ["Ann", "Bo"]
    assert body["viewport"]["fallback"] is False
    assert body["viewport"]["bounds"]["south"] < 10.0
    assert body["viewport"]["padding_px"] == 50

    searched = client.get("/contacts", params={"q": "AN"}, headers=KEY).json()
    assert [c["name"] for c in searched["contacts"]] == ["Ann"]
    assert (searched["shown"], searched["total"]) == (1, 2)

    dropped = client.get("/contacts/dropped", headers=KEY).json()
    assert dropped == [
        {"index": 2, "name": "Zed", "address": "Atlantis", "reason": "not-geocoded"}
    ]


def test_reload_without_feed_is_503(client):
    app.state.service = ContactMapService(InMemoryContactRepository(), StubGeocoder())
    assert client.post("/contacts/reload", headers=KEY).status_code == 503


def test_create_contact(client):
    r = client.post(
        "/contacts",
        json={"name": "Cara", "address": "Lyon", "status": "busy", "lat": 45.76, "lng": 4.84},
        headers=KEY,
    )
    assert r.status_code == 201
    assert r.json()["name"] == "Cara"
    assert r.json()["source"] == "form"
    assert r.json()["status"] == "busy"

    dup = client.post(
        "/contacts",
        json={"name": "cara", "address": "LYON", "lat": 1.0, "lng": 1.0},
        headers=KEY,
    )
    assert dup.status_code == 409


def test_create_contact_geocodes_address(client):
    r = client.post("/contacts", json={"name": "Ann", "address": "Paris"}, headers=KEY)
    assert r.status_code == 201
    assert (r.json()["lat"], r.json()["lng"]) == (48.85, 2.35)


def test_create_contact_without_location_is_400(client):
    r = client.post("/contacts", json={"name": "Ann", "address": "Atlantis"}, headers=KEY)
    assert r.status_code == 400
    assert r.json()["detail"] == "Select a location on the map"
    assert client.post("/contacts", json={"name": " "}, headers=KEY).status_code == 400


def test_geocode_endpoint(client):
    r = client.get("/geocode", params={"address": "Paris"}, headers=KEY)
    assert r.json() == {"lat": 48.85, "lng": 2.35}
    assert client.get("/geocode", params={"address": "Atlantis"}, headers=KEY).status_code == 404


def test_created_contact_matches_listed_contact(client):
    r = client.post(
        "/contacts",
        json={"name": "Hal", "phone_number": "+1 202 555 1234", "lat": 1.0, "lng": 1.0},
        headers=KEY,
    )
    assert r.status_code == 201
    listed = client.get("/contacts", headers=KEY).json()["contacts"]
    assert r.json() == listed[0]
    assert listed[0]["phone_number"] == "+12025551234"
