"""
HTTP-level tests: routes, auth gate and error translation, with the
database and geocoder replaced by in-memory fakes.
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_geocoder, get_location_repository, get_user_repository
from auth.dependencies import get_password_hasher, get_token_service
from main import app

MARIA = {
    "name": "Maria Oliveira",
    "gender": "F",
    "nationalId": "98765432150",
    "address": "Avenida Brasil, 500",
    "email": "maria@example.com",
    "password": "senha123",
    "birthdate": "1985-07-15",
}
JOAO = dict(MARIA, name="Joao Silva", gender="M", nationalId="12345678901", email="joao@example.com")
PARK = {"name": "Park", "description": "desc", "address": "Central Park, NY"}


@pytest.fixture
def client(user_repo, location_repo, geocoder, token_service, hasher):
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_location_repository] = lambda: location_repo
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    yield TestClient(app)
    app.dependency_overrides.clear()


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _register(client, body=MARIA) -> dict:
    resp = client.post("/usuario", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestUsers:
    def test_register_returns_user_and_token(self, client):
        data = _register(client)
        assert data["token"]
        assert data["user"]["email"] == "maria@example.com"
        assert data["user"]["nationalId"] == "98765432150"
        assert "password" not in data["user"]
        assert "passwordHash" not in data["user"]

    def test_register_accepts_legacy_cpf_key(self, client):
        body = {k: v for k, v in MARIA.items() if k != "nationalId"}
        body["cpf"] = "98765432150"
        assert _register(client, body)["user"]["nationalId"] == "98765432150"

    def test_register_validation_lists_fields(self, client):
        bad = dict(MARIA, gender="X", nationalId="123", email="not-an-email", password="123", birthdate="1985-13-45")
        resp = client.post("/usuario", json=bad)
        assert resp.status_code == 400
        fields = {e["field"] for e in resp.json()["errors"]}
        assert {"gender", "nationalId", "email", "password", "birthdate"} <= fields

    def test_register_duplicate_is_rejected(self, client):
        _register(client)
        resp = client.post("/usuario", json=dict(MARIA, email="maria2@example.com"))
        assert resp.status_code == 400
        assert resp.json()["error"] == "conflict"

    def test_login(self, client, token_service):
        user_id = _register(client)["user"]["id"]
        resp = client.post("/login", json={"email": "maria@example.com", "password": "senha123"})
        assert resp.status_code == 200
        assert token_service.verify(resp.json()["token"]) == user_id

    @pytest.mark.parametrize(
        "creds",
        [
            {"email": "maria@example.com", "password": "wrong-pass"},
            {"email": "ghost@example.com", "password": "senha123"},
        ],
    )
    def test_login_failures_look_the_same(self, client, creds):
        _register(client)
        resp = client.post("/login", json=creds)
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid_credentials", "message": "Invalid email or password"}

    def test_delete_self(self, client, user_repo):
        data = _register(client)
        resp = client.delete(f"/usuario/{data['user']['id']}", headers=_auth(data["token"]))
        assert resp.status_code == 200
        assert user_repo.rows == {}

    def test_delete_user_with_locations_is_blocked(self, client):
        data = _register(client)
        client.post("/local", json=PARK, headers=_auth(data["token"]))
        resp = client.delete(f"/usuario/{data['user']['id']}", headers=_auth(data["token"]))
        assert resp.status_code == 400
        assert resp.json()["error"] == "conflict"

    def test_delete_other_user_is_forbidden(self, client):
        maria = _register(client)
        joao = _register(client, JOAO)
        resp = client.delete(f"/usuario/{maria['user']['id']}", headers=_auth(joao["token"]))
        assert resp.status_code == 403

    def test_delete_user_requires_token(self, client):
        maria = _register(client)
        assert client.delete(f"/usuario/{maria['user']['id']}").status_code == 401


class TestAuthGate:
    def test_missing_header(self, client):
        resp = client.get("/local")
        assert resp.status_code == 401
        assert resp.json()["error"] == "unauthorized"

    def test_wrong_scheme(self, client):
        resp = client.get("/local", headers={"Authorization": "Basic abc"})
        assert resp.status_code == 401

    def test_bad_token(self, client):
        resp = client.get("/local", headers=_auth("not.a.token"))
        assert resp.status_code == 401
        assert resp.json()["error"] == "invalid_token"

    def test_non_ascii_token(self, client):
        resp = client.get("/local", headers={"Authorization": b"Bearer a.b.\xe9"})
        assert resp.status_code == 401
        assert resp.json()["error"] == "invalid_token"

    def test_non_uuid_subject(self, client, token_service):
        resp = client.get("/local", headers=_auth(token_service.issue("1")))
        assert resp.status_code == 401

    def test_expired_token(self, client, token_service):
        token = token_service.issue(str(uuid.uuid4()), expires_in=-1)
        assert client.get("/local", headers=_auth(token)).status_code == 401


class TestLocations:
    def test_walkthrough(self, client):
        _register(client)
        login = client.post("/login", json={"email": "maria@example.com", "password": "senha123"})
        assert login.status_code == 200
        token, maria_id = login.json()["token"], login.json()["user"]["id"]

        created = client.post("/local", json=PARK, headers=_auth(token))
        assert created.status_code == 201
        loc = created.json()
        assert loc["userId"] == maria_id
        assert loc["coordinates"] is None

        listed = client.get("/local", headers=_auth(token)).json()
        assert [l["id"] for l in listed] == [loc["id"]]

        maps = client.get(f"/local/{loc['id']}/maps", headers=_auth(token))
        assert maps.status_code == 200
        assert maps.json() == {
            "mapLink": "https://www.google.com/maps/search/?api=1&query=40.7827725,-73.9653627"
        }

        fetched = client.get(f"/local/{loc['id']}", headers=_auth(token)).json()
        assert fetched["coordinates"] == "40.7827725,-73.9653627"

    def test_body_owner_is_ignored(self, client):
        maria = _register(client)
        joao = _register(client, JOAO)
        resp = client.post("/local", json=dict(PARK, userId=joao["user"]["id"]), headers=_auth(maria["token"]))
        assert resp.json()["userId"] == maria["user"]["id"]

    def test_create_validation(self, client):
        token = _register(client)["token"]
        resp = client.post("/local", json={"name": "", "address": "x"}, headers=_auth(token))
        assert resp.status_code == 400
        fields = {e["field"] for e in resp.json()["errors"]}
        assert {"name", "description"} <= fields

    def test_partial_update(self, client):
        token = _register(client)["token"]
        loc = client.post("/local", json=PARK, headers=_auth(token)).json()

        resp = client.put(f"/local/{loc['id']}", json={"name": "Academia XYZ"}, headers=_auth(token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["name"] == "Academia XYZ"
        assert body["description"] == "desc"
        assert body["address"] == "Central Park, NY"

    def test_update_with_blank_field(self, client):
        token = _register(client)["token"]
        loc = client.post("/local", json=PARK, headers=_auth(token)).json()
        resp = client.put(f"/local/{loc['id']}", json={"description": "  "}, headers=_auth(token))
        assert resp.status_code == 400

    def test_other_users_location_is_not_found(self, client):
        maria = _register(client)
        joao = _register(client, JOAO)
        loc = client.post("/local", json=PARK, headers=_auth(maria["token"])).json()
        other = _auth(joao["token"])

        assert client.get(f"/local/{loc['id']}", headers=other).status_code == 404
        assert client.put(f"/local/{loc['id']}", json={"name": "x"}, headers=other).status_code == 404
        assert client.delete(f"/local/{loc['id']}", headers=other).status_code == 404
        assert client.get(f"/local/{loc['id']}/maps", headers=other).status_code == 404
        assert client.get(f"/local/{loc['id']}", headers=_auth(maria["token"])).status_code == 200

    def test_unknown_and_malformed_ids(self, client):
        token = _register(client)["token"]
        assert client.get(f"/local/{uuid.uuid4()}", headers=_auth(token)).status_code == 404
        assert client.get("/local/11", headers=_auth(token)).status_code == 404

    def test_delete(self, client):
        token = _register(client)["token"]
        loc = client.post("/local", json=PARK, headers=_auth(token)).json()
        resp = client.delete(f"/local/{loc['id']}", headers=_auth(token))
        assert resp.status_code == 200
        assert client.get(f"/local/{loc['id']}", headers=_auth(token)).status_code == 404

    def test_map_link_without_match(self, client):
        token = _register(client)["token"]
        loc = client.post("/local", json=dict(PARK, address="Nowhere"), headers=_auth(token)).json()
        resp = client.get(f"/local/{loc['id']}/maps", headers=_auth(token))
        assert resp.status_code == 404
        assert resp.json()["error"] == "geocode_not_found"


class TestErrors:
    def test_unexpected_failure_is_generic_500(self, client, location_repo, monkeypatch):
        token = _register(client)["token"]

        async def boom(owner_id):
            raise RuntimeError("db exploded at 10.0.0.5")

        monkeypatch.setattr(location_repo, "list_by_owner", boom)
        resp = TestClient(app, raise_server_exceptions=False).get("/local", headers=_auth(token))
        assert resp.status_code == 500
        assert resp.json() == {"error": "internal_error", "message": "Internal server error"}

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"
