import pytest
from flask import Flask

from inheritx.db import Pool, run_migrations
from inheritx.web.activity_controller import POOL_KEY
from inheritx.web.claim_controller import create_blueprint


def _migrated_pool():
    pool = Pool(":memory:")
    with pool.get() as conn:
        run_migrations(conn)
    return pool


@pytest.fixture(params=[True])
def client(request):
    app = Flask(__name__)
    app.register_blueprint(create_blueprint())
    if request.param:
        app.extensions[POOL_KEY] = _migrated_pool()
    return app.test_client()


def _create(client, user_id=1, amount=250.5, description="medical bills"):
    resp = client.post(
        "/claims", json={"user_id": user_id, "amount": amount, "description": description}
    )
    assert resp.status_code == 201
    return resp.get_json()


def _ids(client, path):
    resp = client.get(path)
    assert resp.status_code == 200
    return [c["id"] for c in resp.get_json()]


def test_create_claim_is_pending(client):
    claim = _create(client)
    assert (claim["status"], claim["user_id"], claim["amount"], claim["description"]) == (
        "pending",
        1,
        250.5,
        "medical bills",
    )


def test_create_claim_rejects_bad_amount(client):
    resp = client.post("/claims", json={"user_id": 1, "amount": "lots", "description": "x"})
    assert resp.status_code == 400
    assert "amount" in resp.get_json()["error"]


def test_get_claims_lists_all(client):
    created = {_create(client, user_id=n)["id"] for n in (1, 2)}
    assert set(_ids(client, "/claims")) == created


def test_get_user_claims_filters_by_user(client):
    _create(client, user_id=1)
    mine = _create(client, user_id=2)
    assert _ids(client, "/claims/user/2") == [mine["id"]]


@pytest.mark.parametrize("name", ["pending", "PENDING", "Pending"])
def test_status_route_is_case_insensitive(client, name):
    claim = _create(client)
    assert _ids(client, f"/claims/status/{name}") == [claim["id"]]


@pytest.mark.parametrize(
    "method, path, payload, status, expected",
    [
        ("get", "/claims/status/unknown", None, 400, {"error": "Invalid status"}),
        ("get", "/claims/user/1/status/unknown", None, 400, {"error": "Invalid status"}),
        ("put", "/claims/999", {"description": "new"}, 500, {"error": "Failed to update claim"}),
    ],
)
def test_error_responses(client, method, path, payload, status, expected):
    resp = getattr(client, method)(path, json=payload)
    assert (resp.status_code, resp.get_json()) == (status, expected)


def test_update_changes_only_given_fields(client):
    claim = _create(client)
    resp = client.put(f"/claims/{claim['id']}", json={"status": "approved"})
    assert resp.status_code == 200
    updated = resp.get_json()
    assert (updated["status"], updated["description"]) == ("approved", claim["description"])
    assert _ids(client, "/claims/status/approved") == [claim["id"]]
    assert _ids(client, "/claims/status/pending") == []


def test_user_and_status_route(client):
    first = _create(client, user_id=1)
    _create(client, user_id=1)
    _create(client, user_id=2)
    client.put(f"/claims/{first['id']}", json={"status": "rejected"})
    assert _ids(client, "/claims/user/1/status/rejected") == [first["id"]]


def test_update_rejects_unknown_variant(client):
    claim = _create(client)
    assert client.put(f"/claims/{claim['id']}", json={"status": "Approved"}).status_code == 400


@pytest.mark.parametrize("client", [False], indirect=True)
def test_missing_pool_is_database_error(client):
    resp = client.get("/claims")
    assert (resp.status_code, resp.get_json()) == (500, {"error": "Database error"})