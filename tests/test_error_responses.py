import mongomock
import pytest

from jewelry_api import create_app
from jewelry_api.config import TestingConfig
from jewelry_api.utils.json_response import envelope


class QuietConfig(TestingConfig):
    EXPOSE_ERROR_DETAILS = False


@pytest.fixture
def quiet_client(identity):
    mongo = mongomock.MongoClient()
    app = create_app(QuietConfig, mongo_client=mongo, identity=identity)
    yield app.test_client()
    mongo.drop_database(QuietConfig.DB_NAME)


def admin_headers(identity):
    identity.add_account("admin-1", "admin@example.com", claims={"role": "admin"})
    return {"Authorization": f"Bearer {identity.issue_token('admin-1', role='admin')}"}


def test_server_error_hides_detail(quiet_client, identity):
    headers = admin_headers(identity)
    identity.fail_claims = True

    resp = quiet_client.post(
        "/api/users",
        json={
            "email": "new@example.com",
            "password": "secret123",
            "firstName": "Nadia",
            "lastName": "Salem",
            "role": "sales",
            "branchId": "b1",
        },
        headers=headers,
    )

    body = resp.get_json()
    assert resp.status_code == 500
    assert body["success"] is False
    assert "errors" not in body
    assert "identity provider unavailable" not in resp.get_data(as_text=True)


def test_client_errors_keep_their_detail(quiet_client, identity):
    headers = admin_headers(identity)

    resp = quiet_client.post("/api/users", json={"email": "not-an-email"}, headers=headers)

    assert resp.status_code == 400
    assert "json" in resp.get_json()["errors"]


def test_envelope_drops_empty_fields():
    assert envelope(True, "OK", "Fine") == {"success": True, "status_code": 200, "message": "Fine"}
    body = envelope(False, "NOT_FOUND", "Missing", errors={"id": ["unknown"]})
    assert body["status_code"] == 404
    assert body["errors"] == {"id": ["unknown"]}
    assert "data" not in body
