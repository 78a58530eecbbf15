from fastapi.testclient import TestClient

from jobportal.main import app
from jobportal.services import profile_service


def test_unhandled_error_is_a_generic_500(client, monkeypatch):
    def explode(db, email):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(profile_service, "require_account_id", explode)
    quiet = TestClient(app, raise_server_exceptions=False)

    response = quiet.get("/api/users/a@gmail.com")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal Server Error"}


def test_validation_errors_use_the_envelope(client):
    response = client.get("/api/jobs", params={"page": 0})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("page")


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"
