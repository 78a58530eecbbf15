import os
import tempfile

# Point the app at a throwaway SQLite file before anything imports settings
_DB_DIR = tempfile.mkdtemp(prefix="jobportal-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from jobportal.db.schema import drop_schema, init_schema
from jobportal.main import app


@pytest.fixture
def client():
    drop_schema()
    init_schema()
    with TestClient(app) as c:
        yield c


def register(client, email="a@gmail.com", password="Passw0rd!"):
    response = client.post("/api/users/register", json={"user_email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def freelancer(client):
    body = register(client, "free@example.com")
    client.put(
        "/api/users/update",
        json={"name": "Fay", "age": 30, "role": "freelancer",
              "skillsList": [{"skill": "Python", "experienceYears": 4}]},
        headers=auth_headers(body["token"]),
    )
    return body


@pytest.fixture
def company(client):
    body = register(client, "hr@acme.com")
    client.put(
        "/api/users/update",
        json={"name": "Hana", "age": 40, "role": "company", "companyName": "Acme", "location": "Remote"},
        headers=auth_headers(body["token"]),
    )
    return body


@pytest.fixture
def job(client, company):
    response = client.post(
        "/api/jobs/create",
        json={"user_email": "hr@acme.com", "title": "Backend Engineer", "description": "APIs", "location": "Remote"},
    )
    assert response.status_code == 201, response.text
    return response.json()["job"]
