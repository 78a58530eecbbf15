from conftest import register


def create_jobs(client, count, email="hr@acme.com"):
    ids = []
    for i in range(count):
        response = client.post(
            "/api/jobs/create",
            json={"user_email": email, "title": f"Job {i}", "description": "Work", "location": "Remote"},
        )
        assert response.status_code == 201
        ids.append(response.json()["job"]["id"])
    return ids


def test_create_job_joins_company_name(client, job):
    assert job["title"] == "Backend Engineer"
    assert job["companyName"] == "Acme"
    assert job["location"] == "Remote"


def test_create_job_for_unknown_user(client):
    response = client.post(
        "/api/jobs/create",
        json={"user_email": "ghost@example.com", "title": "X", "description": "Y"},
    )
    assert response.status_code == 404


def test_create_job_requires_title_and_description(client, company):
    response = client.post("/api/jobs/create", json={"user_email": "hr@acme.com", "title": "X"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_pagination_second_page(client, company):
    create_jobs(client, 15)

    response = client.get("/api/jobs", params={"page": 2, "limit": 10})
    body = response.json()

    assert response.status_code == 200
    assert len(body["jobs"]) == 5
    assert body["totalPages"] == 2
    assert body["totalJobs"] == 15
    assert body["currentPage"] == 2
    assert body["limit"] == 10


def test_list_is_newest_first(client, company):
    ids = create_jobs(client, 3)
    jobs = client.get("/api/jobs").json()["jobs"]
    assert [j["id"] for j in jobs] == list(reversed(ids))


def test_list_with_no_jobs(client):
    body = client.get("/api/jobs").json()
    assert body["jobs"] == []
    assert body["totalPages"] == 0


def test_update_job_changes_only_sent_fields(client, job):
    response = client.put(f"/api/jobs/{job['id']}", json={"title": "Senior Backend Engineer"})
    assert response.status_code == 200

    updated = client.get("/api/jobs").json()["jobs"][0]
    assert updated["title"] == "Senior Backend Engineer"
    assert updated["description"] == "APIs"


def test_update_job_null_location_clears_it(client, job):
    response = client.put(f"/api/jobs/{job['id']}", json={"location": None})
    assert response.status_code == 200
    assert client.get("/api/jobs").json()["jobs"][0]["location"] is None

    response = client.put(f"/api/jobs/{job['id']}", json={"title": None})
    assert response.status_code == 400
    assert response.json()["message"] == "title cannot be null"


def test_update_missing_job(client):
    response = client.put("/api/jobs/999", json={"title": "Nope"})
    assert response.status_code == 404
    assert response.json()["message"] == "Job not found"


def test_delete_job_removes_its_applications(client, job, freelancer):
    client.post("/api/jobs/apply", json={"user_email": "free@example.com", "job_id": job["id"]})
    assert len(client.get(f"/api/jobs/{job['id']}/applications").json()) == 1

    response = client.delete(f"/api/jobs/{job['id']}")
    assert response.status_code == 200

    assert client.get(f"/api/jobs/{job['id']}/applications").json() == []
    mine = client.get("/api/jobs/freelancer/free@example.com/applications").json()
    assert mine["applications"] == []
    assert client.get("/api/jobs").json()["totalJobs"] == 0


def test_delete_missing_job(client):
    assert client.delete("/api/jobs/12345").status_code == 404


def test_jobs_posted_by_account_without_company_name(client):
    register(client, "solo@example.com")
    create_jobs(client, 1, email="solo@example.com")
    job = client.get("/api/jobs").json()["jobs"][0]
    assert job["companyName"] is None
