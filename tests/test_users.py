from jobportal.api.routes import user_routes

from conftest import register, auth_headers


def test_register_returns_token_and_empty_profile(client):
    body = register(client)

    assert body["success"] is True
    assert body["token"]
    assert body["user_email"] == "a@gmail.com"
    assert body["isNewUser"] is True
    assert body["role"] is None
    details = body["userDetails"]
    assert details["detailsCompleted"] is False
    assert details["companies"] == []
    assert details["skillsList"] == []


def test_register_same_email_twice_is_a_conflict(client):
    register(client)
    response = client.post("/api/users/register", json={"user_email": "a@gmail.com", "password": "other"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User already exists"}


def test_register_requires_email_and_password(client):
    response = client.post("/api/users/register", json={"user_email": "a@gmail.com", "password": "   "})
    assert response.status_code == 400
    assert response.json()["success"] is False

    response = client.post("/api/users/register", json={"password": "Passw0rd!"})
    assert response.status_code == 400


def test_login_distinguishes_unknown_user_and_bad_password(client):
    register(client)

    unknown = client.post("/api/users/login", json={"user_email": "b@gmail.com", "password": "Passw0rd!"})
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "User not registered"

    wrong = client.post("/api/users/login", json={"user_email": "a@gmail.com", "password": "nope"})
    assert wrong.status_code == 401
    assert wrong.json()["message"] == "Incorrect password"


def test_uniform_login_errors_flattens_failures(client, monkeypatch):
    register(client)
    monkeypatch.setattr(user_routes.settings, "uniform_login_errors", True)

    unknown = client.post("/api/users/login", json={"user_email": "b@gmail.com", "password": "Passw0rd!"})
    wrong = client.post("/api/users/login", json={"user_email": "a@gmail.com", "password": "nope"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["message"] == wrong.json()["message"] == "Invalid email or password"


def test_login_trims_credentials(client):
    register(client)
    response = client.post("/api/users/login", json={"user_email": "  a@gmail.com ", "password": " Passw0rd! "})
    assert response.status_code == 200


def test_company_scenario(client):
    token = register(client)["token"]

    login = client.post("/api/users/login", json={"user_email": "a@gmail.com", "password": "Passw0rd!"})
    assert login.status_code == 200
    assert login.json()["userDetails"]["detailsCompleted"] is False
    assert login.json()["isNewUser"] is True

    response = client.put(
        "/api/users/update",
        json={"role": "company", "companyName": "Acme", "location": "Remote"},
        headers=auth_headers(token),
    )
    assert response.status_code == 200
    details = response.json()["userDetails"]
    assert details["detailsCompleted"] is True
    assert details["role"] == "company"
    assert details["companies"] == [{"companyName": "Acme", "location": "Remote"}]

    login = client.post("/api/users/login", json={"user_email": "a@gmail.com", "password": "Passw0rd!"})
    assert login.json()["role"] == "company"
    assert login.json()["isNewUser"] is False


def test_freelancer_skills_round_trip(client):
    token = register(client)["token"]
    skills = [{"skill": "Python", "experienceYears": 4}, {"skill": "SQL", "experienceYears": 2}]

    client.put(
        "/api/users/update",
        json={"name": "Fay", "age": 30, "role": "freelancer", "skillsList": skills},
        headers=auth_headers(token),
    )
    response = client.get("/api/users/profile", headers=auth_headers(token))

    assert response.status_code == 200
    details = response.json()["userDetails"]
    assert details["skillsList"] == skills
    assert details["detailsCompleted"] is True
    assert details["experience"] == 4
    assert details["companyName"] is None


def test_legacy_skill_keys_are_normalized(client):
    token = register(client)["token"]
    client.put(
        "/api/users/update",
        json={"role": "freelancer", "skillsList": [{"skills": "React", "experience": 2}]},
        headers=auth_headers(token),
    )

    details = client.get("/api/users/a@gmail.com").json()
    assert details["skillsList"] == [{"skill": "React", "experienceYears": 2}]


def test_update_without_any_role_is_rejected(client):
    token = register(client)["token"]
    response = client.put("/api/users/update", json={"name": "Nobody"}, headers=auth_headers(token))

    assert response.status_code == 400
    assert response.json()["message"] == "role required"


def test_company_profile_requires_company_name(client):
    headers = auth_headers(register(client)["token"])
    response = client.put("/api/users/update", json={"role": "company", "name": "X"}, headers=headers)

    assert response.status_code == 400
    assert response.json()["message"] == "companyName required"
    details = client.get("/api/users/profile", headers=headers).json()["userDetails"]
    assert details["detailsCompleted"] is False


def test_freelancer_profile_requires_skills(client):
    headers = auth_headers(register(client)["token"])

    for body in ({"role": "freelancer", "name": "X"}, {"role": "freelancer", "skillsList": []}):
        response = client.put("/api/users/update", json=body, headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "skillsList required"

    details = client.get("/api/users/profile", headers=headers).json()["userDetails"]
    assert details["detailsCompleted"] is False


def test_freelancer_update_keeps_stored_skills(client, freelancer):
    headers = auth_headers(freelancer["token"])
    response = client.put("/api/users/update", json={"age": 31}, headers=headers)

    assert response.status_code == 200
    details = response.json()["userDetails"]
    assert details["skillsList"] == [{"skill": "Python", "experienceYears": 4}]
    assert details["age"] == 31


def test_role_is_kept_when_not_sent(client):
    token = register(client)["token"]
    headers = auth_headers(token)
    client.put("/api/users/update", json={"role": "company", "companyName": "Acme"}, headers=headers)

    response = client.put("/api/users/update", json={"location": "Berlin"}, headers=headers)
    details = response.json()["userDetails"]
    assert details["role"] == "company"
    assert details["companies"] == [{"companyName": "Acme", "location": "Berlin"}]


def test_more_than_one_company_is_rejected(client):
    token = register(client)["token"]
    response = client.put(
        "/api/users/update",
        json={"role": "company", "companies": [{"companyName": "A"}, {"companyName": "B"}]},
        headers=auth_headers(token),
    )
    assert response.status_code == 400


def test_single_company_list_is_accepted(client):
    token = register(client)["token"]
    response = client.put(
        "/api/users/update",
        json={"role": "company", "companies": [{"companyName": "Acme", "location": "Oslo"}]},
        headers=auth_headers(token),
    )
    details = response.json()["userDetails"]
    assert details["companyName"] == "Acme"
    assert details["location"] == "Oslo"


def test_protected_routes_need_a_valid_token(client):
    assert client.get("/api/users/profile").status_code == 401
    response = client.get("/api/users/profile", headers=auth_headers("garbage"))
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_get_user_by_email(client):
    register(client)
    assert client.get("/api/users/a@gmail.com").status_code == 200
    missing = client.get("/api/users/nobody@gmail.com")
    assert missing.status_code == 404
    assert missing.json()["message"] == "User not found"


def test_email_lookups_normalize_like_registration(client):
    register(client, "Ann@GMAIL.com")

    assert client.get("/api/users/Ann@GMAIL.com").status_code == 200
    assert client.get("/api/jobs/freelancer/Ann@GMAIL.com/applications").status_code == 200
    assert client.get("/api/users/not-an-email").status_code == 404


def test_delete_details_resets_profile(client):
    token = register(client)["token"]
    headers = auth_headers(token)
    client.put("/api/users/update", json={"role": "company", "companyName": "Acme"}, headers=headers)

    response = client.delete("/api/users/details", headers=headers)
    assert response.status_code == 200

    details = client.get("/api/users/profile", headers=headers).json()["userDetails"]
    assert details["detailsCompleted"] is False
    assert details["role"] is None
    assert details["companies"] == []
