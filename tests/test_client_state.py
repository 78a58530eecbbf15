from jobportal.client import state as reducers
from jobportal.client.state import UserState
from jobportal.client.storage import SessionStore
from jobportal.schemas import UserRole


LOGIN_PAYLOAD = {
    "success": True,
    "token": "tok-1",
    "user_email": "a@gmail.com",
    "role": "freelancer",
    "isNewUser": False,
    "userDetails": {
        "name": "Fay",
        "age": 30,
        "role": "freelancer",
        "companyName": None,
        "location": None,
        "companies": [],
        "company_id": 7,
        "skillsList": [{"skill": "Python", "experienceYears": 4}],
        "experience": 4,
        "detailsCompleted": True,
    },
}


def test_register_success_starts_from_scratch():
    state = reducers.register_success({"token": "tok", "user_email": "a@gmail.com"})
    assert state.logged_in is True
    assert state.details_completed is False
    assert state.role is None
    assert state.applied_jobs == []


def test_login_success_copies_server_flag():
    state = reducers.login_success(UserState(), LOGIN_PAYLOAD)

    assert state.token == "tok-1"
    assert state.logged_in is True
    assert state.role == UserRole.freelancer
    assert state.company_id == 7
    assert state.skills_list[0].skill == "Python"
    assert state.details_completed is True


def test_login_success_keeps_fields_the_payload_lacks():
    start = UserState(user_email="a@gmail.com", token="old", name="Fay", applied_jobs=[3])
    state = reducers.login_success(start, {"userDetails": {"age": 31, "detailsCompleted": False}})

    assert state.token == "old"
    assert state.name == "Fay"
    assert state.age == 31
    assert state.applied_jobs == [3]


def test_update_details_does_not_recompute_completion():
    start = UserState(details_completed=False)
    state = reducers.update_details(start, {
        "name": "Fay", "age": 30, "role": "freelancer",
        "skills_list": [{"skill": "Python", "experienceYears": 4}],
    })

    assert state.name == "Fay"
    assert state.role == UserRole.freelancer
    assert state.details_completed is False

    state = reducers.update_details(reducers.set_details_completed(state, True), {"age": 31})
    assert state.details_completed is True
    assert state.name == "Fay"
    assert state.age == 31


def test_update_details_clears_fields_sent_as_none():
    start = UserState(name="Fay", location="Oslo", skills_list=[{"skill": "Go", "experienceYears": 2}])
    state = reducers.update_details(start, {"location": None, "skills_list": None, "unknown": "x"})

    assert state.location is None
    assert state.skills_list == []
    assert state.name == "Fay"


def test_applied_jobs_have_no_duplicates():
    state = reducers.add_applied_job(UserState(), 5)
    state = reducers.add_applied_job(state, 5)
    state = reducers.add_applied_job(state, 6)
    assert state.applied_jobs == [5, 6]

    state = reducers.remove_applied_job(state, 5)
    assert state.applied_jobs == [6]


def test_store_round_trip(tmp_path):
    store = SessionStore(tmp_path)
    state = reducers.add_applied_job(reducers.login_success(UserState(), LOGIN_PAYLOAD), 9)
    store.save(state)

    assert (tmp_path / "token").read_text() == "tok-1"
    loaded = store.load()
    assert loaded == state


def test_store_needs_both_keys(tmp_path):
    store = SessionStore(tmp_path)
    store.save(reducers.login_success(UserState(), LOGIN_PAYLOAD))
    (tmp_path / "token").unlink()

    assert store.load() == UserState()


def test_store_ignores_corrupt_snapshot(tmp_path):
    (tmp_path / "user").write_text("{not json")
    (tmp_path / "token").write_text("tok")

    assert SessionStore(tmp_path).load() == UserState()


def test_store_clear(tmp_path):
    store = SessionStore(tmp_path)
    store.save(reducers.login_success(UserState(), LOGIN_PAYLOAD))
    store.clear()

    assert not (tmp_path / "user").exists()
    assert not (tmp_path / "token").exists()
    assert store.load().logged_in is False
