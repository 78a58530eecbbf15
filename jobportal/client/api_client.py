"""
Job Portal API client.

Wraps every REST endpoint and keeps a UserState snapshot in step with
the server: register/login/profile calls replace or merge the snapshot
from the response, apply/withdraw maintain the applied job list, and
every change is written to the SessionStore when one is configured.

Usage:
    client = JobBoardClient("http://localhost:8000", store=SessionStore("~/.jobportal"))
    client.login("a@gmail.com", "Passw0rd!")
    client.update_profile(role="company", companyName="Acme", location="Remote")
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from jobportal.client import state as reducers
from jobportal.client.state import UserState
from jobportal.client.storage import SessionStore
from jobportal.schemas.schemas import UserRole

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class JobBoardClient:
    """
    `http` is anything with a requests-style
    request(method, url, json=..., params=..., headers=...) method; a
    requests.Session by default.
    """

    def __init__(self, base_url: str = "", store: Optional[SessionStore] = None, http: Any = None):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.http = http or requests.Session()
        self.state = store.load() if store else UserState()

    # ------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------

    def _request(self, method: str, path: str, json: Optional[dict] = None,
                 params: Optional[dict] = None) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.state.token:
            headers["Authorization"] = f"Bearer {self.state.token}"
        response = self.http.request(
            method, f"{self.base_url}/api{path}", json=json, params=params, headers=headers
        )
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message or response.text)
        return body

    def _commit(self, new_state: UserState) -> UserState:
        self.state = new_state
        if self.store:
            self.store.save(new_state)
        return new_state

    # ------------------------------------------------------------
    # users
    # ------------------------------------------------------------

    def register(self, email: str, password: str) -> UserState:
        body = self._request("POST", "/users/register", json={"user_email": email, "password": password})
        return self._commit(reducers.register_success(body))

    def login(self, email: str, password: str) -> UserState:
        body = self._request("POST", "/users/login", json={"user_email": email, "password": password})
        # A new login replaces whatever the previous account left behind
        state = self._commit(reducers.login_success(reducers.reset(), body))
        if state.role == UserRole.freelancer:
            return self.sync_applied_jobs()
        return state

    def logout(self) -> UserState:
        if self.store:
            self.store.clear()
        self.state = reducers.reset()
        return self.state

    def refresh_profile(self) -> UserState:
        body = self._request("GET", "/users/profile")
        return self._commit(reducers.login_success(self.state, body))

    def update_profile(self, **fields: Any) -> UserState:
        """
        Save the details form, e.g. update_profile(role="freelancer",
        name="Ann", age=30, skillsList=[{"skill": "Python", "experienceYears": 4}]).
        """
        payload = {"user_email": self.state.user_email, **fields}
        body = self._request("PUT", "/users/update", json=payload)
        return self._commit(reducers.login_success(self.state, body))

    def delete_details(self) -> UserState:
        self._request("DELETE", "/users/details")
        return self.refresh_profile()

    def get_user(self, email: str) -> Dict[str, Any]:
        return self._request("GET", f"/users/{email}")

    # ------------------------------------------------------------
    # jobs
    # ------------------------------------------------------------

    def create_job(self, title: str, description: str, location: Optional[str] = None) -> Dict[str, Any]:
        body = self._request("POST", "/jobs/create", json={
            "user_email": self.state.user_email, "title": title,
            "description": description, "location": location,
        })
        return body["job"]

    def list_jobs(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        return self._request("GET", "/jobs", params={"page": page, "limit": limit})

    def update_job(self, job_id: int, **fields: Any) -> None:
        self._request("PUT", f"/jobs/{job_id}", json=fields)

    def delete_job(self, job_id: int) -> None:
        self._request("DELETE", f"/jobs/{job_id}")

    # ------------------------------------------------------------
    # applications
    # ------------------------------------------------------------

    def apply(self, job_id: int) -> UserState:
        self._request("POST", "/jobs/apply", json={"user_email": self.state.user_email, "job_id": job_id})
        return self._commit(reducers.add_applied_job(self.state, job_id))

    def withdraw(self, job_id: int) -> UserState:
        self._request("DELETE", "/jobs/withdraw", json={"user_email": self.state.user_email, "job_id": job_id})
        return self._commit(reducers.remove_applied_job(self.state, job_id))

    def applicants(self, job_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/jobs/{job_id}/applications")

    def respond(self, application_id: int, action: str) -> None:
        self._request("PUT", f"/jobs/applications/{application_id}/respond", json={"action": action})

    def my_applications(self) -> List[Dict[str, Any]]:
        body = self._request("GET", f"/jobs/freelancer/{self.state.user_email}/applications")
        return body["applications"]

    def sync_applied_jobs(self) -> UserState:
        """Rebuild the applied job list from the server."""
        job_ids = [a["job_id"] for a in self.my_applications()]
        return self._commit(self.state.model_copy(update={"applied_jobs": job_ids}))
