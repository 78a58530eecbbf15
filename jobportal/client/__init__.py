"""
Python client for the Job Portal API.

Keeps a persisted snapshot of the logged-in user in step with the server.
"""

from jobportal.client.api_client import ApiError, JobBoardClient
from jobportal.client.state import UserState
from jobportal.client.storage import SessionStore

__all__ = ["ApiError", "JobBoardClient", "UserState", "SessionStore"]
