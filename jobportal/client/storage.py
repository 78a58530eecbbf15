"""
Persistent client storage.

Two keys, like the browser's localStorage in the web client:
- "user":  the serialized UserState snapshot
- "token": the bearer credential

Each key is one file inside a directory.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from jobportal.client.state import UserState

logger = logging.getLogger(__name__)

USER_KEY = "user"
TOKEN_KEY = "token"


class SessionStore:
    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / key

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, state: UserState) -> None:
        """Write the snapshot, and the token when there is one."""
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(USER_KEY).write_text(state.model_dump_json(exclude={"token"}), encoding="utf-8")
        if state.token:
            self._path(TOKEN_KEY).write_text(state.token, encoding="utf-8")
        else:
            self._path(TOKEN_KEY).unlink(missing_ok=True)

    def load(self) -> UserState:
        """
        Rehydrate the snapshot saved by save().

        Both keys must be present and the snapshot must parse; otherwise
        the result is a fresh, logged-out state.
        """
        stored = self._read(USER_KEY)
        token = self._read(TOKEN_KEY)
        if not stored or not token:
            return UserState()
        try:
            state = UserState.model_validate_json(stored)
        except ValidationError as e:
            logger.warning("Discarding unreadable stored user: %s", e)
            return UserState()
        return state.model_copy(update={"token": token.strip(), "logged_in": bool(state.user_email)})

    def clear(self) -> None:
        for key in (USER_KEY, TOKEN_KEY):
            self._path(key).unlink(missing_ok=True)
