"""
Credential Store - Demo-grade user records behind a swappable interface.

Users are kept as a JSON list under one fixed key, and the currently
authenticated username under a second one. Two backings:

- InMemoryCredentialStore: a plain dict, used in tests
- KeyValueCredentialStore: the same two keys persisted in the kv_entries
  table through SQLAlchemy

This is not a security boundary. It holds usernames and password hashes
with no lockout, no rate limiting and a single "current user" slot.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)

USERS_KEY = "aiContentWriterUsers"
CURRENT_USER_KEY = "aiContentWriterCurrentUser"


@dataclass(frozen=True)
class StoredUser:
    username: str
    password_hash: str

    def to_dict(self) -> Dict[str, str]:
        return {"username": self.username, "passwordHash": self.password_hash}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "StoredUser":
        return cls(username=data["username"], password_hash=data["passwordHash"])


class CredentialStore(ABC):
    """
    Key-value backed user store.

    Subclasses only provide raw string get/set/delete; the user list
    encoding lives here so every backing stores the same layout.
    """

    @abstractmethod
    def _get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def _set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def _delete(self, key: str) -> None:
        pass

    # -----------------------------------------------------------------------
    # USERS
    # -----------------------------------------------------------------------

    def list_users(self) -> List[StoredUser]:
        raw = self._get(USERS_KEY)
        if not raw:
            return []
        try:
            return [StoredUser.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Corrupt user list under {USERS_KEY}: {e}")
            return []

    def find_user(self, username: str) -> Optional[StoredUser]:
        for user in self.list_users():
            if user.username == username:
                return user
        return None

    def save_user(self, user: StoredUser) -> None:
        """Insert or replace the record for user.username."""
        users = [u for u in self.list_users() if u.username != user.username]
        users.append(user)
        self._set(USERS_KEY, json.dumps([u.to_dict() for u in users]))

    # -----------------------------------------------------------------------
    # CURRENT USER
    # -----------------------------------------------------------------------

    def get_current_user(self) -> Optional[str]:
        return self._get(CURRENT_USER_KEY)

    def set_current_user(self, username: str) -> None:
        self._set(CURRENT_USER_KEY, username)

    def clear_current_user(self) -> None:
        self._delete(CURRENT_USER_KEY)


class InMemoryCredentialStore(CredentialStore):
    def __init__(self):
        self._data: Dict[str, str] = {}

    def _get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _set(self, key: str, value: str) -> None:
        self._data[key] = value

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)


class KeyValueCredentialStore(CredentialStore):
    """Credential store persisted in the kv_entries table."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, key: str) -> Optional[str]:
        entry = self.db.get(KeyValueEntry, key)
        return entry.value if entry else None

    def _set(self, key: str, value: str) -> None:
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value
        self.db.commit()

    def _delete(self, key: str) -> None:
        entry = self.db.get(KeyValueEntry, key)
        if entry is not None:
            self.db.delete(entry)
            self.db.commit()
