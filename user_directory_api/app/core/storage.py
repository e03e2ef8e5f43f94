"""
In‑memory storage for user records.

``UserStorage`` is a plain mapping of id → record with no locking and no
validation; every operation is a single total step over the mapping.
Records handed out are always copies, so callers never hold a reference
into the stored state.  Email uniqueness is not enforced here: callers
check ``email_exists`` and insert while holding the same exclusive
acquisition of :class:`SharedStorage`.

``SharedStorage`` owns one ``UserStorage`` together with a
:class:`ReadWriteLock`.  It is created once per application and handed
to the service layer as a dependency.
"""

import uuid
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterator, List, Optional

from .locks import ReadWriteLock

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A stored user record."""

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class UserChanges:
    """Field changes applied by :meth:`UserStorage.update`.

    ``None`` leaves the field untouched.  ``updated_at`` is always
    applied.
    """

    updated_at: datetime
    name: Optional[str] = None
    email: Optional[str] = None


class UserStorage:
    def __init__(self) -> None:
        self._users: Dict[uuid.UUID, User] = {}

    def count(self) -> int:
        return len(self._users)

    def list(self) -> List[User]:
        """Return copies of all users in no particular order."""
        return [replace(user) for user in self._users.values()]

    def get(self, user_id: uuid.UUID) -> Optional[User]:
        user = self._users.get(user_id)
        return replace(user) if user is not None else None

    def create(self, user: User) -> bool:
        """Insert ``user`` unless its id is already taken.

        Returns ``False`` and leaves the stored record alone on an id
        collision.
        """
        if user.id in self._users:
            return False
        self._users[user.id] = replace(user)
        return True

    def update(self, user_id: uuid.UUID, changes: UserChanges) -> bool:
        """Apply ``changes`` to the user with ``user_id``.

        ``updated_at`` always moves forward: if the clock has not
        advanced since the last write the previous value is bumped by
        one microsecond.
        """
        user = self._users.get(user_id)
        if user is None:
            return False
        if changes.name is not None:
            user.name = changes.name
        if changes.email is not None:
            user.email = changes.email
        user.updated_at = max(changes.updated_at, user.updated_at + _TICK)
        return True

    def delete(self, user_id: uuid.UUID) -> bool:
        return self._users.pop(user_id, None) is not None

    def email_exists(self, email: str) -> bool:
        """Exact match against stored (already normalised) emails."""
        return any(user.email == email for user in self._users.values())

    def find_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return replace(user)
        return None


class SharedStorage:
    """A ``UserStorage`` guarded by a reader/writer lock.

    Use ``read()`` for list/get/exists and ``write()`` for any sequence
    that may mutate; keep the whole check‑then‑write sequence inside a
    single ``write()`` block.
    """

    def __init__(self, storage: Optional[UserStorage] = None) -> None:
        self._storage = storage if storage is not None else UserStorage()
        self._lock = ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        return self._lock

    @contextmanager
    def read(self) -> Iterator[UserStorage]:
        with self._lock.read_locked():
            yield self._storage

    @contextmanager
    def write(self) -> Iterator[UserStorage]:
        with self._lock.write_locked():
            yield self._storage


__all__ = ["SharedStorage", "User", "UserChanges", "UserStorage", "utcnow"]
