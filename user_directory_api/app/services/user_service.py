"""
Business logic for users.

``UserService`` validates and normalises incoming payloads, enforces
email uniqueness across records and classifies every failure into one
of the ``ApiError`` kinds.  All state lives in the ``SharedStorage``
passed to the constructor; the service keeps nothing between calls.

Every mutating operation runs its existence check, uniqueness check and
write inside one exclusive acquisition of the storage lock, so two
concurrent requests can never both pass the same uniqueness check.
Validation always happens before any write: a rejected request leaves
storage untouched.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..core.errors import BadRequestError, ConflictError, InternalError, NotFoundError
from ..core.storage import SharedStorage, User, UserChanges, utcnow
from ..schemas.user import UserCreate, UserRead, UserUpdate, UsersResponse

logger = logging.getLogger(__name__)


def _clean_name(raw: str) -> str:
    name = raw.strip()
    if not name:
        raise BadRequestError("Name cannot be empty")
    return name


def _clean_email(raw: str) -> str:
    """Trim, validate and lowercase an email address."""
    email = raw.strip()
    if not email:
        raise BadRequestError("Email cannot be empty")
    if "@" not in email:
        raise BadRequestError(f"Invalid email format: {email}")
    return email.lower()


class UserService:
    """Сервис для работы с пользователями.

    Хранилище передаётся явно; ``clock`` и ``id_factory`` можно
    подменить в тестах.
    """

    def __init__(
        self,
        storage: SharedStorage,
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._id_factory = id_factory

    async def list_users(self) -> UsersResponse:
        """Return all users together with their count."""
        with self._storage.read() as storage:
            users = storage.list()
        return UsersResponse(
            users=[UserRead.model_validate(user) for user in users],
            count=len(users),
        )

    async def get_user(self, user_id: uuid.UUID) -> UserRead:
        with self._storage.read() as storage:
            user = storage.get(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return UserRead.model_validate(user)

    async def create_user(self, data: UserCreate) -> UserRead:
        """Create a new user.

        Checks run in a fixed order: empty name, empty email, email
        shape, then email uniqueness.  The uniqueness check and the
        insert share one write lock.
        """
        name = _clean_name(data.name)
        email = _clean_email(data.email)

        with self._storage.write() as storage:
            if storage.email_exists(email):
                logger.warning("Rejected registration: email %s already exists", email)
                raise ConflictError(f"User with email {email} already exists")

            now = self._clock()
            user = User(
                id=self._id_factory(),
                name=name,
                email=email,
                created_at=now,
                updated_at=now,
            )
            if not storage.create(user):
                logger.error("Id collision while creating user %s", user.id)
                raise InternalError("Failed to create user due to ID collision")

        logger.info("Registered user %s (%s)", user.id, email)
        return UserRead.model_validate(user)

    async def update_user(self, user_id: uuid.UUID, data: UserUpdate) -> UserRead:
        """Apply a partial update.

        Omitted fields keep their stored value.  A user may "change" its
        email to the address it already has.  ``updated_at`` is
        refreshed on every successful call, even when no field is
        supplied.
        """
        with self._storage.write() as storage:
            if storage.get(user_id) is None:
                raise NotFoundError(f"User with id {user_id} not found")

            email: Optional[str] = None
            if data.email is not None:
                email = _clean_email(data.email)
                owner = storage.find_by_email(email)
                if owner is not None and owner.id != user_id:
                    logger.warning("Rejected update of %s: email %s is taken", user_id, email)
                    raise ConflictError(f"Email {email} is already in use")

            name: Optional[str] = None
            if data.name is not None:
                name = _clean_name(data.name)

            changes = UserChanges(updated_at=self._clock(), name=name, email=email)
            updated = storage.get(user_id) if storage.update(user_id, changes) else None
            if updated is None:
                # Unreachable while the write lock is held across the sequence.
                logger.error("User %s vanished during update", user_id)
                raise InternalError(f"Failed to update user {user_id}")

        logger.info("Updated user %s", user_id)
        return UserRead.model_validate(updated)

    async def delete_user(self, user_id: uuid.UUID) -> None:
        with self._storage.write() as storage:
            if not storage.delete(user_id):
                raise NotFoundError(f"User with id {user_id} not found")
        logger.info("Deleted user %s", user_id)


__all__ = ["UserService"]
