from __future__ import annotations

import asyncio
import threading
from typing import List

from user_directory_api.app.core.errors import ApiError, ConflictError
from user_directory_api.app.core.storage import SharedStorage
from user_directory_api.app.schemas.user import UserCreate, UserUpdate
from user_directory_api.app.services.user_service import UserService

THREADS = 16


def _run_concurrently(target, count: int = THREADS) -> None:
    barrier = threading.Barrier(count)

    def worker(index: int) -> None:
        barrier.wait()
        target(index)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(10)
        assert not thread.is_alive()


def test_concurrent_creates_with_same_email_yield_one_user(storage: SharedStorage) -> None:
    service = UserService(storage)
    successes: List[str] = []
    failures: List[ApiError] = []
    guard = threading.Lock()

    def create(index: int) -> None:
        try:
            user = asyncio.run(service.create_user(UserCreate(name=f"User {index}", email="Same@Example.com")))
        except ApiError as exc:
            with guard:
                failures.append(exc)
        else:
            with guard:
                successes.append(str(user.id))

    _run_concurrently(create)

    assert len(successes) == 1
    assert len(failures) == THREADS - 1
    assert all(isinstance(exc, ConflictError) for exc in failures)
    with storage.read() as users:
        assert users.count() == 1


def test_concurrent_creates_with_distinct_emails_all_succeed(storage: SharedStorage) -> None:
    service = UserService(storage)

    def create(index: int) -> None:
        asyncio.run(service.create_user(UserCreate(name=f"User {index}", email=f"user{index}@example.com")))

    _run_concurrently(create)

    with storage.read() as users:
        records = users.list()
    assert len(records) == THREADS
    assert len({user.id for user in records}) == THREADS
    assert len({user.email for user in records}) == THREADS


def test_concurrent_updates_to_same_email_keep_it_unique(storage: SharedStorage) -> None:
    service = UserService(storage)
    ids = [
        asyncio.run(service.create_user(UserCreate(name=f"User {i}", email=f"user{i}@example.com"))).id
        for i in range(THREADS)
    ]
    conflicts = []

    def update(index: int) -> None:
        try:
            asyncio.run(service.update_user(ids[index], UserUpdate(email="wanted@example.com")))
        except ConflictError as exc:
            conflicts.append(exc)

    _run_concurrently(update)

    with storage.read() as users:
        emails = [user.email for user in users.list()]
    assert emails.count("wanted@example.com") == 1
    assert len(conflicts) == THREADS - 1
    assert len(set(emails)) == THREADS
