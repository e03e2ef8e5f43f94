from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_directory_api.app.core.storage import SharedStorage  # noqa: E402
from user_directory_api.app.main import create_app  # noqa: E402
from user_directory_api.app.services.user_service import UserService  # noqa: E402


@pytest.fixture()
def storage() -> SharedStorage:
    return SharedStorage()


@pytest.fixture()
def service(storage: SharedStorage) -> UserService:
    return UserService(storage)


@pytest.fixture()
def app(storage: SharedStorage) -> FastAPI:
    return create_app(storage=storage)


@pytest.fixture()
def client(app: FastAPI):
    with TestClient(app) as test_client:
        yield test_client
