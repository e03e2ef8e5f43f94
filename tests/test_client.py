from __future__ import annotations

import uuid

import pytest
import requests
from fastapi.testclient import TestClient
from requests.structures import CaseInsensitiveDict

from user_directory_client import UserDirectoryClient

BASE_URL = "http://testserver"


class InProcessSession:
    """Stands in for ``requests.Session`` and forwards calls to a TestClient."""

    def __init__(self, test_client: TestClient) -> None:
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, url, json, timeout))
        upstream = self.test_client.request(method, url, json=json)
        response = requests.Response()
        response.status_code = upstream.status_code
        response._content = upstream.content
        response.headers = CaseInsensitiveDict(upstream.headers)
        response.url = url
        response.encoding = "utf-8"
        return response


class FailingSession:
    def request(self, method, url, json=None, timeout=None):
        raise requests.ConnectionError("connection refused")


@pytest.fixture()
def session(client: TestClient) -> InProcessSession:
    return InProcessSession(client)


@pytest.fixture()
def api(session: InProcessSession) -> UserDirectoryClient:
    return UserDirectoryClient(base_url=BASE_URL + "/", session=session, timeout=3)


def test_health(api: UserDirectoryClient, session: InProcessSession) -> None:
    data, error = api.health()

    assert error is None
    assert data["status"] == "healthy"
    assert session.calls[0] == ("GET", f"{BASE_URL}/health", None, 3)


def test_user_lifecycle(api: UserDirectoryClient) -> None:
    users, error = api.list_users()
    assert (users, error) == ([], None)

    user, error = api.create_user("John Doe", "John@Example.com")
    assert error is None
    assert user["email"] == "john@example.com"

    fetched, error = api.get_user(user["id"])
    assert error is None
    assert fetched == user

    updated, error = api.update_user(user["id"], name="Johnny")
    assert error is None
    assert updated["name"] == "Johnny"
    assert updated["email"] == "john@example.com"

    users, _ = api.list_users()
    assert [u["id"] for u in users] == [user["id"]]

    deleted, error = api.delete_user(user["id"])
    assert deleted is True
    assert error is None


def test_update_sends_only_supplied_fields(api: UserDirectoryClient, session: InProcessSession) -> None:
    user, _ = api.create_user("John", "john@example.com")

    api.update_user(user["id"], email="new@example.com")

    assert session.calls[-1][2] == {"email": "new@example.com"}


def test_errors_carry_status_and_message(api: UserDirectoryClient) -> None:
    missing = uuid.uuid4()

    user, error = api.get_user(missing)
    assert user is None
    assert error["status_code"] == 404
    assert str(missing) in error["message"]

    api.create_user("John", "john@example.com")
    user, error = api.create_user("Jane", "JOHN@example.com")
    assert user is None
    assert error["status_code"] == 409
    assert "john@example.com" in error["message"]

    user, error = api.create_user("", "jane@example.com")
    assert error["status_code"] == 400

    deleted, error = api.delete_user(missing)
    assert deleted is False
    assert error["status_code"] == 404


def test_network_failure_is_reported_without_status() -> None:
    api = UserDirectoryClient(base_url=BASE_URL, session=FailingSession())

    users, error = api.list_users()

    assert users == []
    assert error == {"status_code": None, "message": "connection refused"}
