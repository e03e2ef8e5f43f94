"""User directory API client.

A small wrapper around the User Directory HTTP API built on the
``requests`` library.  Every method returns a tuple ``(data, error)``:
on success ``error`` is ``None``; on failure ``data`` is ``None`` (or an
empty list / ``False``) and ``error`` is a dictionary with the keys
``status_code`` and ``message``.  The message is taken from the
service's ``{"error": {"message": ..., "status": ...}}`` envelope when
present.  Network failures are reported the same way with
``status_code`` set to ``None``.

Example::

    client = UserDirectoryClient(base_url="http://localhost:3000")
    user, error = client.create_user("John Doe", "john@example.com")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]

USERS_PATH = "/api/v1/users"


class UserDirectoryClient:
    """Client for the user directory API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = _error_message(exc.response) if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", "/health")

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all users (in no particular order)."""
        data, error = self._request("GET", USERS_PATH)
        if error or not isinstance(data, dict):
            return [], error
        return list(data.get("users", [])), None

    def get_user(self, user_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"{USERS_PATH}/{user_id}")
        return _unwrap_user(data), error

    def create_user(self, name: str, email: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("POST", USERS_PATH, json_body={"name": name, "email": email})
        return _unwrap_user(data), error

    def update_user(
        self,
        user_id: Any,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update a user.  Only the arguments that are not ``None`` are sent."""
        payload: Dict[str, str] = {}
        if name is not None:
            payload["name"] = name
        if email is not None:
            payload["email"] = email
        data, error = self._request("PUT", f"{USERS_PATH}/{user_id}", json_body=payload)
        return _unwrap_user(data), error

    def delete_user(self, user_id: Any) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", f"{USERS_PATH}/{user_id}")
        return error is None, error


def _unwrap_user(data: Any) -> Optional[Dict[str, Any]]:
    if isinstance(data, dict):
        return data.get("user")
    return None


def _error_message(response: requests.Response) -> str:
    """Extract the message from an error envelope, falling back to the body text."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if body.get("detail"):
            return str(body["detail"])
    return str(body)


__all__ = ["UserDirectoryClient"]
