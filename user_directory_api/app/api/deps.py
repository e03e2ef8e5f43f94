"""
FastAPI dependencies shared by the routers.

The storage is created once by ``create_app`` and kept on
``app.state``; these helpers hand it (or a service built on it) to
each request.
"""

from fastapi import Depends, Request

from ..core.storage import SharedStorage
from ..services.user_service import UserService


def get_storage(request: Request) -> SharedStorage:
    return request.app.state.storage


def get_user_service(storage: SharedStorage = Depends(get_storage)) -> UserService:
    return UserService(storage)
