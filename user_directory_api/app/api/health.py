"""
Liveness probe.

Answers unconditionally with a static payload plus the current UNIX
time.  It does not touch the storage, so it keeps answering even while
a writer holds the storage lock.
"""

import time
from typing import Any, Dict

from fastapi import APIRouter

from ..core.config import settings

router = APIRouter(tags=["health"])


@router.get("/")
@router.get("/health")
async def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "service": settings.service_name,
        "timestamp": int(time.time()),
    }
