"""
Application package initializer.

The service is organised into a few small pieces: ``core`` holds
configuration, logging, the error taxonomy and the in‑memory storage;
``schemas`` holds the request/response models; ``services`` holds the
domain rules; ``api`` holds versioned routers.  Versioning is handled
by grouping routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
