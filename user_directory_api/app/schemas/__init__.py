"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the storage records so the API
representation (epoch‑second timestamps, response wrappers) can evolve
without touching the storage layer.
"""
