"""Health route."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> dict:
    """Simple liveness check."""
    return {"status": "ok"}
