"""
Small HTTP-facing helpers shared by the feature services.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from . import store


def object_id_or_400(raw: str, *, label: str) -> str:
    """
    Validate a path/body id before it reaches the store; 400 when malformed.
    """
    try:
        return store.parse_object_id(raw)
    except store.MalformedIdError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID format",
        ) from exc
