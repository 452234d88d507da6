"""
Wishlist API endpoints. All routes require a session.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from auth.security import IdentityClaim

from . import schemas, service

router = APIRouter()


@router.get("/wishlists", response_model=list[schemas.WishlistResponse])
async def list_wishlist(
    email: str | None = Query(default=None, max_length=320),
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> list[schemas.WishlistResponse]:
    return await service.list_wishlist(identity, email=email)


@router.post("/wishlists")
async def add_to_wishlist(
    payload: schemas.WishlistCreateRequest,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> dict:
    return await service.add_to_wishlist(payload, identity)


@router.delete("/wishlists/{entry_id}")
async def remove_from_wishlist(
    entry_id: str,
    identity: IdentityClaim = Depends(auth_dependencies.get_identity),
) -> dict:
    return await service.remove_from_wishlist(entry_id, identity)
