"""
Auth API endpoints: issue the session cookie and clear it.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from . import schemas, service

router = APIRouter()


@router.post("/jwt", response_model=schemas.SuccessResponse)
async def issue_token(payload: schemas.TokenRequest, response: Response) -> schemas.SuccessResponse:
    return service.issue_session(payload, response)


@router.get("/logout", response_model=schemas.SuccessResponse)
async def logout(response: Response) -> schemas.SuccessResponse:
    return service.end_session(response)
