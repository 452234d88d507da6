"""
Auth dependencies for protected FastAPI routes.

Routes declare `Depends(get_identity)` and receive the verified
`IdentityClaim` as an argument; nothing is stored on the request object.
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from . import security, session

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized access"
FORBIDDEN = "Forbidden access"


async def get_session_token(request: Request) -> str:
    token = session.extract(request)
    if token is None:
        logger.info("auth_rejected reason=missing path=%s", request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED)
    return token


async def get_identity(
    request: Request,
    access_token: str = Depends(get_session_token),
) -> security.IdentityClaim:
    try:
        return security.verify_access_token(access_token)
    except security.AuthSecurityError as exc:
        logger.info("auth_rejected reason=invalid path=%s", request.url.path)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN) from exc
