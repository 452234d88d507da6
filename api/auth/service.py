"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Response, status

from . import schemas, security, session

logger = logging.getLogger(__name__)


def issue_session(payload: schemas.TokenRequest, response: Response) -> schemas.SuccessResponse:
    try:
        token = security.build_access_token(email=payload.email)
    except security.AuthSecurityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    session.attach(response, token)
    logger.info("token_issued email=%s", security.normalize_email(payload.email))
    return schemas.SuccessResponse()


def end_session(response: Response) -> schemas.SuccessResponse:
    session.clear(response)
    return schemas.SuccessResponse()
