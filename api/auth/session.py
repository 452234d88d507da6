"""
Session cookie transport for the access token.

Cookie attributes follow the deployment mode: production needs
`Secure; SameSite=None` so a cross-site frontend over HTTPS still receives the
cookie, development uses `SameSite=Strict` over plain HTTP.
"""

from __future__ import annotations

from typing import Literal

from fastapi import Request, Response

from core import config

from . import security

SESSION_COOKIE_NAME = "access-token"


def cookie_attributes() -> dict[str, bool | str]:
    production = config.is_production()
    samesite: Literal["none", "strict"] = "none" if production else "strict"
    return {
        "httponly": True,
        "secure": production,
        "samesite": samesite,
        "path": "/",
    }


def attach(response: Response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=security.access_token_expire_minutes() * 60,
        **cookie_attributes(),
    )


def extract(request: Request) -> str | None:
    token = (request.cookies.get(SESSION_COOKIE_NAME) or "").strip()
    return token or None


def clear(response: Response) -> None:
    # Only stops the browser from resending the cookie; a copied token stays
    # valid until it expires.
    response.delete_cookie(SESSION_COOKIE_NAME, **cookie_attributes())
