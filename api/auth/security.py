"""
Auth security helpers: issue and verify signed access tokens.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import jwt

from core import config

DEFAULT_SECRET = "dev-change-this-secret"
SIGNING_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class IdentityClaim:
    """
    Verified identity for one request. Built only from a token that passed
    signature and expiry checks.
    """

    email: str


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set ACCESS_TOKEN_SECRET in environment.
    return config.env_str("ACCESS_TOKEN_SECRET", DEFAULT_SECRET)


def jwt_algorithm() -> str:
    return config.env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    return config.env_int("ACCESS_TOKEN_EXPIRE_MIN", 60)


def check_signing_config() -> None:
    """
    Fail fast at startup on a signing setup that could not issue or verify
    tokens, or that would sign production tokens with the dev secret.
    """
    algorithm = jwt_algorithm()
    if algorithm not in SIGNING_ALGORITHMS:
        raise RuntimeError(
            f"JWT_ALG must be one of {', '.join(sorted(SIGNING_ALGORITHMS))}; got {algorithm!r}."
        )
    if config.is_production() and jwt_secret() == DEFAULT_SECRET:
        raise RuntimeError("ACCESS_TOKEN_SECRET must be set in production.")


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(*, email: str) -> str:
    email = normalize_email(email)
    if not email:
        raise AuthSecurityError("Email is empty.")

    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_minutes() * 60)

    payload = {
        "email": email,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Check signature and expiry. Every failure surfaces as the same
    AuthSecurityError so callers cannot tell which check failed.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(
            raw,
            jwt_secret(),
            algorithms=[jwt_algorithm()],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    return payload


def verify_access_token(token: str) -> IdentityClaim:
    payload = decode_access_token(token)
    email = normalize_email(str(payload.get("email") or ""))
    if not email:
        raise AuthSecurityError("Invalid access token.")
    return IdentityClaim(email=email)
