"""
Ownership policy: the caller may only act on resources whose owner-email
field equals the verified identity's email.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from .dependencies import FORBIDDEN
from .security import IdentityClaim, normalize_email

logger = logging.getLogger(__name__)


def is_owner(identity: IdentityClaim, owner_email: str | None) -> bool:
    owner = normalize_email(owner_email or "")
    return bool(owner) and owner == identity.email


def ensure_owner(
    identity: IdentityClaim,
    owner_email: str | None,
    *,
    resource: str,
    resource_id: str | None = None,
) -> None:
    """
    Raise 403 unless `identity` owns the resource. Must run before any write.
    """
    if is_owner(identity, owner_email):
        return
    logger.warning(
        "ownership_denied resource=%s id=%s caller=%s",
        resource,
        resource_id or "-",
        identity.email,
    )
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN)


def ensure_claimed_owner(
    identity: IdentityClaim,
    claimed_email: str | None,
    *,
    resource: str,
    resource_id: str | None = None,
) -> None:
    """
    Like `ensure_owner`, for optional owner fields sent by the client: an
    omitted field defaults to the caller, a present one must match.
    """
    if claimed_email is None:
        return
    ensure_owner(identity, claimed_email, resource=resource, resource_id=resource_id)
