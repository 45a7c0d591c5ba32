"""
Auth business logic: issuing tokens and turning a presented token back into
an identity.

The guard trusts the signed claims; it does not re-read the user row on
every request.
"""

from __future__ import annotations

import logging

from . import schemas, security

logger = logging.getLogger(__name__)


class InvalidTokenError(security.AuthSecurityError):
    pass


def issue_token(user_row: dict) -> schemas.TokenResponse:
    token = security.build_access_token(
        user_id=int(user_row["id"]),
        username=str(user_row["username"]),
    )
    return schemas.TokenResponse(token=token)


def get_user_from_access_token(access_token: str) -> schemas.AuthenticatedUser:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        logger.info("token_rejected reason=%s", exc)
        raise InvalidTokenError(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise InvalidTokenError("Invalid access token subject.")

    return schemas.AuthenticatedUser(id=int(subject), username=str(payload.get("username") or ""))
