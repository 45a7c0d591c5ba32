"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class AuthenticatedUser(BaseModel):
    """
    Identity carried by a verified access token.
    """

    id: int
    username: str
