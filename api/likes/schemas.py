"""
Like API schemas.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from core.db import PG_INT_MAX


class CreateLikeRequest(BaseModel):
    post_id: int | None = Field(
        default=None,
        ge=1,
        le=PG_INT_MAX,
        validation_alias=AliasChoices("postId", "post_id"),
    )


class LikeResponse(BaseModel):
    post_id: int
    user_id: int
    message: str
