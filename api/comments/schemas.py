"""
Comment API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class CreateCommentRequest(BaseModel):
    text: str | None = Field(
        default=None,
        max_length=5000,
        validation_alias=AliasChoices("text", "content"),
    )


class CommentResponse(BaseModel):
    comment_id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime | None = None


class DeleteCommentResponse(BaseModel):
    comment_id: int
    message: str
