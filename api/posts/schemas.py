"""
Post API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CreatePostRequest(BaseModel):
    content: str | None = Field(default=None, max_length=10000)


class PostResponse(BaseModel):
    post_id: int
    user_id: int
    content: str
    created_at: datetime | None = None


class DeletePostResponse(BaseModel):
    post_id: int
    message: str
