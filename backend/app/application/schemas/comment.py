"""Pydantic DTOs (Data Transfer Objects) for the Comment resource."""

from pydantic import Field

from app.application.schemas.fields import PayloadModel


class CommentCreate(PayloadModel):
    """Schema for creating a comment on a post."""

    post_id: str = Field(..., min_length=1, max_length=36)
    content: str = Field(..., min_length=1, max_length=1000)


class CommentUpdate(PayloadModel):
    """Comments can only have their text changed."""

    content: str | None = Field(None, min_length=1, max_length=1000)
