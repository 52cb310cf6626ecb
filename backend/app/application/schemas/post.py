"""Pydantic DTOs (Data Transfer Objects) for the Post resource."""

from enum import Enum

from pydantic import Field, model_validator

from app.application.schemas.fields import PayloadModel

EXCERPT_LENGTH = 150


class PostCategory(str, Enum):
    TECHNOLOGY = "Technology"
    LIFESTYLE = "Lifestyle"
    TRAVEL = "Travel"
    FOOD = "Food"
    HEALTH = "Health"
    BUSINESS = "Business"
    GENERAL = "General"


class PostCreate(PayloadModel):
    """Schema for creating a new blog post.

    When no excerpt is given, the first 150 characters of the content are used.
    """

    title: str = Field(..., min_length=1, max_length=200, examples=["Hello world"])
    content: str = Field(..., min_length=1)
    excerpt: str | None = Field(None, max_length=300)
    category: PostCategory = PostCategory.GENERAL
    tags: list[str] = Field(default_factory=list)
    published: bool = True

    @model_validator(mode="after")
    def default_excerpt(self) -> "PostCreate":
        if not self.excerpt:
            self.excerpt = self.content[:EXCERPT_LENGTH]
        return self


class PostUpdate(PayloadModel):
    """Schema for updating an existing post — all fields optional."""

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = Field(None, max_length=300)
    category: PostCategory | None = None
    tags: list[str] | None = None
    published: bool | None = None
