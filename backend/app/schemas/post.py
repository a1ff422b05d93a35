"""
Postboard Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for posts and comments.
Why:   Input parsing against the store's schema, automatic serialization,
       and OpenAPI doc generation.
How:   Request models ignore unknown keys (and store-owned fields such as
       id/upvotes); response models read straight from ORM objects
       (`from_attributes`).

Design Decision:
    Schemas are separate from SQLAlchemy models because the same Post has two
    representations: comment ids (list/create/upvote) and expanded comments
    (detail).
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /posts. Mirrors the posts table constraints."""
    title: str = Field(min_length=1, max_length=300, description="Post title")
    link: Optional[str] = Field(default=None, max_length=2048, description="Optional URL")
    author: Optional[str] = Field(default=None, max_length=120, description="Author name")
    body: Optional[str] = Field(default=None, description="Free-form post text")


class CommentCreate(BaseModel):
    """Body of POST /posts/{post}/comments."""
    text: str = Field(min_length=1, description="Comment text")
    author: Optional[str] = Field(default=None, max_length=120, description="Author name")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class CommentResponse(BaseModel):
    """
    What:  Full representation of a comment.
    Who:   Returned by comment create/upvote and embedded in PostDetailResponse.

    `post` is the back-reference to the owning post's id.
    """
    id: uuid.UUID = Field(description="Comment identifier")
    text: str = Field(description="Comment text")
    author: Optional[str] = Field(default=None, description="Author name")
    upvotes: int = Field(ge=0, description="Upvote counter")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    post: uuid.UUID = Field(
        validation_alias=AliasChoices("post_id", "post"),
        description="Owning post id",
    )

    model_config = {"from_attributes": True}


class _PostFields(BaseModel):
    id: uuid.UUID = Field(description="Post identifier")
    title: str = Field(description="Post title")
    link: Optional[str] = Field(default=None, description="Optional URL")
    author: Optional[str] = Field(default=None, description="Author name")
    body: Optional[str] = Field(default=None, description="Free-form post text")
    upvotes: int = Field(ge=0, description="Upvote counter")
    created_at: datetime = Field(description="Creation timestamp (UTC)")

    model_config = {"from_attributes": True}


class PostResponse(_PostFields):
    """
    What:  Post with its comments as ids, in insertion order.
    Who:   Returned by GET /posts, POST /posts and PUT /posts/{post}/upvote.
    """
    comments: List[uuid.UUID] = Field(
        default_factory=list,
        description="Ids of the post's comments, oldest first",
    )

    @field_validator("comments", mode="before")
    @classmethod
    def comment_ids(cls, v: Any) -> Any:
        """Collapse loaded Comment objects to their ids."""
        if v is None:
            return []
        return [getattr(c, "id", c) for c in v]


class PostDetailResponse(_PostFields):
    """
    What:  Post with every comment expanded.
    Who:   Returned by GET /posts/{post}.
    """
    comments: List[CommentResponse] = Field(
        default_factory=list,
        description="The post's comments, oldest first",
    )
