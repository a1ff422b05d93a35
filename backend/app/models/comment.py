"""
Postboard Backend — Comment SQLAlchemy Model
==============================================

What:  ORM model representing the `comments` table.
Why:   A comment belongs to exactly one post; `post_id` is the back-reference
       and `position` its slot in that post's ordered collection.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy import text as sql_text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.post import Post


class Comment(Base):
    """A reply linked to one post."""

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    upvotes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=sql_text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=sql_text("CURRENT_TIMESTAMP"),
    )

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("posts.id"),
        nullable=False,
    )

    # Index in the post's comment collection, assigned when the comment is created
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=sql_text("0"),
    )

    post: Mapped["Post"] = relationship(back_populates="comments")

    __table_args__ = (
        Index("idx_comments_post_id", "post_id"),
    )

    def upvote(self) -> None:
        """Schedule an in-database `upvotes = upvotes + 1`; see Post.upvote."""
        self.upvotes = Comment.upvotes + 1

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, upvotes={self.upvotes})>"
