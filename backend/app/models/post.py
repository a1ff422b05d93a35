"""
Postboard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model representing the `posts` table.
Who:   Used by PostService / CommentService and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: opaque to clients, assigned on insert
    - title required; link/author/body are free-form and optional
    - upvotes: counter mutated only through an in-SQL increment
    - comments: ordered by insertion (position, then created_at), eagerly
      loaded with the post so the async session never has to lazy-load it
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.comment import Comment


class Post(Base):
    """
    A top-level forum entry.

    Lifecycle:
        1. Created from a client-submitted body (upvotes = 0, no comments)
        2. Upvote counter incremented in place
        3. Comments appended as they are created
        4. Never deleted by the API
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    link: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    author: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    upvotes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # selectin: loaded in one extra SELECT alongside the post itself
    comments: Mapped[List["Comment"]] = relationship(
        back_populates="post",
        order_by="[Comment.position, Comment.created_at]",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_posts_created_at", "created_at"),
    )

    def upvote(self) -> None:
        """
        Schedule an in-database increment of the counter.

        The UPDATE reads `upvotes = upvotes + 1`, so concurrent upvotes do not
        overwrite each other. The attribute is expired by the flush; callers
        refresh it to read the new value.
        """
        self.upvotes = Post.upvotes + 1

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', upvotes={self.upvotes})>"
