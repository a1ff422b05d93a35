"""
Postboard Backend — Comment Service
=====================================

What:  Store operations on comments: load, create under a post, upvote.
Who:   Called by the comment routes and by the comment resolver dependency.

Create Flow (POST /posts/{post}/comments):
    ┌──────────────┐    ┌────────────────────┐    ┌──────────┐    ┌────────────┐
    │ Build comment│───▶│ (a) flush comment  │───▶│ (b) link │───▶│ (c) commit │
    │ post_id set  │    │     row persisted  │    │ to post  │    │ both writes│
    └──────────────┘    └────────────────────┘    └──────────┘    └────────────┘

    Both writes share one transaction.
    If (b) or the commit fails, the session rolls back and the comment from
    (a) is discarded with it.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models import Comment, Post
from app.schemas.post import CommentCreate, CommentResponse
from app.services.lookup import parse_identifier

logger = logging.getLogger(__name__)


class CommentService:
    """Business logic layer for comments. Stateless, like PostService."""

    async def get_comment(self, db: AsyncSession, comment_id: str) -> Comment:
        """
        Load one comment by its path identifier (the comment resolver).

        Raises:
            NotFoundError: no comment has this id, or the id is malformed
            DatabaseError: query execution failed
        """
        cid = parse_identifier(comment_id, "comment")
        try:
            result = await db.execute(select(Comment).where(Comment.id == cid))
            comment = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching comment %s: %s", comment_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the comment. Please try again.",
                context={"comment_id": comment_id},
            )

        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return comment

    async def create_comment(
        self,
        db: AsyncSession,
        post: Post,
        payload: CommentCreate,
    ) -> CommentResponse:
        """
        Create a comment under an already-resolved post.

        Steps:
            (a) persist the comment with its back-reference to the post
            (b) append it to the post's comment collection and persist
            (c) commit both writes together

        Returns the comment, not the updated post.
        """
        comment = Comment(
            **payload.model_dump(),
            post_id=post.id,
            position=len(post.comments),
        )

        try:
            db.add(comment)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error saving comment on post %s: %s", post.id, str(e))
            raise DatabaseError(
                message="Could not save the comment. Please try again.",
                context={"post_id": str(post.id), "step": "save_comment"},
            )

        try:
            post.comments.append(comment)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error linking comment %s to post %s: %s",
                comment.id, post.id, str(e),
            )
            raise DatabaseError(
                message="Could not save the comment. Please try again.",
                context={
                    "post_id": str(post.id),
                    "comment_id": str(comment.id),
                    "step": "link_to_post",
                },
            )

        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error committing comment on post %s: %s", post.id, str(e))
            raise DatabaseError(
                message="Could not save the comment. Please try again.",
                context={"post_id": str(post.id), "step": "commit"},
            )

        logger.info("Comment %s created on post %s", comment.id, post.id)
        return CommentResponse.model_validate(comment)

    async def upvote_comment(
        self,
        db: AsyncSession,
        comment: Comment,
        post: Optional[Post] = None,
    ) -> CommentResponse:
        """
        Increment the comment's counter by one and return the updated comment.

        `post` is the post named in the URL. The comment is upvoted even when
        it belongs to a different post; the mismatch is only logged.
        """
        if post is not None and comment.post_id != post.id:
            logger.warning(
                "Comment %s upvoted through post %s but belongs to post %s",
                comment.id, post.id, comment.post_id,
            )

        try:
            comment.upvote()
            await db.flush()
            await db.refresh(comment, attribute_names=["upvotes"])
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error upvoting comment %s: %s", comment.id, str(e))
            raise DatabaseError(
                message="Could not upvote the comment. Please try again.",
                context={"comment_id": str(comment.id)},
            )

        logger.info("Comment %s upvoted (now %d)", comment.id, comment.upvotes)
        return CommentResponse.model_validate(comment)


# ── Singleton Instance ────────────────────────────────────────────────────
comment_service = CommentService()
