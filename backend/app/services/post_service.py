"""
Postboard Backend — Post Service
==================================

What:  Every store operation on posts: list, create, load, expand, upvote.
Why:   Keeps route handlers thin and HTTP-free; one place translates store
       failures into DatabaseError.
Who:   Called by the posts routes and by the post resolver dependency.

Error Handling Strategy:
    - SQLAlchemyError from any query/flush/commit → DatabaseError (500, generic message)
    - Missing or malformed post id → NotFoundError (404)
    Nothing is retried; the request's session rolls back on the way out.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models import Post
from app.schemas.post import PostCreate, PostDetailResponse, PostResponse
from app.services.lookup import parse_identifier

logger = logging.getLogger(__name__)


class PostService:
    """
    Business logic layer for posts.

    Stateless: the session is passed into every call, so one instance serves
    all requests.
    """

    async def list_posts(self, db: AsyncSession) -> List[PostResponse]:
        """
        Fetch all posts. No filter, no pagination.

        Ordered by creation time (then id) so two reads with no writes in
        between return identical sequences.
        """
        try:
            result = await db.execute(
                select(Post).order_by(Post.created_at, Post.id)
            )
            posts = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [PostResponse.model_validate(post) for post in posts]

    async def create_post(self, db: AsyncSession, payload: PostCreate) -> PostResponse:
        """
        Construct and persist a new post from the client's fields.

        The flush assigns id/created_at/upvotes; the commit makes the post
        visible before the 201 goes out.
        """
        post = Post(**payload.model_dump(), comments=[])
        try:
            db.add(post)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e))
            raise DatabaseError(
                message="Could not save the post. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Post %s created", post.id)
        return PostResponse.model_validate(post)

    async def get_post(self, db: AsyncSession, post_id: str) -> Post:
        """
        Load one post by its path identifier (the post resolver).

        Query plan:
            SELECT * FROM posts WHERE id = :id
            + SELECT * FROM comments WHERE post_id IN (:id) (selectin)

        Raises:
            NotFoundError: no post has this id, or the id is malformed (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        pid = parse_identifier(post_id, "post")
        try:
            result = await db.execute(select(Post).where(Post.id == pid))
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return post

    def expand(self, post: Post) -> PostDetailResponse:
        """Hydrate a resolved post: comments as full objects, oldest first."""
        return PostDetailResponse.model_validate(post)

    async def upvote_post(self, db: AsyncSession, post: Post) -> PostResponse:
        """
        Increment the post's counter by one and return the updated post.

        The increment runs inside the UPDATE statement; only the counter is
        re-read afterwards.
        """
        try:
            post.upvote()
            await db.flush()
            await db.refresh(post, attribute_names=["upvotes"])
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error upvoting post %s: %s", post.id, str(e))
            raise DatabaseError(
                message="Could not upvote the post. Please try again.",
                context={"post_id": str(post.id)},
            )

        logger.info("Post %s upvoted (now %d)", post.id, post.upvotes)
        return PostResponse.model_validate(post)


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
