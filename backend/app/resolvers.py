"""
Postboard Backend — Path Resolvers
====================================

What:  FastAPI dependencies that load the post / comment named in the path.
Why:   Every route with a `{post}` or `{comment}` segment needs the loaded
       entity; resolving it once here keeps handlers to a single service call.
How:   Each resolver takes the raw path segment plus the request's session,
       and returns the ORM object as an ordinary handler parameter. A missing
       record raises NotFoundError before the handler runs.

Order:
    FastAPI resolves dependencies in parameter order, so on
    /posts/{post}/comments/{comment}/upvote the post is loaded first.
    Both resolvers share the request's single session (dependency caching).
"""

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models import Comment, Post
from app.services.comment_service import comment_service
from app.services.post_service import post_service


async def resolve_post(
    post: str = Path(description="Post identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> Post:
    """Load the post named by the `{post}` path segment (one store read)."""
    return await post_service.get_post(db=db, post_id=post)


async def resolve_comment(
    comment: str = Path(description="Comment identifier"),
    db: AsyncSession = Depends(get_db_session),
) -> Comment:
    """Load the comment named by the `{comment}` path segment (one store read)."""
    return await comment_service.get_comment(db=db, comment_id=comment)
