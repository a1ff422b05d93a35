"""
Postboard Backend — Comment Route Handlers
============================================

What:  POST /posts/{post}/comments and
       PUT  /posts/{post}/comments/{comment}/upvote.
How:   The post resolver always runs first; the upvote route also resolves
       the comment. Neither route checks that the comment belongs to the post.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models import Comment, Post
from app.resolvers import resolve_comment, resolve_post
from app.schemas.common import ErrorResponse
from app.schemas.post import CommentCreate, CommentResponse
from app.services.comment_service import comment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts/{post}/comments", tags=["Comments"])


@router.post(
    "",
    status_code=201,
    response_model=CommentResponse,
    responses={
        400: {"description": "Body does not fit the comment schema", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Comment on a post",
)
async def create_comment(
    payload: CommentCreate,
    post: Post = Depends(resolve_post),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    """
    Create a comment linked to the resolved post and append it to the
    post's comment list. Returns the comment, not the post.
    """
    return await comment_service.create_comment(db=db, post=post, payload=payload)


@router.put(
    "/{comment}/upvote",
    response_model=CommentResponse,
    responses={
        404: {"description": "Post or comment not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Upvote a comment",
)
async def upvote_comment(
    post: Post = Depends(resolve_post),
    comment: Comment = Depends(resolve_comment),
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await comment_service.upvote_comment(db=db, comment=comment, post=post)
