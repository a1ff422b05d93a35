"""
Postboard Backend — Post Route Handlers
=========================================

What:  GET /posts, POST /posts, GET /posts/{post}, PUT /posts/{post}/upvote.
How:   Routes that name a post receive it already loaded from resolve_post;
       each handler then makes one PostService call.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models import Post
from app.resolvers import resolve_post
from app.schemas.common import ErrorResponse
from app.schemas.post import PostCreate, PostDetailResponse, PostResponse
from app.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get(
    "",
    response_model=List[PostResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all posts",
)
async def list_posts(
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    """Every post, oldest first, comments as ids. No pagination."""
    return await post_service.list_posts(db=db)


@router.post(
    "",
    status_code=201,
    response_model=PostResponse,
    responses={
        400: {"description": "Body does not fit the post schema", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    """Persist a new post; the response carries the assigned id."""
    return await post_service.create_post(db=db, payload=payload)


@router.get(
    "/{post}",
    response_model=PostDetailResponse,
    responses={
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a post with its comments",
)
async def get_post(post: Post = Depends(resolve_post)) -> PostDetailResponse:
    """The resolved post with its comments expanded into full objects."""
    return post_service.expand(post)


@router.put(
    "/{post}/upvote",
    response_model=PostResponse,
    responses={
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Upvote a post",
)
async def upvote_post(
    post: Post = Depends(resolve_post),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.upvote_post(db=db, post=post)
