"""
Community Feed Endpoints.

A shared feed of short posts with comments and likes. Authors may delete
their own posts and comments; other users' content is reported as missing.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, Response, status

from studentos.core.database.entities import Comment, CommunityPost
from studentos.core.database.repositories import CommunityRepository, UserRepository
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.community import (
    CommentCreate,
    CommentRead,
    CommunityPage,
    CommunityPostCreate,
    CommunityPostDetail,
    CommunityPostRead,
    LikeResponse,
)
from studentos.server.core.constant import MAX_PAGE_LIMIT
from studentos.server.services.cards import author_card, read_with
from studentos.server.services.deps import CurrentUser, OptionalUser, SessionDep

router = APIRouter()

FEED_PAGE_LIMIT = 20
AUTHOR_FALLBACK_NAME = "User"


async def _get_post_or_404(repository: CommunityRepository, post_id: str) -> CommunityPost:
    post = await repository.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


async def _comment_reads(session, comments: List[Comment]) -> List[CommentRead]:
    profiles = await UserRepository(session).student_profiles_for(c.user_id for c in comments)
    return [
        read_with(CommentRead, comment, author=author_card(comment.user_id, profiles, AUTHOR_FALLBACK_NAME))
        for comment in comments
    ]


@router.get(
    "",
    response_model=CommunityPage,
    summary="Community Feed",
    description="Posts newest first with author, comment and like counts, and whether the caller liked each.",
)
async def list_feed(
    session: SessionDep,
    user: OptionalUser,
    page: int = Query(1, ge=1),
    limit: int = Query(FEED_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> CommunityPage:
    repository = CommunityRepository(session)
    posts, total = await repository.list_feed(page, limit)
    post_ids = [p.id for p in posts]
    profiles = await UserRepository(session).student_profiles_for(p.user_id for p in posts)
    comments = await repository.comment_counts(post_ids)
    likes = await repository.like_counts(post_ids)
    liked = await repository.liked_ids(user.id, post_ids) if user else set()

    return CommunityPage(
        posts=[
            read_with(
                CommunityPostRead,
                post,
                author=author_card(post.user_id, profiles, AUTHOR_FALLBACK_NAME),
                comment_count=comments.get(post.id, 0),
                like_count=likes.get(post.id, 0),
                is_liked=post.id in liked,
            )
            for post in posts
        ],
        pagination=Pagination.build(page, limit, total),
    )


@router.post("", response_model=CommunityPostRead, status_code=status.HTTP_201_CREATED, summary="Create Post")
async def create_post(body: CommunityPostCreate, user: CurrentUser, session: SessionDep) -> CommunityPostRead:
    post = await CommunityRepository(session).create(CommunityPost(user_id=user.id, **body.model_dump()))
    profiles = await UserRepository(session).student_profiles_for([user.id])
    return read_with(CommunityPostRead, post, author=author_card(user.id, profiles, AUTHOR_FALLBACK_NAME))


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Comment",
    responses={404: {"description": "Comment not found"}},
)
async def delete_comment(comment_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = CommunityRepository(session)
    comment = await repository.get_comment(comment_id)
    if comment is None or comment.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    await repository.delete_comment(comment)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{post_id}",
    response_model=CommunityPostDetail,
    summary="Get Post",
    description="A post with its comments, oldest first.",
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: str, session: SessionDep, user: OptionalUser) -> CommunityPostDetail:
    repository = CommunityRepository(session)
    post = await _get_post_or_404(repository, post_id)
    comments = await repository.list_comments(post.id)
    profiles = await UserRepository(session).student_profiles_for([post.user_id])
    liked = await repository.liked_ids(user.id, [post.id]) if user else set()

    return read_with(
        CommunityPostDetail,
        post,
        author=author_card(post.user_id, profiles, AUTHOR_FALLBACK_NAME),
        comments=await _comment_reads(session, comments),
        comment_count=len(comments),
        like_count=(await repository.like_counts([post.id])).get(post.id, 0),
        is_liked=post.id in liked,
    )


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Post",
    description="Authors only. Comments and likes of the post are removed with it.",
    responses={404: {"description": "Post not found"}},
)
async def delete_post(post_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = CommunityRepository(session)
    post = await repository.get_by_id(post_id)
    if post is None or post.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    await repository.delete_cascade(post)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/like",
    response_model=LikeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like Post",
    responses={404: {"description": "Post not found"}, 409: {"description": "Already liked"}},
)
async def like_post(post_id: str, user: CurrentUser, session: SessionDep) -> LikeResponse:
    repository = CommunityRepository(session)
    await _get_post_or_404(repository, post_id)
    if await repository.get_like(post_id, user.id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already liked")
    await repository.add_like(post_id, user.id)
    return LikeResponse(liked=True)


@router.delete(
    "/{post_id}/like",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unlike Post",
    responses={404: {"description": "Like not found"}},
)
async def unlike_post(post_id: str, user: CurrentUser, session: SessionDep) -> Response:
    repository = CommunityRepository(session)
    like = await repository.get_like(post_id, user.id)
    if like is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Like not found")
    await repository.delete_like(like)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on Post",
    responses={404: {"description": "Post not found"}},
)
async def add_comment(post_id: str, body: CommentCreate, user: CurrentUser, session: SessionDep) -> CommentRead:
    repository = CommunityRepository(session)
    await _get_post_or_404(repository, post_id)
    comment = await repository.add_comment(post_id, user.id, body.content)
    return (await _comment_reads(session, [comment]))[0]
