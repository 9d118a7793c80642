"""
Blog Endpoints.

Published posts are public; drafts and archived posts are only visible to
admins, who also author and manage every post.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from studentos.core.database import utc_now
from studentos.core.database.entities import BlogPost
from studentos.core.database.repositories import BlogPostRepository, UserRepository
from studentos.core.logging_config import get_logger
from studentos.core.models.domain import PostStatus, UserRole
from studentos.core.models.io.base import Pagination
from studentos.core.models.io.blog import BlogPage, BlogPostCreate, BlogPostRead, BlogPostUpdate, BlogPostWithAuthor
from studentos.server.core.constant import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from studentos.server.services.blog import unique_slug
from studentos.server.services.cards import author_card, read_with
from studentos.server.services.deps import AdminUser, OptionalUser, SessionDep

logger = get_logger(__name__)

router = APIRouter()

AUTHOR_FALLBACK_NAME = "Admin"


async def _with_authors(session, posts: List[BlogPost]) -> List[BlogPostWithAuthor]:
    profiles = await UserRepository(session).student_profiles_for(p.author_id for p in posts)
    return [
        read_with(BlogPostWithAuthor, post, author=author_card(post.author_id, profiles, AUTHOR_FALLBACK_NAME))
        for post in posts
    ]


async def _get_or_404(repository: BlogPostRepository, post_id: str) -> BlogPost:
    post = await repository.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get(
    "",
    response_model=BlogPage,
    summary="List Published Posts",
    description="Published posts, most recently published first, optionally filtered by tag.",
)
async def list_posts(
    session: SessionDep,
    tag: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> BlogPage:
    posts, total = await BlogPostRepository(session).list_published(page, limit, tag=tag)
    return BlogPage(posts=await _with_authors(session, posts), pagination=Pagination.build(page, limit, total))


@router.get(
    "/admin/list",
    response_model=List[BlogPostWithAuthor],
    summary="Admin Post List",
    description="Every post in any status, newest first.",
)
async def admin_list_posts(admin: AdminUser, session: SessionDep) -> List[BlogPostWithAuthor]:
    return await _with_authors(session, await BlogPostRepository(session).list_all())


@router.get(
    "/{slug}",
    response_model=BlogPostWithAuthor,
    summary="Get Post",
    responses={404: {"description": "Post not found"}},
)
async def get_post(slug: str, session: SessionDep, user: OptionalUser) -> BlogPostWithAuthor:
    post = await BlogPostRepository(session).get_by_slug(slug)
    is_admin = user is not None and user.role == UserRole.ADMIN.value
    if post is None or (post.status != PostStatus.PUBLISHED.value and not is_admin):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return (await _with_authors(session, [post]))[0]


@router.post(
    "",
    response_model=BlogPostRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Post",
    description="The slug is derived from the title and made unique with a numeric suffix.",
)
async def create_post(body: BlogPostCreate, admin: AdminUser, session: SessionDep) -> BlogPostRead:
    repository = BlogPostRepository(session)
    post = BlogPost(
        author_id=admin.id,
        slug=await unique_slug(repository, body.title),
        published_at=utc_now() if body.status == PostStatus.PUBLISHED.value else None,
        **body.model_dump(),
    )
    post = await repository.create(post)
    logger.info(f"Blog post {post.slug} created by {admin.id}")
    return BlogPostRead.model_validate(post)


@router.patch(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Update Post",
    description="Publishing a post for the first time stamps ``publishedAt``.",
    responses={404: {"description": "Post not found"}},
)
async def update_post(post_id: str, body: BlogPostUpdate, admin: AdminUser, session: SessionDep) -> BlogPostRead:
    repository = BlogPostRepository(session)
    post = await _get_or_404(repository, post_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("status") == PostStatus.PUBLISHED.value and post.published_at is None:
        changes["published_at"] = utc_now()
    post = await repository.update(post, changes)
    return BlogPostRead.model_validate(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Post",
    responses={404: {"description": "Post not found"}},
)
async def delete_post(post_id: str, admin: AdminUser, session: SessionDep) -> Response:
    repository = BlogPostRepository(session)
    await _get_or_404(repository, post_id)
    await repository.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
