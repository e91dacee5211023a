# app/posts/service.py
"""
Capa de agregación: por cada post calcula likes_count, comments_count,
is_liked (relativo al viewer) y los comentarios recientes.

Los contadores nunca se guardan denormalizados, siempre salen de un COUNT sobre
likes/comments. Si la DB falla a mitad de la agregación se responde 503: un 0
inventado sería indistinguible de un post sin likes.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments import repository as comments_repo
from app.comments.service import serialize_comment
from app.core.errors import NotFound, ServiceUnavailable, ValidationFailed
from app.likes import repository as likes_repo
from app.posts import repository as posts_repo
from app.posts.models import Post
from app.posts.pagination import PageWindow, has_more
from app.users.models import User

log = logging.getLogger("uvicorn")

MAX_CAPTION_LENGTH = 2200
FEED_PREVIEW_COMMENTS = 2


@dataclass(frozen=True)
class PostStats:
    likes_count: int
    comments_count: int
    is_liked: bool


def clean_caption(caption: str | None) -> str | None:
    if caption is None:
        return None
    if len(caption) > MAX_CAPTION_LENGTH:
        raise ValidationFailed(f"caption must be at most {MAX_CAPTION_LENGTH} characters")
    return caption or None


async def get_post_stats(
    db: AsyncSession, post_id: int, viewer_id: int | None = None
) -> PostStats:
    likes = await likes_repo.count_likes(db, post_id)
    comments = await comments_repo.count_comments(db, post_id)
    liked = await likes_repo.viewer_liked(db, post_id, viewer_id)
    return PostStats(likes_count=likes, comments_count=comments, is_liked=liked)


def author_out(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "external_auth_id": user.external_auth_id,
        "profile_image_url": user.profile_image_url,
    }


async def hydrate_post_out(
    db: AsyncSession,
    post: Post,
    author: User,
    *,
    viewer_id: int | None = None,
    comments_limit: int | None = FEED_PREVIEW_COMMENTS,
) -> dict:
    """
    Devuelve el dict que espera el front para un Post:
    - autor
    - likes_count + comments_count + is_liked
    - comments: preview (2) o todos si comments_limit=None
    """
    try:
        stats = await get_post_stats(db, post.id, viewer_id)
        recent = await comments_repo.list_recent_comments(db, post.id, comments_limit)
    except SQLAlchemyError as e:
        log.error(f"❌ agregación falló para post {post.id}: {e!r}")
        raise ServiceUnavailable("aggregation unavailable")

    return {
        "id": post.id,
        "image_url": post.image_url,
        "caption": post.caption,
        "created_at": post.created_at,
        "user": author_out(author),
        "likes_count": stats.likes_count,
        "comments_count": stats.comments_count,
        "is_liked": stats.is_liked,
        "comments": [serialize_comment(c, u) for c, u in recent],
    }


async def feed_page(
    db: AsyncSession,
    window: PageWindow,
    *,
    author_id: int | None = None,
    viewer_id: int | None = None,
) -> dict:
    rows = await posts_repo.list_posts_with_authors(db, window, author_id=author_id)
    posts = [
        await hydrate_post_out(db, post, author, viewer_id=viewer_id)
        for post, author in rows
    ]
    return {
        "posts": posts,
        "pagination": {
            "limit": window.limit,
            "offset": window.offset,
            "hasMore": has_more(len(posts), window.limit),
        },
        "currentUserId": viewer_id,
    }


async def post_detail(db: AsyncSession, post_id: int, *, viewer_id: int | None = None) -> dict:
    found = await posts_repo.get_post_with_author(db, post_id)
    if not found:
        raise NotFound("post not found")
    post, author = found
    return {
        "post": await hydrate_post_out(db, post, author, viewer_id=viewer_id, comments_limit=None),
        "currentUserId": viewer_id,
    }
