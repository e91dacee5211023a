# app/posts/repository.py
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.models import Post
from app.posts.pagination import PageWindow
from app.users.models import User


async def create_post(
    db: AsyncSession,
    user_id: int,
    image_url: str,
    caption: str | None,
) -> Post:
    post = Post(user_id=user_id, image_url=image_url, caption=caption)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


async def list_posts_with_authors(
    db: AsyncSession,
    window: PageWindow,
    author_id: int | None = None,
) -> list[tuple[Post, User]]:
    """
    Ventana [offset, offset+limit) del feed, más recientes primero.
    El id desempata posts con el mismo created_at para que las páginas no se pisen.
    """
    q = (
        select(Post, User)
        .join(User, User.id == Post.user_id)
        .order_by(desc(Post.created_at), desc(Post.id))
        .limit(window.limit)
        .offset(window.offset)
    )
    if author_id is not None:
        q = q.where(Post.user_id == author_id)
    res = await db.execute(q)
    return [(post, user) for post, user in res.all()]


async def get_post(db: AsyncSession, post_id: int) -> Post | None:
    res = await db.execute(select(Post).where(Post.id == post_id))
    return res.scalar_one_or_none()


async def get_post_with_author(db: AsyncSession, post_id: int) -> tuple[Post, User] | None:
    res = await db.execute(
        select(Post, User).join(User, User.id == Post.user_id).where(Post.id == post_id)
    )
    row = res.first()
    return (row[0], row[1]) if row else None


async def delete_post(db: AsyncSession, post: Post) -> None:
    # likes y comments se van por ON DELETE CASCADE
    await db.delete(post)
    await db.flush()
