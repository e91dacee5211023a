# app/comments/repository.py
from __future__ import annotations

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments.models import Comment
from app.users.models import User


async def create_comment(
    db: AsyncSession,
    *,
    user_id: int,
    post_id: int,
    content: str,
) -> Comment:
    c = Comment(user_id=user_id, post_id=post_id, content=content)
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    res = await db.execute(select(Comment).where(Comment.id == comment_id))
    return res.scalar_one_or_none()


async def count_comments(db: AsyncSession, post_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Comment).where(Comment.post_id == post_id)
    )
    return int(res.scalar_one() or 0)


async def list_recent_comments(
    db: AsyncSession,
    post_id: int,
    limit: int | None = None,
) -> list[tuple[Comment, User]]:
    """
    Comentarios del post con su autor, más nuevos primero.
    limit=None → todos (vista detalle); el feed pide 2.
    """
    q = (
        select(Comment, User)
        .join(User, User.id == Comment.user_id)
        .where(Comment.post_id == post_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
    )
    if limit is not None:
        q = q.limit(limit)
    res = await db.execute(q)
    return [(c, u) for c, u in res.all()]


async def delete_comment(db: AsyncSession, comment: Comment) -> None:
    await db.delete(comment)
    await db.flush()
