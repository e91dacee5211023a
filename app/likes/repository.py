# app/likes/repository.py
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.likes.models import Like


async def count_likes(db: AsyncSession, post_id: int) -> int:
    q = select(func.count()).select_from(Like).where(Like.post_id == post_id)
    res = await db.execute(q)
    return int(res.scalar_one() or 0)


async def viewer_liked(db: AsyncSession, post_id: int, viewer_id: int | None) -> bool:
    if not viewer_id:
        return False
    q = select(func.count()).select_from(Like).where(
        Like.post_id == post_id,
        Like.user_id == viewer_id,
    )
    res = await db.execute(q)
    return int(res.scalar_one() or 0) > 0


async def add_like(db: AsyncSession, post_id: int, user_id: int) -> Like:
    """
    Inserta el like. Un duplicado lo rechaza la UNIQUE (IntegrityError),
    el router lo traduce a 409.
    """
    like = Like(post_id=post_id, user_id=user_id)
    db.add(like)
    await db.flush()
    await db.refresh(like)
    return like


async def remove_like(db: AsyncSession, post_id: int, user_id: int) -> int:
    res = await db.execute(
        delete(Like).where(Like.post_id == post_id, Like.user_id == user_id)
    )
    await db.flush()
    return res.rowcount or 0
