# app/follows/repository.py
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.follows.models import Follow


async def is_following(db: AsyncSession, follower_id: int | None, following_id: int) -> bool:
    if not follower_id or follower_id == following_id:
        return False
    q = select(func.count()).select_from(Follow).where(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id,
    )
    res = await db.execute(q)
    return int(res.scalar_one() or 0) > 0


async def add_follow(db: AsyncSession, follower_id: int, following_id: int) -> Follow:
    follow = Follow(follower_id=follower_id, following_id=following_id)
    db.add(follow)
    await db.flush()
    await db.refresh(follow)
    return follow


async def remove_follow(db: AsyncSession, follower_id: int, following_id: int) -> int:
    res = await db.execute(
        delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
    )
    await db.flush()
    return res.rowcount or 0
