# app/users/repository.py
from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession
from app.users.models import User
from app.posts.models import Post
from app.follows.models import Follow


async def get_by_id(db: AsyncSession, user_id: int) -> User | None:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_by_external_id(db: AsyncSession, external_auth_id: str) -> User | None:
    res = await db.execute(select(User).where(User.external_auth_id == external_auth_id))
    return res.scalar_one_or_none()


async def create_user(db: AsyncSession, external_auth_id: str, name: str) -> User:
    user = User(external_auth_id=external_auth_id, name=name)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def count_posts(db: AsyncSession, user_id: int) -> int:
    res = await db.execute(select(func.count()).select_from(Post).where(Post.user_id == user_id))
    return int(res.scalar_one() or 0)


async def count_followers(db: AsyncSession, user_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
    )
    return int(res.scalar_one() or 0)


async def count_following(db: AsyncSession, user_id: int) -> int:
    res = await db.execute(
        select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
    )
    return int(res.scalar_one() or 0)


async def list_followers(db: AsyncSession, user_id: int) -> list[User]:
    """Quienes siguen a `user_id`, el follow más reciente primero."""
    q = (
        select(User)
        .join(Follow, Follow.follower_id == User.id)
        .where(Follow.following_id == user_id)
        .order_by(desc(Follow.created_at), desc(Follow.id))
    )
    res = await db.execute(q)
    return list(res.scalars())


async def list_following(db: AsyncSession, user_id: int) -> list[User]:
    """A quiénes sigue `user_id`."""
    q = (
        select(User)
        .join(Follow, Follow.following_id == User.id)
        .where(Follow.follower_id == user_id)
        .order_by(desc(Follow.created_at), desc(Follow.id))
    )
    res = await db.execute(q)
    return list(res.scalars())
