# app/users/service.py
from __future__ import annotations
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFound, PermissionDenied, ValidationFailed
from app.follows.repository import is_following
from app.users import repository as repo
from app.users.models import User

MAX_BIO_LENGTH = 150
MAX_NAME_LENGTH = 100


async def sync_user(db: AsyncSession, external_auth_id: str, name: str | None) -> User:
    """
    Crea el usuario la primera vez que llega un subject nuevo; si ya existe
    solo actualiza el nombre cuando viene uno distinto. No hace commit.
    """
    name = (name or "").strip() or None
    if name and len(name) > MAX_NAME_LENGTH:
        raise ValidationFailed(f"name must be at most {MAX_NAME_LENGTH} characters")

    user = await repo.get_by_external_id(db, external_auth_id)
    if user:
        if name and user.name != name:
            user.name = name
            await db.flush()
        return user
    return await repo.create_user(db, external_auth_id, name or external_auth_id)


async def get_profile(db: AsyncSession, user_id: int, viewer: User | None) -> dict:
    user = await repo.get_by_id(db, user_id)
    if not user:
        raise NotFound("user not found")

    viewer_id = viewer.id if viewer else None
    return {
        "id": user.id,
        "external_auth_id": user.external_auth_id,
        "name": user.name,
        "bio": user.bio,
        "profile_image_url": user.profile_image_url,
        "created_at": user.created_at,
        "posts_count": await repo.count_posts(db, user.id),
        "followers_count": await repo.count_followers(db, user.id),
        "following_count": await repo.count_following(db, user.id),
        "is_following": await is_following(db, viewer_id, user.id),
        "is_current_user": viewer_id == user.id,
    }


async def get_owned_user(db: AsyncSession, user_id: int, subject: str) -> User:
    """El usuario `user_id`, solo si pertenece al subject del token."""
    user = await repo.get_by_id(db, user_id)
    if not user:
        raise NotFound("user not found")
    if user.external_auth_id != subject:
        raise PermissionDenied("you can only edit your own profile")
    return user


async def update_bio(db: AsyncSession, user: User, bio: str | None) -> User:
    if bio is not None and len(bio) > MAX_BIO_LENGTH:
        raise ValidationFailed(f"bio must be at most {MAX_BIO_LENGTH} characters")
    user.bio = bio or None
    await db.flush()
    return user
