# app/users/router.py
from fastapi import APIRouter, Depends, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_viewer, require_subject
from app.core.errors import NotFound
from app.db.session import get_session
from app.media import storage
from app.users import repository as repo
from app.users import service as svc
from app.users.models import User
from app.users.schemas import (
    BioPatch,
    FollowersResponse,
    FollowingResponse,
    ProfileImageResponse,
    UserOut,
    UserMini,
    UserProfileResponse,
    UserSync,
    UserUpdateResponse,
)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/sync", response_model=dict)
async def sync(
    payload: UserSync,
    db: AsyncSession = Depends(get_session),
    subject: str = Depends(require_subject),
):
    """
    Alta/actualización del usuario a partir del subject del proveedor de
    identidad. El front la llama después de cada login.
    """
    try:
        user = await svc.sync_user(db, subject, payload.name)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return {"user": UserOut.model_validate(user).model_dump()}


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    viewer: User | None = Depends(get_viewer),
):
    return {"user": await svc.get_profile(db, user_id, viewer)}


@router.patch("/{user_id}", response_model=UserUpdateResponse)
async def patch_bio(
    user_id: int,
    payload: BioPatch,
    db: AsyncSession = Depends(get_session),
    subject: str = Depends(require_subject),
):
    user = await svc.get_owned_user(db, user_id, subject)
    await svc.update_bio(db, user, payload.bio)
    await db.commit()
    await db.refresh(user)
    return UserUpdateResponse(user=UserOut.model_validate(user))


@router.post("/{user_id}/profile-image", response_model=ProfileImageResponse)
async def upload_profile_image(
    user_id: int,
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_session),
    subject: str = Depends(require_subject),
):
    data = await storage.read_image(image)
    user = await svc.get_owned_user(db, user_id, subject)

    previous_url = user.profile_image_url
    path = storage.build_object_path(subject, "profile", image.filename)
    url = storage.upload(path, data)

    try:
        user.profile_image_url = url
        await db.flush()
        await db.commit()
    except Exception:
        await db.rollback()
        storage.remove(path)
        raise

    # la imagen anterior solo se borra cuando la nueva ya quedó guardada
    storage.remove_quietly(previous_url)
    return ProfileImageResponse(profile_image_url=url)


@router.delete("/{user_id}/profile-image", response_model=ProfileImageResponse)
async def delete_profile_image(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    subject: str = Depends(require_subject),
):
    user = await svc.get_owned_user(db, user_id, subject)
    if not user.profile_image_url:
        return ProfileImageResponse(message="profile image already removed")

    previous_url = user.profile_image_url
    user.profile_image_url = None
    await db.flush()
    await db.commit()

    storage.remove_quietly(previous_url)
    return ProfileImageResponse(message="profile image removed")


@router.get("/{user_id}/followers", response_model=FollowersResponse)
async def followers(user_id: int, db: AsyncSession = Depends(get_session)):
    if not await repo.get_by_id(db, user_id):
        raise NotFound("user not found")
    users = await repo.list_followers(db, user_id)
    items = [UserMini.model_validate(u) for u in users]
    return FollowersResponse(followers=items, count=len(items))


@router.get("/{user_id}/following", response_model=FollowingResponse)
async def following(user_id: int, db: AsyncSession = Depends(get_session)):
    if not await repo.get_by_id(db, user_id):
        raise NotFound("user not found")
    users = await repo.list_following(db, user_id)
    items = [UserMini.model_validate(u) for u in users]
    return FollowingResponse(following=items, count=len(items))
