# app/follows/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import require_viewer
from app.core.errors import Conflict, NotFound, ValidationFailed
from app.db.integrity import is_check_violation, is_unique_violation
from app.db.session import get_session
from app.follows import repository as repo
from app.follows.schemas import FollowCreate, FollowOut, FollowResponse
from app.users.models import User
from app.users.repository import get_by_id

router = APIRouter(prefix="/api/follows", tags=["follows"])


@router.post("", response_model=FollowResponse)
async def follow_user(
    payload: FollowCreate,
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    # mismo chequeo que la CHECK de la tabla, pero sin tocar la DB
    if payload.following_id == viewer.id:
        raise ValidationFailed("Cannot follow yourself")
    if not await get_by_id(db, payload.following_id):
        raise NotFound("user not found")
    if await repo.is_following(db, viewer.id, payload.following_id):
        raise Conflict("Already following")

    try:
        follow = await repo.add_follow(db, viewer.id, payload.following_id)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            raise Conflict("Already following")
        if is_check_violation(e):
            raise ValidationFailed("Cannot follow yourself")
        raise
    return FollowResponse(follow=FollowOut.model_validate(follow))


@router.delete("", response_model=FollowResponse)
async def unfollow_user(
    following_id: int = Query(..., alias="followingId"),
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    await repo.remove_follow(db, viewer.id, following_id)
    await db.commit()
    return FollowResponse()
