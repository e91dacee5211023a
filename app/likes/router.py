# app/likes/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import require_viewer
from app.core.errors import Conflict, NotFound
from app.db.integrity import is_unique_violation
from app.db.session import get_session
from app.likes import repository as repo
from app.likes.schemas import LikeCreate, LikeOut, LikeResponse
from app.posts.repository import get_post
from app.users.models import User

router = APIRouter(prefix="/api/likes", tags=["likes"])


@router.post("", response_model=LikeResponse)
async def like_post(
    payload: LikeCreate,
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    if not await get_post(db, payload.post_id):
        raise NotFound("post not found")
    if await repo.viewer_liked(db, payload.post_id, viewer.id):
        raise Conflict("Already liked")

    try:
        like = await repo.add_like(db, payload.post_id, viewer.id)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        # la UNIQUE(post_id, user_id) es la fuente de verdad del "ya tenía like"
        if is_unique_violation(e):
            raise Conflict("Already liked")
        raise
    return LikeResponse(like=LikeOut.model_validate(like))


@router.delete("", response_model=LikeResponse)
async def unlike_post(
    post_id: int = Query(..., alias="postId"),
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    # quitar un like que no existe no es error: el estado final es el pedido
    await repo.remove_like(db, post_id, viewer.id)
    await db.commit()
    return LikeResponse()
