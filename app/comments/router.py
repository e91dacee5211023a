# app/comments/router.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.comments import repository as repo
from app.comments.schemas import CommentCreate, CommentResponse, DeletedResponse
from app.comments.service import clean_content, serialize_comment
from app.core.deps import require_viewer
from app.core.errors import NotFound, PermissionDenied
from app.db.session import get_session
from app.posts.repository import get_post
from app.users.models import User

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    payload: CommentCreate,
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    # validación antes de tocar la DB
    content = clean_content(payload.content)

    if not await get_post(db, payload.post_id):
        raise NotFound("post not found")

    c = await repo.create_comment(db, user_id=viewer.id, post_id=payload.post_id, content=content)
    await db.commit()
    return {"comment": serialize_comment(c, viewer)}


@router.delete("/{comment_id}", response_model=DeletedResponse)
async def delete_comment_endpoint(
    comment_id: int,
    db: AsyncSession = Depends(get_session),
    viewer: User = Depends(require_viewer),
):
    c = await repo.get_comment(db, comment_id)
    if not c:
        raise NotFound("comment not found")
    if c.user_id != viewer.id:
        raise PermissionDenied("not your comment")

    await repo.delete_comment(db, c)
    await db.commit()
    return DeletedResponse()
