# app/comments/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class CommentAuthor(BaseModel):
    id: int
    name: str
    external_auth_id: str | None = None


class CommentCreate(BaseModel):
    post_id: int = Field(..., alias="postId")
    # el largo se valida en el service (400 con mensaje propio, no 422)
    content: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class CommentOut(BaseModel):
    id: int
    post_id: int
    content: str
    created_at: datetime
    user: CommentAuthor


class CommentResponse(BaseModel):
    comment: CommentOut


class DeletedResponse(BaseModel):
    success: bool = True
