# app/posts/schemas.py
"""
Esquemas de respuesta del feed.

Los usa FastAPI como response_model y también el cliente (app/client) para
validar lo que recibe: una respuesta que no encaja se rechaza en la frontera.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from app.comments.schemas import CommentOut


class PostAuthor(BaseModel):
    id: int
    name: str
    external_auth_id: str | None = None
    profile_image_url: str | None = None


class PostOut(BaseModel):
    id: int
    image_url: str
    caption: str | None = None
    created_at: datetime
    user: PostAuthor

    likes_count: int = Field(..., ge=0)
    comments_count: int = Field(..., ge=0)
    is_liked: bool
    # feed: los 2 más recientes; detalle: todos (siempre más nuevo primero)
    comments: list[CommentOut] = []


class Pagination(BaseModel):
    limit: int
    offset: int
    has_more: bool = Field(..., alias="hasMore")

    model_config = ConfigDict(populate_by_name=True)


class FeedPageOut(BaseModel):
    posts: list[PostOut]
    pagination: Pagination
    current_user_id: int | None = Field(None, alias="currentUserId")

    model_config = ConfigDict(populate_by_name=True)


class PostDetailOut(BaseModel):
    post: PostOut
    current_user_id: int | None = Field(None, alias="currentUserId")

    model_config = ConfigDict(populate_by_name=True)


class PostCreatedOut(BaseModel):
    post: PostOut
