# app/likes/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class LikeCreate(BaseModel):
    post_id: int = Field(..., alias="postId")

    model_config = ConfigDict(populate_by_name=True)


class LikeOut(BaseModel):
    id: int
    post_id: int
    user_id: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class LikeResponse(BaseModel):
    success: bool = True
    like: LikeOut | None = None
