# app/follows/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class FollowCreate(BaseModel):
    following_id: int = Field(..., alias="followingId")

    model_config = ConfigDict(populate_by_name=True)


class FollowOut(BaseModel):
    id: int
    follower_id: int
    following_id: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class FollowResponse(BaseModel):
    success: bool = True
    follow: FollowOut | None = None
