# app/users/schemas.py
from pydantic import BaseModel, ConfigDict
from datetime import datetime


class UserOut(BaseModel):
    id: int
    external_auth_id: str
    name: str
    bio: str | None = None
    profile_image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class UserProfileOut(UserOut):
    created_at: datetime | None = None
    posts_count: int
    followers_count: int
    following_count: int
    is_following: bool
    is_current_user: bool


class UserProfileResponse(BaseModel):
    user: UserProfileOut


class UserMini(BaseModel):
    id: int
    name: str
    profile_image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class FollowersResponse(BaseModel):
    followers: list[UserMini]
    count: int


class FollowingResponse(BaseModel):
    following: list[UserMini]
    count: int


class BioPatch(BaseModel):
    # el largo se valida en el service para devolver 400 con mensaje propio
    bio: str | None = None


class UserSync(BaseModel):
    name: str | None = None


class UserUpdateResponse(BaseModel):
    success: bool = True
    user: UserOut


class ProfileImageResponse(BaseModel):
    success: bool = True
    profile_image_url: str | None = None
    message: str | None = None
