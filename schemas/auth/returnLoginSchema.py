from pydantic import EmailStr
from typing import Optional
from datetime import datetime
from models.userModels import UserRole
from schemas.schemas import CamelModel


class ReturnUser(CamelModel):
    id: int
    username: str
    email: EmailStr
    role: UserRole
    display_name: Optional[str] = None


class ProfileUser(ReturnUser):
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None
    follower_count: int = 0
    video_count: int = 0


class ProfileResponse(CamelModel):
    user: ProfileUser
