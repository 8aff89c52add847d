from typing import List, Optional
from datetime import datetime
from schemas.schemas import CamelModel


class LikeToggleResponse(CamelModel):
    liked: bool
    like_count: int


class FollowToggleResponse(CamelModel):
    following: bool
    follower_count: int


class FollowedUser(CamelModel):
    id: int
    username: str
    display_name: Optional[str] = None
    profile_image: Optional[str] = None
    followed_at: Optional[datetime] = None


class FollowingResponse(CamelModel):
    following: List[FollowedUser]
