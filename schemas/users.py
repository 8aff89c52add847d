from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from models.userModels import UserRole
from schemas.schemas import CamelModel


class PublicProfile(CamelModel):
    id: int
    username: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole
    join_date: Optional[datetime] = None
    video_count: int = 0
    subscriber_count: int = 0


class UpdateProfileRequest(BaseModel):
    display_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)


class UpdatedUser(CamelModel):
    id: int
    username: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole


class UpdateProfileResponse(CamelModel):
    message: str
    user: UpdatedUser


class SubscribeResponse(CamelModel):
    subscribed: bool
    message: str
    subscriber_count: int


class Subscription(CamelModel):
    id: int
    username: str
    display_name: Optional[str] = None
    profile_image: Optional[str] = None
    subscribed_at: Optional[datetime] = None
    video_count: int = 0


class SubscriptionsResponse(CamelModel):
    subscriptions: List[Subscription]


class Subscriber(CamelModel):
    id: int
    username: str
    display_name: Optional[str] = None
    profile_image: Optional[str] = None
    subscribed_at: Optional[datetime] = None


class SubscribersResponse(CamelModel):
    subscribers: List[Subscriber]
